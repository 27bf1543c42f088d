import pytest

from wyrmc.cli import ArgsInfo, ArgsParser, CliError, Subcommand, format_cli_error


def make_parser(*args):
    return (
        ArgsParser(["wyrm", *args])
        .set_description("Wyrm programming language")
        .set_help_message("Use 'wyrm help' for help on the CLI")
        .add_subcommand(Subcommand("help", "display CLI help", 0))
        .add_subcommand(Subcommand("build", "compile Wyrm source", 1))
        .add_subcommand(Subcommand("cst", "use experimental CST parser", 1))
    )


def test_parse_build_with_file():
    info = make_parser("build", "main.wr").parse()
    assert info == ArgsInfo(subcommand="build", flags=[], args=["main.wr"])


def test_parse_help_without_args():
    info = make_parser("help").parse()
    assert info.subcommand == "help"
    assert info.args == []


def test_missing_command_raises():
    with pytest.raises(CliError) as excinfo:
        make_parser().parse()
    assert excinfo.value.message == "Expected a command"


def test_unknown_subcommand_raises():
    with pytest.raises(CliError) as excinfo:
        make_parser("run", "x.wr").parse()
    assert str(excinfo.value) == "Unknown subcommand 'run'"


def test_unknown_flag_raises():
    with pytest.raises(CliError) as excinfo:
        make_parser("build", "--fast", "x.wr").parse()
    assert str(excinfo.value) == "Unknown flag --fast"


def test_wrong_argument_count_raises():
    with pytest.raises(CliError) as excinfo:
        make_parser("build").parse()
    assert str(excinfo.value) == "Expected 1 arguments, got 0"


def test_too_many_arguments_raises():
    with pytest.raises(CliError) as excinfo:
        make_parser("help", "extra").parse()
    assert str(excinfo.value) == "Expected 0 arguments, got 1"


def test_registered_flag_is_collected():
    parser = ArgsParser(["wyrm", "build", "-v", "a.wr"]).add_subcommand(
        Subcommand("build", "compile Wyrm source", 1).add_flag("-v")
    )
    info = parser.parse()
    assert info.flags == ["-v"]
    assert info.args == ["a.wr"]


def test_add_flag_returns_subcommand():
    sub = Subcommand("build", "compile Wyrm source", 1)
    assert sub.add_flag("-v") is sub
    assert sub.flags == ["-v"]


def test_chaining_returns_same_parser():
    parser = ArgsParser(["wyrm"])
    assert parser.set_description("d") is parser
    assert parser.add_subcommand(Subcommand("help", "h", 0)) is parser


def test_format_help_lists_subcommands():
    text = make_parser("help").format_help()
    assert text.startswith("Wyrm programming language\n\nUsage: wyrm <COMMAND> [FLAGS]")
    assert "    help       display CLI help\n" in text
    lines = [line for line in text.splitlines() if line.startswith("    ")]
    assert [line.split()[0] for line in lines] == ["help", "build", "cst"]


def test_print_help_writes_format_help(capsys):
    parser = make_parser("help")
    parser.print_help()
    assert capsys.readouterr().out == parser.format_help()


def test_format_cli_error():
    text = format_cli_error("Could not open file x.wr")
    assert text == "\x1b[31;1m[Error]\x1b[0m Could not open file x.wr"