from wyrmc.diagnostics import MAX_ERRORS, Diagnostic, Diagnostics
from wyrmc.tokens import Token, TokenType

SOURCE = "let x = 1;\nbad line here"


def test_error_is_recorded():
    diags = Diagnostics(SOURCE, "main.wr")
    diags.error("oops", 1, 4)
    assert diags.errors_count() == 1
    assert diags.errors[0] == Diagnostic(1, 4, 1, "oops")


def test_error_from_cause_uses_token_span():
    diags = Diagnostics(SOURCE, "main.wr")
    tok = Token(TokenType.IDENT, "bad", 1, 0)
    diags.error_from_cause("Use of undeclared identifier", tok)
    assert diags.errors == [Diagnostic(tok.line, tok.col, tok.length, "Use of undeclared identifier")]


def test_warnings_do_not_count_as_errors():
    diags = Diagnostics(SOURCE, "main.wr")
    diags.warn("Unused result of expression", 0, 0)
    diags.warn_from_cause("Remove the 'then'", Token(TokenType.KEYWORD_THEN, "then", 0, 2))
    assert diags.errors_count() == 0
    assert len(diags.warnings) == 2


def test_error_limit():
    diags = Diagnostics(SOURCE, "main.wr")
    for _ in range(MAX_ERRORS + 10):
        diags.error("again", 0, 0)
    assert diags.errors_count() == MAX_ERRORS
    assert MAX_ERRORS == 255


def test_format_contains_location_and_source_line():
    diags = Diagnostics(SOURCE, "main.wr")
    diags.error_from_cause("oops", Token(TokenType.IDENT, "bad", 1, 4))
    text = diags.format_errors()
    assert "[Error]" in text
    assert "oops" in text
    assert "main.wr:2:4" in text
    assert "bad line here" in text
    assert "^" * len("bad") + " Error occured here" in text


def test_warnings_are_rendered_before_errors():
    diags = Diagnostics(SOURCE, "main.wr")
    diags.error("an error", 0, 0)
    diags.warn("a warning", 0, 0)
    text = diags.format_errors()
    assert text.index("[Warning]") < text.index("[Error]")
    assert "Warning occured here" in text


def test_line_outside_source_still_renders():
    diags = Diagnostics(SOURCE, "main.wr")
    diags.error("far away", 40, 0)
    assert "far away" in diags.format_errors()


def test_print_errors_matches_format(capsys):
    diags = Diagnostics(SOURCE, "main.wr")
    diags.error("oops", 0, 2)
    diags.print_errors()
    assert capsys.readouterr().out == diags.format_errors()