"""A small subcommand-based command-line argument parser."""

from __future__ import annotations

import sys
from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import Optional


class CliError(Exception):
    """Raised when the command line cannot be parsed."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


def format_cli_error(message: str) -> str:
    """Render a command-line error the way it is shown on the terminal."""
    return f"\x1b[31;1m[Error]\x1b[0m {message}"


@dataclass
class Subcommand:
    """A named command taking an exact number of positional arguments."""

    name: str
    description: str
    expected_args: int
    flags: list[str] = field(default_factory=list)

    def add_flag(self, flag: str) -> "Subcommand":
        """Allow ``flag`` for this subcommand; returns the subcommand for chaining."""
        self.flags.append(flag)
        return self


@dataclass
class ArgsInfo:
    """The result of parsing: the chosen subcommand, its flags and arguments."""

    subcommand: str
    flags: list[str] = field(default_factory=list)
    args: list[str] = field(default_factory=list)


class ArgsParser:
    """Parses ``argv`` (program name first) against registered subcommands."""

    def __init__(self, argv: Optional[Sequence[str]] = None) -> None:
        self.argv = list(sys.argv if argv is None else argv)
        self.subcommands: list[Subcommand] = []
        self.description = ""
        self.help_message = ""

    def set_description(self, description: str) -> "ArgsParser":
        self.description = description
        return self

    def set_help_message(self, help_message: str) -> "ArgsParser":
        self.help_message = help_message
        return self

    def add_subcommand(self, subcommand: Subcommand) -> "ArgsParser":
        self.subcommands.append(subcommand)
        return self

    def format_help(self) -> str:
        """Return the usage text listing every subcommand."""
        program = self.argv[0] if self.argv else ""
        lines = [
            f"{self.description}\n\nUsage: {program} <COMMAND> [FLAGS]\n\nCommands:\n\n"
        ]
        lines.extend(
            f"    {sub.name:<10} {sub.description}\n" for sub in self.subcommands
        )
        return "".join(lines)

    def print_help(self) -> str:
        """Write the usage text to standard output and return it."""
        text = self.format_help()
        out = sys.stdout
        out.write(text)
        out.flush()
        return text

    def parse(self) -> ArgsInfo:
        """Parse the command line; raises CliError on any problem."""
        if len(self.argv) <= 1:
            raise CliError("Expected a command")

        name = self.argv[1]
        # the last registered subcommand with a matching name wins
        current = next(
            (sub for sub in reversed(self.subcommands) if sub.name == name), None
        )
        if current is None:
            raise CliError(f"Unknown subcommand '{name}'")

        info = ArgsInfo(subcommand=name)
        for arg in self.argv[2:]:
            if arg.startswith("-"):
                if arg not in current.flags:
                    raise CliError(f"Unknown flag {arg}")
                info.flags.append(arg)
            else:
                info.args.append(arg)

        if current.expected_args != len(info.args):
            raise CliError(
                f"Expected {current.expected_args} arguments, got {len(info.args)}"
            )
        return info