"""Collection and rendering of compiler errors and warnings."""

from __future__ import annotations

from dataclasses import dataclass

from .tokens import Token

MAX_ERRORS = 255


@dataclass(frozen=True)
class Diagnostic:
    """One reported problem: zero-based line, column, highlight length and message."""

    line: int
    col: int
    length: int
    message: str


class Diagnostics:
    """Accumulates errors and warnings for one source file."""

    def __init__(self, source: str = "", filename: str = "") -> None:
        self.source = source
        self.filename = filename
        self.errors: list[Diagnostic] = []
        self.warnings: list[Diagnostic] = []

    @staticmethod
    def _record(bucket: list[Diagnostic], diagnostic: Diagnostic, kind: str) -> None:
        if len(bucket) >= MAX_ERRORS:
            print(f"exceeded max {kind}", end="")
            return
        bucket.append(diagnostic)

    def error(self, message: str, line: int, col: int) -> None:
        self._record(self.errors, Diagnostic(line, col, 1, message), "errors")

    def error_from_cause(self, message: str, cause: Token) -> None:
        self._record(
            self.errors, Diagnostic(cause.line, cause.col, cause.length, message), "errors"
        )

    def warn(self, message: str, line: int, col: int) -> None:
        self._record(self.warnings, Diagnostic(line, col, 1, message), "warnings")

    def warn_from_cause(self, message: str, cause: Token) -> None:
        self._record(
            self.warnings, Diagnostic(cause.line, cause.col, cause.length, message), "warnings"
        )

    def errors_count(self) -> int:
        return len(self.errors)

    def _source_line(self, line_number: int) -> str:
        lines = self.source.split("\n")
        return lines[line_number] if 0 <= line_number < len(lines) else ""

    def _format_one(self, diagnostic: Diagnostic, is_warning: bool) -> str:
        label = "\x1b[33;1m[Warning]" if is_warning else "\x1b[31;1m[Error]"
        word = "Warning" if is_warning else "Error"
        line_no = diagnostic.line + 1
        return (
            f"{label}\x1b[0m {diagnostic.message}\n"
            f" \x1b[34;1m-->\x1b[0;2;3m {self.filename}:{line_no}:{diagnostic.col}\x1b[0m\n"
            f"\x1b[34;1m{line_no:4d} |\x1b[0m {self._source_line(diagnostic.line)}\n"
            "       "
            + " " * diagnostic.col
            + "\x1b[1;92m"
            + "^" * diagnostic.length
            + f" {word} occured here\x1b[0m\n"
        )

    def format_errors(self) -> str:
        """Render all warnings, then all errors, as terminal text."""
        parts = ["\n"]
        parts.extend(self._format_one(w, True) + "\n" for w in self.warnings)
        parts.extend(self._format_one(e, False) + "\n" for e in self.errors)
        return "".join(parts)

    def print_errors(self) -> None:
        print(self.format_errors(), end="")