"""Runs the compiler over a directory of sample programs and tallies results."""

from __future__ import annotations

import re
import shlex
import subprocess
import sys
from pathlib import Path
from typing import Optional, Sequence

COMPILER_COMMAND = "./bin/wyrm build"

_ANSI = re.compile(r"(\x9B|\x1B\[)[0-?]*[ -/]*[@-~]")


def execute_command(command: str) -> tuple[str, int]:
    """Run ``command`` in a shell; return its standard output and exit status."""
    completed = subprocess.run(
        command, shell=True, stdout=subprocess.PIPE, text=True, errors="replace"
    )
    return completed.stdout, completed.returncode


def strip_ansi(text: str) -> str:
    """Remove ANSI escape sequences from ``text``."""
    return _ANSI.sub("", text)


def _collect(directory: Path, extension: str) -> list[Path]:
    found: list[Path] = []
    for entry in sorted(directory.iterdir()):
        if entry.is_file() and entry.suffix == extension:
            found.append(entry)
        elif entry.is_dir():
            found.extend(_collect(entry, extension))
    return found


def fetch_test_files(path) -> Optional[list[Path]]:
    """Return every ``.wr`` file below ``path``, or None if it is not a directory."""
    directory = Path(path)
    if not directory.is_dir():
        return None
    return _collect(directory, ".wr")


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = list(sys.argv[1:] if argv is None else argv)
    if len(args) != 1:
        print(f"Expected 2 arguments, got {len(args) + 1}")
        return 1

    print("Fetching test files...")
    test_files = fetch_test_files(args[0])
    if test_files is None:
        print(f"Could not fetch test files from '{args[0]}'")
        return 1

    passed = 0
    for file in test_files:
        output, status = execute_command(f"{COMPILER_COMMAND} {shlex.quote(str(file))}")

        try:
            file.with_suffix(".txt").write_text(strip_ansi(output))
        except OSError:
            print("oh no")

        expected_error = "error" in str(file)
        if (status != 0) == expected_error:
            passed += 1
        else:
            print(f'\x1b[31m\uf467 Test Failed:\x1b[0m "{file}"')
            print(f"Expected {'error' if expected_error else 'no error'}")

    print()
    print(f"\x1b[32mTests passed: {passed}\x1b[0m")
    print(f"\x1b[31mTests failed: {len(test_files) - passed}\x1b[0m")
    return 0


if __name__ == "__main__":
    sys.exit(main())