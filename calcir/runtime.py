"""Runtime helpers that compiled calc programs call for input and output."""

from __future__ import annotations

import re
import sys
from typing import TextIO

_BUFFER_SIZE = 64
_INTEGER = re.compile(r"\s*([+-]?[0-9]+)")


class InvalidValueError(ValueError):
    """Raised when a line read for a variable holds no integer."""

    def __init__(self, text: str) -> None:
        self.text = text
        super().__init__(f"Value {text} is invalid")


def calc_write(value: int, out: TextIO | None = None) -> None:
    """Print the result of a calculation."""
    out = sys.stdout if out is None else out
    out.write(f"The result is {value}\n")


def calc_read(name: str, stdin: TextIO | None = None, stdout: TextIO | None = None) -> int:
    """Prompt for the value of variable ``name`` and read it as an integer."""
    stdin = sys.stdin if stdin is None else stdin
    stdout = sys.stdout if stdout is None else stdout
    stdout.write(f"Enter a value for {name}: ")
    stdout.flush()
    line = stdin.readline(_BUFFER_SIZE - 1)
    match = _INTEGER.match(line)
    if match is None:
        raise InvalidValueError(line)
    return int(match.group(1))