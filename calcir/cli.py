"""Command line entry point: compile an expression to LLVM IR on stdout."""

from __future__ import annotations

import argparse
import sys
from typing import Iterable, Sequence

from .codegen import compile_to_ir
from .parser import CalcSyntaxError, parse
from .sema import SemanticError, check


def _report(messages: Iterable[str], summary: str) -> None:
    for message in messages:
        print(message, file=sys.stderr)
    print(summary, file=sys.stderr)


def main(argv: Sequence[str] | None = None) -> int:
    """Compile the expression given on the command line; return the exit status."""
    arg_parser = argparse.ArgumentParser(
        prog="calc", description="calc - the expression compiler"
    )
    arg_parser.add_argument(
        "input", nargs="?", default="", metavar="<input expression>"
    )
    args = arg_parser.parse_args(argv)

    try:
        tree = parse(args.input)
    except CalcSyntaxError as exc:
        _report(exc.messages, "Syntax errors occurred")
        return 1

    try:
        check(tree)
    except SemanticError as exc:
        _report(exc.messages, "Semantic errors occurred")
        return 1

    sys.stdout.write(compile_to_ir(tree))
    return 0


if __name__ == "__main__":
    sys.exit(main())