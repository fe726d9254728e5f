"""Interactive read-eval-print loop and the `conslisp` command."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import Callable, Optional, Sequence

from conslisp import config
from conslisp.errors import LispError
from conslisp.interpreter import Interpreter
from conslisp.printer import to_lisp_string

logger = logging.getLogger(__name__)


def process_line(interp: Interpreter, line: str, echo: bool = False) -> list[str]:
    """Evaluate one line and return the lines the REPL should print."""
    out: list[str] = []
    try:
        expr, leftover = interp.read(line)
    except LispError as e:
        out.extend(interp.session.drain())
        out.append(str(e))
        return out
    out.extend(interp.session.drain())
    if expr is None:
        return out
    if echo:
        out.append(f'"{to_lisp_string(expr)}"')

    try:
        result = interp.evaluate(expr)
    except RecursionError:
        out.extend(interp.session.drain())
        out.append("Recursion depth exceeded.")
        return out
    out.extend(interp.session.drain())
    out.append(to_lisp_string(result))
    if leftover:
        out.append(f"extraneous input: {leftover[0]}...")
    return out


def repl(
    interp: Interpreter,
    prompt: str = config.DEFAULT_PROMPT,
    echo: bool = False,
    input_fn: Callable[[str], str] = input,
    output: Callable[[str], None] = print,
) -> None:
    """Read lines until EOF, printing each result."""
    while True:
        try:
            line = input_fn(prompt)
        except EOFError:
            output("")
            break
        except KeyboardInterrupt:
            output("")
            continue
        for text in process_line(interp, line, echo):
            output(text)


def run_file(interp: Interpreter, path: Path, output: Callable[[str], None] = print) -> bool:
    """Evaluate a whole file; returns False if it could not be read or parsed."""
    try:
        source = path.read_text()
    except OSError as e:
        print(f"conslisp: cannot read {path}: {e}", file=sys.stderr)
        return False
    try:
        interp.eval_source(source)
    except LispError as e:
        for text in interp.session.drain():
            output(text)
        print(f"conslisp: {path}: {e}", file=sys.stderr)
        return False
    for text in interp.session.drain():
        output(text)
    return True


def enable_line_editing() -> bool:
    """Give input() history and line editing where the platform has readline."""
    try:
        import readline  # noqa: F401
    except ImportError:
        return False
    return True


def build_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="conslisp", description="A small cons-cell Lisp interpreter."
    )
    parser.add_argument("files", nargs="*", type=Path, help="source files to evaluate")
    parser.add_argument("-e", "--eval", dest="expr", help="evaluate one line and print the result")
    parser.add_argument("-i", "--interactive", action="store_true",
                        help="start the REPL after evaluating files")
    parser.add_argument("--prompt", default=config.get_prompt())
    parser.add_argument("--echo", action="store_true", default=config.get_echo(),
                        help="print each parsed expression before its value")
    parser.add_argument("--log-level", default=config.get_log_level(),
                        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
                        type=str.upper)
    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = build_arg_parser().parse_args(argv)
    logging.basicConfig(level=args.log_level, format="%(levelname)s %(name)s: %(message)s")

    interp = Interpreter()
    for path in config.get_prelude_paths():
        logger.info("loading prelude %s", path)
        if not run_file(interp, path):
            return 1

    status = 0
    for path in args.files:
        if not run_file(interp, path):
            status = 1

    if args.expr is not None:
        for text in process_line(interp, args.expr, args.echo):
            print(text)

    if args.interactive or (not args.files and args.expr is None):
        enable_line_editing()
        repl(interp, args.prompt, args.echo)
    return status


if __name__ == "__main__":
    sys.exit(main())
