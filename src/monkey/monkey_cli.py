"""
Monkey CLI Entrypoint.

Parses Monkey source and prints the canonical rendering of the resulting tree.

Features:
    - Read source from `.monkey` files or inline strings.
    - Print the token stream, the rendered program, or the AST as JSON.
    - Report parse errors on stderr and exit non-zero.
    - Launch an interactive read-parse-print loop.

Example usage:
    monkey program.monkey
    monkey -s "let x = 1 + 2 * 3;"
    monkey -s "a + b" --json
    monkey --repl --verbose

Functions:
    run_monkey(source: str, is_string: bool = False, as_json: bool = False,
               show_tokens: bool = False) -> int:
        Tokenize, parse and print; returns the process exit code.

    main(argv: list[str] | None = None) -> int:
        Parses CLI arguments and invokes the appropriate action.
"""

import argparse
import json
import logging
import sys

from monkey.monkey_lexer import tokenize
from monkey.monkey_parser import Parser

logger = logging.getLogger(__name__)


def run_monkey(
    source: str,
    is_string: bool = False,
    as_json: bool = False,
    show_tokens: bool = False,
) -> int:
    """
    Run the Monkey front end: tokenize, parse, and print the result.

    Args:
        source (str): The Monkey source code or path to a `.monkey` file.
        is_string (bool): If True, treats `source` as raw code instead of a file path.
        as_json (bool): If True, prints the AST as JSON instead of its rendering.
        show_tokens (bool): If True, prints the token stream before parsing.

    Returns:
        int: 0 when the program parsed cleanly, 1 when errors were recorded.

    Raises:
        ValueError: If `is_string` is False and the source does not end with '.monkey'.
        SyntaxError: If the source contains an unterminated string.
    """
    if not is_string and not source.endswith(".monkey"):
        raise ValueError("Only .monkey files are supported.")
    if not is_string:
        logger.debug("reading %s", source)
        with open(source, encoding="utf-8") as f:
            source = f.read()

    tokens = tokenize(source)
    logger.debug("tokenized %d tokens", len(tokens))
    if show_tokens:
        for tok in tokens:
            print(f"{tok.line}:{tok.col}\t{tok.kind}\t{tok.literal!r}")

    result = Parser(tokens).parse_program()
    if not result.ok:
        for msg in result.errors:
            print(f"parse error: {msg}", file=sys.stderr)
        return 1

    if as_json:
        print(json.dumps(result.program.to_dict(), indent=2))
    else:
        for stmt in result.program.statements:
            print(stmt.render())
    return 0


def main(argv: list[str] | None = None) -> int:
    """
    Entry point for the Monkey CLI.

    Launches the REPL if no source is given or `--repl` is specified; otherwise
    parses the source and prints the result.

    Supported flags:
        - `-s`, `--string`: Interpret source as a raw string instead of a file path.
        - `--json`: Print the AST as JSON.
        - `--tokens`: Print the token stream.
        - `--repl`: Launch the interactive loop.
        - `--verbose`: Debug logging (and JSON output in the REPL).
    """
    parser = argparse.ArgumentParser(prog="monkey")
    parser.add_argument("source", nargs="?", help="Filename or raw source (with -s)")
    parser.add_argument(
        "-s", "--string", action="store_true", help="Interpret source as literal string"
    )
    parser.add_argument("--json", dest="as_json", action="store_true", help="Print the AST as JSON")
    parser.add_argument("--tokens", action="store_true", help="Print the token stream")
    parser.add_argument("--repl", action="store_true", help="Launch interactive read-parse-print loop")
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging")

    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    if args.repl or args.source is None:
        from monkey.monkey_repl import start_repl

        start_repl(verbose=args.verbose)
        return 0

    return run_monkey(
        source=args.source,
        is_string=args.string,
        as_json=args.as_json,
        show_tokens=args.tokens,
    )


if __name__ == "__main__":
    sys.exit(main())
