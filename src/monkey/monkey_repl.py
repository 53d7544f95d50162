"""
Interactive read-parse-print loop for Monkey.

Each entry is tokenized and parsed; the canonical rendering of the program is
printed, or the recorded parse errors when the entry does not parse. Input that
opens more braces than it closes continues on a `... ` prompt.

Commands:
    exit / quit     Leave the loop.
    verbose-mode    Toggle printing the AST as JSON after each rendering.
"""

import io
import json
import traceback

from monkey.monkey_lexer import tokenize
from monkey.monkey_parser import Parser


def print_traceback() -> None:
    buf = io.StringIO()
    traceback.print_exc(file=buf)
    print("[error] >>>")
    print(buf.getvalue())


def print_parser_errors(errors: list[str]) -> None:
    print("[parse error] >>>")
    for msg in errors:
        print(f"\t{msg}")


def read_entry() -> str | None:
    """Reads one entry, spanning lines while braces are unbalanced. None means exit."""
    src_lines: list[str] = []
    brace_count = 0
    while True:
        prompt = ">> " if not src_lines else "... "
        line = input(prompt)
        if line.strip() in ("exit", "quit") and not src_lines:
            return None
        src_lines.append(line)
        brace_count += line.count("{") - line.count("}")
        if brace_count <= 0:
            return "\n".join(src_lines).strip()


def start_repl(verbose: bool = False) -> None:
    print("Monkey REPL. Type 'exit' or 'quit' to leave.")

    while True:
        try:
            src = read_entry()
        except (EOFError, KeyboardInterrupt):
            print()
            src = None
        if src is None:
            print("Exiting Monkey REPL.")
            return

        if not src or src.startswith("#"):
            continue
        if src.lower() == "verbose-mode":
            verbose = not verbose
            print(f"[mode] >>> Verbose mode {'ON' if verbose else 'OFF'}")
            continue

        try:
            result = Parser(tokenize(src)).parse_program()
        except SyntaxError:
            print_traceback()
            continue

        if not result.ok:
            print_parser_errors(result.errors)
            continue

        print(result.program.render())
        if verbose:
            print(json.dumps(result.program.to_dict(), indent=2))
