"""
Command line entry point for loxcst.

With a script path, lexes and parses the file once. Without one, starts a
prompt that handles one line at a time until end of input. Each run prints
the tokens, the syntax tree and the list of syntax errors.
"""

import argparse
import logging
import sys
from typing import List, Optional, TextIO

from .lexer import Lexer
from .parser import Parser


def run(source: str, filename: str = "<stdin>", show_tokens: bool = True,
        show_tree: bool = True, show_diagnostics: bool = False,
        out: Optional[TextIO] = None) -> int:
    """Lex and parse ``source`` and print the results. Returns the error count."""
    out = out or sys.stdout

    lexer = Lexer(source, filename)
    tokens = lexer.tokenize()
    if show_tokens:
        print("[" + ", ".join(str(token) for token in tokens) + "]", file=out)

    result = Parser(tokens, filename).parse()
    if show_tree:
        print(result.syntax().debug_dump(), file=out)
    print(f"errors: {list(result.errors)}", file=out)

    if show_diagnostics:
        for diagnostic in lexer.diagnostics + list(result.diagnostics):
            print(diagnostic, file=out, end="")

    return len(result.errors)


def run_file(filename: str, **options) -> int:
    """Run a script file; returns a process exit status."""
    try:
        with open(filename, 'r', encoding='utf-8', newline='') as f:
            source = f.read()
    except (OSError, UnicodeDecodeError) as e:
        print(f"loxcst: cannot read {filename}: {e}", file=sys.stderr)
        return 1

    run(source, filename, **options)
    return 0


def run_prompt(**options) -> int:
    """Read-parse-print loop; ends cleanly on end of input."""
    while True:
        try:
            line = input("> ")
        except EOFError:
            print()
            return 0
        run(line + "\n", "<stdin>", **options)


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for the loxcst command"""

    parser = argparse.ArgumentParser(
        prog="loxcst",
        description="Print the tokens and concrete syntax tree of a loxcst expression",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
    loxcst                         # Interactive prompt
    loxcst script.lox              # Parse a file
    loxcst --no-tokens script.lox  # Tree and errors only
        """
    )

    parser.add_argument('script', nargs='?',
                        help='Source file to parse (omit for an interactive prompt)')
    parser.add_argument('--no-tokens', dest='show_tokens', action='store_false',
                        help='Do not print the token list')
    parser.add_argument('--no-tree', dest='show_tree', action='store_false',
                        help='Do not print the syntax tree')
    parser.add_argument('--diagnostics', dest='show_diagnostics', action='store_true',
                        help='Print detailed diagnostics with locations')
    parser.add_argument('-v', '--verbose', action='store_true',
                        help='Enable debug logging')

    args = parser.parse_args(argv)

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG,
                            format="%(levelname)s %(name)s: %(message)s")

    options = dict(
        show_tokens=args.show_tokens,
        show_tree=args.show_tree,
        show_diagnostics=args.show_diagnostics,
    )

    if args.script:
        return run_file(args.script, **options)
    return run_prompt(**options)


if __name__ == "__main__":
    sys.exit(main())
