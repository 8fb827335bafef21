"""
Command-line entry point: compile a script and dump what the front end built.
"""

import argparse
import logging
import sys

from . import __version__
from .config import CompilerOptions
from .driver import compile_file
from .printer import render_report


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="ttc",
        description="Tilemap Town script compiler front end",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
    ttc                         # compile test.txt, print everything
    ttc script.txt --tree       # only the syntax tree
    ttc script.txt --tokens -v  # token list with debug logging
        """
    )

    parser.add_argument('file', nargs='?', default='test.txt',
                        help='Script to compile (default: test.txt)')

    # Output options
    parser.add_argument('--tokens', action='store_true',
                        help='Print the token list')
    parser.add_argument('--symbols', action='store_true',
                        help='Print the symbol table')
    parser.add_argument('--tree', action='store_true',
                        help='Print the syntax tree')

    # Language options
    parser.add_argument('--strip-quotes', action='store_true',
                        help='Intern string literals without their quotes')

    parser.add_argument('-v', '--verbose', action='store_true',
                        help='Log stage progress to stderr')
    parser.add_argument('--version', action='version', version=f'%(prog)s {__version__}')
    return parser


def main(argv=None) -> int:
    """Main entry point for the ttc command"""

    args = build_parser().parse_args(argv)

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(name)s: %(message)s")

    # Default to all sections if none selected
    show_all = not any([args.tokens, args.symbols, args.tree])
    options = CompilerOptions(strip_string_quotes=args.strip_quotes)

    try:
        result = compile_file(args.file, options)
    except OSError as e:
        print(f"Error: cannot read '{args.file}': {e}", file=sys.stderr)
        return 2

    if not result.ok:
        print(str(result.error), file=sys.stderr, end="")
        return 1

    sys.stdout.write(render_report(
        result.tokens, result.symbols, result.tree,
        show_tokens=show_all or args.tokens,
        show_symbols=show_all or args.symbols,
        show_tree=show_all or args.tree,
    ))
    return 0


if __name__ == "__main__":
    sys.exit(main())
