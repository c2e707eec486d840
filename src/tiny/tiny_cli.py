"""
TINY CLI Entrypoint.

This module provides the command-line interface for the TINY front end.

Features:
    - Read source from `.tiny` files, inline strings, or stdin.
    - Lex and parse the program, then print its canonical rendering.
    - Alternatively dump the token stream or the AST as JSON, or only check syntax.
    - Output to console or file.

Example usage:
    tiny hello.tiny
    tiny -s "x := 1 + 2; print x;"
    tiny hello.tiny --ast -o hello.json
    tiny --tokens < hello.tiny

Functions:
    run_tiny(source: str | None, is_string: bool = False, mode: str = "format",
             out: str | None = None) -> str:
        Executes the pipeline (lex -> parse -> render/dump) and writes the result.

    main(argv: list[str] | None = None) -> int:
        Parses CLI arguments, runs the pipeline and returns the exit status.
"""

import argparse
import json
import logging
import sys

from tiny.emitters.text_emitter import render
from tiny.tiny_ast import to_dict
from tiny.tiny_lexer import tokenize
from tiny.tiny_parser import parse

logger = logging.getLogger(__name__)

MODES = ("format", "tokens", "ast", "check")


def read_source(source: str | None, is_string: bool = False) -> str:
    """
    Returns the program text named by the CLI arguments.

    Raises:
        ValueError: If `source` is a path that does not end with '.tiny'.
    """
    if source is None:
        logger.debug("reading source from stdin")
        return sys.stdin.read()
    if is_string:
        return source
    if not source.endswith(".tiny"):
        raise ValueError("Only .tiny files are supported.")
    logger.debug("reading source from %s", source)
    with open(source, encoding="utf-8") as f:
        return f.read()


def run_tiny(
    source: str | None,
    is_string: bool = False,
    mode: str = "format",
    out: str | None = None,
) -> str:
    """
    Run the TINY pipeline and emit the result.

    Args:
        source (str | None): A path to a `.tiny` file, raw source with `is_string`, or None for stdin.
        is_string (bool): If True, treats `source` as raw code instead of a file path.
        mode (str): One of "format", "tokens", "ast", "check".
        out (str | None): Optional path to write the output to. If None, prints to stdout.

    Returns:
        str: The text that was printed or written.

    Raises:
        LexError, ParseError: If the program is malformed.
        ValueError: On an unsupported file name or mode.
    """
    if mode not in MODES:
        raise ValueError(f"Unknown mode: {mode!r}")
    text = read_source(source, is_string)

    if mode == "tokens":
        result = "\n".join(
            f"{tok.offset}\t{tok.kind.name}\t{tok.lexeme}" for tok in tokenize(text)
        )
    else:
        program = parse(text)
        if mode == "ast":
            result = json.dumps(to_dict(program), indent=2)
        elif mode == "check":
            result = "ok"
        else:
            result = render(program)

    if out:
        with open(out, "w", encoding="utf-8") as f:
            f.write(result + "\n" if result else result)
        logger.debug("wrote %s output to %s", mode, out)
    else:
        print(result)
    return result


def build_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="tiny", description="Parse and pretty-print TINY programs."
    )
    parser.add_argument(
        "source", nargs="?", help="Filename, or raw source with -s (default: stdin)"
    )
    parser.add_argument(
        "-s", "--string", action="store_true", help="Interpret source as literal string"
    )
    group = parser.add_mutually_exclusive_group()
    group.add_argument(
        "--tokens",
        dest="mode",
        action="store_const",
        const="tokens",
        help="Print the token stream instead of the formatted program",
    )
    group.add_argument(
        "--ast",
        dest="mode",
        action="store_const",
        const="ast",
        help="Print the syntax tree as JSON",
    )
    group.add_argument(
        "--check",
        dest="mode",
        action="store_const",
        const="check",
        help="Only check syntax",
    )
    parser.set_defaults(mode="format")
    parser.add_argument("-o", "--out", metavar="OUTFILE", help="Output to file")
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging")
    return parser


def main(argv: list[str] | None = None) -> int:
    """
    Entry point for the TINY CLI.

    Returns 0 on success and 1 when the program has a lexical or syntax
    error or the source file cannot be read. Usage errors exit with status 2
    through argparse.
    """
    arg_parser = build_arg_parser()
    args = arg_parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    if args.string and args.source is None:
        arg_parser.error("-s/--string requires a source argument")

    try:
        run_tiny(
            source=args.source,
            is_string=args.string,
            mode=args.mode,
            out=args.out,
        )
    except UnicodeDecodeError as e:
        # a ValueError subclass, but an unreadable file rather than a usage error
        print(f"error: {e}", file=sys.stderr)
        return 1
    except ValueError as e:
        arg_parser.error(str(e))
    except (SyntaxError, OSError) as e:
        print(f"error: {e}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
