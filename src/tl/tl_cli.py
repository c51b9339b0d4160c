"""
TL CLI Entrypoint.

This module provides the command-line interface for the TL front end.

Features:
    - Read source from `.tl` files or inline strings.
    - Lex and parse the source, printing every diagnostic as an `Error:` line.
    - Re-emit the AST as canonical TL source (default).
    - Dump the AST as JSON (`--ast`) or the raw token stream (`--tokens`).
    - Fail with exit status 1 on any diagnostic when `--strict` is given.

Example usage:
    tl hello.tl
    tl -s "func main is print(\\"hi\\"); end"
    tl hello.tl --ast
    tl hello.tl -o normalized.tl

Functions:
    run_tl(source: str, is_string: bool = False, ast: bool = False, tokens: bool = False,
           strict: bool = False, out: Optional[str] = None) -> int:
        Executes the full pipeline (lex → parse → dump/unwrite → output).

    main() -> None:
        Parses CLI arguments and invokes `run_tl`.
"""

import argparse
import json
import sys

from tl.emitters.tl_emitter import unwrite
from tl.tl_lexer import CharacterStream, Lexer, TokenStream
from tl.tl_parser import Parser


def run_tl(
    source: str,
    is_string: bool = False,
    ast: bool = False,
    tokens: bool = False,
    strict: bool = False,
    out: str | None = None,
) -> int:
    """
    Run the TL front end: lex, parse, then dump or unwrite.

    Args:
        source (str): The TL source code or path to a `.tl` file.
        is_string (bool): If True, treats `source` as raw code instead of a file path.
        ast (bool): Print the AST as JSON instead of unwriting it.
        tokens (bool): Print the token stream and stop.
        strict (bool): Return a failing status when any diagnostic was reported.
        out (str | None): Optional path to write the output to. If None, prints to stdout.

    Returns:
        int: Process exit status (0 on success).

    Raises:
        ValueError: If `is_string` is False and the source does not end with '.tl'.
    """
    if not is_string and not source.endswith(".tl"):
        raise ValueError("Only .tl files are supported.")

    # 1. Read source
    name = "<string>"
    if not is_string:
        name = source
        try:
            with open(source, encoding="utf-8") as f:
                source = f.read()
        except OSError as e:
            print("Fatal Error!")
            print(e)
            return 1

    try:
        # 2. Token dump
        if tokens:
            text = "\n".join(
                f"{tok.line}:{tok.col} {tok!r}"
                for tok in Lexer(CharacterStream(source)).tokens()
            )
        else:
            # 3. Parsing
            parser = Parser(TokenStream.from_source(source), name=name)
            tree = parser.parse()
            if parser.diagnostics.has_errors:
                print(parser.diagnostics.render())
                if strict:
                    return 1

            # 4. Dump or unwrite
            if ast:
                text = json.dumps(tree.to_dict(), indent=2)
            else:
                text = unwrite(tree).rstrip("\n")
    except SyntaxError as e:
        print(f"Error: {e}")
        return 1

    # 5. Output result
    if out:
        with open(out, "w", encoding="utf-8") as f:
            f.write(text + "\n")
    else:
        print(text)
    return 0


def main() -> None:
    """
    Entry point for the TL CLI.

    Supported flags:
        - `-s`, `--string`: Interpret source as a raw string instead of a file path.
        - `--ast`: Print the parsed AST as JSON.
        - `--tokens`: Print the token stream.
        - `--strict`: Exit with status 1 if any diagnostic is reported.
        - `-o`, `--out`: Write output to a file.
    """
    parser = argparse.ArgumentParser(prog="tl")
    parser.add_argument("source", help="Filename or raw source (with -s)")
    parser.add_argument(
        "-s", "--string", action="store_true", help="Interpret source as literal string"
    )
    parser.add_argument("--ast", action="store_true", help="Dump the AST as JSON")
    parser.add_argument("--tokens", action="store_true", help="Dump the token stream")
    parser.add_argument(
        "--strict",
        action="store_true",
        help="Exit with status 1 when any diagnostic is reported",
    )
    parser.add_argument("-o", "--out", metavar="OUTFILE", help="Output to file")

    args = parser.parse_args()

    try:
        status = run_tl(
            source=args.source,
            is_string=args.string,
            ast=args.ast,
            tokens=args.tokens,
            strict=args.strict,
            out=args.out,
        )
    except ValueError as e:
        parser.error(str(e))
    sys.exit(status)


if __name__ == "__main__" and not any("pytest" in arg for arg in sys.argv):
    main()
