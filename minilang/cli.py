"""
MiniLang - Command Line Interface

Usage:
    minilang program.ml [--debug] [--tokens]
    minilang program.ml --emit-ast [-o program.ast.json]
    python -m minilang program.ml
"""

import sys
import argparse
import os


def main(argv=None):
    parser = argparse.ArgumentParser(
        prog="minilang",
        description="MiniLang — a tiny integer language interpreter",
    )
    parser.add_argument("input", help="Path to the MiniLang source file")
    parser.add_argument(
        "-o", "--output",
        help="Where to write the AST JSON when --emit-ast is given",
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Print interpreter phase info to stderr",
    )
    parser.add_argument(
        "--tokens",
        action="store_true",
        dest="dump_tokens",
        help="Print the token stream to stderr before parsing",
    )
    parser.add_argument(
        "--emit-ast",
        action="store_true",
        dest="emit_ast",
        help="Write the parsed AST as JSON instead of running the program",
    )

    args = parser.parse_args(argv)

    from .interpreter import interpret_file, InterpretationError

    try:
        result = interpret_file(
            args.input,
            debug=args.debug,
            dump_tokens=args.dump_tokens,
            emit_ast=args.emit_ast,
            record=False,
        )
    except FileNotFoundError:
        print(f"[minilang] Error: Input file not found: {args.input!r}", file=sys.stderr)
        return 1
    except OSError as e:
        print(f"[minilang] Error: Cannot read {args.input!r}: {e.strerror or e}", file=sys.stderr)
        return 1
    except InterpretationError as e:
        print(f"[minilang] Error: {e}", file=sys.stderr)
        return 1

    if args.emit_ast:
        output_path = args.output or os.path.splitext(args.input)[0] + ".ast.json"
        with open(output_path, "w", encoding="utf-8") as f:
            f.write(result.ast_json)
        print(f"[minilang] Wrote AST for {args.input!r} → {output_path!r}")

    return 0


if __name__ == "__main__":
    sys.exit(main())
