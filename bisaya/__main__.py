"""CLI entry point for the Bisaya++ interpreter.

Usage:
    python -m bisaya [-v|-vv|-vvv] [--scoped-blocks] [--no-banner] <program_file>
    python -m bisaya [-v...] --emit-ast <program_file>
    python -m bisaya [-v...] --ast <ast_json_file>

Options:
  -v               Increase debug verbosity (can be repeated)
  --scoped-blocks  Give every PUNDOK block its own child namespace
  --no-banner      Do not print the completion notice after a successful run
  --emit-ast       Parse the given program and emit an AST JSON file
  --ast            Execute a previously emitted AST JSON file

Debug information is written to `debug.txt` in the current directory when
verbosity is greater than zero.
"""

import argparse
import json
import sys
from pathlib import Path
from .errors import BisayaError
from .interpreter import Interpreter
from .parser import parse_program
from .ast_json import ast_to_obj, ast_from_obj


def read_source(path: Path) -> str:
    if not path.exists():
        print(f"Error: file {path} not found", file=sys.stderr)
        sys.exit(1)
    with open(path, 'r', encoding='utf-8') as f:
        return f.read()


def parse_or_exit(source: str):
    try:
        return parse_program(source)
    except BisayaError as e:
        print(f"Syntax error: {e.err.message}", file=sys.stderr)
        sys.exit(1)


def execute(ast_program, args) -> None:
    interpreter = Interpreter(
        debug_level=args.v,
        scoped_blocks=args.scoped_blocks,
        announce_completion=not args.no_banner,
    )
    try:
        interpreter.run(ast_program)
    except BisayaError as e:
        print(f"Runtime error: {e}", file=sys.stderr)
        sys.exit(1)


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(description="Bisaya++ language interpreter")
    parser.add_argument('-v', action='count', default=0, help='increase debug verbosity (can be repeated)')
    parser.add_argument('--scoped-blocks', action='store_true', help='run each PUNDOK block in its own namespace')
    parser.add_argument('--no-banner', action='store_true', help='suppress the completion notice')
    group = parser.add_mutually_exclusive_group()
    group.add_argument('--emit-ast', metavar='PROGRAM_FILE', help='emit AST JSON for the given program')
    group.add_argument('--ast', metavar='AST_JSON_FILE', help='execute AST from a JSON file')
    parser.add_argument('program', nargs='?', help='Bisaya++ program file to execute')
    args = parser.parse_args(argv)

    # Emit AST mode
    if args.emit_ast:
        program_file = Path(args.emit_ast)
        ast_program = parse_or_exit(read_source(program_file))
        obj = ast_to_obj(ast_program)
        out_path = program_file.with_name(program_file.name + '.ast.json')
        with open(out_path, 'w', encoding='utf-8') as out:
            json.dump(obj, out, ensure_ascii=False, indent=2)
        print(str(out_path))
        return

    # Execute from AST JSON
    if args.ast:
        ast_path = Path(args.ast)
        data = json.loads(read_source(ast_path))
        execute(ast_from_obj(data), args)
        return

    # Default: execute source file
    if not args.program:
        parser.error('missing program file; or use --emit-ast/--ast')
    execute(parse_or_exit(read_source(Path(args.program))), args)


if __name__ == '__main__':
    main()
