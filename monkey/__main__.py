"""CLI entry point for the Monkey interpreter.

Usage:
    python -m monkey [-v|-vv|-vvv] [--frontend pratt|lark]
    python -m monkey [-v...] [--frontend pratt|lark] <program_file>
    python -m monkey [--frontend pratt|lark] --emit-ast <program_file>
    python -m monkey [-v...] --ast <ast_json_file>

Options:
  -v            Increase debug verbosity (can be repeated)
  --frontend    Parser to use: the Pratt parser (default) or the Lark grammar
  --emit-ast    Parse the given .monkey file and emit an AST JSON file
  --ast         Execute a previously emitted AST JSON file

Without a program file an interactive session is started. Debug
information is written to `debug.txt` in the current directory when
verbosity is greater than zero. When a program file is executed the value
of its last statement is printed.
"""

import argparse
import json
import sys
from pathlib import Path

from . import FRONTENDS
from .ast_json import ast_to_obj, ast_from_obj
from .environment import Environment
from .evaluator import Evaluator
from .repl import start


def read_source(path: Path) -> str:
    if not path.exists():
        print(f"Error: file {path} not found", file=sys.stderr)
        sys.exit(1)
    with open(path, 'r', encoding='utf-8') as f:
        return f.read()


def parse_or_exit(source: str, frontend: str):
    program, errors = FRONTENDS[frontend](source)
    if errors:
        for err in errors:
            print(err)
        sys.exit(1)
    return program


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(description="Monkey language interpreter")
    parser.add_argument('-v', action='count', default=0, help='increase debug verbosity (can be repeated)')
    parser.add_argument('--frontend', choices=sorted(FRONTENDS), default='pratt', help='parser used to read source')
    group = parser.add_mutually_exclusive_group()
    group.add_argument('--emit-ast', metavar='MONKEY_FILE', help='emit AST JSON for the given .monkey file')
    group.add_argument('--ast', metavar='AST_JSON_FILE', help='execute AST from a JSON file')
    parser.add_argument('program', nargs='?', help='Monkey program file (.monkey) to execute')
    args = parser.parse_args(argv)

    # Emit AST mode
    if args.emit_ast:
        program_file = Path(args.emit_ast)
        ast_program = parse_or_exit(read_source(program_file), args.frontend)
        obj = ast_to_obj(ast_program)
        out_path = program_file.with_name(program_file.name + '.ast.json')
        with open(out_path, 'w', encoding='utf-8') as out:
            json.dump(obj, out, ensure_ascii=False, indent=2)
        print(str(out_path))
        return

    evaluator = Evaluator(debug_level=args.v)
    try:
        # Execute from AST JSON
        if args.ast:
            ast_path = Path(args.ast)
            if not ast_path.exists():
                print(f"Error: file {ast_path} not found", file=sys.stderr)
                sys.exit(1)
            with open(ast_path, 'r', encoding='utf-8') as f:
                data = json.load(f)
            ast_program = ast_from_obj(data)
            print(evaluator.run(ast_program, Environment()).inspect())
            return

        # Interactive session
        if not args.program:
            start(evaluator=evaluator, frontend=args.frontend)
            return

        # Default: execute source file
        ast_program = parse_or_exit(read_source(Path(args.program)), args.frontend)
        print(evaluator.run(ast_program, Environment()).inspect())
    finally:
        evaluator.close()


if __name__ == '__main__':
    main()
