# Monkey language package
# This package provides a lexer, a Pratt parser and a tree-walking
# evaluator for the Monkey language.
from typing import Optional

from .environment import Environment
from .errors import MonkeyParseError
from .evaluator import Evaluator, evaluate
from .object import Object
from . import grammar, parser

FRONTENDS = {
    'pratt': parser.parse_program,
    'lark': grammar.parse_program,
}


def run_source(source: str, env: Optional[Environment] = None, frontend: str = 'pratt',
               evaluator: Optional[Evaluator] = None) -> Object:
    """Lex, parse and evaluate `source` in `env`.

    Raises MonkeyParseError without evaluating anything when the source has
    syntax errors. Evaluation failures come back as Error values.
    """
    program, errors = FRONTENDS[frontend](source)
    if errors:
        raise MonkeyParseError(errors)
    if env is None:
        env = Environment()
    if evaluator is None:
        evaluator = Evaluator()
    return evaluator.run(program, env)


__all__ = [
    'run_source',
    'evaluate',
    'Evaluator',
    'Environment',
    'MonkeyParseError',
    'FRONTENDS',
]
