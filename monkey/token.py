"""Token kinds and the token record produced by the Monkey lexer."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict


ILLEGAL = 'ILLEGAL'
EOF = 'EOF'

# Identifiers and literals
IDENT = 'IDENT'
INT = 'INT'

# Operators
ASSIGN = '='
PLUS = '+'
MINUS = '-'
ASTERISK = '*'
SLASH = '/'
BANG = '!'
LT = '<'
GT = '>'
EQ = '=='
NOT_EQ = '!='

# Delimiters
COMMA = ','
SEMICOLON = ';'
LPAREN = '('
RPAREN = ')'
LBRACE = '{'
RBRACE = '}'

# Keywords
FUNCTION = 'FUNCTION'
LET = 'LET'
RETURN = 'RETURN'
IF = 'IF'
ELSE = 'ELSE'
TRUE = 'TRUE'
FALSE = 'FALSE'


KEYWORDS: Dict[str, str] = {
    'fn': FUNCTION,
    'let': LET,
    'return': RETURN,
    'if': IF,
    'else': ELSE,
    'true': TRUE,
    'false': FALSE,
}

SINGLE_CHAR_TOKENS: Dict[str, str] = {
    '=': ASSIGN,
    '+': PLUS,
    '-': MINUS,
    '*': ASTERISK,
    '/': SLASH,
    '!': BANG,
    '<': LT,
    '>': GT,
    ',': COMMA,
    ';': SEMICOLON,
    '(': LPAREN,
    ')': RPAREN,
    '{': LBRACE,
    '}': RBRACE,
}

TWO_CHAR_TOKENS: Dict[str, str] = {
    '==': EQ,
    '!=': NOT_EQ,
}


def lookup_ident(word: str) -> str:
    """Return the keyword kind for `word`, or IDENT."""
    return KEYWORDS.get(word, IDENT)


@dataclass(frozen=True)
class Token:
    type: str
    literal: str
    line: int = 1
    column: int = 1
