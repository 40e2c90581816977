"""Character-level lexer for Monkey source text.

The lexer walks the source one character at a time and hands out tokens on
demand through `next_token()`. It never fails: characters it does not
recognise come back as ILLEGAL tokens and it is up to the parser to reject
them. Once the input is exhausted every further call returns EOF.
"""

from __future__ import annotations

from typing import Iterator, List

from . import token
from .token import Token


WHITESPACE = ' \t\n\r'


def is_letter(ch: str) -> bool:
    return ch.isascii() and (ch.isalpha() or ch == '_')


def is_digit(ch: str) -> bool:
    return '0' <= ch <= '9'


class Lexer:
    def __init__(self, source: str):
        self.source = source
        self.pos = 0
        self.line = 1
        self.column = 1

    def peek_char(self, offset: int = 0) -> str:
        i = self.pos + offset
        if i < len(self.source):
            return self.source[i]
        return ''

    def advance(self, n: int = 1):
        for _ in range(n):
            if self.pos >= len(self.source):
                return
            if self.source[self.pos] == '\n':
                self.line += 1
                self.column = 1
            else:
                self.column += 1
            self.pos += 1

    def skip_whitespace(self):
        while self.peek_char() and self.peek_char() in WHITESPACE:
            self.advance()

    def read_while(self, pred) -> str:
        start = self.pos
        while self.peek_char() and pred(self.peek_char()):
            self.advance()
        return self.source[start:self.pos]

    def next_token(self) -> Token:
        self.skip_whitespace()
        line, column = self.line, self.column
        ch = self.peek_char()
        if ch == '':
            return Token(token.EOF, '', line, column)

        pair = ch + self.peek_char(1)
        if pair in token.TWO_CHAR_TOKENS:
            self.advance(2)
            return Token(token.TWO_CHAR_TOKENS[pair], pair, line, column)

        if ch in token.SINGLE_CHAR_TOKENS:
            self.advance()
            return Token(token.SINGLE_CHAR_TOKENS[ch], ch, line, column)

        if is_letter(ch):
            word = self.read_while(lambda c: is_letter(c) or is_digit(c))
            return Token(token.lookup_ident(word), word, line, column)

        if is_digit(ch):
            digits = self.read_while(is_digit)
            return Token(token.INT, digits, line, column)

        self.advance()
        return Token(token.ILLEGAL, ch, line, column)

    def __iter__(self) -> Iterator[Token]:
        while True:
            tok = self.next_token()
            yield tok
            if tok.type == token.EOF:
                return


def tokenize(source: str) -> List[Token]:
    """Convert source code into a list of tokens ending with EOF."""
    return list(Lexer(source))
