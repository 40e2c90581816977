"""Pratt parser for the Monkey language.

Statements are dispatched on their leading token. Expressions are parsed
with operator precedence: every token kind that may start an expression
has a prefix parse function, every binary operator has an infix parse
function and a precedence level. `parse_expression` keeps folding infix
operators into the left operand for as long as the next operator binds
tighter than the level it was called with, which gives left associativity
and the usual arithmetic precedence.

The parser never raises on bad input. Each problem is recorded in
`Parser.errors` and parsing resumes with the next statement, so a single
run reports as many syntax errors as possible.
"""

from __future__ import annotations

from typing import Callable, Dict, List, Optional, Tuple

from . import token
from .ast import (
    Program, Statement, Expression, LetStatement, ReturnStatement,
    ExpressionStatement, BlockStatement, Identifier, IntegerLiteral,
    BooleanLiteral, PrefixExpression, InfixExpression, IfExpression,
)
from .lexer import Lexer
from .object import INT32_MAX


# Precedence levels, lowest to highest
LOWEST = 1
EQUALS = 2       # == !=
LESSGREATER = 3  # < >
SUM = 4          # + -
PRODUCT = 5      # * /
PREFIX = 6       # -x !x
CALL = 7         # reserved for call expressions

PRECEDENCES: Dict[str, int] = {
    token.EQ: EQUALS,
    token.NOT_EQ: EQUALS,
    token.LT: LESSGREATER,
    token.GT: LESSGREATER,
    token.PLUS: SUM,
    token.MINUS: SUM,
    token.ASTERISK: PRODUCT,
    token.SLASH: PRODUCT,
}


PrefixParseFn = Callable[[], Optional[Expression]]
InfixParseFn = Callable[[Expression], Optional[Expression]]


class Parser:
    def __init__(self, lexer: Lexer):
        self.lexer = lexer
        self.errors: List[str] = []

        self.prefix_parse_fns: Dict[str, PrefixParseFn] = {
            token.IDENT: self.parse_identifier,
            token.INT: self.parse_integer_literal,
            token.TRUE: self.parse_boolean,
            token.FALSE: self.parse_boolean,
            token.BANG: self.parse_prefix_expression,
            token.MINUS: self.parse_prefix_expression,
            token.LPAREN: self.parse_grouped_expression,
            token.IF: self.parse_if_expression,
        }
        self.infix_parse_fns: Dict[str, InfixParseFn] = {
            kind: self.parse_infix_expression for kind in PRECEDENCES
        }

        # Read two tokens so cur_token and peek_token are both set
        self.cur_token = self.lexer.next_token()
        self.peek_token = self.lexer.next_token()

    # Token cursor

    def next_token(self):
        self.cur_token = self.peek_token
        self.peek_token = self.lexer.next_token()

    def cur_token_is(self, kind: str) -> bool:
        return self.cur_token.type == kind

    def peek_token_is(self, kind: str) -> bool:
        return self.peek_token.type == kind

    def expect_peek(self, kind: str) -> bool:
        """Advance if the next token is `kind`, otherwise record an error."""
        if self.peek_token_is(kind):
            self.next_token()
            return True
        self.peek_error(kind)
        return False

    def peek_precedence(self) -> int:
        return PRECEDENCES.get(self.peek_token.type, LOWEST)

    def cur_precedence(self) -> int:
        return PRECEDENCES.get(self.cur_token.type, LOWEST)

    # Errors

    def peek_error(self, kind: str):
        self.errors.append(
            f"expected next token to be {kind}, got {self.peek_token.type} instead"
        )

    def no_prefix_parse_fn_error(self, kind: str):
        self.errors.append(f"no prefix parse function for {kind}")

    # Statements

    def parse_program(self) -> Program:
        program = Program()
        while not self.cur_token_is(token.EOF):
            stmt = self.parse_statement()
            if stmt is not None:
                program.statements.append(stmt)
            self.next_token()
        return program

    def parse_statement(self) -> Optional[Statement]:
        if self.cur_token_is(token.LET):
            return self.parse_let_statement()
        if self.cur_token_is(token.RETURN):
            return self.parse_return_statement()
        return self.parse_expression_statement()

    def parse_let_statement(self) -> Optional[LetStatement]:
        if not self.expect_peek(token.IDENT):
            return None
        name = Identifier(self.cur_token.literal)
        if not self.expect_peek(token.ASSIGN):
            return None
        self.next_token()
        value = self.parse_expression(LOWEST)
        if value is None:
            return None
        if self.peek_token_is(token.SEMICOLON):
            self.next_token()
        return LetStatement(name, value)

    def parse_return_statement(self) -> Optional[ReturnStatement]:
        self.next_token()
        value = self.parse_expression(LOWEST)
        if value is None:
            return None
        if self.peek_token_is(token.SEMICOLON):
            self.next_token()
        return ReturnStatement(value)

    def parse_expression_statement(self) -> Optional[ExpressionStatement]:
        expression = self.parse_expression(LOWEST)
        if expression is None:
            return None
        if self.peek_token_is(token.SEMICOLON):
            self.next_token()
        return ExpressionStatement(expression)

    def parse_block_statement(self) -> Optional[BlockStatement]:
        block = BlockStatement()
        self.next_token()
        while not self.cur_token_is(token.RBRACE):
            if self.cur_token_is(token.EOF):
                self.errors.append(
                    f"expected next token to be {token.RBRACE}, got {token.EOF} instead"
                )
                return None
            stmt = self.parse_statement()
            if stmt is not None:
                block.statements.append(stmt)
            self.next_token()
        return block

    # Expressions

    def parse_expression(self, precedence: int) -> Optional[Expression]:
        prefix = self.prefix_parse_fns.get(self.cur_token.type)
        if prefix is None:
            self.no_prefix_parse_fn_error(self.cur_token.type)
            return None
        left = prefix()

        while (left is not None
               and not self.peek_token_is(token.SEMICOLON)
               and precedence < self.peek_precedence()):
            infix = self.infix_parse_fns.get(self.peek_token.type)
            if infix is None:
                return left
            self.next_token()
            left = infix(left)
        return left

    def parse_identifier(self) -> Expression:
        return Identifier(self.cur_token.literal)

    def parse_integer_literal(self) -> Optional[Expression]:
        literal = self.cur_token.literal
        value = int(literal)
        if value > INT32_MAX:
            self.errors.append(f"could not parse {literal} as integer")
            return None
        return IntegerLiteral(value)

    def parse_boolean(self) -> Expression:
        return BooleanLiteral(self.cur_token_is(token.TRUE))

    def parse_prefix_expression(self) -> Optional[Expression]:
        operator = self.cur_token.literal
        self.next_token()
        right = self.parse_expression(PREFIX)
        if right is None:
            return None
        return PrefixExpression(operator, right)

    def parse_infix_expression(self, left: Expression) -> Optional[Expression]:
        operator = self.cur_token.literal
        precedence = self.cur_precedence()
        self.next_token()
        right = self.parse_expression(precedence)
        if right is None:
            return None
        return InfixExpression(left, operator, right)

    def parse_grouped_expression(self) -> Optional[Expression]:
        self.next_token()
        expression = self.parse_expression(LOWEST)
        if expression is None:
            return None
        if not self.expect_peek(token.RPAREN):
            return None
        return expression

    def parse_if_expression(self) -> Optional[Expression]:
        if not self.expect_peek(token.LPAREN):
            return None
        self.next_token()
        condition = self.parse_expression(LOWEST)
        if condition is None:
            return None
        if not self.expect_peek(token.RPAREN):
            return None
        if not self.expect_peek(token.LBRACE):
            return None
        consequence = self.parse_block_statement()
        if consequence is None:
            return None

        alternative = None
        if self.peek_token_is(token.ELSE):
            self.next_token()
            if not self.expect_peek(token.LBRACE):
                return None
            alternative = self.parse_block_statement()
            if alternative is None:
                return None
        return IfExpression(condition, consequence, alternative)


def parse_program(source: str) -> Tuple[Program, List[str]]:
    """Parse Monkey source into a Program and the list of syntax errors."""
    parser = Parser(Lexer(source))
    program = parser.parse_program()
    return program, parser.errors
