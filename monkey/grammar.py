"""Reference grammar for the Monkey language.

This module describes the same language as the hand-written Pratt parser
in `monkey.parser`, but as a declarative Lark grammar. The parse tree is
turned into the very same AST classes by `ASTTransformer`, so both front
ends can be swapped freely and their trees compared node for node.

Operator precedence is encoded by rule stratification (equality, then
relational, then sum, then product, then unary) and each level folds its
operands to the left. The only grammar conflict comes from the optional
statement terminator: after `a` the parser may either end the statement
or continue with `- b`. LALR resolves it by shifting, which is also what
the Pratt parser does.

Unlike the Pratt parser, Lark stops at the first syntax error, so at most
one message is reported per run.
"""

from __future__ import annotations

from typing import List, Tuple

from lark import Lark, Transformer
from lark.exceptions import UnexpectedCharacters, UnexpectedEOF, UnexpectedInput, UnexpectedToken

from .ast import (
    Program, LetStatement, ReturnStatement, ExpressionStatement,
    BlockStatement, Identifier, IntegerLiteral, BooleanLiteral,
    PrefixExpression, InfixExpression, IfExpression,
)
from .object import INT32_MAX


MONKEY_GRAMMAR = r"""
    ?start: program
    program: _statement*

    _statement: let_stmt
              | return_stmt
              | expr_stmt

    let_stmt: "let" IDENT "=" expression ";"?
    return_stmt: "return" expression ";"?
    expr_stmt: expression ";"?

    block: "{" _statement* "}"

    // Expressions with precedence
    ?expression: equality
    ?equality: relational ((EQ | NOT_EQ) relational)*
    ?relational: sum ((LT | GT) sum)*
    ?sum: product ((PLUS | MINUS) product)*
    ?product: unary ((ASTERISK | SLASH) unary)*
    ?unary: (BANG | MINUS) unary
          | primary
    ?primary: INT -> integer
            | "true" -> true
            | "false" -> false
            | IDENT -> identifier
            | "(" expression ")"
            | if_expr

    if_expr: "if" "(" expression ")" block ("else" block)?

    // Tokens
    // One terminal per operator so "-" means the same token in both
    // binary and prefix position
    EQ: "=="
    NOT_EQ: "!="
    LT: "<"
    GT: ">"
    PLUS: "+"
    MINUS: "-"
    ASTERISK: "*"
    SLASH: "/"
    BANG: "!"
    INT: /[0-9]+/
    IDENT: /[A-Za-z_][A-Za-z0-9_]*/

    %ignore /[ \t\r\n]+/
"""


MONKEY_PARSER = Lark(
    MONKEY_GRAMMAR,
    parser='lalr',
    propagate_positions=True,
    maybe_placeholders=False,
    lexer='contextual',
)


class ASTTransformer(Transformer):
    """Transforms the raw parse tree into an AST."""

    def __init__(self):
        super().__init__()
        self.errors: List[str] = []

    def program(self, items):
        return Program(statements=list(items))

    def let_stmt(self, items):
        name = Identifier(str(items[0]))
        return LetStatement(name=name, value=items[1])

    def return_stmt(self, items):
        return ReturnStatement(items[0])

    def expr_stmt(self, items):
        return ExpressionStatement(items[0])

    def block(self, items):
        return BlockStatement(statements=list(items))

    def if_expr(self, items):
        condition = items[0]
        consequence = items[1]
        alternative = items[2] if len(items) > 2 else None
        return IfExpression(condition, consequence, alternative)

    def fold_infix(self, items):
        # items pattern: expr ( op expr )*, folded to the left
        left = items[0]
        i = 1
        while i < len(items):
            op = items[i]
            right = items[i + 1]
            left = InfixExpression(left, str(op), right)
            i += 2
        return left

    def equality(self, items):
        return self.fold_infix(items)

    def relational(self, items):
        return self.fold_infix(items)

    def sum(self, items):
        return self.fold_infix(items)

    def product(self, items):
        return self.fold_infix(items)

    def unary(self, items):
        return PrefixExpression(str(items[0]), items[1])

    def integer(self, items):
        literal = str(items[0])
        value = int(literal)
        if value > INT32_MAX:
            self.errors.append(f"could not parse {literal} as integer")
        return IntegerLiteral(value)

    def true(self, items):
        return BooleanLiteral(True)

    def false(self, items):
        return BooleanLiteral(False)

    def identifier(self, items):
        return Identifier(str(items[0]))


def describe_error(e: UnexpectedInput) -> str:
    """Render a Lark syntax exception as a single error line."""
    if isinstance(e, UnexpectedCharacters):
        return f"illegal character {e.char!r} at {e.line}:{e.column}"
    if isinstance(e, UnexpectedEOF):
        return "unexpected end of input"
    if isinstance(e, UnexpectedToken):
        if e.token.type == '$END':
            return "unexpected end of input"
        expected = ', '.join(sorted(e.expected))
        return (f"unexpected token {e.token.type} {str(e.token)!r} at "
                f"{e.line}:{e.column}, expected one of {expected}")
    return str(e)


def parse_program(source: str) -> Tuple[Program, List[str]]:
    """Parse Monkey source with the reference grammar.

    Returns the Program and a list of error messages. On a syntax error the
    Program is empty and the list holds exactly one message.
    """
    try:
        tree = MONKEY_PARSER.parse(source)
    except UnexpectedInput as e:
        return Program(), [describe_error(e)]
    transformer = ASTTransformer()
    program = transformer.transform(tree)
    return program, transformer.errors
