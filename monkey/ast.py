"""Abstract Syntax Tree (AST) definitions for the Monkey language.

The parser produces a `Program` made of the statement nodes below and the
evaluator consumes it. Nodes carry no type information; every check on
operand kinds happens at evaluation time. `str(node)` renders a canonical
source form with every prefix and infix expression parenthesised, which
makes the grouping chosen by the parser visible.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional


@dataclass
class Node:
    """Base class for all AST nodes."""
    pass


@dataclass
class Statement(Node):
    pass


@dataclass
class Expression(Node):
    pass


@dataclass
class Program(Node):
    statements: List[Statement] = field(default_factory=list)

    def __str__(self) -> str:
        return ''.join(str(s) for s in self.statements)


# Expressions

@dataclass
class Identifier(Expression):
    name: str

    def __str__(self) -> str:
        return self.name


@dataclass
class IntegerLiteral(Expression):
    value: int

    def __str__(self) -> str:
        return str(self.value)


@dataclass
class BooleanLiteral(Expression):
    value: bool

    def __str__(self) -> str:
        return 'true' if self.value else 'false'


@dataclass
class PrefixExpression(Expression):
    operator: str
    right: Expression

    def __str__(self) -> str:
        return f"({self.operator}{self.right})"


@dataclass
class InfixExpression(Expression):
    left: Expression
    operator: str
    right: Expression

    def __str__(self) -> str:
        return f"({self.left} {self.operator} {self.right})"


@dataclass
class IfExpression(Expression):
    condition: Expression
    consequence: 'BlockStatement'
    alternative: Optional['BlockStatement'] = None  # None means no else branch

    def __str__(self) -> str:
        out = f"if{self.condition} {self.consequence}"
        if self.alternative is not None:
            out += f"else {self.alternative}"
        return out


# Statements

@dataclass
class LetStatement(Statement):
    name: Identifier
    value: Expression

    def __str__(self) -> str:
        return f"let {self.name} = {self.value};"


@dataclass
class ReturnStatement(Statement):
    value: Expression

    def __str__(self) -> str:
        return f"return {self.value};"


@dataclass
class ExpressionStatement(Statement):
    expression: Expression

    def __str__(self) -> str:
        return str(self.expression)


@dataclass
class BlockStatement(Statement):
    statements: List[Statement] = field(default_factory=list)

    def __str__(self) -> str:
        return ''.join(str(s) for s in self.statements)
