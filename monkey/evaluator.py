"""Tree-walking evaluator for the Monkey language.

`Evaluator.evaluate` maps every AST node to a runtime value. Failures are
not raised: they come back as `Error` values, and `return` produces a
`ReturnValue` wrapper. Both are checked after every sub-evaluation so that
the first one produced stops the statement sequence it occurs in and
becomes the result of every enclosing step. A `ReturnValue` reaching the
top of a program is unwrapped before it is handed to the caller.

Variable bindings live in an `Environment` that is passed by reference, so
a binding made by one statement is visible to the statements after it and,
when the caller reuses the environment, to later programs as well.
"""

from __future__ import annotations

from typing import List, Optional, TextIO

from .ast import (
    Node, Program, Statement, LetStatement, ReturnStatement,
    ExpressionStatement, BlockStatement, Identifier, IntegerLiteral,
    BooleanLiteral, PrefixExpression, InfixExpression, IfExpression,
)
from .environment import Environment
from .object import (
    Object, Integer, Boolean, ReturnValue, Error, NULL,
    native_bool_to_boolean, is_truthy, is_control, wrap_int,
)


class Evaluator:
    """Evaluates Monkey AST nodes against an environment."""
    def __init__(self, debug_level: int = 0, debug_file: str = 'debug.txt'):
        self.debug_level = debug_level
        self.debug_fp: Optional[TextIO] = (
            open(debug_file, 'w', encoding='utf-8') if debug_level > 0 else None
        )

    def debug(self, msg: str):
        if self.debug_level > 0:
            if self.debug_fp:
                self.debug_fp.write(msg + '\n')
                self.debug_fp.flush()

    def close(self):
        if self.debug_fp:
            self.debug_fp.close()
            self.debug_fp = None

    # Public API
    def run(self, program: Program, env: Optional[Environment] = None) -> Object:
        if env is None:
            env = Environment()
        if self.debug_level >= 1:
            self.debug(f"run program: {program}")
        result = self.evaluate(program, env)
        if self.debug_level >= 1:
            self.debug(f"result: {result.type_name()} {result.inspect()}")
        return result

    def evaluate(self, node: Node, env: Environment) -> Object:
        # Statements
        if isinstance(node, Program):
            return self.eval_program(node.statements, env)
        if isinstance(node, BlockStatement):
            return self.eval_block_statement(node.statements, env)
        if isinstance(node, ExpressionStatement):
            return self.evaluate(node.expression, env)
        if isinstance(node, ReturnStatement):
            value = self.evaluate(node.value, env)
            if is_control(value):
                return value
            return ReturnValue(value)
        if isinstance(node, LetStatement):
            value = self.evaluate(node.value, env)
            if is_control(value):
                return value
            env.set(node.name.name, value)
            if self.debug_level >= 2:
                self.debug(f"let {node.name.name}: {value.type_name()} = {value.inspect()}")
            return value

        # Expressions
        if isinstance(node, IntegerLiteral):
            return Integer(node.value)
        if isinstance(node, BooleanLiteral):
            return native_bool_to_boolean(node.value)
        if isinstance(node, Identifier):
            return self.eval_identifier(node, env)
        if isinstance(node, PrefixExpression):
            right = self.evaluate(node.right, env)
            if is_control(right):
                return right
            return self.eval_prefix_expression(node.operator, right)
        if isinstance(node, InfixExpression):
            left = self.evaluate(node.left, env)
            if is_control(left):
                return left
            right = self.evaluate(node.right, env)
            if is_control(right):
                return right
            return self.eval_infix_expression(node.operator, left, right)
        if isinstance(node, IfExpression):
            return self.eval_if_expression(node, env)
        raise NotImplementedError(f"evaluate: unexpected node type {type(node)}")

    def eval_program(self, statements: List[Statement], env: Environment) -> Object:
        result: Object = NULL
        for stmt in statements:
            result = self.evaluate(stmt, env)
            if isinstance(result, ReturnValue):
                return result.value
            if isinstance(result, Error):
                return result
        return result

    def eval_block_statement(self, statements: List[Statement], env: Environment) -> Object:
        result: Object = NULL
        for stmt in statements:
            result = self.evaluate(stmt, env)
            # leave ReturnValue wrapped so enclosing blocks stop too
            if is_control(result):
                return result
        return result

    def eval_identifier(self, node: Identifier, env: Environment) -> Object:
        value = env.get(node.name)
        if value is None:
            return Error(f"identifier not found: {node.name}")
        return value

    def eval_if_expression(self, node: IfExpression, env: Environment) -> Object:
        condition = self.evaluate(node.condition, env)
        if is_control(condition):
            return condition
        truthy = is_truthy(condition)
        if self.debug_level >= 3:
            self.debug(f"if condition {condition.inspect()} -> {truthy}")
        if truthy:
            return self.evaluate(node.consequence, env)
        if node.alternative is not None:
            return self.evaluate(node.alternative, env)
        return NULL

    def eval_prefix_expression(self, operator: str, right: Object) -> Object:
        if operator == '!':
            return native_bool_to_boolean(not is_truthy(right))
        if operator == '-':
            if not isinstance(right, Integer):
                return Error(f"unknown operator: -{right.type_name()}")
            return Integer(wrap_int(-right.value))
        return Error(f"unknown operator: {operator}{right.type_name()}")

    def eval_infix_expression(self, operator: str, left: Object, right: Object) -> Object:
        if self.debug_level >= 3:
            self.debug(f"apply {left.inspect()} {operator} {right.inspect()}")
        if isinstance(left, Integer) and isinstance(right, Integer):
            return self.eval_integer_infix_expression(operator, left, right)
        if left.type_name() != right.type_name():
            return Error(f"type mismatch: {left.type_name()} {operator} {right.type_name()}")
        if isinstance(left, Boolean) and isinstance(right, Boolean):
            if operator == '==':
                return native_bool_to_boolean(left.value == right.value)
            if operator == '!=':
                return native_bool_to_boolean(left.value != right.value)
        return Error(f"unknown operator: {left.type_name()} {operator} {right.type_name()}")

    def eval_integer_infix_expression(self, operator: str, left: Integer, right: Integer) -> Object:
        a = left.value
        b = right.value
        if operator == '+':
            return Integer(wrap_int(a + b))
        if operator == '-':
            return Integer(wrap_int(a - b))
        if operator == '*':
            return Integer(wrap_int(a * b))
        if operator == '/':
            if b == 0:
                return Error('division by zero')
            # integer division truncating toward zero
            quotient = abs(a) // abs(b)
            if (a < 0) != (b < 0):
                quotient = -quotient
            return Integer(wrap_int(quotient))
        if operator == '<':
            return native_bool_to_boolean(a < b)
        if operator == '>':
            return native_bool_to_boolean(a > b)
        if operator == '==':
            return native_bool_to_boolean(a == b)
        if operator == '!=':
            return native_bool_to_boolean(a != b)
        return Error(f"unknown operator: {left.type_name()} {operator} {right.type_name()}")


def evaluate(node: Node, env: Environment) -> Object:
    """Evaluate `node` in `env` without tracing."""
    return Evaluator().evaluate(node, env)
