"""Runtime values for the Monkey interpreter.

Every evaluation step produces one of the value kinds below. `ReturnValue`
and `Error` are control values: they travel through the same channel as
ordinary results and the evaluator checks for them after each
sub-evaluation so it can stop early and hand them upward unchanged.
"""

from __future__ import annotations

from dataclasses import dataclass


INTEGER_OBJ = 'INTEGER'
BOOLEAN_OBJ = 'BOOLEAN'
NULL_OBJ = 'NULL'
RETURN_VALUE_OBJ = 'RETURN_VALUE'
ERROR_OBJ = 'ERROR'

INT32_MIN = -(1 << 31)
INT32_MAX = (1 << 31) - 1


def wrap_int(value: int) -> int:
    """Wrap a Python int into the signed 32-bit two's complement range."""
    return ((value - INT32_MIN) & 0xFFFFFFFF) + INT32_MIN


class Object:
    """Base class for all runtime values."""

    def type_name(self) -> str:
        raise NotImplementedError

    def inspect(self) -> str:
        raise NotImplementedError

    def __str__(self) -> str:
        return self.inspect()


@dataclass(frozen=True)
class Integer(Object):
    value: int

    def type_name(self) -> str:
        return INTEGER_OBJ

    def inspect(self) -> str:
        return str(self.value)


@dataclass(frozen=True)
class Boolean(Object):
    value: bool

    def type_name(self) -> str:
        return BOOLEAN_OBJ

    def inspect(self) -> str:
        return 'true' if self.value else 'false'


@dataclass(frozen=True)
class Null(Object):

    def type_name(self) -> str:
        return NULL_OBJ

    def inspect(self) -> str:
        return 'null'


@dataclass(frozen=True)
class ReturnValue(Object):
    value: Object

    def type_name(self) -> str:
        return RETURN_VALUE_OBJ

    def inspect(self) -> str:
        return self.value.inspect()


@dataclass(frozen=True)
class Error(Object):
    """A failed evaluation. Printed as its bare message."""
    message: str

    def type_name(self) -> str:
        return ERROR_OBJ

    def inspect(self) -> str:
        return self.message


TRUE = Boolean(True)
FALSE = Boolean(False)
NULL = Null()


def native_bool_to_boolean(value: bool) -> Boolean:
    return TRUE if value else FALSE


def is_truthy(value: Object) -> bool:
    # false, null and zero are falsy; everything else is truthy
    if isinstance(value, Boolean):
        return value.value
    if isinstance(value, Null):
        return False
    if isinstance(value, Integer):
        return value.value != 0
    return True


def is_control(value: Object) -> bool:
    """True for values that must stop evaluation and pass upward unchanged."""
    return isinstance(value, (Error, ReturnValue))
