"""
Token model: the flat token alphabet and the expression tree it becomes.

• Tokens are flat: a ``Token`` holds either a ``Number`` or an ``Operator``,
  never a sub-expression.
• ``priority`` starts at 0 and is only touched by the priority pass.
• Tree nodes (``Number``, ``ExprBinary``, ``ExprUnary``) are frozen; each
  node owns its children exclusively.
"""
from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Union

import numpy as np

from errors import MalformedInput

I32 = np.iinfo(np.int32)


class Operator(enum.Enum):
    ADD = '+'
    SUB = '-'
    MUL = '*'
    DIV = '/'
    NEG = 'neg'

    @property
    def symbol(self) -> str:
        return '-' if self is Operator.NEG else self.value

    @property
    def arity(self) -> int:
        return 1 if self is Operator.NEG else 2

    @property
    def is_additive(self) -> bool:
        return self in (Operator.ADD, Operator.SUB)

    @property
    def is_multiplicative(self) -> bool:
        return self in (Operator.MUL, Operator.DIV)

    @classmethod
    def from_symbol(cls, symbol: str) -> 'Operator':
        """Map a binary operator symbol to its tag (``-`` maps to SUB)."""
        for op in (cls.ADD, cls.SUB, cls.MUL, cls.DIV):
            if op.value == symbol:
                return op
        raise MalformedInput(f"not an operator: {symbol!r}")

    def __repr__(self):
        return f"Operator.{self.name}"


@dataclass(frozen=True)
class Number:
    value: int

    def __post_init__(self):
        if isinstance(self.value, bool) or not isinstance(self.value, (int, np.integer)):
            raise ValueError(f"Number needs an int, got {self.value!r}")
        if not I32.min <= int(self.value) <= I32.max:
            raise MalformedInput(f"{self.value} does not fit in a 32-bit integer")
        object.__setattr__(self, 'value', int(self.value))

    @classmethod
    def parse(cls, digits: str) -> 'Number':
        """Build a Number from a run of ASCII digits."""
        if not digits or not (digits.isascii() and digits.isdigit()):
            raise MalformedInput(f"invalid integer literal: {digits!r}")
        return cls(int(digits))


@dataclass(frozen=True)
class ExprBinary:
    lhs: 'Value'
    rhs: 'Value'
    op: Operator

    def __post_init__(self):
        if self.op is Operator.NEG:
            raise ValueError("ExprBinary cannot hold the unary NEG operator")


@dataclass(frozen=True)
class ExprUnary:
    operand: 'Value'
    op: Operator = Operator.NEG

    def __post_init__(self):
        if self.op is not Operator.NEG:
            raise ValueError(f"ExprUnary only supports NEG, got {self.op!r}")


Value = Union[Number, ExprBinary, ExprUnary]


@dataclass
class Token:
    kind: Union[Number, Operator]
    priority: int = 0

    @property
    def is_operator(self) -> bool:
        return isinstance(self.kind, Operator)

    @property
    def is_value(self) -> bool:
        return isinstance(self.kind, Number)

    @property
    def operator(self) -> Operator | None:
        return self.kind if self.is_operator else None

    @property
    def number(self) -> Number | None:
        return self.kind if self.is_value else None

    @property
    def is_additive(self) -> bool:
        return self.is_operator and self.kind.is_additive


def tokens_of(*kinds: Union[int, Number, Operator]) -> list[Token]:
    """Shorthand for a fresh token list; plain ints become ``Number``s."""
    return [Token(Number(k) if isinstance(k, int) else k) for k in kinds]
