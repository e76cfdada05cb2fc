"""
Error taxonomy for the priority calculator.

Every failure is fatal for the evaluation that raised it; nothing is
recovered or retried. Callers that want a single catch point use
``CalculatorError``.
"""
from typing import Sequence


class CalculatorError(Exception):
    """Base class for every calculator failure."""


class MalformedInput(CalculatorError, ValueError):
    """Token sequence (or source text) breaks the value/operator alternation."""


class ArithmeticFault(CalculatorError, ArithmeticError):
    """Division by zero or a result outside the 32-bit signed range."""


class PriorityTieAmbiguity(CalculatorError):
    """Two or more tokens share the minimum priority of a range."""

    def __init__(self, indices: Sequence[int], priority: int):
        self.indices = tuple(indices)
        self.priority = priority
        super().__init__(
            f"priority {priority} is shared by tokens at {list(self.indices)}"
        )
