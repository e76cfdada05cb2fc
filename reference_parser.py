"""
Precedence-climbing parser over the same token alphabet.

It shares no code with the priority pass and serves as the oracle that the
priority rule sets are checked against: ``associativity='left'`` matches the
``scoped`` rule set tree for tree, ``'right'`` matches the values produced
by the ``local`` rule set.
"""
from typing import List, Sequence

from errors import MalformedInput
from priority_rules import precedence_of
from token_model import ExprBinary, ExprUnary, Operator, Token, Value


class ReferenceParser:
    """Single-use parser; call ``parse()`` once per token list."""

    def __init__(self, tokens: Sequence[Token], associativity: str = 'left'):
        if associativity not in ('left', 'right'):
            raise ValueError(f"associativity must be 'left' or 'right', got {associativity!r}")
        self.tokens: List[Token] = list(tokens)
        self.associativity = associativity
        self.pos = 0

    def peek(self):
        return self.tokens[self.pos] if self.pos < len(self.tokens) else None

    def pop(self) -> Token:
        tok = self.peek()
        if tok is None:
            raise MalformedInput("unexpected end of expression")
        self.pos += 1
        return tok

    def parse(self) -> Value:
        tree = self.expression(0)
        if self.peek() is not None:
            raise MalformedInput(f"unexpected token at position {self.pos}")
        return tree

    def operand(self) -> Value:
        tok = self.pop()
        if tok.is_value:
            return tok.kind
        if tok.kind is Operator.NEG:
            return ExprUnary(self.operand())
        raise MalformedInput(f"expected an operand at position {self.pos - 1}")

    def expression(self, min_prec: int) -> Value:
        left = self.operand()
        while True:
            tok = self.peek()
            if tok is None or not tok.is_operator or tok.kind.arity != 2:
                break
            prec = precedence_of(tok.kind)
            if prec < min_prec:
                break
            self.pop()
            next_min = prec + 1 if self.associativity == 'left' else prec
            left = ExprBinary(left, self.expression(next_min), tok.kind)
        return left


def reference_tree(tokens: Sequence[Token], associativity: str = 'left') -> Value:
    return ReferenceParser(tokens, associativity).parse()
