from abc import ABC, abstractmethod
from typing import List, Optional

from errors import CalculatorError, MalformedInput
from evaluator import evaluate
from flag_bus import FlagBus
from priority_rules import parse_priorities
from symbolic_view import evaluate_symbolic
from token_model import Token, Value
from tokenizer import build_token_list
from tree_builder import build_tree, to_infix
from utils.rule_manager import get_rule_set
from utils.trace_helpers import add_traceback, describe_priorities


class MathEngine(ABC):
    """Abstract base class for calculator engines: text in, number out, with a step trace."""

    def __init__(self):
        self.traceback_info: List[dict] = []

    def _add_traceback(self, step: str, info: str, *, with_stack: bool = False):
        add_traceback(self, step, info, with_stack=with_stack)

    @abstractmethod
    def compute(self, expr: str):
        pass


class IntegerArithmeticEngine(MathEngine):
    """Signed 32-bit integer arithmetic: + - * / and prefix negation, no parentheses.

    Pipeline: tokenize -> assign priorities -> split into a tree -> evaluate.
    *rule_set* pins the priority rules for this engine; when None the active
    rule set of utils.rule_manager is read on every call.
    """

    def __init__(self, rule_set: Optional[str] = None):
        super().__init__()
        self.rule_set = rule_set
        self.last_tokens: List[Token] = []
        self.last_tree: Optional[Value] = None

    @property
    def active_rule_set(self) -> str:
        return self.rule_set or get_rule_set()

    def parse(self, expr: str) -> Value:
        """Return the expression tree for *expr* without evaluating it."""
        tokens = build_token_list(expr)
        self._add_traceback('tokenize', f'{len(tokens)} tokens')
        return self.build(tokens)

    def build(self, tokens: List[Token]) -> Value:
        """Assign priorities to *tokens* in place and build their tree."""
        parse_priorities(tokens, self.active_rule_set)
        self.last_tokens = tokens
        self._add_traceback('priorities',
                            f'[{self.active_rule_set}] {describe_priorities(tokens)}')
        tree = build_tree(tokens, tracer=self)
        self.last_tree = tree
        self._add_traceback('tree', to_infix(tree))
        return tree

    def compute_tokens(self, tokens: List[Token]) -> int:
        return self._evaluate(self.build(tokens))

    def compute(self, expr: str) -> int:
        """Parse and evaluate *expr*; every failure is a CalculatorError.

        The trace only holds the events of the latest call.
        """
        self.traceback_info.clear()
        self._add_traceback('compute_start', f'Expr: {expr}')
        try:
            try:
                return self._evaluate(self.parse(expr))
            except RecursionError:
                # tree building and evaluation recurse once per nesting level
                raise MalformedInput("expression nests too deeply") from None
        except CalculatorError as e:
            self._add_traceback('error', f'{type(e).__name__}: {e}', with_stack=True)
            raise

    def _evaluate(self, tree: Value) -> int:
        result = evaluate(tree)
        self._add_traceback('evaluate', f'Result = {result}')
        if FlagBus.get('cross_check', False):
            symbolic = evaluate_symbolic(tree)
            self._add_traceback('cross_check', f'SymPy = {symbolic}')
            if symbolic != result:
                raise CalculatorError(
                    f"evaluator and SymPy disagree on {to_infix(tree)}: {result} != {symbolic}"
                )
        return result


def calculate(expr: str, rule_set: Optional[str] = None) -> int:
    """One-shot helper: evaluate *expr* with a throwaway engine."""
    return IntegerArithmeticEngine(rule_set).compute(expr)
