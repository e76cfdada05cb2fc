#!/usr/bin/env python3
"""
Tree construction tests: root search, tie policy, malformed ranges and the
flatten / infix round trip.
"""
import os
import sys
import unittest

# Add parent directory to path for imports
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from errors import MalformedInput, PriorityTieAmbiguity
from flag_bus import FlagBus
from priority_rules import RULE_SETS, parse_priorities
from token_model import ExprBinary, ExprUnary, Number, Operator, Token, tokens_of
from tokenizer import build_token_list
from tree_builder import build_tree, find_root, flatten_tree, to_infix

ADD, SUB, MUL, DIV, NEG = Operator.ADD, Operator.SUB, Operator.MUL, Operator.DIV, Operator.NEG


def with_priorities(kinds, prios):
    tokens = tokens_of(*kinds)
    for tok, prio in zip(tokens, prios):
        tok.priority = prio
    return tokens


class Tracer:
    def __init__(self):
        self.traceback_info = []


class RootSearchTests(unittest.TestCase):
    def test_unique_minimum(self):
        self.assertEqual(find_root(with_priorities([3, ADD, 2], [1, 0, 1])), (1, False))

    def test_lowest_index_wins_ties(self):
        self.assertEqual(find_root(with_priorities([8, DIV, 2, DIV, 2], [1, 0, 2, 0, 1])), (1, True))

    def test_tie_above_minimum_is_not_a_tie(self):
        self.assertEqual(find_root(with_priorities([1, ADD, 2], [1, 0, 1])), (1, False))

    def test_empty(self):
        with self.assertRaises(MalformedInput):
            find_root([])


class BuildTreeTests(unittest.TestCase):
    def tearDown(self):
        FlagBus.reset()

    def test_single_value(self):
        self.assertEqual(build_tree(tokens_of(4)), Number(4))

    def test_simple_addition(self):
        tokens = with_priorities([3, ADD, 2], [1, 0, 1])
        self.assertEqual(build_tree(tokens), ExprBinary(Number(3), Number(2), ADD))

    def test_product_then_sum(self):
        tokens = with_priorities([3, MUL, 2, ADD, 5], [2, 1, 2, 0, 1])
        self.assertEqual(
            build_tree(tokens),
            ExprBinary(ExprBinary(Number(3), Number(2), MUL), Number(5), ADD),
        )

    def test_negation_takes_rest_of_range(self):
        tokens = with_priorities([NEG, 5], [0, 1])
        self.assertEqual(build_tree(tokens), ExprUnary(Number(5)))

    def test_build_does_not_mutate_priorities(self):
        tokens = with_priorities([3, MUL, 2, ADD, 5], [2, 1, 2, 0, 1])
        build_tree(tokens)
        self.assertEqual([t.priority for t in tokens], [2, 1, 2, 0, 1])

    def test_tie_resolved_by_lowest_index(self):
        tokens = with_priorities([8, DIV, 2, DIV, 2], [1, 0, 2, 0, 1])
        self.assertEqual(
            build_tree(tokens),
            ExprBinary(Number(8), ExprBinary(Number(2), Number(2), DIV), DIV),
        )

    def test_tie_recorded_on_tracer(self):
        tracer = Tracer()
        build_tree(with_priorities([8, DIV, 2, DIV, 2], [1, 0, 2, 0, 1]), tracer=tracer)
        self.assertEqual([e["step"] for e in tracer.traceback_info], ["priority_tie"])
        self.assertIn("[1, 3]", tracer.traceback_info[0]["info"])

    def test_strict_ties(self):
        tokens = with_priorities([8, DIV, 2, DIV, 2], [1, 0, 2, 0, 1])
        with self.assertRaises(PriorityTieAmbiguity) as ctx:
            build_tree(tokens, strict_ties=True)
        self.assertEqual(ctx.exception.indices, (1, 3))
        self.assertEqual(ctx.exception.priority, 0)

    def test_strict_ties_from_flag_bus(self):
        FlagBus.set("strict_ties", True)
        with self.assertRaises(PriorityTieAmbiguity):
            build_tree(with_priorities([8, DIV, 2, DIV, 2], [1, 0, 2, 0, 1]))
        # explicit argument wins over the flag
        build_tree(with_priorities([8, DIV, 2, DIV, 2], [1, 0, 2, 0, 1]), strict_ties=False)

    def test_tie_indices_are_absolute(self):
        # tie sits inside the right operand of the root '+'
        tokens = with_priorities([1, ADD, 2, MUL, 3, MUL, 4], [1, 0, 2, 1, 3, 1, 2])
        with self.assertRaises(PriorityTieAmbiguity) as ctx:
            build_tree(tokens, strict_ties=True)
        self.assertEqual(ctx.exception.indices, (3, 5))


class MalformedTreeTests(unittest.TestCase):
    def test_empty(self):
        with self.assertRaises(MalformedInput):
            build_tree([])

    def test_adjacent_values(self):
        with self.assertRaises(MalformedInput):
            build_tree(tokens_of(3, 4))
        with self.assertRaises(MalformedInput):
            build_tree(with_priorities([3, 4], [1, 0]))

    def test_missing_right_operand(self):
        with self.assertRaises(MalformedInput):
            build_tree(with_priorities([3, ADD], [1, 0]))

    def test_missing_left_operand(self):
        with self.assertRaises(MalformedInput):
            build_tree(with_priorities([ADD, 3], [0, 1]))

    def test_negation_after_value(self):
        with self.assertRaises(MalformedInput):
            build_tree(with_priorities([5, NEG, 3], [1, 0, 1]))


class RoundTripTests(unittest.TestCase):
    EXPRESSIONS = [
        "7",
        "3 + 2",
        "3 * 2 + 5",
        "-5 * 3 + -2",
        "1 - 2 - 3",
        "8 / 2 / 2",
        "3*-5+6+-3",
        "--4 * 2 - -1 / 3 + 9",
    ]

    def test_flatten_reproduces_token_kinds(self):
        for rule_set in RULE_SETS:
            for expr in self.EXPRESSIONS:
                tokens = build_token_list(expr)
                parse_priorities(tokens, rule_set)
                flat = flatten_tree(build_tree(tokens))
                self.assertEqual([t.kind for t in flat], [t.kind for t in tokens], msg=(rule_set, expr))
                self.assertTrue(all(t.priority == 0 for t in flat))

    def test_flatten_prebuilt_tree(self):
        tree = ExprBinary(Number(12), ExprBinary(Number(3), Number(5), ADD), MUL)
        self.assertEqual(flatten_tree(tree), tokens_of(12, MUL, 3, ADD, 5))

    def test_to_infix(self):
        tokens = build_token_list("3 * 2 + 5")
        parse_priorities(tokens, "local")
        self.assertEqual(to_infix(build_tree(tokens)), "((3 * 2) + 5)")

    def test_to_infix_shows_grouping_per_rule_set(self):
        rendered = {}
        for rule_set in RULE_SETS:
            tokens = build_token_list("-5 * 3 + -2")
            parse_priorities(tokens, rule_set)
            rendered[rule_set] = to_infix(build_tree(tokens))
        self.assertEqual(rendered["scoped"], "((-5 * 3) + -2)")
        self.assertEqual(rendered["local"], "(-(5 * 3) + -2)")

    def test_rejects_foreign_objects(self):
        with self.assertRaises(TypeError):
            flatten_tree(Token(Number(1)))
        with self.assertRaises(TypeError):
            to_infix(3)


if __name__ == "__main__":
    unittest.main()
