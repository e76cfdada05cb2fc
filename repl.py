#!/usr/bin/env python3
"""
Interactive REPL for the priority calculator.
Type integer expressions like '3 * 2 + 5' or '-5 * 3 + -2'. Type 'quit' to exit.
"""
import os
import sys

# Add parent directory to path for imports
sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

from arithmetic_engine import IntegerArithmeticEngine
from errors import CalculatorError
from flag_bus import FlagBus
from symbolic_view import render
from tree_builder import to_infix
from utils.rule_manager import get_rule_set, presets, set_rule_set
from utils.trace_helpers import describe_priorities, last_events


def handle_command(user_input: str, state: dict) -> bool:
    """Run a REPL command; return False if *user_input* is not one."""
    lowered = user_input.lower()
    parts = lowered.split()

    #  rule-set commands  ------------------------------------------------
    if parts[0] == 'rules':
        if len(parts) == 1:
            print(f"Current rule set: {get_rule_set()} (available: {', '.join(presets())})")
        elif len(parts) == 2:
            try:
                set_rule_set(parts[1])
                print(f"Rule set changed to {parts[1]}")
            except ValueError as e:
                print(f"Error: {e}")
        else:
            print("Usage: rules [NAME]")
        return True
    if lowered == 'trace':
        state['show_trace'] = not state['show_trace']
        print(f"Traceback display: {'ON' if state['show_trace'] else 'OFF'}")
        return True
    if lowered == 'tree':
        state['show_tree'] = not state['show_tree']
        print(f"Tree display: {'ON' if state['show_tree'] else 'OFF'}")
        return True
    if lowered in ('strict', 'check'):
        flag = 'strict_ties' if lowered == 'strict' else 'cross_check'
        print(f"{flag}: {'ON' if FlagBus.toggle(flag) else 'OFF'}")
        return True
    return False


def main():
    """Run the interactive REPL."""
    print("=" * 80)
    print("Welcome to the priority calculator REPL")
    print("Type expressions (e.g., '3 * 2 + 5', '-5 * 3 + -2')")
    print("Type 'rules' to show the priority rule set, 'rules NAME' to switch", presets())
    print("Type 'tree' to toggle tree display, 'trace' to toggle traceback display")
    print("Type 'strict' to toggle strict tie checks, 'check' to toggle SymPy cross-checks")
    print("Type 'quit' to exit")

    engine = IntegerArithmeticEngine()
    state = {'show_trace': False, 'show_tree': False}

    while True:
        try:
            user_input = input("calc> ").strip()
            if not user_input:
                continue
            if user_input.lower() == 'quit':
                print("Goodbye!")
                break
            if handle_command(user_input, state):
                continue

            result = engine.compute(user_input)
            print(f"Result: {result}")

            if state['show_tree'] and engine.last_tree is not None:
                print(f"  Priorities: {describe_priorities(engine.last_tokens)}")
                print(f"  Tree:       {to_infix(engine.last_tree)}")
                print(f"  SymPy:      {render(engine.last_tree)}")

        except (KeyboardInterrupt, EOFError):
            print("\nGoodbye!")
            break
        except CalculatorError as e:
            print(f"Error: {e}")

        if state['show_trace']:
            print("\nTracebacks:")
            for trace in last_events(engine, 5):
                print(f"  {trace['step']}: {trace['info']}")


if __name__ == '__main__':
    main()
