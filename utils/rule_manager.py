"""
Central rule-set switch for the whole calculator stack.
REPL (or tests) may call set_rule_set(name) to change how priorities are
assigned; the priority pass only *reads* the current value through
get_rule_set().
"""
from typing import List

_PRESETS: List[str] = ['local', 'scoped']   # default first
_CURRENT = _PRESETS[0]


def get_rule_set() -> str:
    """Return the active priority rule set."""
    return _CURRENT


def set_rule_set(name: str) -> None:
    """Set the global rule set if name is one of the known presets."""
    global _CURRENT
    if name not in _PRESETS:
        raise ValueError(f"rule set {name!r} not allowed; choose one of {_PRESETS}")
    _CURRENT = name


def reset_rule_set() -> None:
    global _CURRENT
    _CURRENT = _PRESETS[0]


def presets() -> List[str]:
    return _PRESETS.copy()
