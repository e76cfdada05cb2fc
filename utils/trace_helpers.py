import time
import traceback
from typing import Any, Dict, List, Sequence


def add_traceback(obj, step: str, info: str, *, with_stack: bool = False) -> None:
    """
    Append a trace event to `obj.traceback_info`.

    Parameters
    ----------
    obj        : any object that owns a `traceback_info` list.
    step, info : short label and free-form description.
    with_stack : include trimmed call-stack (default False).
    """
    if not hasattr(obj, "traceback_info"):
        raise AttributeError(f"{obj!r} has no attribute 'traceback_info'")

    event: Dict[str, Any] = {
        "step":       step,
        "info":       info,
        "timestamp":  time.time(),
    }
    if with_stack:
        # omit the last frame (this helper)
        event["stack"] = traceback.format_stack()[:-1]

    obj.traceback_info.append(event)


def describe_priorities(tokens: Sequence) -> str:
    """One-line `symbol:priority` summary of a token list, for trace events."""
    parts: List[str] = []
    for tok in tokens:
        # NEG prints as 'neg' so it cannot be mistaken for SUB
        parts.append(f"{tok.kind.value}:{tok.priority}")
    return " ".join(parts)


def last_events(obj, count: int = 5) -> List[Dict[str, Any]]:
    return list(getattr(obj, "traceback_info", [])[-count:])
