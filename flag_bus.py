"""
Global flag registry for the whole calculator stack.

Any module can do:
    from flag_bus import FlagBus
    FlagBus.set('strict_ties', True)
    if FlagBus.get('cross_check'):
        ...
Flags are plain module-level state; the calculator is single-threaded.
"""
from typing import Any, Dict

_DEFAULTS: Dict[str, Any] = {
    # raise PriorityTieAmbiguity instead of taking the lowest index
    'strict_ties': False,
    # re-evaluate every tree through sympy and compare
    'cross_check': False,
}


class _FlagBusImpl:
    _flags: Dict[str, Any] = dict(_DEFAULTS)

    # ––– basic get/set –––
    @classmethod
    def get(cls, key: str, default: Any = None) -> Any:
        return cls._flags.get(key, default)

    @classmethod
    def set(cls, key: str, value: Any) -> None:
        cls._flags[key] = value

    @classmethod
    def toggle(cls, key: str) -> bool:
        cls._flags[key] = not cls._flags.get(key, False)
        return cls._flags[key]

    @classmethod
    def reset(cls) -> None:
        cls._flags = dict(_DEFAULTS)


# public alias
FlagBus = _FlagBusImpl
