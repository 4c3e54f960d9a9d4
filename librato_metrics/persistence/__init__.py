"""
Persistence strategies and the registry that maps mode names to them.
"""

from typing import Dict, List, Type

from librato_metrics.errors import UnknownPersistenceError
from .base import Persister
from .direct import Direct, split_payload
from .test import Test

_PERSISTERS: Dict[str, Type[Persister]] = {
    "direct": Direct,
    "test": Test,
}


def register_persister(mode: str, persister_class: Type[Persister]) -> None:
    """
    Register (or replace) the persister used for ``mode``.
    """
    if not mode:
        raise ValueError("Persistence mode must not be empty")
    if not (isinstance(persister_class, type) and issubclass(persister_class, Persister)):
        raise TypeError(f"{persister_class!r} is not a Persister subclass")

    _PERSISTERS[mode] = persister_class


def unregister_persister(mode: str) -> None:
    _PERSISTERS.pop(mode, None)


def available_modes() -> List[str]:
    return sorted(_PERSISTERS)


def lookup(mode: str) -> Type[Persister]:
    """
    Find the persister class registered for ``mode``.

    Raises:
        UnknownPersistenceError: If nothing is registered under ``mode``.
    """
    try:
        return _PERSISTERS[mode]
    except (KeyError, TypeError):
        raise UnknownPersistenceError(mode=mode) from None


__all__ = [
    "Persister",
    "Direct",
    "Test",
    "split_payload",
    "lookup",
    "register_persister",
    "unregister_persister",
    "available_modes",
]
