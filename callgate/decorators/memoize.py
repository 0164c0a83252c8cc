"""
Result cache for pure functions of primitive arguments.
"""

import functools
import math
import threading
from typing import Any, Callable, Dict, Hashable, Tuple

from callgate.utils.logger import get_logger

logger = get_logger(__name__)

ArgumentKey = Tuple[Hashable, ...]

# NaN never equals itself, so every NaN shares this slot value instead.
_NAN = object()


def _slot(value: Any) -> Any:
    if isinstance(value, float) and math.isnan(value):
        return _NAN
    return value


def make_key(args: Tuple[Any, ...], kwargs: Dict[str, Any]) -> ArgumentKey:
    """
    Derive a cache key from a call's arguments.

    Each value is paired with its type, so 1, 1.0, True and "1" get distinct
    keys even though some of them compare equal. Every float NaN maps to the
    same key. Keyword arguments are sorted by name, so their order at the
    call site does not matter.

    Raises:
        TypeError: If an argument is unhashable.
    """
    key: Tuple[Hashable, ...] = tuple((type(arg), _slot(arg)) for arg in args)
    if kwargs:
        key += (("kwargs",),) + tuple(
            (name, type(value), _slot(value)) for name, value in sorted(kwargs.items())
        )
    hash(key)
    return key


def memoize(func: Callable) -> Callable:
    """
    Cache func's results by argument.

    func is assumed pure and called with hashable, primitive-like arguments;
    neither is checked. The cache never evicts.

    Args:
        func: The function whose results to cache.

    Returns:
        A wrapper that runs func once per distinct argument list.
    """
    if not callable(func):
        raise TypeError(f"memoize() expects a callable, got {func!r}")

    name = getattr(func, "__qualname__", repr(func))
    lock = threading.RLock()
    entries: Dict[ArgumentKey, Any] = {}

    @functools.wraps(func)
    def wrapped(*args, **kwargs):
        key = make_key(args, kwargs)
        with lock:
            if key in entries:
                return entries[key]
            logger.debug(f"memoize: cache miss for {name}{args}")
            value = func(*args, **kwargs)
            # A recursive call may have filled the slot already; keep the first.
            return entries.setdefault(key, value)

    return wrapped
