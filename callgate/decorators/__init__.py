"""
Decorators that change when, and how often, a function body runs.
"""

from callgate.decorators.delay import delay
from callgate.decorators.memoize import make_key, memoize
from callgate.decorators.once import once
from callgate.decorators.rate_limit import throttle

__all__ = ["delay", "make_key", "memoize", "once", "throttle"]
