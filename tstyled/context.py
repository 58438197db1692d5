"""
Resolve the internal context of a styling function.

A styling function resolves every callable token by calling it with its
own context (`tw`, `theme`, `tag`). Styled components need that context to
evaluate style factories before the final class string is composed.
"""

import logging
import weakref

from .protocols import StylingFunction


logger = logging.getLogger(__name__)


_context_cache: weakref.WeakKeyDictionary[StylingFunction, object] = (
    weakref.WeakKeyDictionary()
)


def _probe(tw: StylingFunction) -> object | None:
    """Ask the styling function for its context via a throwaway callable token."""
    captured = []

    def capture(context):
        captured.append(context)
        # Empty token, nothing gets emitted.
        return ""

    tw(capture)
    if not captured:
        logger.debug("Styling function %r never resolved the probe token.", tw)
        return None
    return captured[0]


def get_context(tw: StylingFunction) -> object | None:
    """
    Get the context of the given styling function.

    Styling functions that expose `get_context()` are asked directly,
    everything else is probed once and cached for as long as the styling
    function is alive.
    """
    get = getattr(tw, "get_context", None)
    if callable(get):
        return get()
    try:
        return _context_cache[tw]
    except KeyError:
        pass
    except TypeError:
        # Not weakly referencable (ie. a bound method), probe every time.
        return _probe(tw)
    context = _probe(tw)
    if context is not None:
        _context_cache[tw] = context
        logger.debug("Cached styling context for %r.", tw)
    return context


def clear_context_cache() -> None:
    _context_cache.clear()
