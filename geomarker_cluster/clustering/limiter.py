"""
Primitive Limiter Module
========================

Caps the number of primitives handed to the map renderer.

Design:
- Pure function, keeps the first N in input order
- No priority weighting: callers that need one sort before limiting
"""

from typing import Sequence, TypeVar

T = TypeVar("T")

DEFAULT_MAX_MARKERS = 50


def limit(items: Sequence[T], max_items: int = DEFAULT_MAX_MARKERS) -> Sequence[T]:
    """
    Truncate to at most max_items elements.

    Args:
        items: Primitives in render priority order
        max_items: Maximum number to keep (default: 50)

    Returns:
        The input itself (same object and type) when it already fits,
        otherwise a list of its first max_items elements; empty list when
        max_items <= 0
    """
    if max_items <= 0:
        return []
    if len(items) <= max_items:
        return items
    return list(items[:max_items])
