"""
Region Filter Module
====================

Stateless viewport filtering - restricts items to what the map shows.

Design:
- Pure function (no state)
- Stable (input order preserved)
- Invalid coordinates are excluded, never coerced or raised
"""

from typing import List, Sequence

from geomarker_cluster.geometry.shapes import GeoItem, Viewport

DEFAULT_MARGIN_PERCENT = 20.0


def filter_by_region(
    items: Sequence[GeoItem],
    viewport: Viewport,
    margin_percent: float = DEFAULT_MARGIN_PERCENT,
) -> List[GeoItem]:
    """
    Keep items inside the viewport expanded by a percentage margin.

    A positive margin pre-fetches items just off-screen so markers do not
    pop in and out while panning. Zero is the exact viewport, negative
    values shrink the box.

    Args:
        items: Items to filter
        viewport: Visible map region
        margin_percent: Expansion as a percentage of each span (default: 20)

    Returns:
        New list with the matching items, in input order
    """
    box = viewport.bounds(margin_percent)

    return [
        item
        for item in items
        if item.is_valid and box.contains(item.latitude, item.longitude)
    ]
