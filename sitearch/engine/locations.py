"""Location codes for multi-location sites.

The first path segment is treated as a market/region code (``/uk/...``,
``/de/...``) whenever the path has at least one more segment after it.
"""

from __future__ import annotations

from sitearch.engine.models import PageRecord


def location_segments(records: list[PageRecord]) -> list[str]:
    """Return the distinct location codes used in *records*, in first-seen order.

    Single-segment paths such as ``/about`` have no location prefix and are
    ignored.
    """
    seen: dict[str, None] = {}
    for record in records:
        segments = record.segments
        if len(segments) >= 2:
            seen.setdefault(segments[0], None)
    return list(seen)
