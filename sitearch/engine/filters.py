"""Narrow a record list before it is built into a tree for display."""

from __future__ import annotations

from typing import Optional

from sitearch.engine.models import PageRecord

# Location value the UI sends for "no location filter".
ALL_LOCATIONS = "all"


def _matches_text(record: PageRecord, query: str) -> bool:
    return (
        query in record.full_url_path.lower()
        or query in record.primary_keyword.lower()
        or query in record.cluster_name.lower()
    )


def filter_records(
    records: list[PageRecord],
    text: Optional[str] = None,
    location: Optional[str] = None,
) -> list[PageRecord]:
    """Return the records matching both *location* and *text*.

    Args:
        records: The base list.  It is never modified.
        text: Case-insensitive substring searched in the URL path, primary
            keyword and cluster name.  Blank or ``None`` disables it.
        location: Keep only paths under ``/{location}/``.  Blank, ``None`` or
            ``"all"`` disables it.

    Returns:
        A new list, in the original order.
    """
    result = list(records)

    location = (location or "").strip().strip("/")
    if location and location != ALL_LOCATIONS:
        prefix = f"/{location}/"
        result = [r for r in result if r.full_url_path.startswith(prefix)]

    query = (text or "").strip().lower()
    if query:
        result = [r for r in result if _matches_text(r, query)]

    return result
