"""Site-wide summary statistics computed straight from a record list."""

from __future__ import annotations

from typing import Callable

from sitearch.engine.models import IN_PROGRESS_STATUSES, PageRecord, PageStatus, WebsiteStats


def _group_counts(
    records: list[PageRecord],
    key: Callable[[PageRecord], str],
    fallback: str,
) -> dict[str, int]:
    """Count *records* by ``key(record)``, ignoring case.

    The returned label for each group is the first spelling seen, so
    "Blog" and "blog" land in one bucket shown as whichever came first.
    """
    labels: dict[str, str] = {}
    counts: dict[str, int] = {}
    for record in records:
        value = key(record).strip() or fallback
        norm = value.lower()
        labels.setdefault(norm, value)
        counts[norm] = counts.get(norm, 0) + 1
    return {labels[norm]: count for norm, count in counts.items()}


def progress_percent(live: int, total: int) -> int:
    """Return ``round(100 * live / total)`` rounding halves up; ``0`` when *total* is 0."""
    if total <= 0:
        return 0
    return (200 * live + total) // (2 * total)


def compute_stats(records: list[PageRecord]) -> WebsiteStats:
    """Summarise *records*: totals, status buckets and type/intent/priority counts."""
    total = len(records)
    live = sum(1 for r in records if r.status == PageStatus.LIVE)
    planned = sum(1 for r in records if r.status == PageStatus.PLANNED)
    in_progress = sum(1 for r in records if r.status in IN_PROGRESS_STATUSES)

    return WebsiteStats(
        total=total,
        total_volume=sum(r.search_volume for r in records),
        live=live,
        in_progress=in_progress,
        planned=planned,
        progress_percent=progress_percent(live, total),
        by_type=_group_counts(records, lambda r: r.page_type, "Other"),
        by_intent=_group_counts(records, lambda r: r.intent, "Other"),
        by_priority=_group_counts(records, lambda r: r.priority, "P2"),
    )
