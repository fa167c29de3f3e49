"""Merge a freshly imported record list into a previously stored one.

An import is a wholesale replace keyed by ``full_url_path``: the imported
list becomes the new list, admin-owned fields (``status``, ``notes``) are
carried forward for every path that already existed, and stored pages whose
path is missing from the import are dropped.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field, replace

from sitearch.engine.models import PageRecord

logger = logging.getLogger(__name__)


@dataclass
class ImportSummary:
    """What an import will do to a stored list, by path."""

    added: list[str] = field(default_factory=list)
    kept: list[str] = field(default_factory=list)
    removed: list[str] = field(default_factory=list)

    @property
    def is_destructive(self) -> bool:
        return bool(self.removed)

    def to_dict(self) -> dict[str, list[str]]:
        return {"added": self.added, "kept": self.kept, "removed": self.removed}


def _unique(paths: list[str]) -> list[str]:
    return list(dict.fromkeys(paths))


def reconcile(existing: list[PageRecord], incoming: list[PageRecord]) -> list[PageRecord]:
    """Return *incoming* with ``status``/``notes`` copied from matching *existing* pages.

    Output order follows *incoming*.  Neither input list, nor any record in
    them, is mutated.
    """
    by_path = {page.full_url_path: page for page in existing}

    merged: list[PageRecord] = []
    carried = 0
    for page in incoming:
        match = by_path.get(page.full_url_path)
        if match is None:
            merged.append(replace(page, secondary_keywords=list(page.secondary_keywords)))
        else:
            carried += 1
            merged.append(replace(
                page,
                secondary_keywords=list(page.secondary_keywords),
                status=match.status,
                notes=match.notes,
            ))

    dropped = len(set(by_path) - {page.full_url_path for page in incoming})
    logger.info(
        "[reconcile] %d incoming, %d carried forward, %d dropped",
        len(incoming), carried, dropped,
    )
    return merged


def summarize_import(existing: list[PageRecord], incoming: list[PageRecord]) -> ImportSummary:
    """Describe which paths an import adds, keeps and removes."""
    old = _unique([page.full_url_path for page in existing])
    new = _unique([page.full_url_path for page in incoming])
    old_set, new_set = set(old), set(new)
    return ImportSummary(
        added=[p for p in new if p not in old_set],
        kept=[p for p in new if p in old_set],
        removed=[p for p in old if p not in new_set],
    )
