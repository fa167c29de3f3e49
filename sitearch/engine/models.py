"""Dataclass models for page records and the views derived from them.

``PageRecord`` is the only stored shape.  ``SiteTreeNode`` and
``WebsiteStats`` are rebuilt from a record list on every read and are never
persisted.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Optional

from sitearch.engine.errors import MalformedPathError


class PageStatus(str, Enum):
    PLANNED = "planned"
    COPY_READY = "copy_ready"
    IN_DESIGN = "in_design"
    IN_DEV = "in_dev"
    LIVE = "live"


# Statuses counted as "in progress" by the stats engine.
IN_PROGRESS_STATUSES = frozenset(
    {PageStatus.COPY_READY, PageStatus.IN_DESIGN, PageStatus.IN_DEV}
)


# ---------------------------------------------------------------------------
# Path helpers
# ---------------------------------------------------------------------------

def split_path(path: str) -> list[str]:
    """Return the non-empty ``/``-separated segments of *path*."""
    return [seg for seg in path.strip().split("/") if seg]


def normalize_path(path: str) -> str:
    """Return the canonical form of *path*.

    A leading ``/`` is added when missing, repeated slashes are collapsed and
    a trailing slash is dropped, so ``"uk//london/"`` becomes ``"/uk/london"``.

    Raises:
        MalformedPathError: If *path* has no segments (``""``, ``"/"``).
    """
    segments = split_path(path)
    if not segments:
        raise MalformedPathError(path)
    return "/" + "/".join(segments)


# ---------------------------------------------------------------------------
# Records
# ---------------------------------------------------------------------------

@dataclass
class PageRecord:
    cluster_name: str
    primary_keyword: str
    search_volume: int
    intent: str
    page_type: str
    full_url_path: str
    priority: str = "P2"
    secondary_keywords: list[str] = field(default_factory=list)
    # Managed by admins, never set by an import
    status: PageStatus = PageStatus.PLANNED
    notes: str = ""

    def __post_init__(self) -> None:
        self.full_url_path = normalize_path(self.full_url_path)
        self.status = PageStatus(self.status)
        if self.search_volume < 0:
            raise ValueError(f"search_volume must be >= 0, got {self.search_volume}")

    @property
    def segments(self) -> list[str]:
        return split_path(self.full_url_path)

    def to_dict(self) -> dict[str, Any]:
        """Serialise to a JSON-safe dict (status as its string value)."""
        return {
            "cluster_name": self.cluster_name,
            "primary_keyword": self.primary_keyword,
            "search_volume": self.search_volume,
            "intent": self.intent,
            "page_type": self.page_type,
            "full_url_path": self.full_url_path,
            "priority": self.priority,
            "secondary_keywords": list(self.secondary_keywords),
            "status": self.status.value,
            "notes": self.notes,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> PageRecord:
        """Build a record from a dict such as the one :meth:`to_dict` returns.

        ``secondary_keywords`` may be given either as a list or as a single
        ``;``-separated string.
        """
        secondary = data.get("secondary_keywords") or []
        if isinstance(secondary, str):
            secondary = [s.strip() for s in secondary.split(";") if s.strip()]
        return cls(
            cluster_name=data.get("cluster_name", ""),
            primary_keyword=data.get("primary_keyword", ""),
            search_volume=int(data.get("search_volume") or 0),
            intent=data.get("intent", ""),
            page_type=data.get("page_type", ""),
            full_url_path=data["full_url_path"],
            priority=data.get("priority") or "P2",
            secondary_keywords=list(secondary),
            status=data.get("status") or PageStatus.PLANNED,
            notes=data.get("notes") or "",
        )


# ---------------------------------------------------------------------------
# Derived views
# ---------------------------------------------------------------------------

@dataclass
class SiteTreeNode:
    segment: str
    full_path: str
    page: Optional[PageRecord] = None
    children: list[SiteTreeNode] = field(default_factory=list)
    # Filled in by sitearch.engine.aggregate.annotate()
    total_volume: int = 0
    total_pages: int = 0
    live_pages: int = 0

    def to_dict(self) -> dict[str, Any]:
        # Built bottom-up with an explicit stack so deep paths do not hit
        # the recursion limit.
        built: dict[int, dict[str, Any]] = {}
        stack: list[tuple[SiteTreeNode, bool]] = [(self, False)]
        while stack:
            node, children_done = stack.pop()
            if not children_done:
                stack.append((node, True))
                stack.extend((child, False) for child in node.children)
                continue
            built[id(node)] = {
                "segment": node.segment,
                "full_path": node.full_path,
                "page": node.page.to_dict() if node.page else None,
                "children": [built.pop(id(child)) for child in node.children],
                "total_volume": node.total_volume,
                "total_pages": node.total_pages,
                "live_pages": node.live_pages,
            }
        return built[id(self)]


@dataclass
class WebsiteStats:
    total: int = 0
    total_volume: int = 0
    live: int = 0
    in_progress: int = 0
    planned: int = 0
    progress_percent: int = 0
    by_type: dict[str, int] = field(default_factory=dict)
    by_intent: dict[str, int] = field(default_factory=dict)
    by_priority: dict[str, int] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        """Serialise using the renderer's camelCase keys."""
        return {
            "total": self.total,
            "totalVolume": self.total_volume,
            "live": self.live,
            "inProgress": self.in_progress,
            "planned": self.planned,
            "progressPercent": self.progress_percent,
            "byType": dict(self.by_type),
            "byIntent": dict(self.by_intent),
            "byPriority": dict(self.by_priority),
        }
