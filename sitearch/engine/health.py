"""Data-quality checks over a tenant's page list."""

from __future__ import annotations

from collections import Counter
from dataclasses import asdict, dataclass

from sitearch.engine.models import PageRecord

PASS = "pass"
WARN = "warn"


@dataclass
class HealthResult:
    level: str
    key: str
    label: str
    message: str

    def to_dict(self) -> dict[str, str]:
        return asdict(self)


def duplicate_paths(records: list[PageRecord]) -> list[str]:
    """Return every path that occurs more than once, in first-seen order."""
    counts = Counter(r.full_url_path for r in records)
    return [path for path, n in counts.items() if n > 1]


def check_site(records: list[PageRecord]) -> list[HealthResult]:
    """Run the site-map checks and return one result per finding."""
    if not records:
        return [HealthResult(WARN, "website.pages", "Pages", "No pages uploaded (SEO CSV)")]

    results = [HealthResult(PASS, "website.pages", "Pages", f"{len(records)} pages loaded")]

    incomplete = [r for r in records if not r.primary_keyword.strip()]
    if incomplete:
        results.append(HealthResult(
            WARN,
            "website.pages.incomplete",
            "Incomplete Pages",
            f"{len(incomplete)} pages missing primary keyword",
        ))

    dupes = duplicate_paths(records)
    if dupes:
        # The tree shows only the last record for each of these paths.
        results.append(HealthResult(
            WARN,
            "website.pages.duplicates",
            "Duplicate Paths",
            f"{len(dupes)} paths appear more than once: {', '.join(dupes)}",
        ))

    return results
