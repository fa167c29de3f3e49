"""Parser for SEO keyword-research exports (CSV or TSV).

Expected columns, in order::

    Cluster Name | Primary Keyword | Search Volume | Intent | Page Type |
    Full URL Path | Priority | Secondary Keywords

The first six are required; *Priority* and *Secondary Keywords* are
optional.  Secondary keywords are ``;``-separated within their cell.

Row policy:
    Rows with fewer than six fields, or whose URL path is blank or has no
    segments, are skipped without an individual report.  Only the aggregate
    "zero rows produced" condition is raised, as :class:`ParseEmptyError`.
"""

from __future__ import annotations

import csv
import io
import logging
import re

from sitearch.engine.errors import MalformedPathError, ParseEmptyError
from sitearch.engine.models import PageRecord, PageStatus

logger = logging.getLogger(__name__)

MIN_COLUMNS = 6
DEFAULT_PRIORITY = "P2"

TEMPLATE_HEADER = [
    "Cluster Name",
    "Primary Keyword",
    "Search Volume",
    "Intent",
    "Page Type",
    "Full URL Path",
    "Priority",
    "Secondary Keywords",
]

_HEADER_HINTS = ("cluster", "keyword", "url", "volume", "intent")
_NON_DIGITS = re.compile(r"\D")
_LINE_BREAK = re.compile(r"\r?\n")


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------

def _detect_delimiter(first_line: str) -> str:
    return "\t" if "\t" in first_line else ","


def _split_line(line: str, delimiter: str) -> list[str] | None:
    """Split one line into trimmed cells, or return None if it cannot be read.

    Quotes are honoured within the line only, so an unclosed quote spoils
    its own row and nothing after it.
    """
    if delimiter == "\t":
        # Spreadsheet TSV copies never quote cells.
        reader = csv.reader([line], delimiter="\t", quoting=csv.QUOTE_NONE)
    else:
        reader = csv.reader([line], delimiter=",")
    try:
        row = next(reader, [])
    except csv.Error as exc:
        logger.debug("[parser] unreadable line skipped: %s", exc)
        return None
    return [cell.strip() for cell in row]


def _split_rows(text: str, delimiter: str) -> list[list[str] | None]:
    """Split *text* line by line, dropping blank lines.

    Unreadable lines stay in the result as ``None`` so the caller can count
    them as skipped rows.
    """
    rows: list[list[str] | None] = []
    for line in _LINE_BREAK.split(text):
        if not line.strip():
            continue
        cells = _split_line(line, delimiter)
        if cells is None or any(cells):
            rows.append(cells)
    return rows


def _is_header(row: list[str]) -> bool:
    """Return True when *row* looks like a column header rather than data.

    A row qualifies when one of its cells mentions a known column name and
    its search-volume cell carries no digits.
    """
    lowered = [cell.lower() for cell in row]
    if not any(hint in cell for cell in lowered for hint in _HEADER_HINTS):
        return False
    return len(row) < 3 or not _NON_DIGITS.sub("", row[2])


def parse_volume(value: str | None) -> int:
    """Strip every non-digit from *value* and return it as an int (``0`` if empty)."""
    digits = _NON_DIGITS.sub("", value or "")
    return int(digits) if digits else 0


def _split_keywords(value: str) -> list[str]:
    return [kw.strip() for kw in value.split(";") if kw.strip()]


def _row_to_record(cells: list[str], default_priority: str) -> PageRecord:
    priority = cells[6] if len(cells) > 6 and cells[6] else default_priority
    secondary = _split_keywords(cells[7]) if len(cells) > 7 else []
    return PageRecord(
        cluster_name=cells[0],
        primary_keyword=cells[1],
        search_volume=parse_volume(cells[2]),
        intent=cells[3],
        page_type=cells[4],
        full_url_path=cells[5],
        priority=priority,
        secondary_keywords=secondary,
        status=PageStatus.PLANNED,
        notes="",
    )


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

def parse_records(raw_text: str, default_priority: str = DEFAULT_PRIORITY) -> list[PageRecord]:
    """Parse delimited keyword-research text into page records.

    Args:
        raw_text: The pasted or uploaded file contents (UTF-8 text).
        default_priority: Priority given to rows with no priority cell.

    Returns:
        One :class:`PageRecord` per valid data row, in input order.  Blank
        input returns ``[]``.

    Raises:
        ParseEmptyError: If *raw_text* is not blank but no row was usable.
    """
    text = raw_text.strip()
    if not text:
        return []

    delimiter = _detect_delimiter(_LINE_BREAK.split(text, maxsplit=1)[0])
    rows = _split_rows(text, delimiter)

    start = 1 if rows and rows[0] is not None and _is_header(rows[0]) else 0

    records: list[PageRecord] = []
    skipped = 0
    for cells in rows[start:]:
        if cells is None or len(cells) < MIN_COLUMNS or not cells[5]:
            skipped += 1
            continue
        try:
            records.append(_row_to_record(cells, default_priority))
        except MalformedPathError:
            skipped += 1

    if skipped:
        logger.debug("[parser] skipped %d row(s) with missing columns or URL", skipped)

    if not records:
        raise ParseEmptyError()

    logger.info("[parser] parsed %d page record(s)", len(records))
    return records


def template_csv() -> str:
    """Return the downloadable import template: header plus one example row."""
    buf = io.StringIO()
    writer = csv.writer(buf, lineterminator="\n")
    writer.writerow(TEMPLATE_HEADER)
    writer.writerow([
        "Pillar",
        "Dental Implants",
        "1900",
        "Commercial",
        "Service",
        "/dental-implants-romania",
        "P1",
        "implants abroad;tooth replacement",
    ])
    return buf.getvalue()
