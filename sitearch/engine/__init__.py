"""Site architecture engine: page records in, site maps and statistics out.

Everything in this package is a pure, synchronous transformation of the
arguments it is given.
"""

from sitearch.engine.aggregate import annotate, build_site_tree
from sitearch.engine.errors import MalformedPathError, ParseEmptyError, SiteArchError
from sitearch.engine.filters import filter_records
from sitearch.engine.health import HealthResult, check_site
from sitearch.engine.locations import location_segments
from sitearch.engine.models import PageRecord, PageStatus, SiteTreeNode, WebsiteStats
from sitearch.engine.parser import parse_records, template_csv
from sitearch.engine.reconcile import ImportSummary, reconcile, summarize_import
from sitearch.engine.stats import compute_stats
from sitearch.engine.tree import build_tree, collect_pages, iter_nodes

__all__ = [
    "PageRecord",
    "PageStatus",
    "SiteTreeNode",
    "WebsiteStats",
    "SiteArchError",
    "ParseEmptyError",
    "MalformedPathError",
    "parse_records",
    "template_csv",
    "reconcile",
    "summarize_import",
    "ImportSummary",
    "build_tree",
    "iter_nodes",
    "collect_pages",
    "annotate",
    "build_site_tree",
    "compute_stats",
    "location_segments",
    "filter_records",
    "check_site",
    "HealthResult",
]
