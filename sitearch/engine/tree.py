"""Build a site-map forest from a flat list of page records.

Paths like::

    /uk/dental-implants-abroad
    /uk/dental-implants-abroad/cost
    /uk/dental-tourism
    /de/zahnimplantate

become::

    uk
      dental-implants-abroad      (page)
        cost                      (page)
      dental-tourism              (page)
    de
      zahnimplantate              (page)

Children keep the order in which their first record appeared.  When two
records share a path the later one replaces the earlier on that node.
"""

from __future__ import annotations

import logging
from typing import Iterator

from sitearch.engine.models import PageRecord, SiteTreeNode

logger = logging.getLogger(__name__)


def build_tree(records: list[PageRecord]) -> list[SiteTreeNode]:
    """Return the top-level nodes of the tree described by *records*.

    Nodes carry no aggregates yet; pass the result to
    :func:`sitearch.engine.aggregate.annotate`.
    """
    roots: list[SiteTreeNode] = []
    # path prefix -> node, so each segment lookup is O(1)
    index: dict[str, SiteTreeNode] = {}

    for record in records:
        siblings = roots
        prefix = ""
        node = None
        for segment in record.segments:
            prefix = f"{prefix}/{segment}"
            node = index.get(prefix)
            if node is None:
                node = SiteTreeNode(segment=segment, full_path=prefix)
                index[prefix] = node
                siblings.append(node)
            siblings = node.children

        if node is None:
            continue
        if node.page is not None:
            logger.warning(
                "[tree] duplicate path %s: later record replaces earlier one",
                record.full_url_path,
            )
        node.page = record

    return roots


def iter_nodes(nodes: list[SiteTreeNode]) -> Iterator[SiteTreeNode]:
    """Yield every node in *nodes* and below, parents before children."""
    stack = list(reversed(nodes))
    while stack:
        node = stack.pop()
        yield node
        stack.extend(reversed(node.children))


def collect_pages(nodes: list[SiteTreeNode]) -> list[PageRecord]:
    """Return the page attached to each node, in tree order."""
    return [node.page for node in iter_nodes(nodes) if node.page is not None]
