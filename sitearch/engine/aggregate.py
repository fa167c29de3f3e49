"""Roll page counts and search volume up the site tree."""

from __future__ import annotations

from sitearch.engine.models import PageRecord, PageStatus, SiteTreeNode
from sitearch.engine.tree import build_tree


def _annotate_node(root: SiteTreeNode) -> None:
    # Explicit post-order walk: a node is summed on its second visit, after
    # all of its children.
    stack: list[tuple[SiteTreeNode, bool]] = [(root, False)]
    while stack:
        node, children_done = stack.pop()
        if not children_done:
            stack.append((node, True))
            stack.extend((child, False) for child in node.children)
            continue

        volume = pages = live = 0
        if node.page is not None:
            volume += node.page.search_volume
            pages += 1
            if node.page.status == PageStatus.LIVE:
                live += 1

        for child in node.children:
            volume += child.total_volume
            pages += child.total_pages
            live += child.live_pages

        node.total_volume = volume
        node.total_pages = pages
        node.live_pages = live


def annotate(nodes: list[SiteTreeNode]) -> list[SiteTreeNode]:
    """Fill ``total_volume``, ``total_pages`` and ``live_pages`` on every node.

    Children are annotated before their parent.  The forest is updated in
    place and returned for chaining.
    """
    for node in nodes:
        _annotate_node(node)
    return nodes


def build_site_tree(records: list[PageRecord]) -> list[SiteTreeNode]:
    """Build and annotate the forest for *records* in one call."""
    return annotate(build_tree(records))
