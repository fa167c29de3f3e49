"""Utilities for rendering site maps in the CLI."""

from __future__ import annotations

from sitearch.engine.models import PageStatus, SiteTreeNode, WebsiteStats

STATUS_LABELS = {
    PageStatus.PLANNED: "Planned",
    PageStatus.COPY_READY: "Copy Ready",
    PageStatus.IN_DESIGN: "In Design",
    PageStatus.IN_DEV: "In Development",
    PageStatus.LIVE: "Live",
}


def format_volume(n: int) -> str:
    """Format a monthly search volume: ``1900 -> "1.9K"``, ``950 -> "950"``."""
    if n >= 1000:
        return f"{n / 1000:.1f}K"
    return f"{n:,}"


def _node_label(node: SiteTreeNode) -> str:
    if node.page is not None:
        page = node.page
        label = f"{node.segment}/  {page.primary_keyword} · {format_volume(page.search_volume)}/mo"
        if page.page_type:
            label += f" [{page.page_type}]"
        label += f" ({STATUS_LABELS[page.status]})"
        if node.children:
            label += f"  ∑ {node.total_pages} pages, {format_volume(node.total_volume)}/mo"
        return label
    return (
        f"{node.segment}/  {node.total_pages} pages · "
        f"{format_volume(node.total_volume)}/mo · {node.live_pages} live"
    )


def render_tree(nodes: list[SiteTreeNode]) -> str:
    """Render an annotated forest as an ASCII tree.

    Args:
        nodes: Top-level nodes, as returned by ``build_site_tree``.

    Returns:
        String representation of the tree (empty string for no nodes).
    """
    lines: list[str] = []
    # (node, prefix, is_last, is_root); children pushed in reverse so they
    # pop in display order.
    stack: list[tuple[SiteTreeNode, str, bool, bool]] = [
        (root, "", True, True) for root in reversed(nodes)
    ]
    while stack:
        node, prefix, is_last, is_root = stack.pop()
        if is_root:
            lines.append(_node_label(node))
            child_prefix = ""
        else:
            connector = "└── " if is_last else "├── "
            lines.append(f"{prefix}{connector}{_node_label(node)}")
            child_prefix = prefix + ("    " if is_last else "│   ")

        count = len(node.children)
        for i in range(count - 1, -1, -1):
            stack.append((node.children[i], child_prefix, i == count - 1, False))

    return "\n".join(lines)


def render_stats(stats: WebsiteStats) -> str:
    """Render a stats summary as indented text lines."""
    lines = [
        f"   Pages        : {stats.total}",
        f"   Total volume : {format_volume(stats.total_volume)}/mo",
        f"   Live         : {stats.live}",
        f"   In progress  : {stats.in_progress}",
        f"   Planned      : {stats.planned}",
        f"   Progress     : {stats.progress_percent}%",
    ]
    for title, counts in (
        ("By Type", stats.by_type),
        ("By Intent", stats.by_intent),
        ("By Priority", stats.by_priority),
    ):
        if counts:
            lines.append(f"\n   {title}:")
            lines.extend(f"    - {name}: {count}" for name, count in counts.items())
    return "\n".join(lines)
