"""Tests for the site tree builder and the bottom-up aggregator."""

from __future__ import annotations

import logging
import random

import pytest

from sitearch.engine.aggregate import annotate, build_site_tree
from sitearch.engine.models import PageRecord, PageStatus, SiteTreeNode
from sitearch.engine.tree import build_tree, collect_pages, iter_nodes


def _page(path: str, volume: int = 0, status: str = "planned") -> PageRecord:
    return PageRecord(
        cluster_name="C",
        primary_keyword=path,
        search_volume=volume,
        intent="",
        page_type="Service",
        full_url_path=path,
        status=status,
    )


def _check_identities(node: SiteTreeNode) -> None:
    for child in node.children:
        _check_identities(child)
    own = node.page
    assert node.total_pages == (1 if own else 0) + sum(c.total_pages for c in node.children)
    assert node.total_volume == (own.search_volume if own else 0) + sum(
        c.total_volume for c in node.children
    )
    assert node.live_pages == (1 if own and own.status == PageStatus.LIVE else 0) + sum(
        c.live_pages for c in node.children
    )


# ---------------------------------------------------------------------------
# build_tree
# ---------------------------------------------------------------------------

class TestBuildTree:
    def test_empty_list_gives_empty_forest(self) -> None:
        assert build_tree([]) == []

    def test_grouping_by_first_segment(self) -> None:
        forest = build_site_tree([
            _page("/uk/london/implants", 500),
            _page("/uk/manchester/implants", 300),
            _page("/de/berlin/implants", 200),
        ])
        assert [n.segment for n in forest] == ["uk", "de"]
        uk, de = forest
        assert (uk.total_volume, uk.total_pages) == (800, 2)
        assert (de.total_volume, de.total_pages) == (200, 1)

    def test_intermediate_nodes_have_no_page(self) -> None:
        forest = build_tree([_page("/uk/london/implants")])
        uk = forest[0]
        london = uk.children[0]
        assert uk.page is None
        assert london.page is None
        assert london.children[0].page is not None

    def test_full_path_joins_segments(self) -> None:
        forest = build_tree([_page("/uk/london/implants")])
        paths = [n.full_path for n in iter_nodes(forest)]
        assert paths == ["/uk", "/uk/london", "/uk/london/implants"]

    def test_page_node_can_have_children(self) -> None:
        forest = build_site_tree([_page("/uk/implants", 480), _page("/uk/implants/cost", 170)])
        implants = forest[0].children[0]
        assert implants.page is not None
        assert implants.children[0].segment == "cost"
        assert implants.total_volume == 650
        assert implants.total_pages == 2

    def test_children_keep_first_insertion_order(self) -> None:
        forest = build_tree([
            _page("/site/zebra"),
            _page("/site/apple"),
            _page("/site/mango"),
            _page("/site/apple/sub"),
        ])
        assert [c.segment for c in forest[0].children] == ["zebra", "apple", "mango"]

    def test_children_are_unique_by_segment(self) -> None:
        forest = build_tree([_page("/a/b"), _page("/a/b/c"), _page("/a/b/d"), _page("/a/b")])
        a = forest[0]
        assert len(a.children) == 1
        assert [c.segment for c in a.children[0].children] == ["c", "d"]

    def test_duplicate_path_last_write_wins(self, caplog: pytest.LogCaptureFixture) -> None:
        first = _page("/a", 10)
        second = _page("/a", 99)
        with caplog.at_level(logging.WARNING, logger="sitearch.engine.tree"):
            forest = build_site_tree([first, second])

        assert forest[0].page is second
        assert forest[0].total_volume == 99
        assert "duplicate path /a" in caplog.text

    def test_input_records_are_not_copied_or_changed(self) -> None:
        page = _page("/a/b", 5)
        forest = build_tree([page])
        assert collect_pages(forest)[0] is page
        assert page.full_url_path == "/a/b"


class TestRoundTrip:
    def test_collected_paths_equal_input_paths(self) -> None:
        records = [
            _page("/uk"),
            _page("/uk/london"),
            _page("/uk/london/implants"),
            _page("/de/berlin/zahn"),
            _page("/about"),
        ]
        forest = build_tree(records)
        assert {p.full_url_path for p in collect_pages(forest)} == {
            r.full_url_path for r in records
        }

    def test_reordered_input_same_page_set(self) -> None:
        records = [_page(f"/loc{i % 3}/page{i}") for i in range(12)]
        shuffled = records[:]
        random.Random(7).shuffle(shuffled)
        a = {p.full_url_path for p in collect_pages(build_tree(records))}
        b = {p.full_url_path for p in collect_pages(build_tree(shuffled))}
        assert a == b


# ---------------------------------------------------------------------------
# annotate
# ---------------------------------------------------------------------------

class TestAnnotate:
    def test_identities_hold_at_every_node(self) -> None:
        records = [
            _page("/uk", 10, "live"),
            _page("/uk/london", 20),
            _page("/uk/london/implants", 30, "live"),
            _page("/uk/london/veneers", 40, "in_dev"),
            _page("/uk/manchester/implants", 50, "live"),
            _page("/de/berlin/implants", 60),
            _page("/contact", 0, "live"),
        ]
        forest = build_site_tree(records)
        for root in forest:
            _check_identities(root)

    def test_totals_sum_to_input(self) -> None:
        records = [_page(f"/r{i % 4}/s{i % 3}/p{i}", volume=i * 10) for i in range(30)]
        forest = build_site_tree(records)
        assert sum(n.total_volume for n in forest) == sum(r.search_volume for r in records)
        assert sum(n.total_pages for n in forest) == len(records)

    def test_live_pages_counted(self) -> None:
        forest = build_site_tree([
            _page("/uk/a", status="live"),
            _page("/uk/b", status="copy_ready"),
            _page("/uk/c", status="live"),
        ])
        assert forest[0].live_pages == 2

    def test_annotate_returns_same_forest(self) -> None:
        forest = build_tree([_page("/a", 3)])
        assert annotate(forest) is forest
        assert forest[0].total_volume == 3

    def test_annotate_empty(self) -> None:
        assert annotate([]) == []

    def test_to_dict_is_nested_plain_data(self) -> None:
        data = build_site_tree([_page("/uk/london", 5, "live")])[0].to_dict()
        assert data["segment"] == "uk"
        assert data["page"] is None
        assert data["total_volume"] == 5
        child = data["children"][0]
        assert child["page"]["status"] == "live"
        assert child["full_path"] == "/uk/london"

    def test_very_deep_path(self) -> None:
        deep = "/" + "/".join(f"s{i}" for i in range(1200))
        forest = build_site_tree([_page(deep, 7, "live"), _page("/s0", 3)])
        root = forest[0]
        assert (root.total_volume, root.total_pages, root.live_pages) == (10, 2, 1)

        data = root.to_dict()
        depth = 0
        while data["children"]:
            data = data["children"][0]
            depth += 1
        assert depth == 1199
        assert data["page"]["full_url_path"] == deep
        assert data["total_volume"] == 7
