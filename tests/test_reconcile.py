"""Tests for import reconciliation (carry-forward of admin fields)."""

from __future__ import annotations

from sitearch.engine.models import PageRecord, PageStatus
from sitearch.engine.reconcile import reconcile, summarize_import


def _page(path: str, volume: int = 0, status: str = "planned", notes: str = "") -> PageRecord:
    return PageRecord(
        cluster_name="C",
        primary_keyword=f"kw {path}",
        search_volume=volume,
        intent="Commercial",
        page_type="Service",
        full_url_path=path,
        status=status,
        notes=notes,
    )


class TestReconcile:
    def test_carry_forward_status_and_notes(self) -> None:
        existing = [_page("/a", volume=100, status="live", notes="ok")]
        incoming = [_page("/a", volume=250)]

        merged = reconcile(existing, incoming)

        assert len(merged) == 1
        assert merged[0].full_url_path == "/a"
        assert merged[0].status == PageStatus.LIVE
        assert merged[0].notes == "ok"
        assert merged[0].search_volume == 250

    def test_missing_paths_are_dropped(self) -> None:
        merged = reconcile([_page("/a"), _page("/b")], [_page("/a")])
        assert [p.full_url_path for p in merged] == ["/a"]

    def test_new_paths_keep_defaults(self) -> None:
        merged = reconcile([_page("/a", status="live")], [_page("/new")])
        assert merged[0].status == PageStatus.PLANNED
        assert merged[0].notes == ""

    def test_order_follows_incoming(self) -> None:
        existing = [_page("/a"), _page("/b"), _page("/c")]
        incoming = [_page("/c"), _page("/a"), _page("/b")]
        assert [p.full_url_path for p in reconcile(existing, incoming)] == ["/c", "/a", "/b"]

    def test_inputs_are_not_mutated(self) -> None:
        existing = [_page("/a", status="in_dev", notes="n")]
        incoming = [_page("/a")]
        merged = reconcile(existing, incoming)

        assert incoming[0].status == PageStatus.PLANNED
        assert merged[0] is not incoming[0]
        merged[0].secondary_keywords.append("x")
        assert incoming[0].secondary_keywords == []

    def test_empty_existing(self) -> None:
        incoming = [_page("/a"), _page("/b")]
        merged = reconcile([], incoming)
        assert [p.full_url_path for p in merged] == ["/a", "/b"]

    def test_empty_incoming_drops_everything(self) -> None:
        assert reconcile([_page("/a")], []) == []

    def test_paths_match_after_normalisation(self) -> None:
        existing = [_page("/uk/london/", status="live")]
        merged = reconcile(existing, [_page("uk/london")])
        assert merged[0].status == PageStatus.LIVE

    def test_duplicate_existing_paths_last_wins(self) -> None:
        existing = [_page("/a", notes="first"), _page("/a", notes="second")]
        assert reconcile(existing, [_page("/a")])[0].notes == "second"


class TestSummarizeImport:
    def test_added_kept_removed(self) -> None:
        existing = [_page("/a"), _page("/b")]
        incoming = [_page("/b"), _page("/c")]
        summary = summarize_import(existing, incoming)

        assert summary.added == ["/c"]
        assert summary.kept == ["/b"]
        assert summary.removed == ["/a"]
        assert summary.is_destructive is True

    def test_not_destructive_when_nothing_removed(self) -> None:
        summary = summarize_import([_page("/a")], [_page("/a"), _page("/b")])
        assert summary.is_destructive is False
        assert summary.to_dict() == {"added": ["/b"], "kept": ["/a"], "removed": []}
