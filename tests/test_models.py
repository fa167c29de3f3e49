"""Tests for the engine data model and path normalisation."""

from __future__ import annotations

import pytest

from sitearch.engine.errors import MalformedPathError
from sitearch.engine.health import PASS, WARN, check_site, duplicate_paths
from sitearch.engine.models import PageRecord, PageStatus, normalize_path, split_path


def _page(path: str, keyword: str = "kw", **kwargs) -> PageRecord:
    return PageRecord(
        cluster_name="C",
        primary_keyword=keyword,
        search_volume=kwargs.pop("search_volume", 0),
        intent="",
        page_type="",
        full_url_path=path,
        **kwargs,
    )


class TestNormalizePath:
    def test_canonical_path_unchanged(self) -> None:
        assert normalize_path("/uk/london") == "/uk/london"

    def test_adds_leading_slash(self) -> None:
        assert normalize_path("uk/london") == "/uk/london"

    def test_collapses_double_slashes_and_trailing(self) -> None:
        assert normalize_path("//uk///london//") == "/uk/london"

    @pytest.mark.parametrize("path", ["", "/", "///", "   "])
    def test_rejects_segmentless_paths(self, path: str) -> None:
        with pytest.raises(MalformedPathError):
            normalize_path(path)

    def test_split_path(self) -> None:
        assert split_path("/a//b/") == ["a", "b"]


class TestPageRecord:
    def test_defaults(self) -> None:
        page = _page("/a")
        assert page.status == PageStatus.PLANNED
        assert page.notes == ""
        assert page.priority == "P2"
        assert page.secondary_keywords == []

    def test_status_string_is_coerced(self) -> None:
        assert _page("/a", status="in_design").status == PageStatus.IN_DESIGN

    def test_unknown_status_rejected(self) -> None:
        with pytest.raises(ValueError):
            _page("/a", status="archived")

    def test_negative_volume_rejected(self) -> None:
        with pytest.raises(ValueError):
            _page("/a", search_volume=-1)

    def test_path_is_normalised(self) -> None:
        assert _page("a/b/").full_url_path == "/a/b"

    def test_dict_round_trip(self) -> None:
        page = _page("/uk/x", status="live", notes="shipped", secondary_keywords=["a", "b"])
        data = page.to_dict()
        assert data["status"] == "live"
        assert PageRecord.from_dict(data) == page

    def test_from_dict_accepts_keyword_string(self) -> None:
        page = PageRecord.from_dict({"full_url_path": "/x", "secondary_keywords": "a; b;"})
        assert page.secondary_keywords == ["a", "b"]
        assert page.priority == "P2"


class TestHealthChecks:
    def test_no_pages_warns(self) -> None:
        results = check_site([])
        assert [(r.level, r.key) for r in results] == [(WARN, "website.pages")]

    def test_clean_list_passes(self) -> None:
        results = check_site([_page("/a"), _page("/b")])
        assert len(results) == 1
        assert results[0].level == PASS
        assert results[0].message == "2 pages loaded"

    def test_missing_keyword_warns(self) -> None:
        results = check_site([_page("/a", keyword=""), _page("/b")])
        incomplete = [r for r in results if r.key == "website.pages.incomplete"]
        assert incomplete and incomplete[0].level == WARN
        assert incomplete[0].message.startswith("1 pages")

    def test_duplicate_paths_warn(self) -> None:
        records = [_page("/a"), _page("/b"), _page("/a/")]
        assert duplicate_paths(records) == ["/a"]
        dupes = [r for r in check_site(records) if r.key == "website.pages.duplicates"]
        assert dupes and "/a" in dupes[0].message
        assert dupes[0].to_dict()["level"] == WARN
