"""Tests for columns.py: catalog contents, extractors and importance overrides."""
import pytest

from dtsearch.columns import (
    ALWAYS_SHOW_IMPORTANCE,
    FORCE_SHOW,
    NEVER_SHOW,
    apply_overrides,
    build_catalog,
    format_row,
    importance_overrides,
)
from dtsearch.config import RunOptions
from dtsearch.exceptions import UnknownColumnError

from conftest import NOW


def _cells(catalog, hit):
    return dict(zip((c.label for c in catalog), format_row(catalog, hit)))


class TestCatalog:
    def test_order_and_labels(self):
        labels = [c.label for c in build_catalog()]
        assert labels == [
            "DLs", "pop", "name", "types", "types", "npm", "yarn",
            "description/40", "description/60", "description",
            "date", "updated", "homepage", "repo",
        ]

    def test_mutex_variants_prefer_detail(self):
        catalog = build_catalog()
        desc = [c for c in catalog if c.mutex_group == "desc"]
        assert [c.importance for c in desc] == [25, 30, 35]
        types = [c for c in catalog if c.mutex_group == "types"]
        assert [c.importance for c in types] == [100, 80]

    def test_hidden_by_default(self):
        hidden = [c.header for c in build_catalog() if c.importance < 0]
        assert hidden == ["npm", "yarn", "repo"]

    def test_downloads_right_aligned(self):
        assert build_catalog()[0].align == "right"


class TestFormatRow:
    def test_full_hit(self, make_hit):
        h = make_hit("left-pad", popular=True, description="Pads &amp; pads")
        cells = _cells(build_catalog(now=NOW), h)
        assert cells["DLs"] == "123k"
        assert cells["pop"] == "\U0001f525"
        assert cells["name"] == "left-pad"
        assert cells["description"] == "Pads & pads"
        assert cells["date"] == "2024-06-12"
        assert cells["updated"] == "3 days ago"
        assert cells["homepage"] == "https://example.com/left-pad"
        assert cells["repo"] == "https://github.com/example/left-pad"

    def test_types_variants(self, make_hit):
        catalog = build_catalog()
        bundled = format_row(catalog, make_hit("a"))
        assert bundled[3:5] == ["<bundled>", "<inc>"]
        dt = format_row(catalog, make_hit("b", types={"ts": "definitely-typed", "definitelyTyped": "@types/b"}))
        assert dt[3:5] == ["@types/b", "dt"]
        untyped = format_row(catalog, make_hit("c", types={"ts": False}))
        assert untyped[3:5] == ["", ""]

    def test_install_columns_follow_exact(self, make_hit):
        cells = format_row(build_catalog(exact=True), make_hit("left-pad"))
        assert cells[5] == "npm install -E left-pad"
        assert cells[6] == "yarn add -E left-pad"

    def test_homepage_falls_back_to_repository(self, make_hit):
        cells = _cells(build_catalog(), make_hit("x", homepage=None))
        assert cells["homepage"] == "https://github.com/example/x"

    def test_missing_fields_render_empty(self, make_hit):
        h = make_hit(
            "bare", types=None, humanDownloadsLast30Days=None, popular=None,
            description=None, modified=None, homepage=None, repository=None,
            _highlightResult=None,
        )
        cells = format_row(build_catalog(), h)
        assert cells[2] == "bare"
        assert [c for i, c in enumerate(cells) if i != 2] == [""] * 13


class TestOverrides:
    def test_no_flags_no_overrides(self):
        assert importance_overrides(RunOptions()) == []

    def test_install_flags(self):
        overrides = importance_overrides(RunOptions(npm=True, yarn=True))
        assert overrides == [
            ("yarn", FORCE_SHOW),
            ("npm", FORCE_SHOW),
            ("types", ALWAYS_SHOW_IMPORTANCE),
        ]

    def test_repo_flag(self):
        assert importance_overrides(RunOptions(repo=True)) == [
            ("repo", FORCE_SHOW),
            ("homepage", NEVER_SHOW),
        ]

    def test_apply_returns_new_snapshot(self):
        catalog = build_catalog()
        updated = apply_overrides(catalog, importance_overrides(RunOptions(npm=True)))
        assert updated is not catalog
        assert [c.importance for c in catalog if c.header == "npm"] == [NEVER_SHOW]
        assert [c.importance for c in updated if c.header == "npm"] == [FORCE_SHOW]
        assert [c.importance for c in updated if c.header == "types"] == [25, 25]

    def test_apply_changes_every_matching_header(self):
        updated = apply_overrides(build_catalog(), [("description", 7)])
        assert [c.importance for c in updated if c.header == "description"] == [7, 7, 7]
        # width caps and groups survive
        assert [c.max_width for c in updated if c.header == "description"] == [40, 60, None]

    def test_later_override_wins(self):
        updated = apply_overrides(build_catalog(), [("date", 50), ("date", 2)])
        assert [c.importance for c in updated if c.header == "date"] == [2]

    def test_unknown_header_is_fatal(self):
        with pytest.raises(UnknownColumnError, match="nope"):
            apply_overrides(build_catalog(), [("nope", 1)])

    def test_unknown_header_is_lookup_error(self):
        with pytest.raises(LookupError):
            apply_overrides(build_catalog(), [("DLS", 1)])
