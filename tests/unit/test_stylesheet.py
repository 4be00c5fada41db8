"""
Unit tests for declared selector discovery.
"""

from atomcss.core.stylesheet import collect_declared_names, parse_selector_names, read_selector_names


class TestParseSelectorNames:
    """Tests for simple class selector extraction."""

    def test_simple_selectors(self):
        css = ".title { font-size: 32rpx; }\n.card,.card-body { padding: 0; }"
        assert parse_selector_names(css) == ["title", "card", "card-body"]

    def test_compound_selectors_ignored(self):
        css = ".list .item { color: red; } .btn:hover { opacity: 0.8; } view { margin: 0; }"
        assert parse_selector_names(css) == []

    def test_comments_stripped(self):
        css = "/* .old { } */\n.new { color: red; }"
        assert parse_selector_names(css) == ["new"]

    def test_nested_at_rules(self):
        css = "@media (min-width: 500px) { .wide { width: 100%; } }\n@import 'font.wxss';\n.after { top: 0; }"
        assert parse_selector_names(css) == ["wide", "after"]

    def test_keyframes_steps_ignored(self):
        css = "@keyframes spin { from { opacity: 0; } to { opacity: 1; } }"
        assert parse_selector_names(css) == []


class TestReadSelectorNames:
    """Tests for reading stylesheet files."""

    def test_missing_file(self, tmp_path):
        assert read_selector_names(tmp_path / "missing.wxss") is None

    def test_collect_skips_missing(self, tmp_path):
        (tmp_path / "app.wxss").write_text(".a1 { }\n.b2 { }")
        (tmp_path / "font.wxss").write_text(".b2 { }\n.c3 { }")
        names = collect_declared_names([tmp_path / "font.wxss", tmp_path / "reset.wxss", tmp_path / "app.wxss"])
        assert names == ["b2", "c3", "a1"]
