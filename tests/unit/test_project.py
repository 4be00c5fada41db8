"""
Unit tests for mini program project discovery and scanning.
"""

import pytest

from atomcss.core.errors import ConfigError
from atomcss.core.manifest import RunningConfig
from atomcss.core.project import (
    discover_component_pages,
    ensure_work_dir,
    read_app_pages,
    scan_page,
    scan_project,
)

COMPONENT_TS = "Component({ options: { addGlobalClass: true } })"


class TestEnsureWorkDir:
    """Tests for locating the mini program directory."""

    def test_mini_program_subdir(self, tmp_path):
        (tmp_path / "miniprogram").mkdir()
        assert ensure_work_dir(tmp_path, RunningConfig()) == tmp_path / "miniprogram"

    def test_main_css_file(self, tmp_path):
        (tmp_path / "app.wxss").write_text("")
        assert ensure_work_dir(tmp_path, RunningConfig()) == tmp_path

    def test_not_a_project(self, tmp_path):
        with pytest.raises(ConfigError, match="not a mini program directory"):
            ensure_work_dir(tmp_path, RunningConfig())


class TestReadAppPages:
    """Tests for app.json page discovery."""

    def test_pages_and_subpackages(self, mini_program):
        root = mini_program(
            ["pages/index/index"],
            {},
            subpackages=[{"root": "shop/", "pages": ["cart/cart", "order/order"]}],
        )
        work_dir = root / "miniprogram"
        pages = read_app_pages(work_dir, RunningConfig())
        assert pages == [
            work_dir / "pages/index/index.wxml",
            work_dir / "shop/cart/cart.wxml",
            work_dir / "shop/order/order.wxml",
        ]

    def test_missing_app_json(self, tmp_path):
        with pytest.raises(ConfigError, match="Cannot read"):
            read_app_pages(tmp_path, RunningConfig())

    def test_invalid_app_json(self, tmp_path):
        (tmp_path / "app.json").write_text("{pages")
        with pytest.raises(ConfigError, match="Invalid JSON"):
            read_app_pages(tmp_path, RunningConfig())


class TestScanning:
    """Tests for page and component scans."""

    def test_page_own_stylesheet_excluded(self, mini_program):
        root = mini_program(
            ["pages/index/index"],
            {
                "pages/index/index.wxml": '<view class="title px-20"></view>',
                "pages/index/index.wxss": ".title { font-weight: bold; }",
            },
        )
        page = root / "miniprogram/pages/index/index.wxml"
        assert scan_page(page, RunningConfig()) == ["px-20"]

    def test_missing_page(self, tmp_path):
        assert scan_page(tmp_path / "gone.wxml", RunningConfig()) == []

    def test_component_discovery(self, mini_program):
        root = mini_program(
            [],
            {
                "components/tip/tip.wxml": '<view class="p-10"></view>',
                "components/tip/tip.ts": COMPONENT_TS,
                "components/tip/tip.wxss": "",
                "components/raw/raw.wxml": '<view class="m-10"></view>',
            },
        )
        infos = discover_component_pages(root / "miniprogram", RunningConfig())
        assert [info.page.name for info in infos] == ["raw.wxml", "tip.wxml"]
        raw, tip = infos
        assert raw.script_path is None
        assert tip.ts_path is not None
        assert tip.css_path is not None

    def test_scan_project(self, mini_program):
        root = mini_program(
            ["pages/index/index"],
            {
                "app.wxss": ".app-title { }",
                "font.wxss": ".icon-home { }",
                "pages/index/index.wxml": '<view class="app-title icon-home px-20 bg-red-2"></view>',
                "components/tip/tip.wxml": '<view class="p-10 flex-row"></view>',
                "components/tip/tip.ts": COMPONENT_TS,
                "components/scoped/scoped.wxml": '<view class="m-10"></view>',
                "components/scoped/scoped.js": "Component({})",
            },
        )
        scan = scan_project(root / "miniprogram", RunningConfig())
        assert scan.declared == ["icon-home", "app-title"]
        assert scan.page_names == ["app-title", "bg-red-2", "icon-home", "px-20"]
        assert scan.component_names == ["flex-row", "p-10"]
        assert scan.missing == ["bg-red-2", "flex-row", "p-10", "px-20"]
        assert scan.unused == []
