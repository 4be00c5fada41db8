"""Shared pytest fixtures for atomcss tests."""

import json
from pathlib import Path

import pytest

from atomcss.core.data_loader import load_rule_table, load_theme_map
from atomcss.core.ir import CssOption, ThemeMap
from atomcss.core.resolver import StyleResolver
from atomcss.core.rule_table import RuleTable, build_rule_table


@pytest.fixture(scope="session")
def bundled_rules() -> RuleTable:
    """Return the bundled default rule table."""
    return load_rule_table()


@pytest.fixture(scope="session")
def bundled_themes() -> ThemeMap:
    """Return the bundled default palette."""
    return load_theme_map()


@pytest.fixture
def css_option() -> CssOption:
    return CssOption()


@pytest.fixture
def resolver(bundled_rules: RuleTable, bundled_themes: ThemeMap, css_option: CssOption) -> StyleResolver:
    """Return a resolver over the bundled rules and palette."""
    return StyleResolver(bundled_rules, bundled_themes, css_option)


@pytest.fixture
def small_themes() -> ThemeMap:
    """Return a tiny palette with one provider."""
    return ThemeMap(
        primary="#1677ff",
        black="#000000",
        white="#ffffff",
        palette={
            "antd": {
                "red": ["#fff1f0", "#ffccc7", "#ffa39e"],
                "gray": ["#ffffff", "#fafafa", "#f5f5f5", "#f0f0f0", "#d9d9d9"],
                "mono": ["#123456"],
            }
        },
    )


@pytest.fixture
def small_rules() -> RuleTable:
    """Return a small rule table covering static, dynamic and composed rules."""
    return build_rule_table(
        [
            {"package": "spacing.padding.ext", "syntax": "px-[U]", "compose": ["pl-[U]", "pr-[U]"]},
            {"package": "spacing.padding.ext", "syntax": "pl-[U]", "expr": "padding-left: var(--unit-[U]);"},
            {"package": "spacing.padding.ext", "syntax": "pr-[U]", "expr": "padding-right: var(--unit-[U]);"},
            {"package": "bg.color.ext", "syntax": "bg-[C]-[N]-a[A]", "expr": "background-color: var(--color-[C]-[N]-[A]);"},
            {"package": "bg.color.ext", "syntax": "bg-[C]-[N]", "expr": "background-color: var(--color-[C]-[N]);"},
            {"package": "bg.color.ext", "syntax": "bg-[C]", "expr": "background-color: var(--color-[C]-1);"},
            {"package": "layout.flex.core", "syntax": "flex-row", "expr": "display: flex; flex-direction: row;"},
            {"package": "layout.flex.core", "syntax": "flex-col", "expr": "display: flex; flex-direction: column;"},
            {"package": "effect.border.ext", "syntax": "border", "expr": "border: var(--unit-d5) solid var(--color-gray-4);"},
            {"package": "transform.animate.ext", "syntax": "@keyframes spin", "expr": "from { opacity: 0; } to { opacity: 1; }"},
            {
                "package": "transform.animate.ext",
                "syntax": "animate-spin",
                "expr": "animation: spin 1s linear infinite;",
                "dependencies": ["@keyframes spin"],
            },
            {"package": "component.card.core", "syntax": "card", "compose": ["px-20", "bg-red-2", "border"]},
        ]
    )


@pytest.fixture
def mini_program(tmp_path: Path):
    """
    Return a factory that writes a mini program project.

    The factory takes the app.json pages, a mapping of relative path to
    file content, and returns the project root.
    """

    def make(pages: list[str], files: dict[str, str], subpackages: list[dict] | None = None) -> Path:
        root = tmp_path / "project"
        work_dir = root / "miniprogram"
        work_dir.mkdir(parents=True)
        app = {"pages": pages}
        if subpackages is not None:
            app["subpackages"] = subpackages
        (work_dir / "app.json").write_text(json.dumps(app), encoding="utf-8")
        (work_dir / "app.wxss").write_text(files.pop("app.wxss", ""), encoding="utf-8")
        for name, content in files.items():
            path = work_dir / name
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(content, encoding="utf-8")
        return root

    return make
