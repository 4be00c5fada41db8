"""
Unit tests for the theme palette model and color aliases.
"""

import pytest

from atomcss.core.errors import ThemeConfigError
from atomcss.core.ir import ThemeMap
from atomcss.core.palette import build_theme_map, derive_color_aliases

SCALARS = {"primary": "#1677ff", "black": "#000000", "white": "#ffffff"}


class TestThemeMap:
    """Tests for ramp lookup."""

    def test_scalar_ramp(self, small_themes):
        assert small_themes.ramp("antd", "white") == ["#ffffff"]

    def test_palette_ramp(self, small_themes):
        assert small_themes.ramp("antd", "red") == ["#fff1f0", "#ffccc7", "#ffa39e"]

    def test_unknown(self, small_themes):
        assert small_themes.ramp("antd", "teal") is None
        assert small_themes.ramp("material", "red") is None

    def test_theme_names_scalars_first(self, small_themes):
        assert small_themes.theme_names() == ["primary", "black", "white", "red", "gray", "mono"]


class TestBuildThemeMap:
    """Tests for palette validation."""

    def test_valid(self):
        theme_map = build_theme_map({**SCALARS, "palette": {"antd": {"red": ["#fff1f0"]}}})
        assert theme_map.scalar("primary") == "#1677ff"

    def test_missing_scalar(self):
        with pytest.raises(ThemeConfigError, match="Invalid theme palette"):
            build_theme_map({"primary": "#1677ff", "palette": {}})

    def test_ramp_must_be_list(self):
        with pytest.raises(ThemeConfigError):
            build_theme_map({**SCALARS, "palette": {"antd": {"red": "#fff1f0"}}})

    def test_theme_shadowing_scalar(self):
        with pytest.raises(ThemeConfigError, match="shadows a scalar"):
            build_theme_map({**SCALARS, "palette": {"antd": {"white": ["#fefefe"]}}})

    def test_theme_name_letters_only(self):
        """Theme names must fit the [a-z]+ color slot."""
        with pytest.raises(ThemeConfigError, match="lowercase letters"):
            build_theme_map({**SCALARS, "palette": {"antd": {"blue2": ["#0000ff"]}}})

    def test_passthrough(self, small_themes):
        assert build_theme_map(small_themes) is small_themes


class TestColorAliases:
    """Tests for short alias derivation."""

    def test_reserved_scalars(self, small_themes):
        aliases = derive_color_aliases(small_themes)
        assert aliases["primary"] == "p"
        assert aliases["black"] == "b"
        assert aliases["white"] == "w"

    def test_first_letter(self, small_themes):
        aliases = derive_color_aliases(small_themes)
        assert aliases["red"] == "r"
        assert aliases["gray"] == "g"
        assert aliases["mono"] == "m"

    def test_unique(self, bundled_themes):
        aliases = derive_color_aliases(bundled_themes)
        assert len(set(aliases.values())) == len(aliases)
        assert set(aliases) == set(bundled_themes.theme_names())

    def test_collision_takes_next_free_letter(self):
        theme_map = ThemeMap(**SCALARS, palette={"antd": {"blue": ["#00f"], "brown": ["#a52a2a"]}})
        aliases = derive_color_aliases(theme_map)
        # b is reserved for black
        assert aliases["blue"] == "a"
        assert aliases["brown"] == "c"
