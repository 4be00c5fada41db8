"""
Color theme palette model.

Value ranges:
- primary, black, white are single scalar colors
- every other theme is a ramp of colors under a provider (e.g. 10 shades,
  13 for gray)

Class-name usage:
- ``[theme]-[order]`` and ``[theme]-[order]-a[alpha]``
- ``[theme]`` equals ``[theme]-1``
- ``[theme]-a[alpha]`` equals ``[theme]-1-a[alpha]``
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

SCALAR_THEMES: tuple[str, ...] = ("primary", "black", "white")


class ThemeMap(BaseModel):
    """
    Palette of scalar colors plus provider -> theme -> ramp tables.

    Example:
        ThemeMap(
            primary="#1890ff",
            black="#000000",
            white="#ffffff",
            palette={"antd": {"red": ["#fff1f0", "#ffccc7"]}},
        )
    """

    model_config = ConfigDict(frozen=True)

    primary: str = Field(description="Primary brand color")
    black: str = Field(description="Black scalar color")
    white: str = Field(description="White scalar color")
    palette: dict[str, dict[str, list[str]]] = Field(
        default_factory=dict, description="Provider -> theme -> ordered color ramp"
    )

    def scalar(self, name: str) -> str | None:
        """Return the scalar color for primary/black/white, else None."""
        if name in SCALAR_THEMES:
            return str(getattr(self, name))
        return None

    def ramp(self, provider: str, theme: str) -> list[str] | None:
        """Return the color ramp of a theme, a one-color ramp for scalars, or None."""
        scalar = self.scalar(theme)
        if scalar is not None:
            return [scalar]
        return self.palette.get(provider, {}).get(theme)

    def theme_names(self) -> list[str]:
        """All theme names across providers, scalars first, in first-seen order."""
        names: dict[str, None] = dict.fromkeys(SCALAR_THEMES)
        for themes in self.palette.values():
            names.update(dict.fromkeys(themes))
        return list(names)
