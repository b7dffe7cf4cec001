"""
Theme tokens and palettes shared by the statistics rules.

Style is a pure function of the theme mode and the bucket index/category;
nothing here reads global state.
"""

from dataclasses import dataclass
from typing import List, Sequence

from ..models.view_model import ThemeMode


@dataclass(frozen=True)
class ThemeTokens:
    """Theme-dependent colors used by chart styles and render configs"""
    mode: ThemeMode
    text_color: str
    tooltip_background: str
    tooltip_border: str
    grid_x: str
    grid_y: str

    @classmethod
    def for_mode(cls, mode: ThemeMode) -> "ThemeTokens":
        if ThemeMode(mode) == ThemeMode.DARK:
            return cls(
                mode=ThemeMode.DARK,
                text_color="#ffffff",
                tooltip_background="rgba(0, 0, 0, 0.9)",
                tooltip_border="#ffffff",
                grid_x="rgba(255, 255, 255, 0.1)",
                grid_y="rgba(255, 255, 255, 0.05)",
            )
        return cls(
            mode=ThemeMode.LIGHT,
            text_color="#000000",
            tooltip_background="rgba(255, 255, 255, 0.9)",
            tooltip_border="#000000",
            grid_x="rgba(0, 0, 0, 0.1)",
            grid_y="rgba(0, 0, 0, 0.05)",
        )

    def config_colors(self) -> dict:
        """Colors for a chart's static render config"""
        return {
            "text": self.text_color,
            "tooltip_background": self.tooltip_background,
            "tooltip_border": self.tooltip_border,
            "grid_x": self.grid_x,
            "grid_y": self.grid_y,
        }


# Fallback bar color for unrecognised book types
FALLBACK_COLOR = "#95a5a6"


def border_defaults(tokens: ThemeTokens, border_width: int = 1, hover_border_width: int = 2) -> dict:
    """Border fields most bar-style series share"""
    return {
        "border_color": tokens.text_color,
        "border_width": border_width,
        "hover_border_width": hover_border_width,
        "hover_border_color": tokens.text_color,
    }


def cycle_colors(palette: Sequence[str], count: int) -> List[str]:
    """Repeat a palette until it covers ``count`` entries"""
    if not palette:
        return []
    return [palette[i % len(palette)] for i in range(count)]
