"""
Theme restyle stage and the theme signal adapter.

Restyling swaps theme-bound style fields on an already computed view model;
labels, values and entries are carried over untouched.
"""

from dataclasses import replace
from typing import Iterable, Sequence

from ..models.view_model import ChartSeries, RenderConfig, ThemeMode, ViewModel
from ..rules.base import StatisticRule
from ..rules.styles import ThemeTokens
from .sources import StateSource

DEFAULT_DARK_CLASS = "p-dark"


def restyle_view_model(view_model: ViewModel, tokens: ThemeTokens, fields: Sequence[str]) -> ViewModel:
    """
    Re-color a view model for another theme.

    Only style keys listed in ``fields`` that the series already carries are
    replaced. A list-valued field keeps its length.

    Args:
        view_model: Published view model
        tokens: Theme tokens for the new mode
        fields: Theme-bound style keys declared by the rule

    Returns:
        New view model; the input is not modified
    """
    series = []
    for item in view_model.series:
        style = dict(item.style)
        for name in fields:
            if name not in style:
                continue
            current = style[name]
            if isinstance(current, list):
                style[name] = [tokens.text_color] * len(current)
            else:
                style[name] = tokens.text_color
        series.append(ChartSeries(name=item.name, values=list(item.values), style=style))

    return replace(
        view_model,
        labels=list(view_model.labels),
        series=series,
        entries=[dict(entry) for entry in view_model.entries],
        theme=tokens.mode,
    )


def build_render_config(rule: StatisticRule, theme: ThemeMode = ThemeMode.LIGHT) -> RenderConfig:
    return rule.render_config(theme)


def restyle_render_config(config: RenderConfig, tokens: ThemeTokens) -> RenderConfig:
    return replace(config, colors=tokens.config_colors())


def theme_from_css_classes(classes: Iterable[str], dark_class: str = DEFAULT_DARK_CLASS) -> ThemeMode:
    """Dark when the document root carries ``dark_class``"""
    if isinstance(classes, str):
        classes = classes.split()
    return ThemeMode.DARK if dark_class in set(classes) else ThemeMode.LIGHT


class ThemeSignal(StateSource):
    """
    Source of ThemeMode values.

    Fed either from the document root's class list or from a plain
    dark-mode boolean. Repeated values are not re-emitted.
    """

    def __init__(self, initial: ThemeMode = ThemeMode.LIGHT, dark_class: str = DEFAULT_DARK_CLASS):
        super().__init__(ThemeMode(initial), name="theme")
        self.dark_class = dark_class

    @property
    def is_dark(self) -> bool:
        return self.value == ThemeMode.DARK

    def set_mode(self, mode: ThemeMode) -> None:
        mode = ThemeMode(mode)
        if mode == self.value:
            return
        self.logger.debug(f"Theme changed to {mode.value}")
        self.emit(mode)

    def set_dark(self, dark: bool) -> None:
        self.set_mode(ThemeMode.DARK if dark else ThemeMode.LIGHT)

    def update_from_css_classes(self, classes: Iterable[str]) -> None:
        self.set_mode(theme_from_css_classes(classes, self.dark_class))

    @classmethod
    def from_css_classes(
        cls, classes: Iterable[str], dark_class: str = DEFAULT_DARK_CLASS
    ) -> "ThemeSignal":
        return cls(theme_from_css_classes(classes, dark_class), dark_class=dark_class)
