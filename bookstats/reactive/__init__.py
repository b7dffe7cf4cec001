"""
Reactive layer: observable sources, recomputation controllers and theme restyling.
"""

from .controller import ControllerState, RecomputationController
from .sources import CollectionState, StateSource, Subscription
from .theme import (
    ThemeSignal,
    build_render_config,
    restyle_render_config,
    restyle_view_model,
    theme_from_css_classes,
)

__all__ = [
    "CollectionState",
    "ControllerState",
    "RecomputationController",
    "StateSource",
    "Subscription",
    "ThemeSignal",
    "build_render_config",
    "restyle_render_config",
    "restyle_view_model",
    "theme_from_css_classes"
]
