"""
Runtime configuration read from the environment.
"""

import logging
import os
from dataclasses import dataclass
from typing import Optional, Union

from .models.view_model import ThemeMode

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


@dataclass
class StatsConfig:
    log_level: str = "INFO"
    theme: ThemeMode = ThemeMode.LIGHT
    dark_class: str = "p-dark"
    library_id: Optional[Union[int, str]] = None

    @classmethod
    def from_env(cls) -> "StatsConfig":
        theme = os.environ.get("BOOKSTATS_THEME", "light").strip().lower()
        if theme not in (ThemeMode.LIGHT.value, ThemeMode.DARK.value):
            logging.getLogger(__name__).warning(f"Unknown BOOKSTATS_THEME '{theme}', using light")
            theme = ThemeMode.LIGHT.value

        return cls(
            log_level=os.environ.get("BOOKSTATS_LOG_LEVEL", "INFO").upper(),
            theme=ThemeMode(theme),
            dark_class=os.environ.get("BOOKSTATS_DARK_CLASS", "p-dark"),
            library_id=parse_library_id(os.environ.get("BOOKSTATS_LIBRARY_ID")),
        )


def parse_library_id(value: Optional[str]) -> Optional[Union[int, str]]:
    """'' or unset means all libraries; numeric ids become int"""
    if value is None or not value.strip():
        return None
    value = value.strip()
    return int(value) if value.isdigit() else value


def configure_logging(level: str = "INFO") -> None:
    logging.basicConfig(level=getattr(logging, level.upper(), logging.INFO), format=LOG_FORMAT)
