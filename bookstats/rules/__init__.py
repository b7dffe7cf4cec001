"""
Statistics rules: pure (collection, filter) -> view model transformations.
"""

from typing import Dict

from ..models.view_model import StatKind
from .base import StatisticRule, TriggerMode, round_half_up
from .categories import READING_COMPLETION_RULE, TOP_CATEGORIES_RULE
from .filtering import filter_books_by_library
from .pages import PAGE_COUNT_RULE
from .progress import READING_PROGRESS_RULE
from .publication import PUBLICATION_YEAR_RULE
from .ratings import BOOK_RATING_RULE, PERSONAL_RATING_RULE
from .series import SERIES_COMPLETION_RULE, SERIES_STANDALONE_RULE, TOP_SERIES_RULE
from .sizes import BOOK_SIZE_RULE
from .styles import ThemeTokens

ALL_RULES = (
    BOOK_RATING_RULE,
    PERSONAL_RATING_RULE,
    PAGE_COUNT_RULE,
    BOOK_SIZE_RULE,
    PUBLICATION_YEAR_RULE,
    READING_PROGRESS_RULE,
    READING_COMPLETION_RULE,
    SERIES_COMPLETION_RULE,
    SERIES_STANDALONE_RULE,
    TOP_CATEGORIES_RULE,
    TOP_SERIES_RULE,
)

RULES_BY_KIND: Dict[StatKind, StatisticRule] = {rule.kind: rule for rule in ALL_RULES}


def get_rule(kind: StatKind) -> StatisticRule:
    return RULES_BY_KIND[StatKind(kind)]


__all__ = [
    "ALL_RULES",
    "RULES_BY_KIND",
    "StatisticRule",
    "ThemeTokens",
    "TriggerMode",
    "filter_books_by_library",
    "get_rule",
    "round_half_up"
]
