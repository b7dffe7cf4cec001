"""
Collection loader: reads a book collection export into Book records.

Supports a JSON export (a list of nested book objects, or an object with a
``books`` list) and a CSV whose columns use the flattened dotted names
(``metadata.title``, ``pdfProgress.percentage``, ...).
"""

import json
import math
import logging
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

import pandas as pd

from ..models.book import Book
from ..reactive.sources import CollectionState


class StatsLoadError(Exception):
    """Raised when a collection file cannot be read as a list of books"""


INT_FIELDS = {"metadata.pageCount", "metadata.seriesTotal"}

FLOAT_FIELDS = {
    "fileSizeKb",
    "personalRating",
    "metadata.seriesNumber",
    "metadata.goodreadsRating",
    "metadata.amazonRating",
    "metadata.hardcoverRating",
    "metadata.rating",
}

KEY_FIELDS = {"id", "libraryId"}

PROGRESS_FIELDS = ("pdfProgress", "epubProgress", "cbxProgress", "koreaderProgress", "koboProgress")

CATEGORY_FIELD = "metadata.categories"


class CollectionLoader:
    """
    Loads collection exports into Book objects.

    Rows that cannot be converted are logged and skipped; the rest of the
    file still loads.
    """

    def __init__(self, category_separator: str = ","):
        self.category_separator = category_separator
        self.logger = logging.getLogger(self.__class__.__name__)

    def load(self, path: Union[str, Path]) -> List[Book]:
        """
        Load books from a JSON or CSV collection export.

        Args:
            path: Path to a .json or .csv file

        Returns:
            List of Book objects
        """
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"Collection file not found: {path}")

        self.logger.info(f"Loading collection from {path}")

        suffix = path.suffix.lower()
        if suffix == ".json":
            df = self._read_json(path)
        elif suffix == ".csv":
            df = self._read_csv(path)
        else:
            raise StatsLoadError(f"Unsupported collection format: {path.suffix or '(none)'}")

        books = self.books_from_frame(df)
        self.logger.info(f"Loaded {len(books)} books from {path.name}")
        return books

    def load_state(self, path: Union[str, Path]) -> CollectionState:
        return CollectionState(loaded=True, books=self.load(path))

    def books_from_records(self, records: List[Dict[str, Any]]) -> List[Book]:
        """Convert nested book dictionaries (as the collection store emits them)"""
        if not records:
            return []
        return self.books_from_frame(pd.json_normalize(records))

    def books_from_frame(self, df: pd.DataFrame) -> List[Book]:
        books = []
        for _, row in df.iterrows():
            book = self._row_to_book(row)
            if book:
                books.append(book)
        return books

    def _read_json(self, path: Path) -> pd.DataFrame:
        try:
            with open(path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except json.JSONDecodeError as e:
            raise StatsLoadError(f"Invalid JSON in {path}: {e}") from e

        if isinstance(data, dict):
            data = data.get("books")
        if not isinstance(data, list):
            raise StatsLoadError(f"{path} does not contain a list of books")

        records = [record for record in data if isinstance(record, dict)]
        if len(records) < len(data):
            self.logger.warning(f"Ignoring {len(data) - len(records)} non-object entries in {path.name}")
        if not records:
            return pd.DataFrame()
        return pd.json_normalize(records)

    def _read_csv(self, path: Path) -> pd.DataFrame:
        try:
            return pd.read_csv(path)
        except pd.errors.EmptyDataError:
            return pd.DataFrame()
        except pd.errors.ParserError as e:
            raise StatsLoadError(f"Invalid CSV in {path}: {e}") from e

    def _row_to_book(self, row: pd.Series) -> Optional[Book]:
        """
        Convert one flattened row to a Book.

        Args:
            row: Pandas Series with dotted column names

        Returns:
            Book object or None if the row is invalid
        """
        try:
            data: Dict[str, Any] = {}
            metadata: Dict[str, Any] = {}

            for column, value in row.items():
                column = str(column)
                if column == CATEGORY_FIELD:
                    metadata["categories"] = self._parse_categories(value)
                    continue

                root, _, leaf = column.partition(".")
                if root in PROGRESS_FIELDS:
                    if leaf in ("", "percentage"):
                        percentage = self._safe_float(value)
                        if percentage is not None:
                            data[root] = {"percentage": percentage}
                    continue

                converted = self._convert(column, value)
                if converted is None:
                    continue
                if root == "metadata" and leaf:
                    metadata[leaf] = converted
                elif not leaf:
                    data[column] = converted

            data["metadata"] = metadata
            return Book.from_dict(data)

        except Exception as e:
            self.logger.warning(f"Failed to process row: {e}")
            return None

    def _convert(self, column: str, value: Any) -> Any:
        if isinstance(value, (list, dict)):
            return value
        if column in INT_FIELDS:
            return self._safe_int(value)
        if column in FLOAT_FIELDS:
            return self._safe_float(value)
        if column in KEY_FIELDS:
            return self._safe_key(value)
        return self._safe_str(value)

    def _parse_categories(self, value: Any) -> List[str]:
        """Categories from a JSON list or a separator-delimited CSV cell"""
        if isinstance(value, (list, tuple)):
            return [str(v).strip() for v in value if v is not None and str(v).strip()]
        if isinstance(value, str):
            return [c.strip() for c in value.split(self.category_separator) if c.strip()]
        return []

    @staticmethod
    def _is_missing(value) -> bool:
        """None, NaN and blank strings all mean the store had no value"""
        if isinstance(value, str):
            return not value.strip()
        return value is None or bool(pd.isna(value))

    def _safe_str(self, value) -> Optional[str]:
        if self._is_missing(value):
            return None
        return str(value).strip()

    def _safe_float(self, value) -> Optional[float]:
        """Finite float or None; unparseable text is treated as missing"""
        if self._is_missing(value):
            return None
        try:
            number = float(value)
        except (ValueError, TypeError):
            return None
        return number if math.isfinite(number) else None

    def _safe_int(self, value) -> Optional[int]:
        """Counts and sizes: "3.0" becomes 3, and zero means unknown"""
        number = self._safe_float(value)
        if not number:
            return None
        return int(number)

    def _safe_key(self, value) -> Optional[Union[int, str]]:
        """Identifiers: integral numbers become int, anything else a string"""
        if self._is_missing(value):
            return None
        number = self._safe_float(value)
        if number is not None and number.is_integer():
            return int(number)
        return str(value).strip()
