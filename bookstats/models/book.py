# bookstats/models/book.py
"""
Book record model consumed by the statistics rules.

Records mirror what the collection store hands over: a flat book with
per-format reading progress plus a nested metadata block.
"""

import re
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional, Tuple, Union


class ReadStatus(str, Enum):
    READ = "READ"
    READING = "READING"
    RE_READING = "RE_READING"
    PARTIALLY_READ = "PARTIALLY_READ"
    PAUSED = "PAUSED"
    UNREAD = "UNREAD"
    WONT_READ = "WONT_READ"
    ABANDONED = "ABANDONED"
    UNSET = "UNSET"

    @classmethod
    def normalize(cls, value: Any) -> "ReadStatus":
        """Map any raw status value onto the enum, UNSET when unknown"""
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            try:
                return cls(value.strip().upper())
            except ValueError:
                return cls.UNSET
        return cls.UNSET

    @property
    def display_name(self) -> str:
        """'RE_READING' -> 'Re Reading'"""
        return " ".join(word.capitalize() for word in self.value.split("_"))


class BookType(str, Enum):
    PDF = "PDF"
    EPUB = "EPUB"
    CBX = "CBX"
    CBZ = "CBZ"
    CBR = "CBR"
    CB7 = "CB7"


@dataclass(frozen=True)
class ReadingProgress:
    """Progress record for one reader format (percentage in 0-100)"""
    percentage: Optional[float] = None


@dataclass(frozen=True)
class BookMetadata:
    title: Optional[str] = None
    page_count: Optional[int] = None
    published_date: Optional[str] = None  # free text, e.g. "2019-05-01"
    categories: Tuple[str, ...] = ()

    # Series data
    series_name: Optional[str] = None
    series_number: Optional[float] = None
    series_total: Optional[int] = None

    # External ratings (0-5 scale)
    goodreads_rating: Optional[float] = None
    amazon_rating: Optional[float] = None
    hardcover_rating: Optional[float] = None
    rating: Optional[float] = None  # generic fallback

    @property
    def external_ratings(self) -> List[float]:
        """Named external ratings that are present and positive"""
        ratings = [self.goodreads_rating, self.amazon_rating, self.hardcover_rating]
        return [r for r in ratings if r]


@dataclass(frozen=True)
class Book:
    """
    A single book from the collection.

    Everything is optional: the statistics rules decide per statistic how a
    missing field is treated (excluded, fallback, or "no rating").
    """

    id: Optional[Union[int, str]] = None
    library_id: Optional[Union[int, str]] = None
    file_name: Optional[str] = None
    book_type: Optional[Union[BookType, str]] = None
    file_size_kb: Optional[float] = None

    personal_rating: Optional[float] = None
    read_status: Optional[Union[ReadStatus, str]] = None

    # Per-format progress, at most one is meaningful per book
    pdf_progress: Optional[ReadingProgress] = None
    epub_progress: Optional[ReadingProgress] = None
    cbx_progress: Optional[ReadingProgress] = None
    koreader_progress: Optional[ReadingProgress] = None
    kobo_progress: Optional[ReadingProgress] = None

    metadata: BookMetadata = field(default_factory=BookMetadata)

    @property
    def title(self) -> Optional[str]:
        return self.metadata.title

    @property
    def book_type_name(self) -> Optional[str]:
        if isinstance(self.book_type, BookType):
            return self.book_type.value
        return self.book_type

    @property
    def status(self) -> ReadStatus:
        return ReadStatus.normalize(self.read_status)

    @property
    def progress_records(self) -> List[Optional[ReadingProgress]]:
        """Progress records in priority order"""
        return [
            self.pdf_progress,
            self.epub_progress,
            self.cbx_progress,
            self.koreader_progress,
            self.kobo_progress,
        ]

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Book":
        """
        Build a Book from a nested dictionary.

        Accepts both the camelCase keys the collection store emits
        (``libraryId``, ``metadata.pageCount``) and snake_case keys.

        Args:
            data: Book dictionary, optionally with a nested ``metadata`` dict

        Returns:
            Book instance
        """
        data = _snake_keys(data)
        metadata = _snake_keys(data.get("metadata") or {})

        categories = metadata.get("categories") or ()
        if isinstance(categories, str):
            categories = [categories]

        book_metadata = BookMetadata(
            title=metadata.get("title"),
            page_count=metadata.get("page_count"),
            published_date=metadata.get("published_date"),
            categories=tuple(categories),
            series_name=metadata.get("series_name"),
            series_number=metadata.get("series_number"),
            series_total=metadata.get("series_total"),
            goodreads_rating=metadata.get("goodreads_rating"),
            amazon_rating=metadata.get("amazon_rating"),
            hardcover_rating=metadata.get("hardcover_rating"),
            rating=metadata.get("rating"),
        )

        return cls(
            id=data.get("id"),
            library_id=data.get("library_id"),
            file_name=data.get("file_name"),
            book_type=data.get("book_type"),
            file_size_kb=data.get("file_size_kb"),
            personal_rating=data.get("personal_rating"),
            read_status=data.get("read_status"),
            pdf_progress=_progress(data.get("pdf_progress")),
            epub_progress=_progress(data.get("epub_progress")),
            cbx_progress=_progress(data.get("cbx_progress")),
            koreader_progress=_progress(data.get("koreader_progress")),
            kobo_progress=_progress(data.get("kobo_progress")),
            metadata=book_metadata,
        )


_CAMEL_BOUNDARY = re.compile(r"(?<!^)(?=[A-Z])")


def _snake_keys(data: Dict[str, Any]) -> Dict[str, Any]:
    return {_CAMEL_BOUNDARY.sub("_", key).lower(): value for key, value in data.items()}


def _progress(value: Any) -> Optional[ReadingProgress]:
    if value is None:
        return None
    if isinstance(value, ReadingProgress):
        return value
    if isinstance(value, dict):
        return ReadingProgress(percentage=value.get("percentage"))
    return ReadingProgress(percentage=value)
