"""
Shared builders for the bookstats test suite.
"""

from dataclasses import fields
from typing import List

import pytest

from bookstats.models import Book, BookMetadata, ReadingProgress
from bookstats.reactive import CollectionState, StateSource

_BOOK_FIELDS = {f.name for f in fields(Book)} - {"metadata"}
_METADATA_FIELDS = {f.name for f in fields(BookMetadata)}
_PROGRESS_FIELDS = {"pdf_progress", "epub_progress", "cbx_progress", "koreader_progress", "kobo_progress"}


def make_book(**kwargs) -> Book:
    """
    Build a Book from flat keyword arguments.

    Metadata fields (title, page_count, categories, ...) go to BookMetadata;
    progress fields accept a plain percentage.
    """
    book_args = {}
    metadata_args = {}
    for key, value in kwargs.items():
        if key in _PROGRESS_FIELDS and not isinstance(value, ReadingProgress) and value is not None:
            value = ReadingProgress(percentage=value)
        if key == "categories":
            value = tuple(value)
        if key in _BOOK_FIELDS:
            book_args[key] = value
        elif key in _METADATA_FIELDS:
            metadata_args[key] = value
        else:
            raise TypeError(f"Unknown book field: {key}")
    return Book(metadata=BookMetadata(**metadata_args), **book_args)


def make_series(name: str, owned: int, total=None, read: int = 0, **extra) -> List[Book]:
    """``owned`` books of one series numbered from 1, the first ``read`` of them READ"""
    return [
        make_book(
            title=f"{name} {number}",
            series_name=name,
            series_number=number,
            series_total=total,
            read_status="READ" if number <= read else "UNREAD",
            **extra,
        )
        for number in range(1, owned + 1)
    ]


@pytest.fixture
def book_factory():
    return make_book


@pytest.fixture
def sample_books() -> List[Book]:
    """Small two-library collection touching every statistic"""
    return [
        make_book(
            id=1, library_id=1, title="The Long Road", book_type="EPUB", file_size_kb=2048,
            personal_rating=9, read_status="READ", epub_progress=100,
            page_count=640, published_date="2015-03-01", categories=["Fantasy", "Adventure"],
            series_name="Road", series_number=1, series_total=3, goodreads_rating=4.2,
        ),
        make_book(
            id=2, library_id=1, title="The Longer Road", book_type="PDF", file_size_kb=10240,
            personal_rating=7, read_status="READING", pdf_progress=40,
            page_count=720, published_date="2017", categories=["Fantasy"],
            series_name="Road", series_number=2, series_total=3, goodreads_rating=4.0,
        ),
        make_book(
            id=3, library_id=2, title="Small Things", book_type="CBZ", file_size_kb=512,
            read_status="UNREAD", page_count=120, published_date="2019-05-01",
            categories=["Comics"], amazon_rating=3.5,
        ),
        make_book(
            id=4, library_id=2, title="Numbers", book_type="PDF", file_size_kb=4096,
            personal_rating=5, read_status="ABANDONED", pdf_progress=10,
            page_count=300, published_date="n/a",
        ),
    ]


@pytest.fixture
def collection_source(sample_books) -> StateSource:
    return StateSource(CollectionState(loaded=True, books=sample_books), name="collection")


@pytest.fixture
def filter_source() -> StateSource:
    return StateSource(None, name="library_filter")
