"""
Library filter applied ahead of every statistics rule.
"""

from typing import Iterable, List, Optional, Union

from ..models.book import Book

LibraryId = Union[int, str]


def filter_books_by_library(books: Iterable[Book], selected_library_id: Optional[LibraryId]) -> List[Book]:
    """
    Restrict a collection to the selected library.

    Args:
        books: Full collection, in store order
        selected_library_id: Library to keep, or None for every library

    Returns:
        New list preserving input order; empty when nothing matches
    """
    if selected_library_id is None:
        return list(books)
    return [book for book in books if book.library_id == selected_library_id]
