"""
Tests for the book and view models.
"""

from bookstats.models import Book, BookType, ReadingProgress, ReadStatus, StatKind, ViewModel

from conftest import make_book


class TestReadStatus:
    """Test read status normalization."""

    def test_normalize(self):
        """Test known, lower-case and unknown values."""
        assert ReadStatus.normalize("READ") == ReadStatus.READ
        assert ReadStatus.normalize(" re_reading ") == ReadStatus.RE_READING
        assert ReadStatus.normalize("SKIMMED") == ReadStatus.UNSET
        assert ReadStatus.normalize(None) == ReadStatus.UNSET
        assert ReadStatus.normalize(3) == ReadStatus.UNSET

    def test_display_name(self):
        """Test human-readable status names."""
        assert ReadStatus.RE_READING.display_name == "Re Reading"
        assert ReadStatus.WONT_READ.display_name == "Wont Read"


class TestBookFromDict:
    """Test building books from store dictionaries."""

    def test_camel_case_keys(self):
        """Test the store's camelCase field names."""
        book = Book.from_dict({
            "id": 5,
            "libraryId": 2,
            "bookType": "CBZ",
            "fileSizeKb": 300,
            "koboProgress": {"percentage": 12},
            "metadata": {"title": "T", "seriesName": "S", "categories": "Solo"},
        })
        assert book.library_id == 2
        assert book.book_type_name == "CBZ"
        assert book.kobo_progress == ReadingProgress(12)
        assert book.metadata.series_name == "S"
        assert book.metadata.categories == ("Solo",)

    def test_numeric_progress(self):
        """Test a bare percentage as progress."""
        book = Book.from_dict({"pdf_progress": 40})
        assert book.pdf_progress.percentage == 40

    def test_missing_metadata(self):
        """Test a record without metadata."""
        book = Book.from_dict({"id": 1, "metadata": None})
        assert book.title is None
        assert book.metadata.categories == ()


class TestBook:
    """Test book helpers."""

    def test_enum_book_type_name(self):
        """Test the type name for enum and raw values."""
        assert make_book(book_type=BookType.PDF).book_type_name == "PDF"
        assert make_book(book_type="AZW3").book_type_name == "AZW3"
        assert make_book().book_type_name is None

    def test_progress_record_order(self):
        """Test the priority order of progress records."""
        book = make_book(kobo_progress=1, pdf_progress=2)
        assert [r.percentage if r else None for r in book.progress_records] == [2, None, None, None, 1]


class TestViewModel:
    """Test view model helpers."""

    def test_empty(self):
        """Test the empty view model."""
        view_model = ViewModel.empty(StatKind.TOP_SERIES)
        assert view_model.is_empty
        assert view_model.series_by_name("Books") is None
        assert view_model.to_dashboard_dict()["labels"] == []
