"""
Tests for loading collection exports.
"""

import json
import logging

import pytest

from bookstats.models import ReadStatus
from bookstats.pipeline import CollectionLoader, StatsLoadError

RECORDS = [
    {
        "id": 1,
        "libraryId": 1,
        "fileName": "long-road.epub",
        "bookType": "EPUB",
        "fileSizeKb": 2048,
        "personalRating": 9,
        "readStatus": "READ",
        "epubProgress": {"percentage": 100},
        "metadata": {
            "title": "The Long Road",
            "pageCount": 640,
            "publishedDate": "2015-03-01",
            "categories": ["Fantasy", "Adventure"],
            "seriesName": "Road",
            "seriesNumber": 1,
            "seriesTotal": 3,
            "goodreadsRating": 4.2,
        },
    },
    {
        "id": 2,
        "libraryId": 2,
        "bookType": "PDF",
        "readStatus": "unknown-status",
        "metadata": {"title": "Numbers"},
    },
]


@pytest.fixture
def loader():
    return CollectionLoader()


class TestJsonLoading:
    """Test loading a JSON export."""

    def test_nested_records(self, loader, tmp_path):
        """Test that nested records become Book objects."""
        path = tmp_path / "collection.json"
        path.write_text(json.dumps(RECORDS))

        books = loader.load(path)

        assert len(books) == 2
        first = books[0]
        assert first.id == 1
        assert first.library_id == 1
        assert first.file_size_kb == 2048
        assert first.epub_progress.percentage == 100
        assert first.metadata.page_count == 640
        assert first.metadata.categories == ("Fantasy", "Adventure")
        assert first.metadata.series_total == 3
        assert first.metadata.goodreads_rating == 4.2

    def test_missing_fields_stay_empty(self, loader, tmp_path):
        """Test that absent fields are None rather than NaN."""
        path = tmp_path / "collection.json"
        path.write_text(json.dumps(RECORDS))

        second = loader.load(path)[1]
        assert second.file_size_kb is None
        assert second.epub_progress is None
        assert second.metadata.page_count is None
        assert second.metadata.categories == ()
        assert second.status == ReadStatus.UNSET

    def test_books_wrapper_object(self, loader, tmp_path):
        """Test an export wrapped in a books key."""
        path = tmp_path / "state.json"
        path.write_text(json.dumps({"loaded": True, "books": RECORDS}))
        state = loader.load_state(path)
        assert state.loaded
        assert len(state.books) == 2

    def test_not_a_list(self, loader, tmp_path):
        """Test that a JSON scalar is rejected."""
        path = tmp_path / "bad.json"
        path.write_text(json.dumps({"count": 3}))
        with pytest.raises(StatsLoadError):
            loader.load(path)

    def test_invalid_json(self, loader, tmp_path):
        """Test that broken JSON raises a load error."""
        path = tmp_path / "broken.json"
        path.write_text("[{")
        with pytest.raises(StatsLoadError):
            loader.load(path)

    def test_non_object_entries_skipped(self, loader, tmp_path, caplog):
        """Test that non-object entries are logged and ignored."""
        path = tmp_path / "mixed.json"
        path.write_text(json.dumps([RECORDS[0], 42, "x"]))
        with caplog.at_level(logging.WARNING):
            books = loader.load(path)
        assert len(books) == 1
        assert "Ignoring 2 non-object entries" in caplog.text

    def test_empty_list(self, loader, tmp_path):
        """Test an empty export."""
        path = tmp_path / "empty.json"
        path.write_text("[]")
        assert loader.load(path) == []


class TestCsvLoading:
    """Test loading a CSV export with dotted column names."""

    def test_dotted_columns(self, loader, tmp_path):
        """Test CSV rows with flattened metadata columns."""
        path = tmp_path / "collection.csv"
        path.write_text(
            "id,libraryId,bookType,fileSizeKb,readStatus,pdfProgress.percentage,"
            "metadata.title,metadata.pageCount,metadata.categories,metadata.publishedDate\n"
            "1,1,PDF,1024,READ,55.5,Alpha,320,\"Fantasy, Horror\",2019-05-01\n"
            "2,2,EPUB,,UNREAD,,Beta,,,\n"
        )

        books = loader.load(path)

        assert [b.title for b in books] == ["Alpha", "Beta"]
        alpha, beta = books
        assert alpha.library_id == 1
        assert alpha.pdf_progress.percentage == 55.5
        assert alpha.metadata.page_count == 320
        assert alpha.metadata.categories == ("Fantasy", "Horror")
        assert alpha.metadata.published_date == "2019-05-01"
        assert beta.file_size_kb is None
        assert beta.pdf_progress is None
        assert beta.metadata.categories == ()

    def test_custom_category_separator(self, tmp_path):
        """Test a different category separator."""
        path = tmp_path / "collection.csv"
        path.write_text("id,metadata.categories\n1,\"Sci-Fi|Space, Opera\"\n")
        books = CollectionLoader(category_separator="|").load(path)
        assert books[0].metadata.categories == ("Sci-Fi", "Space, Opera")


class TestLoaderErrors:
    """Test loader failures."""

    def test_missing_file(self, loader, tmp_path):
        """Test that a missing file raises FileNotFoundError."""
        with pytest.raises(FileNotFoundError):
            loader.load(tmp_path / "nowhere.json")

    def test_unsupported_format(self, loader, tmp_path):
        """Test that unknown extensions are rejected."""
        path = tmp_path / "collection.xml"
        path.write_text("<books/>")
        with pytest.raises(StatsLoadError):
            loader.load(path)


class TestRecords:
    """Test converting in-memory records."""

    def test_books_from_records(self, loader):
        """Test records shaped like the collection store's books."""
        books = loader.books_from_records(RECORDS)
        assert [b.id for b in books] == [1, 2]
        assert books[0].metadata.series_name == "Road"

    def test_no_records(self, loader):
        """Test an empty record list."""
        assert loader.books_from_records([]) == []

    def test_blank_and_unparseable_values_are_missing(self, loader):
        """Test that whitespace-only text, non-numeric numbers and zero counts load as empty."""
        books = loader.books_from_records([
            {
                "id": "7.0",
                "libraryId": "   ",
                "fileSizeKb": "abc",
                "personalRating": "nan",
                "pdfProgress": {"percentage": "n/a"},
                "metadata": {"title": "  ", "pageCount": 0, "seriesTotal": "3.0", "goodreadsRating": " 4.5 "},
            }
        ])

        book = books[0]
        assert book.id == 7
        assert book.library_id is None
        assert book.file_size_kb is None
        assert book.personal_rating is None
        assert book.pdf_progress is None
        assert book.metadata.title is None
        assert book.metadata.page_count is None
        assert book.metadata.series_total == 3
        assert book.metadata.goodreads_rating == 4.5
