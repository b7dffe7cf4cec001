"""
Tests for the publication year series.
"""

import pytest

from bookstats.rules.publication import calculate_publication_year_stats, extract_year

from conftest import make_book


class TestExtractYear:
    """Test year extraction from free-text dates."""

    @pytest.mark.parametrize(
        "text,expected",
        [
            ("2019-05-01", 2019),
            ("2019", 2019),
            ("May 3, 1999", 1999),
            ("c. 1850 (reprint 1990)", 1850),
            ("n/a", None),
            ("", None),
            (None, None),
            ("99", None),
        ],
    )
    def test_extract_year(self, text, expected):
        """Test the first four-digit run is the year."""
        assert extract_year(text) == expected


class TestPublicationYearStats:
    """Test counting books per publication year."""

    def test_counts_sorted_by_year(self):
        """Test ascending years with their counts and decades."""
        books = [
            make_book(published_date="2019-05-01"),
            make_book(published_date="1999"),
            make_book(published_date="2019-11-20"),
        ]
        stats = calculate_publication_year_stats(books, current_year=2024)
        assert [(s.year, s.count, s.decade) for s in stats] == [("1999", 1, "1990s"), ("2019", 2, "2010s")]

    def test_out_of_range_years_discarded(self):
        """Test that years before 1800 or after the current year are dropped."""
        books = [
            make_book(published_date="1750"),
            make_book(published_date="1800"),
            make_book(published_date="2031"),
            make_book(published_date="n/a"),
        ]
        stats = calculate_publication_year_stats(books, current_year=2030)
        assert [s.year for s in stats] == ["1800"]

    def test_missing_years_not_filled(self):
        """Test that gaps between years stay gaps."""
        books = [make_book(published_date="2001"), make_book(published_date="2005")]
        stats = calculate_publication_year_stats(books, current_year=2024)
        assert [s.year for s in stats] == ["2001", "2005"]

    def test_defaults_to_this_year(self):
        """Test the default upper bound accepts this year's books."""
        from datetime import date

        this_year = str(date.today().year)
        stats = calculate_publication_year_stats([make_book(published_date=this_year)])
        assert [s.year for s in stats] == [this_year]

    def test_empty_collection(self):
        """Test that no books give no stats."""
        assert calculate_publication_year_stats([]) == []
