"""Unit tests for search query parsing, placeholders and token expiry."""

import logging
from calendar import timegm

from enrichment.images import (
    PLACEHOLDER_IMAGES,
    AccessToken,
    SearchQuery,
    build_search_query,
    get_placeholder_image_url,
    is_placeholder_url,
)


class TestSearchQueryParse:
    """Tests for SearchQuery.parse()."""

    def test_strips_trailing_year(self):
        query = SearchQuery.parse("Pulp Fiction 1994")
        assert query.text == "Pulp Fiction"
        assert query.year == "1994"

    def test_no_year(self):
        query = SearchQuery.parse("The Legend of Zelda")
        assert query.text == "The Legend of Zelda"
        assert query.year is None

    def test_year_in_middle_collapses_whitespace(self):
        query = SearchQuery.parse("Eiffel Tower  1989   Paris")
        assert query.text == "Eiffel Tower Paris"
        assert query.year == "1989"

    def test_appended_year_wins_over_title_year(self):
        query = SearchQuery.parse("2001: A Space Odyssey 1968")
        assert query.text == "2001: A Space Odyssey"
        assert query.year == "1968"

    def test_bracketed_year_removed_with_brackets(self):
        query = SearchQuery.parse("Pulp Fiction (1994)")
        assert query.text == "Pulp Fiction"
        assert query.year == "1994"

        query = SearchQuery.parse("Heat [ 1995 ] Los Angeles")
        assert query.text == "Heat Los Angeles"
        assert query.year == "1995"

    def test_brackets_without_year_kept(self):
        query = SearchQuery.parse("Alien (Director's Cut)")
        assert query.text == "Alien (Director's Cut)"
        assert query.year is None

    def test_year_only_title_is_kept(self):
        """A title that is only a year stays searchable."""
        query = SearchQuery.parse("1984")
        assert query.text == "1984"
        assert query.year is None

    def test_years_outside_range_ignored(self):
        for raw in ("Fahrenheit 451", "Blade Runner 1850", "Event 2100"):
            query = SearchQuery.parse(raw)
            assert query.year is None
            assert query.text == raw

    def test_year_inside_word_ignored(self):
        query = SearchQuery.parse("R2D2000X")
        assert query.year is None


class TestYearBounds:
    """Tests for SearchQuery.year_bounds()."""

    def test_full_year_in_utc(self):
        start, end = SearchQuery(text="Doom", year="1993").year_bounds()
        assert start == timegm((1993, 1, 1, 0, 0, 0))
        assert end == timegm((1993, 12, 31, 23, 59, 59))

    def test_none_without_year(self):
        assert SearchQuery(text="Doom").year_bounds() is None


class TestBuildSearchQuery:
    """Tests for build_search_query()."""

    def test_title_and_year(self):
        assert build_search_query("cinema", "Pulp Fiction", "1994") == "Pulp Fiction 1994"

    def test_location_only_for_place_types(self):
        assert build_search_query("place", "Eiffel Tower", location="Paris") == "Eiffel Tower Paris"
        assert build_search_query("restaurant", "Noma", location="Copenhagen") == "Noma Copenhagen"
        assert build_search_query("cinema", "Amelie", location="Paris") == "Amelie"

    def test_blank_parts_skipped(self):
        assert build_search_query("travel", " Kyoto ", year=" ", location="  ") == "Kyoto"

    def test_invalid_year_dropped(self, caplog):
        with caplog.at_level(logging.WARNING):
            assert build_search_query("cinema", "Heat", "95") == "Heat"
            assert build_search_query("cinema", "Heat", "1995-12") == "Heat"
        assert "Ignoring invalid year '95'" in caplog.text

    def test_year_is_trimmed(self):
        assert build_search_query("cinema", "Heat", " 1995 ") == "Heat 1995"


class TestPlaceholders:
    """Tests for the placeholder table."""

    def test_known_types(self):
        assert get_placeholder_image_url("cinema").endswith("text=Movie")
        assert get_placeholder_image_url("game").endswith("text=Game")
        assert get_placeholder_image_url("food").endswith("text=Food")

    def test_unknown_type_is_generic(self):
        assert get_placeholder_image_url("unknown-type") == PLACEHOLDER_IMAGES["generic"]
        assert get_placeholder_image_url("travel") == PLACEHOLDER_IMAGES["generic"]

    def test_is_placeholder_url(self):
        for url in PLACEHOLDER_IMAGES.values():
            assert is_placeholder_url(url)
        assert not is_placeholder_url("https://image.tmdb.org/t/p/w500/abc.jpg")

    def test_table_is_read_only(self):
        try:
            PLACEHOLDER_IMAGES["cinema"] = "https://example.com/x.png"
        except TypeError:
            pass
        else:
            raise AssertionError("placeholder table should be immutable")


class TestAccessToken:
    """Tests for AccessToken.is_valid()."""

    def test_valid_before_expiry(self):
        token = AccessToken(token="t", expires_at_ms=10_000)
        assert token.is_valid(9_999)

    def test_invalid_at_expiry(self):
        token = AccessToken(token="t", expires_at_ms=10_000)
        assert not token.is_valid(10_000)
