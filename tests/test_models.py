"""
Tests for identifier parsing.
"""
import pytest

from devsync.models import MAX_ID, parse_id


class TestParseId:
    """Tests for parse_id()."""

    @pytest.mark.parametrize("value, expected", [
        (1, 1),
        ("42", 42),
        (" 7 ", 7),
        (MAX_ID, MAX_ID),
        (str(MAX_ID), MAX_ID),
    ])
    def test_valid_ids(self, value, expected):
        assert parse_id(value) == expected

    @pytest.mark.parametrize("value", [
        None, True, False, 0, -1, "", "abc", "12abc", "-3", "1.5", 1.0,
        "٣",  # Arabic-Indic digit three
    ])
    def test_malformed_ids(self, value):
        assert parse_id(value) is None

    @pytest.mark.parametrize("value", [
        MAX_ID + 1,
        str(MAX_ID + 1),
        10**20,
        "99999999999999999999999",
    ])
    def test_out_of_range_ids(self, value):
        """Numbers too large for an Integer column name no row."""
        assert parse_id(value) is None
