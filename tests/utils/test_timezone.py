"""Tests for utils/timezone.py - UTC-everywhere time handling."""

from datetime import datetime, timedelta, timezone

import pytest

from utils.timezone import assume_utc, now_utc, to_utc

CENTRAL = timezone(timedelta(hours=-6))


class TestNowUtc:
    """Tests for now_utc()."""

    def test_is_aware_utc(self):
        """Result must carry the UTC tzinfo."""
        assert now_utc().tzinfo == timezone.utc


class TestToUtc:
    """Tests for to_utc()."""

    def test_raises_on_naive(self):
        """Naive datetime must raise ValueError."""
        with pytest.raises(ValueError, match="naive"):
            to_utc(datetime(2024, 1, 1, 12, 0, 0))

    def test_converts_offset(self):
        """12:00-06:00 becomes 18:00 UTC."""
        result = to_utc(datetime(2024, 1, 1, 12, 0, 0, tzinfo=CENTRAL))
        assert result.tzinfo == timezone.utc
        assert result.hour == 18


class TestAssumeUtc:
    """Tests for assume_utc()."""

    def test_none_passes_through(self):
        assert assume_utc(None) is None

    def test_naive_is_read_as_utc(self):
        """Wall-clock time is kept, only the tzinfo is attached."""
        result = assume_utc(datetime(2024, 5, 1, 9, 30))
        assert result == datetime(2024, 5, 1, 9, 30, tzinfo=timezone.utc)

    def test_aware_is_converted(self):
        result = assume_utc(datetime(2024, 5, 1, 9, 30, tzinfo=CENTRAL))
        assert result.tzinfo == timezone.utc
        assert result.hour == 15
