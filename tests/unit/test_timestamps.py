"""Unit tests for timestamp normalisation."""

from datetime import datetime, timezone

import pytest

from travel_admin.application.repositories.timestamps import OLDEST, sort_key, to_datetime


class _ProviderTimestamp:
    def __init__(self, value: datetime):
        self._value = value

    def to_datetime(self) -> datetime:
        return self._value


def test_none_stays_none():
    assert to_datetime(None) is None


def test_naive_datetime_is_taken_as_utc():
    assert to_datetime(datetime(2024, 5, 1, 12, 0)) == datetime(2024, 5, 1, 12, 0, tzinfo=timezone.utc)


def test_iso_string_with_offset():
    value = to_datetime("2024-05-01T12:00:00.000001+00:00")
    assert value == datetime(2024, 5, 1, 12, 0, 0, 1, tzinfo=timezone.utc)


def test_epoch_seconds():
    assert to_datetime(0) == datetime(1970, 1, 1, tzinfo=timezone.utc)


def test_provider_timestamp_object():
    stamp = _ProviderTimestamp(datetime(2024, 5, 1))
    assert to_datetime(stamp) == datetime(2024, 5, 1, tzinfo=timezone.utc)


def test_unsupported_value_raises():
    with pytest.raises(ValueError):
        to_datetime(object())


def test_missing_timestamps_sort_last_when_descending():
    values = [None, "2024-01-02T00:00:00+00:00", "2024-01-01T00:00:00+00:00"]
    ordered = sorted(values, key=sort_key, reverse=True)
    assert ordered[-1] is None
    assert sort_key(None) == OLDEST
