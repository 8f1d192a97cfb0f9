from datetime import datetime, timedelta, timezone

import pytest

from core.exceptions.invalid_timestamp_error import InvalidTimestampError
from infra.utils.timestamps import as_utc, format_utc_timestamp, parse_utc_timestamp


def test_parse_utc_timestamp_treats_store_format_as_utc() -> None:
    parsed = parse_utc_timestamp("2025-12-14 13:46:14")

    assert parsed == datetime(2025, 12, 14, 13, 46, 14, tzinfo=timezone.utc)
    assert parsed.utcoffset() == timedelta(0)


def test_parse_utc_timestamp_accepts_fractional_seconds() -> None:
    parsed = parse_utc_timestamp("2025-12-14 13:46:14.250000")

    assert parsed.microsecond == 250_000
    assert parsed.tzinfo is timezone.utc


@pytest.mark.parametrize(
    "value",
    ["", "yesterday", "2025-12-14T13:46:14Z", "2025-12-14 13:46:14+02:00", "14/12/2025 13:46:14"],
)
def test_parse_utc_timestamp_rejects_other_formats(value: str) -> None:
    with pytest.raises(InvalidTimestampError, match="expected 'YYYY-MM-DD HH:MM:SS'"):
        parse_utc_timestamp(value)


def test_invalid_timestamp_error_is_a_value_error() -> None:
    with pytest.raises(ValueError):
        parse_utc_timestamp("nope")


def test_format_utc_timestamp_round_trips_store_format() -> None:
    value = "2025-12-14 13:46:14"

    assert format_utc_timestamp(parse_utc_timestamp(value)) == value


def test_as_utc_normalizes_values_read_from_the_store() -> None:
    naive = datetime(2025, 12, 14, 13, 46, 14)
    offset = datetime(2025, 12, 14, 15, 46, 14, tzinfo=timezone(timedelta(hours=2)))

    assert as_utc(None) is None
    assert as_utc(naive) == naive.replace(tzinfo=timezone.utc)
    assert as_utc(offset) == naive.replace(tzinfo=timezone.utc)
    assert as_utc(offset).tzinfo == timezone.utc
    assert as_utc("2025-12-14 13:46:14") == naive.replace(tzinfo=timezone.utc)
