from datetime import datetime, timedelta, timezone

import pytest

from app.utils.instants import as_stored_utc, parse_instant


def test_parse_z_suffix():
    assert parse_instant("2025-01-06T10:00:00Z") == datetime(2025, 1, 6, 10, tzinfo=timezone.utc)


def test_parse_offset_is_converted_to_utc():
    dt = parse_instant("2025-01-06T17:00:00+07:00")
    assert dt == datetime(2025, 1, 6, 10, tzinfo=timezone.utc)
    assert dt.utcoffset() == timedelta(0)


def test_parse_local_input_value_uses_local_offset():
    naive = datetime(2025, 1, 6, 10, 0)
    assert parse_instant("2025-01-06T10:00") == naive.astimezone(timezone.utc)


def test_parse_datetime_object():
    aware = datetime(2025, 1, 6, 10, tzinfo=timezone(timedelta(hours=2)))
    assert parse_instant(aware) == datetime(2025, 1, 6, 8, tzinfo=timezone.utc)


@pytest.mark.parametrize(
    "value",
    [
        None,
        "",
        "   ",
        "tomorrow",
        "2025-13-01T10:00",
        12345,
        # 換算 UTC 會超出 datetime 範圍
        "0001-01-01T00:00+01:00",
        "9999-12-31T23:59-01:00",
        datetime(1, 1, 1, tzinfo=timezone(timedelta(hours=1))),
    ],
)
def test_parse_invalid_returns_none(value):
    assert parse_instant(value) is None


def test_as_stored_utc_treats_naive_as_utc():
    assert as_stored_utc(datetime(2025, 1, 6, 10)) == datetime(2025, 1, 6, 10, tzinfo=timezone.utc)
    assert as_stored_utc(None) is None
