from datetime import datetime, timedelta, timezone

from katy.timeline import ZERO_TIME, format_time, is_zero, parse_time


def test_parse_time_zulu():
    assert parse_time("2024-03-01T10:15:00Z") == datetime(2024, 3, 1, 10, 15, tzinfo=timezone.utc)


def test_parse_time_unset_is_zero():
    assert is_zero(parse_time(None))
    assert is_zero(parse_time(""))
    assert parse_time(None) < parse_time("1970-01-01T00:00:00Z")


def test_parse_time_naive_is_utc():
    assert parse_time(datetime(2024, 1, 1)) == datetime(2024, 1, 1, tzinfo=timezone.utc)


def test_format_time_like_go():
    assert format_time(ZERO_TIME) == "0001-01-01 00:00:00 +0000 UTC"
    assert format_time(parse_time("2024-03-01T10:15:00.250Z")) == "2024-03-01 10:15:00.25 +0000 UTC"

    cest = datetime(2024, 6, 1, 12, 0, tzinfo=timezone(timedelta(hours=2)))
    assert format_time(cest) == "2024-06-01 12:00:00 +0200 +0200"
