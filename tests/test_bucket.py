"""Unit tests for bucket file naming."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone

from bucketlog.bucket import bucket_name, file_name


def test_instants_in_same_minute_share_a_bucket() -> None:
    first = datetime(2023, 2, 12, 16, 26, 0)
    last = datetime(2023, 2, 12, 16, 26, 59, 999999)

    assert bucket_name(first) == "20230212162600"
    assert bucket_name(last) == bucket_name(first)


def test_next_minute_changes_only_the_minute_field() -> None:
    now = datetime(2023, 2, 12, 16, 26, 30)
    later = bucket_name(now + timedelta(minutes=1))

    assert later == "20230212162700"
    assert later[:10] == bucket_name(now)[:10]
    assert later[12:] == "00"


def test_fields_are_zero_padded() -> None:
    assert bucket_name(datetime(2023, 1, 2, 3, 4, 5)) == "20230102030400"


def test_rollover_at_day_month_and_year_boundaries() -> None:
    assert bucket_name(datetime(2023, 3, 14, 23, 59) + timedelta(minutes=1)) == "20230315000000"
    assert bucket_name(datetime(2023, 2, 28, 23, 59) + timedelta(minutes=1)) == "20230301000000"
    assert bucket_name(datetime(2023, 12, 31, 23, 59) + timedelta(minutes=1)) == "20240101000000"
    assert bucket_name(datetime(2024, 2, 28, 23, 59) + timedelta(minutes=1)) == "20240229000000"


def test_aware_timestamps_use_their_own_zone() -> None:
    now = datetime(2023, 2, 12, 16, 26, tzinfo=timezone(timedelta(hours=2)))
    assert bucket_name(now) == "20230212162600"


def test_file_name_suffixes() -> None:
    now = datetime(2023, 2, 12, 16, 26, 3)
    assert file_name(now) == "20230212162600.log"
    assert file_name(now, large=True) == "20230212162600_big.log"
