import pytest

from conftest import OSLO
from errors import InvalidSampleError
from pricing import FeeSchedule, RawSample, build_hour_record, is_discount_window, parse_hour_list


FEES = FeeSchedule(full_fee=0.225, discounted_fee=0.145)


def build(start, end, price=1.0, tzinfo=None, fees=FEES):
    return build_hour_record(RawSample(time_start=start, time_end=end, spot_price=price), fees, tzinfo or OSLO)


@pytest.mark.parametrize(
    ("start", "end", "discounted"),
    [
        ("2026-10-19T21:00:00+02:00", "2026-10-19T22:00:00+02:00", False),
        ("2026-10-19T22:00:00+02:00", "2026-10-19T23:00:00+02:00", True),
        ("2026-10-19T05:00:00+02:00", "2026-10-19T06:00:00+02:00", True),
        ("2026-10-19T06:00:00+02:00", "2026-10-19T07:00:00+02:00", False),
        ("2026-10-24T06:00:00+02:00", "2026-10-24T07:00:00+02:00", True),
        ("2026-10-25T14:00:00+01:00", "2026-10-25T15:00:00+01:00", True),
    ],
)
def test_discount_window_boundaries(start, end, discounted):
    record = build(start, end)
    assert record.is_discount_window is discounted


def test_cost_adds_full_fee_outside_discount_window():
    record = build("2026-10-19T12:00:00+02:00", "2026-10-19T13:00:00+02:00", price=1.0)

    assert record.base_cost == 1.0
    assert record.cost == pytest.approx(1.225)
    assert record.hour_of_day == 12
    assert record.weekday == 1
    assert record.is_high_cost is None


def test_cost_adds_discounted_fee_inside_discount_window():
    record = build("2026-10-19T23:00:00+02:00", "2026-10-20T00:00:00+02:00", price=-0.05)

    assert record.cost == pytest.approx(0.095)


def test_utc_timestamps_are_evaluated_in_local_time():
    # 20:00 UTC is 22:00 in Oslo while summer time is in effect.
    record = build("2026-10-19T20:00:00Z", "2026-10-19T21:00:00Z")

    assert record.hour_of_day == 22
    assert record.is_discount_window is True
    assert record.start.isoformat() == "2026-10-19T22:00:00+02:00"


def test_utc_midnight_on_friday_is_saturday_locally():
    record = build("2026-10-23T22:00:00+00:00", "2026-10-23T23:00:00+00:00")

    assert record.weekday == 6
    assert record.hour_of_day == 0


def test_naive_timestamps_are_read_as_local_time():
    record = build("2026-10-19T06:00:00", "2026-10-19T07:00:00")

    assert record.hour_of_day == 6
    assert record.start.utcoffset().total_seconds() == 2 * 3600


def test_price_strings_are_accepted():
    record = build("2026-10-19T12:00:00+02:00", "2026-10-19T13:00:00+02:00", price="0.5")
    assert record.base_cost == 0.5


@pytest.mark.parametrize(
    ("start", "end", "price"),
    [
        (None, "2026-10-19T13:00:00+02:00", 1.0),
        ("2026-10-19T12:00:00+02:00", None, 1.0),
        ("", "2026-10-19T13:00:00+02:00", 1.0),
        ("yesterday", "2026-10-19T13:00:00+02:00", 1.0),
        ("2026-10-19T12:00:00+02:00", "2026-10-19T13:00:00+02:00", None),
        ("2026-10-19T12:00:00+02:00", "2026-10-19T13:00:00+02:00", "n/a"),
        ("2026-10-19T12:00:00+02:00", "2026-10-19T13:00:00+02:00", "nan"),
        ("2026-10-19T12:00:00+02:00", "2026-10-19T13:00:00+02:00", "inf"),
        ("2026-10-19T12:00:00+02:00", "2026-10-19T13:00:00+02:00", float("-inf")),
        ("2026-10-19T12:00:00+02:00", "2026-10-19T12:00:00+02:00", 1.0),
    ],
)
def test_malformed_samples_raise_invalid_sample_error(start, end, price):
    with pytest.raises(InvalidSampleError):
        build(start, end, price=price)


def test_is_discount_window_predicate():
    assert is_discount_window(3, 2) is True
    assert is_discount_window(12, 7) is True
    assert is_discount_window(12, 5) is False


def test_parse_hour_list_from_string_keeps_invalid_parts_for_validation():
    assert parse_hour_list("5, 6,x,,7") == [5, 6, "x", 7]
    assert parse_hour_list([17, 18]) == [17, 18]
    assert parse_hour_list(None) == []
