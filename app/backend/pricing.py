from dataclasses import dataclass
from datetime import datetime
import math

from errors import InvalidSampleError


FULL_FEE = 0.225
DISCOUNTED_FEE = 0.145
DISCOUNT_WEEKDAYS = frozenset({6, 7})
DISCOUNT_HOURS = frozenset({22, 23, 0, 1, 2, 3, 4, 5})


@dataclass(frozen=True)
class FeeSchedule:
    full_fee: float = FULL_FEE
    discounted_fee: float = DISCOUNTED_FEE


@dataclass(frozen=True)
class RawSample:
    time_start: object
    time_end: object
    spot_price: object
    eur_price: float | None = None
    exchange_rate: float | None = None


@dataclass(frozen=True)
class HourRecord:
    start: datetime
    end: datetime
    hour_of_day: int
    weekday: int
    base_cost: float
    is_discount_window: bool
    cost: float
    is_high_cost: bool | None = None

    def to_dict(self):
        return {
            "start": self.start.isoformat(),
            "end": self.end.isoformat(),
            "hour": self.hour_of_day,
            "weekday": self.weekday,
            "baseCost": self.base_cost,
            "cost": self.cost,
            "discounted": self.is_discount_window,
            "highCost": self.is_high_cost,
        }


def parse_hour_list(value):
    if value is None:
        return []
    if isinstance(value, (list, tuple)):
        return list(value)
    if not isinstance(value, str):
        return value
    hours = []
    for part in value.split(","):
        part = part.strip()
        if not part:
            continue
        try:
            hours.append(int(part))
        except ValueError:
            # Left as text so the config model rejects it.
            hours.append(part)
    return hours


def is_discount_window(hour_of_day, weekday):
    return weekday in DISCOUNT_WEEKDAYS or hour_of_day in DISCOUNT_HOURS


def calculate_cost(base_cost, discounted, fee_schedule):
    fee = fee_schedule.discounted_fee if discounted else fee_schedule.full_fee
    return base_cost + fee


def _parse_timestamp(value, tzinfo, field):
    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, str) and value.strip():
        try:
            parsed = datetime.fromisoformat(value.strip().replace("Z", "+00:00"))
        except ValueError as exc:
            raise InvalidSampleError(f"Invalid {field}: {value!r}") from exc
    else:
        raise InvalidSampleError(f"Missing {field}.")
    if parsed.tzinfo is None:
        return parsed.replace(tzinfo=tzinfo)
    return parsed.astimezone(tzinfo)


def _parse_price(value):
    if value is None or isinstance(value, bool):
        raise InvalidSampleError(f"Invalid spot price: {value!r}")
    try:
        price = float(value)
    except (TypeError, ValueError) as exc:
        raise InvalidSampleError(f"Invalid spot price: {value!r}") from exc
    if not math.isfinite(price):
        raise InvalidSampleError(f"Invalid spot price: {value!r}")
    return price


def build_hour_record(sample, fee_schedule, tzinfo):
    """Turn one upstream sample into an hour record priced with the grid fee.

    Calendar fields and the discount window are taken from the local clock in
    ``tzinfo``; naive timestamps are read as local time.
    """
    start = _parse_timestamp(sample.time_start, tzinfo, "time_start")
    end = _parse_timestamp(sample.time_end, tzinfo, "time_end")
    if end <= start:
        raise InvalidSampleError(f"Sample ends before it starts: {start.isoformat()} - {end.isoformat()}")
    base_cost = _parse_price(sample.spot_price)
    hour_of_day = start.hour
    weekday = start.isoweekday()
    discounted = is_discount_window(hour_of_day, weekday)
    return HourRecord(
        start=start,
        end=end,
        hour_of_day=hour_of_day,
        weekday=weekday,
        base_cost=base_cost,
        is_discount_window=discounted,
        cost=calculate_cost(base_cost, discounted, fee_schedule),
    )
