import logging
from dataclasses import dataclass, field
from datetime import date, datetime

from errors import InvalidSampleError, NoDataError
from pricing import HourRecord, build_hour_record


logger = logging.getLogger("uvicorn.error")


@dataclass(frozen=True)
class DayResult:
    date_key: str
    hours: tuple[HourRecord, ...] = field(default_factory=tuple)

    def __len__(self):
        return len(self.hours)

    def __iter__(self):
        return iter(self.hours)

    def high_cost_hours(self):
        return [hour for hour in self.hours if hour.is_high_cost]

    def to_list(self):
        return [hour.to_dict() for hour in self.hours]


def to_local_date(value, tzinfo):
    if isinstance(value, datetime):
        if value.tzinfo is None:
            return value.date()
        return value.astimezone(tzinfo).date()
    if isinstance(value, date):
        return value
    raise TypeError(f"Expected date or datetime, got {type(value).__name__}")


def get_day_key(value, tzinfo):
    day = to_local_date(value, tzinfo)
    return f"{day.year:04d}-{day.month:02d}-{day.day:02d}"


def parse_day_key(date_str):
    return datetime.strptime(date_str, "%Y-%m-%d").date()


def assemble_day(day, samples, fee_schedule, tzinfo):
    """Build the start-ordered hour records for one local calendar date.

    Raises NoDataError when the source returned nothing and InvalidSampleError
    when a sample is malformed or two records overlap.
    """
    date_key = get_day_key(day, tzinfo)
    if not samples:
        raise NoDataError(date_key)

    hours = [build_hour_record(sample, fee_schedule, tzinfo) for sample in samples]
    hours.sort(key=lambda hour: hour.start)

    for previous, current in zip(hours, hours[1:]):
        if current.start < previous.end:
            raise InvalidSampleError(
                f"Overlapping samples for {date_key}: {previous.start.isoformat()} and {current.start.isoformat()}"
            )
        if current.start > previous.end:
            logger.warning(
                "Gap in price data for %s between %s and %s",
                date_key,
                previous.end.isoformat(),
                current.start.isoformat(),
            )
    return tuple(hours)
