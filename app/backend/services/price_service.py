from datetime import datetime, timedelta

from classifier import classify_high_cost
from days import DayResult, assemble_day, get_day_key, to_local_date


class PriceService:
    def __init__(self, source, cache, settings, logger):
        self.source = source
        self.cache = cache
        self.settings = settings
        self.logger = logger
        self.tzinfo = settings.tzinfo
        self.fee_schedule = settings.fee_schedule

    def today(self):
        return datetime.now(self.tzinfo).date()

    def tomorrow(self):
        return self.today() + timedelta(days=1)

    def get_day_result(self, day, high_cost_hour_count=None):
        """Classified hour records for one local date.

        Raises NoDataError when the source has nothing for the date; transport
        failures from the source propagate unchanged. A ``high_cost_hour_count``
        different from the configured one re-classifies the cached hours for
        this call only.
        """
        date_key = get_day_key(day, self.tzinfo)
        result = self.cache.get(date_key)
        if result is not None:
            self.logger.info("Prices cache hit for %s", date_key)
        else:
            self.logger.info("Prices cache miss for %s", date_key)
            result = self.cache.put(date_key, self._compute(day, date_key))

        if high_cost_hour_count is None or high_cost_hour_count == self.settings.high_cost_hour_count:
            return result
        return DayResult(
            date_key=date_key,
            hours=classify_high_cost(result.hours, high_cost_hour_count, self.settings.preferred_hours),
        )

    def refresh(self, day):
        """Re-fetch one date; the cached entry survives a failed fetch."""
        date_key = get_day_key(day, self.tzinfo)
        result = self._compute(day, date_key)
        self.cache.replace(date_key, result)
        self.logger.info("Refreshed prices for %s", date_key)
        return result

    def _compute(self, day, date_key):
        local_day = to_local_date(day, self.tzinfo)
        samples = self.source.fetch(local_day)
        hours = assemble_day(local_day, samples, self.fee_schedule, self.tzinfo)
        classified = classify_high_cost(
            hours,
            self.settings.high_cost_hour_count,
            self.settings.preferred_hours,
        )
        return DayResult(date_key=date_key, hours=classified)
