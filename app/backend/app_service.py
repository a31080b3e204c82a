import logging
import os

from api import parse_date_param, resolve_refresh_dates
from days import get_day_key
from errors import NoDataError


APP_VERSION = os.getenv("APP_VERSION", "dev")
logger = logging.getLogger("uvicorn.error")


def get_day_prices(container, day, count=None):
    try:
        result = container.prices.get_day_result(day, high_cost_hour_count=count)
    except NoDataError:
        logger.info("No prices available for %s", get_day_key(day, container.settings.tzinfo))
        return []
    return result.to_list()


def get_today(container, count=None):
    return get_day_prices(container, container.prices.today(), count=count)


def get_tomorrow(container, count=None):
    return get_day_prices(container, container.prices.tomorrow(), count=count)


def get_prices(container, date=None, count=None):
    day = parse_date_param(date) if date else container.prices.today()
    return {
        "date": get_day_key(day, container.settings.tzinfo),
        "prices": get_day_prices(container, day, count=count),
    }


def refresh_prices(container, payload=None):
    payload = payload or {}
    refreshed = []
    for day in resolve_refresh_dates(payload.get("date"), container.settings.tzinfo):
        try:
            hours = container.prices.refresh(day).hours
        except NoDataError:
            hours = ()
        refreshed.append(
            {
                "date": get_day_key(day, container.settings.tzinfo),
                "count": len(hours),
                "has_data": bool(hours),
            }
        )
    return {"status": "ok", "refreshed": refreshed}


def get_cache_status(container):
    return container.cache.status()


def get_version():
    return {"version": APP_VERSION}


def log_startup(container):
    settings = container.settings
    logger.info(
        "Spot price service: area=%s timezone=%s fees=%s/%s high_cost_hours=%s preferred=%s cache_retention=%s",
        settings.source.area,
        settings.timezone,
        settings.fees.full,
        settings.fees.discounted,
        settings.high_cost_hour_count,
        settings.preferred_hours,
        settings.cache_retention,
    )
