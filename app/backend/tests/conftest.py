import pathlib
import sys
from datetime import datetime, timedelta, timezone
from zoneinfo import ZoneInfo

import pytest


BACKEND_DIR = pathlib.Path(__file__).resolve().parents[1]
if str(BACKEND_DIR) not in sys.path:
    sys.path.insert(0, str(BACKEND_DIR))

from config_models import AppConfigModel  # noqa: E402
from container import AppConfig, build_container  # noqa: E402
from pricing import RawSample  # noqa: E402


OSLO = ZoneInfo("Europe/Oslo")


def make_samples(day, prices, tzinfo=OSLO):
    """Consecutive one-hour samples starting at local midnight of ``day``."""
    start_utc = datetime(day.year, day.month, day.day, tzinfo=tzinfo).astimezone(timezone.utc)
    samples = []
    for index, price in enumerate(prices):
        start = (start_utc + timedelta(hours=index)).astimezone(tzinfo)
        end = (start_utc + timedelta(hours=index + 1)).astimezone(tzinfo)
        samples.append(RawSample(time_start=start.isoformat(), time_end=end.isoformat(), spot_price=price))
    return samples


class FakeSource:
    def __init__(self, days=None, error=None):
        self.days = dict(days or {})
        self.error = error
        self.calls = []

    def fetch(self, day):
        self.calls.append(day)
        if self.error is not None:
            raise self.error
        return self.days.get(day)


@pytest.fixture
def oslo():
    return OSLO


@pytest.fixture
def settings():
    return AppConfigModel.model_validate(
        {
            "timezone": "Europe/Oslo",
            "high_cost_hour_count": 8,
            "preferred_hours": [5, 6, 7, 17, 18, 19],
            "cache_retention": 7,
        }
    )


@pytest.fixture
def fake_source():
    return FakeSource()


@pytest.fixture
def container(settings, fake_source, tmp_path):
    return build_container(
        config=AppConfig(config_file=tmp_path / "config.yaml"),
        settings=settings,
        source=fake_source,
    )
