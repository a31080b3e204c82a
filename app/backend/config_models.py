from __future__ import annotations

from typing import Literal
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from pydantic import BaseModel, ConfigDict, Field, field_validator

from cache import DEFAULT_CACHE_RETENTION
from classifier import DEFAULT_HIGH_COST_HOUR_COUNT
from pricing import DISCOUNTED_FEE, FULL_FEE, FeeSchedule, parse_hour_list


DEFAULT_TIMEZONE = "Europe/Oslo"
DEFAULT_SOURCE_URL = "https://www.hvakosterstrommen.no/api/v1/prices"
DEFAULT_AREA = "NO5"


class StrictModel(BaseModel):
    model_config = ConfigDict(extra="forbid", str_strip_whitespace=True)


class FeesConfig(StrictModel):
    full: float = Field(default=FULL_FEE)
    discounted: float = Field(default=DISCOUNTED_FEE)

    def to_schedule(self) -> FeeSchedule:
        return FeeSchedule(full_fee=self.full, discounted_fee=self.discounted)


class SourceConfig(StrictModel):
    base_url: str = Field(default=DEFAULT_SOURCE_URL, min_length=1)
    area: Literal["NO1", "NO2", "NO3", "NO4", "NO5"] = Field(default=DEFAULT_AREA)
    timeout_seconds: float = Field(default=10.0, gt=0.0, le=120.0)

    @field_validator("area", mode="before")
    @classmethod
    def normalize_area(cls, value):
        if isinstance(value, str):
            return value.strip().upper()
        return value

    @field_validator("base_url")
    @classmethod
    def strip_trailing_slash(cls, value):
        return value.rstrip("/")


class AppConfigModel(StrictModel):
    timezone: str = Field(default=DEFAULT_TIMEZONE, min_length=1)
    fees: FeesConfig = Field(default_factory=FeesConfig)
    high_cost_hour_count: int = Field(default=DEFAULT_HIGH_COST_HOUR_COUNT, ge=0, le=100)
    preferred_hours: list[int] = Field(default_factory=list)
    cache_retention: int = Field(default=DEFAULT_CACHE_RETENTION, ge=1, le=366)
    source: SourceConfig = Field(default_factory=SourceConfig)

    @field_validator("timezone")
    @classmethod
    def validate_timezone(cls, value):
        try:
            ZoneInfo(value)
        except (ZoneInfoNotFoundError, ValueError) as exc:
            raise ValueError(f"Unknown time zone: {value}") from exc
        return value

    @field_validator("preferred_hours", mode="before")
    @classmethod
    def parse_hours_from_string(cls, value):
        return parse_hour_list(value)

    @field_validator("preferred_hours")
    @classmethod
    def validate_hours(cls, value):
        for hour in value:
            if hour < 0 or hour > 23:
                raise ValueError("Preferred hours must be in range 0..23.")
        return value

    @property
    def tzinfo(self) -> ZoneInfo:
        return ZoneInfo(self.timezone)

    @property
    def fee_schedule(self) -> FeeSchedule:
        return self.fees.to_schedule()
