"""Configuration surface for Sardis payment limits.

Limits can be declared in the environment as a JSON list, e.g.:

    SARDIS_LIMITS_LIMITS='[{"name": "daily_count", "preset": "max_count_on_day", "max_total_count": 3}]'
"""
from __future__ import annotations

import dataclasses
from datetime import time
from enum import Enum
from functools import lru_cache
from pathlib import Path
from typing import List, Literal, Optional

from pydantic import BaseModel, Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from .builder import PaymentLimitBuilder
from .limits import PaymentLimit
from .presets import (
    create_complex_limit,
    create_max_count_on_day_limit,
    create_max_price_on_period_limit,
    create_max_price_on_timespan_limit,
)
from .windows import TimeUnit

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class LimitPreset(str, Enum):
    MAX_PRICE_ON_PERIOD = "max_price_on_period"
    MAX_PRICE_ON_TIMESPAN = "max_price_on_timespan"
    MAX_COUNT_ON_DAY = "max_count_on_day"
    COMPLEX = "complex"
    CUSTOM = "custom"


class LimitDefinition(BaseModel):
    """Declarative limit. Presets fix the client/service restrictions."""
    name: str
    preset: LimitPreset = LimitPreset.CUSTOM
    max_total_price: int = Field(default=0, ge=0)
    max_total_count: int = Field(default=0, ge=0)
    start: Optional[time] = None
    end: Optional[time] = None
    unit: Optional[TimeUnit] = None
    length: Optional[int] = Field(default=None, gt=0)
    same_client: bool = False
    same_service: bool = False

    @field_validator("unit", mode="before")
    @classmethod
    def normalize_unit(cls, v):
        if isinstance(v, str):
            return v.strip().lower()
        return v

    @model_validator(mode="after")
    def check_preset_fields(self) -> "LimitDefinition":
        has_clock = self.start is not None and self.end is not None
        has_span = self.unit is not None and self.length is not None

        if (self.start is None) != (self.end is None):
            raise ValueError("start and end must be set together")
        if (self.unit is None) != (self.length is None):
            raise ValueError("unit and length must be set together")
        if self.preset == LimitPreset.MAX_PRICE_ON_PERIOD and not has_clock:
            raise ValueError("max_price_on_period requires start and end")
        if self.preset in (LimitPreset.MAX_PRICE_ON_TIMESPAN, LimitPreset.COMPLEX) and not has_span:
            raise ValueError(f"{self.preset.value} requires unit and length")
        if self.preset == LimitPreset.CUSTOM and has_clock == has_span:
            raise ValueError("custom limits require either start/end or unit/length, not both")
        return self

    def to_limit(self) -> PaymentLimit:
        if self.preset == LimitPreset.MAX_PRICE_ON_PERIOD:
            limit = create_max_price_on_period_limit(self.max_total_price, self.start, self.end)
        elif self.preset == LimitPreset.MAX_PRICE_ON_TIMESPAN:
            limit = create_max_price_on_timespan_limit(self.max_total_price, self.unit, self.length)
        elif self.preset == LimitPreset.MAX_COUNT_ON_DAY:
            limit = create_max_count_on_day_limit(self.max_total_count)
        elif self.preset == LimitPreset.COMPLEX:
            limit = create_complex_limit(self.max_total_price, self.max_total_count, self.unit, self.length)
        else:
            if self.start is not None and self.end is not None:
                builder = PaymentLimitBuilder.clock_range(self.start, self.end)
            else:
                builder = PaymentLimitBuilder.rolling_span(self.unit, self.length)
            limit = (
                builder.set_max_total_price(self.max_total_price)
                .set_max_total_count(self.max_total_count)
                .set_same_client_restriction(self.same_client)
                .set_same_service_restriction(self.same_service)
                .build()
            )
        return dataclasses.replace(limit, name=self.name)


class LimitsSettings(BaseSettings):
    """Settings for the limits package."""

    model_config = SettingsConfigDict(
        env_prefix="SARDIS_LIMITS_",
        env_nested_delimiter="__",
        env_file=".env",
        extra="ignore",
    )

    environment: Literal["dev", "sandbox", "prod"] = "dev"

    # Logging
    log_level: str = "INFO"
    log_json: bool = True
    log_file: Optional[str] = None

    # Declared limits
    limits: List[LimitDefinition] = Field(default_factory=list)

    @field_validator("log_level", mode="before")
    @classmethod
    def validate_log_level(cls, v) -> str:
        level = str(v).strip().upper()
        if level not in LOG_LEVELS:
            raise ValueError(f"log_level must be one of {', '.join(LOG_LEVELS)}")
        return level

    @field_validator("limits")
    @classmethod
    def unique_limit_names(cls, v: List[LimitDefinition]) -> List[LimitDefinition]:
        names = [d.name for d in v]
        duplicates = sorted({n for n in names if names.count(n) > 1})
        if duplicates:
            raise ValueError(f"Duplicate limit names: {', '.join(duplicates)}")
        return v


@lru_cache
def load_settings(env_file: str | None = None) -> LimitsSettings:
    """Load LimitsSettings once per process."""
    if env_file:
        return LimitsSettings(_env_file=Path(env_file))
    return LimitsSettings()


def build_configured_limits(settings: Optional[LimitsSettings] = None) -> List[PaymentLimit]:
    """Build every limit declared in settings."""
    settings = settings or load_settings()
    return [definition.to_limit() for definition in settings.limits]


__all__ = [
    "LimitPreset",
    "LimitDefinition",
    "LimitsSettings",
    "load_settings",
    "build_configured_limits",
]
