"""
Locale and unit-system aware display helpers.

Raw values are always stored in metric units (km, m, km/h, °C); the helpers
below convert and format them for UI rendering only.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional

from babel import numbers

LOCALE = "fr_FR"

KM_TO_MILES = 0.621371192
M_TO_FEET = 3.2808399


class UnitSystem(str, Enum):
    METRIC = "metric"
    ENGLISH = "english"


class SpeedMode(str, Enum):
    SPEED = "speed"
    PACE = "pace"


def set_locale(locale_str: str = "fr_FR") -> None:
    global LOCALE
    try:
        # Validate by formatting a simple number
        numbers.format_decimal(1.0, locale=locale_str)
        LOCALE = locale_str
    except Exception:
        LOCALE = "fr_FR"


def _nbsp() -> str:
    return "\u00A0"


def fmt_decimal(value: Optional[float], digits: int = 0) -> str:
    if value is None:
        return ""
    fmt = "#,##0"
    if digits > 0:
        fmt += "." + ("0" * digits)
    return numbers.format_decimal(value, format=fmt, locale=LOCALE)


def seconds_to_time_string(seconds: int) -> str:
    """Format a duration as ``hh:mm:ss``."""
    total = max(int(seconds), 0)
    hours, remainder = divmod(total, 3600)
    minutes, secs = divmod(remainder, 60)
    return f"{hours:02d}:{minutes:02d}:{secs:02d}"


def _pace_string(speed: float) -> str:
    # speed is expressed per km or per mile, pace is minutes per that unit
    if speed <= 0:
        return "--:--"
    total = int(round(3600.0 / speed))
    minutes, secs = divmod(total, 60)
    return f"{minutes}:{secs:02d}"


@dataclass(frozen=True)
class UnitFormatter:
    """Converts metric raw values into display strings for a unit system."""

    unit_system: UnitSystem = UnitSystem.METRIC

    @property
    def metric(self) -> bool:
        return self.unit_system == UnitSystem.METRIC

    def distance_to_string(self, km: float, digits: int) -> str:
        if self.metric:
            return f"{fmt_decimal(km, digits)}{_nbsp()}km"
        return f"{fmt_decimal(km * KM_TO_MILES, digits)}{_nbsp()}mi"

    def height_to_string(self, meters: int) -> str:
        if self.metric:
            return f"{fmt_decimal(meters)}{_nbsp()}m"
        return f"{fmt_decimal(round(meters * M_TO_FEET))}{_nbsp()}ft"

    def heart_rate_to_string(self, bpm: int) -> str:
        return f"{bpm}{_nbsp()}bpm"

    def speed_to_string(self, kmh: float, digits: int, speed_mode: SpeedMode) -> str:
        speed = kmh if self.metric else kmh * KM_TO_MILES
        unit = "km" if self.metric else "mi"
        if speed_mode == SpeedMode.PACE:
            return f"{_pace_string(speed)}{_nbsp()}min/{unit}"
        suffix = "km/h" if self.metric else "mph"
        return f"{fmt_decimal(speed, digits)}{_nbsp()}{suffix}"

    def temperature_to_string(self, celsius: float) -> str:
        if self.metric:
            return f"{fmt_decimal(celsius)}{_nbsp()}°C"
        return f"{fmt_decimal(celsius * 9.0 / 5.0 + 32.0)}{_nbsp()}°F"
