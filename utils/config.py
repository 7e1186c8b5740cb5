"""
Configuration loading utilities.

Loads environment variables from `.env`, validates display preferences, and
ensures data directories exist. Secrets are never logged.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv, find_dotenv
from streamlit.logger import get_logger

from utils.formatting import SpeedMode, UnitSystem

logger = get_logger(__name__)

DEFAULT_LOCALE = "fr_FR"


@dataclass(frozen=True)
class Config:
    data_dir: Path
    timeseries_dir: Path
    laps_dir: Path
    gpx_dir: Path
    mapbox_token: Optional[str]
    unit_system: UnitSystem
    speed_mode: SpeedMode
    locale: str


def _ensure_dir(path: Path) -> None:
    path.mkdir(parents=True, exist_ok=True)


def _unit_system_from_env(raw: Optional[str]) -> UnitSystem:
    value = (raw or UnitSystem.METRIC.value).strip().lower()
    try:
        return UnitSystem(value)
    except ValueError:
        logger.warning("Unknown UNIT_SYSTEM %r, falling back to metric", raw)
        return UnitSystem.METRIC


def _speed_mode_from_env(raw: Optional[str]) -> SpeedMode:
    value = (raw or SpeedMode.SPEED.value).strip().lower()
    try:
        return SpeedMode(value)
    except ValueError:
        logger.warning("Unknown SPEED_MODE %r, falling back to speed", raw)
        return SpeedMode.SPEED


def load_config() -> Config:
    """Load configuration from environment and provision directories."""
    load_dotenv(find_dotenv(), override=True)

    data_dir_str = os.getenv("DATA_DIR", "./data")
    data_dir = Path(data_dir_str).expanduser().resolve()

    mapbox_token = os.getenv("MAPBOX_API_KEY")
    logger.debug("MAPBOX_API_KEY: %s", redact(mapbox_token))

    unit_system = _unit_system_from_env(os.getenv("UNIT_SYSTEM"))
    speed_mode = _speed_mode_from_env(os.getenv("SPEED_MODE"))
    locale = os.getenv("APP_LOCALE") or DEFAULT_LOCALE

    timeseries_dir = data_dir / "timeseries"
    laps_dir = data_dir / "laps"
    gpx_dir = data_dir / "gpx"

    _ensure_dir(data_dir)
    _ensure_dir(timeseries_dir)
    _ensure_dir(laps_dir)
    _ensure_dir(gpx_dir)

    return Config(
        data_dir=data_dir,
        timeseries_dir=timeseries_dir,
        laps_dir=laps_dir,
        gpx_dir=gpx_dir,
        mapbox_token=mapbox_token,
        unit_system=unit_system,
        speed_mode=speed_mode,
        locale=locale,
    )


def redact(value: Optional[str], keep_last: int = 4) -> str:
    """Return a redacted string suitable for logs (never log raw secrets)."""
    if not value:
        return ""
    if len(value) <= keep_last:
        return "***"
    return "***" + value[-keep_last:]
