"""Copyright (C) 2025 Pierre Marrec
SPDX-License-Identifier: GPL-3.0-or-later

Exercise model (samples and laps) and its loading from the data directory.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import List, Optional, Tuple

import pandas as pd
from streamlit.logger import get_logger

from utils.config import Config
from utils.gpx_parser import parse_gpx_to_timeseries

logger = get_logger(__name__)


@dataclass(frozen=True)
class GeoPosition:
    latitude: float
    longitude: float


@dataclass(frozen=True)
class Sample:
    position: Optional[GeoPosition] = None
    timestamp_ms: Optional[int] = None
    distance_m: Optional[float] = None
    altitude_m: Optional[int] = None
    heart_rate: Optional[int] = None
    speed_kmh: Optional[float] = None
    temperature_c: Optional[float] = None


@dataclass(frozen=True)
class Lap:
    position_split: Optional[GeoPosition] = None


@dataclass(frozen=True)
class Exercise:
    activity_id: str
    samples: Tuple[Sample, ...]
    laps: Tuple[Lap, ...] = ()
    location_recorded: bool = False


def _optional_float(value: object) -> Optional[float]:
    if value is None:
        return None
    try:
        result = float(value)
    except (TypeError, ValueError):
        return None
    if math.isnan(result):
        return None
    return result


def _optional_int(value: object) -> Optional[int]:
    result = _optional_float(value)
    if result is None:
        return None
    return int(round(result))


def _optional_position(lat: object, lon: object) -> Optional[GeoPosition]:
    lat_val = _optional_float(lat)
    lon_val = _optional_float(lon)
    if lat_val is None or lon_val is None:
        return None
    return GeoPosition(latitude=lat_val, longitude=lon_val)


def _elapsed_ms(df: pd.DataFrame) -> List[Optional[int]]:
    """Elapsed milliseconds since the first timestamped sample, per row."""
    if "timestamp" not in df.columns:
        return [None] * len(df)
    raw = df["timestamp"]
    offsets = pd.to_numeric(raw, errors="coerce")
    if offsets.notna().sum() == raw.notna().sum() and offsets.notna().any():
        seconds = offsets - offsets.dropna().iloc[0]
    else:
        stamps = pd.to_datetime(raw, errors="coerce", utc=True, format="ISO8601")
        if stamps.notna().sum() < raw.notna().sum():
            dropped = int(raw.notna().sum() - stamps.notna().sum())
            logger.warning("Ignoring %d unparsable timestamps", dropped)
        if stamps.notna().sum() == 0:
            return [None] * len(df)
        seconds = (stamps - stamps.dropna().iloc[0]).dt.total_seconds()
    return [None if pd.isna(value) else int(round(value * 1000)) for value in seconds]


def samples_from_frame(df: pd.DataFrame) -> Tuple[Sample, ...]:
    """Build samples from a timeseries frame, keeping the row order."""

    def column(name: str) -> List[object]:
        if name in df.columns:
            return df[name].tolist()
        return [None] * len(df)

    lat = column("lat")
    lon = column("lon")
    distance = column("distanceM")
    elevation = column("elevationM")
    hr = column("hr")
    speed = column("paceKmh")
    temperature = column("temperatureC")
    elapsed = _elapsed_ms(df)

    samples = []
    for i in range(len(df)):
        samples.append(
            Sample(
                position=_optional_position(lat[i], lon[i]),
                timestamp_ms=elapsed[i],
                distance_m=_optional_float(distance[i]),
                altitude_m=_optional_int(elevation[i]),
                heart_rate=_optional_int(hr[i]),
                speed_kmh=_optional_float(speed[i]),
                temperature_c=_optional_float(temperature[i]),
            )
        )
    return tuple(samples)


def laps_from_frame(df: pd.DataFrame) -> Tuple[Lap, ...]:
    if df.empty:
        return ()
    working = df.copy()
    if "lapIndex" in working.columns:
        working = working.sort_values("lapIndex", kind="stable")
    laps = []
    for _, row in working.iterrows():
        laps.append(Lap(position_split=_optional_position(row.get("endLat"), row.get("endLon"))))
    return tuple(laps)


@dataclass
class ExerciseService:
    config: Config

    def load(self, activity_id: str) -> Optional[Exercise]:
        """Return the exercise with its samples and laps, or None if unavailable."""
        df = self._load_timeseries(activity_id)
        if df is None or df.empty:
            logger.debug("No sample data for activity %s", activity_id)
            return None
        samples = samples_from_frame(df.reset_index(drop=True))
        laps = self._load_laps(activity_id)
        return Exercise(
            activity_id=str(activity_id),
            samples=samples,
            laps=laps,
            location_recorded=any(sample.position is not None for sample in samples),
        )

    def _load_timeseries(self, activity_id: str) -> Optional[pd.DataFrame]:
        csv_path = self.config.timeseries_dir / f"{activity_id}.csv"
        if csv_path.exists():
            try:
                return pd.read_csv(csv_path)
            except Exception as exc:
                logger.warning("Failed to read timeseries %s: %s", csv_path, exc)
                return None

        gpx_path = self.config.gpx_dir / f"{activity_id}.gpx"
        if gpx_path.exists():
            return parse_gpx_to_timeseries(gpx_path.read_bytes())
        return None

    def _load_laps(self, activity_id: str) -> Tuple[Lap, ...]:
        path = self.config.laps_dir / f"{activity_id}.csv"
        if not path.exists():
            return ()
        try:
            df = pd.read_csv(path)
        except Exception as exc:
            logger.warning("Failed to read laps %s: %s", path, exc)
            return ()
        return laps_from_frame(df)
