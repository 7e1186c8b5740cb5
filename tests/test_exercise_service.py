"""Copyright (C) 2025 Pierre Marrec
SPDX-License-Identifier: GPL-3.0-or-later
"""

from __future__ import annotations

import pandas as pd
import pytest

from services.exercise_service import ExerciseService, GeoPosition, Lap


@pytest.fixture()
def service(cfg) -> ExerciseService:
    return ExerciseService(cfg)


def _write_timeseries(cfg, activity_id: str, rows) -> None:
    pd.DataFrame(rows).to_csv(cfg.timeseries_dir / f"{activity_id}.csv", index=False)


def test_load_sparse_samples(service, cfg):
    _write_timeseries(
        cfg,
        "act-1",
        [
            {"timestamp": "2025-01-05T07:00:00Z", "lat": 45.0, "lon": 5.0, "hr": 120, "elevationM": 210.4},
            {"timestamp": "2025-01-05T07:00:05Z", "lat": None, "lon": None, "hr": 125, "elevationM": None},
            {"timestamp": "2025-01-05T07:00:10Z", "lat": 45.1, "lon": None, "hr": None, "elevationM": 212.0},
        ],
    )

    exercise = service.load("act-1")

    assert exercise is not None
    assert exercise.activity_id == "act-1"
    assert exercise.location_recorded is True
    first, second, third = exercise.samples
    assert first.position == GeoPosition(45.0, 5.0)
    assert first.timestamp_ms == 0
    assert first.heart_rate == 120
    assert first.altitude_m == 210
    assert second.position is None
    assert second.timestamp_ms == 5000
    assert second.altitude_m is None
    assert third.position is None
    assert third.heart_rate is None
    assert third.timestamp_ms == 10000
    assert first.distance_m is None
    assert first.temperature_c is None


def test_numeric_timestamps_are_offsets(service, cfg):
    _write_timeseries(
        cfg,
        "act-2",
        [
            {"timestamp": 10, "lat": 45.0, "lon": 5.0, "distanceM": 0.0, "paceKmh": 9.5},
            {"timestamp": 12.5, "lat": 45.01, "lon": 5.01, "distanceM": 7.2, "paceKmh": 10.1},
        ],
    )

    samples = service.load("act-2").samples

    assert [s.timestamp_ms for s in samples] == [0, 2500]
    assert samples[1].distance_m == pytest.approx(7.2)
    assert samples[1].speed_kmh == pytest.approx(10.1)


def test_no_positions_means_no_location(service, cfg):
    _write_timeseries(cfg, "act-3", [{"timestamp": 0, "hr": 100}, {"timestamp": 1, "hr": 101}])

    exercise = service.load("act-3")

    assert exercise.location_recorded is False
    assert all(s.position is None for s in exercise.samples)


def test_laps_sorted_by_index(service, cfg):
    _write_timeseries(cfg, "act-4", [{"timestamp": 0, "lat": 45.0, "lon": 5.0}])
    pd.DataFrame(
        [
            {"lapIndex": 2, "endLat": 45.2, "endLon": 5.2},
            {"lapIndex": 1, "endLat": 45.1, "endLon": 5.1},
            {"lapIndex": 3, "endLat": None, "endLon": None},
        ]
    ).to_csv(cfg.laps_dir / "act-4.csv", index=False)

    laps = service.load("act-4").laps

    assert laps == (
        Lap(GeoPosition(45.1, 5.1)),
        Lap(GeoPosition(45.2, 5.2)),
        Lap(None),
    )


def test_missing_laps_file_means_no_laps(service, cfg):
    _write_timeseries(cfg, "act-5", [{"timestamp": 0, "lat": 45.0, "lon": 5.0}])
    assert service.load("act-5").laps == ()


def test_gpx_fallback(service, cfg):
    gpx = """<?xml version="1.0" encoding="UTF-8"?>
<gpx version="1.1" xmlns="http://www.topografix.com/GPX/1/1">
  <trk><trkseg>
    <trkpt lat="45.0" lon="5.0"><ele>100</ele><time>2025-01-05T07:00:00Z</time></trkpt>
    <trkpt lat="45.1" lon="5.1"><ele>101</ele><time>2025-01-05T07:00:03Z</time></trkpt>
  </trkseg></trk>
</gpx>"""
    (cfg.gpx_dir / "act-6.gpx").write_text(gpx, encoding="utf-8")

    exercise = service.load("act-6")

    assert exercise is not None
    assert [s.position for s in exercise.samples] == [GeoPosition(45.0, 5.0), GeoPosition(45.1, 5.1)]
    assert [s.timestamp_ms for s in exercise.samples] == [0, 3000]
    assert exercise.samples[1].altitude_m == 101


def test_missing_activity_returns_none(service):
    assert service.load("unknown") is None


def test_empty_timeseries_returns_none(service, cfg):
    (cfg.timeseries_dir / "act-7.csv").write_text("", encoding="utf-8")
    assert service.load("act-7") is None


def test_iso_timestamps_with_mixed_precision(service, cfg):
    _write_timeseries(
        cfg,
        "act-8",
        [
            {"timestamp": "2025-01-05T07:00:00Z", "lat": 45.0, "lon": 5.0},
            {"timestamp": "2025-01-05T07:00:05.500Z", "lat": 45.1, "lon": 5.1},
            {"timestamp": "2025-01-05T07:00:10Z", "lat": 45.2, "lon": 5.2},
        ],
    )

    samples = service.load("act-8").samples

    assert [s.timestamp_ms for s in samples] == [0, 5500, 10000]
