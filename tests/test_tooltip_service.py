"""Copyright (C) 2025 Pierre Marrec
SPDX-License-Identifier: GPL-3.0-or-later

Tests for tooltip content and placement.
"""

from __future__ import annotations

from services.exercise_service import Exercise, GeoPosition, Sample
from services.tooltip_service import (
    ContainerGeometry,
    ScreenPoint,
    TooltipContentBuilder,
    tooltip_anchor,
)
from utils.formatting import SpeedMode, UnitFormatter, UnitSystem
from utils.i18n import Resources


def _builder(sample: Sample, index: int = 0, **kwargs) -> TooltipContentBuilder:
    samples = [Sample()] * index + [sample]
    exercise = Exercise(activity_id="a", samples=tuple(samples))
    return TooltipContentBuilder(
        exercise=exercise,
        resources=Resources(kwargs.pop("locale", "en_US")),
        formatter=UnitFormatter(kwargs.pop("unit_system", UnitSystem.METRIC)),
        **kwargs,
    )


def _normalize(text: str) -> str:
    return text.replace("\u00A0", " ").replace("\u202F", " ")


def test_index_and_heart_rate_only():
    sample = Sample(position=GeoPosition(45.0, 5.0), heart_rate=152)
    text = _builder(sample, index=4).build(4)

    assert text.endswith("\n")
    assert _normalize(text).splitlines() == ["Trackpoint: 5", "Heart rate: 152 bpm"]


def test_index_only_for_empty_sample():
    assert _builder(Sample()).build(0) == "Trackpoint: 1\n"


def test_all_fields_in_fixed_order():
    sample = Sample(
        position=GeoPosition(45.0, 5.0),
        timestamp_ms=3_723_500,
        distance_m=12345.0,
        altitude_m=250,
        heart_rate=140,
        speed_kmh=10.5,
        temperature_c=18.0,
    )
    lines = _normalize(_builder(sample).build(0)).splitlines()

    assert [line.split(":")[0] for line in lines] == [
        "Trackpoint",
        "Time",
        "Distance",
        "Altitude",
        "Heart rate",
        "Speed",
        "Temperature",
    ]
    assert lines[1] == "Time: 01:02:03"
    assert lines[2].endswith("km")
    assert lines[3].endswith("m")
    assert lines[5].endswith("km/h")
    assert lines[6].endswith("°C")


def test_french_labels_and_pace():
    sample = Sample(speed_kmh=12.0)
    text = _builder(sample, locale="fr_FR", speed_mode=SpeedMode.PACE).build(0)
    lines = _normalize(text).splitlines()
    assert lines == ["Point de trace: 1", "Vitesse: 5:00 min/km"]


def test_english_units():
    sample = Sample(altitude_m=100, temperature_c=20.0)
    lines = _normalize(_builder(sample, unit_system=UnitSystem.ENGLISH).build(0)).splitlines()
    assert lines[1] == "Altitude: 328 ft"
    assert lines[2] == "Temperature: 68 °F"


def test_tooltip_anchor_offsets_container_origin():
    assert tooltip_anchor(ContainerGeometry()) == ScreenPoint(8.0, 8.0)
    geometry = ContainerGeometry(
        container_x=5, container_y=6, scene_x=7, scene_y=8, window_x=300, window_y=400
    )
    assert tooltip_anchor(geometry) == ScreenPoint(x=320.0, y=422.0)
