"""Copyright (C) 2025 Pierre Marrec
SPDX-License-Identifier: GPL-3.0-or-later

Tooltip text and placement for the scrubbed track position.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import List

from services.exercise_service import Exercise
from utils.formatting import SpeedMode, UnitFormatter, seconds_to_time_string
from utils.i18n import Resources

TOOLTIP_OFFSET = (8.0, 8.0)


@dataclass(frozen=True)
class ScreenPoint:
    x: float
    y: float


@dataclass(frozen=True)
class ContainerGeometry:
    """Where the map container sits: within its scene, the scene within its
    window, and the window on screen."""

    container_x: float = 0.0
    container_y: float = 0.0
    scene_x: float = 0.0
    scene_y: float = 0.0
    window_x: float = 0.0
    window_y: float = 0.0


def tooltip_anchor(geometry: ContainerGeometry) -> ScreenPoint:
    """Screen coordinates of the upper left corner of the map container, inset by the tooltip offset."""
    local_x, local_y = TOOLTIP_OFFSET
    return ScreenPoint(
        x=local_x + geometry.container_x + geometry.scene_x + geometry.window_x,
        y=local_y + geometry.container_y + geometry.scene_y + geometry.window_y,
    )


@dataclass
class TooltipContentBuilder:
    exercise: Exercise
    resources: Resources
    formatter: UnitFormatter
    speed_mode: SpeedMode = SpeedMode.SPEED

    def build(self, sample_index: int) -> str:
        """Create the tooltip text for the sample at ``sample_index``.

        The 1-based trackpoint number always comes first, followed by one line
        per present value in the order time, distance, altitude, heart rate,
        speed, temperature.
        """
        sample = self.exercise.samples[sample_index]
        fmt = self.formatter
        lines: List[str] = [self._line("track.tooltip.trackpoint", str(sample_index + 1))]

        if sample.timestamp_ms is not None:
            lines.append(
                self._line("track.tooltip.time", seconds_to_time_string(sample.timestamp_ms // 1000))
            )
        if sample.distance_m is not None:
            lines.append(
                self._line("track.tooltip.distance", fmt.distance_to_string(sample.distance_m / 1000.0, 3))
            )
        if sample.altitude_m is not None:
            lines.append(self._line("track.tooltip.altitude", fmt.height_to_string(sample.altitude_m)))
        if sample.heart_rate is not None:
            lines.append(self._line("track.tooltip.heartrate", fmt.heart_rate_to_string(sample.heart_rate)))
        if sample.speed_kmh is not None:
            lines.append(
                self._line("track.tooltip.speed", fmt.speed_to_string(sample.speed_kmh, 2, self.speed_mode))
            )
        if sample.temperature_c is not None:
            lines.append(
                self._line("track.tooltip.temperature", fmt.temperature_to_string(sample.temperature_c))
            )
        return "".join(lines)

    def _line(self, key: str, value: str) -> str:
        return f"{self.resources.get_string(key)}: {value}\n"
