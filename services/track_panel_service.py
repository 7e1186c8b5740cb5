"""Copyright (C) 2025 Pierre Marrec
SPDX-License-Identifier: GPL-3.0-or-later

Track panel controller: shows the exercise track in a map surface on demand
and keeps a position marker in sync with the track position scrubber.
"""

from __future__ import annotations

import math
from concurrent.futures import Future
from enum import Enum
from typing import Callable, List, Optional, Protocol

from streamlit.logger import get_logger

from services.exercise_service import Exercise, GeoPosition
from services.map_surface import MapConfig, MapLoadError, MapSurface, MarkerStyle
from services.tooltip_service import (
    ContainerGeometry,
    ScreenPoint,
    TooltipContentBuilder,
    tooltip_anchor,
)
from utils.i18n import Resources

logger = get_logger(__name__)

POSITION_MARKER_PRIORITY = 0
LAP_MARKER_PRIORITY = 0
START_MARKER_PRIORITY = 1000
END_MARKER_PRIORITY = 2000


class InitializationState(Enum):
    NOT_REQUESTED = "not_requested"
    LOADING = "loading"
    READY = "ready"
    FAILED = "failed"


class Scrubber(Protocol):
    def set_max(self, value: int) -> None: ...


class TooltipView(Protocol):
    def show(self, text: str, anchor: ScreenPoint) -> None: ...


class TrackPanelController:
    """Lazily displays the map and track of one exercise.

    The map is only loaded on the first ``request_display()`` call, the track,
    lap, start and end markers are drawn once the map surface reports success.
    """

    def __init__(
        self,
        exercise: Exercise,
        surface: MapSurface,
        scrubber: Scrubber,
        tooltip_view: TooltipView,
        tooltip_builder: TooltipContentBuilder,
        resources: Resources,
        map_config: MapConfig,
        geometry_provider: Callable[[], ContainerGeometry] = ContainerGeometry,
    ) -> None:
        self.exercise = exercise
        self.surface = surface
        self.scrubber = scrubber
        self.tooltip_view = tooltip_view
        self.tooltip_builder = tooltip_builder
        self.resources = resources
        self.map_config = map_config
        self.geometry_provider = geometry_provider
        self._state = InitializationState.NOT_REQUESTED
        self._load_error: Optional[BaseException] = None
        self._position_marker: Optional[str] = None

    @property
    def state(self) -> InitializationState:
        return self._state

    @property
    def load_error(self) -> Optional[BaseException]:
        return self._load_error

    # ------------------------------------------------------------------
    # Lazy initialization
    def request_display(self) -> None:
        """Display map and track; only the first call has an effect."""
        if self._state != InitializationState.NOT_REQUESTED:
            return
        self._state = InitializationState.LOADING
        logger.debug("Displaying map for activity %s", self.exercise.activity_id)
        try:
            future = self.surface.display_map(self.map_config)
        except Exception as exc:
            self._on_map_failed(exc)
            return
        future.add_done_callback(self._on_map_displayed)

    def _on_map_displayed(self, future: "Future[object]") -> None:
        if self._state != InitializationState.LOADING:
            return
        if future.cancelled():
            self._on_map_failed(MapLoadError("map display was cancelled"))
            return
        error = future.exception()
        if error is not None:
            self._on_map_failed(error)
            return

        self._state = InitializationState.READY
        try:
            self._show_track_and_laps()
            # enable the position scrubber by setting its upper bound
            self.scrubber.set_max(len(self.exercise.samples) - 1)
        except Exception as exc:
            self._on_map_failed(exc)

    def _on_map_failed(self, error: BaseException) -> None:
        self._state = InitializationState.FAILED
        self._load_error = error
        logger.error("Failed to display map!", exc_info=error)

    # ------------------------------------------------------------------
    # Static track rendering
    def _show_track_and_laps(self) -> None:
        positions = self._sample_positions()
        if not positions:
            logger.debug("No sample positions for activity %s", self.exercise.activity_id)
            return

        self.surface.add_track(positions)

        # lap markers first, start and end need to be displayed on top
        for lap_number, position in self._lap_positions():
            self.surface.add_marker(
                position,
                self.resources.get_string("track.maptooltip.lap", lap_number),
                MarkerStyle.GREY,
                LAP_MARKER_PRIORITY,
            )

        self.surface.add_marker(
            positions[0],
            self.resources.get_string("track.maptooltip.start"),
            MarkerStyle.GREEN,
            START_MARKER_PRIORITY,
        )
        self.surface.add_marker(
            positions[-1],
            self.resources.get_string("track.maptooltip.end"),
            MarkerStyle.RED,
            END_MARKER_PRIORITY,
        )

    def _sample_positions(self) -> List[GeoPosition]:
        return [s.position for s in self.exercise.samples if s.position is not None]

    def _lap_positions(self) -> List[tuple[int, GeoPosition]]:
        # the last lap split position is the exercise end position
        return [
            (number, lap.position_split)
            for number, lap in enumerate(self.exercise.laps[:-1], start=1)
            if lap.position_split is not None
        ]

    # ------------------------------------------------------------------
    # Position scrubber
    def on_scrubber_changed(self, old_value: float, new_value: float) -> None:
        """Move the position marker when the integer scrubber position changes."""
        if math.floor(old_value) == math.floor(new_value):
            return
        if self._state != InitializationState.READY:
            return
        index = math.floor(new_value)
        if not 0 <= index < len(self.exercise.samples):
            logger.debug("Ignoring scrubber position %s out of range", new_value)
            return
        self._move_position_marker(index)

    def _move_position_marker(self, index: int) -> None:
        position = self.exercise.samples[index].position
        # some samples have no position
        if position is None:
            return

        if self._position_marker is None:
            self._position_marker = self.surface.add_marker(
                position, "", MarkerStyle.BLUE, POSITION_MARKER_PRIORITY
            )
        else:
            self.surface.move_marker(self._position_marker, position)

        text = self.tooltip_builder.build(index)
        anchor = tooltip_anchor(self.geometry_provider())
        self.tooltip_view.show(text, anchor)
