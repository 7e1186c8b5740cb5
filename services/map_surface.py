"""Copyright (C) 2025 Pierre Marrec
SPDX-License-Identifier: GPL-3.0-or-later

Contract of the map surface used by the track panel, and its declarative
display configuration.
"""

from __future__ import annotations

from concurrent.futures import Future
from dataclasses import dataclass
from enum import Enum
from typing import Protocol, Sequence, Tuple

from services.exercise_service import GeoPosition


class MapLoadError(Exception):
    """Raised (or set on the display future) when the map surface cannot be shown."""


class MarkerStyle(Enum):
    BLUE = (59, 130, 246)
    GREY = (148, 163, 184)
    GREEN = (34, 197, 94)
    RED = (220, 38, 38)

    @property
    def rgb(self) -> Tuple[int, int, int]:
        return self.value


class ControlPosition(Enum):
    TOP_LEFT = "top-left"
    TOP_RIGHT = "top-right"
    BOTTOM_LEFT = "bottom-left"
    BOTTOM_RIGHT = "bottom-right"


class MapLayer(Enum):
    CARTO_LIGHT = ("Carto clair", "carto", "light")
    CARTO_DARK = ("Carto sombre", "carto", "dark")
    MAPBOX_OUTDOORS = ("Mapbox Outdoors", "mapbox", "mapbox://styles/mapbox/outdoors-v12")
    MAPBOX_SATELLITE = ("Mapbox Satellite", "mapbox", "mapbox://styles/mapbox/satellite-streets-v12")

    def __init__(self, label: str, provider: str, style: str) -> None:
        self.label = label
        self.provider = provider
        self.style = style

    @property
    def needs_mapbox_token(self) -> bool:
        return self.provider == "mapbox"


@dataclass(frozen=True)
class ZoomControlConfig:
    show: bool = True
    position: ControlPosition = ControlPosition.TOP_LEFT


@dataclass(frozen=True)
class ScaleControlConfig:
    show: bool = False
    position: ControlPosition = ControlPosition.BOTTOM_LEFT
    metric: bool = True


@dataclass(frozen=True)
class MapConfig:
    layers: Tuple[MapLayer, ...]
    zoom_control: ZoomControlConfig = ZoomControlConfig()
    scale_control: ScaleControlConfig = ScaleControlConfig()


def default_map_config(metric: bool, mapbox_available: bool) -> MapConfig:
    layers = [MapLayer.CARTO_LIGHT, MapLayer.CARTO_DARK]
    if mapbox_available:
        layers.extend([MapLayer.MAPBOX_OUTDOORS, MapLayer.MAPBOX_SATELLITE])
    return MapConfig(
        layers=tuple(layers),
        zoom_control=ZoomControlConfig(True, ControlPosition.BOTTOM_LEFT),
        scale_control=ScaleControlConfig(True, ControlPosition.BOTTOM_LEFT, metric),
    )


class MapSurface(Protocol):
    def display_map(self, config: MapConfig) -> "Future[object]":
        """Start showing the map; the future completes once it is ready or failed."""
        ...

    def add_marker(
        self, position: GeoPosition, label: str, style: MarkerStyle, z_priority: int
    ) -> str: ...

    def move_marker(self, handle: str, position: GeoPosition) -> None: ...

    def add_track(self, positions: Sequence[GeoPosition]) -> None: ...
