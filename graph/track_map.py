"""Copyright (C) 2025 Pierre Marrec
SPDX-License-Identifier: GPL-3.0-or-later

Pydeck implementation of the track panel map surface.

Coordinates are handed to deck.gl as [lon, lat]. Markers are emitted in
ascending z-priority so higher priorities are drawn on top.
"""

from __future__ import annotations

from concurrent.futures import Future
from dataclasses import dataclass
from typing import Dict, List, Optional, Sequence

import pydeck as pdk
from streamlit.logger import get_logger

from services.exercise_service import GeoPosition
from services.map_surface import MapConfig, MapLayer, MapLoadError, MarkerStyle
from utils.config import redact

logger = get_logger(__name__)

TRACK_COLOR = [255, 99, 71]
MARKER_RADIUS_PX = 7


@dataclass
class _Marker:
    position: GeoPosition
    label: str
    style: MarkerStyle
    z_priority: int
    order: int


class PydeckMapSurface:
    def __init__(self, mapbox_token: Optional[str] = None) -> None:
        self.mapbox_token = mapbox_token
        self.config: Optional[MapConfig] = None
        self.track: List[GeoPosition] = []
        self._markers: Dict[str, _Marker] = {}
        self._marker_count = 0

    @property
    def displayed(self) -> bool:
        return self.config is not None

    def display_map(self, config: MapConfig) -> "Future[object]":
        future: "Future[object]" = Future()
        if not config.layers:
            future.set_exception(MapLoadError("No base map layer configured"))
            return future
        missing = [layer.label for layer in config.layers if layer.needs_mapbox_token and not self.mapbox_token]
        if missing:
            future.set_exception(
                MapLoadError(f"Mapbox layers requested without token: {', '.join(missing)}")
            )
            return future
        logger.debug(
            "Map displayed with layers %s (mapbox token %s)",
            [layer.name for layer in config.layers],
            redact(self.mapbox_token) or "absent",
        )
        self.config = config
        future.set_result(config)
        return future

    def add_marker(
        self, position: GeoPosition, label: str, style: MarkerStyle, z_priority: int
    ) -> str:
        self._marker_count += 1
        handle = f"marker{self._marker_count}"
        self._markers[handle] = _Marker(position, label, style, z_priority, self._marker_count)
        return handle

    def move_marker(self, handle: str, position: GeoPosition) -> None:
        marker = self._markers.get(handle)
        if marker is None:
            raise KeyError(f"Unknown marker {handle}")
        marker.position = position

    def add_track(self, positions: Sequence[GeoPosition]) -> None:
        self.track = list(positions)

    def marker_rows(self) -> List[dict]:
        ordered = sorted(self._markers.values(), key=lambda m: (m.z_priority, m.order))
        return [
            {
                "position": [m.position.longitude, m.position.latitude],
                "label": m.label,
                "color": list(m.style.rgb),
            }
            for m in ordered
        ]

    def scale_caption(self) -> Optional[str]:
        if self.config is None or not self.config.scale_control.show:
            return None
        return "km / m" if self.config.scale_control.metric else "mi / ft"

    def build_deck(self, layer: Optional[MapLayer] = None) -> Optional[pdk.Deck]:
        """Return the deck for the current track and markers, None until displayed."""
        if self.config is None:
            return None
        base = layer if layer in self.config.layers else self.config.layers[0]

        center = self.track[0] if self.track else None
        if center is None and self._markers:
            center = next(iter(self._markers.values())).position
        view_state = pdk.ViewState(
            latitude=center.latitude if center else 0.0,
            longitude=center.longitude if center else 0.0,
            zoom=13 if center else 1,
            pitch=0,
        )

        layers = []
        if self.track:
            layers.append(
                pdk.Layer(
                    "PathLayer",
                    data=[{"path": [[p.longitude, p.latitude] for p in self.track]}],
                    get_path="path",
                    get_color=TRACK_COLOR,
                    width_scale=20,
                    width_min_pixels=3,
                    id="track",
                )
            )
        rows = self.marker_rows()
        if rows:
            layers.append(
                pdk.Layer(
                    "ScatterplotLayer",
                    data=rows,
                    get_position="position",
                    get_fill_color="color",
                    get_line_color=[255, 255, 255],
                    stroked=True,
                    radius_min_pixels=MARKER_RADIUS_PX,
                    pickable=True,
                    id="markers",
                )
            )

        deck_kwargs: dict = {
            "layers": layers,
            "initial_view_state": view_state,
            "views": [pdk.View(type="MapView", controller=self.config.zoom_control.show)],
            "map_provider": base.provider,
            "map_style": base.style,
            "tooltip": {"text": "{label}"},
        }
        if base.needs_mapbox_token:
            deck_kwargs["api_keys"] = {"mapbox": self.mapbox_token}
        return pdk.Deck(**deck_kwargs)
