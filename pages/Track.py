"""Copyright (C) 2025 Pierre Marrec
SPDX-License-Identifier: GPL-3.0-or-later
"""

from __future__ import annotations

import streamlit as st
from streamlit.logger import get_logger

from graph.track_map import PydeckMapSurface
from services.exercise_service import Exercise, ExerciseService
from services.map_surface import default_map_config
from services.tooltip_service import TooltipContentBuilder
from services.track_panel_service import InitializationState, TrackPanelController
from utils.config import Config, load_config, redact
from utils.formatting import UnitFormatter, UnitSystem, set_locale
from utils.i18n import Resources
from widgets.track_position import (
    ScrubberState,
    TooltipState,
    render_position_slider,
    render_tooltip,
)

logger = get_logger(__name__)

st.set_page_config(page_title="Exercise Track Viewer - Trace", layout="wide")


def _first(value):
    if isinstance(value, list):
        return value[0] if value else None
    return value


def _panel_for(exercise: Exercise, cfg: Config, resources: Resources):
    """Return the (controller, surface, scrubber, tooltip) kept for this exercise."""
    key = f"track_panel_{exercise.activity_id}"
    panel = st.session_state.get(key)
    if panel is None:
        surface = PydeckMapSurface(cfg.mapbox_token)
        scrubber = ScrubberState()
        tooltip = TooltipState()
        builder = TooltipContentBuilder(
            exercise=exercise,
            resources=resources,
            formatter=UnitFormatter(cfg.unit_system),
            speed_mode=cfg.speed_mode,
        )
        map_config = default_map_config(
            metric=cfg.unit_system == UnitSystem.METRIC,
            mapbox_available=bool(cfg.mapbox_token),
        )
        controller = TrackPanelController(
            exercise=exercise,
            surface=surface,
            scrubber=scrubber,
            tooltip_view=tooltip,
            tooltip_builder=builder,
            resources=resources,
            map_config=map_config,
        )
        panel = (controller, surface, scrubber, tooltip)
        st.session_state[key] = panel
    return panel


def main() -> None:
    cfg = st.session_state.get("app_config")
    if cfg is None:
        cfg = load_config()
        st.session_state["app_config"] = cfg
    set_locale(cfg.locale)
    resources = Resources(cfg.locale)
    exercise_service = ExerciseService(cfg)

    params = st.query_params
    activity_id = _first(params.get("activityId")) or st.session_state.get("activity_view_id")
    if not activity_id:
        st.warning("Aucune activité sélectionnée.")
        st.stop()

    exercise = exercise_service.load(str(activity_id))
    if exercise is None:
        st.warning(f"Impossible de charger l'activité {activity_id}.")
        st.stop()

    st.title(f"Trace {exercise.activity_id}")

    if not exercise.location_recorded:
        st.caption(resources.get_string("track.no_track"))
        return

    controller, surface, scrubber, tooltip = _panel_for(exercise, cfg, resources)

    show_key = f"track_show_{exercise.activity_id}"
    if st.button(resources.get_string("track.show_map"), key=f"{show_key}_button"):
        st.session_state[show_key] = True
    if st.session_state.get(show_key):
        controller.request_display()

    if controller.state == InitializationState.LOADING:
        st.caption(resources.get_string("track.loading"))
    elif controller.state == InitializationState.FAILED:
        st.error(f"{resources.get_string('track.map_failed')} ({controller.load_error})")
    elif controller.state == InitializationState.READY:
        layers = list(surface.config.layers)
        selection = st.selectbox(
            resources.get_string("track.base_layer"),
            layers,
            format_func=lambda layer: layer.label,
            key=f"track_layer_{exercise.activity_id}",
        )
        if selection.needs_mapbox_token:
            st.caption(f"Mapbox (jeton {redact(cfg.mapbox_token)})")
        deck = surface.build_deck(selection)
        if deck is not None:
            st.pydeck_chart(deck)
        scale = surface.scale_caption()
        if scale:
            st.caption(scale)

    render_position_slider(
        controller,
        scrubber,
        resources.get_string("track.position"),
        key=f"track_position_{exercise.activity_id}",
    )
    render_tooltip(tooltip)


if __name__ == "__main__":
    main()
