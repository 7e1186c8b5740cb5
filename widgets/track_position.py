"""Copyright (C) 2025 Pierre Marrec
SPDX-License-Identifier: GPL-3.0-or-later

Track position scrubber and tooltip widgets for the Track page.

The state objects live in ``st.session_state`` together with their
``TrackPanelController``; the render functions redraw them on every rerun.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

import streamlit as st

from services.tooltip_service import ScreenPoint
from services.track_panel_service import TrackPanelController


@dataclass
class ScrubberState:
    """Upper bound and current value of the track position slider."""

    max_value: Optional[int] = None
    value: int = 0

    @property
    def enabled(self) -> bool:
        return self.max_value is not None and self.max_value > 0

    def set_max(self, value: int) -> None:
        self.max_value = value


@dataclass
class TooltipState:
    """Last tooltip shown for the position marker.

    Streamlit has no screen-space placement, so the page renders the text below
    the map and ignores ``anchor``; it is kept for views that can position a
    popup in screen coordinates.
    """

    text: Optional[str] = None
    anchor: Optional[ScreenPoint] = None

    def show(self, text: str, anchor: ScreenPoint) -> None:
        self.text = text
        self.anchor = anchor


def render_position_slider(
    controller: TrackPanelController, scrubber: ScrubberState, label: str, key: str
) -> None:
    """Render the position slider, disabled until the map has been loaded."""
    if not scrubber.enabled:
        st.slider(label, min_value=0, max_value=1, value=0, disabled=True, key=f"{key}_disabled")
        return

    def _on_change() -> None:
        new_value = int(st.session_state[key])
        old_value = scrubber.value
        scrubber.value = new_value
        controller.on_scrubber_changed(float(old_value), float(new_value))

    st.slider(
        label,
        min_value=0,
        max_value=scrubber.max_value,
        value=scrubber.value,
        step=1,
        key=key,
        on_change=_on_change,
    )


def render_tooltip(tooltip: TooltipState) -> None:
    if not tooltip.text:
        return
    # streamlit markdown needs two trailing spaces for a line break
    st.info("  \n".join(tooltip.text.splitlines()))
