"""Copyright (C) 2025 Pierre Marrec
SPDX-License-Identifier: GPL-3.0-or-later
"""

from __future__ import annotations

from services.tooltip_service import ScreenPoint
from widgets.track_position import ScrubberState, TooltipState


def test_scrubber_disabled_until_bound_set():
    scrubber = ScrubberState()
    assert not scrubber.enabled
    scrubber.set_max(0)
    assert not scrubber.enabled
    scrubber.set_max(42)
    assert scrubber.enabled
    assert scrubber.max_value == 42


def test_tooltip_state_keeps_last_text_and_anchor():
    tooltip = TooltipState()
    tooltip.show("Trackpoint: 1\n", ScreenPoint(8.0, 8.0))
    tooltip.show("Trackpoint: 2\n", ScreenPoint(18.0, 28.0))

    assert tooltip.text == "Trackpoint: 2\n"
    assert tooltip.anchor == ScreenPoint(18.0, 28.0)
