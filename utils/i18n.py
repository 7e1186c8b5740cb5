"""Copyright (C) 2025 Pierre Marrec
SPDX-License-Identifier: GPL-3.0-or-later

Localized UI strings.

Catalogs are keyed by message key; values use ``str.format`` positional
placeholders (``{0}``) for arguments such as the lap number.
"""

from __future__ import annotations

from typing import Dict

from babel import Locale, UnknownLocaleError
from streamlit.logger import get_logger

logger = get_logger(__name__)

DEFAULT_LANGUAGE = "fr"

MESSAGES: Dict[str, Dict[str, str]] = {
    "fr": {
        "track.tooltip.trackpoint": "Point de trace",
        "track.tooltip.time": "Temps",
        "track.tooltip.distance": "Distance",
        "track.tooltip.altitude": "Altitude",
        "track.tooltip.heartrate": "FC",
        "track.tooltip.speed": "Vitesse",
        "track.tooltip.temperature": "Température",
        "track.maptooltip.lap": "Tour {0}",
        "track.maptooltip.start": "Départ",
        "track.maptooltip.end": "Arrivée",
        "track.no_track": "Aucune donnée de trace disponible.",
        "track.show_map": "Afficher la carte",
        "track.loading": "Chargement de la carte…",
        "track.map_failed": "Impossible d'afficher la carte.",
        "track.position": "Position sur la trace",
        "track.base_layer": "Fond de carte",
    },
    "en": {
        "track.tooltip.trackpoint": "Trackpoint",
        "track.tooltip.time": "Time",
        "track.tooltip.distance": "Distance",
        "track.tooltip.altitude": "Altitude",
        "track.tooltip.heartrate": "Heart rate",
        "track.tooltip.speed": "Speed",
        "track.tooltip.temperature": "Temperature",
        "track.maptooltip.lap": "Lap {0}",
        "track.maptooltip.start": "Start",
        "track.maptooltip.end": "End",
        "track.no_track": "No track data available.",
        "track.show_map": "Show map",
        "track.loading": "Loading map…",
        "track.map_failed": "Failed to display the map.",
        "track.position": "Track position",
        "track.base_layer": "Base map",
    },
}


def _language_for(locale_str: str) -> str:
    try:
        language = Locale.parse(locale_str).language
    except (UnknownLocaleError, ValueError, TypeError):
        logger.warning("Unknown locale %r, using %s", locale_str, DEFAULT_LANGUAGE)
        return DEFAULT_LANGUAGE
    if language not in MESSAGES:
        return DEFAULT_LANGUAGE
    return language


class Resources:
    def __init__(self, locale_str: str = "fr_FR") -> None:
        self.language = _language_for(locale_str)
        self._catalog = MESSAGES[self.language]

    def get_string(self, key: str, *args: object) -> str:
        template = self._catalog.get(key)
        if template is None:
            logger.warning("Missing message key %s for language %s", key, self.language)
            return key
        if args:
            return template.format(*args)
        return template
