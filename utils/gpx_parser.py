"""Copyright (C) 2025 Pierre Marrec
SPDX-License-Identifier: GPL-3.0-or-later

GPX file parser for recorded exercise tracks.

Every track point becomes one sample row; heart rate and temperature are read
from Garmin TrackPointExtension elements when present.
"""

from __future__ import annotations

from typing import Optional

import pandas as pd
from lxml import etree
from streamlit.logger import get_logger

logger = get_logger(__name__)

NAMESPACES = {
    "gpx": "http://www.topografix.com/GPX/1/1",
    "gpxtpx": "http://www.garmin.com/xmlschemas/TrackPointExtension/v1",
}

COLUMNS = ["lat", "lon", "elevationM", "timestamp", "hr", "temperatureC"]


def _child_float(node, path: str) -> Optional[float]:
    elem = node.find(path, namespaces=NAMESPACES)
    if elem is None or not elem.text:
        return None
    try:
        return float(elem.text)
    except (ValueError, TypeError):
        return None


def _attr_float(node, name: str) -> Optional[float]:
    raw = node.get(name)
    if raw is None:
        return None
    try:
        return float(raw)
    except (ValueError, TypeError):
        return None


def parse_gpx_to_timeseries(gpx_bytes: bytes) -> pd.DataFrame:
    """Parse GPX file into a timeseries DataFrame.

    Args:
        gpx_bytes: Raw GPX file content as bytes

    Returns:
        DataFrame with columns: lat, lon, elevationM, timestamp, hr, temperatureC
        (absent values are NaN/None). Empty DataFrame if parsing fails.
    """
    try:
        root = etree.fromstring(gpx_bytes)
    except etree.XMLSyntaxError as e:
        logger.warning(f"Invalid GPX XML: {e}", exc_info=True)
        return pd.DataFrame()

    trkpts = root.xpath(".//gpx:trkpt", namespaces=NAMESPACES)
    if not trkpts:
        logger.debug("No track points found in GPX")
        return pd.DataFrame()

    rows = []
    for trkpt in trkpts:
        lat_val = _attr_float(trkpt, "lat")
        lon_val = _attr_float(trkpt, "lon")
        # a point with only one coordinate has no usable position
        if lat_val is None or lon_val is None:
            lat_val = lon_val = None

        time_elem = trkpt.find("gpx:time", namespaces=NAMESPACES)
        timestamp_val: Optional[str] = None
        if time_elem is not None and time_elem.text:
            timestamp_val = time_elem.text.strip()

        rows.append(
            {
                "lat": lat_val,
                "lon": lon_val,
                "elevationM": _child_float(trkpt, "gpx:ele"),
                "timestamp": timestamp_val,
                "hr": _child_float(trkpt, ".//gpxtpx:hr"),
                "temperatureC": _child_float(trkpt, ".//gpxtpx:atemp"),
            }
        )

    df = pd.DataFrame(rows, columns=COLUMNS)
    logger.debug(f"Parsed GPX: {len(df)} points")
    return df
