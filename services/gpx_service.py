"""
Route ingestion for trips.

Pulls the raw points out of a GPX document so the route can be drawn and
handed to the AI waypoint suggestions. Only the coordinates (and elevation
and time when present) are kept; no distances or validation beyond
"is this readable GPX with at least one point".
"""
import logging
from typing import List

import gpxpy
import gpxpy.gpx

from core.exceptions import GpxParseError
from schemas.trip_schema import GpxPoint

logger = logging.getLogger(__name__)


def parse_gpx_points(gpx_data: str) -> List[GpxPoint]:
    """
    Extracts points from GPX text.

    Track points are used when the file has any; otherwise route points,
    then standalone waypoints.

    Raises:
        GpxParseError: the text is not GPX or contains no points.
    """
    if not gpx_data or not gpx_data.strip():
        raise GpxParseError("GPX data is empty.")

    try:
        gpx = gpxpy.parse(gpx_data)
    except gpxpy.gpx.GPXException as e:
        raise GpxParseError(f"Invalid GPX data: {e}") from e

    raw_points = [
        point
        for track in gpx.tracks
        for segment in track.segments
        for point in segment.points
    ]
    if not raw_points:
        raw_points = [point for route in gpx.routes for point in route.points]
    if not raw_points:
        raw_points = list(gpx.waypoints)
    if not raw_points:
        raise GpxParseError("GPX data contains no track, route or waypoints.")

    points = [
        GpxPoint(
            lat=point.latitude,
            lon=point.longitude,
            ele=point.elevation,
            time=point.time.isoformat() if point.time else None,
        )
        for point in raw_points
    ]
    logger.debug("Parsed %d GPX points", len(points))
    return points
