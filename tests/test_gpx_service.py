import pytest

from core.exceptions import GpxParseError
from services.gpx_service import parse_gpx_points

TRACK = """<?xml version="1.0" encoding="UTF-8"?>
<gpx version="1.1" creator="test" xmlns="http://www.topografix.com/GPX/1/1">
  <trk><name>Day 1</name><trkseg>
    <trkpt lat="46.5285" lon="10.4534"><ele>2757</ele><time>2024-07-01T08:00:00Z</time></trkpt>
    <trkpt lat="46.5300" lon="10.4600"><ele>2600</ele></trkpt>
  </trkseg></trk>
</gpx>"""

ROUTE_ONLY = """<?xml version="1.0" encoding="UTF-8"?>
<gpx version="1.1" creator="test" xmlns="http://www.topografix.com/GPX/1/1">
  <rte><rtept lat="47.0" lon="11.0"></rtept><rtept lat="47.1" lon="11.1"></rtept></rte>
</gpx>"""


def test_track_points():
    points = parse_gpx_points(TRACK)
    assert [(p.lat, p.lon) for p in points] == [(46.5285, 10.4534), (46.53, 10.46)]
    assert points[0].ele == 2757
    assert points[0].time.startswith("2024-07-01T08:00:00")
    assert points[1].time is None


def test_falls_back_to_route_points():
    assert len(parse_gpx_points(ROUTE_ONLY)) == 2


@pytest.mark.parametrize("gpx_data", ["", "   ", "not xml at all", "<gpx version=\"1.1\"></gpx>"])
def test_unusable_input(gpx_data):
    with pytest.raises(GpxParseError):
        parse_gpx_points(gpx_data)
