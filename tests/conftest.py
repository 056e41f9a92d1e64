import os

import pytest

from gpx_slope.models import RawPoint

SAMPLE_GPX_PATH = os.path.join(
    os.path.dirname(__file__), "functional", "data", "sample_route.gpx"
)


def make_gpx(body: str, root_attrs: str = 'xmlns="http://www.topografix.com/GPX/1/1"') -> str:
    """Wrap a GPX body in a <gpx> root element."""
    return f"""<?xml version="1.0"?>
<gpx version="1.1" {root_attrs}>
{body}
</gpx>"""


def make_trkpts(points) -> str:
    """Render (lat, lon, ele) tuples as <trkpt> elements; ele may be None."""
    parts = []
    for lat, lon, ele in points:
        ele_xml = f"<ele>{ele}</ele>" if ele is not None else ""
        parts.append(f'<trkpt lat="{lat}" lon="{lon}">{ele_xml}</trkpt>')
    return "<trk><trkseg>" + "".join(parts) + "</trkseg></trk>"


@pytest.fixture
def gpx_from_points():
    """Build a GPX track document from (lat, lon, ele) tuples."""
    def build(points, extra: str = "") -> str:
        return make_gpx(extra + make_trkpts(points))
    return build


@pytest.fixture
def sample_gpx_text():
    with open(SAMPLE_GPX_PATH, encoding="utf-8") as f:
        return f.read()


@pytest.fixture
def equator_points():
    """Three points ~111.19 m apart along the equator: up 10 m, then down 20 m."""
    return [
        RawPoint(lat=0.0, lon=0.0, elevation=100.0),
        RawPoint(lat=0.0, lon=0.001, elevation=110.0),
        RawPoint(lat=0.0, lon=0.002, elevation=90.0),
    ]


@pytest.fixture
def flat_points():
    """Five points ~11 m apart at constant elevation."""
    return [
        RawPoint(lat=37.7749 + i * 0.0001, lon=-122.4194, elevation=10.0)
        for i in range(5)
    ]
