"""GPX track/route point extraction.

Points are matched by local tag name so GPX 1.0, GPX 1.1 and namespace-less
documents all parse the same way. A point with a bad coordinate is dropped
on its own instead of failing the whole document.
"""

import logging
import math
from xml.etree import ElementTree as ET

from gpx_slope.models import RawPoint

logger = logging.getLogger(__name__)


class ParseError(ValueError):
    """The document cannot produce a usable track."""


def _local_name(tag) -> str:
    # Comments and processing instructions have a callable tag
    if not isinstance(tag, str):
        return ""
    return tag.rsplit("}", 1)[-1]


def _parse_float(value: str | None) -> float | None:
    """Parse a finite float, returning None for missing or invalid text."""
    if value is None:
        return None
    try:
        result = float(value.strip())
    except ValueError:
        return None
    return result if math.isfinite(result) else None


def _find_child(elem: ET.Element, name: str) -> ET.Element | None:
    for child in elem:
        if _local_name(child.tag) == name:
            return child
    return None


def _parse_document(text: str) -> ET.Element:
    text = text.strip()
    if not text:
        raise ParseError("The document is empty.")
    try:
        return ET.fromstring(text)
    except ET.ParseError as e:
        raise ParseError(f"The GPX/XML could not be parsed; make sure it is complete ({e}).") from e


def _point_elements(root: ET.Element) -> list[ET.Element]:
    """Track points if there are any, otherwise route points."""
    trkpts = [el for el in root.iter() if _local_name(el.tag) == "trkpt"]
    if trkpts:
        logger.debug("Found %d track points", len(trkpts))
        return trkpts
    rtepts = [el for el in root.iter() if _local_name(el.tag) == "rtept"]
    logger.debug("No track points, found %d route points", len(rtepts))
    return rtepts


def parse_track(text: str) -> list[RawPoint]:
    """Parse GPX text and return its points in document order.

    Raises:
        ParseError: if the document is not well-formed, has no trkpt/rtept
            elements, has fewer than 2 points with valid coordinates, or has
            no elevation data at all.
    """
    root = _parse_document(text)

    elements = _point_elements(root)
    if not elements:
        raise ParseError("No <trkpt> or <rtept> points were found.")

    points: list[RawPoint] = []
    for el in elements:
        lat = _parse_float(el.get("lat"))
        lon = _parse_float(el.get("lon"))
        if lat is None or lon is None:
            continue
        ele_el = _find_child(el, "ele")
        elevation = _parse_float(ele_el.text) if ele_el is not None else None
        points.append(RawPoint(lat=lat, lon=lon, elevation=elevation))

    dropped = len(elements) - len(points)
    if dropped:
        logger.debug("Dropped %d points with invalid coordinates", dropped)

    if len(points) < 2:
        raise ParseError("Too few valid points.")
    if not any(pt.elevation is not None for pt in points):
        raise ParseError("The GPX has no elevation (<ele>) data; slope cannot be calculated.")

    return points


def extract_route_name(text: str) -> str | None:
    """Return the track name, falling back to the metadata name.

    Never raises; a document that cannot be parsed has no name.
    """
    try:
        root = _parse_document(text)
    except ParseError:
        return None

    for section in ("trk", "metadata"):
        name_el = _first_section_name(root, section)
        # Only the first <name> of each section counts, even if it is blank
        if name_el is not None and name_el.text and name_el.text.strip():
            return name_el.text.strip()
    return None


def _first_section_name(root: ET.Element, section: str) -> ET.Element | None:
    for el in root.iter():
        if _local_name(el.tag) == section:
            name_el = _find_child(el, "name")
            if name_el is not None:
                return name_el
    return None


def read_gpx_file(filepath: str) -> str:
    """Read a GPX file as text."""
    with open(filepath, "r", encoding="utf-8") as f:
        return f.read()
