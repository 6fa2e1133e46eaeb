"""
TCX File Parser

Walks a Garmin Training Center XML (TCX) document and materializes its
Activities -> Activity -> Lap -> Track -> Trackpoint hierarchy into
immutable records, computing lap/activity/file metrics as each level is
built.

Uses lxml to decode the document. Elements are looked up by fixed
namespace-aware paths; a missing element resolves to its field's default
(0, 0.0, "" or None for Position) instead of raising.
"""

import logging
import math
from os import PathLike
from typing import Dict, List, Mapping, Optional, Tuple, Union

from lxml import etree

from .metrics import build_activity, build_lap, build_parsed_file
from .models import Activity, Lap, ParsedFile, Position, TrackPoint

logger = logging.getLogger(__name__)


TCX_NAMESPACE = "http://www.garmin.com/xmlschemas/TrainingCenterDatabase/v2"
ACTIVITY_EXTENSION_NAMESPACE = "http://www.garmin.com/xmlschemas/ActivityExtension/v2"

TCX_NAMESPACES: Dict[str, str] = {
    "tcx": TCX_NAMESPACE,
    "ns3": ACTIVITY_EXTENSION_NAMESPACE,
}


def _xml_parser(encoding: Optional[str] = None) -> etree.XMLParser:
    # No DTD entity expansion or network access for uploaded files
    return etree.XMLParser(resolve_entities=False, no_network=True, encoding=encoding)


def decode_float(text: Optional[str]) -> float:
    """Decode element text as float; missing or non-numeric text gives 0.0"""
    if text is None:
        return 0.0
    try:
        value = float(text.strip())
    except ValueError:
        return 0.0
    return value if math.isfinite(value) else 0.0


def decode_int(text: Optional[str]) -> int:
    """
    Decode element text as int; missing or non-numeric text gives 0.

    Decimal text is truncated ("140.0" -> 140) since some devices write
    heart rate and cadence with a fractional part.
    """
    if text is None:
        return 0
    try:
        return int(text.strip())
    except ValueError:
        return int(decode_float(text))


def decode_str(text: Optional[str]) -> str:
    """Decode element text as str; missing text gives an empty string"""
    return text.strip() if text is not None else ""


def decode_text(text: Optional[str]) -> str:
    """Element text kept verbatim; missing text gives an empty string"""
    return text if text is not None else ""


def decode_position(
    element: Optional[etree._Element],
    namespaces: Mapping[str, str] = TCX_NAMESPACES,
) -> Optional[Position]:
    """
    Decode a Position element.

    Returns:
        Position, or None when the element is absent or lacks a coordinate
    """
    if element is None:
        return None

    latitude = element.findtext("tcx:LatitudeDegrees", namespaces=namespaces)
    longitude = element.findtext("tcx:LongitudeDegrees", namespaces=namespaces)
    if latitude is None or longitude is None:
        return None

    return Position(latitude=decode_float(latitude), longitude=decode_float(longitude))


def walk_trackpoint(
    element: etree._Element,
    namespaces: Mapping[str, str] = TCX_NAMESPACES,
) -> TrackPoint:
    """Materialize a single Trackpoint element"""

    def text(path: str) -> Optional[str]:
        return element.findtext(path, namespaces=namespaces)

    return TrackPoint(
        time=decode_text(text("tcx:Time")),
        position=decode_position(element.find("tcx:Position", namespaces=namespaces), namespaces),
        altitude_meters=decode_float(text("tcx:AltitudeMeters")),
        distance_meters=decode_float(text("tcx:DistanceMeters")),
        heart_rate=decode_int(text("tcx:HeartRateBpm/tcx:Value")),
        cadence=decode_int(text("tcx:Cadence")),
        watts=decode_float(text("tcx:Extensions/ns3:TPX/ns3:Watts")),
        speed=decode_float(text("tcx:Extensions/ns3:TPX/ns3:Speed")),
        sensor_state=decode_str(text("tcx:SensorState")),
    )


def walk_lap(
    element: etree._Element,
    namespaces: Mapping[str, str] = TCX_NAMESPACES,
) -> Lap:
    """
    Materialize a Lap element.

    Trackpoints from every Track in the lap are flattened into one sequence
    in document order. Time, distance and calories are taken from the
    lap's own summary fields.
    """
    trackpoints = [
        walk_trackpoint(tp, namespaces)
        for tp in element.iterfind("tcx:Track/tcx:Trackpoint", namespaces=namespaces)
    ]

    return build_lap(
        start_time=decode_str(element.get("StartTime")),
        total_time_seconds=decode_float(
            element.findtext("tcx:TotalTimeSeconds", namespaces=namespaces)
        ),
        distance_meters=decode_float(
            element.findtext("tcx:DistanceMeters", namespaces=namespaces)
        ),
        calories=decode_int(element.findtext("tcx:Calories", namespaces=namespaces)),
        trackpoints=trackpoints,
    )


def walk_activity(
    element: etree._Element,
    namespaces: Mapping[str, str] = TCX_NAMESPACES,
) -> Activity:
    """Materialize an Activity element and its laps"""
    laps = [walk_lap(lap, namespaces) for lap in element.iterfind("tcx:Lap", namespaces=namespaces)]

    activity = build_activity(
        sport=decode_str(element.get("Sport")),
        activity_id=decode_str(element.findtext("tcx:Id", namespaces=namespaces)),
        laps=laps,
    )
    logger.debug(
        f"Parsed {activity.sport or 'unknown'} activity {activity.id!r}: "
        f"{len(laps)} laps, {sum(len(lap.trackpoints) for lap in laps)} trackpoints"
    )
    return activity


def walk_document(
    root: etree._Element,
    namespaces: Mapping[str, str] = TCX_NAMESPACES,
) -> Tuple[Activity, ...]:
    """Walk every Activities/Activity under the document root"""
    activities: List[Activity] = [
        walk_activity(activity, namespaces)
        for activity in root.iterfind("tcx:Activities/tcx:Activity", namespaces=namespaces)
    ]
    return tuple(activities)


def parse_tcx_root(
    root: etree._Element,
    namespaces: Mapping[str, str] = TCX_NAMESPACES,
) -> ParsedFile:
    """Build the full ParsedFile from an already-decoded document root"""
    return build_parsed_file(walk_document(root, namespaces))


def parse_tcx_file(file_path: Union[str, PathLike]) -> ParsedFile:
    """
    Parse a TCX file from disk.

    Args:
        file_path: Path to the .tcx file

    Returns:
        ParsedFile with every metric computed

    Raises:
        OSError: if the file cannot be opened
        lxml.etree.XMLSyntaxError: if the file is not well-formed XML
    """
    with open(file_path, "rb") as f:
        tree = etree.parse(f, _xml_parser())

    logger.debug(f"Decoded TCX document {file_path}")
    return parse_tcx_root(tree.getroot())


def parse_tcx_content(tcx_content: Union[str, bytes]) -> ParsedFile:
    """
    Parse TCX content held in memory.

    Args:
        tcx_content: Raw TCX document as string or bytes

    Returns:
        ParsedFile with every metric computed

    Raises:
        lxml.etree.XMLSyntaxError: if the content is not well-formed XML
    """
    encoding = None
    if isinstance(tcx_content, str):
        # lxml rejects str input that carries an encoding declaration, and
        # the declared encoding no longer describes the re-encoded bytes
        tcx_content = tcx_content.encode("utf-8")
        encoding = "utf-8"

    root = etree.fromstring(tcx_content, _xml_parser(encoding))
    return parse_tcx_root(root)
