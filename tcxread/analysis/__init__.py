"""
Analysis Module

Provides TCX parsing and activity metric aggregation.
"""

from .metrics import (
    build_activity,
    build_lap,
    build_parsed_file,
    calculate_ascent_descent,
    calculate_average_heart_rate,
    calculate_cadence,
    calculate_max_altitude,
    calculate_power,
    calculate_speed,
    flatten_trackpoints,
)
from .models import NOT_AVAILABLE, Activity, Lap, ParsedFile, Position, TrackPoint
from .tcx_parser import (
    TCX_NAMESPACES,
    parse_tcx_content,
    parse_tcx_file,
    walk_document,
)

__all__ = [
    "Activity",
    "Lap",
    "NOT_AVAILABLE",
    "ParsedFile",
    "Position",
    "TrackPoint",
    "TCX_NAMESPACES",
    "parse_tcx_content",
    "parse_tcx_file",
    "walk_document",
    "build_activity",
    "build_lap",
    "build_parsed_file",
    "calculate_ascent_descent",
    "calculate_average_heart_rate",
    "calculate_cadence",
    "calculate_max_altitude",
    "calculate_power",
    "calculate_speed",
    "flatten_trackpoints",
]
