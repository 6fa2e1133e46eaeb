"""
Print the metrics of a TCX file.

Usage:
    python -m tcxread activity.tcx
    python -m tcxread activity.tcx --json
"""

import argparse
import json
import logging
import sys

from lxml import etree

from .analysis import parse_tcx_file

logger = logging.getLogger(__name__)


SUMMARY_FIELDS = [
    ("Distance", "total_distance_meters", " m"),
    ("Time", "total_time_seconds", " s"),
    ("Calories", "total_calories", ""),
    ("Total ascent", "total_ascent", " m"),
    ("Total descent", "total_descent", " m"),
    ("Max altitude", "max_altitude", " m"),
    ("Average heart rate", "average_heart_rate", " bpm"),
    ("Average power", "average_watts", " W"),
    ("Max power", "max_watts", " W"),
    ("Average cadence", "average_cadence_all", " rpm"),
    ("Average cadence (active)", "average_cadence_biking", " rpm"),
    ("Average speed", "average_speed_all", " m/s"),
    ("Average speed (moving)", "average_speed_moving", " m/s"),
]


def _format_value(value, unit: str = "", precision: int = 2) -> str:
    if isinstance(value, float):
        return f"{value:.{precision}f}{unit}"
    if isinstance(value, int):
        return f"{value}{unit}"
    return str(value)


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(
        prog="tcxread", description="Summarize a Training Center XML (TCX) file"
    )
    parser.add_argument("file", help="Path to the .tcx file")
    parser.add_argument("--json", action="store_true", help="Print the summary as JSON")
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        parsed = parse_tcx_file(args.file)
    except (OSError, etree.XMLSyntaxError) as e:
        logger.debug(f"Failed to parse {args.file}", exc_info=True)
        print(f"Error: could not read {args.file}: {e}", file=sys.stderr)
        return 1

    summary = parsed.summary()
    if args.json:
        print(json.dumps(summary, indent=2))
        return 0

    print(f"{'Activities':<26}{len(parsed.activities)}")
    for label, key, unit in SUMMARY_FIELDS:
        print(f"{label:<26}{_format_value(summary[key], unit)}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
