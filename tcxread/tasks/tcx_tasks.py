"""
TCX Analysis Tasks

Celery tasks for parsing TCX activity files. Each task handles one file
and shares no state with other tasks, so many files can be analyzed in
parallel by dispatching one task per file.
"""

import logging
from typing import Any, Dict, List

from ..analysis import ParsedFile, parse_tcx_content, parse_tcx_file
from . import app

logger = logging.getLogger(__name__)


def _result_payload(parsed: ParsedFile, include_trackpoints: bool) -> Dict[str, Any]:
    summary = parsed.to_dict(include_trackpoints)
    activities = summary.pop("activities")
    return {"success": True, "summary": summary, "activities": activities}


@app.task(name="analyze_tcx_file", bind=True)
def analyze_tcx_file(
    self, file_path: str, include_trackpoints: bool = False
) -> Dict[str, Any]:
    """
    Parse a TCX file from disk and compute its metrics.

    Args:
        file_path: Path to the .tcx file, readable by the worker
        include_trackpoints: Include every trackpoint in the lap output

    Returns:
        Dict containing:
            - summary: File-level totals and averages ("NA" when unavailable)
            - activities: Per-activity and per-lap metrics
    """
    logger.info(f"[Task {self.request.id}] Starting analyze_tcx_file for {file_path}")

    try:
        parsed = parse_tcx_file(file_path)

        logger.info(
            f"[Task {self.request.id}] Analysis complete. "
            f"Activities: {len(parsed.activities)}, "
            f"Distance: {parsed.total_distance_meters:.1f}m, "
            f"Ascent: {parsed.total_ascent:.0f}m"
        )

        return _result_payload(parsed, include_trackpoints)

    except Exception as e:
        logger.error(
            f"[Task {self.request.id}] Error analyzing TCX file {file_path}: {e}",
            exc_info=True,
        )
        return {"success": False, "error": str(e), "file_path": file_path}


@app.task(name="analyze_tcx")
def analyze_tcx(tcx_content: str, include_trackpoints: bool = False) -> Dict[str, Any]:
    """
    Parse raw TCX content and compute its metrics.

    Args:
        tcx_content: Raw TCX file content as string

    Returns:
        Dict with summary and activities, as analyze_tcx_file
    """
    try:
        parsed = parse_tcx_content(tcx_content)
        return _result_payload(parsed, include_trackpoints)

    except Exception as e:
        logger.error(f"Error analyzing TCX content: {e}", exc_info=True)
        return {"success": False, "error": str(e)}


@app.task(name="summarize_tcx_files")
def summarize_tcx_files(file_paths: List[str]) -> Dict[str, Any]:
    """
    Summarize several TCX files in one call.

    A file that fails to parse is reported in its own entry and does not
    stop the others.

    Args:
        file_paths: Paths to .tcx files

    Returns:
        Dict with one entry per file, in input order
    """
    files = []
    for file_path in file_paths:
        try:
            parsed = parse_tcx_file(file_path)
            files.append(
                {"file_path": file_path, "success": True, "summary": parsed.summary()}
            )
        except Exception as e:
            logger.warning(f"Skipping unparseable TCX file {file_path}: {e}", exc_info=True)
            files.append({"file_path": file_path, "success": False, "error": str(e)})

    return {
        "success": True,
        "files_count": len(files),
        "failed_count": sum(1 for f in files if not f["success"]),
        "files": files,
    }
