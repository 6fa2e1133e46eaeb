"""
tcxread

Parses Training Center XML (TCX) activity files and derives summary
metrics:
- Distance, time and calories from the file's lap summaries
- Ascent, descent and max altitude from trackpoint altitudes
- Heart rate, power, cadence and speed averages
"""

from .analysis import ParsedFile, parse_tcx_content, parse_tcx_file


# Delay Celery import so the parser works without celery configured
def get_celery_app():
    from .celery_app import app
    return app


__all__ = ['ParsedFile', 'get_celery_app', 'parse_tcx_content', 'parse_tcx_file']
