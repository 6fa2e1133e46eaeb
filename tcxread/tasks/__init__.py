"""
tcxread Worker Tasks Package
"""

from ..celery_app import app

# Import all tasks to ensure they're registered with Celery
from .tcx_tasks import (
    analyze_tcx,
    analyze_tcx_file,
    summarize_tcx_files,
)

__all__ = [
    "app",
    "analyze_tcx",
    "analyze_tcx_file",
    "summarize_tcx_files",
]
