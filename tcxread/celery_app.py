"""
Celery Application Configuration

Environment:
    REDIS_URL: broker and result backend (default redis://localhost:6379/0)
    TCXREAD_RESULT_BACKEND: overrides the result backend
    TCXREAD_TASK_TIME_LIMIT: hard time limit per file, in seconds
"""

import os

from celery import Celery

redis_url = os.getenv('REDIS_URL', 'redis://localhost:6379/0')
result_backend = os.getenv('TCXREAD_RESULT_BACKEND', redis_url)

app = Celery('tcxread', broker=redis_url, backend=result_backend)

# One TCX file per task; payloads are plain dicts
app.conf.update(
    task_serializer='json',
    accept_content=['json'],
    result_serializer='json',
    timezone='UTC',
    enable_utc=True,
    task_track_started=True,
    task_time_limit=int(os.getenv('TCXREAD_TASK_TIME_LIMIT', '300')),
    worker_prefetch_multiplier=1,
)

app.autodiscover_tasks(['tcxread'])

__all__ = ['app']
