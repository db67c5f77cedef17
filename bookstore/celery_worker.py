# bookstore/celery_worker.py
from celery import Celery

from bookstore.utils.settings import CELERY_BROKER_URL, CELERY_RESULT_BACKEND

celery_app = Celery(
    "bookstore",
    broker=CELERY_BROKER_URL,
    backend=CELERY_RESULT_BACKEND,
)

# register tasks explicitly
celery_app.conf.imports = (
    "bookstore.services.notification_service",
)

# notifications are best-effort, at-most-once:
# the worker acks before running the task and publishing is not retried
celery_app.conf.task_acks_late = False
celery_app.conf.task_publish_retry = False
celery_app.conf.task_ignore_result = True

celery_app.conf.timezone = "UTC"
