# bazaar/celery_worker.py
from celery import Celery

from bazaar.utils.settings import CELERY_BROKER_URL, CELERY_RESULT_BACKEND, CELERY_TASK_ALWAYS_EAGER

celery_app = Celery(
    "bazaar",
    broker=CELERY_BROKER_URL,
    backend=CELERY_RESULT_BACKEND,
)

# Explicite importuj taski, zeby Celery je zarejestrowal
celery_app.conf.imports = (
    "bazaar.services.notification_service",
)

celery_app.conf.timezone = "UTC"

#w testach i lokalnie bez brokera taski ida synchronicznie
celery_app.conf.task_always_eager = CELERY_TASK_ALWAYS_EAGER
