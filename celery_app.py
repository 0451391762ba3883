from celery import Celery
import logging

from medassist.config.system_settings import system_settings

logging.basicConfig(level=system_settings.LOG_LEVEL)

celery_app = Celery(
    "worker",
    broker=system_settings.CELERY_BROKER_URL,
    backend=system_settings.CELERY_RESULT_BACKEND,
)


celery_app.conf.imports = (
    "worker.sync_tasks",
)

celery_app.conf.beat_schedule = {
    "auto-sync-articles": {
        "task": "sync.articles",
        "schedule": float(system_settings.AUTO_SYNC_INTERVAL_SECONDS),
    },
}
