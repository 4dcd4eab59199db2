from celery import Celery
from app.core.config.settings import settings


celery_app = Celery(
    "app",
    broker=settings.celery.CELERY_BROKER_URL,
    backend=settings.celery.CELERY_RESULT_BACKEND,
)

celery_app.conf.update(
    broker_connection_retry_on_startup=True,
    accept_content=settings.celery.CELERY_ACCEPT_CONTENT,
    task_serializer=settings.celery.CELERY_TASK_SERIALIZER,
    result_serializer=settings.celery.CELERY_RESULT_SERIALIZER,
    timezone=settings.celery.CELERY_TIMEZONE,
    enable_utc=settings.celery.CELERY_ENABLE_UTC,
    worker_concurrency=2,
    worker_prefetch_multiplier=1,
    # acknowledged after completion so a warm shutdown drains running sends
    task_acks_late=True,
    task_reject_on_worker_lost=True,
    # SMTP retries live in EmailService; bound the whole task as well
    task_time_limit=300,
    task_soft_time_limit=240,
    task_ignore_result=True,
    # fail fast when the broker is down instead of blocking the request
    broker_transport_options={"max_retries": 1},
)

celery_app.autodiscover_tasks(
    packages=["app.tasks"],
    force=False,
)
