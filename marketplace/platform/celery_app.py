from celery import Celery

from marketplace.platform.config import settings

PURGE_TASK_NAME = "marketplace.features.auth.workers.tasks.purge_expired_verification_codes"


def create_celery_app() -> Celery:
    """
    Create and configure the Celery application.

    Only periodic housekeeping runs here; request handling never waits on it.
    Beat schedule:
    - purge_expired_verification_codes: deletes verification codes past expiry
    """
    celery_app = Celery(
        "ufmarketplace",
        broker=settings.CELERY_BROKER_URL,
        backend=settings.CELERY_RESULT_BACKEND,
    )

    celery_app.conf.update(
        task_serializer="json",
        result_serializer="json",
        accept_content=["json"],
        timezone="UTC",
        enable_utc=True,
        task_default_queue="default",
        task_routes={
            PURGE_TASK_NAME: {"queue": "default"},
        },
        # Celery Beat schedule for periodic tasks
        beat_schedule={
            "purge-expired-verification-codes": {
                "task": PURGE_TASK_NAME,
                "schedule": settings.VERIFICATION_PURGE_INTERVAL_SECONDS,
            },
        },
    )

    celery_app.autodiscover_tasks(["marketplace.features.auth.workers"])

    return celery_app


# Global Celery app instance
celery_app = create_celery_app()
