"""Celery application configuration."""

# Load environment variables first
from dotenv import load_dotenv
load_dotenv()

from celery import Celery
from celery.signals import worker_process_init

from wifisim.core.config import settings
from wifisim.core.logging_config import configure_logging

# Create Celery app
celery_app = Celery(
    "wifisim",
    broker=settings.REDIS_URL,
    backend=settings.REDIS_URL,
    include=[
        'wifisim.tasks.simulation_task',
    ]
)

# Configure Celery
celery_app.conf.update(
    # Serialization
    task_serializer='json',
    accept_content=['json'],
    result_serializer='json',

    # Timezone
    timezone='UTC',
    enable_utc=True,

    # Task tracking
    task_track_started=True,
    result_extended=True,

    # Timeouts
    task_time_limit=600,
    task_soft_time_limit=540,

    # Worker settings
    worker_prefetch_multiplier=1,  # Signal maps are CPU heavy
    worker_max_tasks_per_child=50,

    # Task result expiration
    result_expires=86400,  # Results expire after 24 hours

    # Retry settings
    task_acks_late=True,
    task_reject_on_worker_lost=True,
)


@worker_process_init.connect
def setup_worker_logging(**kwargs):
    """Configure logging in each forked worker process."""
    configure_logging()
