# 📄 File: celery_config.py
#
# 🧭 Purpose (Layman Explanation):
# Configuration for the background worker that walks through the garden on a timer,
# checking which plants have gone too long without a journal entry.
#
# 🧪 Purpose (Technical Summary):
# Celery configuration for periodic plant maintenance: Redis broker and result backend,
# queue routing, worker limits and the beat schedule driving the plant health sweep.
#
# 🔗 Dependencies:
# - celery Python package
# - Redis server (message broker)
# - app.shared.config.settings
#
# 🔄 Connected Modules / Calls From:
# - celery worker / celery beat processes (celery -A celery_config worker|beat)
# - app.background_jobs.tasks.plant_health

import os
from datetime import timedelta

from celery import Celery
from kombu import Queue

from app.shared.config.settings import get_settings

settings = get_settings()

# =============================================================================
# CELERY CONFIGURATION CLASS
# =============================================================================


class CeleryConfig:
    """
    Celery configuration class for the Mindful Garden service.

    Defines settings for task execution, routing and scheduling.
    """

    # =========================================================================
    # BROKER AND BACKEND SETTINGS
    # =========================================================================

    broker_url = settings.CELERY_BROKER_URL
    result_backend = settings.CELERY_RESULT_BACKEND

    broker_connection_retry_on_startup = True
    broker_connection_retry = True
    broker_connection_max_retries = 10
    broker_heartbeat = 30
    broker_pool_limit = 10

    result_expires = timedelta(hours=24)

    # =========================================================================
    # TASK SETTINGS
    # =========================================================================

    task_serializer = "json"
    result_serializer = "json"
    accept_content = ["json"]
    timezone = "UTC"
    enable_utc = True

    task_default_queue = "default"
    task_default_exchange = "default"
    task_default_exchange_type = "direct"
    task_default_routing_key = "default"

    # A sweep that outlives its interval would overlap the next one
    task_time_limit = max(60, settings.HEALTH_CHECK_INTERVAL_SECONDS)
    task_soft_time_limit = max(45, int(settings.HEALTH_CHECK_INTERVAL_SECONDS * 0.8))
    task_acks_late = True
    worker_prefetch_multiplier = 1

    task_reject_on_worker_lost = True
    task_ignore_result = False

    # =========================================================================
    # QUEUE DEFINITIONS
    # =========================================================================

    task_routes = {
        "app.background_jobs.tasks.plant_health.sweep_plant_health": {
            "queue": "plant_maintenance"
        },
    }

    task_queues = (
        Queue("plant_maintenance", routing_key="plant_maintenance"),
        Queue("default", routing_key="default"),
    )

    # =========================================================================
    # WORKER SETTINGS
    # =========================================================================

    worker_max_tasks_per_child = 1000
    worker_concurrency = int(os.getenv("CELERY_WORKER_CONCURRENCY", 2))
    worker_pool = "prefork"

    worker_log_format = "[%(asctime)s: %(levelname)s/%(processName)s] %(message)s"
    worker_task_log_format = "[%(asctime)s: %(levelname)s/%(processName)s][%(task_name)s(%(task_id)s)] %(message)s"
    worker_hijack_root_logger = False

    # =========================================================================
    # BEAT SCHEDULER SETTINGS
    # =========================================================================

    beat_schedule = {
        "sweep-plant-health": {
            "task": "app.background_jobs.tasks.plant_health.sweep_plant_health",
            "schedule": timedelta(seconds=settings.HEALTH_CHECK_INTERVAL_SECONDS),
            "options": {"queue": "plant_maintenance"}
        },
    }

    beat_scheduler = "celery.beat:PersistentScheduler"
    beat_schedule_filename = "celerybeat-schedule"

    # =========================================================================
    # MONITORING
    # =========================================================================

    task_send_sent_event = True
    task_track_started = True
    worker_send_task_events = True
    event_serializer = "json"


# =============================================================================
# ENVIRONMENT-SPECIFIC CONFIGURATIONS
# =============================================================================

class DevelopmentCeleryConfig(CeleryConfig):
    """Development-specific Celery configuration."""

    worker_log_level = "DEBUG"


class ProductionCeleryConfig(CeleryConfig):
    """Production-specific Celery configuration."""

    worker_log_level = "INFO"
    worker_max_tasks_per_child = 5000
    broker_use_ssl = os.getenv("CELERY_BROKER_USE_SSL", "false").lower() == "true"


# =============================================================================
# CONFIG FACTORY
# =============================================================================

def get_celery_config() -> CeleryConfig:
    """
    Factory function to get appropriate Celery configuration based on environment.

    Returns:
        CeleryConfig: Configuration instance for current environment
    """
    config_map = {
        "development": DevelopmentCeleryConfig,
        "test": DevelopmentCeleryConfig,
        "staging": ProductionCeleryConfig,
        "production": ProductionCeleryConfig,
    }

    config_class = config_map.get(settings.ENVIRONMENT, DevelopmentCeleryConfig)
    return config_class()


# =============================================================================
# CELERY APPLICATION INSTANCE
# =============================================================================

app = Celery("mindful_garden")
app.config_from_object(get_celery_config())

# Imports app.background_jobs.tasks, which registers every task module
app.autodiscover_tasks(["app.background_jobs"])


if __name__ == "__main__":
    app.start()
