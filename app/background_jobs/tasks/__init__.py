# 📄 File: app/background_jobs/tasks/__init__.py
# 🧭 Purpose (Layman Explanation):
# Lists the background jobs the worker knows how to run.
# 🧪 Purpose (Technical Summary):
# Task module imports so Celery autodiscovery registers every task.
# 🔗 Dependencies:
# app.background_jobs.tasks.plant_health
# 🔄 Connected Modules / Calls From:
# celery_config.app.autodiscover_tasks

from .plant_health import run_health_sweep, sweep_plant_health

__all__ = ["run_health_sweep", "sweep_plant_health"]
