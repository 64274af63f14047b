"""
Background Tasks Module

Task functions for the ARQ worker. Each receives the ARQ `ctx` dict
(job_id, job_try, redis) as its first argument.

    # Start a worker (from project root)
    arq fitcoach.worker.WorkerSettings
"""

from fitcoach.tasks.reminder_tasks import send_smart_reminders, analyze_wearable_health

__all__ = [
    "send_smart_reminders",
    "analyze_wearable_health",
]
