"""Celery workers for Aura Board."""

from aura.workers.reconcile_tasks import (
    celery_app,
    reconcile_orphaned_events,
    repair_event,
)

__all__ = [
    "celery_app",
    "reconcile_orphaned_events",
    "repair_event",
]
