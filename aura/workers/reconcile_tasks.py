"""Celery tasks for background maintenance of the nomination workflow.

Provides:
- Periodic repair of orphaned events (pending events without ballots)
- Repair of a single event on demand
"""

from typing import Optional, Dict, Any
from uuid import UUID
import logging

from celery import Celery, shared_task

from aura.db.session import SessionLocal
from aura.core.config import get_settings
from aura.core.workflow import EventReconciler

logger = logging.getLogger(__name__)
settings = get_settings()

celery_app = Celery(
    'aura',
    broker=settings.celery_broker,
    backend=settings.celery_backend,
)

celery_app.conf.update(
    task_serializer='json',
    accept_content=['json'],
    result_serializer='json',
    timezone='UTC',
    enable_utc=True,
    task_default_queue='default',
    beat_schedule={
        'reconcile-orphaned-events': {
            'task': 'aura.workers.reconcile_tasks.reconcile_orphaned_events',
            'schedule': float(settings.reconcile_interval_seconds),
        },
    },
)


@shared_task(name='aura.workers.reconcile_tasks.reconcile_orphaned_events')
def reconcile_orphaned_events(group_id: Optional[str] = None) -> Dict[str, Any]:
    """
    Fan out ballots for every pending event that has none.
    
    Args:
        group_id: Restrict the sweep to one group
        
    Returns:
        Summary with repaired and failed event ids
    """
    db = SessionLocal()
    try:
        result = EventReconciler(db).repair_all(group_id)
        db.commit()
        logger.info(
            f"Reconciliation finished: {len(result['repaired'])} repaired, "
            f"{len(result['failed'])} failed"
        )
        return result
    except Exception:
        db.rollback()
        logger.exception("Reconciliation failed")
        raise
    finally:
        db.close()


@shared_task(name='aura.workers.reconcile_tasks.repair_event')
def repair_event(event_id: str) -> Dict[str, Any]:
    """Repair a single orphaned event."""
    db = SessionLocal()
    try:
        created = EventReconciler(db).repair(UUID(event_id))
        db.commit()
        return {"event_id": event_id, "ballots_created": created}
    except Exception:
        db.rollback()
        logger.exception(f"Repair failed for event {event_id}")
        raise
    finally:
        db.close()
