"""Health check endpoints for Aura Board.

Provides Kubernetes-compatible health probes:
- /health: Basic health check
- /health/live: Liveness probe (is the app running?)
- /health/ready: Readiness probe (can the app reach the record store?)
- /health/detailed: Store, broker, disk and memory checks
"""

import psutil
from typing import Dict, Any
from datetime import datetime

from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse
from sqlalchemy.orm import Session
from sqlalchemy import text
import redis

from aura import __version__
from aura.api.deps import get_db
from aura.core.config import get_settings

router = APIRouter(tags=["health"])
settings = get_settings()

# Thresholds
DISK_WARNING_PERCENT = 85
DISK_CRITICAL_PERCENT = 95
MEMORY_WARNING_PERCENT = 85
MEMORY_CRITICAL_PERCENT = 95


def check_database(db: Session) -> Dict[str, Any]:
    """Check database connectivity."""
    try:
        db.execute(text("SELECT 1")).fetchone()
        return {
            "status": "healthy",
            "dialect": db.get_bind().dialect.name,
        }
    except Exception as e:
        return {
            "status": "unhealthy",
            "error": str(e),
        }


def check_broker() -> Dict[str, Any]:
    """Check connectivity to the reconciliation worker's broker."""
    try:
        r = redis.from_url(
            settings.celery_broker,
            socket_connect_timeout=2,
            socket_timeout=2,
        )
        r.ping()
        info = r.info("server")
        r.close()
        
        return {
            "status": "healthy",
            "version": info.get("redis_version", "unknown"),
        }
    except Exception as e:
        return {
            "status": "unhealthy",
            "error": str(e),
        }


def _usage_status(percent_used: float, warning: float, critical: float) -> str:
    if percent_used >= critical:
        return "critical"
    if percent_used >= warning:
        return "warning"
    return "healthy"


def check_disk() -> Dict[str, Any]:
    """Check disk space."""
    try:
        disk = psutil.disk_usage("/")
        return {
            "status": _usage_status(disk.percent, DISK_WARNING_PERCENT, DISK_CRITICAL_PERCENT),
            "total_gb": round(disk.total / (1024**3), 2),
            "free_gb": round(disk.free / (1024**3), 2),
            "percent_used": disk.percent,
        }
    except Exception as e:
        return {
            "status": "unknown",
            "error": str(e),
        }


def check_memory() -> Dict[str, Any]:
    """Check memory usage."""
    try:
        memory = psutil.virtual_memory()
        return {
            "status": _usage_status(memory.percent, MEMORY_WARNING_PERCENT, MEMORY_CRITICAL_PERCENT),
            "total_gb": round(memory.total / (1024**3), 2),
            "available_gb": round(memory.available / (1024**3), 2),
            "percent_used": memory.percent,
        }
    except Exception as e:
        return {
            "status": "unknown",
            "error": str(e),
        }


@router.get("/health")
async def health_check():
    """Returns 200 if the application is running."""
    return {
        "status": "healthy",
        "version": __version__,
        "timestamp": datetime.utcnow().isoformat(),
    }


@router.get("/health/live")
async def liveness_probe():
    """
    Kubernetes liveness probe.
    
    This check should be fast and not depend on external services.
    """
    return JSONResponse(
        status_code=status.HTTP_200_OK,
        content={
            "status": "alive",
            "timestamp": datetime.utcnow().isoformat(),
        },
    )


@router.get("/health/ready")
async def readiness_probe(db: Session = Depends(get_db)):
    """
    Kubernetes readiness probe.
    
    Returns 503 when the record store is unreachable.
    """
    database = check_database(db)
    
    if database["status"] == "unhealthy":
        return JSONResponse(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            content={
                "status": "not_ready",
                "checks": {"database": database},
                "failed": ["database"],
                "timestamp": datetime.utcnow().isoformat(),
            },
        )
    
    return JSONResponse(
        status_code=status.HTTP_200_OK,
        content={
            "status": "ready",
            "checks": {"database": database},
            "timestamp": datetime.utcnow().isoformat(),
        },
    )


@router.get("/health/detailed")
async def detailed_health_check(db: Session = Depends(get_db)):
    """Detailed health check with all system metrics."""
    checks = {
        "database": check_database(db),
        "broker": check_broker(),
        "disk": check_disk(),
        "memory": check_memory(),
    }
    
    statuses = [check.get("status", "unknown") for check in checks.values()]
    
    # The broker only serves background reconciliation; losing it degrades
    # the service but does not take it down.
    if checks["database"]["status"] == "unhealthy" or "critical" in statuses:
        overall_status = "unhealthy"
        http_status = status.HTTP_503_SERVICE_UNAVAILABLE
    elif "warning" in statuses or "unhealthy" in statuses:
        overall_status = "degraded"
        http_status = status.HTTP_200_OK
    else:
        overall_status = "healthy"
        http_status = status.HTTP_200_OK
    
    return JSONResponse(
        status_code=http_status,
        content={
            "status": overall_status,
            "version": __version__,
            "checks": checks,
            "timestamp": datetime.utcnow().isoformat(),
        },
    )
