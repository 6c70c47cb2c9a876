"""
System endpoints - Task introspection, runtime configuration and recent events
"""

from typing import Any, Dict

from fastapi import APIRouter, Depends, Query

from api.dependencies import get_service_container
from lifecycle.task_registry import TaskRegistry
from services.service_container import ServiceContainer

router = APIRouter(prefix="/system", tags=["System"])


@router.get("/info")
async def get_system_info(services: ServiceContainer = Depends(get_service_container)) -> Dict[str, Any]:
    """Startup configuration and clock activity"""
    config = services.config
    return {
        "filter_list": {
            "path": str(config.filter_list_path),
            "encoding": config.encoding,
        },
        "clock": {
            "interval_seconds": services.clock.interval,
            "format": config.clock_format,
            "ticks_emitted": services.clock.ticks_emitted,
        },
        "log_level": config.log_level.name,
    }


@router.get("/events")
async def get_recent_events(
    limit: int = Query(10, ge=1, le=100),
    services: ServiceContainer = Depends(get_service_container)
) -> Dict[str, Any]:
    """Most recently processed events, oldest first"""
    events = [
        {
            "type": e.type.name,
            "source": e.source.name if e.source else None,
            "timestamp": e.timestamp,
        }
        for e in services.event_bus.get_event_history(limit)
    ]
    return {"count": len(events), "events": events}


@router.get("/tasks/summary")
async def get_task_summary() -> Dict[str, Any]:
    """
    Returns:
        - summary: Human-readable summary string
        - total / active / failed / cancelled counts
    """
    registry = TaskRegistry.instance()
    return {
        "summary": registry.summary(),
        "total": len(registry.list_all()),
        "active": len(registry.active()),
        "failed": len(registry.failed()),
        "cancelled": len(registry.cancelled())
    }


@router.get("/tasks")
async def get_all_tasks() -> Dict[str, Any]:
    """Detailed information about all tracked tasks"""
    tasks = [
        {
            "id": r.info.id,
            "category": r.info.category.name,
            "description": r.info.description,
            "created_at": r.info.created_at,
            "finished_at": r.finished_at,
            "status": r.status,
            "error": repr(r.finished_with_error) if r.finished_with_error else None,
        }
        for r in TaskRegistry.instance().list_all()
    ]
    return {"count": len(tasks), "tasks": tasks}
