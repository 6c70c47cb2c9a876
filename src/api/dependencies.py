"""
API Dependencies - Service container access for FastAPI endpoints

Pattern:
1. main_asyncio.py creates ServiceContainer during initialization
2. main_asyncio.py calls set_service_container() after creation
3. Endpoints use get_service_container() / get_runtime() via Depends()

Example:
    @router.get("/state")
    async def get_state(runtime: ApplicationRuntime = Depends(get_runtime)):
        return runtime.snapshot()
"""

from typing import Optional

from api.middleware.error_handler import RuntimeUnavailableError
from services.application_runtime import ApplicationRuntime
from services.service_container import ServiceContainer


# Global service container (set by main_asyncio.py during initialization)
_service_container: Optional[ServiceContainer] = None


def set_service_container(services: Optional[ServiceContainer]) -> None:
    """
    Store the service container for API access (None clears it).
    """
    global _service_container
    _service_container = services


async def get_service_container() -> ServiceContainer:
    """
    FastAPI dependency for accessing the service container.

    Raises:
        RuntimeUnavailableError: 503 if services not initialized yet
    """
    if _service_container is None:
        raise RuntimeUnavailableError()
    return _service_container


async def get_runtime() -> ApplicationRuntime:
    """
    FastAPI dependency for endpoints that dispatch events.

    Raises:
        RuntimeUnavailableError: 503 if the event loop is not consuming events
    """
    services = await get_service_container()
    if not services.runtime.is_running:
        raise RuntimeUnavailableError()
    return services.runtime
