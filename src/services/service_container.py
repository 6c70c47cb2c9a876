"""Service Container - Dependency injection container for the core services"""

from dataclasses import dataclass

from managers.config_manager import AppConfig
from services.application_runtime import ApplicationRuntime
from services.clock_source import ClockSource
from services.event_bus import EventBus


@dataclass
class ServiceContainer:
    """
    Everything the presentation layer (API endpoints) may talk to.

    Usage:
        services = ServiceContainer(
            runtime=runtime,
            event_bus=event_bus,
            clock=clock,
            config=config
        )
        set_service_container(services)

        @router.get("/state")
        async def get_state(services: ServiceContainer = Depends(get_service_container)):
            return services.runtime.snapshot()
    """

    runtime: ApplicationRuntime
    event_bus: EventBus
    clock: ClockSource
    config: AppConfig
