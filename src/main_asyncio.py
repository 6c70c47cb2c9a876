"""
main_asyncio.py - Application entry point for the filter list editor
--------------------------------------------------------------------

Responsible for:
- loading configuration and configuring the logger
- wiring the runtime, file store, clock and event bus
- issuing the initial load and starting the long-lived tasks
- serving the HTTP API
- graceful shutdown on Ctrl+C, SIGTERM or a failed critical task
"""

import sys

if hasattr(sys.stdout, 'reconfigure') and sys.stdout.encoding != 'UTF-8':
    sys.stdout.reconfigure(encoding='utf-8')  # type: ignore

import asyncio
import os

from api.dependencies import set_service_container
from api.main import create_app
from engine import create_initial_state
from lifecycle import ShutdownCoordinator
from lifecycle.api_server_wrapper import APIServerWrapper
from lifecycle.handlers import (
    AllTasksCancellationHandler,
    APIServerShutdownHandler,
    ClockShutdownHandler,
    RuntimeShutdownHandler,
)
from lifecycle.task_registry import create_tracked_task, TaskCategory
from managers import ConfigManager
from managers.config_manager import DEFAULT_CONFIG_PATH
from models.events import Event, EventType
from services import ApplicationRuntime, ClockSource, EventBus, FileStore, ServiceContainer
from services.middleware import log_middleware
from utils.logger import get_logger, configure_logger, LogCategory

CONFIG_ENV_VAR = "NETFILTER_CONFIG"

log = get_logger().for_category(LogCategory.SYSTEM)


def _report_io_failure(runtime: ApplicationRuntime):
    def handler(event: Event) -> None:
        state = runtime.state
        op = "Load" if event.type is EventType.LOAD_COMPLETED else "Save"
        log.warn(f"{op} of filter list failed", path=str(state.file_path),
                 error=event.error.name)
    return handler


async def main() -> None:
    """Main async entry point (dependency wiring and event loop startup)."""

    # ========================================================================
    # 1. CONFIGURATION
    # ========================================================================

    config_manager = ConfigManager(os.environ.get(CONFIG_ENV_VAR, DEFAULT_CONFIG_PATH))
    config = config_manager.load()
    configure_logger(config.log_level, config.log_colors)

    log.info("Starting filter list editor...")

    # ========================================================================
    # 2. EVENT BUS & RUNTIME
    # ========================================================================

    event_bus = EventBus()
    event_bus.add_middleware(log_middleware)

    state, load_command = create_initial_state(
        config.filter_list_path,
        counter_seed=config.counter_seed,
        clock_format=config.clock_format,
    )
    file_store = FileStore(encoding=config.encoding)
    runtime = ApplicationRuntime(state, file_store, event_bus)

    for event_type in (EventType.LOAD_COMPLETED, EventType.SAVE_COMPLETED):
        event_bus.subscribe(event_type, _report_io_failure(runtime), filter_fn=lambda e: not e.ok)

    runtime_task = create_tracked_task(
        runtime.run(),
        category=TaskCategory.RUNTIME,
        description="Application event loop"
    )
    runtime.execute(load_command)

    # ========================================================================
    # 3. CLOCK
    # ========================================================================

    clock = ClockSource(runtime.submit_nowait, interval=config.tick_interval)
    clock_task = create_tracked_task(
        clock.run(),
        category=TaskCategory.CLOCK,
        description="Clock ticks"
    )

    # ========================================================================
    # 4. SERVICE CONTAINER & API
    # ========================================================================

    services = ServiceContainer(
        runtime=runtime,
        event_bus=event_bus,
        clock=clock,
        config=config,
    )
    set_service_container(services)

    coordinator = ShutdownCoordinator()

    if config.api_enabled:
        api_wrapper = APIServerWrapper(create_app(), host=config.api_host,
                                       port=config.api_port, log_level=config.log_level)
        create_tracked_task(
            api_wrapper.start(),
            category=TaskCategory.API,
            description="FastAPI/Uvicorn Server"
        )
        coordinator.register(APIServerShutdownHandler(api_wrapper))
    else:
        log.info("API disabled by configuration")

    # ========================================================================
    # 5. SHUTDOWN COORDINATOR
    # ========================================================================

    coordinator.register(ClockShutdownHandler(clock, clock_task))
    coordinator.register(RuntimeShutdownHandler(runtime, runtime_task))
    coordinator.register(AllTasksCancellationHandler())

    coordinator.setup_signal_handlers(asyncio.get_running_loop())

    log.info("Application initialized. Waiting for exit signal...")
    await coordinator.wait_for_shutdown()
    await coordinator.shutdown_all()

    set_service_container(None)
    log.info("Filter list editor shut down cleanly.")


def run() -> None:
    try:
        asyncio.run(main())
    except KeyboardInterrupt:
        log.info("Keyboard interrupt received")


if __name__ == "__main__":
    run()
