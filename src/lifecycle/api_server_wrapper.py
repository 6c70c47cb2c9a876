"""Uvicorn hosted inside the application's own event loop"""

from __future__ import annotations

import asyncio
from typing import Optional

import uvicorn
from fastapi import FastAPI

from models.enums import LogLevel
from utils.logger import get_logger, LogCategory

log = get_logger().for_category(LogCategory.API)

_UVICORN_LEVELS = {
    LogLevel.DEBUG: "debug",
    LogLevel.INFO: "info",
    LogLevel.WARN: "warning",
    LogLevel.ERROR: "error",
}


class APIServerWrapper:
    """
    Runs uvicorn.Server.serve() as a child task without uvicorn's own signal
    handlers, so SIGINT/SIGTERM reach the ShutdownCoordinator instead.

    - start() launches the server and blocks until stop() is called
      (schedule it with create_tracked_task)
    - stop() asks uvicorn to exit, waits up to `shutdown_timeout`, then
      cancels the serve task
    """

    def __init__(self, app: FastAPI, host: str = "127.0.0.1", port: int = 8000,
                 log_level: LogLevel = LogLevel.INFO):
        self.app = app
        self.host = host
        self.port = port
        self.log_level = log_level
        self._server: Optional[uvicorn.Server] = None
        self._serve_task: Optional[asyncio.Task] = None
        self._stop_event = asyncio.Event()

    def _create_server(self) -> uvicorn.Server:
        config = uvicorn.Config(
            app=self.app,
            host=self.host,
            port=self.port,
            loop="asyncio",
            log_level=_UVICORN_LEVELS[self.log_level],
            access_log=self.log_level is LogLevel.DEBUG,
            server_header=False,
        )
        server = uvicorn.Server(config)
        server.install_signal_handlers = lambda: None  # type: ignore[method-assign]
        return server

    async def start(self) -> None:
        if self.is_running:
            raise RuntimeError("API server already started")

        self._server = self._create_server()
        self._stop_event.clear()

        log.info(f"Launching API server on http://{self.host}:{self.port}")
        self._serve_task = asyncio.create_task(self._server.serve(), name="UvicornServe")

        stop_waiter = asyncio.ensure_future(self._stop_event.wait())
        try:
            done, _ = await asyncio.wait({stop_waiter, self._serve_task},
                                         return_when=asyncio.FIRST_COMPLETED)
        except asyncio.CancelledError:
            await self.stop()
            raise
        finally:
            if not stop_waiter.done():
                stop_waiter.cancel()

        if self._serve_task is not None and self._serve_task in done:
            # serve() only returns on its own when startup failed (e.g. port in use)
            exc = self._serve_task.exception()
            self._server = None
            if exc is not None:
                raise exc
            raise RuntimeError(f"API server exited unexpectedly (port {self.port})")

    async def stop(self, *, shutdown_timeout: float = 2.0) -> None:
        self._stop_event.set()

        if self._server is None:
            return

        log.info("Stopping API server...")
        self._server.should_exit = True

        if self._serve_task is not None and not self._serve_task.done():
            try:
                await asyncio.wait_for(asyncio.shield(self._serve_task), timeout=shutdown_timeout)
            except asyncio.TimeoutError:
                log.warn("API server shutdown timeout; cancelling serve task")
                self._server.force_exit = True
                self._serve_task.cancel()
                await asyncio.gather(self._serve_task, return_exceptions=True)
            except Exception as e:
                log.error("API server exited with error", error=repr(e))

        self._server = None
        self._serve_task = None
        log.info("API server stopped")

    @property
    def is_running(self) -> bool:
        return self._serve_task is not None and not self._serve_task.done()

    @property
    def server(self) -> Optional[uvicorn.Server]:
        return self._server
