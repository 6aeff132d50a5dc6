# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

import threading

from authledger.infrastructure.lifecycle import Registry
from authledger.shared.logging import logger


class MaintenanceWorker:
    """Periodically culls expired keys and flushes whichever store is dirty."""

    def __init__(self, registry: Registry, interval: float | None = None) -> None:
        self._registry = registry
        self._interval = interval if interval is not None else registry.config.maintenance_interval
        if self._interval <= 0:
            raise ValueError("maintenance interval must be positive")
        self._stop = threading.Event()
        self._thread: threading.Thread | None = None
        self._ticks = 0

    @property
    def ticks(self) -> int:
        return self._ticks

    @property
    def running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def start(self) -> None:
        if self.running:
            return
        self._stop.clear()
        self._thread = threading.Thread(
            target=self._run, daemon=True, name="authledger-maintenance"
        )
        logger.debug(f"maintenance: starting interval={self._interval}s")
        self._thread.start()

    def stop(self, *, flush: bool = True, timeout: float | None = 5.0) -> None:
        self._stop.set()
        if self._thread is not None:
            self._thread.join(timeout=timeout)
            self._thread = None
        if flush:
            self._registry.flush_dirty()
        logger.debug("maintenance: stopped")

    def run_once(self) -> list[str]:
        """Cull, then flush dirty stores; returns the names of flushed stores."""
        culled = self._registry.keys.cull()
        flushed = self._registry.flush_dirty()
        self._ticks += 1
        if culled or flushed:
            logger.info(f"maintenance: tick culled={culled} flushed={flushed}")
        return flushed

    def _run(self) -> None:
        thread_name = threading.current_thread().name
        logger.debug(f"maintenance: runner start thread={thread_name}")
        try:
            while not self._stop.wait(self._interval):
                try:
                    self.run_once()
                except Exception:
                    # The stores stay dirty; the next tick retries
                    logger.exception("maintenance: tick failed")
        finally:
            logger.debug(f"maintenance: runner stop thread={thread_name}")


__all__ = ["MaintenanceWorker"]
