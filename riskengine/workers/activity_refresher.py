"""
Activity Refresh Worker
Periodically mutates the activity store in a background thread
"""

import logging
import threading
import time
from datetime import datetime
from typing import Dict, Any, Optional

import numpy as np

from riskengine.utils.logger import log_system_event

logger = logging.getLogger(__name__)

SHUTDOWN_JOIN_TIMEOUT_SEC = 5.0

class ActivityRefreshWorker:
    def __init__(self, store, interval_seconds: float = 30.0, seed: Optional[int] = None):
        self.store = store
        self.interval_seconds = interval_seconds
        self.rng = np.random.default_rng(seed)
        self.tick_count = 0
        self.last_tick: Optional[datetime] = None
        self._stop_event = threading.Event()
        self._thread: Optional[threading.Thread] = None

    @property
    def is_running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def start(self):
        if self.is_running:
            logger.warning("Activity refresh worker already running")
            return

        self._stop_event.clear()
        self._thread = threading.Thread(
            target=self._run,
            name="activity-refresher",
            daemon=True
        )
        self._thread.start()
        logger.info(f"Started activity refresh worker (interval {self.interval_seconds}s)")

    def stop(self, timeout: float = SHUTDOWN_JOIN_TIMEOUT_SEC):
        self._stop_event.set()
        if self._thread is not None:
            self._thread.join(timeout=timeout)
            if self._thread.is_alive():
                logger.warning("Activity refresh worker did not stop in time")
        self._thread = None
        logger.info("Stopped activity refresh worker")

    def run_once(self) -> int:
        touched = self.store.refresh(self.rng)
        self.tick_count += 1
        self.last_tick = datetime.utcnow()
        return touched

    def _run(self):
        while not self._stop_event.is_set():
            tick_start = time.monotonic()

            try:
                touched = self.run_once()
                log_system_event(
                    logger,
                    "activity_refresh",
                    f"Refreshed {touched} activity records",
                    level="DEBUG",
                    extra_data={"tick": self.tick_count}
                )
            except Exception as e:
                logger.error(f"Activity refresh tick failed: {e}")

            elapsed = time.monotonic() - tick_start
            self._stop_event.wait(max(0.0, self.interval_seconds - elapsed))

    def get_worker_status(self) -> Dict[str, Any]:
        return {
            'is_running': self.is_running,
            'interval_seconds': self.interval_seconds,
            'tick_count': self.tick_count,
            'last_tick': self.last_tick.isoformat() if self.last_tick else None
        }
