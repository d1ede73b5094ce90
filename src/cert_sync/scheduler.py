"""
Periodic Syncer Module

Runs the sync cycle at startup and then on a fixed interval until stopped.
"""

import logging
import threading
import time
from typing import Callable, Optional

from .models import SyncResult

logger = logging.getLogger(__name__)

STATE_IDLE = 'idle'
STATE_RUNNING = 'running'
STATE_STOPPED = 'stopped'


def log_failure(result: SyncResult) -> None:
    """Default failure policy: log and carry on until the next tick."""
    logger.error(f"❌ Sync failed after {result.duration:.2f}s: {result.error}")


class PeriodicSyncer:
    """Drives sync cycles on a background thread. Cycles never overlap."""
    
    def __init__(self, sync: Callable[[], SyncResult], interval: float,
                 stop_event: Optional[threading.Event] = None,
                 on_failure: Callable[[SyncResult], None] = log_failure,
                 on_result: Optional[Callable[[SyncResult], None]] = None,
                 clock: Callable[[], float] = time.monotonic):
        """
        Initialize the periodic syncer.
        
        Args:
            sync: Runs one cycle and returns its SyncResult
            interval: Seconds between the starts of consecutive cycles
            stop_event: Event that ends the loop when set
            on_failure: Called with every failed SyncResult
            on_result: Called with every SyncResult, e.g. to record metrics
            clock: Monotonic time source used to schedule ticks
        """
        self.sync = sync
        self.interval = interval
        self.stop_event = stop_event or threading.Event()
        self.on_failure = on_failure
        self.on_result = on_result
        self.clock = clock
        self.state = STATE_IDLE
        self.cycles = 0
        self._thread: Optional[threading.Thread] = None
    
    def run_once(self) -> SyncResult:
        """Run a single cycle, report its result and apply the failure policy."""
        self.state = STATE_RUNNING
        start = time.monotonic()
        try:
            result = self.sync()
        except Exception as e:
            logger.exception(f"Unexpected error during sync: {e}")
            result = SyncResult(success=False, error=e, duration=time.monotonic() - start)
        finally:
            self.cycles += 1
            self.state = STATE_STOPPED if self.stop_event.is_set() else STATE_IDLE
        
        if self.on_result is not None:
            self._notify(self.on_result, result)
        if result.success:
            logger.info(f"✅ Secret {result.action} in {result.duration:.2f}s")
        else:
            self._notify(self.on_failure, result)
        return result
    
    def _notify(self, callback: Callable[[SyncResult], None], result: SyncResult) -> None:
        try:
            callback(result)
        except Exception as e:
            logger.exception(f"Error handling sync result: {e}")
    
    def run(self) -> None:
        """
        Run a cycle now, then one per interval until the stop event is set.
        
        Ticks keep a fixed period measured from the first cycle's end, so a
        cycle's own duration does not push later cycles back. Ticks missed while
        a long cycle was running are dropped and the next cycle starts at once.
        """
        self.run_once()
        next_tick = self.clock() + self.interval
        while not self.stop_event.wait(max(0.0, next_tick - self.clock())):
            self.run_once()
            next_tick += self.interval
            now = self.clock()
            if next_tick < now:
                next_tick = now
        self.state = STATE_STOPPED
        logger.info("Periodic syncer stopped")
    
    def start(self) -> None:
        """Start the loop on a background thread."""
        self._thread = threading.Thread(target=self.run, name='cert-syncer', daemon=True)
        self._thread.start()
    
    def stop(self, timeout: Optional[float] = None) -> None:
        """Signal the loop to stop and wait for the in-flight cycle to finish."""
        self.stop_event.set()
        if self._thread is not None:
            self._thread.join(timeout)
