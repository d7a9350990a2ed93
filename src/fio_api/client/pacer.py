"""Pacing of calls that share one API token.

The bank accepts one call per token every 30 seconds and answers 409 to a
call that comes too soon. A RequestPacer holds the time of the last
dispatched call, waits out the remaining interval before dispatching, and
repeats a call the server rejected with 409.
"""

import logging
import threading
import time
from typing import Callable, Optional

import httpx


logger = logging.getLogger(__name__)

REQUEST_RATE = 30.0
TOO_SOON_STATUS = 409


class RequestPacer:
    """Keeps consecutive calls at least ``min_interval`` seconds apart.

    The lock is held across the wait and the dispatch, so threads sharing
    one pacer are served one at a time.
    """

    def __init__(self,
                 min_interval: float = REQUEST_RATE,
                 clock: Callable[[], float] = time.monotonic,
                 sleep: Callable[[float], None] = time.sleep):
        self.min_interval = min_interval
        self._clock = clock
        self._sleep = sleep
        self._last_call: Optional[float] = None
        self._lock = threading.Lock()

    @property
    def last_call(self) -> Optional[float]:
        return self._last_call

    def wait(self) -> None:
        """Block until the next call is allowed, then claim that slot"""
        now = self._clock()
        if self._last_call is None:
            self._last_call = now
            return

        next_allowed = self._last_call + self.min_interval
        if now < next_allowed:
            delay = next_allowed - now
            logger.debug(f"Delaying next call to Fio API by {delay * 1000:.0f} ms")
            self._sleep(delay)
            # the deadline, not the wake-up time, so scheduler jitter does not accumulate
            self._last_call = next_allowed
        else:
            self._last_call = now

    def call(self, dispatch: Callable[[], httpx.Response], description: str = "request") -> httpx.Response:
        """Dispatch after the pacing wait, repeating while the server answers 409.

        Any other response is returned as is; the caller classifies it.
        """
        with self._lock:
            while True:
                self.wait()
                response = dispatch()
                if response.status_code != TOO_SOON_STATUS:
                    return response
                logger.warning(f"Retrying command '{description}'")
                self._last_call = self._clock()
