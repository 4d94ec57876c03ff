"""
Injectable delay and clock

Processing latencies are simulated so the UI can show progress. Services take a
``Delay`` and a ``Clock`` instead of calling ``time.sleep`` / ``datetime.now``
directly, which lets tests run synchronously with a fixed time.
"""
import time
from datetime import datetime, timezone
from typing import Callable


class Delay:
    """Sleeps for a fixed number of seconds"""

    def __init__(self, seconds: float = 0.0, sleep: Callable[[float], None] = time.sleep):
        self.seconds = max(0.0, seconds)
        self._sleep = sleep

    def wait(self) -> None:
        if self.seconds > 0:
            self._sleep(self.seconds)


class NoDelay(Delay):
    """Returns immediately"""

    def __init__(self):
        super().__init__(0.0)


Clock = Callable[[], datetime]


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def isoformat(moment: datetime) -> str:
    return moment.astimezone(timezone.utc).isoformat()
