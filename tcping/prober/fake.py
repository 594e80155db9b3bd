# tcping/prober/fake.py
import threading
import time
from collections import deque

from tcping.prober.base import Prober
from tcping.schemas import Outcome


class FakeProber(Prober):
    """
    script: dict[target] -> sequence of rtt_ms floats (success) or Exception
    instances (failure, the exception text becomes the cause). Consumed in order.
    If nothing scripted is left, returns a timeout outcome.
    delay: seconds to sleep inside each attempt, to make concurrency observable.
    """
    def __init__(self, script=None, delay: float = 0.0):
        self.script = {}
        if script:
            for k, v in script.items():
                self.script[k] = deque(v)
        self.delay = delay
        self.calls = []
        self._lock = threading.Lock()
        self._active = 0
        self.max_active = 0

    def probe(self, target, count, timeout, sink):
        with self._lock:
            self._active += 1
            self.max_active = max(self.max_active, self._active)
        try:
            super().probe(target, count, timeout, sink)
        finally:
            with self._lock:
                self._active -= 1

    def probe_once(self, target: str, sequence: int, timeout: float) -> Outcome:
        self.calls.append((target, sequence))
        if self.delay:
            time.sleep(self.delay)
        dq = self.script.get(target)
        if dq:
            step = dq.popleft()
            if isinstance(step, Exception):
                return Outcome(target=target, sequence=sequence,
                               status="connect_error", error=str(step))
            return Outcome(target=target, sequence=sequence, status="ok", rtt_ms=float(step))
        # default: timeout
        return Outcome(target=target, sequence=sequence, status="timeout", error="timed out")
