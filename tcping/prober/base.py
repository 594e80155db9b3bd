# tcping/prober/base.py
import logging
from abc import ABC, abstractmethod

from tcping.schemas import Outcome

logger = logging.getLogger(__name__)


class Prober(ABC):
    @abstractmethod
    def probe_once(self, target: str, sequence: int, timeout: float) -> Outcome:
        """Make exactly one attempt against target and return its Outcome.
        Per-attempt failures are returned as data, never raised."""
        raise NotImplementedError

    def probe(self, target: str, count: int, timeout: float, sink) -> None:
        """
        Run `count` sequential attempts against one normalized target,
        sending each Outcome to the sink before starting the next one.
        No retries and no early exit: every sequence number gets an Outcome.
        """
        logger.debug("probing %s x%d (timeout %.3fs)", target, count, timeout)
        for sequence in range(count):
            outcome = self.probe_once(target, sequence, timeout)
            sink.put(outcome)
        logger.debug("finished %s", target)
