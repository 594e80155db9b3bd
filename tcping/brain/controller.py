# tcping/brain/controller.py

import logging
import queue
from dataclasses import dataclass, field
from typing import Callable, Optional

from tcping.brain.aggregator import aggregate
from tcping.brain.dispatcher import dispatch, make_pool
from tcping.brain.sink import ResultSink
from tcping.config import Settings
from tcping.schemas import Outcome, RunStatistics
from tcping.targets import normalize_targets

logger = logging.getLogger(__name__)

# how often the drain loop wakes up to look for dead workers
POLL_INTERVAL_S = 0.2


@dataclass
class RunReport:
    targets: list[str]
    outcomes: list[Outcome] = field(default_factory=list)         # arrival order
    statistics: dict[str, RunStatistics] = field(default_factory=dict)


class PingController:
    def __init__(self, prober, settings: Settings):
        self.prober = prober
        self.settings = settings

    def run(self, on_outcome: Optional[Callable[[Outcome], None]] = None) -> RunReport:
        s = self.settings.validate()
        targets = normalize_targets(s.hosts, s.port)
        # drain count comes from the normalized list, not the raw hosts
        expected = len(targets) * s.count
        logger.info("pinging %d target(s) x%d with %d worker(s)",
                    len(targets), s.count, s.threads)

        report = RunReport(targets=targets)
        sink = ResultSink(maxsize=s.sink_size)
        pool = make_pool(s.threads)
        finished = False
        try:
            futures = dispatch(pool, self.prober, targets, s.count, s.timeout, sink)

            while len(report.outcomes) < expected:
                try:
                    outcome = sink.get(timeout=POLL_INTERVAL_S)
                except queue.Empty:
                    self._check_workers(futures, sink, len(report.outcomes), expected)
                    continue
                report.outcomes.append(outcome)
                if on_outcome is not None:
                    on_outcome(outcome)
            finished = True
        finally:
            sink.close()
            pool.shutdown(wait=True, cancel_futures=not finished)

        # surface anything a worker raised after its last outcome
        for f in futures:
            f.result()

        stats = aggregate(report.outcomes)
        report.statistics = {t: stats[t] for t in targets if t in stats}
        logger.info("run complete: %d outcome(s)", len(report.outcomes))
        return report

    @staticmethod
    def _check_workers(futures, sink: ResultSink, received: int, expected: int) -> None:
        """Re-raise a worker's exception; a run missing outcomes is never reported."""
        for f in futures:
            if f.done() and f.exception() is not None:
                raise f.exception()
        if all(f.done() for f in futures) and len(sink) == 0:
            raise RuntimeError(
                f"all workers finished after {received} of {expected} outcomes"
            )
