# tcping/brain/dispatcher.py
import logging
from concurrent.futures import Future, ThreadPoolExecutor
from typing import Sequence

from tcping.brain.sink import ResultSink
from tcping.config import ConfigurationError
from tcping.prober.base import Prober

logger = logging.getLogger(__name__)


def dispatch(executor: ThreadPoolExecutor,
             prober: Prober,
             targets: Sequence[str],
             count: int,
             timeout: float,
             sink: ResultSink) -> list[Future]:
    """
    Submit one prober.probe() task per target. Each target's whole attempt
    sequence is a single task, so it never spreads across workers; targets
    beyond the pool size wait in the executor queue.
    """
    if not targets:
        raise ConfigurationError("No Endpoints given")

    futures = []
    for target in targets:
        logger.debug("dispatching %s", target)
        futures.append(executor.submit(prober.probe, target, count, timeout, sink))
    return futures


def make_pool(workers: int) -> ThreadPoolExecutor:
    if workers < 1:
        raise ConfigurationError(f"threads must be >= 1, got {workers}")
    return ThreadPoolExecutor(max_workers=workers, thread_name_prefix="tcping")
