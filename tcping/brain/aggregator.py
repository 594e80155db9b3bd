# tcping/brain/aggregator.py
import math
from typing import Iterable

from tcping.schemas import Outcome, RunStatistics


def loss_percent(sent: int, received: int) -> int:
    if sent <= 0 or received <= 0:
        return 100
    return round(100 * (sent - received) / sent)


def summarize(target: str, outcomes: list[Outcome]) -> RunStatistics:
    """Statistics for one target; min/max/avg cover successful attempts only."""
    rtts = [o.rtt_ms for o in outcomes if o.ok]
    sent = len(outcomes)
    received = len(rtts)
    if not rtts:
        # nothing got through: no latency to report
        return RunStatistics(target=target, sent=sent, received=0, loss_percent=100,
                             min_ms=0.0, max_ms=0.0, avg_ms=0.0)
    return RunStatistics(
        target=target,
        sent=sent,
        received=received,
        loss_percent=loss_percent(sent, received),
        min_ms=min(rtts),
        max_ms=max(rtts),
        avg_ms=math.fsum(rtts) / received,
    )


def aggregate(outcomes: Iterable[Outcome]) -> dict[str, RunStatistics]:
    """
    Group outcomes by normalized target and summarize each group.
    Arrival order inside a group does not matter; the mapping is ordered
    by each target's first appearance.
    """
    groups: dict[str, list[Outcome]] = {}
    for outcome in outcomes:
        groups.setdefault(outcome.target, []).append(outcome)
    return {target: summarize(target, group) for target, group in groups.items()}
