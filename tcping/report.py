# tcping/report.py
import json
from typing import Iterable

from tcping.schemas import Outcome, RunStatistics


def digit_count(n: int) -> int:
    """Decimal digits in a non-negative integer; digit_count(0) == 1."""
    return len(str(abs(n)))


def gen_filler(size: int) -> str:
    return " " * max(0, size)


def gen_spacer(count: int, seq_num: int) -> str:
    """Pads a sequence number out to the width of the largest count."""
    return gen_filler(digit_count(count) - digit_count(seq_num))


def format_outcome(outcome: Outcome, count: int, width: int) -> str:
    """One display line per attempt; width is the longest target name."""
    text = (f"{outcome.sequence}:{gen_spacer(count, outcome.sequence)}"
            f"{outcome.target} {gen_filler(width - len(outcome.target))}")
    if outcome.ok:
        return f"{text} {int(outcome.rtt_ms)}ms"
    return f"{text} ERROR: {outcome.error}"


def format_statistics(stats: RunStatistics) -> str:
    return (
        f"Ping statistics for {stats.target}:\n"
        f"\tPackets: sent {stats.sent}, Received {stats.received}, "
        f"Lost {stats.lost} ({stats.loss_percent}% loss).\n"
        f"\tRound Trip times: Minimum {int(stats.min_ms)}ms, "
        f"Maximum {int(stats.max_ms)}ms, Average {int(stats.avg_ms)}ms"
    )


def statistics_json(stats: Iterable[RunStatistics]) -> str:
    return json.dumps([s.as_dict() for s in stats], indent=2)
