from dataclasses import dataclass
from typing import Literal, Optional

Status = Literal["ok", "dns_error", "no_address", "connect_error", "timeout", "clock_error"]

NO_ADDRESS_MESSAGE = "Unable to resolve DNS name"
CLOCK_ERROR_MESSAGE = "clock moved backwards"


@dataclass(frozen=True)
class Outcome:
    """Result of a single connect attempt against one normalized target."""
    target: str
    sequence: int
    status: Status
    rtt_ms: Optional[float] = None      # set only when status == "ok"
    error: Optional[str] = None         # set only on failure
    address: Optional[str] = None       # resolved address, if resolution succeeded

    @property
    def ok(self) -> bool:
        return self.status == "ok"


@dataclass(frozen=True)
class RunStatistics:
    target: str
    sent: int
    received: int
    loss_percent: int
    min_ms: float
    max_ms: float
    avg_ms: float

    @property
    def lost(self) -> int:
        return self.sent - self.received

    def as_dict(self) -> dict:
        return {
            "target": self.target,
            "sent": self.sent,
            "received": self.received,
            "lost": self.lost,
            "loss_percent": self.loss_percent,
            "min_ms": self.min_ms,
            "max_ms": self.max_ms,
            "avg_ms": self.avg_ms,
        }
