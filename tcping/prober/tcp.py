# tcping/prober/tcp.py
import logging
import socket
import time
from typing import Callable, Optional

from tcping.prober.base import Prober
from tcping.schemas import CLOCK_ERROR_MESSAGE, NO_ADDRESS_MESSAGE, Outcome
from tcping.targets import split_host_port

logger = logging.getLogger(__name__)


def _getaddrinfo(host: str, port: int):
    return socket.getaddrinfo(host, port, type=socket.SOCK_STREAM)


class TcpProber(Prober):
    """
    Times the TCP handshake: SYN out, connect() returns once the SYN/ACK is in.
    The connection is closed straight away, nothing is sent on it.

    The target is re-resolved on every attempt (its address may change between
    probes) and the first address returned wins. Resolution itself has no
    timeout; only connect() is bounded.
    """

    def __init__(self,
                 resolver: Optional[Callable] = None,
                 clock: Callable[[], float] = time.perf_counter):
        self.resolver = resolver or _getaddrinfo
        self.clock = clock

    def _resolve(self, target: str, sequence: int):
        """Return (addrinfo, None) or (None, failed Outcome)."""
        try:
            host, port = split_host_port(target)
            infos = list(self.resolver(host, port))
        except (OSError, ValueError, UnicodeError) as e:
            logger.debug("%s#%d: resolution failed: %s", target, sequence, e)
            return None, Outcome(target=target, sequence=sequence,
                                 status="dns_error", error=str(e))
        if not infos:
            return None, Outcome(target=target, sequence=sequence,
                                 status="no_address", error=NO_ADDRESS_MESSAGE)
        return infos[0], None

    def probe_once(self, target: str, sequence: int, timeout: float) -> Outcome:
        info, failed = self._resolve(target, sequence)
        if failed is not None:
            return failed

        family, socktype, proto, _canon, sockaddr = info
        address = f"{sockaddr[0]}:{sockaddr[1]}"

        start = self.clock()
        try:
            with socket.socket(family, socktype, proto) as sock:
                sock.settimeout(timeout)
                sock.connect(sockaddr)
        except socket.timeout as e:
            return Outcome(target=target, sequence=sequence, status="timeout",
                           error=str(e) or "timed out", address=address)
        except OSError as e:
            return Outcome(target=target, sequence=sequence, status="connect_error",
                           error=str(e), address=address)
        elapsed = self.clock() - start

        if elapsed < 0:
            return Outcome(target=target, sequence=sequence, status="clock_error",
                           error=CLOCK_ERROR_MESSAGE, address=address)

        rtt_ms = elapsed * 1000.0
        logger.debug("%s#%d: connected to %s in %.3fms", target, sequence, address, rtt_ms)
        return Outcome(target=target, sequence=sequence, status="ok",
                       rtt_ms=rtt_ms, address=address)
