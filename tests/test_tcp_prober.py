# tests/test_tcp_prober.py
import os
import socket

import pytest

from tcping.brain.sink import ResultSink
from tcping.prober.tcp import TcpProber
from tcping.schemas import CLOCK_ERROR_MESSAGE, NO_ADDRESS_MESSAGE


@pytest.fixture
def listener():
    """A local TCP port that accepts handshakes (the kernel completes them from the backlog)."""
    srv = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
    srv.bind(("127.0.0.1", 0))
    srv.listen(16)
    yield srv.getsockname()[1]
    srv.close()


@pytest.fixture
def closed_port():
    s = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
    s.bind(("127.0.0.1", 0))
    port = s.getsockname()[1]
    s.close()
    return port


def drain(sink, n):
    return [sink.get(timeout=5) for _ in range(n)]


def test_probe_reachable_endpoint(listener):
    target = f"127.0.0.1:{listener}"
    sink = ResultSink()
    TcpProber().probe(target, 3, 1.0, sink)

    outcomes = drain(sink, 3)
    assert [o.sequence for o in outcomes] == [0, 1, 2]
    for o in outcomes:
        assert o.target == target
        assert o.ok, o.error
        assert 0 < o.rtt_ms < 1000.0
        assert o.address == target
    assert len(sink) == 0


def test_probe_refused_port(closed_port):
    target = f"127.0.0.1:{closed_port}"
    sink = ResultSink()
    TcpProber().probe(target, 1, 1.0, sink)

    (outcome,) = drain(sink, 1)
    assert outcome.sequence == 0
    assert outcome.status == "connect_error"
    assert "refused" in outcome.error.lower()
    assert outcome.rtt_ms is None


def test_dns_failure_is_recorded_every_attempt():
    calls = []

    def resolver(host, port):
        calls.append((host, port))
        raise socket.gaierror(-2, "Name or service not known")

    sink = ResultSink()
    TcpProber(resolver=resolver).probe("nowhere.invalid:80", 4, 1.0, sink)

    outcomes = drain(sink, 4)
    assert [o.sequence for o in outcomes] == [0, 1, 2, 3]
    assert all(o.status == "dns_error" for o in outcomes)
    assert "Name or service not known" in outcomes[0].error
    # resolved again on every attempt
    assert calls == [("nowhere.invalid", 80)] * 4


def test_no_addresses():
    outcome = TcpProber(resolver=lambda host, port: []).probe_once("empty.example:80", 0, 1.0)
    assert outcome.status == "no_address"
    assert outcome.error == NO_ADDRESS_MESSAGE


def test_invalid_port_is_a_resolution_failure():
    outcome = TcpProber().probe_once("localhost:http", 2, 1.0)
    assert outcome.status == "dns_error"
    assert outcome.sequence == 2
    assert "port" in outcome.error


def test_first_address_wins(listener, closed_port):
    def resolver(host, port):
        return [
            (socket.AF_INET, socket.SOCK_STREAM, 6, "", ("127.0.0.1", listener)),
            (socket.AF_INET, socket.SOCK_STREAM, 6, "", ("127.0.0.1", closed_port)),
        ]

    outcome = TcpProber(resolver=resolver).probe_once("multi.example:80", 0, 1.0)
    assert outcome.ok
    assert outcome.address == f"127.0.0.1:{listener}"


def test_clock_moving_backwards(listener):
    ticks = iter([100.0, 99.5])
    outcome = TcpProber(clock=lambda: next(ticks)).probe_once(f"127.0.0.1:{listener}", 0, 1.0)
    assert outcome.status == "clock_error"
    assert outcome.error == CLOCK_ERROR_MESSAGE


def test_connect_timeout(monkeypatch, listener):
    class SlowSocket:
        def __init__(self, *args):
            self.timeout = None

        def __enter__(self):
            return self

        def __exit__(self, *exc):
            return False

        def settimeout(self, value):
            self.timeout = value

        def connect(self, addr):
            raise socket.timeout("timed out")

    monkeypatch.setattr("tcping.prober.tcp.socket.socket", SlowSocket)
    outcome = TcpProber().probe_once(f"127.0.0.1:{listener}", 0, 0.5)
    assert outcome.status == "timeout"
    assert outcome.error == "timed out"
    assert not outcome.ok


@pytest.mark.network
@pytest.mark.skipif(os.environ.get("TCPING_NETWORK_TESTS") != "1",
                    reason="set TCPING_NETWORK_TESTS=1 to reach the internet")
def test_probe_public_https_endpoint():
    sink = ResultSink()
    TcpProber().probe("www.google.com:443", 3, 10.0, sink)
    outcomes = drain(sink, 3)
    assert [o.sequence for o in outcomes] == [0, 1, 2]
    for o in outcomes:
        assert o.ok, o.error
        assert 0 < o.rtt_ms < 10_000
