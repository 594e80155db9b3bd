# tcping/targets.py
import logging
from typing import Iterable

logger = logging.getLogger(__name__)


def has_port(host: str) -> bool:
    """
    True if the host string already carries a port delimiter.
    Bracketed IPv6 literals only count when a ':' follows the closing bracket.
    """
    if host.startswith("["):
        return "]:" in host
    return ":" in host


def normalize_target(host: str, default_port: int) -> str:
    host = host.strip()
    if has_port(host):
        return host
    return f"{host}:{default_port}"


def normalize_targets(hosts: Iterable[str], default_port: int) -> list[str]:
    """Normalize every host once; duplicates collapse onto their first occurrence."""
    targets: list[str] = []
    seen = set()
    for raw in hosts:
        target = normalize_target(raw, default_port)
        if target in seen:
            logger.warning("duplicate target %s (from %r) ignored", target, raw)
            continue
        seen.add(target)
        targets.append(target)
    return targets


def split_host_port(target: str) -> tuple[str, int]:
    """
    Split a normalized "host:port" / "[v6]:port" string.
    Raises ValueError for a missing or invalid port.
    """
    if target.startswith("["):
        host, sep, port = target[1:].partition("]:")
        if not sep:
            raise ValueError(f"invalid socket address: {target}")
    else:
        host, sep, port = target.rpartition(":")
        if not sep:
            raise ValueError(f"invalid socket address: {target}")
    if not port.isdigit() or int(port) > 65535:
        raise ValueError("invalid port value")
    return host, int(port)
