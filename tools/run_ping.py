# tools/run_ping.py
# Usage examples:
#   python3 -m tools.run_ping example.com
#   python3 -m tools.run_ping example.com:443 10.0.0.1 --count 5 --timeout 2 --threads 2
#   python3 -m tools.run_ping example.com --json

import argparse
import logging
import sys

from tcping.brain.controller import PingController
from tcping.config import ConfigurationError, Settings
from tcping.prober.tcp import TcpProber
from tcping.report import format_outcome, format_statistics, statistics_json
from tcping.targets import normalize_target

EXIT_CONFIG_ERROR = 2


def setup_logging(log_file: str | None = None, verbose: bool = False) -> None:
    """Log records go to stderr (and optionally a file); results go to stdout."""
    log_level = logging.DEBUG if verbose else logging.WARNING
    log_format = "%(asctime)s - %(threadName)s - %(levelname)s - %(message)s"

    handlers = [logging.StreamHandler()]
    if log_file:
        handlers.append(logging.FileHandler(log_file))

    logging.basicConfig(level=log_level, format=log_format, handlers=handlers)


def build_argparser():
    ap = argparse.ArgumentParser(description="TCP handshake ping")
    ap.add_argument("hosts", nargs="*", metavar="HOSTNAME",
                    help="Host, host:port or [v6]:port to probe")
    ap.add_argument("-c", "--count", type=int, default=16, help="Attempts per host")
    ap.add_argument("-t", "--timeout", type=float, default=10.0,
                    help="Connect timeout per attempt (seconds)")
    ap.add_argument("-p", "--port", type=int, default=80,
                    help="Port used when a host does not give one")
    ap.add_argument("--threads", type=int, default=1, help="Worker pool size")
    ap.add_argument("--json", action="store_true", help="Print the summary as JSON")
    ap.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    ap.add_argument("--log-file", help="Also write log records to this file")
    return ap


def settings_from_args(args) -> Settings:
    return Settings(
        count=args.count,
        timeout=args.timeout,
        port=args.port,
        threads=args.threads,
        hosts=tuple(args.hosts),
    )


def main(argv=None) -> int:
    args = build_argparser().parse_args(argv)
    setup_logging(args.log_file, args.verbose)
    s = settings_from_args(args)

    try:
        s.validate()
    except ConfigurationError as e:
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_CONFIG_ERROR

    width = max(len(normalize_target(h, s.port)) for h in s.hosts)

    def show(outcome):
        print(format_outcome(outcome, s.count, width), flush=True)

    report = PingController(TcpProber(), s).run(on_outcome=show)

    if args.json:
        print(statistics_json(report.statistics.values()))
    else:
        for stats in report.statistics.values():
            print(format_statistics(stats))
    return 0


if __name__ == "__main__":
    sys.exit(main())
