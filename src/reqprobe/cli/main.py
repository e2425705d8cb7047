# SPDX-FileCopyrightText: 2025 reqprobe contributors
# SPDX-License-Identifier: AGPL-3.0-or-later

"""reqprobe CLI."""

from __future__ import annotations

import argparse
import json
import sys
from dataclasses import replace
from typing import Any, TextIO

from ..config import ProbeSettings, load_probe_settings
from ..errors import ConfigurationError, InsufficientDataError, ResolutionError
from ..log import setup_logging
from ..models import IterationResult
from ..net.target import parse_target
from ..probe.report import format_iteration, format_status_code, format_summary
from ..probe.runner import ProbeRunner
from ..runtime import ReqProbe
from ..version import __version__

EXIT_INTERRUPTED = 130


def _positive_int(value: str) -> int:
    try:
        parsed = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid integer: {value!r}") from None
    if parsed <= 0:
        raise argparse.ArgumentTypeError(f"must be a positive integer, got {parsed}")
    return parsed


def _port(value: str) -> int:
    parsed = _positive_int(value)
    if parsed >= 65536:
        raise argparse.ArgumentTypeError(f"port out of range: {parsed}")
    return parsed


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="reqprobe",
        description="Send repeated HTTP requests to an address and report latency, size and success rate",
    )
    parser.add_argument("-u", "--url", required=True, help="Web address to probe (http:// or https:// prefix optional)")
    parser.add_argument(
        "-p",
        "--profile",
        required=True,
        type=_positive_int,
        metavar="N",
        help="Number of requests to send",
    )
    mode = parser.add_mutually_exclusive_group()
    mode.add_argument(
        "--verbose",
        dest="verbose",
        action="store_true",
        default=None,
        help="Echo every response and print a line per request",
    )
    mode.add_argument(
        "--brief",
        dest="verbose",
        action="store_false",
        help="Only print status codes of non-200 responses (default)",
    )
    parser.add_argument("--json", action="store_true", help="Output the summary as JSON")
    parser.add_argument(
        "--timeout",
        type=float,
        default=None,
        help="Per-request deadline in seconds covering connect and read (<= 0 disables it)",
    )
    parser.add_argument("--port", type=_port, default=None, help="TCP port to connect to (default 80)")
    parser.add_argument("--log-level", default=None, help="Logging level (default from REQPROBE_LOG_LEVEL)")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def _settings_from_args(args: argparse.Namespace) -> ProbeSettings:
    settings = load_probe_settings()
    overrides: dict[str, Any] = {}
    if args.verbose is not None:
        overrides["verbose"] = args.verbose
    if args.timeout is not None:
        overrides["timeout"] = args.timeout
    if args.port is not None:
        overrides["port"] = args.port
    return replace(settings, **overrides) if overrides else settings


def _make_echo(stream: TextIO):
    def _echo_chunk(chunk: bytes) -> None:
        # Raw bytes keep multi-byte characters split across reads intact.
        stream.flush()
        stream.buffer.write(chunk)
        stream.buffer.flush()

    return _echo_chunk


def _make_result_printer(verbose: bool, stream: TextIO):
    def _print_result(index: int, result: IterationResult) -> None:
        if verbose:
            print(format_iteration(index, result), file=stream)
        else:
            line = format_status_code(result)
            if line:
                print(line, file=stream)
        stream.flush()

    return _print_result


def _print_json(data: dict[str, Any] | Any) -> None:
    payload = data.to_dict() if hasattr(data, "to_dict") else data
    json.dump(payload, sys.stdout, indent=2, sort_keys=True)
    sys.stdout.write("\n")


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    setup_logging(args.log_level)

    settings = _settings_from_args(args)
    try:
        parse_target(args.url, settings)
    except ConfigurationError as exc:
        parser.error(str(exc))

    # Progress output moves to stderr so --json leaves stdout as a single document.
    progress = sys.stderr if args.json else sys.stdout
    runner = ProbeRunner(settings, echo=_make_echo(progress) if settings.verbose else None)
    probe = ReqProbe(settings, runner=runner)

    if settings.verbose:
        print(f"Starting test... (repeat={args.profile})", file=progress)
    try:
        stats = probe.run(args.url, args.profile, on_result=_make_result_printer(settings.verbose, progress))
    except ResolutionError as exc:
        print(f"reqprobe: {exc}", file=sys.stderr)
        return 1
    except InsufficientDataError:
        print("reqprobe: no data collected", file=sys.stderr)
        return 1

    if args.json:
        _print_json(stats)
    else:
        print(format_summary(stats, args.url))

    return EXIT_INTERRUPTED if stats.interrupted else 0


if __name__ == "__main__":
    raise SystemExit(main())
