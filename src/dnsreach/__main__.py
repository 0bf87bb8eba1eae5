"""CLI entry point for dnsreach.

Checks one or more hostnames concurrently and exits non-zero if any of
them fails to resolve over both IPv4 and IPv6.

Examples:
    ```bash
    dnsreach example.com
    python -m dnsreach example.com ipv6.google.com --timeout 500 --tries 2
    dnsreach example.com --server 9.9.9.9 --server "[2620:fe::fe]:53"
    dnsreach --config config/hosts.yaml --json
    ```
"""

import argparse
import asyncio
import logging
import sys
from pathlib import Path

from dnsreach.checker import DualStackChecker
from dnsreach.core.config import CheckConfig
from dnsreach.core.exceptions import ConfigurationError, LookupsFailedError
from dnsreach.core.logger import Logger, StructuredFormatter
from dnsreach.models.options import ResolverOptions
from dnsreach.utils.dns import error_code


EXIT_OK = 0
EXIT_FAILED = 1
EXIT_USAGE = 2
EXIT_INTERRUPTED = 130

logger = Logger("cli")


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse command-line arguments."""
    parser = argparse.ArgumentParser(
        prog="dnsreach",
        description="Check that hostnames resolve over IPv4 (A) or IPv6 (AAAA)",
    )

    parser.add_argument(
        "hostnames",
        nargs="*",
        metavar="HOSTNAME",
        help="Hostnames to check (appended to those from --config)",
    )

    parser.add_argument(
        "--config",
        type=Path,
        help="YAML file with 'hostnames' and 'resolver' options",
    )

    parser.add_argument(
        "--timeout",
        type=int,
        help="Per-attempt query timeout in milliseconds",
    )

    parser.add_argument(
        "--tries",
        type=int,
        help="Attempts per query",
    )

    parser.add_argument(
        "--server",
        dest="servers",
        action="append",
        metavar="ADDR",
        help="Nameserver to use instead of the system default (repeatable)",
    )

    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        default="INFO",
        help="Log level (default: INFO)",
    )

    parser.add_argument(
        "--json",
        action="store_true",
        help="Emit results as JSON lines",
    )

    return parser.parse_args(argv)


def setup_logging(level: str) -> None:
    """Install a ``StructuredFormatter`` on the root handler."""
    handler = logging.StreamHandler()
    handler.setFormatter(StructuredFormatter())
    logging.root.addHandler(handler)
    logging.root.setLevel(getattr(logging, level))


def load_config(args: argparse.Namespace) -> CheckConfig:
    """Build the run configuration from ``--config`` and the CLI flags.

    Raises:
        ConfigurationError: If the file or the flags are invalid.
    """
    config = CheckConfig.from_yaml(args.config) if args.config else CheckConfig()
    return config.with_overrides(
        hostnames=args.hostnames,
        timeout=args.timeout,
        tries=args.tries,
        servers=args.servers,
    )


async def check_hostname(checker: DualStackChecker, hostname: str, results: Logger) -> bool:
    """Check one hostname and log the outcome. Returns True on success."""
    try:
        await checker.check(hostname)
    except LookupsFailedError as e:
        codes = {
            str(record_type).lower(): error_code(error)
            for record_type, error in zip(checker.record_types, e.errors, strict=False)
        }
        results.warning("check_failed", hostname=hostname, **codes)
        return False
    results.info("check_passed", hostname=hostname)
    return True


async def run_checks(
    hostnames: list[str],
    options: ResolverOptions,
    *,
    json_output: bool = False,
) -> int:
    """Check all hostnames concurrently.

    Returns:
        Exit code: 0 if every hostname passed, 1 otherwise.
    """
    checker = DualStackChecker(options)
    results = Logger("dnsreach", json_output=json_output)
    outcomes = await asyncio.gather(*(check_hostname(checker, h, results) for h in hostnames))
    failed = outcomes.count(False)
    logger.debug("run_completed", checked=len(outcomes), failed=failed)
    return EXIT_OK if failed == 0 else EXIT_FAILED


async def main(argv: list[str] | None = None) -> int:
    """Main entry point: parse args, load configuration, run the checks."""
    args = parse_args(argv)
    setup_logging(args.log_level)

    try:
        config = load_config(args)
    except ConfigurationError as e:
        logger.error("config_invalid", error=str(e))
        return EXIT_FAILED

    if not config.hostnames:
        logger.error("no_hostnames", hint="pass HOSTNAME arguments or a --config file")
        return EXIT_USAGE

    try:
        return await run_checks(config.hostnames, config.resolver, json_output=args.json)
    except KeyboardInterrupt:
        logger.info("interrupted")
        return EXIT_INTERRUPTED


def cli() -> None:
    """Synchronous entry point for console_scripts."""
    sys.exit(asyncio.run(main()))


if __name__ == "__main__":
    cli()
