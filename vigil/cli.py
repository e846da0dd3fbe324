"""Command line entry point.

Monitors are defined in Python: ``--monitors`` names a factory
(``package.module:function``) that receives the MonitorOptions and returns
the monitors to register.

Usage:
    python -m vigil.cli --monitors myapp.monitors:build run --environment production
    python -m vigil.cli --monitors myapp.monitors:build disable homepage --environment staging
    python -m vigil.cli --monitors myapp.monitors:build status

Output is JSON on stdout; logs go to stderr.
"""

import argparse
import asyncio
import importlib
import json
import logging
import sys
from collections.abc import Callable, Iterable
from typing import Any

from vigil.config import Settings
from vigil.monitors.errors import ConfigurationError
from vigil.monitors.monitor import Monitor
from vigil.options import MonitorOptions
from vigil.runner import MonitorRegistry
from vigil.setup import build_options

logger = logging.getLogger(__name__)

MonitorFactory = Callable[[MonitorOptions], Iterable[Monitor]]


def load_factory(path: str) -> MonitorFactory:
    """Import a ``module:attribute`` monitor factory.

    Raises:
        ValueError: If the path is malformed or the attribute is not callable
    """
    module_name, sep, attr = path.partition(":")
    if not sep or not module_name or not attr:
        raise ValueError(f"Expected 'module:function', got {path!r}")

    module = importlib.import_module(module_name)
    factory = getattr(module, attr, None)
    if not callable(factory):
        raise ValueError(f"{path} is not callable")
    return factory


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="vigil", description="Run and manage monitors")
    parser.add_argument(
        "--monitors",
        required=True,
        help="Monitor factory as module:function",
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    run_parser = subparsers.add_parser("run", help="Run monitors once")
    run_parser.add_argument("--environment", default=None)
    run_parser.add_argument("--name", action="append", dest="names", default=None)

    for command in ("disable", "enable"):
        sub = subparsers.add_parser(command, help=f"{command.capitalize()} a monitor")
        sub.add_argument("name")
        sub.add_argument("--environment", default=None)

    status_parser = subparsers.add_parser("status", help="Show monitor state")
    status_parser.add_argument("--environment", default=None)

    return parser


async def _status(registry: MonitorRegistry, environment: str | None) -> list[dict[str, Any]]:
    rows = []
    for monitor in registry:
        outcome = await monitor.persistence.read_outcome(monitor.name, environment)
        rows.append(
            {
                "name": monitor.name,
                "environment": environment,
                "level": monitor.level(environment),
                "disabled": await monitor.persistence.is_disabled(monitor.name, environment),
                "failure_count": await monitor.failure_count(environment),
                "last_outcome": outcome.status.value if outcome else None,
            }
        )
    return rows


async def run_command(args: argparse.Namespace, registry: MonitorRegistry) -> int:
    """Execute a parsed command against a populated registry.

    Returns:
        Process exit code
    """
    if args.command == "run":
        results = await registry.run(environment=args.environment, names=args.names)
        print(
            json.dumps(
                [
                    {
                        "monitor": r.monitor,
                        "environment": r.environment,
                        "status": r.outcome.status.value if r.outcome else None,
                        "error": r.error,
                    }
                    for r in results
                ]
            )
        )
        return 0 if all(r.ok for r in results) else 1

    if args.command in ("disable", "enable"):
        monitor = registry.get(args.name)
        if args.command == "disable":
            await monitor.persistence.disable(monitor.name, args.environment)
        else:
            await monitor.persistence.enable(monitor.name, args.environment)
        result = {
            "monitor": monitor.name,
            "environment": args.environment,
            "disabled": args.command == "disable",
        }
        print(json.dumps(result))
        return 0

    print(json.dumps(await _status(registry, args.environment)))
    return 0


async def _main(args: argparse.Namespace, settings: Settings, factory: MonitorFactory) -> int:
    options = build_options(settings)

    try:
        registry = MonitorRegistry(options)
        await registry.register_all(factory(options))
        return await run_command(args, registry)
    finally:
        await options.persistence.close()


def main(argv: list[str] | None = None) -> int:
    """Main entry point for the command line."""
    args = build_parser().parse_args(argv)
    settings = Settings()

    # Logs to stderr to keep stdout clean for JSON output
    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        stream=sys.stderr,
    )

    try:
        factory = load_factory(args.monitors)
    except (ValueError, ImportError) as e:
        logger.error("Invalid monitor factory: %s", e)
        return 2

    try:
        return asyncio.run(_main(args, settings, factory))
    except ConfigurationError as e:
        logger.error("Configuration error: %s", e)
        return 2


if __name__ == "__main__":
    sys.exit(main())
