"""
Utility script to manage the integration-test database container by hand.
Useful when running a test suite against an already provisioned database, or
to clean up after an interrupted run.

Usage:
    it-database start|stop|restart|params [--port 3806] [--no-verify]
"""

import argparse
import asyncio
import json
import logging
import os
import sys

import docker

from itdb.config.config_manager import ConfigValidationError, ItDatabaseConfig
from itdb.testing.database_manager import DatabaseTestManager


def build_config(args) -> ItDatabaseConfig:
    """Build the configuration from command line options and the environment."""
    overrides = {}
    if args.port is not None:
        overrides['external_port'] = args.port
    if args.container_name:
        overrides['container_name'] = args.container_name
    if args.network_name:
        overrides['network_name'] = args.network_name
    if args.image:
        overrides['image_name'] = args.image
    if args.no_verify:
        overrides['verify_db_connection'] = False
    return ItDatabaseConfig.from_env(**overrides)


async def run_command(command: str, manager: DatabaseTestManager) -> int:
    """Run one lifecycle command, returning the process exit code."""
    if command == 'stop':
        report = await manager.stop()
        if not report.container_found:
            print("Nothing to stop.")
        for error in report.errors:
            print(f"  ⚠️  {error.step} failed: {error.message}")
        return 0

    if command == 'start':
        params = await manager.start()
    else:
        params = await manager.restart()

    if params is None:
        print("❌ Database did not become ready, see log for details.", file=sys.stderr)
        return 1
    print(json.dumps(params.model_dump(), indent=2))
    return 0


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(
        description="Start, restart or stop the integration-test database container"
    )
    parser.add_argument("command", choices=["start", "stop", "restart", "params"])
    parser.add_argument("--port", type=int, default=None, help="Host port bound to the database")
    parser.add_argument("--container-name", default=None, help="Name of the database container")
    parser.add_argument("--network-name", default=None, help="Name of the test network")
    parser.add_argument("--image", default=None, help="Database image (IT_IMAGE_NAME wins if set)")
    parser.add_argument(
        "--no-verify",
        action="store_true",
        help="Do not wait for the database to answer the sentinel query"
    )
    parser.add_argument(
        "--log-level",
        default=os.getenv('LOG_LEVEL', 'INFO'),
        help="Logging level (default: LOG_LEVEL or INFO)"
    )
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=args.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s"
    )

    try:
        config = build_config(args)
    except ConfigValidationError as e:
        print(f"❌ {e}", file=sys.stderr)
        return 2

    if args.command == "params":
        print(json.dumps(config.connection_parameters().model_dump(), indent=2))
        return 0

    try:
        return asyncio.run(run_command(args.command, DatabaseTestManager(config)))
    except KeyboardInterrupt:
        print("\n\n⚠️  Interrupted by user")
        return 1
    except docker.errors.DockerException as e:
        print(f"❌ Docker error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
