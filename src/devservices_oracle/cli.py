"""Command-line interface for starting dev-service databases."""

from __future__ import annotations

import argparse
import json
import sys
import threading
from datetime import timedelta
from typing import Optional

from testcontainers.core.config import testcontainers_config

from .config import DevServicesConfig
from .container.defaults import get_default_image_name_for
from .core.utils import logger, setup_devservices_logging
from .errors import DevServicesError
from .providers import get_provider, list_providers, setup_oracle
from .types.datasource import DatasourceStartRequest, LaunchMode, RunningDatasourceDescriptor


def _parse_key_value(value: str) -> tuple[str, str]:
    """Parse a ``key=value`` argument."""
    key, sep, val = value.partition("=")
    if not sep or not key:
        raise argparse.ArgumentTypeError(f"Expected key=value, got {value!r}")
    return key, val


def _format_descriptor(descriptor: RunningDatasourceDescriptor, as_json: bool = False) -> str:
    """Format a started datasource for display.

    Args:
        descriptor: The started datasource.
        as_json: If True, format as JSON.

    Returns:
        Formatted string for display.
    """
    if as_json:
        return json.dumps(descriptor.model_dump(), indent=2)

    return "\n".join(
        [
            f"Container: {descriptor.container_id}",
            f"JDBC URL:  {descriptor.jdbc_url}",
            f"Username:  {descriptor.username}",
            f"Password:  {descriptor.password}",
        ]
    )


def _wait_for_interrupt() -> None:
    """Block until the user interrupts the process."""
    threading.Event().wait()


def cmd_start(args: argparse.Namespace) -> int:
    """Handle the start command."""
    config = DevServicesConfig.from_env()
    if args.detach:
        # Ryuk would remove the container as soon as this process exits
        testcontainers_config.ryuk_disabled = True
    use_shared_network = True if args.shared_network else None
    setup_oracle(use_shared_network=use_shared_network, config=config)
    provider = get_provider(args.kind)

    request = DatasourceStartRequest(
        username=args.username,
        password=args.password,
        datasource_name=args.database,
        image_name=args.image,
        container_properties=dict(args.env or []),
        additional_jdbc_url_properties=dict(args.url_param or []),
        fixed_exposed_port=args.port,
        launch_mode=LaunchMode(args.launch_mode),
        startup_timeout=timedelta(seconds=args.timeout) if args.timeout is not None else None,
    )

    descriptor = provider.start_database(request)
    print(_format_descriptor(descriptor, as_json=args.json))

    if args.detach:
        return 0

    try:
        print("Press Ctrl+C to stop the database", file=sys.stderr)
        _wait_for_interrupt()
    except KeyboardInterrupt:
        logger.info("Interrupted by user")
    finally:
        descriptor.close()
    return 0


def cmd_default_image(args: argparse.Namespace) -> int:
    """Handle the default-image command."""
    config = DevServicesConfig.from_env()
    override = config.default_image if args.kind == "oracle" else None
    print(get_default_image_name_for(args.kind, override=override))
    return 0


def cmd_list(args: argparse.Namespace) -> int:
    """Handle the list command."""
    setup_oracle()
    providers = list_providers()
    print("Available database kinds:")
    for name in sorted(providers.keys()):
        print(f"  - {name}")
    return 0


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser.

    Returns:
        Configured ArgumentParser instance.
    """
    parser = argparse.ArgumentParser(
        prog="devservices-oracle",
        description="Start disposable database containers for development and tests",
    )

    parser.add_argument(
        "--log-level",
        default=None,
        help="Log level (default: DEVSERVICES_LOG_LEVEL env var or INFO)",
    )

    subparsers = parser.add_subparsers(
        title="commands",
        dest="command",
        required=True,
    )

    # start command
    start_parser = subparsers.add_parser(
        "start",
        help="Start a database container",
    )
    start_parser.add_argument("-k", "--kind", default="oracle", help="Database kind (default: oracle)")
    start_parser.add_argument("-u", "--username", default=None, help="Database user (default: quarkus)")
    start_parser.add_argument("--password", default=None, help="Database password (default: quarkus)")
    start_parser.add_argument("-d", "--database", default=None, help="Database name (default: quarkusdb)")
    start_parser.add_argument("-i", "--image", default=None, help="Container image reference")
    start_parser.add_argument(
        "-p",
        "--port",
        type=int,
        default=None,
        help="Fixed host port for the database (default: ephemeral)",
    )
    start_parser.add_argument(
        "--shared-network",
        action="store_true",
        help="Run on the shared dev-services network (default: DEVSERVICES_SHARED_NETWORK env var)",
    )
    start_parser.add_argument(
        "--url-param",
        action="append",
        type=_parse_key_value,
        metavar="KEY=VALUE",
        help="JDBC URL query parameter (repeatable)",
    )
    start_parser.add_argument(
        "--env",
        action="append",
        type=_parse_key_value,
        metavar="KEY=VALUE",
        help="Container environment variable (repeatable)",
    )
    start_parser.add_argument(
        "--launch-mode",
        choices=[mode.value for mode in LaunchMode],
        default=LaunchMode.DEV.value,
        help="Launch mode recorded on the container (default: dev)",
    )
    start_parser.add_argument(
        "-t",
        "--timeout",
        type=float,
        default=None,
        help="Startup timeout in seconds (default: DEVSERVICES_STARTUP_TIMEOUT_SEC or 240)",
    )
    start_parser.add_argument("--json", action="store_true", help="Print connection details as JSON")
    start_parser.add_argument(
        "--detach",
        action="store_true",
        help="Leave the container running and exit (disables the Ryuk reaper for this run)",
    )
    start_parser.set_defaults(func=cmd_start)

    # default-image command
    image_parser = subparsers.add_parser(
        "default-image",
        help="Print the default image for a database kind",
    )
    image_parser.add_argument("kind", nargs="?", default="oracle", help="Database kind (default: oracle)")
    image_parser.set_defaults(func=cmd_default_image)

    # list command
    list_parser = subparsers.add_parser(
        "list",
        help="List database kinds with a registered provider",
    )
    list_parser.set_defaults(func=cmd_list)

    return parser


def main(argv: Optional[list[str]] = None) -> int:
    """Main entry point for the CLI.

    Args:
        argv: Command-line arguments. Defaults to sys.argv[1:].

    Returns:
        Exit code (0 for success, non-zero for failure).
    """
    parser = create_parser()
    args = parser.parse_args(argv)

    setup_devservices_logging(args.log_level or DevServicesConfig.from_env().log_level)

    try:
        logger.debug(f"Executing command: {args.command}")
        return args.func(args)
    except (DevServicesError, ValueError) as e:
        logger.error(f"Error: {e}")
        print(f"Error: {e}", file=sys.stderr)
        return 1
    except KeyboardInterrupt:
        logger.info("Interrupted by user")
        print("\nInterrupted", file=sys.stderr)
        return 130
    except Exception as e:
        logger.exception(f"Unexpected error: {e}")
        print(f"Unexpected error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
