"""Main entry point for ECS Pilot."""

import argparse
import logging
import sys
from concurrent.futures import wait
from pathlib import Path

from ecs_pilot.config import ConfigError, get_default_config_path, load_config


def setup_logging(verbose: bool = False, debug: bool = False) -> None:
    """Set up logging configuration.

    Args:
        verbose: If True, enable info logging
        debug: If True, enable debug logging
    """
    if debug:
        level = logging.DEBUG
    elif verbose:
        level = logging.INFO
    else:
        level = logging.WARNING
    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        stream=sys.stderr,
    )


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse command line arguments.

    Returns:
        Parsed arguments namespace
    """
    parser = argparse.ArgumentParser(
        prog="ecs-pilot",
        description="ECS Pilot - interactive command-line client for AWS ECS",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  ecs-pilot                          # Interactive shell using ./config.toml
  ecs-pilot --tui                    # Same shell in a terminal UI
  ecs-pilot cluster list             # Run a single command and exit
  ecs-pilot -c prod.toml task list my-cluster

Configuration:
  Create a config.toml file with your AWS settings:

  [aws]
  region = "us-east-1"
  profile = "default"  # optional

  [launch]             # optional, needed for `container new`
  instance_type = "t3.micro"
  iam_instance_profile = "ecsInstanceRole"
        """,
    )

    parser.add_argument(
        "-c",
        "--config",
        type=str,
        default=None,
        help="Path to configuration file (default: ./config.toml)",
    )

    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable verbose logging",
    )

    parser.add_argument(
        "--debug",
        action="store_true",
        help="Enable debug logging and check connectivity before starting",
    )

    parser.add_argument(
        "--tui",
        action="store_true",
        help="Run the shell in a terminal UI",
    )

    parser.add_argument(
        "command",
        nargs=argparse.REMAINDER,
        help="Shell command to run once instead of starting the shell",
    )

    return parser.parse_args(argv)


def print_status(message: str) -> None:
    """Print a status message to stderr."""
    print(f"[ecs-pilot] {message}", file=sys.stderr)


def run_debug_check(adapter) -> bool:
    """List clusters once to surface credential or region problems early.

    Returns:
        True if successful, False otherwise
    """
    print_status(f"Region: {adapter.clients.region}")
    try:
        print_status("Listing clusters...")
        clusters = adapter.list_clusters()
        print_status(f"Clusters found: {len(clusters)}")
        return True
    except Exception as e:
        print_status(f"ERROR: {e}")
        logging.exception("Debug check failed")
        return False


def run_once(shell, command: list[str]) -> int:
    """Execute a single command and wait for any task waits it scheduled.

    Returns:
        Exit code (0 for success, 1 if the command failed)
    """
    shell.execute(" ".join(command))
    if shell.pending_waits:
        wait(list(shell.pending_waits))
    return 1 if shell.last_command_failed else 0


def main(argv: list[str] | None = None) -> int:
    """Main entry point.

    Returns:
        Exit code (0 for success, non-zero for error)
    """
    args = parse_args(argv)
    setup_logging(args.verbose, args.debug)

    if args.config:
        config_path = Path(args.config)
    else:
        config_path = get_default_config_path()

    try:
        config = load_config(config_path)
    except ConfigError as e:
        print(f"Configuration error: {e}", file=sys.stderr)
        print(
            f"\nPlease create a configuration file at: {config_path}", file=sys.stderr
        )
        print("\nExample config.toml:", file=sys.stderr)
        print(
            """
[aws]
region = "us-east-1"
        """,
            file=sys.stderr,
        )
        return 1

    from ecs_pilot.aws.adapter import ECSAdapter
    from ecs_pilot.aws.client import AWSClients
    from ecs_pilot.shell import Shell
    from ecs_pilot.shell.repl import ReadlineInput

    adapter = ECSAdapter(AWSClients(config.aws), config.launch, config.wait)

    if args.debug and not run_debug_check(adapter):
        return 1

    if args.command:
        return run_once(Shell(adapter), args.command)

    try:
        if args.tui:
            # Import here to avoid loading TUI dependencies for the plain shell
            from ecs_pilot.ui.app import ShellApp

            ShellApp(adapter, prompt=config.shell.prompt).run()
            return 0

        shell = Shell(adapter)
        with ReadlineInput(config.shell.prompt, config.shell.history_file) as reader:
            shell.run(reader)
        return 0
    except KeyboardInterrupt:
        return 0


if __name__ == "__main__":
    sys.exit(main())
