"""
Command-line interface for the stay-focused daemon.

Parses flags and the trailing corrective command, validates the configuration,
and runs the resource monitor until a termination signal arrives.

Usage:
    stay-focused -proc {name} -check {minutes} -refocus {seconds} refocus command --with args

Example:
    stay-focused -proc /opt/zoom/aomhost -check 5 -refocus 30 -v4l2
"""

import argparse
import logging
import sys
import time
from pathlib import Path
from typing import Any, Dict, List, Optional

from ..config import load_monitor_settings, merge_settings, validate_monitor_config
from ..models.config import MonitorConfig
from ..models.runtime import DaemonPhase
from ..orchestration import ResourceMonitor, RuntimeState, SignalHandler
from ..validation import ConfigurationError, ErrorSeverity, handle_cli_error

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s [%(levelname)-5.5s] %(name)s:%(filename)s:%(lineno)d\t %(message)s"

DESCRIPTION = """\
Stay Focused!

Stay Focused monitors for a given process or module to be in use and, while it
is, runs the given command to hopefully tell your camera to refocus video.
"""

EPILOG = """\
Examples:

    stay-focused -proc /opt/zoom/aomhost -check 5 -refocus 30 -v4l2
    stay-focused -module uvcvideo -device /dev/video0 -check 10 -refocus 10 \\
        /run/this/command --to --refocus --my camera

Using v4l2-ctl:
    With -v4l2 the following command is used to refocus your camera. If it does
    not work for you, provide your own command instead.

        v4l2-ctl -d /dev/video0 --set-ctrl focus_automatic_continuous=1

Arguments:
    After the flags (all optional), give the command you would run to refocus
    your camera. Use -- first if the command itself starts with a dash.
"""


def setup_logging(level: str = "INFO") -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format=LOG_FORMAT,
        datefmt="%Y-%m-%d %H:%M:%S",
        stream=sys.stdout,
    )


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser.

    Both the classic single-dash spellings (-proc) and GNU-style long
    options (--proc) are accepted. Defaults are None so that values from a
    config file are only overridden by flags that were actually given.
    """
    parser = argparse.ArgumentParser(
        prog="stay-focused",
        description=DESCRIPTION,
        epilog=EPILOG,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "-proc", "--proc",
        dest="process",
        default=None,
        help='Name of the process to watch as shown by "ps", e.g. /opt/zoom/aomhost. '
             "Takes priority over -module.",
    )
    parser.add_argument(
        "-module", "--module",
        dest="module",
        default=None,
        help="Kernel module to watch for use instead of a process (default: uvcvideo).",
    )
    parser.add_argument(
        "-device", "--device",
        dest="device",
        default=None,
        help="Camera device used by the -v4l2 command (default: /dev/video0).",
    )
    parser.add_argument(
        "-check", "--check",
        dest="check",
        type=float,
        default=None,
        help="How often to check if the process or module is in use, in minutes (default: 1).",
    )
    parser.add_argument(
        "-refocus", "--refocus",
        dest="refocus",
        type=float,
        default=None,
        help="How often to run the refocus command while in use, in seconds (default: 10).",
    )
    parser.add_argument(
        "-v4l2", "--v4l2",
        dest="v4l2",
        action="store_const",
        const=True,
        default=None,
        help="Use the built-in v4l2-ctl refocus command; no command argument is needed.",
    )
    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="Optional TOML file with a [monitor] table of the same settings.",
    )
    parser.add_argument(
        "--log-level",
        default="INFO",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging verbosity (default: INFO).",
    )
    parser.add_argument(
        "command",
        nargs=argparse.REMAINDER,
        help="Refocus command and its arguments.",
    )
    return parser


def settings_from_args(args: argparse.Namespace) -> Dict[str, Any]:
    """Extract raw settings from parsed arguments."""
    command: List[str] = list(args.command or [])
    if command and command[0] == "--":
        command = command[1:]
    return {
        "process": args.process,
        "module": args.module,
        "device": args.device,
        "check": args.check,
        "refocus": args.refocus,
        "v4l2": args.v4l2,
        "command": command,
    }


def load_config(args: argparse.Namespace) -> MonitorConfig:
    """
    Build the validated configuration from the config file and flags.

    Raises:
        ConfigurationError: If the configuration is missing or invalid
    """
    file_settings = load_monitor_settings(args.config) if args.config else None
    settings = merge_settings(file_settings, settings_from_args(args))
    return validate_monitor_config(settings)


def run_daemon(config: MonitorConfig, state: Optional[RuntimeState] = None) -> RuntimeState:
    """
    Run the monitor in the foreground until shutdown is requested.

    Sessions still running when this returns are abandoned.
    """
    state = state or RuntimeState()
    signal_handler = SignalHandler(state)
    signal_handler.setup_signal_handlers()
    try:
        ResourceMonitor(config, state).run()
    finally:
        signal_handler.cleanup_signal_handlers()
        state.transition(DaemonPhase.TERMINATED)
    return state


def main_cli(argv: Optional[List[str]] = None) -> None:
    """
    Main command-line entry point.

    Exits with status 1 on configuration errors or unexpected fatal errors,
    and with status 0 after a termination signal.
    """
    parser = build_parser()
    args = parser.parse_args(argv)
    setup_logging(args.log_level)

    try:
        config = load_config(args)
    except ConfigurationError as e:
        print(f"Error: {e}\n", file=sys.stderr)
        parser.print_help(sys.stderr)
        handle_cli_error(
            error=e,
            context="configuration validation",
            exit_code=1,
            logger=logger,
        )

    logger.info(
        f"Stay Focused started at {time.strftime('%a, %d %b %Y %H:%M:%S %z')}:\n\t{config.describe()}"
    )

    try:
        run_daemon(config)
    except Exception as e:
        handle_cli_error(
            error=e,
            context="monitor loop",
            severity=ErrorSeverity.CRITICAL,
            exit_code=1,
            logger=logger,
        )

    logger.info("Exiting.")
    sys.exit(0)


if __name__ == "__main__":
    main_cli()
