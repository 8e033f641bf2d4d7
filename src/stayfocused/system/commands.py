"""
Command execution utilities.

This module runs the corrective command and builds the built-in v4l2-ctl
refocus command.
"""

import logging
import shlex
import subprocess
from typing import List, Sequence

from ..models.runtime import CommandResult

logger = logging.getLogger(__name__)

V4L2_CTL = "v4l2-ctl"
V4L2_REFOCUS_CONTROL = "focus_automatic_continuous=1"


def build_v4l2_command(device: str) -> List[str]:
    """Build the default refocus command for a V4L2 camera.

    Examples:
        >>> build_v4l2_command("/dev/video1")
        ['v4l2-ctl', '-d', '/dev/video1', '--set-ctrl', 'focus_automatic_continuous=1']
    """
    return [V4L2_CTL, "-d", device, "--set-ctrl", V4L2_REFOCUS_CONTROL]


def format_command(argv: Sequence[str]) -> str:
    """Render an argv as a shell-quoted string for logging."""
    return shlex.join(argv)


def run_command(argv: Sequence[str]) -> CommandResult:
    """Execute a command and wait for it to finish.

    The argv is copied on every call so each invocation starts a fresh
    process from the same template.

    Args:
        argv: Executable followed by its arguments.

    Returns:
        CommandResult. returncode is -1 if the command could not be launched.
    """
    args = tuple(argv)
    logger.debug(f"Executing command: '{format_command(args)}'")
    try:
        process = subprocess.run(
            list(args),
            capture_output=True,
            text=True,
            encoding="utf-8",
            errors="replace",
            check=False,
        )
        return CommandResult(args, process.returncode, process.stdout, process.stderr)
    except FileNotFoundError as e:
        logger.debug(f"Command not found: {args[0]}: {e}")
        return CommandResult(args, -1, error=f"Command not found '{args[0]}'")
    except OSError as e:
        logger.debug(f"Could not launch '{args[0]}': {type(e).__name__}: {e}")
        return CommandResult(args, -1, error=f"{type(e).__name__}: {e}")
