"""
System interaction utilities.

These are the daemon's collaborators with the operating system:

- Process listing via psutil
- Kernel module usage from the live module table
- Corrective command execution and the built-in v4l2-ctl template
"""

# Command execution
from .commands import build_v4l2_command, format_command, run_command

# Kernel modules
from .modules import PROC_MODULES_PATH, is_module_in_use, read_module_table

# Processes
from .processes import is_process_running, list_process_names

__all__ = [
    # Commands
    "build_v4l2_command",
    "format_command",
    "run_command",
    # Modules
    "PROC_MODULES_PATH",
    "is_module_in_use",
    "read_module_table",
    # Processes
    "is_process_running",
    "list_process_names",
]
