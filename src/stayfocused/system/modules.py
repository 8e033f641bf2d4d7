"""
Kernel module usage reader.

Parses the kernel's live module table (/proc/modules) to find out whether a
module is currently in use. Each line looks like:

    uvcvideo 114688 1 - Live 0x0000000000000000

where the third field is the module's use count.
"""

import logging
from pathlib import Path
from typing import Dict, Union

from ..validation import ModuleTableFormatError, ResourceLookupError

logger = logging.getLogger(__name__)

PROC_MODULES_PATH = Path("/proc/modules")


def read_module_table(path: Union[str, Path] = PROC_MODULES_PATH) -> Dict[str, int]:
    """Read the module table into a mapping of module name to use count.

    Args:
        path: Location of the module table.

    Returns:
        Dict of lower-cased module name -> use count.

    Raises:
        ResourceLookupError: If the table cannot be read.
        ModuleTableFormatError: If a line does not have the expected fields.
    """
    try:
        with open(path, "r", encoding="utf-8", errors="replace") as f:
            lines = f.read().splitlines()
    except OSError as e:
        raise ResourceLookupError(f"Error reading module table {path}: {e}") from e

    table: Dict[str, int] = {}
    for lineno, line in enumerate(lines, start=1):
        if not line.strip():
            continue
        fields = line.split()
        if len(fields) < 3:
            raise ModuleTableFormatError(
                f"{path}:{lineno}: expected at least 3 fields, got {len(fields)}: {line!r}"
            )
        try:
            use_count = int(fields[2])
        except ValueError:
            raise ModuleTableFormatError(
                f"{path}:{lineno}: use count is not an integer: {fields[2]!r}"
            )
        table[fields[0].lower()] = use_count
    return table


def is_module_in_use(module: str, path: Union[str, Path] = PROC_MODULES_PATH) -> bool:
    """Check whether a kernel module has a non-zero use count.

    A module that is not loaded is reported as not in use.
    """
    table = read_module_table(path)
    use_count = table.get(module.lower())
    if use_count is None:
        logger.info(f"Module not found: {module}")
        return False
    return use_count != 0
