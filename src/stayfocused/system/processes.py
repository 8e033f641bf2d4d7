"""
Process listing utilities.

Enumerates running processes with psutil and answers whether a named process
is currently running.
"""

import logging
from typing import Callable, Set

import psutil

from ..validation import ResourceLookupError

logger = logging.getLogger(__name__)

# Attributes pre-fetched by psutil.process_iter.
_ITER_ATTRS = ["name", "exe"]


def list_process_names() -> Set[str]:
    """Return the lower-cased names of all running processes.

    Both the short process name and, where readable, the full executable path
    are included, so callers can match either "aomhost" or "/opt/zoom/aomhost".

    Returns:
        Set of lower-cased process names and executable paths.

    Raises:
        ResourceLookupError: If the process table cannot be enumerated.
    """
    names: Set[str] = set()
    try:
        for proc in psutil.process_iter(_ITER_ATTRS):
            try:
                info = proc.info
            except (psutil.NoSuchProcess, psutil.AccessDenied):
                continue
            for key in _ITER_ATTRS:
                value = info.get(key)
                if value:
                    names.add(value.lower())
    except (psutil.Error, OSError) as e:
        raise ResourceLookupError(f"Error reading process list: {e}") from e

    logger.debug(f"Found {len(names)} distinct process names")
    return names


def is_process_running(
    name: str, lister: Callable[[], Set[str]] = list_process_names
) -> bool:
    """Check whether a process with the given name is running.

    The comparison is case-insensitive.

    Raises:
        ResourceLookupError: Propagated from the lister.
    """
    return name.lower() in {n.lower() for n in lister()}
