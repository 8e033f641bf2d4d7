"""
Validation and error handling for the stayfocused package.

This module provides the exception taxonomy and input validation with
consistent error reporting across the application.
"""

from .exceptions import (
    ConfigurationError,
    CorrectiveCommandError,
    ErrorSeverity,
    ModuleTableFormatError,
    ResourceLookupError,
    StayFocusedError,
    ValidationError,
    handle_cli_error,
    handle_error,
)
from .validators import (
    validate_command_argv,
    validate_non_empty_string,
    validate_positive_float,
)

__all__ = [
    # Exceptions
    "ConfigurationError",
    "CorrectiveCommandError",
    "ErrorSeverity",
    "ModuleTableFormatError",
    "ResourceLookupError",
    "StayFocusedError",
    "ValidationError",
    # Error handling
    "handle_cli_error",
    "handle_error",
    # Validators
    "validate_command_argv",
    "validate_non_empty_string",
    "validate_positive_float",
]
