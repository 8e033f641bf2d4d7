"""
Field validation functions.

Each validator either returns the normalized value or raises ValidationError
naming the offending field.
"""

from typing import Any, List, Optional, Sequence

from .exceptions import ValidationError


def validate_positive_float(
    value: Any,
    min_value: float = 0.0,
    max_value: Optional[float] = None,
    field_name: str = "value",
    exclusive_min: bool = False,
) -> float:
    """
    Validate that a value is a number within the given bounds.

    Args:
        value: Value to validate
        min_value: Minimum allowed value
        max_value: Maximum allowed value (inclusive), None for no limit
        field_name: Name of the field being validated
        exclusive_min: Reject values equal to min_value

    Returns:
        Validated float value

    Raises:
        ValidationError: If validation fails
    """
    if isinstance(value, bool):
        raise ValidationError(
            f"{field_name} must be a valid number, got {value}",
            field_name=field_name,
            value=value
        )
    try:
        float_value = float(value)
    except (ValueError, TypeError):
        raise ValidationError(
            f"{field_name} must be a valid number, got {value}",
            field_name=field_name,
            value=value
        )
    if float_value < min_value or (exclusive_min and float_value == min_value):
        op = ">" if exclusive_min else ">="
        raise ValidationError(
            f"{field_name} must be {op} {min_value}, got {float_value}",
            field_name=field_name,
            value=value
        )
    if max_value is not None and float_value > max_value:
        raise ValidationError(
            f"{field_name} must be <= {max_value}, got {float_value}",
            field_name=field_name,
            value=value
        )
    return float_value


def validate_non_empty_string(value: Any, field_name: str = "value") -> str:
    """Return the stripped string, or raise if it is missing or blank."""
    if not isinstance(value, str) or not value.strip():
        raise ValidationError(
            f"{field_name} must be a non-empty string",
            field_name=field_name,
            value=value
        )
    return value.strip()


def validate_command_argv(argv: Any, field_name: str = "command") -> List[str]:
    """
    Validate a command given as an argument vector.

    The first element is the executable and must be non-empty. Arguments are
    kept verbatim, including empty strings.

    Raises:
        ValidationError: If argv is not a non-empty sequence of strings
    """
    if isinstance(argv, str) or not isinstance(argv, Sequence):
        raise ValidationError(
            f"{field_name} must be a list of strings",
            field_name=field_name,
            value=argv
        )
    if len(argv) == 0:
        raise ValidationError(
            f"{field_name} must not be empty",
            field_name=field_name,
            value=argv
        )
    for i, part in enumerate(argv):
        if not isinstance(part, str):
            raise ValidationError(
                f"{field_name}[{i}] must be a string, got {type(part).__name__}",
                field_name=field_name,
                value=argv
            )
    if not argv[0].strip():
        raise ValidationError(
            f"{field_name} executable must be a non-empty string",
            field_name=field_name,
            value=argv
        )
    return list(argv)
