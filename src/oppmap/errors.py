"""Error handling utilities for oppmap.

Provides exception classes and validation helpers used by the
challenge board and the renderer.
"""


class OppmapError(Exception):
    """Base exception for oppmap errors."""

    pass


class RenderError(OppmapError):
    """Exception raised when rendering fails."""

    def __init__(self, reason: str) -> None:
        """Initialize render error.

        Args:
            reason: Reason for failure
        """
        self.reason = reason
        super().__init__(f"Rendering failed: {reason}")


class ValidationError(OppmapError):
    """Exception raised when input validation fails."""

    def __init__(self, field: str, value: object, expected: str) -> None:
        """Initialize validation error.

        Args:
            field: Field name that failed validation
            value: Invalid value
            expected: Expected type/description
        """
        self.field = field
        self.value = value
        self.expected = expected
        super().__init__(f"Validation failed for '{field}': expected {expected}, got {value!r}")


def validate_range(value: int | float, min_val: int | float, max_val: int | float, name: str = "value") -> None:
    """Validate that a value is within range.

    Args:
        value: Value to validate
        min_val: Minimum allowed value
        max_val: Maximum allowed value
        name: Name of the value for error messages

    Raises:
        ValidationError: If value is out of range or not a number
    """
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ValidationError(name, value, "a number")
    if not (min_val <= value <= max_val):
        raise ValidationError(name, value, f"value between {min_val} and {max_val}")


def validate_name(name: object, field: str = "name") -> str:
    """Validate a display name and return it stripped.

    Raises:
        ValidationError: If the name is not a string or is blank
    """
    if not isinstance(name, str):
        raise ValidationError(field, name, "a string")
    stripped = name.strip()
    if not stripped:
        raise ValidationError(field, name, "a non-empty name")
    return stripped
