"""
Exceptions raised while loading or using environment configuration.

**Conceptual**: Custom exceptions make configuration failures precise. A
caller can catch ConfigError to handle every configuration problem at startup,
or catch a specific subclass when it cares about one kind of failure.

**Taxonomy**:
  - MissingRequiredFieldError: a required key is absent (or empty).
  - InvalidFieldValueError: a key is present but its value cannot be coerced.
  - ImmutabilityViolationError: code tried to change a field after construction.

**Teaching note**: The last two also inherit from the built-in exception a
Python programmer would expect (ValueError, FrozenInstanceError). That way
code written against the standard library conventions keeps working:
`except ValueError` still catches a bad value, and `except AttributeError`
still catches a write to a frozen object.
"""

from dataclasses import FrozenInstanceError
from typing import Any, Optional


class ConfigError(Exception):
    """
    Base exception for configuration errors.

    **Recovery**: None at runtime. Configuration errors are meant to stop the
    process at startup with a message naming the offending key.
    """
    pass


class MissingRequiredFieldError(ConfigError):
    """
    Raised when a required environment variable is absent or empty.

    Attributes:
        field: Attribute name on the configuration class (e.g., "COUNT").
        key: Environment variable that was looked up (e.g., "COUNT").
    """

    def __init__(self, field: str, key: str):
        self.field = field
        self.key = key
        super().__init__(
            f"{key} is required but not set. "
            "Please set it in your .env file or environment variables."
        )


class InvalidFieldValueError(ConfigError, ValueError):
    """
    Raised when an environment variable is present but has the wrong shape.

    **Conceptual**: "Present" is not the same as "valid". The classic bug is
    treating DESTROY_DATABASE="false" as truthy because it is a non-empty
    string. Every coercion either returns a correctly typed value or raises
    this error, never a silent fallback.

    Attributes:
        field: Attribute name on the configuration class.
        key: Environment variable that was looked up.
        expected: Human readable description of the expected type.
        value: The raw string found in the environment, or the value passed
               when the class was constructed directly.
        reason: Message from the coercion function that rejected the value.
    """

    def __init__(
        self,
        field: str,
        key: str,
        expected: str,
        value: Any,
        reason: Optional[str] = None,
    ):
        self.field = field
        self.key = key
        self.expected = expected
        self.value = value
        self.reason = reason

        message = f"{key} must be {expected}, got: {value!r}"
        if reason:
            message = f"{message} ({reason})"
        super().__init__(message)


class ImmutabilityViolationError(ConfigError, FrozenInstanceError):
    """
    Raised when code assigns to (or deletes) a field of a loaded configuration.

    **Conceptual**: A configuration object is a value. Once it is built, every
    holder must see the same fields forever, so writes fail loudly at the
    point of assignment instead of silently succeeding.

    Attributes:
        field: Name of the attribute the caller tried to change.
    """

    def __init__(self, field: str, owner: str):
        self.field = field
        self.owner = owner
        super().__init__(
            f"Cannot assign to read only field {field!r} of {owner}"
        )
