"""
Declarative field table for environment-backed configuration classes.

**Conceptual**: Each attribute of a configuration class is declared with
`env_field(...)`, which records a small EnvField: the source key, whether it
is required, the coercion function and an optional default. The loader walks
these declarations in one pass; it never needs to know which attribute is
which.

**Why a table instead of per-field code?**
  - All validation rules for a class are visible in one place (the class body).
  - Adding a field is one line; there is no loader code to update.
  - The rules do not depend on any third-party validation library.

Usage example:
    >>> @env_config
    ... class DatabaseConfig(EnvConfig):
    ...     DATABASE_URL: str = env_field()
    ...     POOL_SIZE: int = env_field(coerce=as_positive_int, required=False, default=5)
"""

import dataclasses
from dataclasses import dataclass
from typing import Any, Callable, List, Mapping, Optional, Tuple

from src.config.coercion import accepts_of, as_string, expected_of
from src.config.errors import InvalidFieldValueError, MissingRequiredFieldError

# Key under which the EnvField is stored in dataclasses.Field.metadata
ENV_FIELD_METADATA = "env_field"


@dataclass(frozen=True)
class EnvField:
    """
    Declaration of one environment-backed field.

    Attributes:
        key: Environment variable to read. None means "use the attribute name".
        coerce: Callable turning the raw string into the typed value.
                Must raise ValueError on bad input.
        required: If True, an absent or empty value fails construction.
        default: Value used when the field is optional and absent or empty.
        description: Free text for readers of the configuration class.
    """
    key: Optional[str] = None
    coerce: Callable[[str], Any] = as_string
    required: bool = True
    default: Any = None
    description: str = ""

    def __post_init__(self):
        """Reject declarations that can never be satisfied."""
        if self.key is not None and not self.key:
            raise ValueError("env_field key must be a non-empty string")
        if not callable(self.coerce):
            raise TypeError(f"env_field coerce must be callable, got: {self.coerce!r}")
        if self.required and self.default is not None:
            raise ValueError(
                f"env_field {self.key or '<attribute>'} is required, so a default "
                "would never be used. Pass required=False to make it optional."
            )

    def source_key(self, field_name: str) -> str:
        """Return the environment variable name for the attribute `field_name`."""
        return self.key or field_name

    def resolve(self, field_name: str, environ: Mapping[str, str]) -> Any:
        """
        Look up and coerce this field's value from `environ`.

        An empty string counts as missing: a required field raises, an
        optional field takes its default.

        Args:
            field_name: Attribute name on the configuration class.
            environ: Mapping to read from. Never modified.

        Returns:
            The coerced value, or the default for an optional missing field.

        Raises:
            MissingRequiredFieldError: Required and absent (or empty).
            InvalidFieldValueError: Present but rejected by `coerce`.
        """
        key = self.source_key(field_name)
        raw = environ.get(key)

        if raw is None or raw == "":
            if self.required:
                raise MissingRequiredFieldError(field=field_name, key=key)
            return self.default

        try:
            return self.coerce(raw)
        except ValueError as e:
            raise InvalidFieldValueError(
                field=field_name,
                key=key,
                expected=expected_of(self.coerce),
                value=raw,
                reason=str(e) or None,
            ) from e

    def check(self, field_name: str, value: Any) -> None:
        """
        Verify an already-typed value against this declaration.

        Used when a configuration class is constructed directly with keyword
        arguments instead of through from_env(). None is only allowed for
        optional fields. Coercions without an `accepts` predicate (custom
        functions) cannot be checked and are trusted.

        Raises:
            MissingRequiredFieldError: Required field given None.
            InvalidFieldValueError: Value is not what the coercion would produce
                                    (e.g., the string "false" for a boolean).
        """
        key = self.source_key(field_name)

        if value is None:
            if self.required:
                raise MissingRequiredFieldError(field=field_name, key=key)
            return

        accepts = accepts_of(self.coerce)
        if accepts is not None and not accepts(value):
            raise InvalidFieldValueError(
                field=field_name,
                key=key,
                expected=expected_of(self.coerce),
                value=value,
                reason=f"constructor received {type(value).__name__}",
            )


def env_field(
    key: Optional[str] = None,
    coerce: Callable[[str], Any] = as_string,
    required: bool = True,
    default: Any = None,
    description: str = "",
) -> Any:
    """
    Declare a dataclass field that is loaded from the environment.

    Returns a dataclasses.field() carrying an EnvField in its metadata. The
    field has no dataclass default: values always come from the loader (or
    from explicit keyword arguments in tests), so a field can never be left
    unset by accident.

    Args:
        key: Environment variable name (defaults to the attribute name).
        coerce: Coercion function from src.config.coercion (default as_string).
        required: Whether the variable must be present and non-empty.
        default: Value for an optional field when the variable is missing.
        description: Free text describing the setting.
    """
    declaration = EnvField(
        key=key,
        coerce=coerce,
        required=required,
        default=default,
        description=description,
    )
    return dataclasses.field(metadata={ENV_FIELD_METADATA: declaration})


def env_fields_of(cls: type) -> List[Tuple[str, EnvField]]:
    """
    Return (attribute name, EnvField) pairs for a configuration class, in order.

    Raises:
        TypeError: If `cls` is not a dataclass, or a field was declared without
                   env_field() (a programming error, not a configuration error).
    """
    if not dataclasses.is_dataclass(cls):
        raise TypeError(f"{cls.__name__} is not a dataclass; decorate it with @env_config")

    declarations = []
    for f in dataclasses.fields(cls):
        declaration = f.metadata.get(ENV_FIELD_METADATA)
        if declaration is None:
            raise TypeError(
                f"{cls.__name__}.{f.name} is not declared with env_field()"
            )
        declarations.append((f.name, declaration))
    return declarations
