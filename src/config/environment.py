"""
Environment config loader: validate environment variables into a frozen object.

**Conceptual**: Reading os.environ ad hoc all over a codebase spreads three
problems everywhere: missing keys show up late (mid-run, not at startup),
values stay strings ("false" is truthy), and anything can rebind a setting.
This module centralises all reads into one construction step:

  1. Take a mapping (the real environment, or an override in tests).
  2. For every declared field: check presence, coerce to the declared type.
  3. Build a frozen dataclass; any later write raises.

The resulting object is then passed explicitly to the code that needs it
(dependency injection) instead of that code reading the environment itself.

**Why frozen dataclasses?**
  - A frozen dataclass is the standard library's value type: writes fail
    at the point of assignment, not later.
  - Values are typed and visible in the class body (IDE autocomplete, no typos).
  - Equality and repr come for free, which makes tests easy to read.

**Teaching note**: Fail-fast is the goal. A process that starts with a
missing or invalid variable should die immediately with a message naming the
key, not run for an hour and crash at the first use of the setting.

Usage example:
    >>> @env_config
    ... class Config(EnvConfig):
    ...     HOME: str = env_field()
    ...     DESTROY_DATABASE: bool = env_field(coerce=as_bool)
    ...
    >>> config = Config.from_env({"HOME": "/", "DESTROY_DATABASE": "false"})
    >>> config.DESTROY_DATABASE
    False
    >>> config.HOME = "/tmp"
    Traceback (most recent call last):
        ...
    ImmutabilityViolationError: Cannot assign to read only field 'HOME' of Config
"""

import dataclasses
import logging
import os
from pathlib import Path
from typing import Dict, Mapping, Optional, Type, TypeVar, Union

from dotenv import dotenv_values, find_dotenv

from src.config.errors import ImmutabilityViolationError
from src.config.fields import env_fields_of

logger = logging.getLogger(__name__)

C = TypeVar("C", bound="EnvConfig")


class EnvConfig:
    """
    Base class for environment-backed configuration objects.

    Subclasses declare their fields with env_field() and are decorated with
    @env_config. Construction from the environment goes through from_env();
    calling the class directly with keyword arguments is also possible (handy
    for tests that want an already-typed config without an environment), and
    __post_init__ checks those values against the same declarations, so
    AppConfig(DESTROY_DATABASE="false", ...) fails instead of storing a
    truthy string.
    """

    def __post_init__(self):
        """Validate every field value against its env_field() declaration."""
        for name, declaration in env_fields_of(type(self)):
            declaration.check(name, getattr(self, name))

    @classmethod
    def from_env(cls: Type[C], environ: Optional[Mapping[str, str]] = None) -> C:
        """
        Load, validate and freeze a configuration from an environment mapping.

        **Environment source**:
          - environ is None: a snapshot of the real process environment
            (os.environ is copied once, so a concurrent change cannot tear
            the result).
          - environ given: exactly that mapping. It is not merged with
            os.environ; a key missing from it is treated as absent.

        Args:
            environ: Optional mapping of variable name to raw string value.
                     Never modified.

        Returns:
            A fully validated, immutable instance of cls.

        Raises:
            MissingRequiredFieldError: A required key is absent or empty.
            InvalidFieldValueError: A value could not be coerced.
            TypeError: cls is not an @env_config class (programming error).
        """
        if not getattr(cls, "__env_config__", False):
            raise TypeError(f"{cls.__name__} must be decorated with @env_config")

        source = dict(os.environ) if environ is None else environ

        declarations = env_fields_of(cls)
        values = {}
        for name, declaration in declarations:
            values[name] = declaration.resolve(name, source)

        config = cls(**values)
        # Keys only; values may be secrets
        logger.debug(
            "Loaded %s from %s (keys: %s)",
            cls.__name__,
            "process environment" if environ is None else "override mapping",
            ", ".join(d.source_key(n) for n, d in declarations),
        )
        return config


def _refuse_setattr(self, name, value):
    raise ImmutabilityViolationError(field=name, owner=type(self).__name__)


def _refuse_delattr(self, name):
    raise ImmutabilityViolationError(field=name, owner=type(self).__name__)


def env_config(cls: Type[C]) -> Type[C]:
    """
    Class decorator: make `cls` a frozen dataclass whose writes always raise.

    dataclass(frozen=True) already blocks assignment with FrozenInstanceError.
    This decorator replaces the generated __setattr__/__delattr__ so the error
    is ImmutabilityViolationError (still a FrozenInstanceError), and it also
    covers attributes that are not fields (config.NEW_THING = 1 fails too).

    Raises:
        TypeError: If `cls` does not inherit from EnvConfig.
    """
    if not issubclass(cls, EnvConfig):
        raise TypeError(f"@env_config class {cls.__name__} must inherit from EnvConfig")

    cls = dataclasses.dataclass(frozen=True)(cls)
    # The frozen dataclass __init__ writes through object.__setattr__,
    # so construction is unaffected by these overrides.
    cls.__setattr__ = _refuse_setattr
    cls.__delattr__ = _refuse_delattr
    cls.__env_config__ = True

    # Fail at class definition time for fields declared without env_field()
    env_fields_of(cls)
    return cls


def load_environment(
    dotenv_path: Optional[Union[str, Path]] = None,
    include_process_env: bool = True,
) -> Dict[str, str]:
    """
    Build an environment snapshot from a .env file and the process environment.

    **Conceptual**: In development, settings usually live in a .env file; in
    production they come from the real environment. This helper merges both
    into a plain dict that can be passed to from_env(), without touching
    os.environ (unlike dotenv.load_dotenv, which mutates it).

    **Precedence**: process environment wins over the .env file, matching
    load_dotenv(override=False). A line like `KEY` (no "=") has no value and
    is treated as absent.

    Args:
        dotenv_path: Path to a .env file. None means search upward from the
                     current working directory with python-dotenv's find_dotenv.
        include_process_env: If False, return only the .env file's values
                             (useful for checking a file in isolation).

    Returns:
        New dict of variable name to string value.

    Usage example:
        >>> environ = load_environment(".env")
        >>> settings = AppConfig.from_env(environ)
    """
    if dotenv_path is not None and not Path(dotenv_path).is_file():
        raise FileNotFoundError(f".env file not found: {dotenv_path}")

    if dotenv_path is None:
        # find_dotenv returns "" when no file is found
        dotenv_path = find_dotenv(usecwd=True) or None

    file_values = dotenv_values(dotenv_path) if dotenv_path else {}
    environ = {key: value for key, value in file_values.items() if value is not None}
    logger.debug("Read %d value(s) from .env file %s", len(environ), dotenv_path or "<none found>")

    if include_process_env:
        environ.update(os.environ)

    return environ
