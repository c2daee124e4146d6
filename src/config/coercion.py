"""
Coercion functions: turn a raw environment string into a typed value.

**Conceptual**: Environment variables are always strings. A coercion function
takes that string and either returns a value of the declared type or raises
ValueError explaining what was wrong. There is no "best effort" mode: an
unrecognised value is an error, never a default.

**Contract** (every function in this module):
  - Input: the raw string (already known to be present and non-empty).
  - Output: the typed value.
  - Failure: ValueError with a short reason.
  - Each function carries an `expected` attribute ("a boolean", "a positive
    integer", ...). The loader uses it to build InvalidFieldValueError messages.
  - Each function also carries an `accepts` predicate for already-typed
    values, used when a configuration class is constructed directly.

**Teaching note**: The boolean coercion is the whole point of this module.
`bool("false")` is True in Python, which is exactly the bug a typed loader
exists to prevent. as_bool only accepts a closed set of literals.

Usage example:
    >>> as_bool("false")
    False
    >>> as_positive_int("3")
    3
    >>> as_positive_int("0")
    Traceback (most recent call last):
        ...
    ValueError: value must be greater than zero
"""

import math
import re
from typing import Any, Callable, List, Optional, TypeVar

T = TypeVar("T")

_TRUE_LITERALS = ("true", "1")
_FALSE_LITERALS = ("false", "0")

# Optional minus sign followed by ASCII digits only; rejects "1.5", "1e3", " 1", "٣"
_INTEGER_PATTERN = re.compile(r"-?[0-9]+")


def expects(
    description: str,
    accepts: Optional[Callable[[Any], bool]] = None,
) -> Callable[[Callable], Callable]:
    """Attach an `expected` label and an `accepts` predicate to a coercion function."""
    def decorate(func: Callable) -> Callable:
        func.expected = description
        func.accepts = accepts
        return func
    return decorate


def expected_of(coerce: Callable) -> str:
    """Return the `expected` label of a coercion function, or a generic one."""
    return getattr(coerce, "expected", "a valid value")


def accepts_of(coerce: Callable) -> Optional[Callable[[Any], bool]]:
    """Return the typed-value predicate of a coercion function, or None if it has none."""
    return getattr(coerce, "accepts", None)


def _is_int(value: Any) -> bool:
    # bool is a subclass of int, but True is not a COUNT
    return isinstance(value, int) and not isinstance(value, bool)


@expects("a string", accepts=lambda value: isinstance(value, str))
def as_string(raw: str) -> str:
    """Pass the raw value through unchanged."""
    return raw


@expects("a boolean (one of: true, false, 1, 0)", accepts=lambda value: isinstance(value, bool))
def as_bool(raw: str) -> bool:
    """
    Parse a boolean from a closed set of literals (case-insensitive).

    Accepted: "true", "1" -> True; "false", "0" -> False.
    Anything else ("yes", "on", "", "TRUE " with a space) raises ValueError.
    """
    normalised = raw.lower()
    if normalised in _TRUE_LITERALS:
        return True
    if normalised in _FALSE_LITERALS:
        return False
    raise ValueError("unrecognised boolean literal")


@expects("an integer", accepts=_is_int)
def as_int(raw: str) -> int:
    """
    Parse a base-10 integer written in canonical form.

    The raw string must read back exactly as the parsed value: "+3", "007"
    and "-0" are rejected, "-7" and "42" are accepted.
    """
    if not _INTEGER_PATTERN.fullmatch(raw):
        raise ValueError("not a base-10 integer")
    value = int(raw, 10)
    if str(value) != raw:
        raise ValueError("not a canonical integer (no sign prefix or leading zeros)")
    return value


@expects("a positive integer", accepts=lambda value: _is_int(value) and value > 0)
def as_positive_int(raw: str) -> int:
    """Parse a canonical base-10 integer that is strictly greater than zero."""
    value = as_int(raw)
    if value <= 0:
        raise ValueError("value must be greater than zero")
    return value


@expects(
    "a number",
    accepts=lambda value: (_is_int(value) or isinstance(value, float)) and math.isfinite(value),
)
def as_float(raw: str) -> float:
    """Parse a finite float ("nan" and "inf" are rejected)."""
    try:
        value = float(raw)
    except ValueError:
        raise ValueError("not a number")
    if not math.isfinite(value):
        raise ValueError("value must be finite")
    return value


@expects("a port number (1-65535)", accepts=lambda value: _is_int(value) and 1 <= value <= 65535)
def as_port(raw: str) -> int:
    """Parse a TCP/UDP port number."""
    value = as_int(raw)
    if not 1 <= value <= 65535:
        raise ValueError("port out of range")
    return value


def as_enum(*choices: str) -> Callable[[str], str]:
    """
    Build a coercion that only accepts one of `choices` (case-sensitive).

    Usage example:
        >>> log_level = as_enum("DEBUG", "INFO", "WARNING")
        >>> log_level("INFO")
        'INFO'
    """
    if not choices:
        raise ValueError("as_enum requires at least one choice")

    @expects("one of: " + ", ".join(choices), accepts=lambda value: value in choices)
    def coerce(raw: str) -> str:
        if raw not in choices:
            raise ValueError("not an allowed value")
        return raw

    return coerce


def as_list(separator: str = ",", item: Callable[[str], T] = as_string) -> Callable[[str], List[T]]:
    """
    Build a coercion that splits on `separator` and coerces each item.

    Empty items are dropped, so "a,,b" and "a,b," both give ["a", "b"].
    An item that fails its own coercion fails the whole value.

    Usage example:
        >>> as_list(item=as_positive_int)("1,2,3")
        [1, 2, 3]
    """
    if not separator:
        raise ValueError("separator must not be empty")

    item_expected = expected_of(item)
    item_accepts = accepts_of(item)

    def accepts(value: Any) -> bool:
        if not isinstance(value, list):
            return False
        return item_accepts is None or all(item_accepts(v) for v in value)

    @expects(f"a {separator!r}-separated list (each item {item_expected})", accepts=accepts)
    def coerce(raw: str) -> List[T]:
        values = []
        for position, part in enumerate(raw.split(separator)):
            if not part:
                continue
            try:
                values.append(item(part))
            except ValueError as e:
                raise ValueError(f"item {position} ({part!r}): {e}")
        return values

    return coerce
