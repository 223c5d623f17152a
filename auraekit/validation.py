"""Field validation helpers that raise descriptive errors."""

from __future__ import annotations

import json
import re
from abc import ABC, abstractmethod
from collections.abc import Sized
from enum import Enum
from typing import Any, Generic, TypeVar
from urllib.parse import SplitResult, urlsplit

__all__ = [
    "UNIT_BYTES",
    "UNIT_CHARACTER",
    "UNIT_CHARACTERS",
    "UNIT_ITEM",
    "UNIT_ITEMS",
    "DOMAIN_NAME_LABEL_REGEX",
    "UNRESERVED_URL_PATH_SEGMENT_REGEX",
    "ValidationError",
    "RequiredError",
    "MinimumError",
    "MaximumError",
    "AllowRegexViolation",
    "InvalidError",
    "ValidatedField",
    "field_name",
    "required",
    "required_not_empty",
    "minimum_length",
    "maximum_length",
    "minimum_value",
    "maximum_value",
    "valid_enum",
    "valid_json",
    "valid_url",
    "allow_regex",
]

UNIT_BYTES = "bytes"
UNIT_CHARACTER = "character"
UNIT_CHARACTERS = "characters"
UNIT_ITEM = "item"
UNIT_ITEMS = "items"

DOMAIN_NAME_LABEL_REGEX = re.compile(r"^(?=.{1,63}\Z)(?![-])[a-zA-Z0-9-]+(?<![-])\Z")
UNRESERVED_URL_PATH_SEGMENT_REGEX = re.compile(r"^(?=.{1,1745}\Z)[a-zA-Z0-9_.~-]+\Z")

T = TypeVar("T")
E = TypeVar("E", bound=Enum)


class ValidationError(ValueError):
    """Base class for validation failures; ``field`` names the offending field."""

    def __init__(self, field: str, message: str) -> None:
        super().__init__(message)
        self.field = field


class RequiredError(ValidationError):
    def __init__(self, field: str) -> None:
        super().__init__(field, f"Field = {field}; Required")


class MinimumError(ValidationError):
    def __init__(self, field: str, minimum: str, units: str) -> None:
        super().__init__(field, f"Field = {field}; Minimum = {minimum} {units}")
        self.minimum = minimum
        self.units = units


class MaximumError(ValidationError):
    def __init__(self, field: str, maximum: str, units: str) -> None:
        super().__init__(field, f"Field = {field}; Maximum = {maximum} {units}")
        self.maximum = maximum
        self.units = units


class AllowRegexViolation(ValidationError):
    def __init__(self, field: str, pattern: str) -> None:
        super().__init__(field, f"Field = {field};  Regex = {pattern}")
        self.pattern = pattern


class InvalidError(ValidationError):
    def __init__(self, field: str) -> None:
        super().__init__(field, f"Field = {field}; Invalid")


class ValidatedField(ABC, Generic[T]):
    """A type that can be built from raw, possibly missing, input."""

    @classmethod
    @abstractmethod
    def validate(cls, input: T | None, field_name: str, parent_name: str | None):
        """Build an instance from ``input`` or raise :class:`ValidationError`."""

    @classmethod
    def validate_optional(
        cls, input: T | None, field_name: str, parent_name: str | None
    ):
        """Return ``None`` for missing input, otherwise :meth:`validate` it."""
        if input is None:
            return None
        return cls.validate(input, field_name, parent_name)

    @classmethod
    def validate_for_creation(
        cls, input: T | None, field_name: str, parent_name: str | None
    ):
        """Stricter validation used on creation; defaults to :meth:`validate`."""
        return cls.validate(input, field_name, parent_name)


def _qualified(name: str, parent_name: str | None) -> str:
    if parent_name is None:
        return name
    return f"{parent_name}.{name}"


def field_name(field_name: str, parent_name: str | None = None) -> str:
    """Qualify ``field_name`` with its parent, joined by a dot."""
    return _qualified(field_name, parent_name)


def required(value: T | None, field_name: str, parent_name: str | None = None) -> T:
    """Return ``value`` unless it is ``None``."""
    if value is None:
        raise RequiredError(_qualified(field_name, parent_name))
    return value


def required_not_empty(
    value: Any, field_name: str, parent_name: str | None = None
) -> Any:
    """Return ``value`` unless it is ``None`` or has zero length."""
    value = required(value, field_name, parent_name)
    if len(value) == 0:
        raise RequiredError(_qualified(field_name, parent_name))
    return value


def minimum_length(
    value: Sized,
    length: int,
    units: str,
    field_name: str,
    parent_name: str | None = None,
):
    """Return ``value`` if it has at least ``length`` elements."""
    if len(value) < length:
        raise MinimumError(_qualified(field_name, parent_name), str(length), units)
    return value


def maximum_length(
    value: Sized,
    length: int,
    units: str,
    field_name: str,
    parent_name: str | None = None,
):
    """Return ``value`` if it has at most ``length`` elements."""
    if len(value) > length:
        raise MaximumError(_qualified(field_name, parent_name), str(length), units)
    return value


def minimum_value(
    value: Any, minimum: Any, units: str, field_name: str, parent_name: str | None = None
):
    """Return ``value`` if it is not below ``minimum``."""
    if value < minimum:
        raise MinimumError(_qualified(field_name, parent_name), str(minimum), units)
    return value


def maximum_value(
    value: Any, maximum: Any, units: str, field_name: str, parent_name: str | None = None
):
    """Return ``value`` if it is not above ``maximum``."""
    if value > maximum:
        raise MaximumError(_qualified(field_name, parent_name), str(maximum), units)
    return value


def valid_enum(
    value: int, enum_type: type[E], field_name: str, parent_name: str | None = None
) -> E:
    """Convert the raw ``value`` into a member of ``enum_type``."""
    try:
        return enum_type(value)
    except ValueError:
        raise InvalidError(_qualified(field_name, parent_name)) from None


def _reject_constant(name: str) -> Any:
    raise ValueError(f"non-standard JSON constant {name}")


def valid_json(value: str, field_name: str, parent_name: str | None = None) -> Any:
    """Parse ``value`` as strict JSON."""
    try:
        return json.loads(value, parse_constant=_reject_constant)
    except ValueError:
        raise InvalidError(_qualified(field_name, parent_name)) from None


_SCHEME = re.compile(r"[A-Za-z][A-Za-z0-9+.\-]*:")
_HOST_REQUIRED_SCHEMES = frozenset({"http", "https", "ws", "wss", "ftp"})
_FORBIDDEN_HOST_CHARS = frozenset(" #%/<>?@\\^|[]\t\n\r")
_STRIPPED = "".join(chr(code) for code in range(0x21))


def _parse_url(value: str) -> SplitResult:
    text = value.strip(_STRIPPED)
    if not _SCHEME.match(text):
        raise ValueError("relative URL without a base")
    parts = urlsplit(text)
    if parts.scheme in _HOST_REQUIRED_SCHEMES:
        host = parts.hostname
        if not host:
            raise ValueError("empty host")
        if any(char in _FORBIDDEN_HOST_CHARS for char in host):
            raise ValueError("invalid host")
        _ = parts.port  # raises ValueError for an invalid port
    return parts


def valid_url(value: str, field_name: str, parent_name: str | None = None) -> SplitResult:
    """Parse ``value`` as an absolute URL."""
    try:
        return _parse_url(value)
    except ValueError:
        raise InvalidError(_qualified(field_name, parent_name)) from None


def allow_regex(
    value: str,
    pattern: str | re.Pattern[str],
    field_name: str,
    parent_name: str | None = None,
) -> str:
    """Return ``value`` if ``pattern`` matches it."""
    compiled = re.compile(pattern) if isinstance(pattern, str) else pattern
    if compiled.search(value) is None:
        raise AllowRegexViolation(_qualified(field_name, parent_name), compiled.pattern)
    return value