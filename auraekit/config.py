"""Client configuration used to authenticate with a remote Aurae daemon.

:meth:`AuraeConfig.try_default` searches well-known locations in order:

1. ``${HOME}/.aurae/config``
2. ``/etc/aurae/config``
3. ``/var/lib/aurae/config``
"""

from __future__ import annotations

import os
import tomllib
from collections.abc import Mapping
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any, TypeVar

__all__ = [
    "SYSTEM_CONFIG_PATHS",
    "ConfigError",
    "SystemConfig",
    "AuthConfig",
    "AuraeConfig",
]

SYSTEM_CONFIG_PATHS: tuple[str, ...] = ("/etc/aurae/config", "/var/lib/aurae/config")

_T = TypeVar("_T")


class ConfigError(Exception):
    """Raised when configuration cannot be found, read or parsed."""


@dataclass(frozen=True)
class SystemConfig:
    """Runtime settings: the socket the client connects to."""

    socket: str


@dataclass(frozen=True)
class AuthConfig:
    """Paths to the authentication material of a client.

    The material is read from disk whenever a client is created, so changing
    it affects clients created afterwards.
    """

    ca_crt: str
    client_crt: str
    client_key: str


def _build(cls: type[_T], table: Any, section: str) -> _T:
    """Build a dataclass of string fields from a TOML table, ignoring extra keys."""
    if not isinstance(table, Mapping):
        raise ConfigError(f"`{section}` must be a table")
    values: dict[str, str] = {}
    for field in fields(cls):  # type: ignore[arg-type]
        if field.name not in table:
            raise ConfigError(f"missing field `{field.name}` in `{section}`")
        value = table[field.name]
        if not isinstance(value, str):
            raise ConfigError(f"field `{section}.{field.name}` must be a string")
        values[field.name] = value
    return cls(**values)


@dataclass(frozen=True)
class AuraeConfig:
    """Complete client configuration."""

    auth: AuthConfig
    system: SystemConfig

    @classmethod
    def try_default(cls) -> AuraeConfig:
        """Load the first configuration that parses from the well-known locations."""
        home = os.environ.get("HOME")
        if home is None:
            raise ConfigError("missing $HOME environmental variable")

        for path in (f"{home}/.aurae/config", *SYSTEM_CONFIG_PATHS):
            try:
                return cls.parse_from_file(path)
            except ConfigError:
                continue
        raise ConfigError("unable to find config file")

    @classmethod
    def parse_from_file(cls, path: str | os.PathLike[str]) -> AuraeConfig:
        """Parse a TOML configuration file."""
        try:
            with open(path, "rb") as handle:
                raw = handle.read()
        except OSError as error:
            raise ConfigError(f"could not open {Path(path)}: {error}") from error

        try:
            text = raw.decode("utf-8")
        except UnicodeDecodeError as error:
            raise ConfigError("could not read AuraeConfig toml") from error

        if not raw:
            raise ConfigError("empty config")

        try:
            document = tomllib.loads(text)
        except tomllib.TOMLDecodeError as error:
            raise ConfigError(f"invalid config: {error}") from error

        for section in ("auth", "system"):
            if section not in document:
                raise ConfigError(f"missing field `{section}`")

        return cls(
            auth=_build(AuthConfig, document["auth"], "auth"),
            system=_build(SystemConfig, document["system"], "system"),
        )