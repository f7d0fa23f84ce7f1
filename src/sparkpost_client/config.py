# Copyright 2025 Softwell S.r.l. - SPDX-License-Identifier: Apache-2.0
"""Client options and their loader.

Options are an immutable value: updating them produces a new ``Options``
instance that replaces the previous one on the client. Unknown keys are
ignored and the API key is validated on every merge.

Example:
    Configuration file format (sparkpost.ini)::

        [sparkpost]
        key = 0123456789abcdef
        host = api.eu.sparkpost.com
        retries = 3
        async = false

    Loading options::

        options = load_options("/etc/sparkpost.ini", debug=True)
        client = SparkPost(options)
"""

from __future__ import annotations

import configparser
import dataclasses
import os
import re
from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Union

from .exceptions import ConfigurationError
from .logger import get_logger

logger = get_logger("config")

# Mapping keys that differ from the dataclass field name
_KEY_ALIASES = {"async": "async_"}

_NON_BLANK = re.compile(r"\S")


@dataclass(frozen=True)
class Options:
    """Connection and dispatch settings for a client.

    Attributes:
        host: API hostname.
        protocol: URL scheme, ``http`` or ``https``.
        port: TCP port; falsy values omit the port from the URL.
        key: API key sent as the ``Authorization`` header.
        version: API version path segment.
        async_: Dispatch requests asynchronously (``"async"`` in mappings).
        debug: Attach the originating request to responses and errors.
        retries: Extra attempts made when the server answers with a 5xx status.
    """

    host: str = "api.sparkpost.com"
    protocol: str = "https"
    port: int | None = 443
    key: str = field(default="", repr=False)
    version: str = "v1"
    async_: bool = True
    debug: bool = False
    retries: int = 0

    def merged(self, overrides: OptionsLike | None) -> Options:
        """Return a copy with ``overrides`` applied and validated.

        Args:
            overrides: A mapping of option names to values, another
                ``Options`` instance (replaces everything), or a string
                taken as the API key.

        Returns:
            A new validated ``Options`` value.

        Raises:
            ConfigurationError: If the resulting key is blank or an option
                has an invalid value.
        """
        if isinstance(overrides, Options):
            overrides.validate()
            return overrides
        if isinstance(overrides, str):
            overrides = {"key": overrides}

        known = {f.name for f in dataclasses.fields(self)}
        changes: dict[str, Any] = {}
        for name, value in (overrides or {}).items():
            name = _KEY_ALIASES.get(name, name)
            if name in known:
                changes[name] = value

        options = dataclasses.replace(self, **changes)
        options.validate()
        return options

    def validate(self) -> None:
        """Check option values.

        Raises:
            ConfigurationError: On a blank key, a negative or non-integer
                retry budget, a non-integer port, or non-boolean flags.
        """
        if not isinstance(self.key, str) or not _NON_BLANK.search(self.key):
            raise ConfigurationError("You must provide an API key")
        for name in ("async_", "debug"):
            value = getattr(self, name)
            if not isinstance(value, bool):
                raise ConfigurationError(f"{name.rstrip('_')} must be a boolean, got {value!r}")
        if isinstance(self.retries, bool) or not isinstance(self.retries, int) or self.retries < 0:
            raise ConfigurationError(f"retries must be a non-negative integer, got {self.retries!r}")
        if self.port and (isinstance(self.port, bool) or not isinstance(self.port, int)):
            raise ConfigurationError(f"port must be an integer, got {self.port!r}")


OptionsLike = Union[Options, Mapping[str, Any], str]

DEFAULT_OPTIONS = Options()


def _parse_bool(value: str) -> bool:
    lowered = value.strip().lower()
    if lowered in ("1", "true", "yes", "on"):
        return True
    if lowered in ("0", "false", "no", "off"):
        return False
    raise ValueError(f"not a boolean: {value!r}")


def _parse_port(value: str) -> int | None:
    value = value.strip()
    return int(value) if value else None


def load_options(config_path: str | None = None, **overrides: Any) -> Options:
    """Load client options from environment, config file and overrides.

    Priority: explicit overrides > config file > environment variables > defaults.
    ``None`` overrides are ignored so CLI flags left unset do not mask the
    other sources.

    Environment variables:
        SPARKPOST_API_KEY: API key
        SPARKPOST_HOST: API hostname
        SPARKPOST_PROTOCOL: URL scheme
        SPARKPOST_PORT: TCP port (empty to omit)
        SPARKPOST_VERSION: API version segment
        SPARKPOST_ASYNC: Asynchronous dispatch (true/false)
        SPARKPOST_DEBUG: Attach requests to responses (true/false)
        SPARKPOST_RETRIES: Retries on 5xx responses

    Args:
        config_path: Optional path to an INI file with a ``[sparkpost]`` section.
        **overrides: Option values taking precedence over every other source.

    Returns:
        Validated ``Options``.

    Raises:
        ConfigurationError: If no non-blank API key is found in any source.
    """
    values: dict[str, Any] = {}

    env_mapping = {
        "key": ("SPARKPOST_API_KEY", str),
        "host": ("SPARKPOST_HOST", str),
        "protocol": ("SPARKPOST_PROTOCOL", str),
        "port": ("SPARKPOST_PORT", _parse_port),
        "version": ("SPARKPOST_VERSION", str),
        "async": ("SPARKPOST_ASYNC", _parse_bool),
        "debug": ("SPARKPOST_DEBUG", _parse_bool),
        "retries": ("SPARKPOST_RETRIES", int),
    }

    for key, (env_var, type_fn) in env_mapping.items():
        env_value = os.environ.get(env_var)
        if env_value is None:
            continue
        try:
            values[key] = type_fn(env_value)
        except (ValueError, TypeError):
            logger.warning(f"Invalid value for {env_var}, using default")

    if config_path and Path(config_path).exists():
        config = configparser.ConfigParser()
        config.read(config_path)

        if config.has_section("sparkpost"):
            section = config["sparkpost"]
            for key, (_, type_fn) in env_mapping.items():
                if key not in section:
                    continue
                try:
                    values[key] = type_fn(section[key])
                except (ValueError, TypeError):
                    logger.warning(f"Invalid value for [sparkpost] {key} in {config_path}, ignoring")

    values.update({k: v for k, v in overrides.items() if v is not None})
    return DEFAULT_OPTIONS.merged(values)
