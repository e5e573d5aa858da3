"""Environment and ``.env`` driven configuration.

Purpose
-------
Collect transport settings from environment variables so deployments can
configure credentials without code changes, optionally seeding the
environment from the nearest ``.env`` file.

Contents
--------
* :class:`DatadogSettings` - resolved settings for one transport.
* :func:`load_settings` - read settings from a mapping (``os.environ`` by default).
* :func:`enable_dotenv` / :func:`should_use_dotenv` - ``.env`` support.

System Role
-----------
Used by the CLI and by host applications that prefer environment
configuration over explicit constructor arguments.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Mapping

from dotenv import find_dotenv, load_dotenv

from .domain.request import API_ENDPOINT
from .transport import DatadogTransport

DOTENV_ENV_VAR = "LIB_LOG_DATADOG_USE_DOTENV"
API_KEY_VAR = "DATADOG_API_KEY"
APP_KEY_VAR = "DATADOG_APP_KEY"
MINIMUM_LEVEL_VAR = "DATADOG_MINIMUM_LOG_LEVEL"
ENDPOINT_VAR = "DATADOG_API_ENDPOINT"
TIMEOUT_VAR = "DATADOG_TIMEOUT"
TITLE_MODE_VAR = "DATADOG_USE_TEXT_AS_TITLE"
ENVIRONMENT_VAR = "NODE_ENV"

_TRUTHY = {"1", "true", "yes", "on"}

_DOTENV_LOADED: Path | None = None


@dataclass(slots=True, frozen=True)
class DatadogSettings:
    """Settings needed to construct a :class:`~lib_log_datadog.transport.DatadogTransport`."""

    api_key: str
    application_key: str
    minimum_log_level: str | None = None
    api_endpoint: str = API_ENDPOINT
    timeout: float | None = None
    use_text_as_title: bool = False
    environment: str | None = None

    def transport_kwargs(self) -> dict[str, Any]:
        """Return keyword arguments accepted by the transport constructor."""
        return {
            "api_key": self.api_key,
            "application_key": self.application_key,
            "minimum_log_level": self.minimum_log_level,
            "api_endpoint": self.api_endpoint,
            "timeout": self.timeout,
            "environment": self.environment,
        }


def load_settings(env: Mapping[str, str] | None = None, **overrides: Any) -> DatadogSettings:
    """Build :class:`DatadogSettings` from ``env`` with explicit ``overrides``.

    Overrides whose value is ``None`` are ignored so CLI options left unset
    fall back to the environment.

    Raises
    ------
    ValueError
        When credentials are missing or ``DATADOG_TIMEOUT`` is not a number.

    Examples
    --------
    >>> settings = load_settings({"DATADOG_API_KEY": "k", "DATADOG_APP_KEY": "a", "DATADOG_TIMEOUT": "2.5"})
    >>> settings.timeout
    2.5
    >>> load_settings({}, api_key="k", application_key="a").minimum_log_level is None
    True
    """
    source = os.environ if env is None else env
    values: dict[str, Any] = {
        "api_key": source.get(API_KEY_VAR, ""),
        "application_key": source.get(APP_KEY_VAR, ""),
        "minimum_log_level": source.get(MINIMUM_LEVEL_VAR) or None,
        "api_endpoint": source.get(ENDPOINT_VAR) or API_ENDPOINT,
        "timeout": _coerce_timeout(source.get(TIMEOUT_VAR)),
        "use_text_as_title": _env_bool(source.get(TITLE_MODE_VAR), False),
        "environment": source.get(ENVIRONMENT_VAR) or None,
    }
    values.update({key: value for key, value in overrides.items() if value is not None})
    if not values["api_key"]:
        raise ValueError(f"Datadog API key missing; set {API_KEY_VAR}")
    if not values["application_key"]:
        raise ValueError(f"Datadog application key missing; set {APP_KEY_VAR}")
    return DatadogSettings(**values)


def create_transport(settings: DatadogSettings, **kwargs: Any) -> DatadogTransport:
    """Construct a transport from ``settings``; ``kwargs`` reach the constructor."""
    transport = DatadogTransport(**settings.transport_kwargs(), **kwargs)
    transport.use_text_as_title = settings.use_text_as_title
    return transport


def should_use_dotenv(*, explicit: bool | None = None, env_value: str | None = None) -> bool:
    """Decide whether to load ``.env``; an explicit flag beats the environment toggle.

    Examples
    --------
    >>> should_use_dotenv(explicit=None, env_value="yes")
    True
    >>> should_use_dotenv(explicit=False, env_value="1")
    False
    """
    if explicit is not None:
        return explicit
    return _env_bool(env_value, False)


def enable_dotenv() -> Path | None:
    """Load the nearest ``.env`` walking upwards from the working directory.

    Existing environment variables keep precedence. Returns the resolved path
    of the loaded file, or ``None`` when none was found. Repeated calls reuse
    the first result.
    """
    global _DOTENV_LOADED
    if _DOTENV_LOADED is not None:
        return _DOTENV_LOADED
    found = find_dotenv(usecwd=True)
    if not found:
        return None
    candidate = Path(found).resolve()
    load_dotenv(candidate, override=False)
    _DOTENV_LOADED = candidate
    return candidate


def _reset_dotenv_state_for_testing() -> None:
    global _DOTENV_LOADED
    _DOTENV_LOADED = None


def _env_bool(value: str | None, default: bool) -> bool:
    if value is None or not value.strip():
        return default
    return value.strip().lower() in _TRUTHY


def _coerce_timeout(value: str | None) -> float | None:
    if value is None or not value.strip():
        return None
    try:
        timeout = float(value)
    except ValueError as exc:
        raise ValueError(f"{TIMEOUT_VAR} must be a number of seconds, got {value!r}") from exc
    return timeout if timeout > 0 else None


__all__ = [
    "API_KEY_VAR",
    "APP_KEY_VAR",
    "DOTENV_ENV_VAR",
    "DatadogSettings",
    "create_transport",
    "enable_dotenv",
    "load_settings",
    "should_use_dotenv",
]
