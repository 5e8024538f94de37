# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Configuration helpers for SonarLink."""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass, field

from .errors import ConfigurationError
from .version import __version__

DEFAULT_USER_AGENT = f"SonarLink/{__version__}"
SONARCLOUD_URL = "https://sonarcloud.io"

SONARQUBE_CLOUD_URL = "SONARQUBE_CLOUD_URL"
SONARQUBE_CLOUD_ORG = "SONARQUBE_CLOUD_ORG"
SONARQUBE_CLOUD_TOKEN = "SONARQUBE_CLOUD_TOKEN"
SONARQUBE_SERVER_URL = "SONARQUBE_SERVER_URL"
SONARQUBE_SERVER_USER_TOKEN = "SONARQUBE_SERVER_USER_TOKEN"


def _float_env(name: str, default: float) -> float:
    try:
        value = os.getenv(name)
        return float(value) if value is not None else default
    except ValueError:
        return default


def _int_env(name: str, default: int) -> int:
    try:
        value = os.getenv(name)
        return int(value) if value is not None else default
    except ValueError:
        return default


def _bool_env(name: str, default: bool) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "yes", "on"}


@dataclass
class HttpSettings:
    """Transport defaults."""

    timeout: float = 30.0
    user_agent: str = DEFAULT_USER_AGENT
    allow_redirects: bool = True
    verify_ssl: bool = True
    max_workers: int = 4

    @classmethod
    def from_env(cls) -> "HttpSettings":
        """Create settings from environment variables (evaluated at call time)."""
        max_workers = _int_env("SONARLINK_HTTP_MAX_WORKERS", cls.max_workers)
        if max_workers <= 0:
            max_workers = cls.max_workers
        return cls(
            timeout=_float_env("SONARLINK_HTTP_TIMEOUT", cls.timeout),
            user_agent=os.getenv("SONARLINK_USER_AGENT", cls.user_agent),
            allow_redirects=_bool_env("SONARLINK_HTTP_REDIRECTS", cls.allow_redirects),
            verify_ssl=_bool_env("SONARLINK_HTTP_VERIFY_SSL", cls.verify_ssl),
            max_workers=max_workers,
        )


def load_http_settings() -> HttpSettings:
    """Load HTTP settings from environment with sensible defaults."""
    return HttpSettings.from_env()


@dataclass(frozen=True)
class ServerCredentials:
    """Base URL plus optional bearer token for one SonarQube instance."""

    base_url: str
    token: str | None = None

    @property
    def has_token(self) -> bool:
        return self.token is not None

    def __repr__(self) -> str:
        masked = "***" if self.token is not None else None
        return f"ServerCredentials(base_url={self.base_url!r}, token={masked!r})"


@dataclass(frozen=True)
class LaunchConfiguration:
    """
    SonarQube Cloud / SonarQube Server connection settings.

    Cloud and server tokens are mutually exclusive. A cloud token requires an
    organization and a server token requires a server URL.
    """

    cloud_url: str = SONARCLOUD_URL
    cloud_org: str | None = None
    cloud_token: str | None = field(default=None, repr=False)
    server_url: str | None = None
    server_token: str | None = field(default=None, repr=False)

    def __post_init__(self) -> None:
        if self.cloud_token is not None and self.server_token is not None:
            raise ConfigurationError(
                f"Both {SONARQUBE_CLOUD_TOKEN} and {SONARQUBE_SERVER_USER_TOKEN} environment variables must not be set"
            )
        if self.server_token is not None and self.server_url is None:
            raise ConfigurationError(f"{SONARQUBE_SERVER_URL} environment variable must be set")
        if self.cloud_token is not None and self.cloud_org is None:
            raise ConfigurationError(f"{SONARQUBE_CLOUD_ORG} environment variable must be set")

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> "LaunchConfiguration":
        env = os.environ if environ is None else environ
        return cls(
            cloud_url=env.get(SONARQUBE_CLOUD_URL, SONARCLOUD_URL),
            cloud_org=env.get(SONARQUBE_CLOUD_ORG),
            cloud_token=env.get(SONARQUBE_CLOUD_TOKEN),
            server_url=env.get(SONARQUBE_SERVER_URL),
            server_token=env.get(SONARQUBE_SERVER_USER_TOKEN),
        )

    @property
    def is_cloud(self) -> bool:
        return self.cloud_token is not None

    @property
    def url(self) -> str | None:
        return self.cloud_url if self.is_cloud else self.server_url

    @property
    def token(self) -> str | None:
        return self.cloud_token if self.is_cloud else self.server_token

    def credentials(self) -> ServerCredentials:
        url = self.url
        if not url:
            raise ConfigurationError(f"{SONARQUBE_SERVER_URL} environment variable must be set")
        return ServerCredentials(base_url=url, token=self.token)


__all__ = [
    "DEFAULT_USER_AGENT",
    "HttpSettings",
    "LaunchConfiguration",
    "SONARCLOUD_URL",
    "ServerCredentials",
    "load_http_settings",
]
