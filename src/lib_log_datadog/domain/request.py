"""Connection settings derived once from credentials and the API endpoint."""

from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Mapping
from urllib.parse import urlencode, urlsplit

API_ENDPOINT = "https://api.datadoghq.com/api/"
API_VERSION = 1
HTTPS_PORT = 443
HTTP_PORT = 80


@dataclass(slots=True, frozen=True)
class Credentials:
    """API and application keys embedded in the request query string."""

    api_key: str
    application_key: str

    def __post_init__(self) -> None:
        if not self.api_key:
            raise ValueError("api_key must not be empty")
        if not self.application_key:
            raise ValueError("application_key must not be empty")

    def __repr__(self) -> str:
        return "Credentials(api_key='***', application_key='***')"

    def to_query(self) -> str:
        return urlencode({"api_key": self.api_key, "application_key": self.application_key})


@dataclass(slots=True, frozen=True)
class RequestOptions:
    """Immutable description of the POST issued for every accepted event."""

    protocol: str
    host: str
    port: int
    path: str
    method: str = "POST"
    headers: Mapping[str, str] = field(default_factory=lambda: MappingProxyType({"Content-Type": "application/json"}))

    @classmethod
    def build(
        cls,
        credentials: Credentials,
        *,
        api_endpoint: str = API_ENDPOINT,
        api_version: int = API_VERSION,
    ) -> "RequestOptions":
        """Derive the request settings for the events resource.

        The protocol is the endpoint scheme. Without an explicit port, ``https``
        endpoints use 443 and anything else uses 80 over ``http``.

        Examples
        --------
        >>> opts = RequestOptions.build(Credentials("k", "a"))
        >>> opts.url
        'https://api.datadoghq.com:443/api/v1/events?api_key=k&application_key=a'
        >>> RequestOptions.build(Credentials("k", "a"), api_endpoint="http://localhost/api/").protocol
        'http'
        """
        parts = urlsplit(api_endpoint)
        if not parts.hostname:
            raise ValueError(f"api_endpoint has no host: {api_endpoint!r}")
        protocol = "https" if parts.scheme == "https" else "http"
        port = parts.port if parts.port is not None else (HTTPS_PORT if protocol == "https" else HTTP_PORT)
        segments = [segment for segment in parts.path.split("/") if segment]
        prefix = "".join(f"/{segment}" for segment in segments)
        path = f"{prefix}/v{api_version}/events?{credentials.to_query()}"
        return cls(protocol=protocol, host=parts.hostname, port=port, path=path)

    @property
    def url(self) -> str:
        return f"{self.protocol}://{self.host}:{self.port}{self.path}"


__all__ = ["API_ENDPOINT", "API_VERSION", "Credentials", "RequestOptions"]
