from __future__ import annotations

import dataclasses

import pytest

from lib_log_datadog.domain.request import API_ENDPOINT, Credentials, RequestOptions


def test_build_targets_public_events_endpoint() -> None:
    options = RequestOptions.build(Credentials("key", "app"))

    assert options.protocol == "https"
    assert options.host == "api.datadoghq.com"
    assert options.port == 443
    assert options.path == "/api/v1/events?api_key=key&application_key=app"
    assert options.method == "POST"
    assert dict(options.headers) == {"Content-Type": "application/json"}
    assert API_ENDPOINT.startswith("https://api.datadoghq.com")


def test_build_selects_http_for_plain_endpoints() -> None:
    options = RequestOptions.build(Credentials("k", "a"), api_endpoint="http://intake.local/api/")

    assert options.protocol == "http"
    assert options.port == 80
    assert options.url == "http://intake.local:80/api/v1/events?api_key=k&application_key=a"


def test_build_honours_explicit_port() -> None:
    options = RequestOptions.build(Credentials("k", "a"), api_endpoint="http://127.0.0.1:8125/api/")

    assert options.port == 8125
    assert options.protocol == "http"


def test_explicit_port_keeps_https_scheme() -> None:
    options = RequestOptions.build(Credentials("k", "a"), api_endpoint="https://dd-proxy.internal:8443/api/")

    assert options.protocol == "https"
    assert options.port == 8443
    assert options.url == "https://dd-proxy.internal:8443/api/v1/events?api_key=k&application_key=a"


def test_credentials_are_url_encoded() -> None:
    options = RequestOptions.build(Credentials("a&b", "c d"))

    assert options.path.endswith("?api_key=a%26b&application_key=c+d")


def test_request_options_are_frozen() -> None:
    options = RequestOptions.build(Credentials("k", "a"))

    with pytest.raises(dataclasses.FrozenInstanceError):
        options.host = "elsewhere"  # type: ignore[misc]
    with pytest.raises(TypeError):
        options.headers["X-Extra"] = "1"  # type: ignore[index]


@pytest.mark.parametrize("api_key, app_key", [("", "a"), ("k", "")])
def test_credentials_require_both_keys(api_key: str, app_key: str) -> None:
    with pytest.raises(ValueError, match="must not be empty"):
        Credentials(api_key, app_key)


def test_credentials_repr_hides_secrets() -> None:
    assert "secret" not in repr(Credentials("secret", "secret"))


def test_build_rejects_endpoint_without_host() -> None:
    with pytest.raises(ValueError, match="no host"):
        RequestOptions.build(Credentials("k", "a"), api_endpoint="/api/")
