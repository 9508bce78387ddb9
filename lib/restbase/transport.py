from __future__ import annotations

from typing import Any, Mapping, Protocol

import httpx

from .config_types import AuthConfig
from .constants import DEFAULT_TIMEOUT_S, USER_AGENT
from .errors import ConfigurationError

# Per-call options forwarded to httpx as-is. Other keys are ignored.
_PASSTHROUGH_OPTIONS = ("timeout", "follow_redirects", "extensions")


class Response(Protocol):
    ok: bool
    status: int
    status_text: str

    async def json(self) -> Any:
        ...


class Transport(Protocol):
    async def __call__(self, url: str, options: dict[str, Any]) -> Response | None:
        ...


class HttpxResponse:
    def __init__(self, response: httpx.Response):
        self._response = response

    @property
    def ok(self) -> bool:
        return self._response.is_success

    @property
    def status(self) -> int:
        return self._response.status_code

    @property
    def status_text(self) -> str:
        return self._response.reason_phrase

    @property
    def headers(self) -> httpx.Headers:
        return self._response.headers

    @property
    def text(self) -> str:
        return self._response.text

    @property
    def raw(self) -> httpx.Response:
        return self._response

    async def json(self) -> Any:
        return self._response.json()

    def __repr__(self) -> str:
        return f"<HttpxResponse [{self.status} {self.status_text}]>"


class HttpxTransport:
    def __init__(
            self,
            *,
            headers: Mapping[str, str] | None = None,
            timeout_s: float = DEFAULT_TIMEOUT_S,
            http_transport: httpx.AsyncBaseTransport | None = None,
    ):
        client_headers = {"User-Agent": USER_AGENT}
        if headers:
            client_headers.update(headers)
        self._client = httpx.AsyncClient(
            timeout=timeout_s,
            headers=client_headers,
            follow_redirects=True,
            transport=http_transport,
        )

    async def __call__(self, url: str, options: dict[str, Any]) -> HttpxResponse:
        extra = {key: options[key] for key in _PASSTHROUGH_OPTIONS if key in options}
        r = await self._client.request(
            options.get("method") or "GET",
            url,
            headers=options.get("headers"),
            content=options.get("body"),
            **extra,
        )
        return HttpxResponse(r)

    async def aclose(self) -> None:
        await self._client.aclose()


def auth_headers(auth: AuthConfig) -> dict[str, str]:
    headers: dict[str, str] = {}
    if auth.token:
        scheme = "Bearer" if auth.token_type.lower() == "bearer" else auth.token_type
        headers["Authorization"] = f"{scheme} {auth.token}"
    if auth.api_key:
        headers["x-api-key"] = auth.api_key
    if auth.org_id:
        headers["x-gw-ims-org-id"] = auth.org_id
    return headers


def make_transport(
        auth: AuthConfig | Mapping[str, Any],
        *,
        timeout_s: float = DEFAULT_TIMEOUT_S,
        http_transport: httpx.AsyncBaseTransport | None = None,
) -> HttpxTransport:
    """Build the default httpx transport with credential headers taken from ``auth``."""
    if isinstance(auth, Mapping):
        auth = AuthConfig.from_mapping(auth)
    if not isinstance(auth, AuthConfig):
        raise ConfigurationError(f"unsupported auth type: {type(auth).__name__}")
    return HttpxTransport(
        headers=auth_headers(auth),
        timeout_s=timeout_s,
        http_transport=http_transport,
    )
