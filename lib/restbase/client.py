from __future__ import annotations

import json
import logging
from types import MappingProxyType
from typing import Any, Callable, Mapping
from urllib.parse import parse_qsl, quote, urlencode

from .config_types import ClientConfig, ClientDefaults, ClientOptions
from .constants import (
    BASE_HEADERS,
    BASE_NAME,
    BASE_ROOT_PATH,
    DEFAULT_GATEWAY,
    DEFAULT_TIMEOUT_S,
    JSON_CONTENT_TYPE,
)
from .errors import ConfigurationError, EmptyResponse, RequestError, TransportFailure, UnsuccessfulResponse
from .headers import normalize_headers
from .transport import Transport, make_transport

logger = logging.getLogger(__name__)

DefaultsProvider = Callable[[], "ClientDefaults | Mapping[str, Any]"]


class BaseClient:
    """Base class for REST API clients.

    Build it either from a transport plus optional options::

        BaseClient(transport, ClientOptions(root_path="/my/api"))

    or from options alone, in which case ``options.auth`` is required and the
    default httpx transport is created from it::

        BaseClient({"auth": {"token": "..."}, "root_path": "/my/api"})

    Specialized clients change their name, root path, gateway and default
    headers by overriding :meth:`defaults` or by passing a ``defaults``
    provider; request handling stays here.
    """

    def __init__(
            self,
            transport: Transport | ClientOptions | Mapping[str, Any] | None = None,
            options: ClientOptions | Mapping[str, Any] | None = None,
            *,
            defaults: DefaultsProvider | None = None,
    ):
        if isinstance(transport, (ClientOptions, Mapping)):
            options, transport = transport, None
        opts = _coerce_options(options)

        self._owns_transport = False
        if transport is None:
            if not opts.auth:
                raise ConfigurationError()
            transport = make_transport(opts.auth, timeout_s=opts.timeout_s or DEFAULT_TIMEOUT_S)
            self._owns_transport = True

        hook = _coerce_defaults((defaults or self.defaults)())

        name = opts.name or hook.name or BASE_NAME
        root_path = opts.root_path or hook.root_path or BASE_ROOT_PATH
        gateway = opts.gateway or hook.gateway or DEFAULT_GATEWAY

        headers = dict(BASE_HEADERS)
        headers.update(normalize_headers(hook.headers))
        headers.update(normalize_headers(opts.headers))

        self.config = ClientConfig(
            name=name,
            root_path=root_path,
            gateway=gateway.rstrip("/"),
            headers=MappingProxyType(headers),
            transport=transport,
        )
        self.endpoint = self.config.endpoint
        self.log = logger.getChild(name)

    def defaults(self) -> ClientDefaults:
        """Defaults used where the options leave a field unset. Override in subclasses."""
        return ClientDefaults(name=BASE_NAME, root_path=BASE_ROOT_PATH, headers=dict(BASE_HEADERS))

    @property
    def name(self) -> str:
        return self.config.name

    @property
    def root_path(self) -> str:
        return self.config.root_path

    @property
    def gateway(self) -> str:
        return self.config.gateway

    @property
    def headers(self) -> Mapping[str, str]:
        return self.config.headers

    @property
    def transport(self) -> Transport:
        return self.config.transport

    async def aclose(self) -> None:
        if not self._owns_transport:
            return
        aclose = getattr(self.transport, "aclose", None)
        if aclose is not None:
            await aclose()

    async def __aenter__(self) -> "BaseClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    # --- path helpers ---
    def ensure_prefix(self, path: str) -> str:
        return path if path.startswith("/") else f"/{path}"

    def resolve_url(self, path: str) -> str:
        # Literal prefix match: absolute URLs elsewhere are appended as relative paths.
        if path.startswith(self.endpoint):
            return path
        return f"{self.endpoint}{self.ensure_prefix(path)}"

    def add_params_to_path(self, path: str, params: Mapping[str, Any] | None = None) -> str:
        if not params:
            return path
        base_path, _, query = path.partition("?")
        merged: dict[str, Any] = {}
        if query:
            for key, value in parse_qsl(query, keep_blank_values=True):
                if key not in merged:
                    merged[key] = value
                elif isinstance(merged[key], list):
                    merged[key].append(value)
                else:
                    merged[key] = [merged[key], value]
        merged.update(params)
        return f"{base_path}?{_encode_query(merged)}"

    # --- requests ---
    async def api(
            self,
            path: str,
            method: str = "GET",
            returns_json: bool = True,
            options: Mapping[str, Any] | None = None,
            payload: Any = None,
    ) -> Any:
        url = self.resolve_url(path)
        try:
            self.log.debug("Fetch %s", url)
            request_options = self._request_options(method, options, payload)
            response = await self.transport(url, request_options)
        except Exception as e:
            self.log.debug("Fetch %s failed: %s", url, e)
            raise TransportFailure(str(e)) from e

        if not response:
            self.log.debug("Fetch %s failed: Empty response.", path)
            raise EmptyResponse()

        if not getattr(response, "ok", False):
            raise UnsuccessfulResponse(
                getattr(response, "status_text", None) or UnsuccessfulResponse.FALLBACK_MESSAGE,
                getattr(response, "status", None) or 0,
            )

        if not returns_json:
            return response
        try:
            return await response.json()
        except ValueError as e:
            raise RequestError(f"Invalid JSON response: {e}", getattr(response, "status", None) or 0) from e

    def _request_options(self, method: str, options: Mapping[str, Any] | None, payload: Any) -> dict[str, Any]:
        request_options = dict(options or {})
        headers = dict(self.headers)
        if request_options.get("headers"):
            headers.update(normalize_headers(request_options["headers"]))
        request_options["headers"] = headers
        request_options["method"] = (method or "GET").upper()

        if payload is not None:
            # NaN/Infinity have no JSON form
            request_options["body"] = json.dumps(payload, allow_nan=False)
            headers.setdefault("content-type", JSON_CONTENT_TYPE)
        return request_options

    async def get(self, path: str, returns_json: bool = True, options: Mapping[str, Any] | None = None) -> Any:
        return await self.api(path, "GET", returns_json, options)

    async def post(self, path: str, payload: Any = None, returns_json: bool = True,
                   options: Mapping[str, Any] | None = None) -> Any:
        return await self.api(path, "POST", returns_json, options, payload)

    async def put(self, path: str, payload: Any = None, returns_json: bool = True,
                  options: Mapping[str, Any] | None = None) -> Any:
        return await self.api(path, "PUT", returns_json, options, payload)

    async def patch(self, path: str, payload: Any = None, returns_json: bool = True,
                    options: Mapping[str, Any] | None = None) -> Any:
        return await self.api(path, "PATCH", returns_json, options, payload)

    async def delete(self, path: str, payload: Any = None, returns_json: bool = True,
                     options: Mapping[str, Any] | None = None) -> Any:
        return await self.api(path, "DELETE", returns_json, options, payload)


def _coerce_options(options: ClientOptions | Mapping[str, Any] | None) -> ClientOptions:
    if options is None:
        return ClientOptions()
    if isinstance(options, ClientOptions):
        return options
    return ClientOptions.from_mapping(options)


def _coerce_defaults(defaults: ClientDefaults | Mapping[str, Any] | None) -> ClientDefaults:
    if defaults is None:
        return ClientDefaults()
    if isinstance(defaults, ClientDefaults):
        return defaults
    return ClientDefaults.from_mapping(defaults)


def _query_value(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def _encode_query(params: Mapping[str, Any]) -> str:
    pairs: list[tuple[str, str]] = []
    for key, value in params.items():
        values = value if isinstance(value, (list, tuple)) else [value]
        for item in values:
            pairs.append((str(key), _query_value(item)))
    return urlencode(pairs, quote_via=quote, safe="!'()*")
