from __future__ import annotations

import os
import tomllib
from dataclasses import replace
from typing import Any

import httpx
from platformdirs import user_config_dir

from .config_types import AuthConfig, ClientOptions
from .errors import ConfigurationError

APP_NAME = "restbase"
CONFIG_FILENAME = "config.toml"
ENV_GATEWAY = "RESTBASE_GATEWAY"
ENV_TOKEN = "RESTBASE_TOKEN"


def config_path() -> str:
    return f"{user_config_dir(APP_NAME)}/{CONFIG_FILENAME}"


def normalize_gateway(raw: str | None) -> str:
    """Return the gateway origin without trailing slashes, assuming https when no scheme is given."""
    value = (raw or "").strip().rstrip("/")
    if not value:
        return ""
    if "://" not in value:
        value = f"https://{value}"
    try:
        url = httpx.URL(value)
    except httpx.InvalidURL as e:
        raise ConfigurationError(f"invalid gateway {raw!r}: {e}") from e
    if url.scheme not in ("http", "https") or not url.host:
        raise ConfigurationError(f"invalid gateway {raw!r}")
    if url.query or url.fragment:
        raise ConfigurationError(f"gateway {raw!r} must not carry a query or fragment")
    return value


def _auth_from(raw: Any) -> AuthConfig | None:
    if not isinstance(raw, dict):
        return None
    auth = AuthConfig.from_mapping(raw)
    if not (auth.token or auth.api_key):
        return None
    return auth


def from_toml(data: dict[str, Any], profile: str | None = None) -> ClientOptions:
    values = {k: v for k, v in data.items() if k != "profiles"}
    if profile:
        profiles_raw = data.get("profiles") or {}
        prof = profiles_raw.get(profile) if isinstance(profiles_raw, dict) else None
        if isinstance(prof, dict):
            values.update(prof)

    headers = values.get("headers")
    timeout = values.get("timeout_s")
    return ClientOptions(
        name=str(values.get("name") or "") or None,
        root_path=str(values.get("root_path") or "") or None,
        gateway=normalize_gateway(values.get("gateway")) or None,
        headers=dict(headers) if isinstance(headers, dict) else None,
        auth=_auth_from(values.get("auth")),
        timeout_s=float(timeout) if isinstance(timeout, (int, float)) else None,
    )


def apply_env(options: ClientOptions) -> ClientOptions:
    gateway = normalize_gateway(os.getenv(ENV_GATEWAY, ""))
    token = os.getenv(ENV_TOKEN, "").strip()
    auth = options.auth
    if token:
        base = auth if isinstance(auth, AuthConfig) else AuthConfig()
        auth = replace(base, token=token)
    return replace(options, gateway=gateway or options.gateway, auth=auth)


def load_options(profile: str | None = None, path: str | None = None) -> ClientOptions:
    """Read client options from the user config file, then apply env overrides."""
    path = path or config_path()
    try:
        with open(path, "rb") as f:
            data = tomllib.load(f)
        options = from_toml(data, profile)
    except FileNotFoundError:
        options = ClientOptions()
    return apply_env(options)
