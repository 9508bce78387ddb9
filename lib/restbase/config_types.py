from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import TYPE_CHECKING, Any, Mapping

if TYPE_CHECKING:
    from .transport import Transport


@dataclass(frozen=True)
class AuthConfig:
    token: str | None = None
    token_type: str = "bearer"
    api_key: str | None = None
    org_id: str | None = None

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "AuthConfig":
        return cls(
            token=data.get("token") or None,
            token_type=str(data.get("token_type") or "bearer"),
            api_key=data.get("api_key") or None,
            org_id=data.get("org_id") or None,
        )


@dataclass(frozen=True)
class ClientOptions:
    """Caller-supplied configuration. Unset fields fall back to the client defaults."""

    name: str | None = None
    root_path: str | None = None
    gateway: str | None = None
    headers: Any = None
    auth: Any = None
    timeout_s: float | None = None

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "ClientOptions":
        return cls(
            name=data.get("name"),
            root_path=data.get("root_path"),
            gateway=data.get("gateway"),
            headers=data.get("headers"),
            auth=data.get("auth"),
            timeout_s=data.get("timeout_s"),
        )


@dataclass(frozen=True)
class ClientDefaults:
    """Partial defaults a specialized client supplies in place of the base ones."""

    name: str | None = None
    root_path: str | None = None
    gateway: str | None = None
    headers: Mapping[str, Any] | None = None

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "ClientDefaults":
        return cls(
            name=data.get("name"),
            root_path=data.get("root_path"),
            gateway=data.get("gateway"),
            headers=data.get("headers"),
        )


@dataclass(frozen=True)
class ClientConfig:
    name: str
    root_path: str
    gateway: str
    headers: Mapping[str, str] = field(default_factory=lambda: MappingProxyType({}))
    transport: "Transport | None" = None

    @property
    def endpoint(self) -> str:
        return f"{self.gateway}{self.root_path}"
