from __future__ import annotations

from typing import Any, Iterable, Mapping, Protocol


class HeaderAdapter(Protocol):
    def items(self) -> Iterable[tuple[str, str]]:
        ...


class MappingHeaders:
    """Plain ``{name: value}`` mapping."""

    def __init__(self, headers: Mapping[str, Any]):
        self._headers = headers

    def items(self) -> Iterable[tuple[str, str]]:
        for name, value in self._headers.items():
            yield str(name), _header_value(value)


class HeaderCollection:
    """Multi-valued header object such as ``httpx.Headers``.

    Repeated names are folded into one comma-separated value.
    """

    def __init__(self, headers: Any):
        self._headers = headers

    def items(self) -> Iterable[tuple[str, str]]:
        folded: dict[str, list[str]] = {}
        for name, value in self._headers.multi_items():
            folded.setdefault(str(name).lower(), []).append(_header_value(value))
        for name, values in folded.items():
            yield name, ", ".join(values)


def _header_value(value: Any) -> str:
    if isinstance(value, bytes):
        return value.decode("latin-1")
    return str(value)


def header_adapter(headers: Any) -> HeaderAdapter:
    if hasattr(headers, "multi_items"):
        return HeaderCollection(headers)
    if isinstance(headers, Mapping):
        return MappingHeaders(headers)
    raise TypeError(f"unsupported headers type: {type(headers).__name__}")


def normalize_headers(headers: Any) -> dict[str, str]:
    """Return ``headers`` as a new dict keyed by lower-cased header name."""
    if not headers:
        return {}
    return {name.lower(): value for name, value in header_adapter(headers).items()}
