from __future__ import annotations

import httpx
import pytest

from restbase.headers import HeaderCollection, MappingHeaders, header_adapter, normalize_headers


def test_normalize_mapping_lowercases_names() -> None:
    assert normalize_headers({"Content-Type": "a", "X-Thing": 1}) == {"content-type": "a", "x-thing": "1"}


def test_normalize_header_collection() -> None:
    headers = httpx.Headers([("Accept", "a/b"), ("X-Multi", "1"), ("x-multi", "2")])

    assert normalize_headers(headers) == {"accept": "a/b", "x-multi": "1, 2"}


def test_normalize_empty_input() -> None:
    assert normalize_headers(None) == {}
    assert normalize_headers({}) == {}
    assert normalize_headers(httpx.Headers()) == {}


def test_normalize_returns_new_dict() -> None:
    source = {"x": "1"}
    result = normalize_headers(source)
    result["y"] = "2"

    assert source == {"x": "1"}


def test_adapter_is_selected_by_shape() -> None:
    assert isinstance(header_adapter({"a": "b"}), MappingHeaders)
    assert isinstance(header_adapter(httpx.Headers({"a": "b"})), HeaderCollection)


def test_unsupported_headers_type() -> None:
    with pytest.raises(TypeError):
        normalize_headers([("a", "b")])
