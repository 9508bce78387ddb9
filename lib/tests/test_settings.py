from __future__ import annotations

import pytest

from restbase import AuthConfig, ClientOptions, ConfigurationError
from restbase import settings

CONFIG = "\n".join(
    [
        'gateway = "gw.example.io/"',
        'root_path = "/data/core"',
        "timeout_s = 30",
        "",
        "[headers]",
        'X-Sandbox-Name = "prod"',
        "",
        "[auth]",
        'token = "default-token"',
        'api_key = "client-id"',
        "",
        "[profiles.stage]",
        'gateway = "https://stage.example.io"',
        "",
        "[profiles.stage.auth]",
        'token = "stage-token"',
        "",
    ]
)


def _write_config(tmp_path, monkeypatch):
    def _config_dir(_: str) -> str:
        return str(tmp_path)

    monkeypatch.setattr(settings, "user_config_dir", _config_dir)
    monkeypatch.delenv(settings.ENV_GATEWAY, raising=False)
    monkeypatch.delenv(settings.ENV_TOKEN, raising=False)
    tmp_path.joinpath("config.toml").write_text(CONFIG, encoding="utf-8")


def test_load_options_from_config(tmp_path, monkeypatch) -> None:
    _write_config(tmp_path, monkeypatch)

    options = settings.load_options()

    assert options.gateway == "https://gw.example.io"
    assert options.root_path == "/data/core"
    assert options.headers == {"X-Sandbox-Name": "prod"}
    assert options.auth == AuthConfig(token="default-token", api_key="client-id")
    assert options.name is None
    assert options.timeout_s == 30.0


def test_load_options_applies_profile(tmp_path, monkeypatch) -> None:
    _write_config(tmp_path, monkeypatch)

    options = settings.load_options(profile="stage")

    assert options.gateway == "https://stage.example.io"
    assert options.root_path == "/data/core"
    assert options.auth == AuthConfig(token="stage-token")


def test_load_options_env_override(tmp_path, monkeypatch) -> None:
    _write_config(tmp_path, monkeypatch)
    monkeypatch.setenv(settings.ENV_GATEWAY, "http://127.0.0.1:8080/")
    monkeypatch.setenv(settings.ENV_TOKEN, "env-token")

    options = settings.load_options()

    assert options.gateway == "http://127.0.0.1:8080"
    assert options.auth == AuthConfig(token="env-token", api_key="client-id")


def test_load_options_missing_file(tmp_path, monkeypatch) -> None:
    monkeypatch.setattr(settings, "user_config_dir", lambda _: str(tmp_path))
    monkeypatch.delenv(settings.ENV_GATEWAY, raising=False)
    monkeypatch.delenv(settings.ENV_TOKEN, raising=False)

    assert settings.load_options() == ClientOptions()


def test_normalize_gateway_defaults_to_https() -> None:
    assert settings.normalize_gateway("example.com") == "https://example.com"


def test_normalize_gateway_keeps_explicit_http() -> None:
    assert settings.normalize_gateway("http://localhost:8010/") == "http://localhost:8010"
    assert settings.normalize_gateway("localhost:8010") == "https://localhost:8010"


@pytest.mark.parametrize("raw", ["ftp://files.example.io", "https://gw.example.io:port", "https://gw.example.io/?x=1", "https://gw.example.io#top"])
def test_normalize_gateway_rejects_invalid(raw) -> None:
    with pytest.raises(ConfigurationError):
        settings.normalize_gateway(raw)


def test_normalize_gateway_strips_trailing_slash() -> None:
    assert settings.normalize_gateway(" https://example.com/ ") == "https://example.com"
    assert settings.normalize_gateway(None) == ""
