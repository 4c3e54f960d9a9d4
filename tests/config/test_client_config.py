import configparser
from pathlib import Path
from typing import Dict, Optional

import pytest

from librato_metrics.client import Client
from librato_metrics.config.client import (
    ClientConfig,
    _client_values_from_config_ini,
    get_client_config,
    parse_tags,
)


ENV_VARS = ("LIBRATO_EMAIL", "LIBRATO_API_KEY", "LIBRATO_API_ENDPOINT", "LIBRATO_TAGS")


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def config_file_factory(tmp_path: Path):
    """
    Factory fixture to create config.ini files with custom content.
    """

    def _create_config(librato_section: Optional[Dict[str, str]] = None) -> Path:
        config = configparser.ConfigParser()
        if librato_section is not None:
            config["librato"] = librato_section

        config_path = tmp_path / "config.ini"
        with open(config_path, "w") as f:
            config.write(f)
        return config_path

    return _create_config


class TestParseTags:
    def test_parses_pairs(self):
        assert parse_tags("region=us-east-1, env = prod") == {
            "region": "us-east-1",
            "env": "prod",
        }

    @pytest.mark.parametrize("raw", [None, "", "   "])
    def test_empty(self, raw):
        assert parse_tags(raw) == {}

    def test_ignores_trailing_comma(self):
        assert parse_tags("a=1,") == {"a": "1"}

    @pytest.mark.parametrize("raw", ["region", "=value", "a=1,broken"])
    def test_malformed(self, raw):
        with pytest.raises(ValueError, match="expected key=value"):
            parse_tags(raw)


class TestConfigIni:
    def test_missing_file(self, tmp_path: Path):
        assert _client_values_from_config_ini(tmp_path / "absent.ini") == {}

    def test_missing_section(self, config_file_factory):
        assert _client_values_from_config_ini(config_file_factory()) == {}

    def test_reads_section(self, config_file_factory):
        path = config_file_factory({"email": "ini@example.com", "api_key": "ini-key"})

        values = _client_values_from_config_ini(path)

        assert values["email"] == "ini@example.com"
        assert values["api_key"] == "ini-key"
        assert values["api_endpoint"] is None


class TestGetClientConfig:
    def test_defaults(self, tmp_path: Path):
        config = get_client_config(config_path=tmp_path / "absent.ini")

        assert config == ClientConfig(
            email=None,
            api_key=None,
            api_endpoint="https://metrics-api.librato.com",
            tags={},
        )

    def test_explicit_wins(self, monkeypatch, config_file_factory):
        monkeypatch.setenv("LIBRATO_EMAIL", "env@example.com")
        path = config_file_factory({"email": "ini@example.com"})

        config = get_client_config(email="arg@example.com", config_path=path)

        assert config.email == "arg@example.com"

    def test_env_over_config_ini(self, monkeypatch, config_file_factory):
        monkeypatch.setenv("LIBRATO_API_KEY", "env-key")
        monkeypatch.setenv("LIBRATO_TAGS", "region=us-east-1")
        path = config_file_factory(
            {
                "email": "ini@example.com",
                "api_key": "ini-key",
                "api_endpoint": "http://test.com/",
                "tags": "env=prod",
            }
        )

        config = get_client_config(config_path=path)

        assert config.email == "ini@example.com"
        assert config.api_key == "env-key"
        assert config.api_endpoint == "http://test.com/"
        assert config.tags == {"region": "us-east-1"}

    def test_malformed_tags(self, monkeypatch, tmp_path: Path):
        monkeypatch.setenv("LIBRATO_TAGS", "oops")

        with pytest.raises(ValueError):
            get_client_config(config_path=tmp_path / "absent.ini")


class TestClientConfig:
    def test_as_dict_redacts_api_key(self):
        config = ClientConfig("me@example.com", "secret", "https://x", {"a": "1", "b": "2"})

        assert config.as_dict() == {
            "email": "me@example.com",
            "api_key": "***",
            "api_endpoint": "https://x",
            "tags": "a=1,b=2",
        }

    def test_apply(self):
        client = Client(tags={"env": "dev"})
        config = ClientConfig("me@example.com", "secret", "http://test.com/", {"region": "eu"})

        assert config.apply(client) is client
        assert client.email == "me@example.com"
        assert client.api_key == "secret"
        assert client.api_endpoint == "http://test.com/"
        assert client.tags == {"env": "dev", "region": "eu"}

    def test_apply_skips_partial_credentials(self):
        client = Client()
        ClientConfig("me@example.com", None, "https://x", {}).apply(client)

        assert client.email is None
        assert client.api_key is None
