import configparser
import logging
import os
from pathlib import Path
from typing import TYPE_CHECKING, Dict, NamedTuple, Optional, Union

from librato_metrics.constants import (
    CONFIG,
    DEFAULT_API_ENDPOINT,
    ENV_API_ENDPOINT,
    ENV_API_KEY,
    ENV_EMAIL,
    ENV_TAGS,
)
from .log_codes import (
    CLIENT_CONFIG_MISSING_SECTION,
    CLIENT_CONFIG_RESOLVED,
    CLIENT_CONFIG_TAGS_INVALID,
)

if TYPE_CHECKING:
    from librato_metrics.client import Client

logger = logging.getLogger(__name__)

CLIENT_SECTION_NAME = "librato"

EMAIL_KEY = "email"
API_KEY_KEY = "api_key"
API_ENDPOINT_KEY = "api_endpoint"
TAGS_KEY = "tags"


class ClientConfig(NamedTuple):
    """
    Resolved client configuration.

    Args:
        email (Optional[str]): The account email.
        api_key (Optional[str]): The API key.
        api_endpoint (str): The base URL of the metrics API.
        tags (Dict[str, str]): Tags attached to every submission.
    """

    email: Optional[str]
    api_key: Optional[str]
    api_endpoint: str
    tags: Dict[str, str]

    def as_dict(self) -> Dict[str, Union[str, None]]:
        """
        Convert the configuration to a dictionary safe for logging.

        Returns:
            dict: The configuration with the API key redacted.
        """
        return {
            EMAIL_KEY: self.email,
            API_KEY_KEY: "***" if self.api_key else None,
            API_ENDPOINT_KEY: self.api_endpoint,
            TAGS_KEY: ",".join(f"{k}={v}" for k, v in self.tags.items()) or None,
        }

    def apply(self, client: "Client") -> "Client":
        """
        Copy this configuration onto a client.

        Credentials are only applied when both are present, tags are merged
        into the client's existing tags.
        """
        client.api_endpoint = self.api_endpoint
        if self.email and self.api_key:
            client.authenticate(self.email, self.api_key)
        if self.tags:
            client.add_tags(self.tags)
        return client


def parse_tags(raw: Optional[str], source: str = "unknown") -> Dict[str, str]:
    """
    Parse a ``key=value,key=value`` tag string.

    Args:
        raw (Optional[str]): The raw tag string.
        source (str): The source of the value for logging.

    Returns:
        Dict[str, str]: The parsed tags.

    Raises:
        ValueError: If an entry is not a ``key=value`` pair.
    """
    tags: Dict[str, str] = {}
    if not raw or not raw.strip():
        return tags

    for entry in raw.split(","):
        entry = entry.strip()
        if not entry:
            continue
        key, sep, value = entry.partition("=")
        if not sep or not key.strip():
            logger.error(
                CLIENT_CONFIG_TAGS_INVALID, extra={"entry": entry, "source": source}
            )
            raise ValueError(f"Invalid tag {entry!r}, expected key=value")
        tags[key.strip()] = value.strip()

    return tags


def _client_values_from_env() -> Dict[str, Optional[str]]:
    return {
        EMAIL_KEY: os.environ.get(ENV_EMAIL),
        API_KEY_KEY: os.environ.get(ENV_API_KEY),
        API_ENDPOINT_KEY: os.environ.get(ENV_API_ENDPOINT),
        TAGS_KEY: os.environ.get(ENV_TAGS),
    }


def _client_values_from_config_ini(config_path: Path) -> Dict[str, Optional[str]]:
    """
    Retrieve the client values from the config.ini file.

    Args:
        config_path (Path): The path to the config.ini file.

    Returns:
        Dict[str, Optional[str]]: The raw values, None where not defined.
    """
    config = configparser.ConfigParser()
    config_files = config.read(filenames=[config_path])

    if not config_files or not config.has_section(CLIENT_SECTION_NAME):
        if config_files:
            logger.debug(
                CLIENT_CONFIG_MISSING_SECTION, extra={"config_path": str(config_path)}
            )
        return {}

    section = config[CLIENT_SECTION_NAME]

    return {
        EMAIL_KEY: section.get(EMAIL_KEY, None),
        API_KEY_KEY: section.get(API_KEY_KEY, None),
        API_ENDPOINT_KEY: section.get(API_ENDPOINT_KEY, None),
        TAGS_KEY: section.get(TAGS_KEY, None),
    }


def get_client_config(
    email: Optional[str] = None,
    api_key: Optional[str] = None,
    api_endpoint: Optional[str] = None,
    config_path: Optional[Path] = None,
) -> ClientConfig:
    """
    Resolve the effective client configuration.

    Resolution order, per value (first non-empty wins):
      1. Explicit arguments
      2. Environment variables (LIBRATO_EMAIL, LIBRATO_API_KEY,
         LIBRATO_API_ENDPOINT, LIBRATO_TAGS)
      3. The [librato] section of config.ini
      4. Defaults (no credentials, the public API endpoint, no tags)

    Args:
        email (Optional[str]): The account email.
        api_key (Optional[str]): The API key.
        api_endpoint (Optional[str]): The API endpoint.
        config_path (Optional[Path]): The path to the config.ini file, the
            user config file when omitted.

    Returns:
        ClientConfig: The resolved configuration.

    Raises:
        ValueError: If the configured tags are malformed.
    """
    config_path = config_path or CONFIG
    explicit = {
        EMAIL_KEY: email,
        API_KEY_KEY: api_key,
        API_ENDPOINT_KEY: api_endpoint,
    }
    sources = [
        ("explicit", explicit),
        ("env", _client_values_from_env()),
        ("config", _client_values_from_config_ini(config_path)),
    ]

    resolved: Dict[str, Optional[str]] = {}
    origins: Dict[str, str] = {}
    for source_name, values in sources:
        for key, value in values.items():
            if key not in resolved and value:
                resolved[key] = value
                origins[key] = source_name

    result = ClientConfig(
        email=resolved.get(EMAIL_KEY),
        api_key=resolved.get(API_KEY_KEY),
        api_endpoint=resolved.get(API_ENDPOINT_KEY) or DEFAULT_API_ENDPOINT,
        tags=parse_tags(resolved.get(TAGS_KEY), source=origins.get(TAGS_KEY, "unknown")),
    )

    logger.info(
        CLIENT_CONFIG_RESOLVED,
        extra={
            "config_path": str(config_path),
            "sources": origins,
            **result.as_dict(),
        },
    )
    return result
