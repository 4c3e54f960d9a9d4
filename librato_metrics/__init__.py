# -*- coding: utf-8 -*-

__author__ = """librato-metrics contributors"""

import os
from typing import Any, Mapping, Optional

ROOT = os.path.dirname(os.path.abspath(__file__))

with open(os.path.join(ROOT, 'VERSION')) as version_file:
    VERSION = version_file.read().strip()

from .client import Client  # noqa: E402
from .config import get_client_config, settings  # noqa: E402
from .errors import (  # noqa: E402
    CredentialsMissing,
    InvalidArgumentError,
    MetricsError,
    NoMetricsProvided,
    UnknownAdapterError,
    UnknownPersistenceError,
)
from .queue import Queue  # noqa: E402

_client: Optional[Client] = None


def default_client() -> Client:
    """
    The shared module-level client, configured from the environment and
    config.ini on first use.
    """
    global _client
    if _client is None:
        _client = get_client_config().apply(Client())
    return _client


def authenticate(email: str, api_key: str) -> None:
    default_client().authenticate(email, api_key)


def submit(metrics: Mapping[str, Any]) -> bool:
    return default_client().submit(metrics)


def new_queue(**options: Any) -> Queue:
    return default_client().new_queue(**options)


def set_default_adapter(adapter: Optional[str]) -> None:
    """
    Set the adapter used by every client without its own override.
    """
    settings.default_adapter = adapter


def reset() -> None:
    """
    Close and forget the shared client and reset process-wide settings.
    """
    global _client
    if _client is not None:
        _client.close()
    _client = None
    settings.reset()


__all__ = [
    "VERSION",
    "Client",
    "Queue",
    "CredentialsMissing",
    "InvalidArgumentError",
    "MetricsError",
    "NoMetricsProvided",
    "UnknownAdapterError",
    "UnknownPersistenceError",
    "default_client",
    "authenticate",
    "submit",
    "new_queue",
    "set_default_adapter",
    "reset",
]
