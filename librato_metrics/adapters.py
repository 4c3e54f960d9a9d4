"""
Registry of named HTTP transport adapters.

An adapter is a zero-argument factory returning an ``httpx.BaseTransport``.
Connections look adapters up by name, so alternative transports (mock
transports in tests, proxies, custom TLS setups) can be plugged in without
touching the client.
"""

import logging
from typing import Callable, Dict, List, Optional

import httpx

from librato_metrics.constants import DEFAULT_ADAPTER, TRANSPORT_RETRIES
from librato_metrics.errors import UnknownAdapterError

logger = logging.getLogger(__name__)

AdapterFactory = Callable[[], httpx.BaseTransport]


def _httpx_transport() -> httpx.BaseTransport:
    return httpx.HTTPTransport(retries=TRANSPORT_RETRIES)


_ADAPTERS: Dict[str, AdapterFactory] = {
    DEFAULT_ADAPTER: _httpx_transport,
}


def register_adapter(name: str, factory: AdapterFactory) -> None:
    """
    Register (or replace) a transport factory under ``name``.

    Args:
        name (str): The adapter name.
        factory (AdapterFactory): Callable returning a new transport.
    """
    if not name:
        raise ValueError("Adapter name must not be empty")

    _ADAPTERS[name] = factory
    logger.debug("Registered HTTP adapter %s", name)


def unregister_adapter(name: str) -> None:
    if name == DEFAULT_ADAPTER:
        raise ValueError(f"The built-in {DEFAULT_ADAPTER!r} adapter cannot be removed")

    _ADAPTERS.pop(name, None)


def available_adapters() -> List[str]:
    return sorted(_ADAPTERS)


def get_adapter(name: Optional[str]) -> AdapterFactory:
    """
    Look up a transport factory.

    Args:
        name (Optional[str]): The adapter name, None selects the built-in one.

    Returns:
        AdapterFactory: The registered factory.

    Raises:
        UnknownAdapterError: If nothing is registered under ``name``.
    """
    key = name or DEFAULT_ADAPTER
    try:
        return _ADAPTERS[key]
    except KeyError:
        raise UnknownAdapterError(adapter=key) from None


def build_transport(name: Optional[str]) -> httpx.BaseTransport:
    return get_adapter(name)()
