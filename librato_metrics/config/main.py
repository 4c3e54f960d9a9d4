"""
Process-wide settings shared by every client.
"""

import logging
from typing import Optional

from .log_codes import SETTINGS_DEFAULT_ADAPTER_SET, SETTINGS_RESET

logger = logging.getLogger(__name__)


class Settings:
    """
    Mutable defaults consulted by clients that carry no per-instance override.

    A single module-level instance, ``settings``, is used by default. Clients
    accept another instance so tests can isolate themselves from it.
    """

    def __init__(self, default_adapter: Optional[str] = None):
        self._default_adapter = default_adapter

    @property
    def default_adapter(self) -> Optional[str]:
        return self._default_adapter

    @default_adapter.setter
    def default_adapter(self, adapter: Optional[str]) -> None:
        self._default_adapter = adapter
        logger.debug(SETTINGS_DEFAULT_ADAPTER_SET, extra={"adapter": adapter})

    def reset(self) -> None:
        """
        Return every setting to its unset state.
        """
        self._default_adapter = None
        logger.debug(SETTINGS_RESET)

    def __repr__(self) -> str:
        return f"Settings(default_adapter={self._default_adapter!r})"


settings = Settings()
