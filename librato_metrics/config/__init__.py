from .client import ClientConfig, get_client_config, parse_tags
from .main import Settings, settings

__all__ = [
    "ClientConfig",
    "get_client_config",
    "parse_tags",
    "Settings",
    "settings",
]
