# -*- coding: utf-8 -*-
from pathlib import Path

DIR_NAME = ".librato"


def get_user_dir() -> Path:
    """
    Get the user directory for the librato-metrics configuration.

    Returns:
        Path: The user directory path.
    """
    path = Path("~", DIR_NAME).expanduser()
    return path


USER_CONFIG_DIR = get_user_dir()

CONFIG_FILE_NAME = "config.ini"
CONFIG = USER_CONFIG_DIR / CONFIG_FILE_NAME

DEFAULT_API_ENDPOINT = "https://metrics-api.librato.com"
METRICS_PATH = "/v1/metrics"

DEFAULT_PERSISTENCE = "direct"
DEFAULT_ADAPTER = "httpx"

REQUEST_TIMEOUT = 30
TRANSPORT_RETRIES = 1

MEASUREMENT_TYPES = ("gauge", "counter")
DEFAULT_MEASUREMENT_TYPE = "gauge"

# Environment variables
ENV_EMAIL = "LIBRATO_EMAIL"
ENV_API_KEY = "LIBRATO_API_KEY"
ENV_API_ENDPOINT = "LIBRATO_API_ENDPOINT"
ENV_TAGS = "LIBRATO_TAGS"
