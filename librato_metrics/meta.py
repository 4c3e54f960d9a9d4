from importlib.metadata import PackageNotFoundError, version
import logging
import platform
from typing import Dict, Optional

import httpx


LOG = logging.getLogger(__name__)

DISTRIBUTION_NAME = "librato-metrics"


def get_version() -> Optional[str]:
    """
    Get the version of the librato-metrics package.

    Returns:
      Optional[str]: The installed version if found, otherwise None.
    """
    try:
        return version(DISTRIBUTION_NAME)
    except PackageNotFoundError:
        LOG.debug("Unable to get librato-metrics version.")
        return None


def _normalize_arch(machine: str) -> str:
    if machine in ("x86_64", "AMD64"):
        return "x86_64"
    elif machine in ("arm64", "aarch64"):
        return "arm_64"
    elif machine == "i386":
        return "x86"
    return machine or "unknown"


def get_user_agent(agent_identifier: str = "") -> str:
    """
    Get the user agent string for HTTP requests.

    Args:
      agent_identifier (str): Optional identifier of the submitting application,
        prepended when not empty.

    Returns:
      str: The user agent string in the format:
        [{agent} ]librato-metrics/{version} ({os} {arch}; Python/{python_version}) httpx/{httpx_version}
    """
    lib_version = get_version() or "unknown"
    os_name = platform.system()
    arch = _normalize_arch(platform.machine())
    python_version = platform.python_version()

    user_agent = (
        f"{DISTRIBUTION_NAME}/{lib_version} ({os_name} {arch}; Python/{python_version})"
        f" httpx/{httpx.__version__}"
    )

    if agent_identifier:
        return f"{agent_identifier} {user_agent}"

    return user_agent


def get_meta_http_headers(agent_identifier: str = "") -> Dict[str, str]:
    """
    Get the metadata headers for the client.

    Returns:
      Dict[str, str]: The metadata headers.
    """
    return {
        "User-Agent": get_user_agent(agent_identifier),
    }
