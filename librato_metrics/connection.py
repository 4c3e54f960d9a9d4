"""
HTTP connection to the metrics API.

A :class:`Connection` is built from a client's credentials, endpoint and
adapter by :func:`resolve`. It owns one ``httpx.Client`` and is closed by
the client whenever any of those inputs change.

Besides the ``post`` used for submissions, ``get`` is public API for
callers reading back from the metrics API over the same authenticated
connection.
"""

import logging
from typing import Any, Dict, Optional

import httpx

from librato_metrics.adapters import build_transport
from librato_metrics.constants import REQUEST_TIMEOUT
from librato_metrics.errors import CredentialsMissing
from librato_metrics.meta import get_meta_http_headers
from .http_utils import parse_response

logger = logging.getLogger(__name__)


class Connection:
    """
    Authenticated HTTP connection to the metrics API.

    Requests use HTTP Basic auth with the account email as user name and
    the API key as password.
    """

    def __init__(
        self,
        email: str,
        api_key: str,
        api_endpoint: str,
        adapter: Optional[str] = None,
        agent_identifier: str = "",
        timeout: Optional[float] = REQUEST_TIMEOUT,
    ):
        self.email = email
        self.api_endpoint = api_endpoint
        self.adapter = adapter
        self._timeout = timeout
        self._http_client = httpx.Client(
            base_url=api_endpoint,
            auth=httpx.BasicAuth(email, api_key),
            headers=self._get_headers(agent_identifier),
            timeout=httpx.Timeout(timeout),
            transport=build_transport(adapter),
        )

    def _get_headers(self, agent_identifier: str) -> Dict[str, str]:
        headers = {
            "Content-Type": "application/json",
            "Accept": "application/json",
        }
        headers.update(get_meta_http_headers(agent_identifier))

        return headers

    @property
    def user_agent(self) -> str:
        return self._http_client.headers["User-Agent"]

    @property
    def is_closed(self) -> bool:
        return self._http_client.is_closed

    @parse_response
    def post(self, path: str, payload: Dict[str, Any]) -> Any:
        """
        POST a JSON payload.

        Args:
            path (str): Path relative to the API endpoint.
            payload (Dict[str, Any]): The JSON body.

        Returns:
            Any: The decoded response body.
        """
        return self._http_client.post(url=path, json=payload)

    @parse_response
    def get(self, path: str, params: Optional[Dict[str, Any]] = None) -> Any:
        return self._http_client.get(url=path, params=params)

    def close(self) -> None:
        self._http_client.close()

    def __enter__(self) -> "Connection":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def __repr__(self) -> str:
        return (
            f"Connection(email={self.email!r}, api_endpoint={self.api_endpoint!r}, "
            f"adapter={self.adapter!r})"
        )


def resolve(
    email: Optional[str],
    api_key: Optional[str],
    api_endpoint: str,
    adapter: Optional[str] = None,
    agent_identifier: str = "",
    timeout: Optional[float] = REQUEST_TIMEOUT,
) -> Connection:
    """
    Build a connection for the given credentials.

    Args:
        email (Optional[str]): The account email.
        api_key (Optional[str]): The API key.
        api_endpoint (str): Base URL of the metrics API.
        adapter (Optional[str]): Name of the HTTP adapter to use.
        agent_identifier (str): Identifier prepended to the User-Agent.
        timeout (Optional[float]): Request timeout in seconds.

    Returns:
        Connection: The new connection.

    Raises:
        CredentialsMissing: If either credential is absent.
        UnknownAdapterError: If ``adapter`` is not registered.
    """
    if not email or not api_key:
        raise CredentialsMissing()

    return Connection(
        email=email,
        api_key=api_key,
        api_endpoint=api_endpoint,
        adapter=adapter,
        agent_identifier=agent_identifier,
        timeout=timeout,
    )
