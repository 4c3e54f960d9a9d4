"""
Client holding the identity, connection and persistence configuration used
to submit metrics.
"""

import logging
import numbers
from typing import Any, Dict, Mapping, Optional

from librato_metrics import connection as connection_factory
from librato_metrics import persistence as persistence_registry
from librato_metrics.config import Settings, settings as default_settings
from librato_metrics.config.log_codes import (
    CONNECTION_FLUSHED,
    CONNECTION_RESOLVED,
    CREDENTIALS_MISSING,
    PERSISTENCE_FLUSHED,
    PERSISTER_RESOLVED,
    SUBMIT,
)
from librato_metrics.constants import DEFAULT_API_ENDPOINT, DEFAULT_PERSISTENCE
from librato_metrics.errors import (
    CredentialsMissing,
    InvalidArgumentError,
    InvalidMeasurement,
    NoMetricsProvided,
)
from librato_metrics.meta import get_user_agent
from librato_metrics.persistence import Persister
from librato_metrics.queue import Queue

logger = logging.getLogger(__name__)


class Client:
    """
    Synchronous client for the metrics API.

    The client is a thin validator and delegator: it stores credentials,
    tags and transport choices, lazily builds a connection and a persister
    from them, and hands submissions to the persister. The cached connection
    is dropped whenever credentials, endpoint or adapter change, the cached
    persister whenever the persistence mode changes.

    A client is not thread safe; callers sharing one must serialize access.

    Args:
        tags (Optional[Mapping[str, str]]): Initial tags.
        settings (Optional[Settings]): Process-wide defaults to consult,
            the module-level ``settings`` when omitted.
    """

    def __init__(
        self,
        tags: Optional[Mapping[str, str]] = None,
        settings: Optional[Settings] = None,
    ):
        self._settings = settings if settings is not None else default_settings
        self._tags: Dict[str, str] = dict(tags) if tags else {}
        self._agent_identifier = ""
        self._api_endpoint = DEFAULT_API_ENDPOINT
        self._email: Optional[str] = None
        self._api_key: Optional[str] = None
        self._adapter: Optional[str] = None
        self._persistence = DEFAULT_PERSISTENCE

        # Derived state, reset to None by the mutators of its inputs
        self._connection: Optional[connection_factory.Connection] = None
        self._persister: Optional[Persister] = None

    # -- Tags --

    @property
    def tags(self) -> Dict[str, str]:
        return self._tags

    @tags.setter
    def tags(self, tags: Optional[Mapping[str, str]]) -> None:
        self._tags = dict(tags) if tags else {}

    def add_tags(self, tags: Mapping[str, str]) -> None:
        """
        Merge ``tags`` into the client's tags, incoming values win.
        """
        self._tags.update(tags)

    def clear_tags(self) -> None:
        self._tags = {}

    def has_tags(self) -> bool:
        return bool(self._tags)

    # -- Agent identifier --

    @property
    def agent_identifier(self) -> str:
        return self._agent_identifier

    def set_agent_identifier(self, *parts: str) -> str:
        """
        Set the identifier of the submitting application.

        Accepts either a single literal string (an empty string clears the
        identifier) or ``name, version, dev_id``, which is composed into
        ``"<name>/<version> (dev_id:<dev_id>)"``.

        Returns:
            str: The new identifier.

        Raises:
            InvalidArgumentError: For any other number of arguments.
        """
        if len(parts) == 1:
            identifier = parts[0]
        elif len(parts) == 3:
            name, version, dev_id = parts
            identifier = f"{name}/{version} (dev_id:{dev_id})"
        else:
            raise InvalidArgumentError(
                "set_agent_identifier takes a single agent string or "
                f"(name, version, dev_id), got {len(parts)} arguments"
            )

        self._agent_identifier = identifier
        self._reset_connection()
        return identifier

    @property
    def user_agent(self) -> str:
        return get_user_agent(self._agent_identifier)

    # -- Endpoint and credentials --

    @property
    def api_endpoint(self) -> str:
        return self._api_endpoint

    @api_endpoint.setter
    def api_endpoint(self, endpoint: str) -> None:
        self._api_endpoint = endpoint
        self._reset_connection()

    @property
    def email(self) -> Optional[str]:
        return self._email

    @property
    def api_key(self) -> Optional[str]:
        return self._api_key

    def authenticate(self, email: str, api_key: str) -> None:
        """
        Store credentials. No connection is attempted.
        """
        self._email, self._api_key = email, api_key
        self._reset_connection()

    def flush_authentication(self) -> None:
        self._email = None
        self._api_key = None
        self._reset_connection()

    # -- Connection --

    @property
    def adapter(self) -> Optional[str]:
        if self._adapter is not None:
            return self._adapter
        return self._settings.default_adapter

    @adapter.setter
    def adapter(self, adapter: Optional[str]) -> None:
        self._adapter = adapter
        self._reset_connection()

    @property
    def connection(self) -> connection_factory.Connection:
        """
        The cached connection, resolved on first access.

        A cached connection built for another adapter, e.g. before the
        process-wide default changed, is closed and rebuilt.

        Raises:
            CredentialsMissing: If email or API key is not set.
        """
        adapter = self.adapter
        if self._connection is not None and self._connection.adapter != adapter:
            self._reset_connection()

        if self._connection is None:
            try:
                self._connection = connection_factory.resolve(
                    email=self._email,
                    api_key=self._api_key,
                    api_endpoint=self._api_endpoint,
                    adapter=adapter,
                    agent_identifier=self._agent_identifier,
                )
            except CredentialsMissing:
                logger.warning(CREDENTIALS_MISSING)
                raise

            logger.debug(
                CONNECTION_RESOLVED,
                extra={"api_endpoint": self._api_endpoint, "adapter": adapter},
            )
        return self._connection

    def _reset_connection(self) -> None:
        if self._connection is not None:
            self._connection.close()
            self._connection = None
            logger.debug(CONNECTION_FLUSHED)

    # -- Persistence --

    @property
    def persistence(self) -> str:
        return self._persistence

    @persistence.setter
    def persistence(self, mode: str) -> None:
        self._persistence = mode
        self._persister = None

    @property
    def persister(self) -> Persister:
        """
        The cached persister for the current persistence mode.

        Raises:
            UnknownPersistenceError: If the mode is not registered.
        """
        if self._persister is None:
            persister_class = persistence_registry.lookup(self._persistence)
            self._persister = persister_class(self)
            logger.debug(PERSISTER_RESOLVED, extra={"mode": self._persistence})
        return self._persister

    def flush_persistence(self) -> None:
        self._persistence = DEFAULT_PERSISTENCE
        self._persister = None
        logger.debug(PERSISTENCE_FLUSHED)

    # -- Submission --

    def new_queue(self, **options: Any) -> Queue:
        return Queue(self, **options)

    def submit(self, metrics: Mapping[str, Any]) -> bool:
        """
        Submit gauges immediately through the current persister.

        Args:
            metrics (Mapping[str, Any]): Metric name to numeric value, in
                the order they should be sent.

        Returns:
            bool: The persister's result, True once handed over.

        Raises:
            NoMetricsProvided: If ``metrics`` is empty.
            InvalidMeasurement: If a value is not numeric.
        """
        if not metrics:
            raise NoMetricsProvided()

        gauges = []
        for name, value in metrics.items():
            if isinstance(value, bool) or not isinstance(value, numbers.Real):
                raise InvalidMeasurement(
                    name=name, reason=f"value {value!r} is not a number"
                )
            gauges.append({"name": str(name), "value": value})

        payload: Dict[str, Any] = {"gauges": gauges}
        if self._tags:
            payload["tags"] = dict(self._tags)

        logger.debug(
            SUBMIT, extra={"measurements": len(gauges), "mode": self._persistence}
        )
        return self.persister.deliver(payload)

    # -- Lifecycle --

    def close(self) -> None:
        self._reset_connection()

    def __enter__(self) -> "Client":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def __repr__(self) -> str:
        return (
            f"Client(email={self._email!r}, api_endpoint={self._api_endpoint!r}, "
            f"persistence={self._persistence!r})"
        )
