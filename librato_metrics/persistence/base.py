from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any, Dict

if TYPE_CHECKING:
    from librato_metrics.client import Client


class Persister(ABC):
    """
    Strategy responsible for delivering or storing a submission payload.

    A persister is created by the client it serves and keeps a reference
    to it, so it can reach the client's connection when it needs one.
    """

    def __init__(self, client: "Client"):
        self.client = client

    @abstractmethod
    def deliver(self, payload: Dict[str, Any], **options: Any) -> bool:
        """
        Deliver a payload of the shape ``{"gauges": [...], "counters": [...]}``.

        Returns:
            bool: True once the payload has been handed over.
        """
        raise NotImplementedError
