from typing import Any, Dict, Optional

from librato_metrics.logs_helpers import log_delivery
from .base import Persister


class Test(Persister):
    """
    Records payloads instead of sending them.

    ``persisted`` holds the most recent payload, ``history`` every payload
    delivered through this persister.
    """

    __test__ = False

    def __init__(self, client):
        super().__init__(client)
        self.persisted: Optional[Dict[str, Any]] = None
        self.history = []

    @log_delivery(show_result=True)
    def deliver(self, payload: Dict[str, Any], **options: Any) -> bool:
        self.persisted = payload
        self.history.append(payload)
        return True
