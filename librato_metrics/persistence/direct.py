import logging
from typing import Any, Dict, Iterator, List, Optional

from librato_metrics.constants import METRICS_PATH
from librato_metrics.logs_helpers import log_delivery
from .base import Persister

logger = logging.getLogger(__name__)

MEASUREMENT_KEYS = ("gauges", "counters")


def split_payload(
    payload: Dict[str, Any], per_request: Optional[int]
) -> Iterator[Dict[str, Any]]:
    """
    Split a payload into requests of at most ``per_request`` measurements.

    Gauges are emitted before counters. Every other top-level key (tags,
    source, measure_time) is repeated on each request.

    Args:
        payload (Dict[str, Any]): The full payload.
        per_request (Optional[int]): Max measurements per request, None or 0
            sends everything at once.

    Yields:
        Dict[str, Any]: One request body per chunk.
    """
    if not per_request:
        yield payload
        return

    if per_request < 0:
        raise ValueError("per_request must be a positive integer")

    shared = {k: v for k, v in payload.items() if k not in MEASUREMENT_KEYS}
    measurements = [
        (key, entry) for key in MEASUREMENT_KEYS for entry in payload.get(key) or ()
    ]

    for start in range(0, len(measurements), per_request):
        request: Dict[str, Any] = dict(shared)
        for key, entry in measurements[start:start + per_request]:
            chunk: List[Dict[str, Any]] = request.setdefault(key, [])
            chunk.append(entry)
        yield request


class Direct(Persister):
    """
    Sends payloads to the metrics API synchronously.
    """

    @log_delivery()
    def deliver(self, payload: Dict[str, Any], per_request: Optional[int] = None) -> bool:
        connection = self.client.connection
        requests = 0
        for body in split_payload(payload, per_request):
            connection.post(METRICS_PATH, body)
            requests += 1

        logger.debug("Delivered payload in %d request(s)", requests)
        return True
