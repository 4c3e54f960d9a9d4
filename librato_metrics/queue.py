"""
Client-bound accumulator for deferred submission.
"""

import logging
import numbers
import time
from typing import TYPE_CHECKING, Any, Callable, Dict, List, Mapping, Optional

from librato_metrics.config.log_codes import QUEUE_AUTOSUBMIT, QUEUE_SUBMITTED
from librato_metrics.constants import DEFAULT_MEASUREMENT_TYPE, MEASUREMENT_TYPES
from librato_metrics.errors import InvalidMeasurement, NoMetricsProvided

if TYPE_CHECKING:
    from librato_metrics.client import Client

logger = logging.getLogger(__name__)


class Queue:
    """
    Batches measurements and submits them through its client's persister.

    Args:
        client (Client): The client the queue submits through.
        autosubmit_count (Optional[int]): Submit automatically once this many
            measurements are queued.
        per_request (Optional[int]): Max measurements per HTTP request when
            the persister splits payloads.
        prefix (Optional[str]): Prepended to every metric name as
            ``"<prefix>.<name>"``.
        tags (Optional[Mapping[str, str]]): Tags sent with every submission
            of this queue, merged over the client's tags.
        skip_measurement_times (bool): Leave ``measure_time`` unset so the
            server stamps measurements on arrival.
        clock (Callable[[], float]): Source of measurement times.
    """

    def __init__(
        self,
        client: "Client",
        autosubmit_count: Optional[int] = None,
        per_request: Optional[int] = None,
        prefix: Optional[str] = None,
        tags: Optional[Mapping[str, str]] = None,
        skip_measurement_times: bool = False,
        clock: Callable[[], float] = time.time,
    ):
        self.client = client
        self.autosubmit_count = autosubmit_count
        self.per_request = per_request
        self.prefix = prefix
        self.tags = dict(tags) if tags else {}
        self.skip_measurement_times = skip_measurement_times
        self._clock = clock
        self._gauges: List[Dict[str, Any]] = []
        self._counters: List[Dict[str, Any]] = []

    def add(self, metrics: Mapping[str, Any]) -> "Queue":
        """
        Queue one or more measurements.

        Args:
            metrics: Mapping of metric name to either a number or a dict with
                ``value`` and optional ``type`` ("gauge" or "counter"),
                ``measure_time`` and ``tags``.

        Returns:
            Queue: This queue, for chaining.

        Raises:
            InvalidMeasurement: If a value is not numeric or the type unknown.
        """
        for name, measurement in metrics.items():
            entry, kind = self._build_entry(str(name), measurement)
            if kind == "counter":
                self._counters.append(entry)
            else:
                self._gauges.append(entry)

        if self.autosubmit_count and self.size >= self.autosubmit_count:
            logger.debug(
                QUEUE_AUTOSUBMIT,
                extra={"queued": self.size, "autosubmit_count": self.autosubmit_count},
            )
            self.submit()

        return self

    def _build_entry(self, name: str, measurement: Any):
        options = dict(measurement) if isinstance(measurement, Mapping) else {"value": measurement}

        value = options.pop("value", None)
        if isinstance(value, bool) or not isinstance(value, numbers.Real):
            raise InvalidMeasurement(name=name, reason=f"value {value!r} is not a number")

        kind = options.pop("type", DEFAULT_MEASUREMENT_TYPE)
        if kind not in MEASUREMENT_TYPES:
            raise InvalidMeasurement(name=name, reason=f"unknown type {kind!r}")

        entry: Dict[str, Any] = {
            "name": f"{self.prefix}.{name}" if self.prefix else name,
            "value": value,
        }

        measure_time = options.pop("measure_time", None)
        if measure_time is None and not self.skip_measurement_times:
            measure_time = int(self._clock())
        if measure_time is not None:
            entry["measure_time"] = int(measure_time)

        tags = options.pop("tags", None)
        if tags:
            entry["tags"] = dict(tags)

        if "name" in options:
            raise InvalidMeasurement(name=name, reason="the name is taken from the mapping key")

        entry.update(options)
        return entry, kind

    @property
    def gauges(self) -> List[Dict[str, Any]]:
        return list(self._gauges)

    @property
    def counters(self) -> List[Dict[str, Any]]:
        return list(self._counters)

    @property
    def size(self) -> int:
        return len(self._gauges) + len(self._counters)

    def __len__(self) -> int:
        return self.size

    def is_empty(self) -> bool:
        return self.size == 0

    def clear(self) -> None:
        self._gauges = []
        self._counters = []

    @property
    def queued(self) -> Dict[str, Any]:
        """
        The payload that the next ``submit`` will deliver.
        """
        payload: Dict[str, Any] = {}
        if self._gauges:
            payload["gauges"] = self.gauges
        if self._counters:
            payload["counters"] = self.counters

        tags = {**self.client.tags, **self.tags}
        if tags:
            payload["tags"] = tags

        return payload

    def submit(self) -> bool:
        """
        Deliver everything queued. The queue is emptied only when the
        persister reports success.

        Returns:
            bool: The persister's result.

        Raises:
            NoMetricsProvided: If the queue is empty.
        """
        if self.is_empty():
            raise NoMetricsProvided()

        payload = self.queued
        options = {"per_request": self.per_request} if self.per_request else {}
        delivered = self.client.persister.deliver(payload, **options)
        if delivered:
            logger.debug(QUEUE_SUBMITTED, extra={"measurements": self.size})
            self.clear()
        return delivered

    def __repr__(self) -> str:
        return f"Queue(size={self.size}, prefix={self.prefix!r})"
