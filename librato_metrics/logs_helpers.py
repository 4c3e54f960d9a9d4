import functools
import logging
import time
from typing import Any, Dict


def count_measurements(payload: Dict[str, Any]) -> int:
    """
    Count the gauges and counters carried by a submission payload.
    """
    return sum(len(payload.get(key) or ()) for key in ("gauges", "counters"))


def log_delivery(*, show_result=False):
    """
    Debug-logging decorator for persister ``deliver`` methods.

    Logs the persister name, the number of measurements handed over and
    the elapsed time. Failures are logged and re-raised untouched.

    Args:
        show_result: Log return value (default: False)
    """

    def decorator(func):
        logger = logging.getLogger(func.__module__)

        @functools.wraps(func)
        def wrapper(persister, payload, *args, **kwargs):
            name = type(persister).__name__
            if logger.isEnabledFor(logging.DEBUG):
                logger.debug(
                    "-> %s.%s(%d measurements)",
                    name,
                    func.__name__,
                    count_measurements(payload),
                )

            started = time.monotonic()
            try:
                result = func(persister, payload, *args, **kwargs)
            except Exception as e:
                logger.error("%s.%s failed: %s", name, func.__name__, e)
                raise

            if logger.isEnabledFor(logging.DEBUG):
                elapsed_ms = (time.monotonic() - started) * 1000
                if show_result:
                    logger.debug(
                        "<- %s.%s => %r (%.1fms)", name, func.__name__, result, elapsed_ms
                    )
                else:
                    logger.debug("<- %s.%s (%.1fms)", name, func.__name__, elapsed_ms)

            return result

        return wrapper

    return decorator
