import logging
import json
from typing import Callable, Optional, Any, TypeVar
import httpx
from tenacity import (
    retry,
    stop_after_attempt,
    wait_exponential_jitter,
    retry_if_exception_type,
    before_sleep_log,
)

from librato_metrics.errors import (
    ClientError,
    InvalidCredentialError,
    NetworkConnectionError,
    RequestTimeoutError,
    ServerError,
    TooManyRequestsError,
)

F = TypeVar("F", bound=Callable[..., httpx.Response])
logger = logging.getLogger(__name__)


def extract_detail(response: httpx.Response) -> Optional[str]:
    """
    Extract error detail from an HTTP response.

    The metrics API reports failures as ``{"errors": {...}}``; other
    services use ``{"detail": "..."}``. Both are understood.

    Args:
        response: The HTTP response to extract detail from

    Returns:
        The extracted detail message, or None if extraction fails
    """
    try:
        data = response.json()
    except (json.JSONDecodeError, ValueError, AttributeError):
        return None

    if not isinstance(data, dict):
        return None

    errors = data.get("errors")
    if errors:
        return errors if isinstance(errors, str) else json.dumps(errors, sort_keys=True)

    return data.get("detail")


def parse_response(func: F) -> F:
    """
    Decorator for HTTP response parsing with retry logic and error handling.

    Handles authentication, rate limiting, and server errors with automatic
    retries for transient failures.

    Args:
        func: HTTP method to wrap (should return httpx.Response)

    Returns:
        Decorated function that returns parsed JSON data
    """

    @retry(
        stop=stop_after_attempt(3),
        wait=wait_exponential_jitter(initial=0.2, max=8.0, exp_base=3, jitter=0.3),
        reraise=True,
        retry=retry_if_exception_type(
            (
                NetworkConnectionError,
                RequestTimeoutError,
                TooManyRequestsError,
                ServerError,
            )
        ),
        before_sleep=before_sleep_log(logger, logging.WARNING),
    )
    def wrapper(*args, **kwargs) -> Any:
        try:
            response = func(*args, **kwargs)

            if response.is_success:
                return _parse_successful_response(response)

            if response.status_code in (401, 403):
                return _handle_unauthorized(response)
            elif response.status_code == 429:
                return _handle_rate_limit(response)
            elif response.is_client_error:
                return _handle_client_error(response)
            elif response.is_server_error:
                return _handle_server_error(response)

            # Fallback for unexpected status codes
            response.raise_for_status()

        except httpx.ConnectError as e:
            raise NetworkConnectionError() from e

        except httpx.TimeoutException as e:
            raise RequestTimeoutError() from e

    return wrapper  # type: ignore


def _parse_successful_response(response: httpx.Response) -> Any:
    """
    Parse successful JSON response. Metric submissions answer with an
    empty body, which parses to an empty dict.
    """
    if not response.content or not response.content.strip():
        return {}

    try:
        return response.json()
    except json.JSONDecodeError as e:
        logger.error(f"Invalid JSON in successful response: {e}")
        raise ServerError(reason=f"Bad JSON response from server: {e}") from e


def _handle_unauthorized(response: httpx.Response) -> None:
    """
    Handle 401 Unauthorized and 403 Forbidden responses.
    """
    detail = extract_detail(response)
    raise InvalidCredentialError(reason=detail)


def _handle_rate_limit(response: httpx.Response) -> None:
    """
    Handle 429 Too Many Requests.
    """
    logger.warning("Rate limit exceeded")
    raise TooManyRequestsError(reason=response.text)


def _handle_client_error(response: httpx.Response) -> None:
    """
    Handle 4xx client errors.
    """
    reason = extract_detail(response) or response.reason_phrase or "Client error"
    raise ClientError(status_code=response.status_code, reason=reason)


def _handle_server_error(response: httpx.Response) -> None:
    """
    Handle 5xx server errors.
    """
    detail = extract_detail(response)
    logger.warning(f"Server error {response.status_code}: {detail}")
    raise ServerError(reason=detail)
