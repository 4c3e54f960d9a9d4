from typing import Optional


class MetricsError(Exception):
    """
    Generic librato-metrics error.

    Args:
        message (str): The error message.
    """
    def __init__(self, message: str = "An error occurred while submitting metrics.\n"
                                      "Please check your configuration and try again."):
        self.message = message
        super().__init__(self.message)


class CredentialsMissing(MetricsError):
    """
    Error raised when a connection is requested before credentials are set.

    Args:
        message (str): The error message.
    """
    def __init__(self, message: str = "Credentials missing: both an email and an API key are required.\n"
                                      "Call authenticate(email, api_key) before connecting."):
        self.message = message
        super().__init__(self.message)


class InvalidArgumentError(MetricsError, ValueError):
    """
    Error raised when an operation receives an unsupported argument shape.

    Args:
        message (str): The error message.
    """
    def __init__(self, message: str = "Invalid arguments."):
        self.message = message
        super().__init__(self.message)


class UnknownPersistenceError(MetricsError, ValueError):
    """
    Error raised when no persister is registered for a persistence mode.

    Args:
        mode (Optional[str]): The requested persistence mode.
        message (str): The error message template.
    """
    def __init__(self, mode: Optional[str] = None,
                 message: str = "Unknown persistence mode: {mode!r}"):
        self.mode = mode
        self.message = message.format(mode=mode)
        super().__init__(self.message)


class UnknownAdapterError(MetricsError, ValueError):
    """
    Error raised when no HTTP adapter is registered under a name.

    Args:
        adapter (Optional[str]): The requested adapter name.
        message (str): The error message template.
    """
    def __init__(self, adapter: Optional[str] = None,
                 message: str = "Unknown HTTP adapter: {adapter!r}"):
        self.adapter = adapter
        self.message = message.format(adapter=adapter)
        super().__init__(self.message)


class NoMetricsProvided(MetricsError):
    """
    Error raised when a submission contains no measurements.
    """
    def __init__(self, message: str = "No metrics provided: nothing to submit."):
        self.message = message
        super().__init__(self.message)


class InvalidMeasurement(MetricsError, ValueError):
    """
    Error raised when a measurement cannot be queued.

    Args:
        name (Optional[str]): The metric name.
        reason (Optional[str]): The reason for the error.
        message (str): The error message template.
    """
    def __init__(self, name: Optional[str] = None, reason: Optional[str] = None,
                 message: str = "Invalid measurement for metric {name!r}."):
        self.name = name
        self.message = message.format(name=name)
        if reason:
            self.message += f"\nDetails: {reason}"
        super().__init__(self.message)


class NetworkError(MetricsError):
    """
    Base error for failures talking to the metrics API.
    """
    def __init__(self, message: str = "Unable to deliver metrics to the API.\n"
                                      "Please check your internet connection and try again."):
        self.message = message
        super().__init__(self.message)


class InvalidCredentialError(NetworkError):
    """
    Error raised when the API rejects the credentials.

    Args:
        credential (Optional[str]): The rejected credential.
        message (str): The error message template.
        reason (Optional[str]): The reason for the error.
    """

    def __init__(self, credential: Optional[str] = None,
                 message: str = "Authentication failed: Your credential{credential}is invalid.\n"
                                "Please verify your email and API key and try again.",
                 reason: Optional[str] = None):
        self.credential = credential
        credential_text = f" '{self.credential}' " if self.credential else " "
        self.message = message.format(credential=credential_text)
        if reason:
            self.message += f"\nDetails: {reason}"
        super().__init__(self.message)


class TooManyRequestsError(NetworkError):
    """
    Error raised when too many requests are made to the server.

    Args:
        reason (Optional[str]): The reason for the error.
        message (str): The error message template.
    """
    def __init__(self, reason: Optional[str] = None,
                 message: str = "Rate limit exceeded: Too many requests sent to the server.\n"
                                "Please wait a few moments before trying again."):
        self.message = message
        if reason:
            self.message += f"\nDetails: {reason}"
        super().__init__(self.message)


class NetworkConnectionError(NetworkError):
    """
    Error raised when there is a network connection issue.
    """

    def __init__(self, message: str = "Network connection error: Unable to reach the server.\n"
                                      "Please check your internet connection and try again."):
        self.message = message
        super().__init__(self.message)


class RequestTimeoutError(NetworkError):
    """
    Error raised when a request times out.
    """
    def __init__(self, message: str = "Request timed out: The server did not respond in time.\n"
                                      "Please try again. If the problem persists, check your network settings."):
        self.message = message
        super().__init__(self.message)


class ServerError(NetworkError):
    """
    Error raised when there is a server issue.

    Args:
        reason (Optional[str]): The reason for the error.
        message (str): The error message template.
    """
    def __init__(self, reason: Optional[str] = None,
                 message: str = "Server error: The metrics API failed to process the request.\n"
                                "Please try again in a few minutes."):
        self.message = message
        if reason:
            self.message += f"\nDetails: {reason}"
        super().__init__(self.message)


class ClientError(NetworkError):
    """
    Error raised when the API rejects a request as malformed.

    Args:
        status_code (Optional[int]): The HTTP status code.
        reason (Optional[str]): The reason for the error.
        message (str): The error message template.
    """
    def __init__(self, status_code: Optional[int] = None, reason: Optional[str] = None,
                 message: str = "Request rejected by the metrics API (HTTP {status_code})."):
        self.status_code = status_code
        self.reason = reason
        self.message = message.format(status_code=status_code)
        if reason:
            self.message += f"\nDetails: {reason}"
        super().__init__(self.message)
