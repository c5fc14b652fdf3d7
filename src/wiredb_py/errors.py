from __future__ import annotations


class WiredbPyError(Exception):
    pass


class EncodeError(WiredbPyError):
    pass


class DecodeError(WiredbPyError):
    pass


class TransportError(WiredbPyError):
    pass


class ServiceError(WiredbPyError):
    def __init__(self, *, code: str, message: str = "", status: int | None = None) -> None:
        super().__init__(f"{code}: {message}" if message else code)
        self.code = code
        self.message = message
        self.status = status


class ConditionFailedError(ServiceError):
    pass


class ValidationError(ServiceError):
    pass


class NotFoundError(ServiceError):
    pass


class ThrottledError(ServiceError):
    pass


class ServerError(ServiceError):
    pass


class RetryExhaustedError(WiredbPyError):
    """Raised instead of the last retryable error once the attempt cap is reached.

    A throttled or 5xx call that never succeeds surfaces as this error, not as
    ``ThrottledError`` or ``ServerError``. The last error is kept on
    ``last_error`` (and as ``__cause__``); ``code`` repeats its identifier.
    """

    def __init__(self, *, operation: str, attempts: int, last_error: Exception) -> None:
        super().__init__(f"{operation}: retry limit exceeded after {attempts} attempts ({last_error})")
        self.operation = operation
        self.attempts = attempts
        self.last_error = last_error

    @property
    def code(self) -> str:
        if isinstance(self.last_error, ServiceError):
            return self.last_error.code
        return type(self.last_error).__name__
