class GreenCycleError(Exception):
    """Base class for all exceptions in greencycle-client."""


class ApiError(GreenCycleError):
    """Exception raised when the upstream API request fails."""

    def __init__(
        self, message: str, *, status_code: int | None = None, url: str | None = None
    ) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.url = url


class NotFoundError(ApiError):
    """Exception raised when the upstream API answers 404."""


class ApiConnectionError(ApiError):
    """Exception raised when the upstream API cannot be reached."""


class ResponseValidationError(GreenCycleError):
    """Exception raised when an API payload does not match its schema."""

    def __init__(self, message: str, *, url: str | None = None) -> None:
        super().__init__(message)
        self.url = url
