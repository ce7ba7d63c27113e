"""Exception types shared across fittrack."""


class FitTrackError(Exception):
    """Base class for fittrack errors."""


class ConfigError(FitTrackError):
    """Raised when required configuration is missing or invalid."""


class StoreError(FitTrackError):
    """Raised when a call to the remote data store fails.

    Every transport failure, error status and undecodable response is
    reported as this one type; callers notify the user and abandon the
    action.
    """

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code

    def __str__(self) -> str:
        if self.status_code is not None:
            return f"{self.message} (HTTP {self.status_code})"
        return self.message


class RowDecodeError(StoreError):
    """Raised when a row returned by the store does not match its model."""

    def __init__(self, table: str, message: str):
        super().__init__(f"{table}: {message}")
        self.table = table
