"""Error taxonomy shared by the service layers and the HTTP surface."""


class WeatherDeskError(Exception):
    """Base class for errors that map to a JSON error response."""

    http_status = 500

    def __init__(self, message: str, details: str | None = None):
        super().__init__(message)
        self.message = message
        self.details = details

    def to_dict(self) -> dict:
        body = {"error": self.message}
        if self.details:
            body["details"] = self.details
        return body


class InputValidationError(WeatherDeskError):
    """Raised for malformed coordinates or an empty city."""

    http_status = 400


class UpstreamUnavailableError(WeatherDeskError):
    """Raised when the weather provider errors or returns non-success."""

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        code: str | None = None,
    ):
        super().__init__(message)
        self.status_code = status_code
        self.code = code
        self.http_status = status_code if status_code and status_code >= 400 else 500

    def to_dict(self) -> dict:
        body = super().to_dict()
        if self.code:
            body["code"] = self.code
        return body


class UpstreamDataShapeError(WeatherDeskError):
    """Raised when a successful provider response lacks expected fields."""


class PersistenceError(WeatherDeskError):
    """Raised when the history store cannot be read or written."""

    def to_dict(self) -> dict:
        # driver messages can name files and tables
        return {"error": self.message}


class ConfigError(WeatherDeskError):
    """Raised when the service configuration is unusable."""
