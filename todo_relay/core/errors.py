"""Error taxonomy shared by the HTTP handlers."""

from pydantic import BaseModel


class RelayError(Exception):
    """Base error carrying the HTTP status used in the error envelope."""

    status_code: int = 500

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.message = message
        if status_code is not None:
            self.status_code = status_code


class ClientInputError(RelayError):
    """Raised when a required request field is missing."""

    status_code = 400


class ConfigurationError(RelayError):
    """Raised when a required setting is absent or still a placeholder."""

    status_code = 500


class UpstreamProviderError(RelayError):
    """Raised when the LLM provider or the chat webhook fails."""

    status_code = 500


class ErrorResponse(BaseModel):
    """Error envelope returned by every handler."""

    error: str
