"""
ATOL Online — Error taxonomy

AtolError
├── DocumentValidationError   local document problem, never retried
│   └── MissingFieldError     required field unset at serialization
├── TransportError            connection-level failure, never retried
└── ServiceError              structured error returned by ATOL
    ├── AuthError             token acquisition failed
    └── ClientError           any other server error
        └── ResponseFormatError
"""

from typing import Optional


class AtolError(Exception):
    """Base class for every error raised by the client."""
    def __init__(self, message: str, response: dict = None):
        self.message = message
        self.response = response or {}
        super().__init__(self.message)


class DocumentValidationError(AtolError, ValueError):
    """Raised when a document cannot be serialized."""


class MissingFieldError(DocumentValidationError):
    """Raised by serialize() when a required field was never set."""
    def __init__(self, model: str, field: str):
        self.model = model
        self.field = field
        super().__init__(f"{model}: {field} required")


class TransportError(AtolError):
    """Raised when the HTTP exchange itself fails (DNS, connect, timeout)."""
    def __init__(self, message: str, url: Optional[str] = None):
        self.url = url
        super().__init__(message)


class ServiceError(AtolError):
    """An `error` object returned by the service."""
    def __init__(self, message: str, error_id: Optional[str] = None,
                 code: Optional[int] = None, text: Optional[str] = None,
                 response: dict = None):
        self.error_id = error_id
        self.code = code
        self.text = text
        super().__init__(message, response=response)

    @classmethod
    def from_error(cls, error, response: dict = None):
        """Build from a parsed ErrorInfo, keeping the original message format."""
        return cls(
            f"{error.error_id} - {error.text}",
            error_id=error.error_id,
            code=error.code,
            text=error.text,
            response=response,
        )


class AuthError(ServiceError):
    """Raised when getToken is rejected or returns no token."""


class ClientError(ServiceError):
    """Raised for any structured server error outside token acquisition."""


class ResponseFormatError(ClientError):
    """Raised when the service answers with something that is not a valid envelope."""
