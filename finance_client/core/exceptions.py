"""Error types raised by the finance client."""

from typing import Any


class TransportError(Exception):
    """Normalized failure of a call to the finance API.

    ``status`` is 0 for network failures and aborted requests, otherwise the
    HTTP status code returned by the server. ``details`` carries the parsed
    response body when there was one.
    """

    def __init__(self, message: str, status: int = 0, details: Any = None):
        super().__init__(message)
        self.message = message
        self.status = status
        self.details = details

    @classmethod
    def aborted(cls) -> "TransportError":
        return cls("Request aborted", status=0, details=None)

    @classmethod
    def network(cls, exc: BaseException) -> "TransportError":
        return cls(str(exc) or type(exc).__name__, status=0, details=None)

    @classmethod
    def from_response(cls, status: int, data: Any) -> "TransportError":
        message = None
        if isinstance(data, dict):
            for key in ("message", "detail", "error"):
                value = data.get(key)
                if isinstance(value, str) and value:
                    message = value
                    break
        return cls(
            message or f"Request failed with status {status}",
            status=status,
            details=data or None,
        )

    def to_dict(self) -> dict:
        return {"message": self.message, "status": self.status, "details": self.details}

    def __repr__(self) -> str:
        return f"TransportError(message={self.message!r}, status={self.status})"
