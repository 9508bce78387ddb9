from __future__ import annotations


class RestClientError(Exception):
    """Base client error."""


class ConfigurationError(RestClientError):
    """Client cannot be built: no transport and no auth to build one from."""

    MESSAGE = "No configuration provided."

    def __init__(self, message: str = MESSAGE):
        super().__init__(message)


class RequestError(RestClientError):
    """A failed call, carrying the normalized ``{error, status}`` shape."""

    def __init__(self, error: str, status: int = 0):
        super().__init__(error)
        self.error = error
        self.status = status

    def as_dict(self) -> dict[str, object]:
        return {"error": self.error, "status": self.status}

    def __eq__(self, other: object) -> bool:
        if isinstance(other, RequestError):
            return type(self) is type(other) and self.as_dict() == other.as_dict()
        if isinstance(other, dict):
            return self.as_dict() == other
        return NotImplemented

    def __hash__(self) -> int:
        return hash((type(self), self.error, self.status))

    def __repr__(self) -> str:
        return f"{type(self).__name__}(error={self.error!r}, status={self.status!r})"


class TransportFailure(RequestError):
    """Transport/network layer error."""


class EmptyResponse(RequestError):
    MESSAGE = "Empty response"

    def __init__(self, error: str = MESSAGE, status: int = 0):
        super().__init__(error, status)


class UnsuccessfulResponse(RequestError):
    """Response came back with ``ok`` unset or false."""

    FALLBACK_MESSAGE = "Unknown error"
