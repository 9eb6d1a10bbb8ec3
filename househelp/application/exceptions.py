from __future__ import annotations


class BackendError(RuntimeError):
    """Base error for failures talking to the hosted data platform."""

    def __init__(self, message: str, code: str | None = None, status: int | None = None) -> None:
        super().__init__(message)
        self.code = code
        self.status = status


class BackendUpstreamError(BackendError):
    """Raised when the backend is unreachable or answers with an error status."""
    pass


class RecordNotFoundError(BackendUpstreamError):
    """Raised when a single-row read matched no rows (PostgREST PGRST116)."""
    pass


class BackendContractError(BackendError):
    """Raised when the backend answers with a payload we cannot interpret."""
    pass
