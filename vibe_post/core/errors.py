from typing import Any, Dict, Optional


class VibePostError(Exception):
    """Base class for errors that are returned to the caller as JSON."""

    status_code = 500

    def __init__(
        self,
        error: str,
        details: Any = None,
        debug: Optional[Dict[str, Any]] = None,
        **extra: Any,
    ):
        super().__init__(error)
        self.error = error
        self.details = details
        self.debug = debug
        self.extra = extra

    def to_dict(self) -> Dict[str, Any]:
        body: Dict[str, Any] = {"error": self.error}
        if self.details is not None:
            body["details"] = self.details
        if self.debug is not None:
            body["debug"] = self.debug
        body.update(self.extra)
        return body


class ClientInputError(VibePostError):
    """A required request field is missing or invalid."""

    status_code = 400


class NotFoundError(VibePostError):
    status_code = 404


class UpstreamError(VibePostError):
    """An external API answered with a non-success status."""

    status_code = 502

    def __init__(self, error: str, status: int, **kwargs: Any):
        super().__init__(error, status=status, **kwargs)
        self.status = status


class ServerError(VibePostError):
    status_code = 500


class StorageError(Exception):
    """Raised by token stores when the datastore reports an error."""

    def __init__(self, message: str, code: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.code = code

    @property
    def is_duplicate_key(self) -> bool:
        return "duplicate key value" in (self.message or "")
