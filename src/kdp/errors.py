"""Error types for the KDP client."""

__all__ = ["KdpRequestError", "KdpResponseValidationError"]


class KdpRequestError(RuntimeError):
    """Raised when KDP answers with a non-success status code."""

    def __init__(self, *, status_code: int, body: str) -> None:
        self.status_code = status_code
        self.body = body
        super().__init__(
            f"Error from KDP with status code {status_code} and message: {body}"
        )


class KdpResponseValidationError(ValueError):
    """Raised when a successful KDP response lacks the expected payload."""
