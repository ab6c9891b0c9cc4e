"""Error types for variant specification translation and selection.

These are raised immediately and never suppressed here; whether one becomes
an empty result, a user-facing message or a fault is the caller's decision.
"""

__all__ = [
    "ArgumentInvalidError",
    "NoMatchingVersionError",
    "PreconditionFailedError",
]


class ArgumentInvalidError(ValueError):
    """Raised when a required input is missing (None).

    Attributes:
        argument: Name of the offending argument.
    """

    def __init__(self, message: str, *, argument: str) -> None:
        self.argument = argument
        super().__init__(message)


class PreconditionFailedError(ValueError):
    """Raised when a specification is not a standard configuration.

    Distinct from ArgumentInvalidError: the input exists but is in a state
    the operation refuses. ``offending_fields`` names the descriptors that
    hold non-default values.
    """

    def __init__(self, message: str, *, offending_fields: list[str] | None = None) -> None:
        self.offending_fields = list(offending_fields or [])
        super().__init__(message)


class NoMatchingVersionError(LookupError):
    """Raised when a version collection has no candidate for the requested mode."""

    def __init__(self, message: str, *, mode: str | None = None) -> None:
        self.mode = mode
        super().__init__(message)
