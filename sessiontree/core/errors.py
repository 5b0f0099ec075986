"""Errors raised by the session-tree core."""


class SessionListingError(RuntimeError):
    """Sessions could not be enumerated from the store."""

    def __init__(self, message: str, *, sessions_dir: str | None = None) -> None:
        super().__init__(message)
        self.sessions_dir = sessions_dir
