"""Error taxonomy."""


class SketchUIError(Exception):
    """Base error for the package."""


class CollaboratorError(SketchUIError):
    """An external generation call failed (status, transport, body or empty content)."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class MissingCredentialsError(SketchUIError):
    """Required external credentials are not configured. Aborts the enclosing request."""


class SchemaParseError(SketchUIError):
    """AI-produced text could not be turned into a UI document."""

    def __init__(self, message: str, details: list[str] | None = None) -> None:
        super().__init__(message)
        self.details = details or []


class NoActiveSessionError(SketchUIError):
    """A session-scoped store operation ran without a current session."""


class InvalidTransitionError(SketchUIError, ValueError):
    """An action status change would leave a terminal state."""
