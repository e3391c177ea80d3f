# Este archivo define la jerarquía de excepciones del servidor de imagen estática.

"""
Custom exception hierarchy for Logo Server.

Each exception carries a context dict for structured logging.
"""


class LogoServerError(Exception):
    """Base exception for all Logo Server errors."""

    def __init__(self, message: str, context: dict = None):
        self.context = context or {}
        super().__init__(message)


class StartupError(LogoServerError):
    """Raised when the listening socket cannot be bound."""
    pass


class ServerStateError(LogoServerError):
    """Raised when a lifecycle operation is invalid for the current state."""
    pass


class ConfigurationError(LogoServerError):
    """Raised when configuration is invalid."""
    pass


class RequestFailure(LogoServerError):
    """Base exception for failures scoped to a single request."""

    status_code = 500


class ImageNotFoundError(RequestFailure):
    """Raised when the configured image does not exist."""

    status_code = 404


class ImageReadError(RequestFailure):
    """Raised when the configured image exists but cannot be read."""
    pass
