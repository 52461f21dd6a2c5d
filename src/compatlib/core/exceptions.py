"""
CompatLib Exception Hierarchy

Defines the error taxonomy used by the compatibility engine. Every
CompatibilityError is recovered inside the engine and surfaces only as a
diagnostics entry at the level it declares.
"""

from typing import Any, Dict, Optional


class CompatLibException(Exception):
    """Base exception for all CompatLib errors."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None) -> None:
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        if self.details:
            return f"{self.message} (Details: {self.details})"
        return self.message


class ConfigurationError(CompatLibException, ValueError):
    """Configuration-related errors."""

    pass


class CompatibilityError(CompatLibException):
    """Base class for errors recovered locally by the compatibility engine."""

    level = "warning"

    def __init__(
        self,
        message: str,
        target_id: str,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        super().__init__(message, details)
        self.target_id = target_id

    def __str__(self) -> str:
        # Diagnostics entries carry the bare message
        return self.message


class ConfigurationConflict(CompatibilityError):
    """Mutually exclusive handlers registered for one target."""

    level = "conflict"


class OverrideMiss(CompatibilityError):
    """Configured override names a handler that is absent or disabled."""

    pass


class VersionMismatch(CompatibilityError):
    """Handler's required version disagrees with the detected version."""

    pass


class MissingDependency(CompatibilityError):
    """Declared dependency has no registrations or re-enters an in-progress target."""

    pass


class HandlerFault(CompatibilityError):
    """A handler callback raised while being applied."""

    level = "conflict"

    def __init__(
        self,
        message: str,
        target_id: str,
        cause: Optional[BaseException] = None,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        super().__init__(message, target_id, details)
        self.cause = cause


class LookupFault(CompatibilityError):
    """The host extension loader failed while answering a lookup."""

    pass
