"""
Version Gate

Decides whether a handler pinned to a target version may run against the
version the host reports for that target.
"""

from typing import Optional

from ..core.exceptions import VersionMismatch
from .models import HandlerRegistration


class VersionGate:
    """Exact string match between required and detected target versions"""

    def allows(self, registration: HandlerRegistration, actual_version: Optional[str]) -> bool:
        if registration.compatible_version is None:
            return True
        return registration.compatible_version == actual_version

    def require(self, registration: HandlerRegistration, actual_version: Optional[str]) -> None:
        """
        Raise VersionMismatch when the registration may not run.

        Args:
            registration: Handler being considered
            actual_version: Version reported by the host, or "unknown"
        """
        if self.allows(registration, actual_version):
            return

        raise VersionMismatch(
            f"Skipping handler '{registration.label}' for '{registration.target_id}': "
            f"requires version {registration.compatible_version}, "
            f"detected {actual_version}",
            target_id=registration.target_id,
            details={
                "required": registration.compatible_version,
                "detected": actual_version,
            },
        )
