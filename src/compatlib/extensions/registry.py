"""
Registration Store

Holds, per target extension id, the ordered handler registrations contributed
by other extensions. Registrations are only ever appended or disabled.
"""

import dataclasses
import threading
from typing import Dict, List, Optional, Tuple
from uuid import UUID

from .models import HandlerRegistration


class RegistrationStore:
    """
    Thread-safe mapping of target id to registrations in insertion order.

    Readers always receive snapshots, so a registration is visible either
    fully or not at all and concurrent appends never disturb iteration.
    """

    def __init__(self):
        self._registrations: Dict[str, List[HandlerRegistration]] = {}
        self._lock = threading.Lock()

    def register(self, registration: HandlerRegistration) -> HandlerRegistration:
        """
        Append a registration to the list for its target.

        Args:
            registration: Fully built registration

        Returns:
            The stored registration
        """
        with self._lock:
            self._registrations.setdefault(registration.target_id, []).append(
                registration
            )
        return registration

    def for_target(self, target_id: str) -> List[HandlerRegistration]:
        """Registrations for one target, in registration order"""
        with self._lock:
            return list(self._registrations.get(target_id, ()))

    def enabled_for_target(self, target_id: str) -> List[HandlerRegistration]:
        """Enabled registrations for one target, in registration order"""
        return [r for r in self.for_target(target_id) if r.enabled]

    def all_registrations(self) -> Tuple[HandlerRegistration, ...]:
        """
        Flattened read-only snapshot of every registration.

        Entries are copies; toggling them has no effect on the store.
        """
        with self._lock:
            return tuple(
                dataclasses.replace(
                    registration, dependencies=list(registration.dependencies)
                )
                for registrations in self._registrations.values()
                for registration in registrations
            )

    def targets(self) -> List[str]:
        """Target ids in order of first registration"""
        with self._lock:
            return list(self._registrations)

    def has_target(self, target_id: str) -> bool:
        with self._lock:
            return bool(self._registrations.get(target_id))

    def set_enabled(self, target_id: str, description: str, enabled: bool) -> bool:
        """
        Toggle the first registration matching target and description.

        Descriptions are not guaranteed unique; only the first match in store
        order is updated. No match is a silent no-op.

        Returns:
            True if a registration was updated
        """
        with self._lock:
            for registration in self._registrations.get(target_id, ()):
                if registration.description == description:
                    registration.enabled = enabled
                    return True
        return False

    def set_enabled_by_id(self, handler_id: UUID, enabled: bool) -> bool:
        """Toggle the registration with the given generated id"""
        registration = self.get(handler_id)
        if registration is None:
            return False
        with self._lock:
            registration.enabled = enabled
        return True

    def get(self, handler_id: UUID) -> Optional[HandlerRegistration]:
        with self._lock:
            for registrations in self._registrations.values():
                for registration in registrations:
                    if registration.handler_id == handler_id:
                        return registration
        return None

    def __len__(self) -> int:
        with self._lock:
            return sum(len(r) for r in self._registrations.values())
