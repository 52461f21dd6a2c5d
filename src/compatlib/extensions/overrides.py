"""
Override Resolver

Operator-configured forced choice of a single handler per target. A
configured override is explicit intent: when it names a handler that is not
available the pass is skipped instead of falling back to normal arbitration.
"""

import threading
from typing import Dict, List, Mapping, Optional

from ..core.exceptions import OverrideMiss
from .models import HandlerRegistration


class OverrideTable:
    """Thread-safe mapping of target id to preferred handler description"""

    def __init__(self, overrides: Optional[Mapping[str, str]] = None):
        self._overrides: Dict[str, str] = dict(overrides or {})
        self._lock = threading.Lock()

    def set(self, target_id: str, description: str) -> None:
        with self._lock:
            self._overrides[target_id] = description

    def clear(self, target_id: str) -> bool:
        """Remove the override for a target; returns whether one existed"""
        with self._lock:
            return self._overrides.pop(target_id, None) is not None

    def get(self, target_id: str) -> Optional[str]:
        with self._lock:
            return self._overrides.get(target_id)

    def as_dict(self) -> Dict[str, str]:
        with self._lock:
            return dict(self._overrides)

    def __contains__(self, target_id: str) -> bool:
        return self.get(target_id) is not None


class OverrideResolver:
    """Looks up the override for a target among its enabled handlers"""

    def __init__(self, table: OverrideTable):
        self.table = table

    def resolve(
        self, target_id: str, enabled_handlers: List[HandlerRegistration]
    ) -> Optional[HandlerRegistration]:
        """
        Find the handler an override selects.

        Args:
            target_id: Target being processed
            enabled_handlers: Enabled handlers for the target

        Returns:
            None when no override is configured, otherwise the chosen handler

        Raises:
            OverrideMiss: An override is configured but names no enabled handler
        """
        preferred = self.table.get(target_id)
        if preferred is None:
            return None

        for handler in enabled_handlers:
            if handler.description == preferred:
                return handler

        raise OverrideMiss(
            f"Override handler '{preferred}' not found for mod '{target_id}'; "
            f"skipping compatibility handlers.",
            target_id=target_id,
            details={"override": preferred},
        )
