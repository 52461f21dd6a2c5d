"""
Conflict & Exclusivity Evaluator

Orders the active handlers for a target and rejects sets that combine a
mutually exclusive handler with any other handler.
"""

from typing import Iterable, List

from ..core.exceptions import ConfigurationConflict
from .models import HandlerRegistration


def order_by_priority(handlers: Iterable[HandlerRegistration]) -> List[HandlerRegistration]:
    """Stable sort by priority, highest first; ties keep registration order"""
    return sorted(handlers, key=lambda r: r.priority, reverse=True)


class ExclusivityEvaluator:
    """Checks whether an enabled handler set for one target may run"""

    def is_runnable(self, handlers: List[HandlerRegistration]) -> bool:
        if len(handlers) < 2:
            return True
        return not any(h.mutually_exclusive for h in handlers)

    def ensure_runnable(self, target_id: str, handlers: List[HandlerRegistration]) -> None:
        """
        Raise ConfigurationConflict if the set cannot run.

        Args:
            target_id: Target being processed
            handlers: Enabled handlers, already ordered
        """
        if self.is_runnable(handlers):
            return

        exclusive = [h.label for h in handlers if h.mutually_exclusive]
        raise ConfigurationConflict(
            f"Conflict detected for mod '{target_id}': {len(handlers)} handlers "
            f"registered and {', '.join(repr(e) for e in exclusive)} "
            f"{'is' if len(exclusive) == 1 else 'are'} mutually exclusive. "
            f"No handlers applied.",
            target_id=target_id,
            details={"handlers": [h.label for h in handlers], "exclusive": exclusive},
        )
