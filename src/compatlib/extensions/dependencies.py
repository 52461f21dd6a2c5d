"""
Dependency Resolver

Before a handler runs, every target it depends on is processed through the
full engine pipeline, in declaration order.
"""

from typing import Callable, List, Set

from ..core.exceptions import MissingDependency
from .diagnostics import DiagnosticsSink
from .models import HandlerRegistration, PassReport
from .registry import RegistrationStore

# (target_id, targets in progress) -> report of the nested pass
ProcessFn = Callable[[str, Set[str]], PassReport]


class DependencyResolver:
    """
    Walks a handler's declared dependencies.

    With ``guard_cycles`` enabled, a dependency that points back at a target
    already in progress in the current pass is reported as a missing
    dependency instead of being recursed into.
    """

    def __init__(
        self,
        store: RegistrationStore,
        sink: DiagnosticsSink,
        guard_cycles: bool = True,
    ):
        self.store = store
        self.sink = sink
        self.guard_cycles = guard_cycles

    def resolve(
        self,
        handler: HandlerRegistration,
        process: ProcessFn,
        in_progress: Set[str],
    ) -> List[PassReport]:
        """
        Process each dependency of a handler.

        Args:
            handler: Handler about to run
            process: Engine entry point used for each dependency target
            in_progress: Targets currently being processed in this pass

        Returns:
            Reports of the nested passes that ran
        """
        reports = []

        for dependency in handler.dependencies:
            if not self.store.has_target(dependency):
                self._report(
                    MissingDependency(
                        f"Dependency '{dependency}' of handler '{handler.label}' "
                        f"for mod '{handler.target_id}' has no registrations; "
                        f"continuing without it.",
                        target_id=handler.target_id,
                        details={"dependency": dependency},
                    )
                )
                continue

            if self.guard_cycles and dependency in in_progress:
                self._report(
                    MissingDependency(
                        f"Dependency cycle: '{dependency}' is already being processed "
                        f"(required by handler '{handler.label}' for mod "
                        f"'{handler.target_id}'); not processing it again.",
                        target_id=handler.target_id,
                        details={"dependency": dependency, "cycle": True},
                    )
                )
                continue

            reports.append(process(dependency, in_progress))

        return reports

    def _report(self, error: MissingDependency) -> None:
        self.sink.append(error.level, str(error))
