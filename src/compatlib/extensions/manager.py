"""
Compatibility Manager

Execution engine for compatibility handlers. One pass runs per detected
target: gather, order, apply overrides or check exclusivity, then run each
surviving handler behind a failure boundary.
"""

import logging
from typing import Dict, List, Mapping, Optional, Set, Tuple
from uuid import UUID

from ..core.config import CompatLibConfig, get_config
from ..core.exceptions import (
    CompatibilityError,
    ConfigurationConflict,
    HandlerFault,
    OverrideMiss,
    VersionMismatch,
)
from ..core.logging import get_logger, log_structured
from .conflicts import ExclusivityEvaluator, order_by_priority
from .dependencies import DependencyResolver
from .diagnostics import DiagnosticsSink
from .loader import UNKNOWN_VERSION, ExtensionLookup
from .models import (
    ConflictLogEntry,
    HandlerCallback,
    HandlerRegistration,
    PassOutcome,
    PassReport,
)
from .overrides import OverrideResolver, OverrideTable
from .registry import RegistrationStore
from .version import VersionGate

logger = get_logger(__name__)


class CompatibilityManager:
    """
    Registers compatibility handlers and runs engine passes over them.

    Every registry is owned by an instance; create one manager per host (or
    per test) and hand it to whatever drives detection.
    """

    def __init__(
        self,
        lookup: Optional[ExtensionLookup] = None,
        sink: Optional[DiagnosticsSink] = None,
        overrides: Optional[Mapping[str, str]] = None,
        guard_dependency_cycles: bool = True,
        config: Optional[CompatLibConfig] = None,
    ):
        self.config = config
        self.sink = sink or DiagnosticsSink()
        self.lookup = lookup
        self.store = RegistrationStore()
        self.overrides = OverrideTable(overrides)
        self.version_gate = VersionGate()
        self.evaluator = ExclusivityEvaluator()
        self.override_resolver = OverrideResolver(self.overrides)
        self.dependency_resolver = DependencyResolver(
            self.store, self.sink, guard_cycles=guard_dependency_cycles
        )

    @classmethod
    def from_config(
        cls,
        config: Optional[CompatLibConfig] = None,
        lookup: Optional[ExtensionLookup] = None,
    ) -> "CompatibilityManager":
        """
        Build a manager from configuration.

        Args:
            config: Configuration to use (defaults to the global configuration)
            lookup: Extension lookup for version gating

        Returns:
            Configured manager
        """
        config = config or get_config()
        sink = DiagnosticsSink(mirror_to_logger=config.diagnostics.mirror_to_logger)
        if lookup is not None and lookup.sink is None:
            lookup.sink = sink

        return cls(
            lookup=lookup,
            sink=sink,
            overrides=config.overrides,
            guard_dependency_cycles=config.engine.guard_dependency_cycles,
            config=config,
        )

    # Registration

    def register(
        self,
        target_id: str,
        priority: int,
        callback: HandlerCallback,
        description: str = "",
        mutually_exclusive: bool = False,
        dependencies: Optional[List[str]] = None,
        compatible_version: Optional[str] = None,
    ) -> HandlerRegistration:
        """
        Register a handler for a target extension.

        Args:
            target_id: Extension the handler reacts to
            priority: Higher runs first
            callback: Zero-argument callable or object with ``apply()``
            description: Label used by overrides and enable/disable
            mutually_exclusive: Refuse to run alongside other handlers
            dependencies: Targets to process before this handler runs
            compatible_version: Exact target version required, if any

        Returns:
            The stored registration, carrying a unique ``handler_id``
        """
        registration = HandlerRegistration(
            target_id=target_id,
            priority=priority,
            callback=callback,
            description=description,
            dependencies=list(dependencies or []),
            mutually_exclusive=mutually_exclusive,
            compatible_version=compatible_version,
        )
        self.store.register(registration)

        log_structured(
            logger,
            logging.DEBUG,
            f"Registered compatibility handler for mod '{target_id}'",
            description=description,
            priority=priority,
            handler_id=str(registration.handler_id),
        )
        return registration

    def get_registrations(self) -> Tuple[HandlerRegistration, ...]:
        """Read-only snapshot of every registration, disabled ones included"""
        return self.store.all_registrations()

    def set_handler_enabled(self, target_id: str, description: str, enabled: bool) -> bool:
        """
        Enable or disable the first handler matching target and description.

        Returns:
            True if a handler matched
        """
        return self.store.set_enabled(target_id, description, enabled)

    def set_handler_enabled_by_id(self, handler_id: UUID, enabled: bool) -> bool:
        return self.store.set_enabled_by_id(handler_id, enabled)

    # Overrides

    def set_override(self, target_id: str, description: str) -> None:
        self.overrides.set(target_id, description)

    def clear_override(self, target_id: str) -> bool:
        return self.overrides.clear(target_id)

    def get_overrides(self) -> Dict[str, str]:
        return self.overrides.as_dict()

    # Execution

    def process_handlers(self, target_id: str) -> PassReport:
        """
        Run one engine pass for a target.

        Safe to call repeatedly; each call re-applies handler side effects.

        Args:
            target_id: Detected target extension id

        Returns:
            Report of what ran, what was skipped and what failed
        """
        return self._run_pass(target_id, set())

    def _run_pass(self, target_id: str, in_progress: Set[str]) -> PassReport:
        in_progress.add(target_id)
        try:
            return self._process(target_id, in_progress)
        finally:
            in_progress.discard(target_id)

    def _process(self, target_id: str, in_progress: Set[str]) -> PassReport:
        report = PassReport(target_id=target_id)

        handlers = self.store.enabled_for_target(target_id)
        if not handlers:
            self.sink.info(f"No enabled compatibility handlers for mod '{target_id}'.")
            return report

        ordered = order_by_priority(handlers)

        try:
            chosen = self.override_resolver.resolve(target_id, ordered)
        except OverrideMiss as e:
            self._record(e)
            report.outcome = PassOutcome.OVERRIDE_MISSING
            return report

        if chosen is not None:
            self.sink.info(
                f"Override selects handler '{chosen.label}' for mod '{target_id}'."
            )
            self._apply(chosen, report, in_progress)
            report.outcome = PassOutcome.OVERRIDE_APPLIED
            return report

        try:
            self.evaluator.ensure_runnable(target_id, ordered)
        except ConfigurationConflict as e:
            self._record(e)
            report.outcome = PassOutcome.CONFLICTED
            return report

        for handler in ordered:
            self._apply(handler, report, in_progress)

        report.outcome = PassOutcome.COMPLETED
        return report

    def _apply(
        self, handler: HandlerRegistration, report: PassReport, in_progress: Set[str]
    ) -> None:
        try:
            self.version_gate.require(handler, self._detected_version(handler))
        except VersionMismatch as e:
            self._record(e)
            report.skipped.append(handler.label)
            return

        report.dependencies.extend(
            self.dependency_resolver.resolve(handler, self._run_pass, in_progress)
        )

        try:
            handler.invoke()
        except Exception as e:
            self._record(
                HandlerFault(
                    f"Error applying compatibility handler '{handler.label}' "
                    f"for mod '{handler.target_id}': {e}",
                    target_id=handler.target_id,
                    cause=e,
                )
            )
            logger.debug("Handler fault traceback", exc_info=True)
            report.failed.append(handler.label)
            return

        self.sink.info(
            f"Compatibility handler '{handler.label}' for mod '{handler.target_id}' "
            f"applied with priority {handler.priority}."
        )
        report.executed.append(handler.label)

    def _detected_version(self, handler: HandlerRegistration) -> Optional[str]:
        if handler.compatible_version is None:
            return None
        if self.lookup is None:
            return UNKNOWN_VERSION
        return self.lookup.get_version(handler.target_id)

    def _record(self, error: CompatibilityError) -> ConflictLogEntry:
        return self.sink.append(error.level, str(error))
