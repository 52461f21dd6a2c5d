"""
Compatibility Framework Data Models

Defines handler registrations, diagnostics entries and pass outcomes.
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Callable, List, Optional, Protocol, Union, runtime_checkable
from uuid import UUID, uuid4


@runtime_checkable
class CompatibilityHandler(Protocol):
    """Capability interface for handlers that prefer an object over a closure."""

    def apply(self) -> Any:
        ...


HandlerCallback = Union[Callable[[], Any], CompatibilityHandler]


class LogLevel(Enum):
    """Diagnostics entry levels"""

    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CONFLICT = "conflict"


class PassOutcome(Enum):
    """Terminal state of a single engine pass for one target"""

    IDLE = "idle"
    CONFLICTED = "conflicted"
    OVERRIDE_APPLIED = "override_applied"
    OVERRIDE_MISSING = "override_missing"
    COMPLETED = "completed"


@dataclass
class HandlerRegistration:
    """One contributed compatibility behavior for a target extension"""

    target_id: str
    priority: int
    callback: Optional[HandlerCallback] = None
    description: str = ""
    dependencies: List[str] = field(default_factory=list)
    mutually_exclusive: bool = False
    enabled: bool = True
    compatible_version: Optional[str] = None
    handler_id: UUID = field(default_factory=uuid4)
    registered_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    def __setattr__(self, name: str, value: Any) -> None:
        if name == "target_id" and "target_id" in self.__dict__:
            raise AttributeError("target_id is immutable after registration")
        super().__setattr__(name, value)

    def invoke(self) -> Any:
        """Apply the handler's callback"""
        if self.callback is None:
            return None
        if isinstance(self.callback, CompatibilityHandler):
            return self.callback.apply()
        return self.callback()

    @property
    def label(self) -> str:
        return self.description or f"<handler {self.handler_id}>"


@dataclass(frozen=True)
class ConflictLogEntry:
    """Timestamped, leveled diagnostics message"""

    level: LogLevel
    message: str
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    def render(self) -> str:
        stamp = self.timestamp.strftime("%Y-%m-%d %H:%M:%S")
        return f"{stamp} [{self.level.name}]: {self.message}"


@dataclass
class PassReport:
    """Summary of one engine pass, for observability only"""

    target_id: str
    outcome: PassOutcome = PassOutcome.IDLE
    executed: List[str] = field(default_factory=list)
    skipped: List[str] = field(default_factory=list)
    failed: List[str] = field(default_factory=list)
    dependencies: List["PassReport"] = field(default_factory=list)
