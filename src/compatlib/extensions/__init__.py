"""
CompatLib Compatibility Framework

Lets extensions register handlers that run when another extension is present,
and arbitrates between handlers competing for the same target.
"""

from .detection import run_detection
from .diagnostics import DiagnosticsSink
from .loader import DictModLoader, ExtensionLookup, HostModLoader, UNKNOWN_VERSION
from .manager import CompatibilityManager
from .models import (
    CompatibilityHandler,
    ConflictLogEntry,
    HandlerRegistration,
    LogLevel,
    PassOutcome,
    PassReport,
)
from .overrides import OverrideTable

__all__ = [
    "run_detection",
    "DiagnosticsSink",
    "DictModLoader",
    "ExtensionLookup",
    "HostModLoader",
    "UNKNOWN_VERSION",
    "CompatibilityManager",
    "CompatibilityHandler",
    "ConflictLogEntry",
    "HandlerRegistration",
    "LogLevel",
    "PassOutcome",
    "PassReport",
    "OverrideTable",
]
