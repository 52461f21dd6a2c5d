"""
CompatLib - cross-extension compatibility handlers with conflict arbitration.
"""

from .extensions import (
    CompatibilityManager,
    DiagnosticsSink,
    DictModLoader,
    ExtensionLookup,
    HostModLoader,
    PassOutcome,
    PassReport,
)

__version__ = "0.1.0"

__all__ = [
    "CompatibilityManager",
    "DiagnosticsSink",
    "DictModLoader",
    "ExtensionLookup",
    "HostModLoader",
    "PassOutcome",
    "PassReport",
]
