"""
Extension Lookup

Boundary to the host's extension loader. The host side may fail in any way;
the lookup converts every fault into a warning and a safe default so that
nothing from the loader propagates into the engine.
"""

import threading
from abc import ABC, abstractmethod
from typing import Dict, Mapping, Optional

from ..core.exceptions import LookupFault
from ..core.logging import get_logger
from .diagnostics import DiagnosticsSink

logger = get_logger(__name__)

UNKNOWN_VERSION = "unknown"


class HostModLoader(ABC):
    """
    Interface the host application implements to answer presence and
    version questions about its loaded extensions.
    """

    @abstractmethod
    def is_enabled(self, extension_id: str) -> bool:
        """Whether the extension is loaded and enabled"""
        pass

    @abstractmethod
    def get_version(self, extension_id: str) -> Optional[str]:
        """Version string of the extension, or None if unavailable"""
        pass


class DictModLoader(HostModLoader):
    """In-memory loader backed by an extension id -> version mapping"""

    def __init__(self, extensions: Optional[Mapping[str, str]] = None):
        self._extensions: Dict[str, str] = dict(extensions or {})

    def add(self, extension_id: str, version: str) -> None:
        self._extensions[extension_id] = version

    def remove(self, extension_id: str) -> None:
        self._extensions.pop(extension_id, None)

    def is_enabled(self, extension_id: str) -> bool:
        return extension_id in self._extensions

    def get_version(self, extension_id: str) -> Optional[str]:
        return self._extensions.get(extension_id)


class ExtensionLookup:
    """
    Fault-tolerant presence/version lookup with a per-id version cache.
    """

    def __init__(self, backend: HostModLoader, sink: Optional[DiagnosticsSink] = None):
        self.backend = backend
        self.sink = sink
        self._version_cache: Dict[str, str] = {}
        self._lock = threading.Lock()

    def is_loaded(self, extension_id: str) -> bool:
        """
        Check whether an extension is present.

        Returns:
            True if loaded and enabled, False otherwise or on lookup failure
        """
        try:
            return bool(self.backend.is_enabled(extension_id))
        except Exception as e:
            self._report(
                LookupFault(
                    f"Error checking mod '{extension_id}': {e}",
                    target_id=extension_id,
                )
            )
            return False

    def get_version(self, extension_id: str) -> str:
        """
        Get the version reported for an extension.

        Returns:
            The version string, or "unknown" if unavailable or on failure
        """
        with self._lock:
            cached = self._version_cache.get(extension_id)
        if cached is not None:
            return cached

        try:
            version = self.backend.get_version(extension_id)
        except Exception as e:
            self._report(
                LookupFault(
                    f"Error retrieving version for mod '{extension_id}': {e}",
                    target_id=extension_id,
                )
            )
            return UNKNOWN_VERSION

        if version is None or not str(version).strip():
            return UNKNOWN_VERSION

        version = str(version)
        with self._lock:
            self._version_cache[extension_id] = version
        return version

    def clear_cache(self) -> None:
        with self._lock:
            self._version_cache.clear()

    def _report(self, fault: LookupFault) -> None:
        if self.sink is not None:
            self.sink.warning(str(fault))
        else:
            logger.warning(str(fault))
