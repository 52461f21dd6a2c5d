"""
Tests for the fault-tolerant extension lookup.
"""

from typing import Optional

from compatlib.extensions import LogLevel
from compatlib.extensions.loader import (
    UNKNOWN_VERSION,
    DictModLoader,
    ExtensionLookup,
    HostModLoader,
)


class BrokenLoader(HostModLoader):
    """Host loader whose every call fails."""

    def is_enabled(self, extension_id: str) -> bool:
        raise RuntimeError("loader offline")

    def get_version(self, extension_id: str) -> Optional[str]:
        raise RuntimeError("loader offline")


class CountingLoader(DictModLoader):
    def __init__(self, extensions):
        super().__init__(extensions)
        self.version_calls = 0

    def get_version(self, extension_id: str) -> Optional[str]:
        self.version_calls += 1
        return super().get_version(extension_id)


def test_presence_and_version(lookup):
    assert lookup.is_loaded("X") is True
    assert lookup.is_loaded("absent") is False
    assert lookup.get_version("Y") == "1.5.0"
    assert lookup.get_version("absent") == UNKNOWN_VERSION


def test_faults_become_safe_defaults(sink):
    lookup = ExtensionLookup(BrokenLoader(), sink)

    assert lookup.is_loaded("X") is False
    assert lookup.get_version("X") == UNKNOWN_VERSION

    warnings = sink.entries(LogLevel.WARNING)
    assert len(warnings) == 2
    assert all("loader offline" in w.message for w in warnings)
    assert sink.conflict_count == 0


def test_faults_without_sink_do_not_raise():
    lookup = ExtensionLookup(BrokenLoader())

    assert lookup.is_loaded("X") is False
    assert lookup.get_version("X") == UNKNOWN_VERSION


def test_versions_are_cached(sink):
    backend = CountingLoader({"X": "2.0"})
    lookup = ExtensionLookup(backend, sink)

    assert lookup.get_version("X") == "2.0"
    backend.add("X", "3.0")
    assert lookup.get_version("X") == "2.0"
    assert backend.version_calls == 1

    lookup.clear_cache()
    assert lookup.get_version("X") == "3.0"
    assert backend.version_calls == 2


def test_missing_versions_are_not_cached(sink):
    backend = CountingLoader({"X": "  "})
    lookup = ExtensionLookup(backend, sink)

    assert lookup.get_version("X") == UNKNOWN_VERSION
    assert lookup.get_version("X") == UNKNOWN_VERSION
    assert backend.version_calls == 2
