"""
Pytest configuration and shared fixtures for CompatLib tests.
"""

import tempfile
from pathlib import Path
from typing import Callable, Generator, List

import pytest

from compatlib.core.config import CompatLibConfig
from compatlib.extensions import (
    CompatibilityManager,
    DiagnosticsSink,
    DictModLoader,
    ExtensionLookup,
)


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """Provide a temporary directory for tests."""
    with tempfile.TemporaryDirectory() as temp_dir:
        yield Path(temp_dir)


@pytest.fixture
def test_config() -> CompatLibConfig:
    """Provide a test configuration."""
    return CompatLibConfig(
        environment="test",
        debug=True,
        logging={"level": "DEBUG"},
        diagnostics={"mirror_to_logger": False},
    )


@pytest.fixture
def sink() -> DiagnosticsSink:
    """Provide a diagnostics sink that does not echo to the logger."""
    return DiagnosticsSink(mirror_to_logger=False)


@pytest.fixture
def mod_loader() -> DictModLoader:
    """Provide a host loader with a few installed extensions."""
    return DictModLoader({"X": "1.0.0", "Y": "1.5.0", "Z": "3.1.0"})


@pytest.fixture
def lookup(mod_loader: DictModLoader, sink: DiagnosticsSink) -> ExtensionLookup:
    return ExtensionLookup(mod_loader, sink)


@pytest.fixture
def manager(lookup: ExtensionLookup, sink: DiagnosticsSink) -> CompatibilityManager:
    """Provide a fresh manager per test."""
    return CompatibilityManager(lookup=lookup, sink=sink)


@pytest.fixture
def calls() -> List[str]:
    """Execution trace shared by recording handlers."""
    return []


@pytest.fixture
def recorder(calls: List[str]) -> Callable[[str], Callable[[], None]]:
    """Build handlers that append their name to ``calls`` when applied."""

    def make(name: str) -> Callable[[], None]:
        return lambda: calls.append(name)

    return make
