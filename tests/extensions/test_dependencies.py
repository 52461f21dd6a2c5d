"""
Tests for dependency resolution between compatibility handlers.
"""

import pytest

from compatlib.extensions import CompatibilityManager, DiagnosticsSink, LogLevel, PassOutcome


def test_dependency_target_processed_first(manager, recorder, calls):
    manager.register("X", 10, recorder("x"), description="x", dependencies=["Z"])
    manager.register("Z", 1, recorder("z"), description="z")

    report = manager.process_handlers("X")

    assert calls == ["z", "x"]
    assert len(report.dependencies) == 1
    assert report.dependencies[0].target_id == "Z"
    assert report.dependencies[0].executed == ["z"]


def test_dependencies_processed_in_declaration_order(manager, recorder, calls):
    manager.register("X", 1, recorder("x"), description="x", dependencies=["Z", "Y"])
    manager.register("Y", 1, recorder("y"), description="y")
    manager.register("Z", 1, recorder("z"), description="z")

    manager.process_handlers("X")

    assert calls == ["z", "y", "x"]


def test_missing_dependency_warns_and_continues(manager, recorder, calls):
    manager.register("X", 1, recorder("x"), description="x", dependencies=["ghost"])

    report = manager.process_handlers("X")

    assert calls == ["x"]
    assert report.outcome is PassOutcome.COMPLETED
    warnings = manager.sink.entries(LogLevel.WARNING)
    assert len(warnings) == 1
    assert "ghost" in warnings[0].message
    assert manager.sink.conflict_count == 0


def test_transitive_dependencies(manager, recorder, calls):
    manager.register("X", 1, recorder("x"), description="x", dependencies=["Y"])
    manager.register("Y", 1, recorder("y"), description="y", dependencies=["Z"])
    manager.register("Z", 1, recorder("z"), description="z")

    manager.process_handlers("X")

    assert calls == ["z", "y", "x"]


def test_dependency_conflict_does_not_block_dependent(manager, recorder, calls):
    manager.register("X", 1, recorder("x"), description="x", dependencies=["Y"])
    manager.register("Y", 2, recorder("y1"), description="y1", mutually_exclusive=True)
    manager.register("Y", 1, recorder("y2"), description="y2")

    report = manager.process_handlers("X")

    assert calls == ["x"]
    assert report.dependencies[0].outcome is PassOutcome.CONFLICTED
    assert manager.sink.conflict_count == 1


def test_dependency_cycle_is_guarded(manager, recorder, calls):
    manager.register("X", 1, recorder("x"), description="x", dependencies=["Y"])
    manager.register("Y", 1, recorder("y"), description="y", dependencies=["X"])

    report = manager.process_handlers("X")

    assert calls == ["y", "x"]
    assert report.outcome is PassOutcome.COMPLETED
    warnings = manager.sink.entries(LogLevel.WARNING)
    assert len(warnings) == 1
    assert "cycle" in warnings[0].message


def test_self_dependency_is_guarded(manager, recorder, calls):
    manager.register("X", 1, recorder("x"), description="x", dependencies=["X"])

    manager.process_handlers("X")

    assert calls == ["x"]
    assert len(manager.sink.entries(LogLevel.WARNING)) == 1


def test_guard_is_per_pass(manager, recorder, calls):
    manager.register("X", 1, recorder("x"), description="x", dependencies=["Y"])
    manager.register("Y", 1, recorder("y"), description="y", dependencies=["X"])

    manager.process_handlers("X")
    manager.process_handlers("Y")

    assert calls == ["y", "x", "x", "y"]


def test_unguarded_cycle_recurses_without_bound(recorder):
    manager = CompatibilityManager(
        sink=DiagnosticsSink(mirror_to_logger=False), guard_dependency_cycles=False
    )
    manager.register("X", 1, recorder("x"), description="x", dependencies=["Y"])
    manager.register("Y", 1, recorder("y"), description="y", dependencies=["X"])

    with pytest.raises(RecursionError):
        manager.process_handlers("X")
