"""
CompatLib Compatibility Framework Demo

Demonstrates registering compatibility handlers, running the detection pass
and inspecting the diagnostics log.
"""

from compatlib.cli.main import show_log
from compatlib.core.config import CompatLibConfig
from compatlib.extensions import DictModLoader, PassOutcome
from compatlib.main import bootstrap, start


def demo_ordering_and_versions():
    """Demonstrate priority ordering and version gating."""
    print("\n=== Demo 1: Ordering and Version Gates ===\n")

    host = DictModLoader({"butchering": "1.5.0", "farming": "2.0.0"})
    manager = bootstrap(host, config=CompatLibConfig(), configure_logging=False)

    manager.register(
        "butchering", 10, lambda: print("  - patched butchering recipes"), description="recipes"
    )
    manager.register(
        "butchering", 5, lambda: print("  - patched butchering loot"), description="loot"
    )
    manager.register(
        "butchering",
        1,
        lambda: print("  - should never print"),
        description="pinned",
        compatible_version="2.0.0",
    )
    manager.register("hunting", 1, lambda: print("  - hunting is not installed"))

    reports = start(manager)

    for target_id, report in reports.items():
        print(f"\n  {target_id}: {report.outcome.value}")
        print(f"    executed: {report.executed}")
        print(f"    skipped:  {report.skipped}")


def demo_conflicts_and_overrides():
    """Demonstrate exclusivity conflicts and operator overrides."""
    print("\n=== Demo 2: Conflicts and Overrides ===\n")

    host = DictModLoader({"weather": "1.0.0"})
    manager = bootstrap(host, config=CompatLibConfig(), configure_logging=False)

    manager.register(
        "weather", 10, lambda: print("  - storm rebalance"), description="storms", mutually_exclusive=True
    )
    manager.register("weather", 5, lambda: print("  - rain tweaks"), description="rain")

    report = manager.process_handlers("weather")
    print(f"  Without override: {report.outcome.value}")

    manager.set_override("weather", "rain")
    report = manager.process_handlers("weather")
    assert report.outcome is PassOutcome.OVERRIDE_APPLIED
    print(f"  With override: {report.outcome.value}")

    print(f"\n  Diagnostics ({manager.sink.conflict_count} conflict(s)):")
    show_log(manager.sink, echo=lambda line: print(f"    {line}"))


def main():
    """Run all demos."""
    print("=" * 60)
    print("CompatLib Compatibility Framework Demo")
    print("=" * 60)

    demo_ordering_and_versions()
    demo_conflicts_and_overrides()

    print("\n" + "=" * 60)
    print("All demos completed successfully!")
    print("=" * 60)


if __name__ == "__main__":
    main()
