"""
CompatLib Host Bootstrap

Entry points a host application calls to initialise CompatLib and to run the
detection pass once its extensions have loaded.
"""

from pathlib import Path
from typing import Dict, Optional

from .core.config import CompatLibConfig, get_config, get_export_path
from .core.exceptions import ConfigurationError
from .core.logging import get_logger, setup_logging
from .extensions.detection import run_detection
from .extensions.loader import ExtensionLookup, HostModLoader
from .extensions.manager import CompatibilityManager
from .extensions.models import PassReport


def bootstrap(
    backend: HostModLoader,
    config: Optional[CompatLibConfig] = None,
    configure_logging: bool = True,
) -> CompatibilityManager:
    """
    Create the manager a host hands to its extensions for registration.

    Args:
        backend: Host extension loader
        config: Configuration (defaults to the global configuration)
        configure_logging: Whether to apply CompatLib's logging configuration

    Returns:
        A manager with its lookup and diagnostics sink wired up
    """
    config = config or get_config()

    if configure_logging:
        setup_logging(config.logging)

    logger = get_logger(__name__)
    logger.info("CompatLib initialized for mod compatibility.")
    logger.info(f"Environment: {config.environment}")

    return CompatibilityManager.from_config(config, lookup=ExtensionLookup(backend))


def start(
    manager: CompatibilityManager, export_path: Optional[Path] = None
) -> Dict[str, PassReport]:
    """
    Run the detection pass after the host has finished loading extensions.

    Args:
        manager: Manager returned by bootstrap()
        export_path: Where to write the diagnostics log afterwards
            (defaults to the export path of the manager's configuration)

    Returns:
        Pass reports keyed by processed target id
    """
    logger = get_logger(__name__)
    logger.info("CompatLib active.")

    if manager.lookup is None:
        raise ConfigurationError("Manager has no extension lookup; build it with bootstrap()")

    reports = run_detection(manager, manager.lookup)

    if export_path is None:
        export_path = _configured_export_path(manager)
    if export_path:
        manager.sink.export_json(export_path)

    return reports


def _configured_export_path(manager: CompatibilityManager) -> Optional[Path]:
    """Export path from the manager's own configuration, else the global one"""
    if manager.config is None:
        return get_export_path()
    export_path = manager.config.diagnostics.export_path
    return Path(export_path) if export_path else None
