"""
Detection Pass

Host-side driver: runs one engine pass for every registered target the host
reports as loaded, and skips the rest.
"""

from typing import Dict

from ..core.logging import get_logger
from .loader import ExtensionLookup
from .manager import CompatibilityManager
from .models import PassReport

logger = get_logger(__name__)


def run_detection(manager: CompatibilityManager, lookup: ExtensionLookup) -> Dict[str, PassReport]:
    """
    Process handlers for every registered target that is present.

    Targets are visited in order of first registration, from a snapshot of
    the target list taken when the run starts. A target first registered
    during the run is not visited. A new registration for a listed target is
    seen only if it lands before that target's pass reads the store.

    Args:
        manager: Manager holding the registrations
        lookup: Presence lookup for the host's extensions

    Returns:
        Pass reports keyed by processed target id
    """
    reports: Dict[str, PassReport] = {}

    for target_id in manager.store.targets():
        if lookup.is_loaded(target_id):
            reports[target_id] = manager.process_handlers(target_id)
        else:
            logger.info(
                f"Mod '{target_id}' not detected; skipping compatibility handlers."
            )

    return reports
