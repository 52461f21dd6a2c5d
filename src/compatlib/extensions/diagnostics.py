"""
Diagnostics Sink

Append-only, leveled log of everything the compatibility engine decides.
Entries are never read back for arbitration; the sink only supports
snapshots and a one-shot JSON export.
"""

import json
import logging
import threading
from pathlib import Path
from typing import IO, List, Optional, Union

from ..core.logging import DIAGNOSTICS_LOGGER, get_logger
from .models import ConflictLogEntry, LogLevel

logger = get_logger(DIAGNOSTICS_LOGGER)

_PYTHON_LEVELS = {
    LogLevel.INFO: logging.INFO,
    LogLevel.WARNING: logging.WARNING,
    LogLevel.ERROR: logging.ERROR,
    LogLevel.CONFLICT: logging.WARNING,
}


class DiagnosticsSink:
    """
    Thread-safe append-only store of ConflictLogEntry objects.
    """

    def __init__(self, mirror_to_logger: bool = True):
        self._entries: List[ConflictLogEntry] = []
        self._lock = threading.Lock()
        self._conflicts = 0
        self.mirror_to_logger = mirror_to_logger

    def append(self, level: Union[LogLevel, str], message: str) -> ConflictLogEntry:
        """
        Append an entry at the given level.

        Args:
            level: LogLevel or its string value
            message: Message text

        Returns:
            The stored entry
        """
        entry = ConflictLogEntry(level=LogLevel(level), message=message)
        with self._lock:
            self._entries.append(entry)
            if entry.level is LogLevel.CONFLICT:
                self._conflicts += 1

        if self.mirror_to_logger:
            logger.log(_PYTHON_LEVELS[entry.level], "%s", message)
        return entry

    def info(self, message: str) -> ConflictLogEntry:
        return self.append(LogLevel.INFO, message)

    def warning(self, message: str) -> ConflictLogEntry:
        return self.append(LogLevel.WARNING, message)

    def error(self, message: str) -> ConflictLogEntry:
        return self.append(LogLevel.ERROR, message)

    def conflict(self, message: str) -> ConflictLogEntry:
        return self.append(LogLevel.CONFLICT, message)

    @property
    def conflict_count(self) -> int:
        """Number of conflict-level entries recorded so far"""
        return self._conflicts

    def entries(self, level: Optional[LogLevel] = None) -> List[ConflictLogEntry]:
        """Snapshot of stored entries, optionally filtered by level"""
        with self._lock:
            snapshot = list(self._entries)
        if level is not None:
            snapshot = [entry for entry in snapshot if entry.level is level]
        return snapshot

    def messages(self) -> List[str]:
        """Snapshot of entries rendered as display strings"""
        return [entry.render() for entry in self.entries()]

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()
            self._conflicts = 0

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def export_json(self, destination: Union[str, Path, IO[str]]) -> bool:
        """
        Export a snapshot of the log as an indented JSON array of strings.

        Args:
            destination: File path or writable text stream

        Returns:
            True if the export was written, False on I/O failure
        """
        payload = json.dumps(self.messages(), indent=2)

        try:
            if isinstance(destination, (str, Path)):
                path = Path(destination)
                path.parent.mkdir(parents=True, exist_ok=True)
                path.write_text(payload, encoding="utf-8")
            else:
                destination.write(payload)
        except OSError as e:
            logger.error(f"An error occurred while exporting logs to JSON: {e}")
            return False

        return True
