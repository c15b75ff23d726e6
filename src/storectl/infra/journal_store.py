"""Infrastructure: local journal folder operations.

This module owns every filesystem side effect of the journal service:
inspecting, formatting (delete and recreate) and archiving a journal
folder.

Rules
-----
* Every raw ``OSError`` is caught here and re-raised as
  :class:`~storectl.exceptions.JournalError`.
* No ``print()``; callers handle user-facing output.
"""

from __future__ import annotations

import logging
import shutil
import tarfile
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path

from storectl.exceptions import JournalError

logger = logging.getLogger(__name__)

BACKUP_PREFIX = "journal-backup"


# ---------------------------------------------------------------------------
# Inspection result
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class JournalStatus:
    """Snapshot of a journal folder.

    Attributes
    ----------
    path : Path
        The folder that was inspected.
    exists : bool
        Whether *path* exists and is a directory.
    entries : int
        Number of files and folders below *path* (recursive).
    size_bytes : int
        Total size of regular files below *path*.
    """

    path: Path
    exists: bool
    entries: int
    size_bytes: int


def inspect_journal(path: Path) -> JournalStatus:
    """Describe the journal folder at *path* without modifying it.

    Raises
    ------
    JournalError
        If *path* exists but is not a directory, or cannot be read.
    """
    if not path.exists():
        return JournalStatus(path=path, exists=False, entries=0, size_bytes=0)
    if not path.is_dir():
        raise JournalError(f"Journal path {path} exists but is not a directory.")

    entries = 0
    size = 0
    try:
        for child in path.rglob("*"):
            entries += 1
            if child.is_file():
                size += child.stat().st_size
    except OSError as exc:
        raise JournalError(f"Cannot read journal folder {path}: {exc}") from exc
    return JournalStatus(path=path, exists=True, entries=entries, size_bytes=size)


# ---------------------------------------------------------------------------
# Format
# ---------------------------------------------------------------------------

def format_journal(path: Path) -> JournalStatus:
    """Delete everything under *path* and recreate it empty.

    Returns the status of the folder *before* formatting so callers can
    report what was removed.

    Raises
    ------
    JournalError
        If *path* is not a directory or cannot be removed/recreated.
    """
    before = inspect_journal(path)
    try:
        if before.exists:
            logger.debug("removing journal folder %s (%d entries)", path, before.entries)
            shutil.rmtree(path)
        path.mkdir(parents=True, exist_ok=False)
    except OSError as exc:
        raise JournalError(
            f"Failed to format journal folder {path}: {exc}",
            hint="Check that no master process is using the journal and that "
            "you have write permission.",
        ) from exc
    logger.info("formatted journal folder %s", path)
    return before


# ---------------------------------------------------------------------------
# Backup
# ---------------------------------------------------------------------------

def backup_name(now: datetime) -> str:
    """Return the archive file name for a backup taken at *now*."""
    return f"{BACKUP_PREFIX}-{now:%Y%m%d-%H%M%S}.tar.gz"


def backup_journal(path: Path, target_dir: Path, *, now: datetime | None = None) -> Path:
    """Archive the journal folder at *path* into *target_dir*.

    The archive is a gzip-compressed tarball whose single top-level
    member is the journal folder itself.

    Raises
    ------
    JournalError
        If the journal folder does not exist, the archive already
        exists, or writing fails.
    """
    status = inspect_journal(path)
    if not status.exists:
        raise JournalError(
            f"Journal folder {path} does not exist; nothing to back up.",
            hint="Pass --path to point at the journal folder.",
        )

    archive = target_dir / backup_name(now or datetime.now())
    if archive.exists():
        raise JournalError(f"Backup archive {archive} already exists.")

    try:
        target_dir.mkdir(parents=True, exist_ok=True)
        with tarfile.open(archive, "w:gz") as tar:
            tar.add(path, arcname=path.name)
    except (OSError, tarfile.TarError) as exc:
        archive.unlink(missing_ok=True)
        raise JournalError(f"Failed to back up journal to {archive}: {exc}") from exc

    logger.info("backed up %s (%d entries) to %s", path, status.entries, archive)
    return archive
