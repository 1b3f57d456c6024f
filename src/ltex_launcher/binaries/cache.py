"""Downloaded binary cache management."""
import logging
import shutil
from pathlib import Path
from typing import List, Optional

from ltex_launcher.errors import NetworkOrFilesystemError
from ltex_launcher.logging import get_logger, log_with_data
from ltex_launcher.types import CleanupWarning

logger = get_logger(__name__)


def is_file(path: Optional[str]) -> bool:
    """Check that a cached path still points at a regular file."""
    if not path:
        return False
    try:
        return Path(path).is_file()
    except OSError:
        return False


def remove_entry(path: Path) -> None:
    if path.is_dir() and not path.is_symlink():
        shutil.rmtree(path)
    else:
        path.unlink()


def remove_stale_entries(work_dir: Path, keep: str) -> List[CleanupWarning]:
    """Remove every top-level entry of work_dir except `keep`.

    Listing failures are fatal. Removal failures are collected and
    returned so the caller can report them without failing.
    """
    try:
        entries = list(work_dir.iterdir())
    except OSError as e:
        raise NetworkOrFilesystemError(
            f"failed to list working directory {e}",
            details={"work_dir": str(work_dir)}
        ) from e

    warnings = []
    for entry in entries:
        if entry.name == keep:
            continue
        try:
            remove_entry(entry)
        except OSError as e:
            warnings.append(CleanupWarning(path=entry, error=str(e)))
            log_with_data(logger, logging.WARNING, "Failed to remove stale install", {
                "path": str(entry),
                "error": str(e)
            })
        else:
            log_with_data(logger, logging.DEBUG, "Removed stale install", {
                "path": str(entry)
            })

    return warnings
