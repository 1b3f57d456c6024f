"""Release archive download and extraction."""
import asyncio
import logging
import tarfile
import tempfile
import zipfile
from pathlib import Path
from typing import Dict, List, Optional, Union

import aiohttp

from ltex_launcher.binaries.constants import DOWNLOAD_CHUNK_SIZE
from ltex_launcher.errors import NetworkOrFilesystemError
from ltex_launcher.logging import get_logger, log_with_data
from ltex_launcher.types import ArchiveKind

logger = get_logger(__name__)


async def download_file(
    url: str,
    dest: Path,
    headers: Optional[Dict[str, str]] = None
) -> None:
    """Download a file with streaming."""
    try:
        async with aiohttp.ClientSession() as session:
            log_with_data(logger, logging.INFO, "Starting download", {
                "url": url,
                "destination": str(dest)
            })

            async with session.get(url, headers=headers) as response:
                response.raise_for_status()

                size = int(response.headers.get("content-length", 0))
                downloaded = 0

                with open(dest, "wb") as f:
                    async for chunk in response.content.iter_chunked(DOWNLOAD_CHUNK_SIZE):
                        f.write(chunk)
                        downloaded += len(chunk)

                log_with_data(logger, logging.INFO, "Download complete", {
                    "url": url,
                    "size": downloaded,
                    "expected_size": size
                })

    except (aiohttp.ClientError, asyncio.TimeoutError, OSError) as e:
        reason = str(e) or type(e).__name__
        log_with_data(logger, logging.ERROR, "Download failed", {
            "url": url,
            "error": reason,
            "status": getattr(e, "status", None)
        })
        if dest.exists():
            dest.unlink()
        raise NetworkOrFilesystemError(
            f"failed to download file: {reason}", details={"url": url}
        ) from e


def get_archive_files(archive: Union[zipfile.ZipFile, tarfile.TarFile]) -> List[str]:
    """Get list of member names for either archive type."""
    if isinstance(archive, zipfile.ZipFile):
        return archive.namelist()
    return archive.getnames()


def _check_members(names: List[str], dest_dir: Path) -> None:
    root = dest_dir.resolve()
    for name in names:
        target = (root / name).resolve()
        if target != root and root not in target.parents:
            raise NetworkOrFilesystemError(
                f"archive member escapes destination: {name}",
                details={"member": name}
            )


def extract_archive(archive_path: Path, dest_dir: Path, kind: ArchiveKind) -> None:
    """Extract a whole archive into dest_dir."""
    handlers = {
        ArchiveKind.ZIP: lambda path: zipfile.ZipFile(path),
        ArchiveKind.GZIP_TAR: lambda path: tarfile.open(path, "r:gz"),
    }

    dest_dir.mkdir(parents=True, exist_ok=True)
    try:
        with handlers[kind](archive_path) as archive:
            names = get_archive_files(archive)
            _check_members(names, dest_dir)
            if isinstance(archive, tarfile.TarFile):
                # rejects links and members that resolve outside dest_dir
                archive.extractall(dest_dir, filter="data")
            else:
                archive.extractall(dest_dir)
    except (OSError, zipfile.BadZipFile, tarfile.TarError) as e:
        log_with_data(logger, logging.ERROR, "Failed to extract archive", {
            "archive": str(archive_path),
            "kind": kind.name,
            "error": str(e)
        })
        raise NetworkOrFilesystemError(
            f"failed to extract {archive_path.name}: {e}",
            details={"archive": str(archive_path)}
        ) from e

    # zipfile drops unix permission bits
    if kind == ArchiveKind.ZIP:
        with zipfile.ZipFile(archive_path) as archive:
            for info in archive.infolist():
                mode = info.external_attr >> 16
                if mode and not info.is_dir():
                    (dest_dir / info.filename).chmod(mode & 0o777)

    log_with_data(logger, logging.INFO, "Archive extracted", {
        "archive": str(archive_path),
        "destination": str(dest_dir),
        "members": len(names)
    })


async def download_and_extract(url: str, dest_dir: Path, kind: ArchiveKind) -> None:
    """Fetch an archive and unpack it into dest_dir in one step."""
    with tempfile.TemporaryDirectory() as tmpdir:
        archive_path = Path(tmpdir) / Path(url.split("?")[0]).name

        await download_file(url, archive_path)

        if not archive_path.exists() or archive_path.stat().st_size == 0:
            raise NetworkOrFilesystemError(
                "failed to download file: archive is missing or empty",
                details={"url": url}
            )

        extract_archive(archive_path, dest_dir, kind)
