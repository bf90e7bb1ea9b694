"""Streaming archive downloads."""
import tarfile
from pathlib import Path

import aiohttp

from setup_ruby.errors import DownloadError
from setup_ruby.logging import get_logger

logger = get_logger(__name__)

CHUNK_SIZE = 64 * 1024


async def download_file(url: str, dest: Path) -> Path:
    """Download a file with streaming, following redirects."""
    logger.info({"event": "download_started", "url": url, "destination": str(dest)})
    try:
        async with aiohttp.ClientSession() as session:
            async with session.get(url, allow_redirects=True) as response:
                if response.status != 200:
                    logger.error({
                        "event": "download_request_failed",
                        "url": url,
                        "status": response.status,
                        "reason": response.reason,
                    })
                    response.raise_for_status()

                downloaded = 0
                with open(dest, "wb") as f:
                    async for chunk in response.content.iter_chunked(CHUNK_SIZE):
                        f.write(chunk)
                        downloaded += len(chunk)

    except aiohttp.ClientError as e:
        if dest.exists():
            dest.unlink()
        raise DownloadError(
            f"Failed to download from {url}: {e}",
            details={"url": url, "status": getattr(e, "status", None)},
        ) from e

    if downloaded == 0:
        raise DownloadError(f"Downloaded archive is empty: {url}", details={"url": url})

    logger.info({"event": "download_complete", "url": url, "size": downloaded})
    return dest


def extract_tarball(archive_path: Path, dest_dir: Path) -> None:
    """Extract a .tar.gz archive, keeping file modes."""
    dest_dir.mkdir(parents=True, exist_ok=True)
    try:
        with tarfile.open(archive_path, "r:gz") as archive:
            archive.extractall(dest_dir, filter="tar")
    except (tarfile.TarError, OSError) as e:
        logger.error({
            "event": "extract_failed",
            "archive": str(archive_path),
            "error": str(e),
        })
        raise DownloadError(
            f"Failed to extract {archive_path.name}: {e}",
            details={"archive": str(archive_path)},
        ) from e

    logger.info({"event": "archive_extracted", "archive": str(archive_path), "dest": str(dest_dir)})
