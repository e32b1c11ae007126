"""
Archive Downloader
==================

Downloads font archives over HTTP with progress tracking, retries and a
local cache.
"""

import logging
import shutil
import tempfile
import time
from collections.abc import Callable
from pathlib import Path

import requests
from tqdm import tqdm

from src.fontadmin.core.config import DownloadConfig
from src.fontadmin.core.exceptions import DownloadError

logger = logging.getLogger(__name__)


class DownloadProgress:
    """Progress tracker for downloads."""

    def __init__(self, total_size: int, description: str = "Downloading"):
        self.total_size = total_size
        self.downloaded = 0
        self.start_time = time.time()
        self.pbar = tqdm(
            total=total_size or None,
            unit="B",
            unit_scale=True,
            unit_divisor=1024,
            desc=description,
        )

    def update(self, chunk_size: int):
        """Update progress."""
        self.downloaded += chunk_size
        self.pbar.update(chunk_size)

    def close(self):
        """Close progress bar."""
        self.pbar.close()

    @property
    def elapsed_time(self) -> float:
        """Get elapsed time in seconds."""
        return time.time() - self.start_time


class ArchiveDownloader:
    """Downloads an archive to a fixed path, reusing it when already present."""

    def __init__(self, config: DownloadConfig | None = None):
        self.config = config or DownloadConfig()
        self.session = self._create_session()

    def _create_session(self) -> requests.Session:
        """Create HTTP session with appropriate configuration."""
        session = requests.Session()
        session.verify = self.config.verify_ssl
        session.headers.update({"User-Agent": self.config.user_agent})
        return session

    def fetch(
        self,
        url: str,
        target_path: Path,
        progress_callback: Callable[[int, int], None] | None = None,
    ) -> bool:
        """
        Download ``url`` to ``target_path`` unless it is already cached there.

        Returns:
            True if the archive was downloaded, False if the cached copy was used

        Raises:
            DownloadError: If every attempt fails
        """
        target_path = Path(target_path)
        if target_path.exists():
            logger.info(f"Using cached archive: {target_path}")
            return False

        logger.info(f"Downloading {url} to {target_path}")

        for attempt in range(self.config.max_retries):
            try:
                self._download_with_progress(url, target_path, progress_callback)
            except (requests.RequestException, OSError) as e:
                logger.warning(f"Download attempt {attempt + 1} failed: {e}")
                if attempt == self.config.max_retries - 1:
                    raise DownloadError(url, str(e)) from e
                time.sleep(2**attempt)  # Exponential backoff
            else:
                return True
        return False

    def _download_with_progress(
        self,
        url: str,
        target_path: Path,
        progress_callback: Callable[[int, int], None] | None,
    ) -> None:
        """Stream ``url`` into a temporary file, then move it into place."""
        target_path.parent.mkdir(parents=True, exist_ok=True)
        with tempfile.NamedTemporaryFile(
            dir=target_path.parent, delete=False, suffix=".tmp"
        ) as temp_file:
            temp_path = Path(temp_file.name)

        try:
            response = self.session.get(url, stream=True, timeout=self.config.timeout_seconds)
            response.raise_for_status()

            total_size = int(response.headers.get("content-length", 0))
            if total_size == 0:
                logger.warning("Unable to determine file size")

            progress = DownloadProgress(total_size, f"Downloading {target_path.name}")
            downloaded_size = 0
            try:
                with temp_path.open("wb") as f:
                    for chunk in response.iter_content(chunk_size=self.config.chunk_size):
                        if chunk:
                            f.write(chunk)
                            downloaded_size += len(chunk)
                            progress.update(len(chunk))
                            if progress_callback:
                                progress_callback(downloaded_size, total_size)
            finally:
                progress.close()

            if total_size > 0 and downloaded_size != total_size:
                raise requests.RequestException(
                    f"Size mismatch: expected {total_size} bytes, got {downloaded_size}"
                )

            shutil.move(str(temp_path), str(target_path))
            logger.info(
                f"Download completed: {downloaded_size} bytes in {progress.elapsed_time:.2f}s"
            )
        except Exception:
            if temp_path.exists():
                temp_path.unlink()
            raise

    def cleanup(self):
        """Cleanup downloader resources."""
        self.session.close()
