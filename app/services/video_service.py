from __future__ import annotations

import logging
import tempfile

import requests

from app.core.config import settings
from app.core.errors import VideoDownloadError
from app.services.storage_service import StorageService

logger = logging.getLogger(__name__)

CHUNK_SIZE = 1024 * 1024
SPOOL_MAX_BYTES = 64 * 1024 * 1024


class VideoService:
    def __init__(self, storage: StorageService, session: requests.Session | None = None, timeout: float | None = None) -> None:
        self.storage = storage
        self.session = session or requests.Session()
        self.timeout = timeout or settings.video_download_timeout

    def fetch_to_storage(self, video_url: str, key: str) -> int:
        logger.info("Downloading video from %s", video_url)
        try:
            response = self.session.get(video_url, stream=True, timeout=self.timeout)
        except requests.RequestException as exc:
            raise VideoDownloadError(f"Failed to download video: {exc}") from exc

        with response, tempfile.SpooledTemporaryFile(max_size=SPOOL_MAX_BYTES) as buffer:
            if not response.ok:
                raise VideoDownloadError(f"Failed to download video: {response.reason}")
            size = 0
            try:
                for chunk in response.iter_content(chunk_size=CHUNK_SIZE):
                    if chunk:
                        buffer.write(chunk)
                        size += len(chunk)
            except requests.RequestException as exc:
                raise VideoDownloadError(f"Failed to download video: {exc}") from exc
            logger.info("Video downloaded: %d bytes", size)
            buffer.seek(0)
            self.storage.put_stream(key, buffer, "video/mp4")
        return size
