"""HTTP client that fetches the tool distribution archive."""

from __future__ import annotations

import logging
import time
from pathlib import Path
from typing import Optional

import httpx

from distdeploy.settings import Settings

CHUNK_SIZE = 65536
UNKNOWN_SIZE_LOG_STEP = 5 * 1024 * 1024


class DistributionDownloader:
    """Stream a distribution zip to the local filesystem."""

    def __init__(self, settings: Settings, client: Optional[httpx.Client] = None) -> None:
        self.settings = settings
        self.log = logging.getLogger(self.__class__.__name__)
        self._client = client or httpx.Client(
            timeout=settings.download_timeout,
            follow_redirects=True,
        )

    def download(self, url: str, dest: Path) -> Path:
        dest.parent.mkdir(parents=True, exist_ok=True)
        self.log.info("Downloading distribution url=%s -> %s", url, dest.resolve())
        start_time = time.time()
        downloaded = 0
        with self._client.stream("GET", url) as response:
            response.raise_for_status()
            total = int(response.headers.get("content-length") or 0)
            next_percent = 10
            next_bytes_logged = UNKNOWN_SIZE_LOG_STEP
            with open(dest, "wb") as fh:
                for chunk in response.iter_bytes(CHUNK_SIZE):
                    if not chunk:
                        continue
                    fh.write(chunk)
                    downloaded += len(chunk)
                    if total:
                        percent = int(downloaded * 100 / total)
                        if percent >= next_percent:
                            self.log.info(
                                "Download progress %s%% (%d/%d bytes)",
                                percent,
                                downloaded,
                                total,
                            )
                            next_percent = (percent // 10 + 1) * 10
                    elif downloaded >= next_bytes_logged:
                        self.log.info("Download progress %d bytes", downloaded)
                        next_bytes_logged += UNKNOWN_SIZE_LOG_STEP
        elapsed = max(time.time() - start_time, 1e-3)
        speed_mb_s = (downloaded / 1024 / 1024) / elapsed
        self.log.info(
            "Downloaded distribution -> %s (%d bytes, %.2f MB/s, %.2fs)",
            dest,
            downloaded,
            speed_mb_s,
            elapsed,
        )
        return dest

    def close(self) -> None:
        self._client.close()
