"""Downloading audio from video pages with yt-dlp into a cache directory."""

from __future__ import annotations

import logging
import os
import shutil
import subprocess
from dataclasses import dataclass
from urllib.parse import parse_qsl, urlsplit

log = logging.getLogger(__name__)


class YtDlpError(RuntimeError):
    """yt-dlp is unavailable or failed."""


@dataclass(frozen=True)
class VideoId:
    """Identifier of a video taken from its watch URL."""

    value: str

    @classmethod
    def from_url(cls, url: str) -> VideoId:
        parts = urlsplit(url)
        if not parts.scheme:
            raise ValueError(f"Invalid url: '{url}'")
        host = parts.hostname
        if not host:
            raise ValueError(f"Invalid youtube video url: '{url}'. No hostname found.")
        if "youtube.com" not in host:
            raise ValueError(f"Invalid youtube video url: '{url}'. Received hostname: '{host}'")
        if not parts.path.startswith("/"):
            raise ValueError(f"Invalid youtube video url: '{url}'")
        if "watch" not in parts.path[1:].split("/"):
            raise ValueError(f"Invalid youtube video url: '{url}'")
        for key, value in parse_qsl(parts.query, keep_blank_values=True):
            if key == "v":
                return cls(value)
        raise ValueError("No video id found in url")

    def find_cached(self, cache_dir: str) -> str | None:
        """Path of a file in ``cache_dir`` whose name contains this id, if any."""
        with os.scandir(cache_dir) as entries:
            for entry in entries:
                if self.value in entry.name:
                    return os.path.join(cache_dir, entry.name)
        return None


class YtDlp:
    """Downloads audio tracks into ``<cache_dir>youtube/``."""

    def __init__(self, cache_dir: str) -> None:
        self.cache_dir = f"{cache_dir}youtube/"
        if shutil.which("yt-dlp") is None:
            raise YtDlpError("yt-dlp was not found on PATH. Please install yt-dlp and try again.")
        os.makedirs(self.cache_dir, exist_ok=True)

    def download(self, url: str) -> str:
        """Download the audio of ``url`` unless cached; return the file's path."""
        video_id = VideoId.from_url(url)

        cached = video_id.find_cached(self.cache_dir)
        if cached is not None:
            log.debug("Youtube video already downloaded: %s", cached)
            return cached

        args = [
            "yt-dlp",
            "-x",
            "--embed-thumbnail",
            "--embed-metadata",
            "-f",
            "bestaudio",
            "--convert-thumbnails",
            "jpg",
            "--output",
            f"{self.cache_dir}%(id)s.%(ext)s",
            f"https://www.youtube.com/watch?v={video_id.value}",
        ]
        log.debug("Executing yt-dlp: %s", " ".join(f'"{arg}"' for arg in args[1:]))

        result = subprocess.run(args, capture_output=True, check=False)
        log.debug(
            "yt-dlp finished: exit_code=%s stdout=%s stderr=%s",
            result.returncode,
            result.stdout.decode("utf-8", errors="replace"),
            result.stderr.decode("utf-8", errors="replace"),
        )
        if result.returncode != 0:
            raise YtDlpError(
                f"yt-dlp failed with exit code: {result.returncode}. Check logs for more details."
            )

        # Post-processing may change the extension, so look the file up by id.
        downloaded = video_id.find_cached(self.cache_dir)
        if downloaded is None:
            raise YtDlpError("yt-dlp failed to download video")
        return downloaded