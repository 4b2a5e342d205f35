"""Directory stacks, image protocol detection, ueberzugpp control and yt-dlp downloads."""

__version__ = "0.1.0"