"""Terminal helpers: tmux passthrough, error formatting and image protocol detection."""

from __future__ import annotations

import logging
import os
import shutil
import subprocess
import sys
from enum import Enum

log = logging.getLogger(__name__)

_KITTY_QUERY = "\x1b_Gi=31,s=1,v=1,a=q,t=d,f=24;AAAA\x1b\\\x1b[c"
_TMUX_KITTY_QUERY = (
    "\x1bPtmux;\x1b\x1b_Gi=31,s=1,v=1,a=q,t=d,f=24;AAAA\x1b\x1b\\\x1b\x1b[c\x1b\\"
)


class ImageProtocol(Enum):
    KITTY = "kitty"
    UEBERZUG_WAYLAND = "ueberzug_wayland"
    UEBERZUG_X11 = "ueberzug_x11"
    NONE = "none"


def error_status(error: BaseException) -> str:
    """One line describing the error and everything that caused it."""
    parts = []
    seen: set[int] = set()
    current: BaseException | None = error
    while current is not None and id(current) not in seen:
        seen.add(id(current))
        parts.append(str(current).replace("\n", ""))
        if current.__cause__ is not None:
            current = current.__cause__
        elif current.__suppress_context__:
            current = None
        else:
            current = current.__context__
    return " ".join(parts)


def _env_set(name: str) -> bool:
    return bool(os.environ.get(name))


def is_inside_tmux() -> bool:
    return _env_set("TERM_PROGRAM")


def wrap(text: str) -> str:
    """Wrap an escape sequence so tmux passes it through."""
    escaped = text.replace("\x1b", "\x1b\x1b")
    return f"\x1bPtmux;{escaped},\x1b\\"


def wrap_print(text: str) -> None:
    """Write an escape sequence wrapped for tmux passthrough to stdout."""
    sys.stdout.write("\x1bPtmux;")
    sys.stdout.write(text.replace("\x1b", "\x1b\x1b"))
    sys.stdout.write("\x1b\\")


def is_passthrough_enabled() -> bool:
    result = subprocess.run(
        ["tmux", "show", "-Ap", "allow-passthrough"],
        capture_output=True,
        check=False,
    )
    return result.stdout.decode("utf-8", errors="replace").rstrip().endswith("on")


def enable_passthrough() -> None:
    try:
        subprocess.run(
            ["tmux", "set", "-p", "allow-passthrough"],
            capture_output=True,
            check=False,
        )
    except OSError as exc:
        raise RuntimeError(f"Failed to enable tmux passthrough, '{exc}'") from exc


def is_ueberzug_wayland_supported() -> bool:
    return _env_set("WAYLAND_DISPLAY")


def is_ueberzug_x11_supported() -> bool:
    return _env_set("DISPLAY")


def is_kitty_supported() -> bool:
    """Ask the terminal whether it understands the kitty graphics protocol."""
    import termios

    if is_inside_tmux():
        if not is_passthrough_enabled():
            enable_passthrough()
        query = _TMUX_KITTY_QUERY
    else:
        query = _KITTY_QUERY

    stdin_fd = sys.stdin.fileno()
    stdout_fd = sys.stdout.fileno()
    original = termios.tcgetattr(stdin_fd)
    attrs = termios.tcgetattr(stdin_fd)
    attrs[3] &= ~(termios.ICANON | termios.ECHO)
    # The end of the reply cannot be detected reliably, so reads time out after 100ms.
    attrs[6][termios.VTIME] = 1
    attrs[6][termios.VMIN] = 0
    termios.tcsetattr(stdin_fd, termios.TCSADRAIN, attrs)

    response = ""
    try:
        os.write(stdout_fd, query.encode())
        while True:
            byte = os.read(stdin_fd, 1)
            if not byte or byte == b"\0":
                break
            response += chr(byte[0])
            if response.endswith(";c"):
                break
    finally:
        termios.tcsetattr(stdin_fd, termios.TCSANOW, original)

    return "_Gi=31;OK" in response


def determine_image_support() -> ImageProtocol:
    """Pick the best image protocol the terminal and environment provide."""
    if is_kitty_supported():
        return ImageProtocol.KITTY

    if shutil.which("ueberzugpp") is not None:
        session_type = os.environ.get("XDG_SESSION_TYPE", "")
        if session_type == "wayland":
            return ImageProtocol.UEBERZUG_WAYLAND
        if session_type == "x11":
            return ImageProtocol.UEBERZUG_X11
        log.warning("XDG_SESSION_TYPE not set, will check display variables.")
        if is_ueberzug_wayland_supported():
            return ImageProtocol.UEBERZUG_WAYLAND
        if is_ueberzug_x11_supported():
            return ImageProtocol.UEBERZUG_X11

    return ImageProtocol.NONE