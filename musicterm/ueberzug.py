"""Showing images through a background ueberzugpp daemon."""

from __future__ import annotations

import json
import logging
import os
import queue
import signal
import socket
import subprocess
import tempfile
import threading
import time
from dataclasses import dataclass
from enum import Enum

log = logging.getLogger(__name__)

IDENTIFIER = "musicterm-albumart"
PID_FILE_TIMEOUT = 5.0
_PID_POLL_INTERVAL = 0.1


class Layer(Enum):
    """Display server output ueberzugpp draws to."""

    WAYLAND = "wayland"
    X11 = "x11"


def socket_path(pid: int) -> str:
    """Path of the control socket of the ueberzugpp daemon with ``pid``."""
    return f"/tmp/ueberzugpp-{pid}.socket"


def add_command(pid: int, path: str, x: int, y: int, width: int, height: int) -> str:
    """The JSON command that shows the image at ``path`` in the given cell area."""
    return json.dumps(
        {
            "action": "add",
            "identifier": f"{IDENTIFIER}-{pid}",
            "max_height": height,
            "max_width": width,
            "path": path,
            "x": x,
            "y": y,
        },
        separators=(",", ":"),
        ensure_ascii=False,
    )


def remove_command(pid: int) -> str:
    """The JSON command that removes the image shown by this program."""
    return json.dumps(
        {"action": "remove", "identifier": f"{IDENTIFIER}-{pid}"},
        separators=(",", ":"),
        ensure_ascii=False,
    )


@dataclass(frozen=True)
class _Add:
    path: str
    x: int
    y: int
    width: int
    height: int


class _Signal(Enum):
    REMOVE = "remove"
    DESTROY = "destroy"


def _is_process_running(pid: int) -> bool:
    try:
        os.kill(pid, 0)
    except ProcessLookupError:
        return False
    except PermissionError:
        return True
    return True


class _Daemon:
    """The ueberzugpp process and how to talk to it."""

    def __init__(self, layer: Layer, pid_file: str, command: str) -> None:
        self.layer = layer
        self.pid_file = pid_file
        self.command = command
        self.pid: int | None = None
        self.process: subprocess.Popen | None = None

    def _send(self, line: str) -> None:
        if self.pid is None:
            return
        path = socket_path(self.pid)
        with socket.socket(socket.AF_UNIX, socket.SOCK_STREAM) as sock:
            try:
                sock.connect(path)
            except OSError as exc:
                raise ConnectionError(f"Cannot connect to ueberzug socket: '{path}'") from exc
            sock.sendall(line.encode("utf-8") + b"\n")

    def show_image(self, action: _Add) -> None:
        if self.pid is None:
            return
        self._send(
            add_command(self.pid, action.path, action.x, action.y, action.width, action.height)
        )

    def remove_image(self) -> None:
        if self.pid is None:
            return
        self._send(remove_command(self.pid))

    def _read_pid(self) -> int:
        start = time.monotonic()
        while True:
            try:
                with open(self.pid_file, encoding="utf-8") as handle:
                    return int(handle.read())
            except FileNotFoundError:
                if time.monotonic() - start >= PID_FILE_TIMEOUT:
                    raise
                time.sleep(_PID_POLL_INTERVAL)

    def _spawn(self) -> None:
        try:
            os.remove(self.pid_file)
        except FileNotFoundError:
            pass
        except OSError:
            log.warning("Failed to delete pid file", exc_info=True)

        process = subprocess.Popen(
            [
                self.command,
                "layer",
                "-so",
                self.layer.value,
                "--no-stdin",
                "--pid-file",
                self.pid_file,
            ],
            stdin=subprocess.DEVNULL,
            stdout=subprocess.DEVNULL,
            stderr=subprocess.DEVNULL,
        )
        self.pid = self._read_pid()
        self.process = process

    def spawn_if_needed(self) -> int:
        if self.pid is None or not _is_process_running(self.pid):
            self._spawn()
        assert self.pid is not None
        return self.pid

    def destroy(self) -> None:
        try:
            self.remove_image()
        except Exception:
            log.warning("Failed to send remove request to ueberzugpp", exc_info=True)

        if self.process is not None:
            try:
                self.process.kill()
                self.process.wait()
            except Exception:
                log.warning("Failed to kill ueberzugpp process", exc_info=True)

        if self.pid is not None:
            try:
                os.kill(self.pid, signal.SIGTERM)
            except OSError:
                log.warning("Failed to send SIGTERM to ueberzugpp", exc_info=True)

        try:
            os.remove(self.pid_file)
        except OSError:
            log.warning("Failed to remove ueberzugpp's pid file", exc_info=True)


class Ueberzug:
    """Sends image requests to a ueberzugpp daemon from a background thread."""

    def __init__(self, pid_file: str | None = None, command: str = "ueberzugpp") -> None:
        self.pid_file = pid_file or os.path.join(
            tempfile.gettempdir(), "musicterm", f"ueberzug-{os.getpid()}.pid"
        )
        self._command = command
        self._queue: queue.Queue[_Add | _Signal] = queue.Queue()
        self._thread: threading.Thread | None = None

    @property
    def running(self) -> bool:
        """Whether the background thread is alive."""
        return self._thread is not None and self._thread.is_alive()

    def start(self, layer: Layer) -> Ueberzug:
        """Start the background thread that drives the daemon on ``layer``."""
        if self._thread is not None:
            return self
        os.makedirs(os.path.dirname(self.pid_file) or ".", exist_ok=True)
        daemon = _Daemon(layer, self.pid_file, self._command)
        self._thread = threading.Thread(target=self._run, args=(daemon,), daemon=True)
        self._thread.start()
        return self

    def _run(self, daemon: _Daemon) -> None:
        while True:
            action = self._queue.get()
            if action is _Signal.DESTROY:
                daemon.destroy()
                return
            try:
                daemon.spawn_if_needed()
            except Exception:
                log.warning("Failed to spawn ueberzugpp daemon", exc_info=True)
                continue
            try:
                if isinstance(action, _Add):
                    daemon.show_image(action)
                else:
                    daemon.remove_image()
            except Exception:
                log.warning("Failed to send request to ueberzugpp", exc_info=True)

    def show_image(self, path: str, x: int, y: int, width: int, height: int) -> None:
        """Ask for the image at ``path`` to be shown in the given cell area."""
        self._queue.put(_Add(path, x, y, width, height))

    def remove_image(self) -> None:
        """Ask for the shown image to be removed."""
        self._queue.put(_Signal.REMOVE)

    def cleanup(self) -> None:
        """Remove the image, stop the daemon and wait for the thread to end."""
        if self._thread is None:
            return
        self._queue.put(_Signal.DESTROY)
        self._thread.join()
        self._thread = None