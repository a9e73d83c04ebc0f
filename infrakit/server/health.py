"""Server contract and a TCP health-check server for container probes."""

from __future__ import annotations

import socket
import threading
from typing import Optional, Protocol, runtime_checkable

HEALTH_RESPONSE = b"running"
_ACCEPT_POLL = 0.2


@runtime_checkable
class Server(Protocol):
    """A server that can be enabled, started and stopped."""

    def is_enabled(self) -> bool:
        """Return True when the server should run."""

    def name(self) -> str:
        """Return the server's display name."""

    def addr(self) -> str:
        """Return the address the server serves on."""

    def start(self) -> None:
        """Start serving; raise on failure."""

    def stop(self) -> None:
        """Stop serving."""


class HealthServer:
    """Answers every TCP connection with ``running`` and closes it."""

    def __init__(self, port: int, enabled: bool = True) -> None:
        self._port = port
        self._enabled = enabled
        self._listener: Optional[socket.socket] = None
        self._stop = threading.Event()
        self._thread: Optional[threading.Thread] = None

    def is_enabled(self) -> bool:
        return self._enabled

    def name(self) -> str:
        return "Health"

    def addr(self) -> str:
        """Local address; reports the bound port when listening."""
        port = self._listener.getsockname()[1] if self._listener is not None else self._port
        return f"127.0.0.1:{port}"

    def start(self) -> None:
        """Listen on all IPv4 interfaces; raises OSError when binding fails."""
        listener = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
        try:
            listener.setsockopt(socket.SOL_SOCKET, socket.SO_REUSEADDR, 1)
            listener.bind(("0.0.0.0", self._port))
            listener.listen()
            listener.settimeout(_ACCEPT_POLL)
        except OSError:
            listener.close()
            raise
        self._listener = listener
        self._stop.clear()
        self._thread = threading.Thread(target=self._serve, name="health-server", daemon=True)
        self._thread.start()

    def _serve(self) -> None:
        listener = self._listener
        while not self._stop.is_set():
            try:
                conn, _ = listener.accept()
            except socket.timeout:
                continue
            except OSError:
                break
            threading.Thread(target=self._answer, args=(conn,), daemon=True).start()

    @staticmethod
    def _answer(conn: socket.socket) -> None:
        with conn:
            try:
                conn.sendall(HEALTH_RESPONSE)
            except OSError:
                pass

    def stop(self) -> None:
        """Close the listener; raises RuntimeError when never started."""
        if self._listener is None:
            raise RuntimeError("health server is not started")
        self._stop.set()
        if self._thread is not None:
            self._thread.join()
            self._thread = None
        self._listener.close()
        self._listener = None