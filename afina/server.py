"""Network front end that serves the memcached text protocol over TCP."""

from __future__ import annotations

import logging
import socket
import threading
from abc import ABC, abstractmethod
from typing import Optional

from afina.commands import Command
from afina.protocol import Parser, ProtocolError
from afina.storage import Storage

_ENCODING = "latin-1"
_BUFFER_SIZE = 4096
_BACKLOG = 5


class Server(ABC):
    """Coordinates network processing on top of a storage backend."""

    def __init__(self, storage: Storage) -> None:
        self.storage = storage

    @abstractmethod
    def start(self, port: int, acceptors: int = 1, workers: int = 1) -> None:
        """Start listening on ``port`` and serving clients."""

    @abstractmethod
    def stop(self) -> None:
        """Stop accepting new connections and signal workers to finish."""

    @abstractmethod
    def join(self) -> None:
        """Block until all workers are stopped and resources released."""


class BlockingServer(Server):
    """Serves every connection, one at a time, in a single background thread."""

    READ_TIMEOUT = 5.0
    ACCEPT_POLL_INTERVAL = 0.2

    def __init__(self, storage: Storage) -> None:
        super().__init__(storage)
        self._logger = logging.getLogger("afina.network")
        self._running = threading.Event()
        self._socket: Optional[socket.socket] = None
        self._thread: Optional[threading.Thread] = None

    @property
    def running(self) -> bool:
        return self._running.is_set()

    @property
    def port(self) -> int:
        """Port the server socket is bound to."""
        if self._socket is None:
            raise RuntimeError("Server is not started")
        return self._socket.getsockname()[1]

    def start(self, port: int, acceptors: int = 1, workers: int = 1) -> None:
        self._logger.info("Start st_blocking network service")
        server_socket = socket.socket(socket.AF_INET, socket.SOCK_STREAM, socket.IPPROTO_TCP)
        try:
            server_socket.setsockopt(socket.SOL_SOCKET, socket.SO_REUSEADDR, 1)
            server_socket.bind(("", port))
            server_socket.listen(_BACKLOG)
        except OSError as exc:
            server_socket.close()
            raise RuntimeError(f"Failed to set up server socket: {exc}") from exc
        server_socket.settimeout(self.ACCEPT_POLL_INTERVAL)
        self._socket = server_socket
        self._running.set()
        self._thread = threading.Thread(target=self._run, name="afina-network", daemon=True)
        self._thread.start()

    def stop(self) -> None:
        self._running.clear()
        if self._socket is not None:
            try:
                self._socket.shutdown(socket.SHUT_RDWR)
            except OSError:
                pass

    def join(self) -> None:
        if self._thread is None:
            raise RuntimeError("Server is not started")
        self._thread.join()
        self._thread = None
        if self._socket is not None:
            self._socket.close()

    def _run(self) -> None:
        assert self._socket is not None
        while self._running.is_set():
            self._logger.debug("waiting for connection...")
            try:
                client, address = self._socket.accept()
            except OSError:
                continue
            self._logger.debug("Accepted connection (host=%s, port=%s)", *address[:2])
            with client:
                client.settimeout(self.READ_TIMEOUT)
                try:
                    self._serve(client)
                except (ProtocolError, OSError) as exc:
                    self._logger.error("Failed to process connection: %s", exc)
        self._logger.warning("Network stopped")

    def _serve(self, client: socket.socket) -> None:
        parser = Parser()
        command: Optional[Command] = None
        arg_remains = 0
        argument = bytearray()

        while True:
            buffer = client.recv(_BUFFER_SIZE)
            if not buffer:
                self._logger.debug("Connection closed")
                return
            self._logger.debug("Got %d bytes from socket", len(buffer))

            while buffer:
                if command is None:
                    complete, parsed = parser.parse(buffer)
                    if complete:
                        built = parser.build()
                        if built is not None:
                            command, arg_remains = built
                            self._logger.debug("Found new command: %s in %d bytes", parser.name, parsed)
                            if arg_remains > 0:
                                arg_remains += 2
                    if parsed == 0:
                        break
                    buffer = buffer[parsed:]

                if command is not None and arg_remains > 0:
                    taken = min(arg_remains, len(buffer))
                    argument += buffer[:taken]
                    buffer = buffer[taken:]
                    arg_remains -= taken

                if command is not None and arg_remains == 0:
                    if argument:
                        del argument[-2:]
                    result = command.execute(self.storage, argument.decode(_ENCODING))
                    client.sendall((result + "\r\n").encode(_ENCODING))
                    command = None
                    argument.clear()
                    parser.reset()