"""
Single-instance channel.

The first BookShop process listens on a local socket. A second launch
forwards its argv there and exits; the running instance turns the
arguments into a re-activation.
"""
import json
from typing import List, Optional, Sequence

from PySide6.QtCore import QByteArray, QObject, Signal
from PySide6.QtNetwork import QLocalServer, QLocalSocket
from loguru import logger


def encode_arguments(argv: Sequence[str]) -> bytes:
    return json.dumps({"argv": list(argv)}).encode("utf-8")


def decode_arguments(payload: bytes) -> Optional[List[str]]:
    """Decoded argv, or None for anything that is not a valid message."""
    try:
        message = json.loads(payload.decode("utf-8"))
    except (UnicodeDecodeError, json.JSONDecodeError):
        return None
    argv = message.get("argv") if isinstance(message, dict) else None
    if not isinstance(argv, list) or not all(isinstance(a, str) for a in argv):
        return None
    return argv


class InstanceChannel(QObject):
    """
    Local-socket rendezvous between BookShop processes.

    Usage:
        channel = InstanceChannel()
        if channel.forward(sys.argv):
            return 0                  # another instance took over
        channel.listen()
        channel.arguments_received.connect(on_reactivate)
    """
    arguments_received = Signal(list)

    def __init__(self, name: str = "bookshop-instance", parent=None):
        super().__init__(parent)
        self.name = name
        self._server: Optional[QLocalServer] = None
        self._buffers = {}

    def forward(self, argv: Sequence[str], timeout_ms: int = 500) -> bool:
        """Send ``argv`` to a running instance. False if none is listening."""
        socket = QLocalSocket()
        socket.connectToServer(self.name)
        if not socket.waitForConnected(timeout_ms):
            return False
        socket.write(QByteArray(encode_arguments(argv)))
        socket.flush()
        socket.waitForBytesWritten(timeout_ms)
        socket.disconnectFromServer()
        logger.info("Forwarded arguments to the running instance")
        return True

    def listen(self) -> bool:
        self._server = QLocalServer(self)
        # Clean up a stale socket left by a crashed process
        QLocalServer.removeServer(self.name)
        if not self._server.listen(self.name):
            logger.warning(f"Single-instance channel unavailable: {self._server.errorString()}")
            return False
        self._server.newConnection.connect(self._on_new_connection)
        logger.debug(f"Listening for re-activation on {self.name}")
        return True

    def close(self):
        if self._server is not None:
            self._server.close()
            self._server = None
        self._buffers.clear()

    def _on_new_connection(self):
        while self._server is not None and self._server.hasPendingConnections():
            socket = self._server.nextPendingConnection()
            self._buffers[socket] = bytearray()
            socket.readyRead.connect(lambda s=socket: self._on_ready_read(s))
            socket.disconnected.connect(lambda s=socket: self._on_disconnected(s))

    def _on_ready_read(self, socket: QLocalSocket):
        self._buffers.setdefault(socket, bytearray()).extend(bytes(socket.readAll().data()))

    def _on_disconnected(self, socket: QLocalSocket):
        self._on_ready_read(socket)
        payload = bytes(self._buffers.pop(socket, b""))
        socket.deleteLater()
        argv = decode_arguments(payload)
        if argv is None:
            logger.warning("Ignored malformed re-activation message")
            return
        self.arguments_received.emit(argv)
