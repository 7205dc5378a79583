"""Byte transports between the host computer and an embedded controller."""

from __future__ import annotations

import abc
import socket
from types import TracebackType


class TransporterError(Exception):
    """Raised when a transport cannot be opened, read from or written to."""


class Transporter(abc.ABC):
    """Common interface of a device that moves raw bytes to and from a controller."""

    @abc.abstractmethod
    def open(self) -> None:
        """Open the device; raise TransporterError on failure."""

    @abc.abstractmethod
    def close(self) -> None:
        """Close the device. Closing a closed device does nothing."""

    @abc.abstractmethod
    def is_open(self) -> bool:
        """Return whether the device is open."""

    @abc.abstractmethod
    def read(self, size: int) -> bytes:
        """Read at most ``size`` bytes; raise TransporterError on failure."""

    @abc.abstractmethod
    def write(self, data: bytes) -> int:
        """Write ``data`` and return the number of bytes sent."""

    def __enter__(self) -> Transporter:
        self.open()
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()


def _check_port(port: int) -> int:
    if not 0 <= port <= 0xFFFF:
        raise ValueError(f"port {port} is out of range (0-65535)")
    return port


class UdpTransporter(Transporter):
    """UDP transport: receives on a local port and sends to a target address."""

    def __init__(self, port: int, target_port: int, target_ip: str = "127.0.0.1") -> None:
        self.port = _check_port(port)
        self.target_port = _check_port(target_port)
        self.target_ip = target_ip
        self._recv_sock: socket.socket | None = None
        self._send_sock: socket.socket | None = None

    def open(self) -> None:
        if self.is_open():
            return
        try:
            recv_sock = socket.socket(socket.AF_INET, socket.SOCK_DGRAM)
        except OSError as exc:
            raise TransporterError("create socket failed") from exc
        try:
            recv_sock.bind(("0.0.0.0", self.port))
        except OSError as exc:
            recv_sock.close()
            raise TransporterError(f"bind port {self.port} failed") from exc
        try:
            send_sock = socket.socket(socket.AF_INET, socket.SOCK_DGRAM)
        except OSError as exc:
            recv_sock.close()
            raise TransporterError("create socket failed") from exc
        self._recv_sock = recv_sock
        self._send_sock = send_sock

    def close(self) -> None:
        if self._recv_sock is not None:
            self._recv_sock.close()
            self._recv_sock = None
        if self._send_sock is not None:
            self._send_sock.close()
            self._send_sock = None

    def is_open(self) -> bool:
        return self._recv_sock is not None

    def read(self, size: int) -> bytes:
        if self._recv_sock is None:
            raise TransporterError("transporter is not open")
        try:
            return self._recv_sock.recv(size)
        except OSError as exc:
            raise TransporterError(f"receive failed: {exc}") from exc

    def write(self, data: bytes) -> int:
        if self._send_sock is None:
            raise TransporterError("transporter is not open")
        try:
            return self._send_sock.sendto(bytes(data), (self.target_ip, self.target_port))
        except OSError as exc:
            raise TransporterError(f"send failed: {exc}") from exc