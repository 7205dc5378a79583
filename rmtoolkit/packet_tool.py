"""Send and receive fixed-length packets over a transporter."""

from __future__ import annotations

import queue
import threading
from types import TracebackType

from rmtoolkit.packet import HEAD_BYTE, TAIL_BYTE, FixedPacket
from rmtoolkit.transporter import Transporter, TransporterError


class FixedPacketTool:
    """Frames packets onto a transporter and reassembles them from split reads."""

    def __init__(self, transporter: Transporter, capacity: int = 16) -> None:
        if transporter is None:
            raise ValueError("transporter is None")
        self._transporter = transporter
        self.capacity = capacity
        self._recv_buffer = bytearray()
        self._pending: queue.Queue[bytes] = queue.Queue()
        self._stop = threading.Event()
        self._sender: threading.Thread | None = None

    def is_open(self) -> bool:
        return self._transporter.is_open()

    def enable_realtime_send(self, enable: bool) -> None:
        """Queue packets and send them from a background thread when enabled."""
        if enable == (self._sender is not None):
            return
        if enable:
            self._stop.clear()
            self._sender = threading.Thread(target=self._send_loop, daemon=True)
            self._sender.start()
        else:
            self._stop.set()
            self._sender.join()
            self._sender = None

    def _send_loop(self) -> None:
        while not self._stop.is_set():
            try:
                frame = self._pending.get(timeout=0.001)
            except queue.Empty:
                continue
            self._send_frame(frame)

    def _reconnect(self) -> None:
        self._transporter.close()
        try:
            self._transporter.open()
        except (TransporterError, OSError):
            pass

    def _send_frame(self, frame: bytes) -> bool:
        try:
            written = self._transporter.write(frame)
        except (TransporterError, OSError):
            written = -1
        if written == self.capacity:
            return True
        self._reconnect()
        return False

    def send_packet(self, packet: FixedPacket) -> None:
        """Send ``packet``, or queue it when realtime sending is on."""
        if packet.capacity != self.capacity:
            raise ValueError(
                f"packet capacity {packet.capacity} does not match tool capacity {self.capacity}"
            )
        frame = packet.buffer()
        if self._sender is not None:
            self._pending.put(frame)
            return
        if not self._send_frame(frame):
            raise TransporterError("failed to send packet")

    def _is_valid(self, frame: bytes | bytearray) -> bool:
        return (
            len(frame) == self.capacity
            and frame[0] == HEAD_BYTE
            and frame[self.capacity - 1] == TAIL_BYTE
        )

    def _make_packet(self, frame: bytes | bytearray) -> FixedPacket:
        packet = FixedPacket(self.capacity)
        packet.copy_from(bytes(frame))
        return packet

    def recv_packet(self) -> FixedPacket | None:
        """Read once and return a complete packet, or None if none is complete yet."""
        try:
            data = self._transporter.read(self.capacity)
        except (TransporterError, OSError) as exc:
            self._reconnect()
            raise TransporterError("failed to read from transporter") from exc
        if not data:
            self._reconnect()
            raise TransporterError("failed to read from transporter")
        if self._is_valid(data):
            return self._make_packet(data)
        if len(self._recv_buffer) + len(data) > self.capacity * 2:
            self._recv_buffer.clear()
        self._recv_buffer.extend(data)
        for start in range(len(self._recv_buffer) - self.capacity + 1):
            frame = self._recv_buffer[start : start + self.capacity]
            if self._is_valid(frame):
                del self._recv_buffer[: start + self.capacity]
                return self._make_packet(frame)
        return None

    def close(self) -> None:
        """Stop the realtime sender, if running."""
        self.enable_realtime_send(False)

    def __enter__(self) -> FixedPacketTool:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()