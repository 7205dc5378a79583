"""Serial (UART) transport to an embedded controller."""

from __future__ import annotations

import serial

from rmtoolkit.transporter import Transporter, TransporterError

_SUPPORTED_SPEEDS = frozenset(
    {
        1152000,
        1000000,
        921600,
        576000,
        500000,
        460800,
        230400,
        115200,
        19200,
        9600,
        4800,
        2400,
        1200,
        300,
    }
)

_DATABITS = {
    5: serial.FIVEBITS,
    6: serial.SIXBITS,
    7: serial.SEVENBITS,
    8: serial.EIGHTBITS,
}

# "Space" parity disables the parity bit, as the line settings do.
_PARITIES = {
    "N": serial.PARITY_NONE,
    "O": serial.PARITY_ODD,
    "E": serial.PARITY_EVEN,
    "S": serial.PARITY_NONE,
}

_STOPBITS = {
    1: serial.STOPBITS_ONE,
    2: serial.STOPBITS_TWO,
}


class UartTransporter(Transporter):
    """Raw serial line with configurable speed, flow control, framing and parity.

    ``device_path`` may be a device file or any URL understood by pyserial
    (for example ``loop://``).
    """

    def __init__(
        self,
        device_path: str = "/dev/ttyUSB0",
        speed: int = 115200,
        flow_ctrl: int = 0,
        databits: int = 8,
        stopbits: int = 1,
        parity: str = "N",
    ) -> None:
        self.device_path = device_path
        self.speed = speed
        self.flow_ctrl = flow_ctrl
        self.databits = databits
        self.stopbits = stopbits
        self.parity = parity
        self._serial: serial.SerialBase | None = None

    def _configure(self, port: serial.SerialBase) -> None:
        if self.speed in _SUPPORTED_SPEEDS:
            port.baudrate = self.speed
        port.rtscts = self.flow_ctrl == 1
        port.xonxoff = self.flow_ctrl == 2
        try:
            port.bytesize = _DATABITS[self.databits]
        except KeyError:
            raise TransporterError("Unsupported data size") from None
        try:
            port.parity = _PARITIES[str(self.parity).upper()]
        except KeyError:
            raise TransporterError("Unsupported parity") from None
        try:
            port.stopbits = _STOPBITS[self.stopbits]
        except KeyError:
            raise TransporterError("Unsupported stop bits") from None
        port.timeout = None

    def open(self) -> None:
        if self.is_open():
            return
        try:
            port = serial.serial_for_url(self.device_path, do_not_open=True)
        except (serial.SerialException, OSError, ValueError) as exc:
            raise TransporterError(f"can't open uart device: {self.device_path}") from exc
        self._configure(port)
        try:
            port.open()
        except (serial.SerialException, OSError, ValueError) as exc:
            raise TransporterError(f"can't open uart device: {self.device_path}") from exc
        try:
            port.reset_input_buffer()
        except (serial.SerialException, OSError) as exc:
            port.close()
            raise TransporterError("com set error") from exc
        self._serial = port

    def close(self) -> None:
        if self._serial is None:
            return
        self._serial.close()
        self._serial = None

    def is_open(self) -> bool:
        return self._serial is not None and self._serial.is_open

    def read(self, size: int) -> bytes:
        """Block for at least one byte, then return what has arrived, up to ``size``."""
        if self._serial is None:
            raise TransporterError("transporter is not open")
        if size <= 0:
            return b""
        try:
            data = self._serial.read(1)
            extra = min(size - len(data), self._serial.in_waiting)
            if extra > 0:
                data += self._serial.read(extra)
        except (serial.SerialException, OSError) as exc:
            raise TransporterError(f"receive failed: {exc}") from exc
        return bytes(data)

    def write(self, data: bytes) -> int:
        if self._serial is None:
            raise TransporterError("transporter is not open")
        try:
            written = self._serial.write(bytes(data))
        except (serial.SerialException, OSError) as exc:
            raise TransporterError(f"send failed: {exc}") from exc
        return len(data) if written is None else written