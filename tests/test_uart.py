import pytest

from rmtoolkit.packet import FixedPacket
from rmtoolkit.packet_tool import FixedPacketTool
from rmtoolkit.transporter import TransporterError
from rmtoolkit.uart import UartTransporter


def test_open_and_close_loopback():
    uart = UartTransporter("loop://")
    assert uart.is_open() is False
    uart.open()
    assert uart.is_open() is True
    uart.close()
    assert uart.is_open() is False


def test_open_twice_keeps_device_open():
    uart = UartTransporter("loop://")
    uart.open()
    uart.open()
    assert uart.is_open() is True
    uart.close()


def test_write_then_read_round_trip():
    data = bytes(range(32))
    with UartTransporter("loop://") as uart:
        assert uart.write(data) == len(data)
        assert uart.read(32) == data


def test_read_returns_at_most_size():
    data = bytes(range(10))
    with UartTransporter("loop://") as uart:
        uart.write(data)
        first = uart.read(4)
        rest = uart.read(32)
    assert first == data[:4]
    assert rest == data[4:]


def test_context_manager_closes():
    uart = UartTransporter("loop://")
    with uart:
        assert uart.is_open() is True
    assert uart.is_open() is False


@pytest.mark.parametrize("databits", [4, 9])
def test_unsupported_data_size(databits):
    uart = UartTransporter("loop://", databits=databits)
    with pytest.raises(TransporterError, match="Unsupported data size"):
        uart.open()
    assert uart.is_open() is False


def test_unsupported_parity():
    uart = UartTransporter("loop://", parity="X")
    with pytest.raises(TransporterError, match="Unsupported parity"):
        uart.open()
    assert uart.is_open() is False


def test_unsupported_stop_bits():
    uart = UartTransporter("loop://", stopbits=3)
    with pytest.raises(TransporterError, match="Unsupported stop bits"):
        uart.open()
    assert uart.is_open() is False


@pytest.mark.parametrize("parity", ["n", "o", "e", "s", "N", "O", "E", "S"])
def test_all_parities_accepted(parity):
    with UartTransporter("loop://", parity=parity) as uart:
        assert uart.is_open() is True


@pytest.mark.parametrize("flow_ctrl", [0, 1, 2])
def test_flow_control_modes_open(flow_ctrl):
    with UartTransporter("loop://", flow_ctrl=flow_ctrl) as uart:
        assert uart.write(b"\x01\x02") == 2
        assert uart.read(2) == b"\x01\x02"


def test_missing_device_raises():
    uart = UartTransporter("/nonexistent/tty_device_for_tests")
    with pytest.raises(TransporterError, match="can't open uart device"):
        uart.open()
    assert uart.is_open() is False


def test_read_when_closed_raises():
    with pytest.raises(TransporterError):
        UartTransporter("loop://").read(4)


def test_write_when_closed_raises():
    with pytest.raises(TransporterError):
        UartTransporter("loop://").write(b"\x00")


def test_packet_tool_over_loopback():
    with UartTransporter("loop://") as uart:
        tool = FixedPacketTool(uart, 16)
        packet = FixedPacket(16)
        packet.load_data("<f", 1.5, 3)
        tool.send_packet(packet)
        received = tool.recv_packet()
    assert received == packet
    assert received.unload_data("<f", 3) == 1.5