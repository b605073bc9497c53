import pytest

from suica_history.transport import TransportError

IDM = bytes.fromhex("0123456789ABCDEF")


class FakeTransport:
    """Replays canned responses; an exception in the list is raised instead."""

    def __init__(self, responses=(), connect_error=None, close_error=None):
        self.responses = list(responses)
        self.connect_error = connect_error
        self.close_error = close_error
        self.sent: list[bytes] = []
        self.connected = False
        self.closed = False

    def connect(self):
        if self.connect_error is not None:
            raise self.connect_error
        self.connected = True

    def transceive(self, frame):
        self.sent.append(frame)
        if not self.responses:
            return b""
        response = self.responses.pop(0)
        if isinstance(response, Exception):
            raise response
        return response

    def close(self):
        self.closed = True
        if self.close_error is not None:
            raise self.close_error


def make_block(balance, process_type=0x01, date=(24, 5, 17), terminal=0x16):
    year, month, day = date
    packed = (year << 9) | (month << 5) | day
    block = bytearray(16)
    block[0] = terminal
    block[1] = process_type
    block[4] = packed >> 8
    block[5] = packed & 0xFF
    block[10] = balance & 0xFF
    block[11] = balance >> 8
    return bytes(block)


def make_response(block, status=(0x00, 0x00), idm=IDM):
    body = bytes([0x07]) + idm + bytes(status) + bytes([0x01]) + block
    return bytes([len(body) + 1]) + body


@pytest.fixture
def idm():
    return IDM


@pytest.fixture
def block_factory():
    return make_block


@pytest.fixture
def response_factory():
    return make_response


@pytest.fixture
def fake_transport():
    def factory(
        balances=(), *, extra=(), connect_error=None, close_error=None, **block_kwargs
    ):
        responses = [
            make_response(make_block(balance, **block_kwargs)) for balance in balances
        ]
        responses.extend(extra)
        return FakeTransport(
            responses, connect_error=connect_error, close_error=close_error
        )

    return factory


@pytest.fixture
def transport_error():
    return TransportError("timed out")
