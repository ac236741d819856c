import pytest

from euiccdrv.interface import ApduDriver, DriverError, DriverType, HttpDriver


class LoopbackApdu(ApduDriver):
    name = "loopback"

    def __init__(self):
        self.closed = False
        self.channel = 0

    def connect(self):
        pass

    def disconnect(self):
        pass

    def logic_channel_open(self, aid):
        if not aid:
            raise DriverError("empty aid")
        self.channel = 1
        return self.channel

    def logic_channel_close(self, channel):
        self.channel = 0

    def transmit(self, tx):
        return bytes(tx) + b"\x90\x00"

    def close(self):
        self.closed = True


class LoopbackHttp(HttpDriver):
    name = "loopback"

    def transmit(self, url, tx, headers):
        return 200, tx or b""


class Partial(ApduDriver):
    def connect(self):
        pass


def test_abstract_classes_cannot_be_instantiated():
    with pytest.raises(TypeError):
        ApduDriver()
    with pytest.raises(TypeError):
        HttpDriver()
    with pytest.raises(TypeError):
        Partial()


def test_context_manager_returns_http_driver():
    driver = LoopbackHttp()
    entered = HttpDriver.__enter__(driver)
    assert entered is driver
    assert entered.transmit("https://example.com", b"x", []) == (200, b"x")