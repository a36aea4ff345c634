import pytest

from ark_ledger.transport import Transport

PATH = "44'/111'/0'/0/0"
PATH_BYTES = bytes.fromhex('058000002c8000006f800000000000000000000000')


def parse_record(record: str):
    """Turn "=> apdu" / "<= response" hex lines into (apdu, response) pairs."""
    lines = [line.strip() for line in record.strip().splitlines() if line.strip()]
    exchanges = []
    for out, back in zip(lines[0::2], lines[1::2]):
        assert out.startswith('=>') and back.startswith('<=')
        exchanges.append((bytes.fromhex(out[2:].strip()), bytes.fromhex(back[2:].strip())))
    return exchanges


class ReplayTransport(Transport):
    """Replays a recorded APDU exchange and fails on any unexpected frame."""

    def __init__(self, record: str = ''):
        super().__init__()
        self.exchanges = parse_record(record) if record else []
        self.sent = []

    def exchange(self, cla, ins, p1, p2, payload):
        apdu = bytes([cla, ins, p1, p2, len(payload)]) + payload
        self.sent.append((cla, ins, p1, p2, bytes(payload)))
        assert self.exchanges, 'unexpected apdu {}'.format(apdu.hex())

        expected, response = self.exchanges.pop(0)
        assert apdu == expected, '{} != {}'.format(apdu.hex(), expected.hex())
        return int.from_bytes(response[-2:], byteorder='big'), response[:-2]


class EchoTransport(Transport):
    """Answers every frame with its own payload and a success status."""

    def __init__(self):
        super().__init__()
        self.sent = []

    def exchange(self, cla, ins, p1, p2, payload):
        self.sent.append((cla, ins, p1, p2, bytes(payload)))
        return 0x9000, bytes(payload)


@pytest.fixture
def replay():
    return ReplayTransport


@pytest.fixture
def echo():
    return EchoTransport()
