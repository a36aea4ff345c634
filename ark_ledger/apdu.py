"""APDU framing for the ARK Ledger application.

APDU header: CLA + INS + P1 + P2, followed by up to 255 payload bytes.

App / PublicKey context:
    P1 requests user approval (P1_NON_CONFIRM, P1_CONFIRM).
    P2 selects the chaincode (P2_NO_CHAINCODE, P2_CHAINCODE).

Signing context:
    P1 is the payload segment:
        P1_SINGLE  N(1) where N == 1
        P1_FIRST   N(1) where N > 1
        P1_MORE    N(2)..N-1 where N > 2
        P1_LAST    Nth where N > 1
    P2 selects the signature scheme (P2_ECDSA).
"""

import logging
from enum import IntEnum
from typing import List

from .errors import ApduPayloadChunkError, ApduPayloadLengthError

logger = logging.getLogger(__name__)

CHUNK_SIZE = 255
CHUNK_MAX = 10
PAYLOAD_MAX = CHUNK_MAX * CHUNK_SIZE
TRAILER_SIZE = 2


class ApduFlags(IntEnum):
    CLA = 0xe0

    INS_GET_PUBLIC_KEY = 0x02
    INS_GET_VERSION = 0x06
    INS_SIGN_TRANSACTION = 0x04
    INS_SIGN_MESSAGE = 0x08

    P1_NON_CONFIRM = 0x00
    P1_CONFIRM = 0x01

    P2_NO_CHAINCODE = 0x00
    P2_CHAINCODE = 0x01

    P1_SINGLE = 0x80
    P1_FIRST = 0x00
    P1_MORE = 0x01
    P1_LAST = 0x81

    P2_ECDSA = 0x40


# P1_FIRST and P1_NON_CONFIRM share a value, so the enum aliases them.
def segment_flag(index: int, count: int) -> int:
    if 0 < index < count - 1:
        return ApduFlags.P1_MORE.value
    if index == count - 1 and count > 1:
        return ApduFlags.P1_LAST.value
    return ApduFlags.P1_FIRST.value


def strip_trailer(response: bytes) -> bytes:
    return bytes(response[:len(response) - TRAILER_SIZE])


class Apdu:
    """A single command, sent once through a transport.

    Payloads shorter than CHUNK_SIZE go out as one frame with the caller's P1.
    Anything longer is segmented and P1 carries the segment flag instead.
    """

    def __init__(self, cla: int, ins: int, p1: int, p2: int, payload: bytes = b''):
        if len(payload) >= PAYLOAD_MAX:
            raise ApduPayloadLengthError(len(payload), PAYLOAD_MAX)

        self._cla = int(cla)
        self._ins = int(ins)
        self._p1 = int(p1)
        self._p2 = int(p2)
        self._payload = bytes(payload)

    @property
    def cla(self) -> int:
        return self._cla

    @property
    def ins(self) -> int:
        return self._ins

    @property
    def p1(self) -> int:
        return self._p1

    @property
    def p2(self) -> int:
        return self._p2

    @property
    def payload(self) -> bytes:
        return self._payload

    @property
    def segmented(self) -> bool:
        return len(self._payload) >= CHUNK_SIZE

    def __repr__(self) -> str:
        return 'Apdu(cla=0x{:02X}, ins=0x{:02X}, p1=0x{:02X}, p2=0x{:02X}, payload={} bytes)'.format(
            self._cla, self._ins, self._p1, self._p2, len(self._payload))

    def send(self, transport) -> bytes:
        if not self.segmented:
            responses = [self._exchange(transport, self._p1, self._payload)]
        else:
            responses = self._send_chunked(transport)

        return b''.join(strip_trailer(r) for r in responses)

    def _chunks(self) -> List[bytes]:
        chunks = [self._payload[i:i + CHUNK_SIZE] for i in range(0, len(self._payload), CHUNK_SIZE)]
        if not chunks:
            raise ApduPayloadChunkError()
        return chunks

    def _send_chunked(self, transport) -> List[bytes]:
        chunks = self._chunks()
        logger.debug('Sending %d byte payload in %d chunks', len(self._payload), len(chunks))

        # one frame at a time, the device tracks the segment sequence
        responses = []
        for index, chunk in enumerate(chunks):
            responses.append(self._exchange(transport, segment_flag(index, len(chunks)), chunk))
        return responses

    def _exchange(self, transport, p1: int, payload: bytes) -> bytes:
        logger.debug('=> %02x%02x%02x%02x%s', self._cla, self._ins, p1, self._p2, payload.hex())
        response = transport.send(self._cla, self._ins, p1, self._p2, payload)
        logger.debug('<= %s', bytes(response).hex())
        return response
