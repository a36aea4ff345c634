import logging

from .apdu import Apdu, ApduFlags
from .bip32 import Bip32Path

logger = logging.getLogger(__name__)

API_METHODS = ['get_version', 'get_public_key', 'sign_message', 'sign_transaction']
SCRAMBLE_KEY = 'w0w'


class ARK:
    """ARK application on a Ledger device.

    The transport's API lock is installed on every public call, so overlapping
    calls on one transport are rejected instead of interleaving their frames.
    Nothing is retried; transport failures reach the caller as raised.
    """

    def __init__(self, transport):
        self.transport = transport
        self.transport.decorate_app_api_methods(self, API_METHODS, SCRAMBLE_KEY)

    def get_version(self) -> str:
        response = Apdu(
            ApduFlags.CLA,
            ApduFlags.INS_GET_VERSION,
            ApduFlags.P1_NON_CONFIRM,
            ApduFlags.P2_NO_CHAINCODE,
        ).send(self.transport)

        return '{}.{}.{}'.format(response[1], response[2], response[3])

    def get_public_key(self, path: str) -> str:
        response = Apdu(
            ApduFlags.CLA,
            ApduFlags.INS_GET_PUBLIC_KEY,
            ApduFlags.P1_NON_CONFIRM,
            ApduFlags.P2_NO_CHAINCODE,
            Bip32Path.from_string(path).to_bytes(),
        ).send(self.transport)

        return response[1:1 + response[0]].hex()

    def sign_message(self, path: str, message: bytes) -> str:
        return self._sign(ApduFlags.INS_SIGN_MESSAGE, path, message)

    def sign_transaction(self, path: str, transaction: bytes) -> str:
        return self._sign(ApduFlags.INS_SIGN_TRANSACTION, path, transaction)

    def _sign(self, ins: int, path: str, payload: bytes) -> str:
        apdu = Apdu(
            ApduFlags.CLA,
            ins,
            ApduFlags.P1_SINGLE,
            ApduFlags.P2_ECDSA,
            Bip32Path.from_string(path).to_bytes() + bytes(payload),
        )
        logger.debug('Signing %s', apdu)

        return apdu.send(self.transport).hex()
