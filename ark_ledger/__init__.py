from .apdu import Apdu, ApduFlags, segment_flag
from .ark import ARK
from .bip32 import Bip32Path
from .errors import (
    ApduPayloadChunkError,
    ApduPayloadLengthError,
    Bip32ElementError,
    Bip32PathError,
    LedgerTransportError,
    TransportError,
    TransportLockedError,
    TransportStatusError,
)
from .transport import LedgerCommTransport, Transport

__version__ = '0.1.0'
