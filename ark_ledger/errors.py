class LedgerTransportError(Exception):
    pass


class Bip32PathError(LedgerTransportError):
    def __init__(self, message: str = 'Invalid Bip32 Path.'):
        super().__init__(message)


class Bip32ElementError(LedgerTransportError):
    def __init__(self, element: str = None):
        self.element = element
        if element is None:
            super().__init__('Invalid Bip32 Element.')
        else:
            super().__init__('Invalid Bip32 Element: {!r}.'.format(element))


class ApduPayloadLengthError(LedgerTransportError):
    def __init__(self, length: int, limit: int):
        self.length = length
        self.limit = limit
        super().__init__('Payload length of {} exceeds {}.'.format(length, limit))


class ApduPayloadChunkError(LedgerTransportError):
    def __init__(self):
        super().__init__('Apdu payload could not be split into chunks.')


class TransportError(LedgerTransportError):
    pass


class TransportStatusError(TransportError):
    def __init__(self, status_word: int):
        self.status_word = status_word
        super().__init__('Ledger device returned status 0x{:04X}'.format(status_word))


class TransportLockedError(TransportError):
    def __init__(self, lock: str):
        self.lock = lock
        super().__init__('Ledger device is busy (lock {})'.format(lock))
