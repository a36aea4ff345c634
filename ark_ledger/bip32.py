"""BIP32 path parsing.

https://github.com/bitcoin/bips/blob/master/bip-0032.mediawiki
https://github.com/bitcoin/bips/blob/master/bip-0044.mediawiki

    Bip32Path.from_string("44'/111'/0'/0/0").to_bytes()
"""

import re
from typing import Tuple

from .errors import Bip32ElementError, Bip32PathError

HARDENED = 0x80000000
UINT32_MAX = 0xffffffff

_LEVEL = re.compile(r"([0-9]+)'?")


class Bip32Path:
    def __init__(self, elements: Tuple[int, ...]):
        self._elements = tuple(elements)

    @property
    def elements(self) -> Tuple[int, ...]:
        return self._elements

    def __len__(self) -> int:
        return len(self._elements)

    def __eq__(self, other) -> bool:
        return isinstance(other, Bip32Path) and self._elements == other._elements

    def __hash__(self) -> int:
        return hash(self._elements)

    def __repr__(self) -> str:
        return 'Bip32Path({})'.format(', '.join('0x{:08X}'.format(e) for e in self._elements))

    @classmethod
    def from_string(cls, path: str) -> 'Bip32Path':
        """Parse a path such as "44'/111'/0'/0/0".

        A trailing apostrophe hardens a level, but only when the level is
        longer than the apostrophe itself.
        """
        if not path:
            raise Bip32PathError()

        elements = []
        for level in path.split('/'):
            match = _LEVEL.fullmatch(level)
            if match is None:
                raise Bip32ElementError(level)

            element = int(match.group(1), 10)
            if len(level) > 1 and level.endswith("'"):
                element += HARDENED

            if element > UINT32_MAX:
                raise Bip32ElementError(level)
            elements.append(element)

        return cls(tuple(elements))

    def to_bytes(self) -> bytes:
        # count byte, then each element as a big-endian uint32
        if len(self._elements) > 0xff:
            raise Bip32PathError('Bip32 Path has too many elements: {}'.format(len(self._elements)))

        payload = bytearray([len(self._elements)])
        for element in self._elements:
            payload += element.to_bytes(4, byteorder='big')
        return bytes(payload)
