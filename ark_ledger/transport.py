"""Transport contract consumed by the ARK client.

A transport moves one APDU to the device and returns the response with its
2-byte status word still attached. It also owns the API lock: the device runs
one command sequence at a time, so a chunked signing sequence must never be
interleaved with frames from another call on the same transport.
"""

import functools
import logging
import threading
from typing import Iterable, List, Tuple

from ledgercomm import Transport as LedgerCommDevice

from .errors import TransportLockedError, TransportStatusError

logger = logging.getLogger(__name__)

SUCCESS = 0x9000


class Transport:
    def __init__(self, status_list: Iterable[int] = (SUCCESS,)):
        self.status_list: List[int] = list(status_list)
        self.scramble_key: str = ''
        self._api_lock = threading.Lock()
        self._api_lock_owner = None

    def exchange(self, cla: int, ins: int, p1: int, p2: int, payload: bytes) -> Tuple[int, bytes]:
        raise NotImplementedError

    def send(self, cla: int, ins: int, p1: int = 0, p2: int = 0, payload: bytes = b'') -> bytes:
        sw, response = self.exchange(cla, ins, p1, p2, payload)
        if sw not in self.status_list:
            raise TransportStatusError(sw)

        return bytes(response) + sw.to_bytes(2, byteorder='big')

    def close(self) -> None:
        pass

    def decorate_app_api_methods(self, target, method_names: Iterable[str], scramble_key: str) -> None:
        for name in method_names:
            method = getattr(target, name)
            setattr(target, name, self._decorate_app_api_method(name, method, scramble_key))

    def _decorate_app_api_method(self, name: str, method, scramble_key: str):
        @functools.wraps(method)
        def locked(*args, **kwargs):
            # check and claim together
            with self._api_lock:
                if self._api_lock_owner is not None:
                    raise TransportLockedError(self._api_lock_owner)
                self._api_lock_owner = name

            try:
                self.scramble_key = scramble_key
                logger.debug('Transport locked by %s', name)
                return method(*args, **kwargs)
            finally:
                with self._api_lock:
                    self._api_lock_owner = None

        return locked


class LedgerCommTransport(Transport):
    """Ledger device over USB HID, or Speculos over TCP, through ledgercomm."""

    def __init__(self, interface: str = 'hid', server: str = '127.0.0.1', port: int = 9999,
                 debug: bool = False, status_list: Iterable[int] = (SUCCESS,)):
        super().__init__(status_list)
        self.device = LedgerCommDevice(interface=interface, server=server, port=port, debug=debug)

    def exchange(self, cla: int, ins: int, p1: int, p2: int, payload: bytes) -> Tuple[int, bytes]:
        return self.device.exchange(cla=cla, ins=ins, p1=p1, p2=p2, cdata=payload)

    def close(self) -> None:
        self.device.close()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_value, traceback):
        self.close()
