import logging
import os
import threading

from params.Params import Params
from utils.Utils import Utils

logging.basicConfig(
    level=getattr(logging, os.environ.get('TC_LOG_LEVEL', 'INFO')),
    format='[%(asctime)s][%(module)s:%(lineno)d] %(levelname)s %(message)s')
logger = logging.getLogger(__name__)


class BaseMessage(object):
    """
    A wire message which may be decoded lazily and may keep its backing bytes.

    A message built from bytes starts Unparsed when `parse_lazy` is set and is
    decoded on the first field read (or `ensure_parsed()`), otherwise it is
    decoded straight away. With `parse_retain` the encoded bytes are kept after
    decoding so `bitcoin_serialize()` can hand them back without re-encoding.
    Any field change must go through `uncache()`, which drops the bytes here
    and in the enclosing message.

    Subclasses implement `_parse()` and `_serialize_fields()`, and guard every
    field read with `ensure_parsed()`.
    """

    def __init__(self, payload: bytes = None, offset: int = 0, parent: 'BaseMessage' = None,
                 parse_lazy: bool = Params.PARSE_LAZY, parse_retain: bool = Params.PARSE_RETAIN,
                 length: int = None):
        self._lock = threading.RLock()
        self.parent = parent
        self.parse_lazy = parse_lazy
        self.parse_retain = parse_retain
        self.length = length
        self._fixed_length = length is not None

        if payload is None:
            self._payload = None
            self._offset = 0
            self._parsed = True
            return

        if not isinstance(payload, bytes):
            # we may come back to these bytes later, nobody else gets to mutate them
            payload = bytes(payload)
        if length is not None:
            Utils.check_available(payload, offset, length)

        self._payload = payload
        self._offset = offset
        self._parsed = False

        # a variable length message has to be walked to find its end
        if not parse_lazy or length is None:
            self.ensure_parsed()

    def _parse(self):
        """Decode all fields from self._payload at self._offset and set self.length."""
        raise NotImplementedError

    def _serialize_fields(self) -> bytes:
        raise NotImplementedError

    @property
    def is_parsed(self) -> bool:
        return self._parsed

    def ensure_parsed(self):
        if self._parsed:
            return
        with self._lock:
            if self._parsed:
                return
            self._parse()
            self._parsed = True
            if not self.parse_retain:
                self._payload = None
                self._offset = 0

    def is_cached(self) -> bool:
        return self._payload is not None

    def uncache(self):
        """Drop the backing bytes, here and in every enclosing message."""
        self.ensure_parsed()
        with self._lock:
            self._payload = None
            self._offset = 0
            if not self._fixed_length:
                self.length = None
        if self.parent is not None:
            self.parent.uncache()

    def bitcoin_serialize(self) -> bytes:
        with self._lock:
            if self._payload is not None and self.length is not None:
                return self._payload[self._offset:self._offset + self.length]

            data = self._serialize_fields()
            if self.parse_retain:
                # keep the fresh encoding for the next call
                self._payload = data
                self._offset = 0
                self.length = len(data)
            return data

    @property
    def message_size(self) -> int:
        if self.length is None:
            self.length = len(self.bitcoin_serialize())
        return self.length

    def __getstate__(self):
        self.ensure_parsed()
        state = self.__dict__.copy()
        del state['_lock']
        state['_payload'] = None
        state['_offset'] = 0
        return state

    def __setstate__(self, state):
        self.__dict__.update(state)
        self._lock = threading.RLock()
