import binascii
import hashlib
import struct
from typing import Tuple, Union

from params.Params import Params
from utils.Errors import ProtocolError




class Utils(object):

    @classmethod
    def sha256d(cls, s: Union[str, bytes]) -> bytes:
        """A double SHA-256 hash."""
        if not isinstance(s, bytes):
            s = s.encode()

        return hashlib.sha256(hashlib.sha256(s).digest()).digest()

    @classmethod
    def reverse_bytes(cls, data: bytes) -> bytes:
        return bytes(data[::-1])

    @classmethod
    def to_hex(cls, data: bytes) -> str:
        return binascii.hexlify(data).decode()

    @classmethod
    def check_available(cls, payload: bytes, offset: int, length: int):
        """Raise ProtocolError unless `length` bytes can be read at `offset`."""
        if offset < 0:
            raise ProtocolError(f'negative offset {offset}')
        if len(payload) - offset < length:
            raise ProtocolError(
                f'need {length} bytes at offset {offset}, '
                f'only {max(len(payload) - offset, 0)} available')

    # ————————————————reading————————————————

    @classmethod
    def read_hash(cls, payload: bytes, offset: int) -> bytes:
        """Read a wire-order hash and return it in display order."""
        cls.check_available(payload, offset, Params.HASH_SIZE)
        return cls.reverse_bytes(payload[offset:offset + Params.HASH_SIZE])

    @classmethod
    def read_uint32(cls, payload: bytes, offset: int) -> int:
        cls.check_available(payload, offset, 4)
        return struct.unpack_from('<I', payload, offset)[0]

    @classmethod
    def read_int64(cls, payload: bytes, offset: int) -> int:
        cls.check_available(payload, offset, 8)
        return struct.unpack_from('<q', payload, offset)[0]

    @classmethod
    def read_varint(cls, payload: bytes, offset: int) -> Tuple[int, int]:
        """Returns (value, bytes consumed)."""
        cls.check_available(payload, offset, 1)
        first = payload[offset]
        if first < 0xfd:
            return first, 1
        width = {0xfd: 2, 0xfe: 4, 0xff: 8}[first]
        cls.check_available(payload, offset + 1, width)
        return int.from_bytes(payload[offset + 1:offset + 1 + width], 'little'), 1 + width

    @classmethod
    def read_bytes(cls, payload: bytes, offset: int, length: int) -> bytes:
        cls.check_available(payload, offset, length)
        return bytes(payload[offset:offset + length])

    # ————————————————writing————————————————

    @classmethod
    def uint32_to_bytes_le(cls, value: int) -> bytes:
        if not 0 <= value <= Params.MAX_UINT32:
            raise ValueError(f'{value} does not fit in a uint32')
        return struct.pack('<I', value)

    @classmethod
    def int64_to_bytes_le(cls, value: int) -> bytes:
        return struct.pack('<q', value)

    @classmethod
    def varint(cls, value: int) -> bytes:
        if value < 0xfd:
            return struct.pack('<B', value)
        elif value <= 0xffff:
            return b'\xfd' + struct.pack('<H', value)
        elif value <= 0xffffffff:
            return b'\xfe' + struct.pack('<I', value)
        return b'\xff' + struct.pack('<Q', value)
