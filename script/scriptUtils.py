import hashlib

from base58 import b58encode_check, b58decode_check

from params.Params import Params

__all__ = ['sha256', 'ripemd160', 'hash160',
           'pubkeyhash_to_address', 'scripthash_to_address', 'address_to_hash160']


# ————————————————Hash Utils——————————————————
def sha256(data):
    return hashlib.sha256(data).digest()


def ripemd160(data):
    if 'ripemd160' not in hashlib.algorithms_available:
        raise RuntimeError('missing ripemd160 hash algorithm')
    return hashlib.new('ripemd160', data).digest()


def hash160(data):
    return ripemd160(sha256(data))


# —————————————Address Utils————————————

# See: https://en.bitcoin.it/wiki/Technical_background_of_Bitcoin_addresses
def pubkeyhash_to_address(publickey_hash: bytes, version=Params.PUBKEY_HASH_VERSION) -> str:
    return _encode_check(version + publickey_hash)


def scripthash_to_address(script_hash: bytes, version=Params.SCRIPT_HASH_VERSION) -> str:
    return _encode_check(version + script_hash)


def address_to_hash160(address: str) -> bytes:
    """Strip the version byte and checksum from a base58check address."""
    payload = b58decode_check(address)
    if len(payload) != 21:
        raise ValueError(f'{address} does not carry a 20 byte hash')
    return payload[1:]


def _encode_check(payload: bytes) -> str:
    address = b58encode_check(payload)
    return address if isinstance(address, str) else str(address, encoding="utf-8")
