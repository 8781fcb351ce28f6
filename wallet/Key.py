import logging
import os

import ecdsa

from script import scriptUtils

logging.basicConfig(
    level=getattr(logging, os.environ.get('TC_LOG_LEVEL', 'INFO')),
    format='[%(asctime)s][%(module)s:%(lineno)d] %(levelname)s %(message)s')
logger = logging.getLogger(__name__)


class Key(object):
    """
    A secp256k1 key pair. The private half is optional so that watching keys
    (public key only) can live in the same key bag as spending keys.
    """

    def __init__(self, verifying_key: ecdsa.VerifyingKey, signing_key: ecdsa.SigningKey = None,
                 compressed: bool = True):
        self.verifying_key = verifying_key
        self.signing_key = signing_key
        self.compressed = compressed

    @classmethod
    def generate(cls, compressed=True):
        signing_key = ecdsa.SigningKey.generate(curve=ecdsa.SECP256k1)
        return cls(signing_key.get_verifying_key(), signing_key, compressed)

    @classmethod
    def from_private(cls, secret: bytes, compressed=True):
        signing_key = ecdsa.SigningKey.from_string(secret, curve=ecdsa.SECP256k1)
        return cls(signing_key.get_verifying_key(), signing_key, compressed)

    @classmethod
    def from_pubkey(cls, pubkey: bytes):
        """Watching key from a SEC encoded (33 or 65 byte) public key."""
        try:
            verifying_key = ecdsa.VerifyingKey.from_string(pubkey, curve=ecdsa.SECP256k1)
        except (ecdsa.MalformedPointError, ValueError):
            logger.exception(f'[wallet] bad public key {pubkey.hex()}')
            raise ValueError(f'not a secp256k1 public key: {pubkey.hex()}')
        return cls(verifying_key, None, compressed=len(pubkey) == 33)

    @property
    def pubkey(self) -> bytes:
        return self.verifying_key.to_string('compressed' if self.compressed else 'uncompressed')

    @property
    def pubkey_hash(self) -> bytes:
        return scriptUtils.hash160(self.pubkey)

    def has_private_key(self) -> bool:
        return self.signing_key is not None

    def to_address(self) -> str:
        return scriptUtils.pubkeyhash_to_address(self.pubkey_hash)

    def __eq__(self, other):
        return isinstance(other, Key) and self.pubkey == other.pubkey

    def __hash__(self):
        return hash(self.pubkey)

    def __repr__(self):
        return f"Key(pubkey={self.pubkey.hex()}, private={self.has_private_key()})"
