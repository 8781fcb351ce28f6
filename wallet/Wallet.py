import logging
import os
from typing import Dict, Iterable, List, Optional, Union

from script import scriptBuild
from script import scriptUtils

from params.Params import Params
from wallet.Key import Key
from wallet.KeyBag import KeyBag
from wallet.RedeemData import RedeemData

logging.basicConfig(
    level=getattr(logging, os.environ.get('TC_LOG_LEVEL', 'INFO')),
    format='[%(asctime)s][%(module)s:%(lineno)d] %(levelname)s %(message)s')
logger = logging.getLogger(__name__)


class Wallet(KeyBag):
    """In-memory key bag. Keys are indexed by public key and by hash160."""

    def __init__(self, keys: Iterable[Key] = ()):
        self._by_pubkey: Dict[bytes, Key] = {}
        self._by_pubkey_hash: Dict[bytes, Key] = {}
        self._redeem_data: Dict[bytes, RedeemData] = {}
        for key in keys:
            self.add_key(key)

    def add_key(self, key: Key):
        # a watching key never shadows a key we can sign with
        existing = self._by_pubkey.get(key.pubkey)
        if existing is not None and existing.has_private_key() and not key.has_private_key():
            return
        self._by_pubkey[key.pubkey] = key
        self._by_pubkey_hash[key.pubkey_hash] = key
        logger.debug(f'[wallet] added key {key.to_address()}')

    def add_redeem_data(self, redeem_data: RedeemData) -> bytes:
        """Register redeem data, returns the script hash it is found under."""
        script_hash = scriptUtils.hash160(redeem_data.redeem_script)
        self._redeem_data[script_hash] = redeem_data
        logger.debug(f'[wallet] added redeem script {scriptUtils.scripthash_to_address(script_hash)}')
        return script_hash

    @property
    def keys(self) -> List[Key]:
        return list(self._by_pubkey.values())

    # —————————————KeyBag————————————

    def find_key_from_pubhash(self, pubkey_hash: bytes) -> Optional[Key]:
        return self._by_pubkey_hash.get(bytes(pubkey_hash))

    def find_key_from_pubkey(self, pubkey: bytes) -> Optional[Key]:
        return self._by_pubkey.get(bytes(pubkey))

    def find_redeem_data_from_script_hash(self, script_hash: bytes) -> Optional[RedeemData]:
        return self._redeem_data.get(bytes(script_hash))

    @classmethod
    def pubkey_to_address(cls, pubkey: Union[bytes, List[bytes]]) -> str:
        if isinstance(pubkey, bytes):
            return scriptUtils.pubkeyhash_to_address(scriptUtils.hash160(pubkey))
        elif isinstance(pubkey, list):
            # make redeem script and return P2SH address
            redeem = scriptBuild.get_redeem_script(pubkey, Params.P2SH_VERIFY_KEY)
            return scriptUtils.scripthash_to_address(scriptUtils.hash160(redeem))

        logger.error(f"[wallet] get the wrong pubkey in generating address")
        raise TypeError(f'expected bytes or a list of bytes, got {type(pubkey).__name__}')
