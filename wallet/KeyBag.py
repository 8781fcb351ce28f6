from typing import Optional

from wallet.Key import Key
from wallet.RedeemData import RedeemData


class KeyBag(object):
    """Lookup of keys and redeem data by the bytes found in output scripts."""

    def find_key_from_pubhash(self, pubkey_hash: bytes) -> Optional[Key]:
        raise NotImplementedError

    def find_key_from_pubkey(self, pubkey: bytes) -> Optional[Key]:
        raise NotImplementedError

    def find_redeem_data_from_script_hash(self, script_hash: bytes) -> Optional[RedeemData]:
        raise NotImplementedError
