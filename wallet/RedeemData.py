from typing import List, NamedTuple, Optional

from script import scriptBuild
from wallet.Key import Key


class RedeemData(NamedTuple):
    """The script behind a P2SH output plus the keys that can satisfy it."""

    redeem_script: bytes

    # Keys appearing in the redeem script, in script order.
    keys: List[Key]

    @classmethod
    def of_multisig(cls, keys: List[Key], required: int):
        return cls(scriptBuild.get_redeem_script([k.pubkey for k in keys], required), list(keys))

    @classmethod
    def of_single_key(cls, key: Key):
        return cls(scriptBuild.make_pubkey_script(key.pubkey), [key])

    @property
    def full_key(self) -> Optional[Key]:
        """The first key we hold the private part of, or None."""
        for key in self.keys:
            if key.has_private_key():
                return key
        return None
