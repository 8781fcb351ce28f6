from typing import NamedTuple

from script.script import Script
from utils.Utils import Utils


class TxOut(NamedTuple):
    """Outputs from a Transaction."""
    # The number of base units this awards.
    value: int

    # define pk_script(scriptPublicKey) here
    pk_script: bytes

    @property
    def script_pubkey(self) -> Script:
        return Script(self.pk_script)

    def serialize(self) -> bytes:
        return Utils.int64_to_bytes_le(self.value) + Utils.varint(len(self.pk_script)) + self.pk_script
