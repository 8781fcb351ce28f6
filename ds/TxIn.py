import logging
import os
from enum import Enum, unique
from typing import NamedTuple

from ds.OutPoint import OutPoint
from utils.Utils import Utils

logging.basicConfig(
    level=getattr(logging, os.environ.get('TC_LOG_LEVEL', 'INFO')),
    format='[%(asctime)s][%(module)s:%(lineno)d] %(levelname)s %(message)s')
logger = logging.getLogger(__name__)


@unique
class ConnectionResult(Enum):
    SUCCESS = 0
    NO_SUCH_TX = 1


class TxIn(NamedTuple):
    """Inputs to a Transaction."""

    # A reference to the output we're spending. Coinbase inputs point at the
    # all-zero hash.
    # Outpoint consist of [txid, txout_idx]
    to_spend: OutPoint

    # define scriptSig (unlocking script) here
    # the scriptSig which unlocks the TxOut for spending.
    signature_script: bytes

    # A sender-defined sequence number which allows us replacement of the txn
    # if desired.
    sequence: int = 0xFFFFFFFF

    def connect(self, transaction) -> ConnectionResult:
        """Link our outpoint to `transaction` if it is the one being spent.

        :raises IndexError: if `transaction` has no output at the outpoint index
        """
        if transaction.id != self.to_spend.hash:
            return ConnectionResult.NO_SUCH_TX
        self.to_spend.link(transaction)
        logger.debug(f'[ds] connected input {self.to_spend}')
        return ConnectionResult.SUCCESS

    def serialize(self) -> bytes:
        return (self.to_spend.bitcoin_serialize()
                + Utils.varint(len(self.signature_script)) + self.signature_script
                + Utils.uint32_to_bytes_le(self.sequence))
