from typing import Iterable, List

from ds.BaseMessage import BaseMessage
from ds.OutPoint import OutPoint
from ds.TxIn import TxIn
from ds.TxOut import TxOut
from params.Params import Params
from script import scriptBuild
from utils.Utils import Utils

import logging
import os



logging.basicConfig(
    level=getattr(logging, os.environ.get('TC_LOG_LEVEL', 'INFO')),
    format='[%(asctime)s][%(module)s:%(lineno)d] %(levelname)s %(message)s')
logger = logging.getLogger(__name__)


# A plain class rather than a NamedTuple: outpoints keep weak references to
# the transactions they are connected to, and tuples cannot be weakly referenced.
class Transaction(BaseMessage):

    def __init__(self, txins: Iterable[TxIn] = (), txouts: Iterable[TxOut] = (),
                 locktime: int = 0, version: int = Params.TRANSACTION_VERSION):
        super().__init__()
        self.version = version
        self.txins: List[TxIn] = list(txins)
        self.txouts: List[TxOut] = list(txouts)
        self.locktime = locktime

    @classmethod
    def parse(cls, payload: bytes, offset: int = 0,
              parse_lazy: bool = Params.PARSE_LAZY, parse_retain: bool = Params.PARSE_RETAIN) -> 'Transaction':
        """Decode a transaction. Outpoints of its inputs follow `parse_lazy`."""
        txn = cls.__new__(cls)
        BaseMessage.__init__(txn, payload, offset, None, parse_lazy, parse_retain)
        return txn

    @classmethod
    def create_coinbase(cls, pk_script: bytes, value: int, height: int):
        return cls(
            txins=[TxIn(
                to_spend=OutPoint.from_transaction(None, Params.MAX_UINT32),
                # Push current block height into signature_script so that this
                # transaction's ID is unique relative to other coinbase txns.
                signature_script=scriptBuild.push_data(height.to_bytes(scriptBuild.sizeof(height), 'little')),
                sequence=Params.MAX_UINT32)],
            txouts=[TxOut(value=value, pk_script=pk_script)],
        )

    def _parse(self):
        payload, cursor = self._payload, self._offset

        self.version = Utils.read_uint32(payload, cursor)
        cursor += 4

        count, used = Utils.read_varint(payload, cursor)
        cursor += used
        self.txins = []
        for _ in range(count):
            to_spend = OutPoint.parse(payload, cursor, parent=self,
                                      parse_lazy=self.parse_lazy, parse_retain=self.parse_retain)
            cursor += OutPoint.MESSAGE_LENGTH
            script_len, used = Utils.read_varint(payload, cursor)
            cursor += used
            signature_script = Utils.read_bytes(payload, cursor, script_len)
            cursor += script_len
            sequence = Utils.read_uint32(payload, cursor)
            cursor += 4
            self.txins.append(TxIn(to_spend, signature_script, sequence))

        count, used = Utils.read_varint(payload, cursor)
        cursor += used
        self.txouts = []
        for _ in range(count):
            value = Utils.read_int64(payload, cursor)
            cursor += 8
            script_len, used = Utils.read_varint(payload, cursor)
            cursor += used
            self.txouts.append(TxOut(value, Utils.read_bytes(payload, cursor, script_len)))
            cursor += script_len

        self.locktime = Utils.read_uint32(payload, cursor)
        cursor += 4
        self.length = cursor - self._offset

    def _serialize_fields(self) -> bytes:
        return (Utils.uint32_to_bytes_le(self.version)
                + Utils.varint(len(self.txins)) + b''.join(txin.serialize() for txin in self.txins)
                + Utils.varint(len(self.txouts)) + b''.join(txout.serialize() for txout in self.txouts)
                + Utils.uint32_to_bytes_le(self.locktime))

    def add_input(self, txin: TxIn):
        self.uncache()
        self.txins.append(txin)

    def add_output(self, txout: TxOut):
        self.uncache()
        self.txouts.append(txout)

    @property
    def id(self) -> bytes:
        """Double SHA-256 of the serialized transaction, in display order."""
        return Utils.reverse_bytes(Utils.sha256d(self.bitcoin_serialize()))

    @property
    def txid(self) -> str:
        return Utils.to_hex(self.id)

    @property
    def is_coinbase(self) -> bool:
        return len(self.txins) == 1 and self.txins[0].to_spend.hash == Params.ZERO_HASH

    def output_at(self, index: int) -> TxOut:
        if not 0 <= index < len(self.txouts):
            raise IndexError(f'transaction {self.txid} has {len(self.txouts)} outputs, no output {index}')
        return self.txouts[index]

    def __repr__(self):
        return f'Transaction({self.txid}, {len(self.txins)} in, {len(self.txouts)} out)'
