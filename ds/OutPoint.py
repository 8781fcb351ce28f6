import logging
import os
import weakref
from typing import Optional

from ds.BaseMessage import BaseMessage
from ds.TxOut import TxOut
from params.Params import Params
from script.script import ScriptForm
from utils.Errors import NotConnectedError, ScriptError, ScriptStateError
from utils.Utils import Utils
from wallet.Key import Key
from wallet.KeyBag import KeyBag

logging.basicConfig(
    level=getattr(logging, os.environ.get('TC_LOG_LEVEL', 'INFO')),
    format='[%(asctime)s][%(module)s:%(lineno)d] %(levelname)s %(message)s')
logger = logging.getLogger(__name__)


def _check_hash(hash: bytes) -> bytes:
    if not isinstance(hash, (bytes, bytearray)) or len(hash) != Params.HASH_SIZE:
        raise ValueError(f'transaction hash must be {Params.HASH_SIZE} bytes')
    return bytes(hash)


def _check_index(index: int) -> int:
    if not isinstance(index, int) or not 0 <= index <= Params.MAX_UINT32:
        raise ValueError(f'output index {index!r} is not a uint32')
    return index


class OutPoint(BaseMessage):
    """
    A reference to one output of another transaction: the transaction hash
    and the index of the output within it.

    On the wire this is always 36 bytes, the hash in reversed byte order
    followed by the index as a little endian uint32. `hash` is held in
    display order.

    An outpoint may also be connected to the transaction it points at, when
    both are in memory. The connection is a weak reference, it is not
    serialized and takes no part in equality.
    """

    MESSAGE_LENGTH = Params.OUTPOINT_MESSAGE_LENGTH

    def __init__(self, hash: bytes, index: int):
        super().__init__(length=self.MESSAGE_LENGTH)
        self._hash = _check_hash(hash)
        self._index = _check_index(index)
        self._from_tx = None

    @classmethod
    def from_transaction(cls, from_tx, index: int) -> 'OutPoint':
        """Point at output `index` of an in-memory transaction and stay connected to it.

        Without a transaction the hash is all zeroes, as in the genesis block.
        """
        if from_tx is None:
            return cls(Params.ZERO_HASH, index)
        outpoint = cls(from_tx.id, index)
        outpoint.link(from_tx)
        return outpoint

    @classmethod
    def parse(cls, payload: bytes, offset: int = 0, parent: BaseMessage = None,
              parse_lazy: bool = Params.PARSE_LAZY, parse_retain: bool = Params.PARSE_RETAIN) -> 'OutPoint':
        """Decode an outpoint from `payload` at `offset`.

        :raises ProtocolError: if fewer than 36 bytes are available
        """
        outpoint = cls.__new__(cls)
        outpoint._hash = None
        outpoint._index = None
        outpoint._from_tx = None
        BaseMessage.__init__(outpoint, payload, offset, parent, parse_lazy, parse_retain,
                             length=cls.MESSAGE_LENGTH)
        return outpoint

    def _parse(self):
        self._hash = Utils.read_hash(self._payload, self._offset)
        self._index = Utils.read_uint32(self._payload, self._offset + Params.HASH_SIZE)

    def _serialize_fields(self) -> bytes:
        return Utils.reverse_bytes(self._hash) + Utils.uint32_to_bytes_le(self._index)

    @property
    def message_size(self) -> int:
        return self.MESSAGE_LENGTH

    def __len__(self):
        return self.MESSAGE_LENGTH

    # ————————————————fields————————————————

    @property
    def hash(self) -> bytes:
        """Hash of the transaction this outpoint references."""
        self.ensure_parsed()
        return self._hash

    def set_hash(self, hash: bytes):
        hash = _check_hash(hash)
        self.uncache()
        self._hash = hash

    @property
    def index(self) -> int:
        self.ensure_parsed()
        return self._index

    def set_index(self, index: int):
        index = _check_index(index)
        self.uncache()
        self._index = index

    @property
    def txid(self) -> str:
        return Utils.to_hex(self.hash)

    # ————————————————connection————————————————

    @property
    def from_tx(self):
        """The connected transaction, or None if unconnected or no longer alive."""
        return self._from_tx() if self._from_tx is not None else None

    def is_connected(self) -> bool:
        return self.from_tx is not None

    def link(self, from_tx):
        """Connect to `from_tx`. Called by whoever owns both sides (see TxIn.connect).

        There is no unlinking: a live connection can only be replaced by the
        same transaction object.
        """
        if from_tx.id != self.hash:
            raise ValueError(f'transaction {Utils.to_hex(from_tx.id)} is not {self.txid}')
        if self.index >= len(from_tx.txouts):
            raise IndexError(f'transaction {self.txid} has no output {self.index}')
        current = self.from_tx
        if current is not None and current is not from_tx:
            raise ValueError(f'{self} is already connected to another transaction object')
        self._from_tx = weakref.ref(from_tx)

    def connected_output(self) -> Optional[TxOut]:
        """The output this outpoint refers to, or None if it is not connected."""
        from_tx = self.from_tx
        if from_tx is None:
            return None
        return from_tx.output_at(self.index)

    def connected_pubkey_script(self) -> bytes:
        """The pk_script of the connected output.

        :raises NotConnectedError: if there is no connected output
        :raises ScriptStateError: if the script is empty
        """
        output = self.connected_output()
        if output is None:
            raise NotConnectedError(f'{self} is not connected')
        if len(output.pk_script) == 0:
            raise ScriptStateError(f'connected output {self} has an empty script')
        return output.pk_script

    def connected_key(self, key_bag: KeyBag) -> Optional[Key]:
        """
        The key in `key_bag` that can spend the connected output, for P2PKH,
        P2PK and P2SH outputs. None when the key bag does not hold it.

        :raises NotConnectedError: if there is no connected output
        :raises ScriptError: if the output script is in none of those forms
        """
        output = self.connected_output()
        if output is None:
            raise NotConnectedError('Input is not connected so cannot retrieve key')
        connected_script = output.script_pubkey
        form = connected_script.form

        if form is ScriptForm.PAY_TO_PUBKEY_HASH:
            return key_bag.find_key_from_pubhash(connected_script.get_pubkey_hash())
        elif form is ScriptForm.PAY_TO_PUBKEY:
            return key_bag.find_key_from_pubkey(connected_script.get_pubkey())
        elif form is ScriptForm.PAY_TO_SCRIPT_HASH:
            redeem_data = key_bag.find_redeem_data_from_script_hash(connected_script.get_pubkey_hash())
            if redeem_data is None:
                return None
            return redeem_data.full_key

        logger.warning(f'[ds] cannot resolve a key for {self}, script is {form.value}')
        raise ScriptError(f'Could not understand form of connected output script: {connected_script}')

    # ————————————————identity————————————————

    def __eq__(self, other):
        if self is other:
            return True
        if not isinstance(other, OutPoint):
            return NotImplemented
        return self.index == other.index and self.hash == other.hash

    def __hash__(self):
        return hash((self.hash, self.index))

    def __str__(self):
        return f'{self.txid}:{self.index}'

    def __repr__(self):
        return f'OutPoint({self})'

    def __getstate__(self):
        state = super().__getstate__()
        # weak references do not pickle, the connection is local to this process
        state['_from_tx'] = None
        return state
