import pickle
import unittest

from ds.OutPoint import OutPoint
from ds.Transaction import Transaction
from ds.TxIn import TxIn
from ds.TxOut import TxOut
from params.Params import Params
from script import scriptBuild
from utils.Errors import ProtocolError


class TestTransaction(unittest.TestCase):

    def setUp(self):
        self.coinbase = Transaction.create_coinbase(scriptBuild.make_pk_script(b'\x11' * 20), 5000, height=7)
        self.spend = Transaction(
            txins=[TxIn(to_spend=OutPoint.from_transaction(self.coinbase, 0), signature_script=b'\x01\xaa'),
                   TxIn(to_spend=OutPoint(b'\x42' * 32, 3), signature_script=b'', sequence=5)],
            txouts=[TxOut(value=4000, pk_script=scriptBuild.make_pk_script(b'\x22' * 20)),
                    TxOut(value=900, pk_script=b'\x6a')],
            locktime=11)

    def test_coinbase(self):
        self.assertTrue(self.coinbase.is_coinbase)
        self.assertFalse(self.spend.is_coinbase)
        to_spend = self.coinbase.txins[0].to_spend
        self.assertEqual(to_spend.hash, Params.ZERO_HASH)
        self.assertEqual(to_spend.index, Params.MAX_UINT32)

    def test_id(self):
        self.assertEqual(len(self.spend.id), Params.HASH_SIZE)
        self.assertEqual(self.spend.txid, self.spend.id.hex())
        self.assertNotEqual(self.spend.id, self.coinbase.id)

    def test_parse(self):
        encoded = self.spend.bitcoin_serialize()
        for lazy in (False, True):
            txn = Transaction.parse(encoded, parse_lazy=lazy)
            self.assertEqual(txn.id, self.spend.id)
            self.assertEqual(txn.locktime, 11)
            self.assertEqual(txn.txouts, self.spend.txouts)
            self.assertEqual([t.to_spend for t in txn.txins], [t.to_spend for t in self.spend.txins])
            self.assertEqual(txn.txins[1].sequence, 5)
            self.assertEqual(txn.message_size, len(encoded))
            self.assertEqual(txn.bitcoin_serialize(), encoded)

    def test_parse_inputs_lazily(self):
        txn = Transaction.parse(self.spend.bitcoin_serialize(), parse_lazy=True)
        self.assertFalse(txn.txins[0].to_spend.is_parsed)
        self.assertEqual(txn.txins[0].to_spend.hash, self.coinbase.id)
        self.assertTrue(txn.txins[0].to_spend.is_parsed)

    def test_parse_truncated(self):
        encoded = self.spend.bitcoin_serialize()
        with self.assertRaises(ProtocolError):
            Transaction.parse(encoded[:-1])
        with self.assertRaises(ProtocolError):
            Transaction.parse(encoded[:50], parse_lazy=True)

    def test_outpoint_change_invalidates_transaction(self):
        txn = Transaction.parse(self.spend.bitcoin_serialize(), parse_lazy=True, parse_retain=True)
        self.assertTrue(txn.is_cached())
        old_id = txn.id

        txn.txins[1].to_spend.set_index(4)
        self.assertFalse(txn.is_cached())
        self.assertNotEqual(txn.id, old_id)
        self.assertEqual(Transaction.parse(txn.bitcoin_serialize()).txins[1].to_spend.index, 4)

    def test_add_output(self):
        old_id = self.spend.id
        self.spend.add_output(TxOut(value=1, pk_script=b'\x51'))
        self.assertNotEqual(self.spend.id, old_id)
        self.assertEqual(self.spend.output_at(2).value, 1)

    def test_output_at(self):
        self.assertIs(self.spend.output_at(1), self.spend.txouts[1])
        with self.assertRaises(IndexError):
            self.spend.output_at(2)
        with self.assertRaises(IndexError):
            self.spend.output_at(-1)

    def test_pickle(self):
        copy = pickle.loads(pickle.dumps(self.spend))
        self.assertEqual(copy.id, self.spend.id)
        self.assertFalse(copy.txins[0].to_spend.is_connected())


if __name__ == '__main__':
    unittest.main()
