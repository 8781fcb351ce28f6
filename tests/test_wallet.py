import unittest

from script import scriptBuild
from script import scriptUtils
from wallet.Key import Key
from wallet.KeyBag import KeyBag
from wallet.RedeemData import RedeemData
from wallet.Wallet import Wallet


class TestKey(unittest.TestCase):

    def test_encodings(self):
        compressed = Key.generate()
        self.assertEqual(len(compressed.pubkey), 33)
        self.assertIn(compressed.pubkey[0], (2, 3))

        uncompressed = Key.from_private(compressed.signing_key.to_string(), compressed=False)
        self.assertEqual(len(uncompressed.pubkey), 65)
        self.assertEqual(uncompressed.pubkey[0], 4)
        self.assertNotEqual(uncompressed.pubkey_hash, compressed.pubkey_hash)

    def test_watching_key(self):
        key = Key.generate()
        watching = Key.from_pubkey(key.pubkey)
        self.assertFalse(watching.has_private_key())
        self.assertTrue(key.has_private_key())
        self.assertEqual(watching, key)
        self.assertEqual(watching.pubkey_hash, scriptUtils.hash160(key.pubkey))

    def test_bad_pubkey(self):
        with self.assertRaises(ValueError):
            Key.from_pubkey(b'\x02' + b'\x00' * 5)


class TestWallet(unittest.TestCase):

    def setUp(self):
        self.key = Key.generate()
        self.wallet = Wallet([self.key])

    def test_lookups(self):
        self.assertIs(self.wallet.find_key_from_pubkey(self.key.pubkey), self.key)
        self.assertIs(self.wallet.find_key_from_pubhash(self.key.pubkey_hash), self.key)
        self.assertIsNone(self.wallet.find_key_from_pubkey(Key.generate().pubkey))
        self.assertIsNone(self.wallet.find_key_from_pubhash(b'\x00' * 20))
        self.assertIsNone(self.wallet.find_redeem_data_from_script_hash(b'\x00' * 20))

    def test_watching_key_does_not_shadow(self):
        self.wallet.add_key(Key.from_pubkey(self.key.pubkey))
        self.assertIs(self.wallet.find_key_from_pubkey(self.key.pubkey), self.key)
        self.assertEqual(len(self.wallet.keys), 1)

    def test_redeem_data(self):
        other = Key.generate()
        redeem_data = RedeemData.of_multisig([Key.from_pubkey(other.pubkey), self.key], 2)
        script_hash = self.wallet.add_redeem_data(redeem_data)

        self.assertEqual(script_hash, scriptUtils.hash160(redeem_data.redeem_script))
        self.assertIs(self.wallet.find_redeem_data_from_script_hash(script_hash), redeem_data)
        self.assertIs(redeem_data.full_key, self.key)

        single = RedeemData.of_single_key(Key.from_pubkey(other.pubkey))
        self.assertIsNone(single.full_key)
        self.assertEqual(single.redeem_script, scriptBuild.make_pubkey_script(other.pubkey))

    def test_pubkey_to_address(self):
        self.assertEqual(Wallet.pubkey_to_address(self.key.pubkey), self.key.to_address())

        pubkeys = [Key.generate().pubkey for _ in range(3)]
        address = Wallet.pubkey_to_address(pubkeys)
        self.assertTrue(address.startswith('3'))
        with self.assertRaises(TypeError):
            Wallet.pubkey_to_address('not a key')

    def test_key_bag_is_abstract(self):
        with self.assertRaises(NotImplementedError):
            KeyBag().find_key_from_pubkey(self.key.pubkey)


if __name__ == '__main__':
    unittest.main()
