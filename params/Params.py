
class Params:
    # Size of a double SHA-256 digest naming a transaction.
    HASH_SIZE = int(32)

    # An outpoint on the wire is the hash followed by a uint32 index.
    #
    # #realname MESSAGE_LENGTH
    OUTPOINT_MESSAGE_LENGTH = HASH_SIZE + 4

    MAX_UINT32 = int(0xFFFFFFFF)

    # Used when an outpoint is built without a transaction (genesis / coinbase).
    ZERO_HASH = bytes(HASH_SIZE)

    # Default parse discipline for messages decoded from bytes.
    # PARSE_LAZY defers decoding until the first field read, PARSE_RETAIN keeps
    # the backing bytes around for quick reserialization.
    PARSE_LAZY = False
    PARSE_RETAIN = False

    TRANSACTION_VERSION = int(1)

    # Address version bytes, mainnet values.
    PUBKEY_HASH_VERSION = b'\x00'
    SCRIPT_HASH_VERSION = b'\x05'

    # m-of-n parameters for the multisig redeem scripts we build
    P2SH_VERIFY_KEY = 2
    P2SH_PUBLIC_KEY = 3
