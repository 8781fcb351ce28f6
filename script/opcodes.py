# Opcode values for the subset of the script language we tokenize and build.
# Names follow the reference client.

# push value
OP_0 = 0x00
OP_FALSE = OP_0
OP_PUSHDATA1 = 0x4c
OP_PUSHDATA2 = 0x4d
OP_PUSHDATA4 = 0x4e
OP_1NEGATE = 0x4f
OP_RESERVED = 0x50
OP_1 = 0x51
OP_TRUE = OP_1
OP_2 = 0x52
OP_3 = 0x53
OP_4 = 0x54
OP_5 = 0x55
OP_6 = 0x56
OP_7 = 0x57
OP_8 = 0x58
OP_9 = 0x59
OP_10 = 0x5a
OP_11 = 0x5b
OP_12 = 0x5c
OP_13 = 0x5d
OP_14 = 0x5e
OP_15 = 0x5f
OP_16 = 0x60

# control
OP_NOP = 0x61
OP_VERIFY = 0x69
OP_RETURN = 0x6a

# stack ops
OP_DEPTH = 0x74
OP_DROP = 0x75
OP_DUP = 0x76

# bit logic
OP_EQUAL = 0x87
OP_EQUALVERIFY = 0x88

# numeric
OP_NUMEQUAL = 0x9c
OP_NUMEQUALVERIFY = 0x9d

# crypto
OP_RIPEMD160 = 0xa6
OP_SHA1 = 0xa7
OP_SHA256 = 0xa8
OP_HASH160 = 0xa9
OP_HASH256 = 0xaa
OP_CHECKSIG = 0xac
OP_CHECKSIGVERIFY = 0xad
OP_CHECKMULTISIG = 0xae
OP_CHECKMULTISIGVERIFY = 0xaf

# name -> value, for assembling scripts from text
OPCODE_NAMES = {name: value for (name, value) in globals().items() if name.startswith('OP_')}

# value -> name, for printing tokens. Aliases resolve to the first name defined.
OPCODE_VALUES = {}
for (name, value) in OPCODE_NAMES.items():
    OPCODE_VALUES.setdefault(value, name)
