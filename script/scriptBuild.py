from math import log
from typing import List

from . import opcodes
from . import scriptUtils

from params.Params import Params


def sizeof(n):
    if n == 0:
        return 1
    return int(log(n, 256)) + 1


def push_data(data: bytes) -> bytes:
    """Serialize a data push using the smallest pushdata form."""
    cnt = len(data)
    if cnt < opcodes.OP_PUSHDATA1:
        return cnt.to_bytes(1, 'little') + data
    elif cnt < 2**8:
        return bytes([opcodes.OP_PUSHDATA1]) + cnt.to_bytes(1, 'little') + data
    elif cnt < 2**16:
        return bytes([opcodes.OP_PUSHDATA2]) + cnt.to_bytes(2, 'little') + data
    elif cnt < 2**32:
        return bytes([opcodes.OP_PUSHDATA4]) + cnt.to_bytes(4, 'little') + data
    raise ValueError('Can not add OP_PUSHDATA to the script.')


def get_pk_script(to_addr: str) -> bytes:
    # decode the address to get the public key hash
    return make_pk_script(scriptUtils.address_to_hash160(to_addr))


def make_pk_script(pk_hash: bytes) -> bytes:
    """P2PKH: OP_DUP OP_HASH160 <pk_hash> OP_EQUALVERIFY OP_CHECKSIG"""
    if len(pk_hash) != 20:
        raise ValueError('pubkey hash must be 20 bytes')
    pubkey_script = ScriptAsm('OP_DUP OP_HASH160').parse()
    pubkey_script += push_data(pk_hash)
    pubkey_script += ScriptAsm('OP_EQUALVERIFY OP_CHECKSIG').parse()

    return pubkey_script


def make_pubkey_script(pubkey: bytes) -> bytes:
    """P2PK: <pubkey> OP_CHECKSIG"""
    return push_data(pubkey) + ScriptAsm('OP_CHECKSIG').parse()


def get_redeem_script(pubkeys: List[bytes], required=Params.P2SH_VERIFY_KEY) -> bytes:
    """m-of-n OP_CHECKMULTISIG redeem script."""
    if not 1 <= required <= len(pubkeys) <= 16:
        raise ValueError(f'cannot build a {required}-of-{len(pubkeys)} redeem script')

    redeem_script = ScriptAsm('OP_' + str(required)).parse()
    for pubkey in pubkeys:
        redeem_script += push_data(pubkey)
    redeem_script += ScriptAsm('OP_' + str(len(pubkeys)) + ' OP_CHECKMULTISIG').parse()

    return redeem_script


def get_p2sh_script(p2sh_hash: bytes) -> bytes:
    """P2SH: OP_HASH160 <script_hash> OP_EQUAL"""
    if len(p2sh_hash) != 20:
        raise ValueError('script hash must be 20 bytes')
    pubkey_script = ScriptAsm('OP_HASH160').parse()
    pubkey_script += push_data(p2sh_hash)
    pubkey_script += ScriptAsm('OP_EQUAL').parse()

    return pubkey_script


def make_p2sh_script(redeem_script: bytes) -> bytes:
    return get_p2sh_script(scriptUtils.hash160(redeem_script))


class ScriptAsm:
    """
    A script written as space separated opcode names and hex literals.
    """

    def __init__(self, script):
        """
        :param script: The script as a string.
        """
        self.script = script

    def parse(self):
        """
        Parses and serializes a script.

        :return: The serialized script, as bytes.
        """
        element = self.script.split()
        serlized_data = b''
        for i in element:
            if i in opcodes.OPCODE_NAMES:
                op = opcodes.OPCODE_NAMES[i]
                serlized_data += op.to_bytes(sizeof(op), 'big')
            else:
                # if there is some hex data in the script which is not an OPCODE
                try:
                    value = bytes.fromhex(i)
                except ValueError:
                    raise ValueError('Unexpected instruction in script : {}'.format(i))
                serlized_data += push_data(value)
        return serlized_data
