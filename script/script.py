import logging
import os
from enum import Enum, unique

from utils.Errors import ScriptError

from . import opcodes
from . import scriptUtils

logging.basicConfig(
    level=getattr(logging, os.environ.get('TC_LOG_LEVEL', 'INFO')),
    format='[%(asctime)s][%(module)s:%(lineno)d] %(levelname)s %(message)s')
logger = logging.getLogger(__name__)

# two main classes in this package
__all__ = ['Script', 'Tokenizer', 'ScriptForm']


# ————————————————————tool functions———————————————————————

# check whether the token is a SEC encoded public key for P2PK
def _is_pubkey(opcode, bytes, data) -> bool:
    if opcode != Tokenizer.OP_LITERAL:
        return False
    if len(data) == 65 and data[0] == 0x04:
        return True
    if len(data) == 33 and data[0] in (0x02, 0x03):
        return True
    return False


# check whether the token is a hash160 value pushed directly (P2PKH, P2SH)
def _is_hash160(opcode, bytes, data) -> bool:
    if opcode != Tokenizer.OP_LITERAL:
        return False
    if len(data) != 20 or bytes[0] != 20:
        return False
    return True


# —————————————————————Script form templates——————————————————————

@unique
class ScriptForm(Enum):
    NON_STANDARD = 'non-standard'
    PAY_TO_PUBKEY_HASH = 'pay-to-pubkey-hash'  # P2PKH
    PAY_TO_PUBKEY = 'pay-to-pubkey'  # P2PK
    PAY_TO_SCRIPT_HASH = 'pay-to-script-hash'  # P2SH


# pk_script template for P2PKH
TEMPLATE_PAY_TO_PUBKEY_HASH = (lambda t: len(t) == 5, opcodes.OP_DUP,
                               opcodes.OP_HASH160, _is_hash160, opcodes.OP_EQUALVERIFY,
                               opcodes.OP_CHECKSIG)

# pk_script template for P2PK
TEMPLATE_PAY_TO_PUBKEY = (lambda t: len(t) == 2, _is_pubkey,
                          opcodes.OP_CHECKSIG)

# pk_script template for P2SH
TEMPLATE_PAY_TO_SCRIPT_HASH = (lambda t: len(t) == 3, opcodes.OP_HASH160,
                               _is_hash160, opcodes.OP_EQUAL)

# a list of the templates for searching
Templates = [

    (ScriptForm.PAY_TO_PUBKEY_HASH, TEMPLATE_PAY_TO_PUBKEY_HASH),

    (ScriptForm.PAY_TO_PUBKEY, TEMPLATE_PAY_TO_PUBKEY),

    (ScriptForm.PAY_TO_SCRIPT_HASH, TEMPLATE_PAY_TO_SCRIPT_HASH),
]


# ————————————————————tool class producing tokens[]——————————————————————————

# test examples:
# txid: 370b0e8298cf00b47a61ebac3381d38f38f62b065ef5d8dd3cfd243e4b6e9137 (input# 0)
# >>> pk_script = b'v\xa9\x14\xd6Kqr\x9aPM#\xd9H\x88\xd3\xf7\x12\xd5WS\xd5\xd6"\x88\xac'
# >>> print(Tokenizer(pk_script))
# OP_DUP OP_HASH160 d64b71729a504d23d94888d3f712d55753d5d622 OP_EQUALVERIFY OP_CHECKSIG


class Tokenizer(object):
    """
    Tokenize a script into (opcode, bytes, value) tuples.
    """

    OP_LITERAL = 0x1ff

    def __init__(self, script: bytes):
        self._script = script
        self._tokens = []
        self._process(script)

    # Given a template, return True if this script matches
    def match_template(self, template) -> bool:

        if not template[0](self):
            return False

        # ((opcode, bytes, value), template_target)
        for ((o, b, v), t) in zip(self._tokens, template[1:]):

            # callable, check the value
            if callable(t):
                if not t(o, b, v):
                    return False

            # otherwise, compare opcode
            elif t != o:
                return False

        return True

    # Get the original bytes used for the opcode and value
    def get_bytes(self, index) -> bytes:
        return self._tokens[index][1]

    # Get the value for a literal.
    def get_value(self, index) -> bytes:
        return self._tokens[index][2]

    def _process(self, script):
        """Parse the script into tokens.
        :param script: The script to parse
        :raises ScriptError: if a push runs past the end of the script
        """
        while script:
            opcode = script[0]
            opcode_bytes = script[:1]
            script = script[1:]
            value = None

            if opcode == opcodes.OP_0:
                value = b''
                opcode = Tokenizer.OP_LITERAL

            elif 1 <= opcode <= opcodes.OP_PUSHDATA4:
                pushdata_length = opcode
                if opcodes.OP_PUSHDATA1 <= opcode <= opcodes.OP_PUSHDATA4:
                    op_length = [1, 2, 4][opcode - opcodes.OP_PUSHDATA1]
                    if len(script) < op_length:
                        raise ScriptError('Truncated pushdata length')
                    pushdata_length = int.from_bytes(script[:op_length], 'little')
                    opcode_bytes += script[:op_length]
                    script = script[op_length:]

                # The data to be pushed
                value = script[:pushdata_length]
                opcode_bytes += value
                script = script[pushdata_length:]
                if len(value) != pushdata_length:
                    raise ScriptError('The pushdata opcode does not match the length of the data to be pushed')
                opcode = Tokenizer.OP_LITERAL

            elif opcode == opcodes.OP_1NEGATE:
                opcode = Tokenizer.OP_LITERAL
                value = int(-1).to_bytes(1, 'big', signed=True)

            elif opcodes.OP_1 <= opcode <= opcodes.OP_16:
                value = int(opcode - opcodes.OP_1 + 1).to_bytes(1, 'big')
                opcode = Tokenizer.OP_LITERAL

            self._tokens.append((opcode, opcode_bytes, value))

    def __len__(self):
        return len(self._tokens)

    def __getitem__(self, name):
        return self._tokens[name][0]

    def __iter__(self):
        for (opcode, bytes, value) in self._tokens:
            if opcode == Tokenizer.OP_LITERAL:
                yield value
            else:
                yield opcode

    def __str__(self):
        output = []
        for (opcode, bytes, value) in self._tokens:
            if opcode == Tokenizer.OP_LITERAL:
                output.append(value.hex() if value else '0')
            else:
                output.append(opcodes.OPCODE_VALUES.get(opcode, f'OP_UNKNOWN_{opcode:#x}'))
        return ' '.join(output)


# ————————————————————script classifier——————————————————————————

class Script(object):
    """
    Read-only view over an output's pk_script which classifies it into one of
    the standard forms and extracts the data the form carries.
    """

    def __init__(self, program: bytes):
        self.program = bytes(program)
        self._tokens = None
        self._form = None

    @property
    def tokens(self) -> Tokenizer:
        if self._tokens is None:
            self._tokens = Tokenizer(self.program)
        return self._tokens

    @property
    def form(self) -> ScriptForm:
        if self._form is None:
            self._form = self._classify()
        return self._form

    def _classify(self) -> ScriptForm:
        try:
            tokens = self.tokens
        except ScriptError:
            logger.debug(f'[script] could not tokenize {self.program.hex()}')
            return ScriptForm.NON_STANDARD

        for (form, template) in Templates:
            if tokens.match_template(template):
                return form
        return ScriptForm.NON_STANDARD

    def is_sent_to_address(self) -> bool:
        return self.form is ScriptForm.PAY_TO_PUBKEY_HASH

    def is_sent_to_raw_pubkey(self) -> bool:
        return self.form is ScriptForm.PAY_TO_PUBKEY

    def is_pay_to_script_hash(self) -> bool:
        return self.form is ScriptForm.PAY_TO_SCRIPT_HASH

    def get_pubkey_hash(self) -> bytes:
        """The 20 byte hash in a P2PKH script, or the script hash in a P2SH script."""
        if self.is_sent_to_address():
            return self.tokens.get_value(2)
        elif self.is_pay_to_script_hash():
            return self.tokens.get_value(1)
        raise ScriptError(f'Script not in the standard pay-to-address or P2SH form: {self}')

    def get_pubkey(self) -> bytes:
        if not self.is_sent_to_raw_pubkey():
            raise ScriptError(f'Script not in the standard pay-to-pubkey form: {self}')
        return self.tokens.get_value(0)

    def get_to_address(self) -> str:
        if self.is_sent_to_address():
            return scriptUtils.pubkeyhash_to_address(self.get_pubkey_hash())
        elif self.is_pay_to_script_hash():
            return scriptUtils.scripthash_to_address(self.get_pubkey_hash())
        elif self.is_sent_to_raw_pubkey():
            return scriptUtils.pubkeyhash_to_address(scriptUtils.hash160(self.get_pubkey()))
        raise ScriptError(f'Cannot cast this script to a pay-to-address type: {self}')

    def __eq__(self, other):
        return isinstance(other, Script) and self.program == other.program

    def __hash__(self):
        return hash(self.program)

    def __str__(self):
        try:
            return str(self.tokens)
        except ScriptError:
            return f'<unparseable script {self.program.hex()}>'

    def __repr__(self):
        return f'Script({self})'
