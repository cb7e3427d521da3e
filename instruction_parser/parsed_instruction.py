"""
Pieces shared by every program decoder: the canonical output record, key
rendering, and the account index checks that guard all key lookups.
"""
import base58

from .errors import InstructionKeyMismatch


class ParsedInstructionEnum:
    """A decoded instruction: a stable type tag plus its named fields."""

    def __init__(self, instruction_type, info):
        self.instruction_type = instruction_type
        self.info = info

    def to_dict(self):
        """JSON form, as returned by RPC responders."""
        return {'type': self.instruction_type, 'info': self.info}

    def __eq__(self, other):
        if isinstance(other, ParsedInstructionEnum):
            return self.instruction_type == other.instruction_type and self.info == other.info
        return NotImplemented

    def __repr__(self):
        return f"ParsedInstructionEnum(instruction_type={self.instruction_type!r}, info={self.info!r})"


def render_key(key):
    """Render an account identifier as base58 text.

    Accepts solders Pubkeys, raw 32-byte values, or strings that are already base58.
    """
    if isinstance(key, str):
        return key
    if isinstance(key, (bytes, bytearray)):
        return base58.b58encode(bytes(key)).decode('ascii')
    return str(key)


def check_account_indices(accounts, account_keys, program):
    """Every index must point into the key table. No indices at all passes."""
    if accounts and (min(accounts) < 0 or max(accounts) >= len(account_keys)):
        raise InstructionKeyMismatch(program)


def check_num_accounts(accounts, num, program):
    if len(accounts) < num:
        raise InstructionKeyMismatch(program)


class AccountResolver:
    """Resolves positional account roles of one instruction to rendered keys.

    Only valid once check_account_indices and check_num_accounts have passed.
    """

    def __init__(self, accounts, account_keys):
        self.accounts = accounts
        self.account_keys = account_keys

    def __getitem__(self, position):
        return render_key(self.account_keys[self.accounts[position]])
