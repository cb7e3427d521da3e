"""
System program instruction schema.

Each variant of the program's instruction enum is a u32 tag followed by the
variant's fields. The helpers at the bottom build instructions the same way
the SDK does, with the same account order, so decoded output can be checked
against the instructions a wallet would actually produce.
"""
import logging
from enum import IntEnum

from construct import Error, Struct, Switch, this
from solders.instruction import AccountMeta, Instruction
from solders.pubkey import Pubkey

from . import sysvar
from .bincode import U64, EnumTag, PublicKey, RustString

logger = logging.getLogger(__name__)

SYSTEM_PROGRAM_ID = Pubkey.from_string("11111111111111111111111111111111")

# Size of a nonce account's state
NONCE_STATE_SIZE = 80


class SystemInstructionType(IntEnum):
    CREATE_ACCOUNT = 0
    ASSIGN = 1
    TRANSFER = 2
    CREATE_ACCOUNT_WITH_SEED = 3
    ADVANCE_NONCE_ACCOUNT = 4
    WITHDRAW_NONCE_ACCOUNT = 5
    INITIALIZE_NONCE_ACCOUNT = 6
    AUTHORIZE_NONCE_ACCOUNT = 7
    ALLOCATE = 8
    ALLOCATE_WITH_SEED = 9
    ASSIGN_WITH_SEED = 10
    TRANSFER_WITH_SEED = 11
    UPGRADE_NONCE_ACCOUNT = 12


SYSTEM_INSTRUCTION_LAYOUTS = {
    SystemInstructionType.CREATE_ACCOUNT: Struct(
        "lamports" / U64,
        "space" / U64,
        "owner" / PublicKey,
    ),
    SystemInstructionType.ASSIGN: Struct("owner" / PublicKey),
    SystemInstructionType.TRANSFER: Struct("lamports" / U64),
    SystemInstructionType.CREATE_ACCOUNT_WITH_SEED: Struct(
        "base" / PublicKey,
        "seed" / RustString,
        "lamports" / U64,
        "space" / U64,
        "owner" / PublicKey,
    ),
    SystemInstructionType.ADVANCE_NONCE_ACCOUNT: Struct(),
    SystemInstructionType.WITHDRAW_NONCE_ACCOUNT: Struct("lamports" / U64),
    SystemInstructionType.INITIALIZE_NONCE_ACCOUNT: Struct("authority" / PublicKey),
    SystemInstructionType.AUTHORIZE_NONCE_ACCOUNT: Struct("authority" / PublicKey),
    SystemInstructionType.ALLOCATE: Struct("space" / U64),
    SystemInstructionType.ALLOCATE_WITH_SEED: Struct(
        "base" / PublicKey,
        "seed" / RustString,
        "space" / U64,
        "owner" / PublicKey,
    ),
    SystemInstructionType.ASSIGN_WITH_SEED: Struct(
        "base" / PublicKey,
        "seed" / RustString,
        "owner" / PublicKey,
    ),
    SystemInstructionType.TRANSFER_WITH_SEED: Struct(
        "lamports" / U64,
        "from_seed" / RustString,
        "from_owner" / PublicKey,
    ),
    SystemInstructionType.UPGRADE_NONCE_ACCOUNT: Struct(),
}

SYSTEM_INSTRUCTION_LAYOUT = Struct(
    "instruction_type" / EnumTag,
    "args" / Switch(
        this.instruction_type,
        {int(tag): layout for tag, layout in SYSTEM_INSTRUCTION_LAYOUTS.items()},
        default=Error,
    ),
)


def decode_system_instruction(data):
    """Deserialize a system instruction payload into its type and fields.

    Raises one of bincode.DECODE_ERRORS on malformed input.
    """
    parsed = SYSTEM_INSTRUCTION_LAYOUT.parse(bytes(data))
    return SystemInstructionType(parsed.instruction_type), parsed.args


def encode_system_instruction(instruction_type, **args):
    """Serialize a system instruction variant."""
    return SYSTEM_INSTRUCTION_LAYOUT.build(dict(instruction_type=int(instruction_type), args=args))


def _instruction(instruction_type, accounts, **args):
    data = encode_system_instruction(instruction_type, **args)
    logger.debug(f"Built system {instruction_type.name} instruction ({len(data)} bytes)")
    return Instruction(program_id=SYSTEM_PROGRAM_ID, accounts=accounts, data=data)


def create_account(from_pubkey, to_pubkey, lamports, space, owner):
    accounts = [
        AccountMeta(pubkey=from_pubkey, is_signer=True, is_writable=True),
        AccountMeta(pubkey=to_pubkey, is_signer=True, is_writable=True),
    ]
    return _instruction(
        SystemInstructionType.CREATE_ACCOUNT, accounts, lamports=lamports, space=space, owner=owner
    )


def create_account_with_seed(from_pubkey, to_pubkey, base, seed, lamports, space, owner):
    accounts = [
        AccountMeta(pubkey=from_pubkey, is_signer=True, is_writable=True),
        AccountMeta(pubkey=to_pubkey, is_signer=False, is_writable=True),
        AccountMeta(pubkey=base, is_signer=True, is_writable=False),
    ]
    return _instruction(
        SystemInstructionType.CREATE_ACCOUNT_WITH_SEED,
        accounts,
        base=base,
        seed=seed,
        lamports=lamports,
        space=space,
        owner=owner,
    )


def assign(pubkey, owner):
    accounts = [AccountMeta(pubkey=pubkey, is_signer=True, is_writable=True)]
    return _instruction(SystemInstructionType.ASSIGN, accounts, owner=owner)


def assign_with_seed(address, base, seed, owner):
    accounts = [
        AccountMeta(pubkey=address, is_signer=False, is_writable=True),
        AccountMeta(pubkey=base, is_signer=True, is_writable=False),
    ]
    return _instruction(
        SystemInstructionType.ASSIGN_WITH_SEED, accounts, base=base, seed=seed, owner=owner
    )


def transfer(from_pubkey, to_pubkey, lamports):
    accounts = [
        AccountMeta(pubkey=from_pubkey, is_signer=True, is_writable=True),
        AccountMeta(pubkey=to_pubkey, is_signer=False, is_writable=True),
    ]
    return _instruction(SystemInstructionType.TRANSFER, accounts, lamports=lamports)


def transfer_with_seed(from_pubkey, from_base, from_seed, from_owner, to_pubkey, lamports):
    accounts = [
        AccountMeta(pubkey=from_pubkey, is_signer=False, is_writable=True),
        AccountMeta(pubkey=from_base, is_signer=True, is_writable=False),
        AccountMeta(pubkey=to_pubkey, is_signer=False, is_writable=True),
    ]
    return _instruction(
        SystemInstructionType.TRANSFER_WITH_SEED,
        accounts,
        lamports=lamports,
        from_seed=from_seed,
        from_owner=from_owner,
    )


def allocate(pubkey, space):
    accounts = [AccountMeta(pubkey=pubkey, is_signer=True, is_writable=True)]
    return _instruction(SystemInstructionType.ALLOCATE, accounts, space=space)


def allocate_with_seed(address, base, seed, space, owner):
    accounts = [
        AccountMeta(pubkey=address, is_signer=False, is_writable=True),
        AccountMeta(pubkey=base, is_signer=True, is_writable=False),
    ]
    return _instruction(
        SystemInstructionType.ALLOCATE_WITH_SEED,
        accounts,
        base=base,
        seed=seed,
        space=space,
        owner=owner,
    )


def initialize_nonce_account(nonce_pubkey, authority):
    accounts = [
        AccountMeta(pubkey=nonce_pubkey, is_signer=False, is_writable=True),
        AccountMeta(pubkey=sysvar.RECENT_BLOCKHASHES, is_signer=False, is_writable=False),
        AccountMeta(pubkey=sysvar.RENT, is_signer=False, is_writable=False),
    ]
    return _instruction(SystemInstructionType.INITIALIZE_NONCE_ACCOUNT, accounts, authority=authority)


def create_nonce_account(from_pubkey, nonce_pubkey, authority, lamports):
    """Create and initialize a nonce account: returns two instructions."""
    return [
        create_account(from_pubkey, nonce_pubkey, lamports, NONCE_STATE_SIZE, SYSTEM_PROGRAM_ID),
        initialize_nonce_account(nonce_pubkey, authority),
    ]


def advance_nonce_account(nonce_pubkey, authorized_pubkey):
    accounts = [
        AccountMeta(pubkey=nonce_pubkey, is_signer=False, is_writable=True),
        AccountMeta(pubkey=sysvar.RECENT_BLOCKHASHES, is_signer=False, is_writable=False),
        AccountMeta(pubkey=authorized_pubkey, is_signer=True, is_writable=False),
    ]
    return _instruction(SystemInstructionType.ADVANCE_NONCE_ACCOUNT, accounts)


def withdraw_nonce_account(nonce_pubkey, authorized_pubkey, to_pubkey, lamports):
    accounts = [
        AccountMeta(pubkey=nonce_pubkey, is_signer=False, is_writable=True),
        AccountMeta(pubkey=to_pubkey, is_signer=False, is_writable=True),
        AccountMeta(pubkey=sysvar.RECENT_BLOCKHASHES, is_signer=False, is_writable=False),
        AccountMeta(pubkey=sysvar.RENT, is_signer=False, is_writable=False),
        AccountMeta(pubkey=authorized_pubkey, is_signer=True, is_writable=False),
    ]
    return _instruction(SystemInstructionType.WITHDRAW_NONCE_ACCOUNT, accounts, lamports=lamports)


def authorize_nonce_account(nonce_pubkey, authorized_pubkey, new_authority):
    accounts = [
        AccountMeta(pubkey=nonce_pubkey, is_signer=False, is_writable=True),
        AccountMeta(pubkey=authorized_pubkey, is_signer=True, is_writable=False),
    ]
    return _instruction(SystemInstructionType.AUTHORIZE_NONCE_ACCOUNT, accounts, authority=new_authority)


def upgrade_nonce_account(nonce_pubkey):
    accounts = [AccountMeta(pubkey=nonce_pubkey, is_signer=False, is_writable=True)]
    return _instruction(SystemInstructionType.UPGRADE_NONCE_ACCOUNT, accounts)
