"""
Vote program instruction schema.
"""
import logging
from enum import IntEnum
from typing import List, NamedTuple, Optional

from construct import Error, Struct, Switch, this
from solders.hash import Hash
from solders.instruction import AccountMeta, Instruction
from solders.pubkey import Pubkey

from . import sysvar
from .bincode import I64, U8, U64, EnumTag, HashBytes, Option, PublicKey, UnitEnum, Vec
from .system_instruction import create_account as system_create_account

logger = logging.getLogger(__name__)

VOTE_PROGRAM_ID = Pubkey.from_string("Vote111111111111111111111111111111111111111")

# Size of a vote account's state
VOTE_STATE_SIZE = 3731


class VoteInstructionType(IntEnum):
    INITIALIZE_ACCOUNT = 0
    AUTHORIZE = 1
    VOTE = 2
    WITHDRAW = 3
    UPDATE_VALIDATOR_IDENTITY = 4
    UPDATE_COMMISSION = 5
    VOTE_SWITCH = 6
    AUTHORIZE_CHECKED = 7


class VoteAuthorize(IntEnum):
    # Member names are the wire names used in parsed output
    Voter = 0
    Withdrawer = 1


class VoteInit(NamedTuple):
    node_pubkey: Pubkey
    authorized_voter: Pubkey
    authorized_withdrawer: Pubkey
    commission: int


class Vote(NamedTuple):
    slots: List[int]
    hash: Hash
    timestamp: Optional[int] = None


VoteInitLayout = Struct(
    "node_pubkey" / PublicKey,
    "authorized_voter" / PublicKey,
    "authorized_withdrawer" / PublicKey,
    "commission" / U8,
)

VoteLayout = Struct(
    "slots" / Vec(U64),
    "hash" / HashBytes,
    "timestamp" / Option(I64),
)

VoteAuthorizeLayout = UnitEnum(VoteAuthorize)

VOTE_INSTRUCTION_LAYOUTS = {
    VoteInstructionType.INITIALIZE_ACCOUNT: Struct("vote_init" / VoteInitLayout),
    VoteInstructionType.AUTHORIZE: Struct(
        "new_authorized" / PublicKey,
        "vote_authorize" / VoteAuthorizeLayout,
    ),
    VoteInstructionType.VOTE: Struct("vote" / VoteLayout),
    VoteInstructionType.WITHDRAW: Struct("lamports" / U64),
    VoteInstructionType.UPDATE_VALIDATOR_IDENTITY: Struct(),
    VoteInstructionType.UPDATE_COMMISSION: Struct("commission" / U8),
    VoteInstructionType.VOTE_SWITCH: Struct(
        "vote" / VoteLayout,
        "proof_hash" / HashBytes,
    ),
    VoteInstructionType.AUTHORIZE_CHECKED: Struct("vote_authorize" / VoteAuthorizeLayout),
}

VOTE_INSTRUCTION_LAYOUT = Struct(
    "instruction_type" / EnumTag,
    "args" / Switch(
        this.instruction_type,
        {int(tag): layout for tag, layout in VOTE_INSTRUCTION_LAYOUTS.items()},
        default=Error,
    ),
)


def decode_vote_instruction(data):
    """Deserialize a vote instruction payload into its type and fields.

    Raises one of bincode.DECODE_ERRORS on malformed input.
    """
    parsed = VOTE_INSTRUCTION_LAYOUT.parse(bytes(data))
    return VoteInstructionType(parsed.instruction_type), parsed.args


def encode_vote_instruction(instruction_type, **args):
    """Serialize a vote instruction variant. NamedTuple fields are expanded."""
    args = {name: value._asdict() if hasattr(value, "_asdict") else value for name, value in args.items()}
    return VOTE_INSTRUCTION_LAYOUT.build(dict(instruction_type=int(instruction_type), args=args))


def _instruction(instruction_type, accounts, **args):
    data = encode_vote_instruction(instruction_type, **args)
    logger.debug(f"Built vote {instruction_type.name} instruction ({len(data)} bytes)")
    return Instruction(program_id=VOTE_PROGRAM_ID, accounts=accounts, data=data)


def initialize_account(vote_pubkey, vote_init):
    accounts = [
        AccountMeta(pubkey=vote_pubkey, is_signer=False, is_writable=True),
        AccountMeta(pubkey=sysvar.RENT, is_signer=False, is_writable=False),
        AccountMeta(pubkey=sysvar.CLOCK, is_signer=False, is_writable=False),
        AccountMeta(pubkey=vote_init.node_pubkey, is_signer=True, is_writable=False),
    ]
    return _instruction(VoteInstructionType.INITIALIZE_ACCOUNT, accounts, vote_init=vote_init)


def create_account(from_pubkey, vote_pubkey, vote_init, lamports):
    """Create and initialize a vote account: returns two instructions."""
    return [
        system_create_account(from_pubkey, vote_pubkey, lamports, VOTE_STATE_SIZE, VOTE_PROGRAM_ID),
        initialize_account(vote_pubkey, vote_init),
    ]


def authorize(vote_pubkey, authorized_pubkey, new_authorized_pubkey, vote_authorize):
    accounts = [
        AccountMeta(pubkey=vote_pubkey, is_signer=False, is_writable=True),
        AccountMeta(pubkey=sysvar.CLOCK, is_signer=False, is_writable=False),
        AccountMeta(pubkey=authorized_pubkey, is_signer=True, is_writable=False),
    ]
    return _instruction(
        VoteInstructionType.AUTHORIZE,
        accounts,
        new_authorized=new_authorized_pubkey,
        vote_authorize=vote_authorize,
    )


def authorize_checked(vote_pubkey, authorized_pubkey, new_authorized_pubkey, vote_authorize):
    accounts = [
        AccountMeta(pubkey=vote_pubkey, is_signer=False, is_writable=True),
        AccountMeta(pubkey=sysvar.CLOCK, is_signer=False, is_writable=False),
        AccountMeta(pubkey=authorized_pubkey, is_signer=True, is_writable=False),
        AccountMeta(pubkey=new_authorized_pubkey, is_signer=True, is_writable=False),
    ]
    return _instruction(VoteInstructionType.AUTHORIZE_CHECKED, accounts, vote_authorize=vote_authorize)


def update_validator_identity(vote_pubkey, authorized_withdrawer_pubkey, node_pubkey):
    accounts = [
        AccountMeta(pubkey=vote_pubkey, is_signer=False, is_writable=True),
        AccountMeta(pubkey=node_pubkey, is_signer=True, is_writable=False),
        AccountMeta(pubkey=authorized_withdrawer_pubkey, is_signer=True, is_writable=False),
    ]
    return _instruction(VoteInstructionType.UPDATE_VALIDATOR_IDENTITY, accounts)


def update_commission(vote_pubkey, authorized_withdrawer_pubkey, commission):
    accounts = [
        AccountMeta(pubkey=vote_pubkey, is_signer=False, is_writable=True),
        AccountMeta(pubkey=authorized_withdrawer_pubkey, is_signer=True, is_writable=False),
    ]
    return _instruction(VoteInstructionType.UPDATE_COMMISSION, accounts, commission=commission)


def _vote_accounts(vote_pubkey, authorized_voter_pubkey):
    return [
        AccountMeta(pubkey=vote_pubkey, is_signer=False, is_writable=True),
        AccountMeta(pubkey=sysvar.SLOT_HASHES, is_signer=False, is_writable=False),
        AccountMeta(pubkey=sysvar.CLOCK, is_signer=False, is_writable=False),
        AccountMeta(pubkey=authorized_voter_pubkey, is_signer=True, is_writable=False),
    ]


def vote(vote_pubkey, authorized_voter_pubkey, vote):
    return _instruction(
        VoteInstructionType.VOTE, _vote_accounts(vote_pubkey, authorized_voter_pubkey), vote=vote
    )


def vote_switch(vote_pubkey, authorized_voter_pubkey, vote, proof_hash):
    return _instruction(
        VoteInstructionType.VOTE_SWITCH,
        _vote_accounts(vote_pubkey, authorized_voter_pubkey),
        vote=vote,
        proof_hash=proof_hash,
    )


def withdraw(vote_pubkey, authorized_withdrawer_pubkey, lamports, to_pubkey):
    accounts = [
        AccountMeta(pubkey=vote_pubkey, is_signer=False, is_writable=True),
        AccountMeta(pubkey=to_pubkey, is_signer=False, is_writable=True),
        AccountMeta(pubkey=authorized_withdrawer_pubkey, is_signer=True, is_writable=False),
    ]
    return _instruction(VoteInstructionType.WITHDRAW, accounts, lamports=lamports)
