"""
Decode System program instructions into canonical records.
"""
import logging

from .bincode import DECODE_ERRORS
from .errors import InstructionNotParsable, ParsableProgram
from .parsed_instruction import (
    AccountResolver,
    ParsedInstructionEnum,
    check_account_indices,
    check_num_accounts,
)
from .system_instruction import SystemInstructionType, decode_system_instruction

logger = logging.getLogger(__name__)


def parse_system(instruction, account_keys):
    """Decode a compiled System program instruction.

    Args:
        instruction: a CompiledInstruction (anything with `accounts` and `data`)
        account_keys: the transaction's ordered account keys

    Returns:
        ParsedInstructionEnum

    Raises:
        InstructionNotParsable: the payload is not a valid system instruction
        InstructionKeyMismatch: an account index is out of range, or too few were supplied
    """
    try:
        instruction_type, args = decode_system_instruction(instruction.data)
    except DECODE_ERRORS as e:
        logger.debug(f"System instruction payload rejected: {e}")
        raise InstructionNotParsable(ParsableProgram.SYSTEM) from e

    accounts = list(instruction.accounts)
    # Runtime should prevent this from ever happening
    check_account_indices(accounts, account_keys, ParsableProgram.SYSTEM)

    handler = SYSTEM_PARSERS.get(instruction_type)
    if handler is None:
        raise NotImplementedError(f"no parser for system instruction {instruction_type.name}")
    return handler(args, accounts, AccountResolver(accounts, account_keys))


def check_num_system_accounts(accounts, num):
    check_num_accounts(accounts, num, ParsableProgram.SYSTEM)


def _parse_create_account(args, accounts, keys):
    check_num_system_accounts(accounts, 2)
    return ParsedInstructionEnum('createAccount', {
        'source': keys[0],
        'newAccount': keys[1],
        'lamports': args.lamports,
        'space': args.space,
        'owner': str(args.owner),
    })


def _parse_assign(args, accounts, keys):
    check_num_system_accounts(accounts, 1)
    return ParsedInstructionEnum('assign', {
        'account': keys[0],
        'owner': str(args.owner),
    })


def _parse_transfer(args, accounts, keys):
    check_num_system_accounts(accounts, 2)
    return ParsedInstructionEnum('transfer', {
        'source': keys[0],
        'destination': keys[1],
        'lamports': args.lamports,
    })


def _parse_create_account_with_seed(args, accounts, keys):
    check_num_system_accounts(accounts, 2)
    return ParsedInstructionEnum('createAccountWithSeed', {
        'source': keys[0],
        'newAccount': keys[1],
        'base': str(args.base),
        'seed': args.seed,
        'lamports': args.lamports,
        'space': args.space,
        'owner': str(args.owner),
    })


def _parse_advance_nonce(args, accounts, keys):
    check_num_system_accounts(accounts, 3)
    return ParsedInstructionEnum('advanceNonce', {
        'nonceAccount': keys[0],
        'recentBlockhashesSysvar': keys[1],
        'nonceAuthority': keys[2],
    })


def _parse_withdraw_from_nonce(args, accounts, keys):
    check_num_system_accounts(accounts, 5)
    return ParsedInstructionEnum('withdrawFromNonce', {
        'nonceAccount': keys[0],
        'destination': keys[1],
        'recentBlockhashesSysvar': keys[2],
        'rentSysvar': keys[3],
        'nonceAuthority': keys[4],
        'lamports': args.lamports,
    })


def _parse_initialize_nonce(args, accounts, keys):
    check_num_system_accounts(accounts, 3)
    return ParsedInstructionEnum('initializeNonce', {
        'nonceAccount': keys[0],
        'recentBlockhashesSysvar': keys[1],
        'rentSysvar': keys[2],
        'nonceAuthority': str(args.authority),
    })


def _parse_authorize_nonce(args, accounts, keys):
    check_num_system_accounts(accounts, 2)
    return ParsedInstructionEnum('authorizeNonce', {
        'nonceAccount': keys[0],
        'nonceAuthority': keys[1],
        'newAuthorized': str(args.authority),
    })


def _parse_upgrade_nonce(args, accounts, keys):
    check_num_system_accounts(accounts, 1)
    return ParsedInstructionEnum('upgradeNonce', {
        'nonceAccount': keys[0],
    })


def _parse_allocate(args, accounts, keys):
    check_num_system_accounts(accounts, 1)
    return ParsedInstructionEnum('allocate', {
        'account': keys[0],
        'space': args.space,
    })


def _parse_allocate_with_seed(args, accounts, keys):
    # Position 1 is the base signer; it is carried in the payload as well
    check_num_system_accounts(accounts, 2)
    return ParsedInstructionEnum('allocateWithSeed', {
        'account': keys[0],
        'base': str(args.base),
        'seed': args.seed,
        'space': args.space,
        'owner': str(args.owner),
    })


def _parse_assign_with_seed(args, accounts, keys):
    check_num_system_accounts(accounts, 2)
    return ParsedInstructionEnum('assignWithSeed', {
        'account': keys[0],
        'base': str(args.base),
        'seed': args.seed,
        'owner': str(args.owner),
    })


def _parse_transfer_with_seed(args, accounts, keys):
    check_num_system_accounts(accounts, 3)
    return ParsedInstructionEnum('transferWithSeed', {
        'source': keys[0],
        'sourceBase': keys[1],
        'destination': keys[2],
        'lamports': args.lamports,
        'sourceSeed': args.from_seed,
        'sourceOwner': str(args.from_owner),
    })


SYSTEM_PARSERS = {
    SystemInstructionType.CREATE_ACCOUNT: _parse_create_account,
    SystemInstructionType.ASSIGN: _parse_assign,
    SystemInstructionType.TRANSFER: _parse_transfer,
    SystemInstructionType.CREATE_ACCOUNT_WITH_SEED: _parse_create_account_with_seed,
    SystemInstructionType.ADVANCE_NONCE_ACCOUNT: _parse_advance_nonce,
    SystemInstructionType.WITHDRAW_NONCE_ACCOUNT: _parse_withdraw_from_nonce,
    SystemInstructionType.INITIALIZE_NONCE_ACCOUNT: _parse_initialize_nonce,
    SystemInstructionType.AUTHORIZE_NONCE_ACCOUNT: _parse_authorize_nonce,
    SystemInstructionType.ALLOCATE: _parse_allocate,
    SystemInstructionType.ALLOCATE_WITH_SEED: _parse_allocate_with_seed,
    SystemInstructionType.ASSIGN_WITH_SEED: _parse_assign_with_seed,
    SystemInstructionType.TRANSFER_WITH_SEED: _parse_transfer_with_seed,
    SystemInstructionType.UPGRADE_NONCE_ACCOUNT: _parse_upgrade_nonce,
}
