"""
Decode Vote program instructions into canonical records.
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
from .vote_instruction import VoteInstructionType, decode_vote_instruction

logger = logging.getLogger(__name__)


def parse_vote(instruction, account_keys):
    """Decode a compiled Vote program instruction.

    Same contract as parse_system, for the Vote program.
    """
    try:
        instruction_type, args = decode_vote_instruction(instruction.data)
    except DECODE_ERRORS as e:
        logger.debug(f"Vote instruction payload rejected: {e}")
        raise InstructionNotParsable(ParsableProgram.VOTE) from e

    accounts = list(instruction.accounts)
    # Runtime should prevent this from ever happening
    check_account_indices(accounts, account_keys, ParsableProgram.VOTE)

    handler = VOTE_PARSERS.get(instruction_type)
    if handler is None:
        raise NotImplementedError(f"no parser for vote instruction {instruction_type.name}")
    return handler(args, accounts, AccountResolver(accounts, account_keys))


def check_num_vote_accounts(accounts, num):
    check_num_accounts(accounts, num, ParsableProgram.VOTE)


def _vote_info(vote):
    return {
        'slots': list(vote.slots),
        'hash': str(vote.hash),
        'timestamp': vote.timestamp,
    }


def _parse_initialize(args, accounts, keys):
    check_num_vote_accounts(accounts, 4)
    vote_init = args.vote_init
    return ParsedInstructionEnum('initialize', {
        'voteAccount': keys[0],
        'rentSysvar': keys[1],
        'clockSysvar': keys[2],
        'node': keys[3],
        'authorizedVoter': str(vote_init.authorized_voter),
        'authorizedWithdrawer': str(vote_init.authorized_withdrawer),
        'commission': vote_init.commission,
    })


def _parse_authorize(args, accounts, keys):
    check_num_vote_accounts(accounts, 3)
    return ParsedInstructionEnum('authorize', {
        'voteAccount': keys[0],
        'clockSysvar': keys[1],
        'authority': keys[2],
        'newAuthority': str(args.new_authorized),
        'authorityType': args.vote_authorize.name,
    })


def _parse_vote(args, accounts, keys):
    check_num_vote_accounts(accounts, 4)
    return ParsedInstructionEnum('vote', {
        'voteAccount': keys[0],
        'slotHashesSysvar': keys[1],
        'clockSysvar': keys[2],
        'voteAuthority': keys[3],
        'vote': _vote_info(args.vote),
    })


def _parse_withdraw(args, accounts, keys):
    check_num_vote_accounts(accounts, 3)
    return ParsedInstructionEnum('withdraw', {
        'voteAccount': keys[0],
        'destination': keys[1],
        'withdrawAuthority': keys[2],
        'lamports': args.lamports,
    })


def _parse_update_validator_identity(args, accounts, keys):
    check_num_vote_accounts(accounts, 3)
    return ParsedInstructionEnum('updateValidatorIdentity', {
        'voteAccount': keys[0],
        'newValidatorIdentity': keys[1],
        'withdrawAuthority': keys[2],
    })


def _parse_update_commission(args, accounts, keys):
    check_num_vote_accounts(accounts, 2)
    return ParsedInstructionEnum('updateCommission', {
        'voteAccount': keys[0],
        'withdrawAuthority': keys[1],
        'commission': args.commission,
    })


def _parse_vote_switch(args, accounts, keys):
    check_num_vote_accounts(accounts, 4)
    return ParsedInstructionEnum('voteSwitch', {
        'voteAccount': keys[0],
        'slotHashesSysvar': keys[1],
        'clockSysvar': keys[2],
        'voteAuthority': keys[3],
        'vote': _vote_info(args.vote),
        'hash': str(args.proof_hash),
    })


def _parse_authorize_checked(args, accounts, keys):
    check_num_vote_accounts(accounts, 4)
    return ParsedInstructionEnum('authorizeChecked', {
        'voteAccount': keys[0],
        'clockSysvar': keys[1],
        'authority': keys[2],
        'newAuthority': keys[3],
        'authorityType': args.vote_authorize.name,
    })


VOTE_PARSERS = {
    VoteInstructionType.INITIALIZE_ACCOUNT: _parse_initialize,
    VoteInstructionType.AUTHORIZE: _parse_authorize,
    VoteInstructionType.VOTE: _parse_vote,
    VoteInstructionType.WITHDRAW: _parse_withdraw,
    VoteInstructionType.UPDATE_VALIDATOR_IDENTITY: _parse_update_validator_identity,
    VoteInstructionType.UPDATE_COMMISSION: _parse_update_commission,
    VoteInstructionType.VOTE_SWITCH: _parse_vote_switch,
    VoteInstructionType.AUTHORIZE_CHECKED: _parse_authorize_checked,
}
