import logging

import pytest
from solders.instruction import CompiledInstruction
from solders.pubkey import Pubkey

from instruction_parser import parse, is_parsable
from instruction_parser.errors import InstructionNotParsable, ProgramNotParsable
from instruction_parser.system_instruction import SYSTEM_PROGRAM_ID, SystemInstructionType, encode_system_instruction
from instruction_parser.vote_instruction import VOTE_PROGRAM_ID, VoteInstructionType, encode_vote_instruction

# Configure logging
logging.basicConfig(level=logging.INFO, format='%(asctime)s - %(name)s - %(levelname)s - %(message)s')
logger = logging.getLogger(__name__)


def test_parse_system_program():
    source = Pubkey.new_unique()
    destination = Pubkey.new_unique()
    data = encode_system_instruction(SystemInstructionType.TRANSFER, lamports=55)
    instruction = CompiledInstruction(2, data, bytes([0, 1]))

    result = parse(SYSTEM_PROGRAM_ID, instruction, [source, destination, SYSTEM_PROGRAM_ID])
    logger.info(f"Registry result: {result}")
    assert result == {
        'program': 'system',
        'programId': '11111111111111111111111111111111',
        'parsed': {
            'type': 'transfer',
            'info': {'source': str(source), 'destination': str(destination), 'lamports': 55},
        },
    }


def test_parse_vote_program_by_string_id():
    keys = [Pubkey.new_unique() for _ in range(3)]
    data = encode_vote_instruction(VoteInstructionType.UPDATE_COMMISSION, commission=7)
    instruction = CompiledInstruction(2, data, bytes([0, 1]))

    result = parse(str(VOTE_PROGRAM_ID), instruction, keys)
    assert result['program'] == 'vote'
    assert result['programId'] == 'Vote111111111111111111111111111111111111111'
    assert result['parsed']['type'] == 'updateCommission'
    assert result['parsed']['info']['commission'] == 7


def test_unknown_program():
    program_id = Pubkey.new_unique()
    assert not is_parsable(program_id)
    assert is_parsable(SYSTEM_PROGRAM_ID)
    with pytest.raises(ProgramNotParsable) as excinfo:
        parse(program_id, CompiledInstruction(0, b"", b""), [program_id])
    assert excinfo.value.program_id == str(program_id)


def test_decoder_errors_propagate():
    with pytest.raises(InstructionNotParsable):
        parse(VOTE_PROGRAM_ID, CompiledInstruction(0, b"\x09", bytes([0])), [VOTE_PROGRAM_ID])
