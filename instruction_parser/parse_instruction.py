"""
Program id registry: routes a compiled instruction to its program's decoder.
"""
import logging

from .errors import ParsableProgram, ProgramNotParsable
from .parse_system import parse_system
from .parse_vote import parse_vote
from .parsed_instruction import render_key
from .system_instruction import SYSTEM_PROGRAM_ID
from .vote_instruction import VOTE_PROGRAM_ID

logger = logging.getLogger(__name__)

PARSABLE_PROGRAM_IDS = {
    str(SYSTEM_PROGRAM_ID): ParsableProgram.SYSTEM,
    str(VOTE_PROGRAM_ID): ParsableProgram.VOTE,
}

PROGRAM_PARSERS = {
    ParsableProgram.SYSTEM: parse_system,
    ParsableProgram.VOTE: parse_vote,
}


def is_parsable(program_id):
    return render_key(program_id) in PARSABLE_PROGRAM_IDS


def parse(program_id, instruction, account_keys):
    """Decode an instruction for a known program.

    Returns a dict with the program name, its id and the parsed record:
    {"program": "system", "programId": "111...", "parsed": {"type": ..., "info": {...}}}

    Raises ProgramNotParsable for unknown programs; decoder errors propagate unchanged.
    """
    program_key = render_key(program_id)
    program = PARSABLE_PROGRAM_IDS.get(program_key)
    if program is None:
        raise ProgramNotParsable(program_key)

    parsed = PROGRAM_PARSERS[program](instruction, account_keys)
    logger.debug(f"Parsed {program.value} instruction as {parsed.instruction_type}")
    return {
        'program': program.value,
        'programId': program_key,
        'parsed': parsed.to_dict(),
    }
