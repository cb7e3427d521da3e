"""
Decode Solana System and Vote program instructions into canonical records.
"""
from .errors import (
    InstructionKeyMismatch,
    InstructionNotParsable,
    ParsableProgram,
    ParseInstructionError,
    ProgramNotParsable,
)
from .parse_instruction import PARSABLE_PROGRAM_IDS, is_parsable, parse
from .parse_system import parse_system
from .parse_transaction import parse_transaction
from .parse_vote import parse_vote
from .parsed_instruction import ParsedInstructionEnum

__version__ = "0.1.0"
