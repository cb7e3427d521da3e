"""
Errors raised while decoding compiled instructions.
"""
from enum import Enum


class ParsableProgram(Enum):
    """Programs whose instructions can be decoded into canonical records."""
    SYSTEM = "system"
    VOTE = "vote"

    @property
    def display_name(self):
        return self.name.capitalize()


class ParseInstructionError(Exception):
    """Base class for instruction decoding failures."""


class InstructionNotParsable(ParseInstructionError):
    """The payload bytes do not deserialize into any variant of the program schema."""

    def __init__(self, program):
        self.program = program
        super().__init__(f"{program.display_name} instruction not parsable")


class InstructionKeyMismatch(ParseInstructionError):
    """An account index is out of bounds, or too few indices were supplied."""

    def __init__(self, program):
        self.program = program
        super().__init__(f"{program.display_name} instruction key mismatch")


class ProgramNotParsable(ParseInstructionError):
    """No decoder is registered for the instruction's program id."""

    def __init__(self, program_id=None):
        self.program_id = program_id
        super().__init__("Program not parsable")
