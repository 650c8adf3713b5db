"""
HMMM Machine
============

The machine state an HMMM execution engine consumes: a 256-slot
instruction memory, sixteen signed 16-bit registers, and a program
counter.

    >>> from hmmm_sdk.assembler import assemble
    >>> from hmmm_sdk.emulator import MachineState
    >>> state = MachineState.from_program(assemble("0 setn r1 7\\n1 halt"))
    >>> state.fetch().source_text
    'setn r1 7'
"""

from hmmm_sdk.emulator.state import MachineState, REGISTER_MIN, REGISTER_MAX

__all__ = [
    "MachineState",
    "REGISTER_MIN",
    "REGISTER_MAX",
]
