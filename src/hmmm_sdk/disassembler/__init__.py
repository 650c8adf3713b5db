"""
HMMM SDK Disassembler Module
============================

Decodes compiled HMMM binary files back into programs and labeled
assembly source.

Usage:
    from hmmm_sdk.disassembler import Disassembler

    disasm = Disassembler()
    program = disasm.disassemble_file("countdown.hb")
    print(disasm.render(program))
"""

from .hmmm import Disassembler, render_source, write_source

__all__ = [
    "Disassembler",
    "render_source",
    "write_source",
]
