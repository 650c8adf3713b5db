"""
HMMM Assembler
==============

Turns labeled HMMM assembly source (.hmmm) into a Program and binary
files (.hb).

Main Components
---------------
- **Assembler**: Validates line labels, strips comments, and runs the
  instruction codec on each line
- **report**: Success and failure reports for the command line

Example Usage
-------------
>>> from hmmm_sdk.assembler import Assembler
>>> asm = Assembler()
>>> program = asm.assemble_file("countdown.hmmm")
>>> asm.write_binary("countdown.hb")
"""

from hmmm_sdk.assembler.assembler import (
    Assembler,
    assemble,
    assemble_file,
    write_binary,
    is_skipped_line,
    split_source_line,
    parse_label,
)
from hmmm_sdk.assembler.report import (
    format_success_report,
    format_error_report,
    format_listing_line,
)

__all__ = [
    "Assembler",
    "assemble",
    "assemble_file",
    "write_binary",
    "is_skipped_line",
    "split_source_line",
    "parse_label",
    "format_success_report",
    "format_error_report",
    "format_listing_line",
]
