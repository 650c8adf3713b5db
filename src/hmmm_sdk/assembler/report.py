"""
Compile Reports
===============

Text reports printed after an assemble or decode run.

A successful run lists the program:

    ==================================
    ====  COMPILATION SUCCESSFUL  ====
    ==================================
    Line | Command | Arguments
       0 | setn    | r0 5            ==>    0001 0000 0000 0101
       1 | halt    |                 ==>    0000 0000 0000 0000

Programs longer than the preview show the first lines, a '.......'
separator, and the last instruction, even when only one row is hidden.
A failed run shows the error, the raw line, and how the line was split.
"""

from hmmm_sdk.cpu.instruction import Instruction
from hmmm_sdk.cpu.program import Program
from hmmm_sdk.errors import CompileError

BANNER_RULE = "=" * 34
TABLE_RULE = "=" * 43


def format_listing_line(index: int, instruction: Instruction) -> str:
    """One report row: index, mnemonic, operands, and binary word."""
    return (
        f"{index:4} | {instruction.mnemonic:<7} | {instruction.text_form:<15}"
        f" ==>    {instruction.binary_text}"
    )


def format_success_report(program: Program, preview_lines: int = 10) -> str:
    """
    Format the report for a successful run.

    Args:
        program: The assembled or decoded program
        preview_lines: Rows listed before jumping to the last instruction
    """
    lines = [
        BANNER_RULE,
        "====  COMPILATION SUCCESSFUL  ====",
        BANNER_RULE,
        "Line | Command | Arguments",
    ]

    for index, instruction in enumerate(program):
        if index >= preview_lines:
            lines.append(".......")
            lines.append(format_listing_line(len(program) - 1, program[-1]))
            break
        lines.append(format_listing_line(index, instruction))

    return "\n".join(lines)


def format_error_report(error: CompileError) -> str:
    """
    Format the report for a failed run.

    Example:
        ERROR ON LINE 3: InvalidRegister
        prog.hmmm:3: error: register 'r16' is out of range
        Raw: "2 setn r16 5"
    """
    line = error.location.line if error.location else "?"
    lines = [
        BANNER_RULE,
        "==== COMPILATION UNSUCCESSFUL ====",
        BANNER_RULE,
        "",
        f"ERROR ON LINE {line}: {error.kind}",
        str(error),
    ]

    if error.source_line is not None:
        lines.append(f'Raw: "{error.source_line}"')

    if error.fields is not None:
        fields = error.fields
        lines.extend([
            TABLE_RULE,
            "||           Interpreted As: ",
            "|| Line | Command | Arguments ",
            f"|| {fields.label:<4} | {fields.mnemonic:<7} | {' '.join(fields.args):<15}",
            TABLE_RULE,
        ])

    lines.append("Exiting...")
    return "\n".join(lines)
