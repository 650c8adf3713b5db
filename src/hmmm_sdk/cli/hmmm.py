"""
hmmm - HMMM Assembler/Disassembler Command-Line Interface
========================================================

Assembles HMMM source (.hmmm) into binary (.hb), or decodes binary back
into labeled source. The input suffix picks the direction; the output
suffix picks the written format.

Usage Examples
--------------
Check a program and print its listing:
    $ hmmm countdown.hmmm

Assemble to a binary file:
    $ hmmm countdown.hmmm -o countdown.hb

Decompile a binary file:
    $ hmmm countdown.hb -o countdown.hmmm

Verbose mode:
    $ hmmm -v countdown.hmmm
"""

import logging
from pathlib import Path
from typing import Optional

import click

from hmmm_sdk import __version__
from hmmm_sdk.assembler import Assembler, format_success_report, write_binary
from hmmm_sdk.cli.errors import handle_cli_exception
from hmmm_sdk.config import get_default_config
from hmmm_sdk.disassembler import Disassembler, write_source
from hmmm_sdk.emulator import MachineState

logger = logging.getLogger(__name__)


def setup_logging(verbose: bool) -> None:
    """Send SDK log records to stderr when running verbosely."""
    if verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(levelname)s: %(message)s",
            force=True,
        )


# =============================================================================
# CLI Definition
# =============================================================================

@click.command()
@click.argument(
    "input_file",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
)
@click.option(
    "-o", "--output",
    type=click.Path(dir_okay=False, path_type=Path),
    help="Output .hmmm or .hb file (other suffixes are written as binary)",
)
@click.option(
    "-v", "--verbose",
    is_flag=True,
    help="Verbose output",
)
@click.version_option(version=__version__, prog_name="hmmm")
def main(
    input_file: Path,
    output: Optional[Path],
    verbose: bool,
) -> None:
    """
    Assemble or decompile Harvey Mudd Miniature Machine programs.

    INPUT_FILE is either assembly source (.hmmm), which is assembled, or
    a compiled binary file (.hb), which is decoded.

    \b
    Examples:
        hmmm prog.hmmm               # Check and list the program
        hmmm prog.hmmm -o prog.hb    # Assemble to binary
        hmmm prog.hb -o prog.hmmm    # Decompile to source
    """
    setup_logging(verbose)
    config = get_default_config()
    error_type = None

    try:
        if config.is_source(input_file.name):
            error_type = "Assembly"
            program = Assembler(verbose=verbose).assemble_file(input_file)
        elif config.is_binary(input_file.name):
            error_type = "Decode"
            program = Disassembler().disassemble_file(input_file)
        else:
            raise click.BadParameter(
                f"unknown file type '{input_file.name}', expected "
                f"{config.source_suffix} or {config.binary_suffix}",
                param_hint="INPUT_FILE",
            )

        # The program must fit the machine's instruction memory
        state = MachineState.from_program(program, config.memory_size)
        logger.debug(
            f"Loaded {len(program)} instructions into {state.memory_size}-slot memory"
        )

        click.echo(format_success_report(program, config.preview_lines))

        if output is not None:
            if config.is_source(output.name):
                write_source(program, output)
            else:
                if not config.is_binary(output.name):
                    click.echo("No output type specified, writing as binary...")
                write_binary(program, output)
            if verbose:
                click.echo(f"Wrote {len(program)} instructions to {output}")

    except Exception as e:
        handle_cli_exception(e, verbose=verbose, error_type=error_type)


if __name__ == "__main__":
    main()
