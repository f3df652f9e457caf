"""
zxtape - Tape Image Inspector Command-Line Interface
====================================================

This module implements the command-line interface for inspecting ZX
Spectrum tape images. TZX images are recognised by their signature; any
other file is decoded as a plain TAP file.

Commands
--------
- **list**: List the blocks of an image
- **info**: Show summary information
- **validate**: Decode the image and check every unit's checksum

Usage Examples
--------------
List the blocks of a TZX image:
    $ zxtape list game.tzx

Show summary information:
    $ zxtape info game.tap

Validate with debug logging:
    $ zxtape -v validate game.tzx

Environment
-----------
ZXTAPE_MAX_MAJOR_VERSION, ZXTAPE_MAX_MINOR_VERSION and ZXTAPE_LOG_LEVEL
are read at startup (see zxtape.config).
"""

import logging
import sys
from pathlib import Path
from typing import Union

import click

from zxtape import __version__
from zxtape.cli.errors import ExitCode, handle_cli_exception
from zxtape.config import DecoderConfig
from zxtape.errors import ZXTapeError
from zxtape.tap import TapeDataBlock, TapeFile, TapeHeader, check_unit, parse_tap
from zxtape.tzx import TZXParser, is_tzx

logger = logging.getLogger(__name__)


# =============================================================================
# CLI Context and Utilities
# =============================================================================

class Context:
    """
    Shared context for CLI commands.

    Stores the decoder configuration and verbosity.
    """

    def __init__(self) -> None:
        self.config: DecoderConfig = DecoderConfig.from_env()
        self.verbose: bool = False

    def setup_logging(self) -> None:
        """Configure logging based on verbosity and ZXTAPE_LOG_LEVEL."""
        level = logging.DEBUG if self.verbose else self.config.get_log_level()
        logging.basicConfig(
            level=level,
            format="%(levelname)s: %(message)s" if self.verbose else "%(message)s",
        )


pass_context = click.make_pass_decorator(Context, ensure=True)


Image = Union[TZXParser, TapeFile]


def load_image(path: Path, config: DecoderConfig) -> Image:
    """Decode a file as TZX if it carries the signature, else as TAP."""
    data = path.read_bytes()
    if is_tzx(data):
        logger.debug(f"{path}: TZX signature found")
        return TZXParser.from_bytes(data, config)
    logger.debug(f"{path}: no TZX signature, decoding as TAP")
    return parse_tap(data)


def tape_units(image: Image) -> list[TapeDataBlock]:
    if isinstance(image, TZXParser):
        return list(image.iter_tape_data())
    return list(image.blocks)


# =============================================================================
# Main CLI Group
# =============================================================================

@click.group()
@click.option(
    "-v", "--verbose",
    is_flag=True,
    help="Enable debug logging",
)
@click.version_option(__version__, "--version", "-V", prog_name="zxtape")
@pass_context
def main(ctx: Context, verbose: bool) -> None:
    """
    ZX Spectrum tape image inspector.

    Decode TZX and TAP cassette images.

    \b
    Commands:
      list      List the blocks of an image
      info      Show summary information
      validate  Decode the image and check checksums

    \b
    Examples:
      zxtape list game.tzx
      zxtape info game.tap
      zxtape -v validate game.tzx

    For more information: https://www.worldofspectrum.org/TZXformat.html
    """
    ctx.verbose = verbose
    ctx.setup_logging()


# =============================================================================
# List Command
# =============================================================================

@main.command("list")
@click.argument(
    "image_file",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
)
@pass_context
def cmd_list(ctx: Context, image_file: Path) -> None:
    """
    List the blocks of a tape image.

    \b
    Example:
      zxtape list game.tzx

    \b
    Output format:
         #  Block                    Details
         0  Archive Info             Manic Miner
         1  Standard Speed Data      BASIC Program: "manic" LINE 0, pause 1000 ms
    """
    try:
        image = load_image(image_file, ctx.config)

        if isinstance(image, TZXParser):
            click.echo(f"TZX revision {image.header.version}")
            rows = [(block.NAME, block.summary()) for block in image.blocks]
        else:
            click.echo("TAP file")
            rows = [(block.name, block.summary()) for block in image.blocks]

        click.echo(f"{'#':>4}  {'Block':<24} Details")
        click.echo("-" * 60)
        for index, (name, details) in enumerate(rows):
            click.echo(f"{index:>4}  {name:<24} {details}")

    except Exception as e:
        handle_cli_exception(e, verbose=ctx.verbose, error_type="Decode")


# =============================================================================
# Info Command
# =============================================================================

@main.command("info")
@click.argument(
    "image_file",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
)
@pass_context
def cmd_info(ctx: Context, image_file: Path) -> None:
    """
    Show summary information about a tape image.

    \b
    Example:
      zxtape info game.tzx
    """
    try:
        image = load_image(image_file, ctx.config)

        click.echo(f"Tape Information: {image_file}")
        click.echo("=" * 40)

        if isinstance(image, TZXParser):
            info = image.get_info()
            click.echo("Format:      TZX")
            click.echo(f"Revision:    {info['version']}")
            if info["title"]:
                click.echo(f"Title:       {info['title']}")
            click.echo(f"Blocks:      {info['total_blocks']}")
            click.echo(f"Data blocks: {info['tape_data_blocks']}")
            click.echo(f"Data bytes:  {info['data_bytes']}")
            click.echo()
            click.echo("Block Types:")
            for name, count in info["block_types"].items():
                click.echo(f"  {name:<24} {count}")
            files = info["files"]
        else:
            click.echo("Format:      TAP")
            click.echo(f"Blocks:      {len(image)}")
            click.echo(f"Data bytes:  {sum(len(block.payload) for block in image.blocks)}")
            files = [header.summary() for header in image.headers()]

        click.echo()
        click.echo("Files:")
        for summary in files:
            click.echo(f"  {summary}")
        if not files:
            click.echo("  (none)")

    except Exception as e:
        handle_cli_exception(e, verbose=ctx.verbose, error_type="Decode")


# =============================================================================
# Validate Command
# =============================================================================

@main.command("validate")
@click.argument(
    "image_file",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
)
@pass_context
def cmd_validate(ctx: Context, image_file: Path) -> None:
    """
    Validate a tape image.

    Checks:
    - Signature and version (TZX)
    - Block structure
    - Header and data checksums (reported as warnings)

    \b
    Example:
      zxtape validate game.tzx
    """
    try:
        try:
            image = load_image(image_file, ctx.config)
        except ZXTapeError as e:
            click.echo("Validation FAILED:")
            click.echo(f"  ERROR: {e}")
            sys.exit(ExitCode.FORMAT_ERROR)

        warnings = []
        units = tape_units(image)
        for index, unit in enumerate(units):
            result = check_unit(unit)
            if result is not None and not result.is_valid:
                kind = "header" if isinstance(unit, TapeHeader) else "data"
                warnings.append(
                    f"Unit {index}: {kind} checksum 0x{result.stored:02X}, "
                    f"calculated 0x{result.calculated:02X}"
                )

        if ctx.verbose:
            click.echo("Validation Details:")
            click.echo(f"  Format: {'TZX' if isinstance(image, TZXParser) else 'TAP'}")
            click.echo(f"  Tape data units: {len(units)}")

        if warnings:
            click.echo("Validation passed with warnings:")
            for warning in warnings:
                click.echo(f"  WARNING: {warning}")
            click.echo("\nProtected loaders often store non-standard checksums.")
        else:
            click.echo(f"Validation PASSED: {image_file}")

    except Exception as e:
        handle_cli_exception(e, verbose=ctx.verbose, error_type="Validation")


if __name__ == "__main__":
    main()
