"""
TZX Container Parser
====================

This module decodes a complete TZX image: the 10-byte header followed by
blocks until the image is exhausted.

decode_container
----------------
The core loop. It peeks each tag byte, asks the dispatcher for the owning
block class and lets that class consume the block. Any error aborts the
whole parse; no partial container is returned.

TZXParser
---------
A parser object in the same spirit as the rest of the package's readers:
construct it from bytes or a file and query the decoded blocks.

Usage Examples
--------------
Listing blocks:
    >>> from zxtape.tzx import TZXParser
    >>> parser = TZXParser.from_file("game.tzx")
    >>> print(f"TZX revision {parser.header.version}")
    >>> for block in parser.blocks:
    ...     print(f"  {block.NAME}: {block.summary()}")

Walking the tape data:
    >>> for unit in parser.iter_tape_data():
    ...     print(unit.summary())

Reference
---------
- TZX format: https://www.worldofspectrum.org/TZXformat.html
"""

from collections import Counter
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterator, Optional, Union
import logging

from zxtape.config import DecoderConfig
from zxtape.errors import TapeFormatError, ZXTapeError
from zxtape.storage import ByteCursor, peek_u8
from zxtape.tap import TapeDataBlock, TapeHeader
from zxtape.tzx.blocks import ArchiveField, ArchiveInfo, Block
from zxtape.tzx.dispatch import dispatch
from zxtape.tzx.header import SIGNATURE, TZXHeader

# Logger for this module
logger = logging.getLogger(__name__)


# =============================================================================
# Container Decoding
# =============================================================================

@dataclass(frozen=True)
class TZXContainer:
    """
    A decoded TZX image.

    Attributes:
        header: The validated file header
        blocks: Blocks in stream order
    """
    header: TZXHeader
    blocks: tuple[Block, ...]

    def __len__(self) -> int:
        return len(self.blocks)


def decode_container(cursor: ByteCursor, config: Optional[DecoderConfig] = None) -> TZXContainer:
    """
    Decode a TZX image from a cursor positioned at its first byte.

    Args:
        cursor: Cursor over the image
        config: Version limits (defaults to DecoderConfig())

    Returns:
        The decoded container

    Raises:
        MalformedHeaderError: Bad signature (header or glue block)
        UnsupportedVersionError: Major version newer than supported
        DeprecatedBlockKindError: Withdrawn block kind found
        UnsupportedBlockKindError: Unknown tag byte found
        UnexpectedEndOfStreamError: Image truncated inside a block
    """
    header = TZXHeader.read(cursor, config)
    logger.debug(f"TZX revision {header.version}")

    blocks: list[Block] = []
    while not cursor.at_end():
        offset = cursor.position
        block_class = dispatch(peek_u8(cursor), offset)
        block = block_class.read(cursor)
        logger.debug(f"Parsed {block.NAME} block at offset {offset}")
        blocks.append(block)

    logger.debug(f"Decoded TZX image with {len(blocks)} blocks")
    return TZXContainer(header=header, blocks=tuple(blocks))


def is_tzx(data: bytes) -> bool:
    """Check whether data starts with the TZX signature."""
    return data[:len(SIGNATURE)] == SIGNATURE


# =============================================================================
# TZX Parser
# =============================================================================

@dataclass
class TZXParser:
    """
    Parser for TZX image files.

    Attributes:
        data: The raw TZX file bytes
        config: Decoder settings
        container: The decoded container

    Example:
        >>> parser = TZXParser.from_file("game.tzx")
        >>> print(parser.count_by_type())
    """

    # Raw TZX file data (private, not exposed in repr)
    data: bytes = field(repr=False)

    config: DecoderConfig = field(default_factory=DecoderConfig)

    container: Optional[TZXContainer] = field(default=None, init=False)

    def __post_init__(self) -> None:
        """Parse the image data after initialization."""
        self._parse()

    @classmethod
    def from_file(
        cls,
        filepath: Union[str, Path],
        config: Optional[DecoderConfig] = None,
    ) -> "TZXParser":
        """
        Create a TZXParser from a file path.

        Raises:
            FileNotFoundError: If the file doesn't exist
            TapeFormatError: If the image cannot be decoded
        """
        return cls.from_bytes(Path(filepath).read_bytes(), config)

    @classmethod
    def from_bytes(cls, data: bytes, config: Optional[DecoderConfig] = None) -> "TZXParser":
        return cls(data=data, config=config or DecoderConfig())

    def _parse(self) -> None:
        try:
            self.container = decode_container(ByteCursor(self.data), self.config)
        except ZXTapeError as e:
            logger.error(f"Failed to parse TZX: {e}")
            raise
        except Exception as e:
            logger.error(f"Unexpected error parsing TZX: {e}")
            raise TapeFormatError(f"Failed to parse TZX: {e}") from e

    # =========================================================================
    # Public Query Methods
    # =========================================================================

    @property
    def header(self) -> TZXHeader:
        return self.container.header

    @property
    def blocks(self) -> tuple[Block, ...]:
        return self.container.blocks

    def iter_tape_data(self) -> Iterator[TapeDataBlock]:
        """
        Iterate over the TAP units embedded in data blocks.

        Yields:
            TapeDataBlock instances, in tape order
        """
        for block in self.blocks:
            if block.tape_data is not None:
                yield block.tape_data

    def count_by_type(self) -> dict[str, int]:
        """Count blocks per block name, in order of first appearance."""
        return dict(Counter(block.NAME for block in self.blocks))

    def get_archive_info(self) -> Optional[ArchiveInfo]:
        for block in self.blocks:
            if isinstance(block, ArchiveInfo):
                return block
        return None

    def get_info(self) -> dict:
        """
        Get summary information about the image.

        Returns:
            Dictionary with image information
        """
        archive = self.get_archive_info()
        tape_data = list(self.iter_tape_data())

        return {
            "version": self.header.version,
            "title": archive.get(ArchiveField.TITLE) if archive else None,
            "total_blocks": len(self.blocks),
            "tape_data_blocks": len(tape_data),
            "files": [unit.summary() for unit in tape_data if isinstance(unit, TapeHeader)],
            "data_bytes": sum(len(unit.payload) for unit in tape_data),
            "block_types": self.count_by_type(),
        }


# =============================================================================
# Convenience Functions
# =============================================================================

def parse_tzx(data: bytes, config: Optional[DecoderConfig] = None) -> TZXParser:
    """
    Parse a TZX image from bytes.

    Raises:
        TapeFormatError: If the data is not a valid TZX image
    """
    return TZXParser.from_bytes(data, config)


def parse_tzx_file(filepath: Union[str, Path], config: Optional[DecoderConfig] = None) -> TZXParser:
    """
    Parse a TZX image from disk.

    Raises:
        FileNotFoundError: If the file doesn't exist
        TapeFormatError: If the file is not a valid TZX image
    """
    return TZXParser.from_file(filepath, config)
