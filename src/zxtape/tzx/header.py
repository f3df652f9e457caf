"""
TZX File Header
===============

Every TZX image starts with a 10-byte header:

    Offset  Size    Description
    ------  ----    -----------
    0x00    7       "ZXTape!"
    0x07    1       End of text file marker (0x1A)
    0x08    1       TZX major revision number
    0x09    1       TZX minor revision number
"""

from dataclasses import dataclass
from typing import Optional
import logging

from zxtape.config import DecoderConfig
from zxtape.errors import MalformedHeaderError, UnsupportedVersionError
from zxtape.storage import ByteCursor, read_fixed, read_u8

# Logger for this module
logger = logging.getLogger(__name__)

SIGNATURE = b"ZXTape!\x1a"
HEADER_SIZE = 10


@dataclass(frozen=True)
class TZXHeader:
    """
    Attributes:
        signature: The 8 signature bytes as read
        major_version: TZX major revision
        minor_version: TZX minor revision
    """
    signature: bytes
    major_version: int
    minor_version: int

    @classmethod
    def read(cls, cursor: ByteCursor, config: Optional[DecoderConfig] = None) -> "TZXHeader":
        """
        Read and validate the header.

        Raises:
            MalformedHeaderError: Signature is not "ZXTape!" + 0x1A
            UnsupportedVersionError: Major version newer than supported
            UnexpectedEndOfStreamError: Fewer than 10 bytes available
        """
        offset = cursor.position
        header = cls(
            signature=read_fixed(cursor, len(SIGNATURE)),
            major_version=read_u8(cursor),
            minor_version=read_u8(cursor),
        )
        header.validate(config or DecoderConfig(), offset)
        return header

    def validate(self, config: DecoderConfig, offset: int = 0) -> None:
        if self.signature != SIGNATURE:
            raise MalformedHeaderError(self.signature, offset=offset)

        if self.major_version > config.max_major_version:
            raise UnsupportedVersionError(
                self.major_version,
                self.minor_version,
                config.max_major_version,
                offset=offset + 8,
            )

        if (
            self.major_version == config.max_major_version
            and self.minor_version > config.max_minor_version
        ):
            logger.warning(
                f"TZX revision {self.version} is newer than "
                f"{config.max_major_version}.{config.max_minor_version:02d}, "
                f"unknown blocks may follow"
            )

    @property
    def version(self) -> str:
        return f"{self.major_version}.{self.minor_version:02d}"
