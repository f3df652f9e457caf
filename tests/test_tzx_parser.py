"""
TZX Container Unit Tests
========================

Tests for the TZX header, the container decoder and the TZXParser object.

Test Categories
---------------
1. Header: signature and version checks
2. Container: block loop and error propagation
3. Parser: query methods and convenience functions
"""

import logging
import struct

import pytest

from zxtape.config import DecoderConfig
from zxtape.errors import (
    DeprecatedBlockKindError,
    MalformedHeaderError,
    TapeFormatError,
    UnexpectedEndOfStreamError,
    UnsupportedBlockKindError,
    UnsupportedVersionError,
    ZXTapeError,
)
from zxtape.storage import ByteCursor
from zxtape.tap import ProgramHeader, StandardData
from zxtape.tzx import (
    ArchiveInfo,
    GlueBlock,
    PauseTapeCommand,
    StandardSpeedData,
    TextDescription,
    TZXContainer,
    TZXHeader,
    TZXParser,
    decode_container,
    is_tzx,
    parse_tzx,
    parse_tzx_file,
)


# =============================================================================
# Byte Builders
# =============================================================================

TZX_HEADER = b"ZXTape!\x1a\x01\x14"


def xor(data: bytes) -> int:
    result = 0
    for byte in data:
        result ^= byte
    return result


def standard_block(body: bytes, pause: int = 1000) -> bytes:
    return b"\x10" + struct.pack("<HH", pause, len(body)) + body


def program_header_block(name: bytes = b"hello") -> bytes:
    body = struct.pack("<BB10sHHH", 0, 0, name.ljust(10), 3, 0, 3)
    return standard_block(body + bytes([xor(body)]))


def data_block(payload: bytes) -> bytes:
    body = b"\xff" + payload
    return standard_block(body + bytes([xor(body)]))


@pytest.fixture
def tzx_image() -> bytes:
    """Archive info, a program header and its data, then a pause."""
    archive = b"\x00\x0bManic Miner"
    return (
        TZX_HEADER
        + b"\x32" + struct.pack("<HB", len(archive) + 1, 1) + archive
        + program_header_block()
        + data_block(b"\x00\x0a\x00")
        + b"\x20\x00\x00"
    )


# =============================================================================
# Header Tests
# =============================================================================

class TestHeader:
    """Tests for TZXHeader."""

    def test_valid_header(self):
        header = TZXHeader.read(ByteCursor(TZX_HEADER))
        assert header.signature == b"ZXTape!\x1a"
        assert header.major_version == 1
        assert header.minor_version == 20
        assert header.version == "1.20"

    def test_bad_signature(self):
        with pytest.raises(MalformedHeaderError) as exc_info:
            TZXHeader.read(ByteCursor(b"ZXTape?\x1a\x01\x14"))
        assert exc_info.value.offset == 0

    def test_missing_terminator(self):
        with pytest.raises(MalformedHeaderError):
            TZXHeader.read(ByteCursor(b"ZXTape!\x00\x01\x14"))

    def test_newer_major_version_rejected(self):
        with pytest.raises(UnsupportedVersionError) as exc_info:
            TZXHeader.read(ByteCursor(b"ZXTape!\x1a\x02\x00"))
        assert exc_info.value.major == 2
        assert exc_info.value.supported_major == 1

    def test_newer_minor_version_tolerated(self, caplog):
        with caplog.at_level(logging.WARNING, logger="zxtape.tzx.header"):
            header = TZXHeader.read(ByteCursor(b"ZXTape!\x1a\x01\x63"))
        assert header.minor_version == 99
        assert "1.99" in caplog.text

    def test_minor_version_of_older_major_not_warned(self, caplog):
        config = DecoderConfig(max_major_version=2)
        with caplog.at_level(logging.WARNING, logger="zxtape.tzx.header"):
            header = TZXHeader.read(ByteCursor(b"ZXTape!\x1a\x01\x63"), config)
        assert header.version == "1.99"
        assert caplog.text == ""

    def test_minor_version_of_newest_major_warned(self, caplog):
        config = DecoderConfig(max_major_version=2, max_minor_version=0)
        with caplog.at_level(logging.WARNING, logger="zxtape.tzx.header"):
            TZXHeader.read(ByteCursor(b"ZXTape!\x1a\x02\x1e"), config)
        assert "2.30 is newer than 2.00" in caplog.text

    def test_older_versions_accepted(self):
        assert TZXHeader.read(ByteCursor(b"ZXTape!\x1a\x01\x0a")).version == "1.10"

    def test_config_raises_major_limit(self):
        config = DecoderConfig(max_major_version=2)
        header = TZXHeader.read(ByteCursor(b"ZXTape!\x1a\x02\x00"), config)
        assert header.major_version == 2

    def test_truncated_header(self):
        with pytest.raises(UnexpectedEndOfStreamError):
            TZXHeader.read(ByteCursor(b"ZXTape!\x1a\x01"))


# =============================================================================
# Container Tests
# =============================================================================

class TestDecodeContainer:
    """Tests for decode_container()."""

    def test_header_only(self):
        container = decode_container(ByteCursor(bytes([0x5A, 0x58, 0x54, 0x61, 0x70, 0x65, 0x21, 0x1A, 0x01, 0x14])))
        assert isinstance(container, TZXContainer)
        assert container.header.major_version == 1
        assert container.blocks == ()
        assert len(container) == 0

    def test_single_pause(self):
        container = decode_container(ByteCursor(TZX_HEADER + b"\x20\xe8\x03"))
        assert container.blocks == (PauseTapeCommand(pause=1000),)

    def test_block_order(self, tzx_image):
        container = decode_container(ByteCursor(tzx_image))
        assert [type(block) for block in container.blocks] == [
            ArchiveInfo, StandardSpeedData, StandardSpeedData, PauseTapeCommand,
        ]
        assert isinstance(container.blocks[1].tape_data, ProgramHeader)
        assert isinstance(container.blocks[2].tape_data, StandardData)

    def test_glue_block_continues(self):
        data = TZX_HEADER + b"\x30\x01A" + b"\x5aXTape!\x1a\x01\x14" + b"\x30\x01B"
        container = decode_container(ByteCursor(data))
        assert [type(block) for block in container.blocks] == [
            TextDescription, GlueBlock, TextDescription,
        ]

    def test_deprecated_block(self):
        with pytest.raises(DeprecatedBlockKindError) as exc_info:
            decode_container(ByteCursor(TZX_HEADER + b"\x40"))
        assert exc_info.value.block_id == 0x40
        assert exc_info.value.offset == 10

    def test_unknown_block(self):
        with pytest.raises(UnsupportedBlockKindError) as exc_info:
            decode_container(ByteCursor(TZX_HEADER + b"\x20\x00\x00\x4b"))
        assert exc_info.value.offset == 13

    def test_truncated_block(self):
        with pytest.raises(UnexpectedEndOfStreamError):
            decode_container(ByteCursor(TZX_HEADER + b"\x20\xe8"))

    def test_generalized_length_overrun_aborts(self):
        # Declared length 4 but the fixed fields alone take 14 bytes
        body = struct.pack("<HIBBIBB", 1000, 0, 0, 0, 0, 0, 0)
        data = TZX_HEADER + b"\x19" + struct.pack("<I", 4) + body + b"\x20\xe8\x03"
        with pytest.raises(TapeFormatError) as exc_info:
            decode_container(ByteCursor(data))
        assert exc_info.value.offset == 11
        assert "declares 4 bytes" in str(exc_info.value)

    def test_bad_signature(self):
        with pytest.raises(MalformedHeaderError):
            decode_container(ByteCursor(b"ZXTAPE!\x1a\x01\x14"))

    def test_version_two_rejected(self):
        with pytest.raises(UnsupportedVersionError):
            decode_container(ByteCursor(b"ZXTape!\x1a\x02\x00\x20\xe8\x03"))


# =============================================================================
# Parser Tests
# =============================================================================

class TestTZXParser:
    """Tests for the TZXParser object."""

    def test_from_bytes(self, tzx_image):
        parser = TZXParser.from_bytes(tzx_image)
        assert parser.header.version == "1.20"
        assert len(parser.blocks) == 4
        assert parser.container.blocks == parser.blocks

    def test_from_file(self, tmp_path, tzx_image):
        path = tmp_path / "game.tzx"
        path.write_bytes(tzx_image)
        assert len(TZXParser.from_file(path).blocks) == 4

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            TZXParser.from_file(tmp_path / "missing.tzx")

    def test_iter_tape_data(self, tzx_image):
        units = list(TZXParser.from_bytes(tzx_image).iter_tape_data())
        assert len(units) == 2
        assert units[0].filename == "hello"
        assert units[1].data == b"\x00\x0a\x00"

    def test_count_by_type(self, tzx_image):
        counts = TZXParser.from_bytes(tzx_image).count_by_type()
        assert counts == {
            "Archive Info": 1,
            "Standard Speed Data": 2,
            "Pause Tape Command": 1,
        }

    def test_get_info(self, tzx_image):
        info = TZXParser.from_bytes(tzx_image).get_info()
        assert info["version"] == "1.20"
        assert info["title"] == "Manic Miner"
        assert info["total_blocks"] == 4
        assert info["tape_data_blocks"] == 2
        assert info["files"] == ['BASIC Program: "hello" LINE 0']
        assert info["data_bytes"] == 3

    def test_get_info_without_archive(self):
        info = TZXParser.from_bytes(TZX_HEADER).get_info()
        assert info["title"] is None
        assert info["total_blocks"] == 0

    def test_error_is_logged_and_raised(self, caplog):
        with caplog.at_level(logging.ERROR, logger="zxtape.tzx.parser"):
            with pytest.raises(DeprecatedBlockKindError):
                TZXParser.from_bytes(TZX_HEADER + b"\x16")
        assert "Failed to parse TZX" in caplog.text

    def test_errors_share_base_class(self):
        with pytest.raises(ZXTapeError):
            parse_tzx(b"not a tape")

    def test_config(self):
        parser = parse_tzx(b"ZXTape!\x1a\x03\x00", DecoderConfig(max_major_version=3))
        assert parser.header.major_version == 3

    def test_parse_tzx_file(self, tmp_path, tzx_image):
        path = tmp_path / "game.tzx"
        path.write_bytes(tzx_image)
        archive = parse_tzx_file(path).get_archive_info()
        assert archive is not None
        assert len(archive.entries) == 1


class TestIsTzx:
    """Tests for signature sniffing."""

    def test_tzx(self):
        assert is_tzx(TZX_HEADER)

    def test_tap(self):
        assert not is_tzx(b"\x13\x00\x00\x00hello     ")

    def test_short(self):
        assert not is_tzx(b"ZX")
