"""
TAP Module Unit Tests
=====================

Tests for the TAP unit records, the unit decoder and the checksum helpers.

Test Categories
---------------
1. Headers: the four header kinds and their parameters
2. Data: standard data and fragments
3. Decoder: Standalone alternation and SingleShot units
4. Errors: bad flag bytes, bad header types, truncation
5. TAP files: whole-file decoding
6. Checksum: calculation and reporting
"""

import struct

import pytest

from zxtape.errors import (
    TapeFormatError,
    UnexpectedEndOfStreamError,
    UnexpectedFlagByteError,
    UnknownHeaderSubtypeError,
)
from zxtape.storage import ByteCursor
from zxtape.tap import (
    AlphanumericHeader,
    ByteHeader,
    FLAG_DATA,
    FragmentData,
    HeaderType,
    NumericHeader,
    ProgramHeader,
    SingleShot,
    Standalone,
    StandardData,
    TapeFile,
    calculate_checksum,
    check_unit,
    decode_next,
    parse_tap,
    parse_tap_file,
)


# =============================================================================
# Byte Builders
# =============================================================================

def xor(data: bytes) -> int:
    result = 0
    for byte in data:
        result ^= byte
    return result


def header_body(
    data_type: int = 0,
    name: bytes = b"hello",
    data_length: int = 10,
    param1: int = 10,
    param2: int = 10,
    flag: int = 0,
) -> bytes:
    """Build a 19-byte header body with a correct checksum."""
    body = struct.pack("<BB10sHHH", flag, data_type, name.ljust(10), data_length, param1, param2)
    return body + bytes([xor(body)])


def data_body(payload: bytes, flag: int = 0xFF) -> bytes:
    """Build a standard data body: flag, payload, checksum."""
    body = bytes([flag]) + payload
    return body + bytes([xor(body)])


def prefixed(body: bytes) -> bytes:
    return struct.pack("<H", len(body)) + body


# =============================================================================
# Header Tests
# =============================================================================

class TestHeaders:
    """Tests for the four header kinds."""

    def test_program_header(self):
        cursor = ByteCursor(prefixed(header_body()))
        block, mode = decode_next(cursor, Standalone())

        assert isinstance(block, ProgramHeader)
        assert block.length == 19
        assert block.filename == "hello"
        assert block.data_length == 10
        assert block.autostart_line == 10
        assert block.program_length == 10
        assert mode == Standalone(header_allowed=False)
        # Prefix plus 19-byte body
        assert cursor.position == 21
        assert cursor.at_end()

    def test_program_without_autostart(self):
        cursor = ByteCursor(prefixed(header_body(param1=32768)))
        block, _ = decode_next(cursor, Standalone())
        assert block.autostart_line is None
        assert "LINE" not in block.summary()

    def test_program_summary(self):
        block, _ = decode_next(ByteCursor(prefixed(header_body())), Standalone())
        assert block.summary() == 'BASIC Program: "hello" LINE 10'

    def test_numeric_array_header(self):
        body = header_body(data_type=HeaderType.NUMERIC_ARRAY, name=b"scores", param1=0x8100)
        block, _ = decode_next(ByteCursor(prefixed(body)), Standalone())
        assert isinstance(block, NumericHeader)
        assert block.variable_name == "A"
        assert block.name == "Numeric Data Array"

    def test_character_array_header(self):
        body = header_body(data_type=HeaderType.CHARACTER_ARRAY, name=b"names", param1=0xC300)
        block, _ = decode_next(ByteCursor(prefixed(body)), Standalone())
        assert isinstance(block, AlphanumericHeader)
        assert block.variable_name == "C$"

    def test_bytes_header(self):
        body = header_body(data_type=HeaderType.BYTES, name=b"code", data_length=512, param1=32768)
        block, _ = decode_next(ByteCursor(prefixed(body)), Standalone())
        assert isinstance(block, ByteHeader)
        assert block.start_address == 32768
        assert not block.is_screen
        assert block.name == "Byte Data"
        assert block.summary() == 'Byte Data: "code" CODE 32768,512'

    def test_screen_header(self):
        body = header_body(data_type=HeaderType.BYTES, name=b"loading", data_length=6912, param1=16384)
        block, _ = decode_next(ByteCursor(prefixed(body)), Standalone())
        assert block.is_screen
        assert block.name == "SCREEN$"

    def test_filename_is_latin1(self):
        body = header_body(name=b"\xa9 game")
        block, _ = decode_next(ByteCursor(prefixed(body)), Standalone())
        assert block.filename == "© game"

    def test_header_payload_is_empty(self):
        block, _ = decode_next(ByteCursor(prefixed(header_body())), Standalone())
        assert block.payload == b""


# =============================================================================
# Data Tests
# =============================================================================

class TestData:
    """Tests for standard data and fragments."""

    def test_standard_data(self):
        cursor = ByteCursor(prefixed(data_body(b"\x01\x02\x03")))
        block, mode = decode_next(cursor, Standalone())

        assert isinstance(block, StandardData)
        assert block.length == 5
        assert block.flag == 0xFF
        assert block.data == b"\x01\x02\x03"
        assert block.checksum == xor(b"\xff\x01\x02\x03")
        assert mode == Standalone(header_allowed=True)
        assert cursor.at_end()

    def test_custom_flag(self):
        block, _ = decode_next(ByteCursor(prefixed(data_body(b"\x00", flag=0x42))), Standalone())
        assert block.flag == 0x42
        assert not block.is_rom_data

    def test_empty_payload(self):
        # Length 2: flag and checksum only
        block, _ = decode_next(ByteCursor(b"\x02\x00\xff\xff"), Standalone())
        assert isinstance(block, StandardData)
        assert block.data == b""

    def test_zero_length_fragment(self):
        cursor = ByteCursor(b"\x00\x00")
        block, mode = decode_next(cursor, Standalone())
        assert isinstance(block, FragmentData)
        assert block.length == 0
        assert block.data == b""
        assert mode == Standalone(header_allowed=True)
        assert cursor.at_end()

    def test_one_byte_fragment(self):
        cursor = ByteCursor(b"\x01\x00\x7f")
        block, _ = decode_next(cursor, Standalone())
        assert isinstance(block, FragmentData)
        assert block.data == b"\x7f"
        assert cursor.at_end()

    def test_data_summary(self):
        block, _ = decode_next(ByteCursor(prefixed(data_body(b"abc"))), Standalone())
        assert block.summary() == "Standard Data: 3 bytes"

    def test_rom_data_flag(self):
        block, _ = decode_next(ByteCursor(prefixed(data_body(b"abc"))), Standalone())
        assert block.flag == FLAG_DATA
        assert block.is_rom_data

    def test_custom_flag_shown_in_summary(self):
        block, _ = decode_next(ByteCursor(prefixed(data_body(b"abc", flag=0x42))), Standalone())
        assert block.summary() == "Standard Data: 3 bytes (flag 0x42)"


# =============================================================================
# Decoder Mode Tests
# =============================================================================

class TestDecodeModes:
    """Tests for Standalone alternation and SingleShot units."""

    def test_nineteen_byte_unit_after_header_is_data(self):
        data_unit = data_body(bytes(range(17)))
        assert len(data_unit) == 19
        cursor = ByteCursor(prefixed(header_body()) + prefixed(data_unit))

        first, mode = decode_next(cursor, Standalone())
        second, mode = decode_next(cursor, mode)

        assert isinstance(first, ProgramHeader)
        assert isinstance(second, StandardData)
        assert second.data == bytes(range(17))
        assert mode == Standalone(header_allowed=True)

    def test_two_header_shaped_units(self):
        tape = parse_tap(prefixed(header_body()) + prefixed(header_body(name=b"second")))
        first, second = tape.blocks
        assert isinstance(first, ProgramHeader)
        assert isinstance(second, StandardData)
        assert second.flag == 0
        assert len(second.data) == 17

    def test_header_not_allowed(self):
        # A header-shaped unit is read as data when a header was just seen
        block, _ = decode_next(ByteCursor(prefixed(header_body())), Standalone(header_allowed=False))
        assert isinstance(block, StandardData)
        assert block.flag == 0

    def test_single_shot_prefixed(self):
        cursor = ByteCursor(prefixed(header_body()))
        block, mode = decode_next(cursor, SingleShot())
        assert isinstance(block, ProgramHeader)
        assert mode == SingleShot()

    def test_single_shot_always_allows_header(self):
        cursor = ByteCursor(prefixed(header_body()) + prefixed(header_body(name=b"second")))
        first, mode = decode_next(cursor, SingleShot())
        second, _ = decode_next(cursor, mode)
        assert isinstance(first, ProgramHeader)
        assert isinstance(second, ProgramHeader)
        assert second.filename == "second"

    def test_single_shot_explicit_length_header(self):
        cursor = ByteCursor(header_body())
        block, mode = decode_next(cursor, SingleShot(length=19))
        assert isinstance(block, ProgramHeader)
        assert block.length == 19
        assert mode == SingleShot(length=19)
        assert cursor.at_end()

    def test_single_shot_explicit_length_data(self):
        body = data_body(b"turbo")
        cursor = ByteCursor(body)
        block, _ = decode_next(cursor, SingleShot(length=len(body)))
        assert isinstance(block, StandardData)
        assert block.data == b"turbo"
        assert cursor.at_end()

    def test_single_shot_explicit_length_fragment(self):
        cursor = ByteCursor(b"\x55")
        block, _ = decode_next(cursor, SingleShot(length=1))
        assert isinstance(block, FragmentData)
        assert block.data == b"\x55"


# =============================================================================
# Error Tests
# =============================================================================

class TestDecodeErrors:
    """Tests for malformed units."""

    def test_nonzero_header_flag(self):
        cursor = ByteCursor(prefixed(header_body(flag=0xFF)))
        with pytest.raises(UnexpectedFlagByteError) as exc_info:
            decode_next(cursor, Standalone())
        assert exc_info.value.flag == 0xFF
        assert exc_info.value.offset == 2
        # Nothing consumed before the error
        assert cursor.position == 0

    def test_nonzero_flag_single_shot(self):
        with pytest.raises(UnexpectedFlagByteError) as exc_info:
            decode_next(ByteCursor(header_body(flag=1)), SingleShot(length=19))
        assert exc_info.value.offset == 0

    def test_unknown_header_type(self):
        with pytest.raises(UnknownHeaderSubtypeError) as exc_info:
            decode_next(ByteCursor(prefixed(header_body(data_type=4))), Standalone())
        assert exc_info.value.subtype == 4
        assert exc_info.value.offset == 3

    def test_truncated_data(self):
        with pytest.raises(UnexpectedEndOfStreamError):
            decode_next(ByteCursor(b"\x0a\x00\xff\x01\x02"), Standalone())

    def test_truncated_length_prefix(self):
        with pytest.raises(UnexpectedEndOfStreamError):
            decode_next(ByteCursor(b"\x13"), Standalone())

    def test_error_message_includes_offset(self):
        err = UnexpectedFlagByteError(1, offset=0x2A)
        assert str(err) == "offset 0x0000002A: expected header flag byte to be 0, got 1"
        assert isinstance(err, TapeFormatError)


# =============================================================================
# TAP File Tests
# =============================================================================

class TestTapeFile:
    """Tests for whole-file decoding."""

    @pytest.fixture
    def tap_image(self) -> bytes:
        """A program header and its data, then a code header and its data."""
        return (
            prefixed(header_body(data_length=3))
            + prefixed(data_body(b"\x00\x0a\x00"))
            + prefixed(header_body(data_type=HeaderType.BYTES, name=b"code", data_length=2, param1=32768))
            + prefixed(data_body(b"\xc9\x00"))
        )

    def test_parse_tap(self, tap_image):
        tape = parse_tap(tap_image)
        assert isinstance(tape, TapeFile)
        assert len(tape) == 4
        assert [type(block) for block in tape.blocks] == [
            ProgramHeader, StandardData, ByteHeader, StandardData,
        ]

    def test_headers(self, tap_image):
        tape = parse_tap(tap_image)
        assert [header.filename for header in tape.headers()] == ["hello", "code"]

    def test_empty_file(self):
        assert len(parse_tap(b"")) == 0

    def test_parse_tap_file(self, tmp_path, tap_image):
        path = tmp_path / "game.tap"
        path.write_bytes(tap_image)
        assert len(parse_tap_file(path)) == 4

    def test_truncated_file(self, tap_image):
        with pytest.raises(UnexpectedEndOfStreamError):
            parse_tap(tap_image[:-1])

    def test_blocks_are_immutable(self, tap_image):
        tape = parse_tap(tap_image)
        with pytest.raises(AttributeError):
            tape.blocks[0].length = 5


# =============================================================================
# Checksum Tests
# =============================================================================

class TestChecksum:
    """Tests for checksum calculation and reporting."""

    def test_calculate_checksum(self):
        assert calculate_checksum(bytes([0xFF, 0x01, 0x02])) == 0xFC

    def test_calculate_checksum_empty(self):
        assert calculate_checksum(b"") == 0

    def test_calculate_checksum_initial(self):
        assert calculate_checksum(b"\x01", 0xFF) == 0xFE

    def test_header_checksum_valid(self):
        block, _ = decode_next(ByteCursor(prefixed(header_body())), Standalone())
        result = check_unit(block)
        assert result.is_valid

    def test_data_checksum_valid(self):
        block, _ = decode_next(ByteCursor(prefixed(data_body(b"abc"))), Standalone())
        assert check_unit(block).is_valid

    def test_bad_checksum_reported_not_raised(self):
        body = data_body(b"abc")[:-1] + b"\x00"
        block, _ = decode_next(ByteCursor(prefixed(body)), Standalone())
        result = check_unit(block)
        assert not result.is_valid
        assert result.stored == 0
        assert result.calculated == xor(b"\xffabc")

    def test_fragment_has_no_checksum(self):
        block, _ = decode_next(ByteCursor(b"\x01\x00\x7f"), Standalone())
        assert check_unit(block) is None
