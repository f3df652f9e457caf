"""
TZX Hardware Reference Tables
=============================

Machine and peripheral identifiers used by the Hardware Type block (0x33).

Each entry of that block is a (kind, id, compatibility) triple. By default a
tape is assumed to run on a 48K Spectrum and on a 128K without using its
extra hardware, so files only list the exceptions.
"""

from enum import IntEnum
from typing import Optional


class HardwareKind(IntEnum):
    """Hardware type byte."""
    COMPUTER = 0x00
    EXTERNAL_STORAGE = 0x01
    ROM_RAM_ADDON = 0x02
    SOUND_DEVICE = 0x03
    JOYSTICK = 0x04
    MOUSE = 0x05
    OTHER_CONTROLLER = 0x06
    SERIAL_PORT = 0x07
    PARALLEL_PORT = 0x08
    PRINTER = 0x09
    MODEM = 0x0A
    DIGITIZER = 0x0B
    NETWORK_ADAPTER = 0x0C
    KEYBOARD = 0x0D
    AD_DA_CONVERTER = 0x0E
    EPROM_PROGRAMMER = 0x0F
    GRAPHICS = 0x10

    def get_description(self) -> str:
        return HARDWARE_KIND_NAMES[self]


class Compatibility(IntEnum):
    """Relationship between the tape and a piece of hardware."""
    RUNS = 0x00             # Runs, may or may not use the hardware
    USES = 0x01             # Uses the hardware or its special features
    RUNS_WITHOUT_USING = 0x02
    DOES_NOT_RUN = 0x03

    def get_description(self) -> str:
        return COMPATIBILITY_DESCRIPTIONS[self]


HARDWARE_KIND_NAMES = {
    HardwareKind.COMPUTER: "Computers",
    HardwareKind.EXTERNAL_STORAGE: "External storage",
    HardwareKind.ROM_RAM_ADDON: "ROM/RAM type add-ons",
    HardwareKind.SOUND_DEVICE: "Sound devices",
    HardwareKind.JOYSTICK: "Joysticks",
    HardwareKind.MOUSE: "Mice",
    HardwareKind.OTHER_CONTROLLER: "Other controllers",
    HardwareKind.SERIAL_PORT: "Serial ports",
    HardwareKind.PARALLEL_PORT: "Parallel ports",
    HardwareKind.PRINTER: "Printers",
    HardwareKind.MODEM: "Modems",
    HardwareKind.DIGITIZER: "Digitizers",
    HardwareKind.NETWORK_ADAPTER: "Network adapters",
    HardwareKind.KEYBOARD: "Keyboards & keypads",
    HardwareKind.AD_DA_CONVERTER: "AD/DA converters",
    HardwareKind.EPROM_PROGRAMMER: "EPROM programmers",
    HardwareKind.GRAPHICS: "Graphics",
}

COMPATIBILITY_DESCRIPTIONS = {
    Compatibility.RUNS: "runs on this machine or with this hardware",
    Compatibility.USES: "uses the hardware or special features of the machine",
    Compatibility.RUNS_WITHOUT_USING: "runs but does not use the hardware or special features",
    Compatibility.DOES_NOT_RUN: "does not run on this machine or with this hardware",
}

HARDWARE_IDS: dict[HardwareKind, dict[int, str]] = {
    HardwareKind.COMPUTER: {
        0x00: "ZX Spectrum 16k",
        0x01: "ZX Spectrum 48k, Plus",
        0x02: "ZX Spectrum 48k ISSUE 1",
        0x03: "ZX Spectrum 128k +(Sinclair)",
        0x04: "ZX Spectrum 128k +2 (grey case)",
        0x05: "ZX Spectrum 128k +2A, +3",
        0x06: "Timex Sinclair TC-2048",
        0x07: "Timex Sinclair TS-2068",
        0x08: "Pentagon 128",
        0x09: "Sam Coupe",
        0x0A: "Didaktik M",
        0x0B: "Didaktik Gama",
        0x0C: "ZX-80",
        0x0D: "ZX-81",
        0x0E: "ZX Spectrum 128k, Spanish version",
        0x0F: "ZX Spectrum, Arabic version",
        0x10: "Microdigital TK 90-X",
        0x11: "Microdigital TK 95",
        0x12: "Byte",
        0x13: "Elwro 800-3",
        0x14: "ZS Scorpion 256",
        0x15: "Amstrad CPC 464",
        0x16: "Amstrad CPC 664",
        0x17: "Amstrad CPC 6128",
        0x18: "Amstrad CPC 464+",
        0x19: "Amstrad CPC 6128+",
        0x1A: "Jupiter ACE",
        0x1B: "Enterprise",
        0x1C: "Commodore 64",
        0x1D: "Commodore 128",
        0x1E: "Inves Spectrum+",
        0x1F: "Profi",
        0x20: "GrandRomMax",
        0x21: "Kay 1024",
        0x22: "Ice Felix HC 91",
        0x23: "Ice Felix HC 2000",
        0x24: "Amaterske RADIO Mistrum",
        0x25: "Quorum 128",
        0x26: "MicroART ATM",
        0x27: "MicroART ATM Turbo 2",
        0x28: "Chrome",
        0x29: "ZX Badaloc",
        0x2A: "TS-1500",
        0x2B: "Lambda",
        0x2C: "TK-65",
        0x2D: "ZX-97",
    },
    HardwareKind.EXTERNAL_STORAGE: {
        0x00: "ZX Microdrive",
        0x01: "Opus Discovery",
        0x02: "MGT Disciple",
        0x03: "MGT Plus-D",
        0x04: "Rotronics Wafadrive",
        0x05: "TR-DOS (BetaDisk)",
        0x06: "Byte Drive",
        0x07: "Watsford",
        0x08: "FIZ",
        0x09: "Radofin",
        0x0A: "Didaktik disk drives",
        0x0B: "BS-DOS (MB-02)",
        0x0C: "ZX Spectrum +3 disk drive",
        0x0D: "JLO (Oliger) disk interface",
        0x0E: "Timex FDD3000",
        0x0F: "Zebra disk drive",
        0x10: "Ramex Millenia",
        0x11: "Larken",
        0x12: "Kempston disk interface",
        0x13: "Sandy",
        0x14: "ZX Spectrum +3e hard disk",
        0x15: "ZXATASP",
        0x16: "DivIDE",
        0x17: "ZXCF",
    },
    HardwareKind.ROM_RAM_ADDON: {
        0x00: "Sam Ram",
        0x01: "Multiface ONE",
        0x02: "Multiface 128k",
        0x03: "Multiface +3",
        0x04: "MultiPrint",
        0x05: "MB-02 ROM/RAM expansion",
        0x06: "SoftROM",
        0x07: "1k",
        0x08: "16k",
        0x09: "48k",
        0x0A: "Memory in 8-16k used",
    },
    HardwareKind.SOUND_DEVICE: {
        0x00: "Classic AY hardware (compatible with 128k ZXs)",
        0x01: "Fuller Box AY sound hardware",
        0x02: "Currah microSpeech",
        0x03: "SpecDrum",
        0x04: "AY ACB stereo (A+C=left, B+C=right); Melodik",
        0x05: "AY ABC stereo (A+B=left, B+C=right)",
        0x06: "RAM Music Machine",
        0x07: "Covox",
        0x08: "General Sound",
        0x09: "Intec Electronics Digital Interface B8001",
        0x0A: "Zon-X AY",
        0x0B: "QuickSilva AY",
        0x0C: "Jupiter ACE",
    },
    HardwareKind.JOYSTICK: {
        0x00: "Kempston",
        0x01: "Cursor, Protek, AGF",
        0x02: "Sinclair 2 Left (12345)",
        0x03: "Sinclair 1 Right (67890)",
        0x04: "Fuller",
    },
    HardwareKind.MOUSE: {
        0x00: "AMX mouse",
        0x01: "Kempston mouse",
    },
    HardwareKind.OTHER_CONTROLLER: {
        0x00: "Trickstick",
        0x01: "ZX Light Gun",
        0x02: "Zebra Graphics Tablet",
        0x03: "Defender Light Gun",
    },
    HardwareKind.SERIAL_PORT: {
        0x00: "ZX Interface 1",
        0x01: "ZX Spectrum 128k",
    },
    HardwareKind.PARALLEL_PORT: {
        0x00: "Kempston S",
        0x01: "Kempston E",
        0x02: "ZX Spectrum +3",
        0x03: "Tasman",
        0x04: "DK'Tronics",
        0x05: "Hilderbay",
        0x06: "INES Printerface",
        0x07: "ZX LPrint Interface 3",
        0x08: "MultiPrint",
        0x09: "Opus Discovery",
        0x0A: "Standard 8255 chip with ports 31,63,95",
    },
    HardwareKind.PRINTER: {
        0x00: "ZX Printer, Alphacom 32 & compatibles",
        0x01: "Generic printer",
        0x02: "EPSON compatible",
    },
    HardwareKind.MODEM: {
        0x00: "Prism VTX 5000",
        0x01: "T/S 2050 or Westridge 2050",
    },
    HardwareKind.DIGITIZER: {
        0x00: "RD Digital Tracer",
        0x01: "DK'Tronics Light Pen",
        0x02: "British MicroGraph Pad",
        0x03: "Romantic Robot Videoface",
    },
    HardwareKind.NETWORK_ADAPTER: {
        0x00: "ZX Interface 1",
    },
    HardwareKind.KEYBOARD: {
        0x00: "Keypad for ZX Spectrum 128k",
    },
    HardwareKind.AD_DA_CONVERTER: {
        0x00: "Harley Systems ADC 8.2",
        0x01: "Blackboard Electronics",
    },
    HardwareKind.EPROM_PROGRAMMER: {
        0x00: "Orme Electronics",
    },
    HardwareKind.GRAPHICS: {
        0x00: "WRX Hi-Res",
        0x01: "G007",
        0x02: "Memotech",
        0x03: "Lambda Colour",
    },
}


def get_hardware_name(kind: int, hardware_id: int) -> Optional[str]:
    """
    Look up the device name for a hardware entry.

    Returns:
        The device name, or None for combinations not in the table
    """
    try:
        return HARDWARE_IDS[HardwareKind(kind)].get(hardware_id)
    except ValueError:
        return None
