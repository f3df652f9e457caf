"""
TZX Block Dispatcher
====================

Maps a tag byte to the block class that decodes it. The table is closed:
tags of withdrawn block kinds and tags that were never assigned are both
rejected, with distinct errors.
"""

from typing import Optional

from zxtape.errors import DeprecatedBlockKindError, UnsupportedBlockKindError
from zxtape.tzx.blocks import (
    DEPRECATED_BLOCK_TYPES,
    ArchiveInfo,
    Block,
    CallSequence,
    CswRecording,
    CustomInfo,
    DirectRecording,
    GlueBlock,
    GroupEnd,
    GroupStart,
    HardwareType,
    JumpTo,
    LoopEnd,
    LoopStart,
    Message,
    PauseTapeCommand,
    PureData,
    PureTone,
    ReturnFromSequence,
    Select,
    SequenceOfPulses,
    SetSignalLevel,
    StandardSpeedData,
    StopTapeWhen48k,
    TextDescription,
    TurboSpeedData,
)
from zxtape.tzx.generalized import GeneralizedData


BLOCK_CLASSES: dict[int, type[Block]] = {
    cls.BLOCK_TYPE: cls
    for cls in (
        StandardSpeedData,
        TurboSpeedData,
        PureTone,
        SequenceOfPulses,
        PureData,
        DirectRecording,
        CswRecording,
        GeneralizedData,
        PauseTapeCommand,
        GroupStart,
        GroupEnd,
        JumpTo,
        LoopStart,
        LoopEnd,
        CallSequence,
        ReturnFromSequence,
        Select,
        StopTapeWhen48k,
        SetSignalLevel,
        TextDescription,
        Message,
        ArchiveInfo,
        HardwareType,
        CustomInfo,
        GlueBlock,
    )
}


def dispatch(tag: int, offset: Optional[int] = None) -> type[Block]:
    """
    Return the block class for a tag byte. Consumes no input.

    Args:
        tag: The block ID byte
        offset: Position of the tag in the image, for error messages

    Raises:
        DeprecatedBlockKindError: Tag of a withdrawn block kind
        UnsupportedBlockKindError: Any other tag outside the table
    """
    block_class = BLOCK_CLASSES.get(tag)
    if block_class is not None:
        return block_class
    if tag in DEPRECATED_BLOCK_TYPES:
        raise DeprecatedBlockKindError(tag, offset=offset)
    raise UnsupportedBlockKindError(tag, offset=offset)
