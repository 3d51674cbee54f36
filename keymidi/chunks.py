"""Chunk tags and the SMF header chunk."""

from __future__ import annotations

import logging
from dataclasses import dataclass

from .cursor import ByteCursor
from .errors import (
    InvalidChunkTagError,
    InvalidHeaderLengthError,
    UnsupportedFormatError,
)

logger = logging.getLogger(__name__)

HEADER_TAG = b"MThd"
TRACK_TAG = b"MTrk"
HEADER_LENGTH = 6
SUPPORTED_FORMATS = (0, 1)


def expect_chunk(cursor: ByteCursor, tag: bytes) -> int:
    """Read a chunk preamble, check its tag and return the declared length."""
    offset = cursor.position
    found = cursor.read_array(4)
    if found != tag:
        raise InvalidChunkTagError(tag, found, offset)
    return cursor.read_u32()


@dataclass(frozen=True)
class MidiHeader:
    format: int
    track_count: int
    division: int  # ticks per quarter note; validated by TempoClock

    @classmethod
    def read(cls, cursor: ByteCursor) -> "MidiHeader":
        length = expect_chunk(cursor, HEADER_TAG)
        if length != HEADER_LENGTH:
            raise InvalidHeaderLengthError(length)

        fmt = cursor.read_u16()
        track_count = cursor.read_u16()
        division = cursor.read_u16()

        if fmt not in SUPPORTED_FORMATS:
            raise UnsupportedFormatError(fmt)

        header = cls(format=fmt, track_count=track_count, division=division)
        logger.debug(
            "header: format=%d tracks=%d division=0x%04X", fmt, track_count, division
        )
        return header
