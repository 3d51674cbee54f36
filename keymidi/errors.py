"""Errors raised while decoding a Standard MIDI File.

Every error is terminal for the decode: the byte stream cannot be
resynchronised once a length or status is misread.
"""

from __future__ import annotations


class MidiError(ValueError):
    """Base class for all decoder failures."""


class MidiIOError(MidiError):
    """The byte source failed or ended before a read completed."""


class InvalidChunkTagError(MidiError):
    def __init__(self, expected: bytes, found: bytes, offset: int) -> None:
        super().__init__(
            f"expected chunk {expected!r} at offset 0x{offset:X}, found {found!r}"
        )
        self.expected = expected
        self.found = found
        self.offset = offset


class InvalidHeaderLengthError(MidiError):
    def __init__(self, length: int) -> None:
        super().__init__(f"header chunk length must be 6, got {length}")
        self.length = length


class UnsupportedFormatError(MidiError):
    def __init__(self, fmt: int) -> None:
        super().__init__(f"unsupported SMF format {fmt} (only 0 and 1 are read)")
        self.format = fmt


class UnsupportedTimingModeError(MidiError):
    def __init__(self, division: int) -> None:
        super().__init__(
            f"SMPTE timecode division 0x{division:04X} is not supported"
        )
        self.division = division


class MalformedMetaEventError(MidiError):
    def __init__(self, meta_type: int, length: int, expected: int, offset: int) -> None:
        super().__init__(
            f"meta event 0x{meta_type:02X} at offset 0x{offset:X} has length "
            f"{length}, expected {expected}"
        )
        self.meta_type = meta_type
        self.length = length
        self.expected = expected
        self.offset = offset


class VlqOverflowError(MidiError):
    def __init__(self, offset: int, max_bytes: int) -> None:
        super().__init__(
            f"variable-length quantity at offset 0x{offset:X} exceeds {max_bytes} bytes"
        )
        self.offset = offset
        self.max_bytes = max_bytes


class MidiParseError(MidiError):
    """Structurally invalid data whose byte length cannot be determined."""
