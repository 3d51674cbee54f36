"""Sequential, seekable big-endian reader over a binary byte source."""

from __future__ import annotations

import io
import struct
from typing import Callable, Optional, Protocol, TypeVar

from .errors import MidiIOError, VlqOverflowError

MAX_VLQ_BYTES = 5

T = TypeVar("T")


class ByteSource(Protocol):
    """Anything file-like that can read, seek absolutely and report position."""

    def read(self, size: int = -1, /) -> bytes: ...

    def seek(self, offset: int, whence: int = 0, /) -> int: ...

    def tell(self) -> int: ...


class ByteCursor:
    """Big-endian integer, array and VLQ reads over a `ByteSource`.

    Every read either returns the full number of requested bytes or raises
    `MidiIOError`; a short read means the file is truncated.
    """

    def __init__(self, source: ByteSource, *, max_vlq_bytes: int = MAX_VLQ_BYTES) -> None:
        self.source = source
        self.max_vlq_bytes = max_vlq_bytes
        self._end: Optional[int] = None

    @classmethod
    def from_bytes(cls, data: bytes) -> "ByteCursor":
        return cls(io.BytesIO(data))

    @property
    def position(self) -> int:
        try:
            return self.source.tell()
        except OSError as exc:
            raise MidiIOError(f"cannot query stream position: {exc}") from exc

    def read_array(self, size: int) -> bytes:
        """Read exactly `size` bytes."""
        offset = self.position
        try:
            data = self.source.read(size)
        except OSError as exc:
            raise MidiIOError(f"read of {size} bytes at 0x{offset:X} failed: {exc}") from exc
        if len(data) != size:
            raise MidiIOError(
                f"unexpected end of file at offset 0x{offset:X}: "
                f"wanted {size} bytes, got {len(data)}"
            )
        return data

    def read_u8(self) -> int:
        return self.read_array(1)[0]

    def read_u16(self) -> int:
        return struct.unpack(">H", self.read_array(2))[0]

    def read_u24(self) -> int:
        return int.from_bytes(self.read_array(3), "big")

    def read_u32(self) -> int:
        return struct.unpack(">I", self.read_array(4))[0]

    def read_vlq(self) -> int:
        """Decode a MIDI variable-length quantity, most-significant group first."""
        offset = self.position
        value = 0
        for _ in range(self.max_vlq_bytes):
            byte = self.read_u8()
            value = (value << 7) | (byte & 0x7F)
            if not byte & 0x80:
                return value
        raise VlqOverflowError(offset, self.max_vlq_bytes)

    @property
    def end_offset(self) -> int:
        """Size of the source, measured once and cached."""
        if self._end is None:
            saved = self.position
            try:
                self._end = self.source.seek(0, io.SEEK_END)
            except OSError as exc:
                raise MidiIOError(f"cannot measure stream size: {exc}") from exc
            finally:
                self.seek_to(saved)
        return self._end

    def seek_to(self, offset: int) -> None:
        try:
            self.source.seek(offset, io.SEEK_SET)
        except OSError as exc:
            raise MidiIOError(f"seek to 0x{offset:X} failed: {exc}") from exc

    def seek_forward(self, count: int) -> None:
        """Skip `count` bytes, failing if the skip would run past the end."""
        if count < 0:
            raise ValueError("count must be non-negative")
        offset = self.position
        end = self.end_offset
        if offset + count > end:
            raise MidiIOError(
                f"unexpected end of file at offset 0x{offset:X}: "
                f"cannot skip {count} bytes, {end - offset} remain"
            )
        try:
            self.source.seek(count, io.SEEK_CUR)
        except OSError as exc:
            raise MidiIOError(f"skip of {count} bytes at 0x{offset:X} failed: {exc}") from exc

    def peek(self, read: Callable[["ByteCursor"], T]) -> T:
        """Run `read` on this cursor and rewind to the exact starting offset."""
        saved = self.position
        try:
            return read(self)
        finally:
            self.seek_to(saved)

    def peek_u8(self) -> int:
        return self.peek(ByteCursor.read_u8)
