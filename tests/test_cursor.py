"""Tests for ByteCursor integer, VLQ and peek reads."""

from pathlib import Path
import sys

import pytest

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from keymidi.cursor import ByteCursor  # noqa: E402
from keymidi.errors import MidiIOError, VlqOverflowError  # noqa: E402


def test_big_endian_integer_reads() -> None:
    cursor = ByteCursor.from_bytes(b"\x7f\x01\x02\x00\x00\x01\xe0\x07\xa1\x20")
    assert cursor.read_u8() == 0x7F
    assert cursor.read_u16() == 0x0102
    assert cursor.read_u32() == 480
    assert cursor.read_u24() == 500_000
    assert cursor.position == 10


def test_read_array_returns_exact_bytes() -> None:
    cursor = ByteCursor.from_bytes(b"MThd\x00\x00\x00\x06")
    assert cursor.read_array(4) == b"MThd"
    assert cursor.position == 4


@pytest.mark.parametrize(
    "data, expected",
    [
        (b"\x00", 0),
        (b"\x40", 0x40),
        (b"\x7f", 0x7F),
        (b"\x81\x00", 0x80),
        (b"\x83\x60", 480),
        (b"\xff\x7f", 0x3FFF),
        (b"\x81\x80\x00", 1 << 14),
        (b"\xff\xff\xff\x7f", 0x0FFFFFFF),
        (b"\x81\x80\x80\x80\x00", 1 << 28),
    ],
)
def test_read_vlq(data: bytes, expected: int) -> None:
    cursor = ByteCursor.from_bytes(data + b"\xaa")
    assert cursor.read_vlq() == expected
    assert cursor.position == len(data)


def test_read_vlq_rejects_run_longer_than_five_bytes() -> None:
    cursor = ByteCursor.from_bytes(b"\x80\x80\x80\x80\x80\x00")
    with pytest.raises(VlqOverflowError):
        cursor.read_vlq()


def test_read_vlq_truncated_is_io_error() -> None:
    cursor = ByteCursor.from_bytes(b"\x81\x80")
    with pytest.raises(MidiIOError):
        cursor.read_vlq()


@pytest.mark.parametrize("method", ["read_u8", "read_u16", "read_u32"])
def test_short_reads_raise_io_error(method: str) -> None:
    cursor = ByteCursor.from_bytes(b"")
    with pytest.raises(MidiIOError):
        getattr(cursor, method)()


def test_io_error_is_a_value_error() -> None:
    cursor = ByteCursor.from_bytes(b"\x01")
    with pytest.raises(ValueError, match="unexpected end of file"):
        cursor.read_u16()


def test_peek_restores_exact_position() -> None:
    cursor = ByteCursor.from_bytes(b"\x00\x90\x3c")
    cursor.read_u8()
    assert cursor.peek_u8() == 0x90
    assert cursor.position == 1
    assert cursor.read_u8() == 0x90
    assert cursor.read_u8() == 0x3C


def test_peek_restores_position_after_failed_read() -> None:
    cursor = ByteCursor.from_bytes(b"\x01\x02")
    cursor.read_u8()
    with pytest.raises(MidiIOError):
        cursor.peek(ByteCursor.read_u32)
    assert cursor.position == 1
    assert cursor.read_u8() == 0x02


def test_seek_forward_skips_and_detects_truncation() -> None:
    cursor = ByteCursor.from_bytes(b"abcdef")
    cursor.seek_forward(4)
    assert cursor.read_u8() == ord("e")
    with pytest.raises(MidiIOError):
        cursor.seek_forward(5)


def test_file_backed_source(tmp_path: Path) -> None:
    path = tmp_path / "bytes.bin"
    path.write_bytes(b"\x00\x06\x83\x60")
    with path.open("rb") as handle:
        cursor = ByteCursor(handle)
        assert cursor.read_u16() == 6
        assert cursor.peek_u8() == 0x83
        assert cursor.read_vlq() == 480


def test_seek_forward_moves_without_reading() -> None:
    cursor = ByteCursor.from_bytes(bytes(range(16)))
    cursor.seek_forward(10)
    assert cursor.position == 10
    assert cursor.end_offset == 16
    assert cursor.position == 10
    cursor.seek_forward(6)
    assert cursor.position == 16


def test_seek_forward_huge_count_is_io_error(tmp_path: Path) -> None:
    path = tmp_path / "short.bin"
    path.write_bytes(b"abc")
    with path.open("rb") as handle:
        cursor = ByteCursor(handle)
        with pytest.raises(MidiIOError, match="cannot skip"):
            cursor.seek_forward(0x7_FFFF_FFFF)
        assert cursor.position == 0


def test_max_vlq_bytes_is_configurable() -> None:
    cursor = ByteCursor.from_bytes(b"\x81\x80\x00", max_vlq_bytes=2)
    with pytest.raises(VlqOverflowError) as excinfo:
        cursor.read_vlq()
    assert excinfo.value.max_bytes == 2
