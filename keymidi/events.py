"""Decode one MIDI track event at a time.

Each call consumes exactly the bytes the SMF format assigns to the event,
including events whose content is thrown away, so the cursor always lands
on the next delta-time:

  0x8n note off        note, velocity        -> KeyReleased | Unsupported
  0x9n note on         note, velocity        -> KeyPressed | KeyReleased (vel 0) | Unsupported
  0xAn key pressure    2 data bytes          -> Unsupported
  0xBn control change  controller, value     -> DamperPedal (0x40) | SoftPedal (0x43) | Unsupported
  0xCn program change  1 data byte           -> Unsupported
  0xDn channel press.  1 data byte           -> Unsupported
  0xEn pitch bend      2 data bytes          -> Unsupported
  0xFF meta            type, VLQ len, data   -> EndOfTrack | Tempo | Unsupported
  0xF0 / 0xF7 sysex    VLQ len, data         -> Unsupported

The channel nibble is ignored: every channel plays the same keyboard.
A data byte with its high bit set means the stream is out of sync and is
rejected.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple, Union

from .cursor import ByteCursor
from .errors import MalformedMetaEventError, MidiParseError

NOTE_MIN = 21  # A0
NOTE_MAX = 108  # C8

DAMPER_CONTROLLER = 0x40
SOFT_CONTROLLER = 0x43

META_STATUS = 0xFF
META_END_OF_TRACK = 0x2F
META_TEMPO = 0x51
SYSEX_STATUSES = (0xF0, 0xF7)


def is_piano_key(note: int) -> bool:
    return NOTE_MIN <= note <= NOTE_MAX


@dataclass(frozen=True)
class KeyPressed:
    note: int
    velocity: int


@dataclass(frozen=True)
class KeyReleased:
    note: int


@dataclass(frozen=True)
class DamperPedal:
    value: int


@dataclass(frozen=True)
class SoftPedal:
    value: int


@dataclass(frozen=True)
class Tempo:
    microseconds_per_quarter: int


@dataclass(frozen=True)
class EndOfTrack:
    pass


@dataclass(frozen=True)
class Unsupported:
    status: int


EventKind = Union[KeyPressed, KeyReleased, DamperPedal, SoftPedal]
RawKind = Union[KeyPressed, KeyReleased, DamperPedal, SoftPedal, Tempo, EndOfTrack, Unsupported]

KEYBOARD_KINDS = (KeyPressed, KeyReleased, DamperPedal, SoftPedal)


@dataclass(frozen=True)
class RawEvent:
    """A decoded track event before the sequencer filters it."""

    delta_ticks: int
    kind: RawKind
    offset: int  # file offset of the delta-time


def decode_event(cursor: ByteCursor, running_status: int) -> Tuple[RawEvent, int]:
    """Decode the event at the cursor.

    Returns the event and the running status to use for the next one.
    """
    offset = cursor.position
    delta = cursor.read_vlq()

    if cursor.peek_u8() & 0x80:
        running_status = cursor.read_u8()
    status = running_status

    kind = _decode_body(cursor, status)
    return RawEvent(delta_ticks=delta, kind=kind, offset=offset), running_status


def _read_data(cursor: ByteCursor) -> int:
    offset = cursor.position
    value = cursor.read_u8()
    if value & 0x80:
        raise MidiParseError(
            f"data byte 0x{value:02X} at offset 0x{offset:X} has its high bit set"
        )
    return value


def _decode_body(cursor: ByteCursor, status: int) -> RawKind:
    if status == META_STATUS:
        return _decode_meta(cursor)
    if status in SYSEX_STATUSES:
        cursor.seek_forward(cursor.read_vlq())
        return Unsupported(status)

    event_type = status & 0xF0

    if event_type == 0x80:
        note = _read_data(cursor)
        _read_data(cursor)  # release velocity
        if is_piano_key(note):
            return KeyReleased(note)
        return Unsupported(status)

    if event_type == 0x90:
        note = _read_data(cursor)
        velocity = _read_data(cursor)
        if not is_piano_key(note):
            return Unsupported(status)
        if velocity == 0:
            return KeyReleased(note)
        return KeyPressed(note, velocity)

    if event_type == 0xB0:
        controller = _read_data(cursor)
        value = _read_data(cursor)
        if controller == DAMPER_CONTROLLER:
            return DamperPedal(value)
        if controller == SOFT_CONTROLLER:
            return SoftPedal(value)
        return Unsupported(status)

    if event_type in (0xA0, 0xE0):
        _read_data(cursor)
        _read_data(cursor)
        return Unsupported(status)

    if event_type in (0xC0, 0xD0):
        _read_data(cursor)
        return Unsupported(status)

    if status < 0x80:
        raise MidiParseError(
            f"data byte at offset 0x{cursor.position:X} with no running status"
        )
    raise MidiParseError(
        f"status 0x{status:02X} at offset 0x{cursor.position:X} has no known length"
    )


def _decode_meta(cursor: ByteCursor) -> RawKind:
    offset = cursor.position
    meta_type = cursor.read_u8()
    length = cursor.read_vlq()

    if meta_type == META_END_OF_TRACK:
        if length != 0:
            raise MalformedMetaEventError(meta_type, length, 0, offset)
        return EndOfTrack()

    if meta_type == META_TEMPO:
        if length != 3:
            raise MalformedMetaEventError(meta_type, length, 3, offset)
        return Tempo(cursor.read_u24())

    cursor.seek_forward(length)
    return Unsupported(META_STATUS)
