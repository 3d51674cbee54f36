"""Pull iterator over the keyboard events of a Standard MIDI File.

Tracks are played back one after another: the first event of track N+1
follows the end-of-track of track N. This is exact for format-0 files and
for format-1 files whose performance lives in a single track, which is
what piano recordings look like.
"""

from __future__ import annotations

import enum
import io
import logging
from pathlib import Path
from typing import BinaryIO, Iterator, Optional, Union

from .chunks import TRACK_TAG, MidiHeader, expect_chunk
from .cursor import ByteCursor, ByteSource
from .events import KEYBOARD_KINDS, EndOfTrack, Tempo, decode_event
from .keyboard import Event
from .tempo import DEFAULT_TEMPO, TempoClock

logger = logging.getLogger(__name__)


class SequencerState(enum.Enum):
    IN_TRACK = "in_track"
    DONE = "done"
    FAILED = "failed"


class TrackSequencer:
    """Decode a file's tracks sequentially into `Event`s.

    ``TrackSequencer(source)`` borrows an open binary stream;
    ``TrackSequencer.open(path)`` opens and owns the file. Either way the
    object is a context manager and an iterator::

        with TrackSequencer.open("take.mid") as seq:
            for event in seq:
                event.apply(keyboard)

    Once a call raises, the sequencer is FAILED and refuses further calls.
    """

    def __init__(
        self,
        source: ByteSource,
        *,
        default_tempo: int = DEFAULT_TEMPO,
    ) -> None:
        self.cursor = ByteCursor(source)
        self._owned: Optional[BinaryIO] = None
        self.running_status = 0
        self.track_index = 0
        self.track_end: Optional[int] = None
        self._pending = 0.0

        self.header = MidiHeader.read(self.cursor)
        self.clock = TempoClock(self.header.division, default_tempo)
        self.tracks_remaining = self.header.track_count

        if self.tracks_remaining == 0:
            self.state = SequencerState.DONE
        else:
            self._begin_track()
            self.state = SequencerState.IN_TRACK

    @classmethod
    def open(cls, path: Union[str, Path], **kwargs) -> "TrackSequencer":
        handle = open(path, "rb")
        try:
            sequencer = cls(handle, **kwargs)
        except BaseException:
            handle.close()
            raise
        sequencer._owned = handle
        return sequencer

    @classmethod
    def from_bytes(cls, data: bytes, **kwargs) -> "TrackSequencer":
        return cls(io.BytesIO(data), **kwargs)

    def close(self) -> None:
        if self._owned is not None:
            self._owned.close()
            self._owned = None

    def __enter__(self) -> "TrackSequencer":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def __iter__(self) -> Iterator[Event]:
        return self

    def __next__(self) -> Event:
        event = self.next_event()
        if event is None:
            raise StopIteration
        return event

    def _begin_track(self) -> None:
        length = expect_chunk(self.cursor, TRACK_TAG)
        self.track_end = self.cursor.position + length
        self.running_status = 0
        self.track_index += 1
        logger.debug(
            "track %d/%d: %d bytes at 0x%X",
            self.track_index,
            self.header.track_count,
            length,
            self.cursor.position,
        )

    def _end_track(self) -> None:
        position = self.cursor.position
        if self.track_end is not None and position != self.track_end:
            logger.warning(
                "track %d ended at 0x%X but its chunk declares an end of 0x%X",
                self.track_index,
                position,
                self.track_end,
            )
        self.tracks_remaining -= 1

    def next_event(self) -> Optional[Event]:
        """Return the next keyboard event, or None once every track is read."""
        if self.state is SequencerState.DONE:
            return None
        if self.state is SequencerState.FAILED:
            raise RuntimeError("sequencer failed earlier and cannot continue")

        try:
            return self._advance()
        except Exception:
            self.state = SequencerState.FAILED
            raise

    def _advance(self) -> Optional[Event]:
        while True:
            raw, self.running_status = decode_event(self.cursor, self.running_status)
            self._pending += self.clock.ticks_to_duration(raw.delta_ticks)
            kind = raw.kind

            if isinstance(kind, KEYBOARD_KINDS):
                event = Event(delta=self._pending, kind=kind)
                self._pending = 0.0
                return event

            if isinstance(kind, Tempo):
                self.clock.set_tempo(kind.microseconds_per_quarter)
            elif isinstance(kind, EndOfTrack):
                self._end_track()
                if self.tracks_remaining == 0:
                    self.state = SequencerState.DONE
                    logger.debug("all %d tracks read", self.header.track_count)
                    return None
                self._begin_track()
