"""Tick to wall-clock conversion driven by tempo meta events."""

from __future__ import annotations

import logging

import mido

from .errors import MidiParseError, UnsupportedTimingModeError

logger = logging.getLogger(__name__)

DEFAULT_TEMPO = 500_000  # microseconds per quarter note (120 BPM)
SMPTE_DIVISION_FLAG = 0x8000


class TempoClock:
    """Current tempo plus the file's fixed pulses-per-quarter-note.

    A tempo change only affects conversions made after it; durations
    already handed out are never revisited.
    """

    def __init__(self, division: int, tempo: int = DEFAULT_TEMPO) -> None:
        if division & SMPTE_DIVISION_FLAG:
            raise UnsupportedTimingModeError(division)
        if division == 0:
            raise MidiParseError("header division (ticks per quarter note) is zero")
        self.ppqn = division
        self.tempo = tempo

    @property
    def bpm(self) -> float:
        return mido.tempo2bpm(self.tempo)

    def set_tempo(self, tempo: int) -> None:
        logger.debug("tempo %d -> %d us/quarter", self.tempo, tempo)
        self.tempo = tempo

    def ticks_to_microseconds(self, ticks: int) -> float:
        return ticks * self.tempo / self.ppqn

    def ticks_to_duration(self, ticks: int) -> float:
        """Seconds spanned by `ticks` at the current tempo."""
        return mido.tick2second(ticks, self.ppqn, self.tempo)
