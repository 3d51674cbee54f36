"""88-key keyboard state and the events that drive it."""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum
from typing import List, Union

from .events import (
    NOTE_MAX,
    NOTE_MIN,
    DamperPedal,
    EventKind,
    KeyPressed,
    KeyReleased,
    SoftPedal,
)

KEY_COUNT = NOTE_MAX - NOTE_MIN + 1

# Semitones within an octave that are black keys (0 = C)
_BLACK_KEYS = frozenset({1, 3, 6, 8, 10})


class Pedal(IntEnum):
    SOFT = 0
    DAMPER = 1


class KeyboardState:
    """Velocity per key (0 = released) plus the soft and damper pedal values."""

    def __init__(self) -> None:
        self.keys: List[int] = [0] * KEY_COUNT
        self.pedals: List[int] = [0] * len(Pedal)

    def __getitem__(self, index: Union[int, Pedal]) -> int:
        if isinstance(index, Pedal):
            return self.pedals[index]
        return self.keys[self._key_index(index)]

    def __setitem__(self, index: Union[int, Pedal], value: int) -> None:
        if isinstance(index, Pedal):
            self.pedals[index] = value
        else:
            self.keys[self._key_index(index)] = value

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, KeyboardState):
            return NotImplemented
        return self.keys == other.keys and self.pedals == other.pedals

    def __repr__(self) -> str:
        return (
            f"KeyboardState(pressed={self.pressed_notes()}, "
            f"soft={self.pedals[Pedal.SOFT]}, damper={self.pedals[Pedal.DAMPER]})"
        )

    @staticmethod
    def _key_index(note: int) -> int:
        if not NOTE_MIN <= note <= NOTE_MAX:
            raise KeyError(f"note {note} is outside the 88-key range")
        return note - NOTE_MIN

    def reset(self) -> None:
        self.keys = [0] * KEY_COUNT
        self.pedals = [0] * len(Pedal)

    def pressed_notes(self) -> List[int]:
        return [NOTE_MIN + idx for idx, vel in enumerate(self.keys) if vel]

    def render(self) -> str:
        """One character per key, followed by both pedal values.

        Released white keys draw as ``-``, released black keys as ``_``,
        held keys as ``#``.
        """
        cells = []
        for idx, velocity in enumerate(self.keys):
            if velocity:
                cells.append("#")
            elif (NOTE_MIN + idx) % 12 in _BLACK_KEYS:
                cells.append("_")
            else:
                cells.append("-")
        return (
            f"{''.join(cells)} "
            f"soft={self.pedals[Pedal.SOFT]:3d} damper={self.pedals[Pedal.DAMPER]:3d}"
        )


@dataclass(frozen=True)
class Event:
    """A keyboard event and the seconds elapsed since the previous one."""

    delta: float
    kind: EventKind

    def apply(self, keyboard: KeyboardState) -> float:
        """Write this event into `keyboard` and return its delta."""
        kind = self.kind
        if isinstance(kind, KeyPressed):
            keyboard[kind.note] = kind.velocity
        elif isinstance(kind, KeyReleased):
            keyboard[kind.note] = 0
        elif isinstance(kind, DamperPedal):
            keyboard[Pedal.DAMPER] = kind.value
        elif isinstance(kind, SoftPedal):
            keyboard[Pedal.SOFT] = kind.value
        return self.delta
