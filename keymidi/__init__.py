"""Decode Standard MIDI Files into 88-key keyboard events."""

from .chunks import HEADER_TAG, TRACK_TAG, MidiHeader, expect_chunk  # noqa: F401
from .cursor import MAX_VLQ_BYTES, ByteCursor, ByteSource  # noqa: F401
from .errors import (  # noqa: F401
    InvalidChunkTagError,
    InvalidHeaderLengthError,
    MalformedMetaEventError,
    MidiError,
    MidiIOError,
    MidiParseError,
    UnsupportedFormatError,
    UnsupportedTimingModeError,
    VlqOverflowError,
)
from .events import (  # noqa: F401
    NOTE_MAX,
    NOTE_MIN,
    DamperPedal,
    EndOfTrack,
    EventKind,
    KeyPressed,
    KeyReleased,
    RawEvent,
    SoftPedal,
    Tempo,
    Unsupported,
    decode_event,
    is_piano_key,
)
from .keyboard import KEY_COUNT, Event, KeyboardState, Pedal  # noqa: F401
from .sequencer import SequencerState, TrackSequencer  # noqa: F401
from .tempo import DEFAULT_TEMPO, TempoClock  # noqa: F401
