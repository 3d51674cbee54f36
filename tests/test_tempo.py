from pathlib import Path
import sys

import pytest

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from keymidi.errors import MidiParseError, UnsupportedTimingModeError  # noqa: E402
from keymidi.tempo import DEFAULT_TEMPO, TempoClock  # noqa: E402


def test_default_tempo_is_120_bpm() -> None:
    clock = TempoClock(480)
    assert clock.tempo == DEFAULT_TEMPO == 500_000
    assert clock.bpm == pytest.approx(120.0)


def test_one_tick_at_default_tempo() -> None:
    clock = TempoClock(480)
    assert clock.ticks_to_microseconds(1) == pytest.approx(1041.6667, rel=1e-6)
    assert clock.ticks_to_duration(480) == pytest.approx(0.5)
    assert clock.ticks_to_duration(0) == 0


def test_tempo_change_applies_to_later_conversions() -> None:
    clock = TempoClock(480)
    before = clock.ticks_to_duration(480)
    clock.set_tempo(600_000)
    assert clock.ticks_to_microseconds(1) == pytest.approx(1250.0)
    assert clock.ticks_to_duration(480) == pytest.approx(0.6)
    assert before == pytest.approx(0.5)


@pytest.mark.parametrize("division", [0x8000, 0xE250, 0xE728])
def test_smpte_division_rejected(division: int) -> None:
    with pytest.raises(UnsupportedTimingModeError):
        TempoClock(division)


def test_zero_division_rejected() -> None:
    with pytest.raises(MidiParseError):
        TempoClock(0)
