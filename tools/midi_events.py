#!/usr/bin/env python3
"""Dump or replay the keyboard events of a Standard MIDI File.

Examples
--------
Event listing:
    python tools/midi_events.py take.mid
    python tools/midi_events.py take.mid --limit 40

Replay onto a virtual keyboard, one frame per event:
    python tools/midi_events.py take.mid --keyboard
    python tools/midi_events.py take.mid --keyboard --realtime
"""

from __future__ import annotations

import argparse
import logging
from pathlib import Path
import sys
import time

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from keymidi.errors import MidiError  # noqa: E402
from keymidi.events import DamperPedal, KeyPressed, KeyReleased, SoftPedal  # noqa: E402
from keymidi.keyboard import Event, KeyboardState  # noqa: E402
from keymidi.sequencer import TrackSequencer  # noqa: E402


def describe(event: Event) -> str:
    kind = event.kind
    if isinstance(kind, KeyPressed):
        return f"press   note={kind.note:3d} vel={kind.velocity:3d}"
    if isinstance(kind, KeyReleased):
        return f"release note={kind.note:3d}"
    if isinstance(kind, DamperPedal):
        return f"damper  value={kind.value:3d}"
    if isinstance(kind, SoftPedal):
        return f"soft    value={kind.value:3d}"
    raise TypeError(f"not a keyboard event: {kind!r}")


def _build_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="List or replay the 88-key events of a .mid file",
    )
    parser.add_argument("input", type=Path, help="Standard MIDI File (format 0 or 1)")
    parser.add_argument(
        "--keyboard",
        action="store_true",
        help="apply events to a keyboard and print its state after each one",
    )
    parser.add_argument(
        "--realtime",
        action="store_true",
        help="sleep for each event's delta before showing it",
    )
    parser.add_argument(
        "--limit",
        type=int,
        default=None,
        help="stop after this many events",
    )
    parser.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="decoder log level (default: WARNING)",
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    parser = _build_arg_parser()
    args = parser.parse_args(argv)
    if args.limit is not None and args.limit < 0:
        parser.error("--limit must be non-negative")

    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format="%(levelname)s %(name)s: %(message)s",
    )

    keyboard = KeyboardState()
    elapsed = 0.0
    count = 0
    try:
        with TrackSequencer.open(args.input) as seq:
            header = seq.header
            for event in seq:
                if args.limit is not None and count >= args.limit:
                    break
                if args.realtime:
                    time.sleep(event.delta)
                elapsed += event.apply(keyboard)
                count += 1
                if args.keyboard:
                    print(f"{elapsed:10.4f} {keyboard.render()}")
                else:
                    print(f"{elapsed:10.4f} {event.delta:+9.4f} {describe(event)}")
    except (MidiError, OSError) as exc:
        print(f"error: {args.input}: {exc}", file=sys.stderr)
        return 1

    print(
        f"format={header.format} tracks={header.track_count} "
        f"ppqn={header.division} events={count} duration={elapsed:.3f}s"
    )
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
