from __future__ import annotations

from pathlib import Path
from typing import Iterable, Tuple

import mido
import pytest

from config import PitchRange, RollConfig

# (pitch, start beat, length in beats, channel); 120 bpm -> 0.5 s per beat
MidiNote = Tuple[int, float, float, int]

TPB = 480


def write_midi(path: Path, notes: Iterable[MidiNote], tempo: int = 500000) -> Path:
    events = []
    for pitch, start, length, channel in notes:
        events.append((round(start * TPB), 1, mido.Message("note_on", note=pitch, velocity=80, channel=channel)))
        events.append((round((start + length) * TPB), 0, mido.Message("note_off", note=pitch, velocity=0, channel=channel)))
    # note_off before note_on at the same tick
    events.sort(key=lambda e: (e[0], e[1]))

    mid = mido.MidiFile(ticks_per_beat=TPB)
    track = mido.MidiTrack()
    mid.tracks.append(track)
    track.append(mido.MetaMessage("set_tempo", tempo=tempo, time=0))
    now = 0
    for tick, _, msg in events:
        track.append(msg.copy(time=tick - now))
        now = tick
    mid.save(str(path))
    return path


@pytest.fixture
def c_major_ranges() -> Tuple[PitchRange, ...]:
    return (PitchRange(start=60, end=72, p0=10.0, dp=2.0),)


@pytest.fixture
def roll_config(c_major_ranges) -> RollConfig:
    return RollConfig(pitch_ranges=c_major_ranges)


@pytest.fixture
def free_length_config(c_major_ranges) -> RollConfig:
    """No gap and no length clamping: a note's length is duration * speed."""
    return RollConfig(
        speed=10.0,
        min_note_length=0.0,
        max_note_length=1000.0,
        min_gap_length=0.0,
        pitch_ranges=c_major_ranges,
    )


@pytest.fixture
def make_midi(tmp_path: Path):
    def _make(notes: Iterable[MidiNote], name: str = "song.mid", tempo: int = 500000) -> Path:
        return write_midi(tmp_path / name, notes, tempo=tempo)

    return _make
