# midi/parser.py
import mido
from typing import List, Tuple

from errors import MidiReadError
from notes.model import NoteEvent

DRUM_CH = 9  # GM: ch10 (index 9) is percussion


def events_from_midi(mid: mido.MidiFile) -> Tuple[List[NoteEvent], float]:
    tpb = mid.ticks_per_beat
    tempo = 500000  # default 120 bpm
    time_sec = 0.0
    active = {}
    notes: List[NoteEvent] = []

    for msg in mido.merge_tracks(mid.tracks):
        time_sec += mido.tick2second(msg.time, tpb, tempo)
        if msg.is_meta:
            if msg.type == 'set_tempo':
                tempo = msg.tempo
        elif msg.type in ('note_on', 'note_off'):
            if msg.channel == DRUM_CH:
                continue
            key = (msg.channel, msg.note)
            if msg.type == 'note_on' and msg.velocity > 0:
                # retrigger without note_off closes the sounding note first
                if key in active:
                    st, vel = active.pop(key)
                    notes.append(NoteEvent(pitch=msg.note, start=st, end=time_sec, velocity=vel, channel=msg.channel))
                active[key] = (time_sec, msg.velocity)
            elif key in active:
                st, vel = active.pop(key)
                notes.append(NoteEvent(pitch=msg.note, start=st, end=time_sec, velocity=vel, channel=msg.channel))
    # close dangling
    for (ch, p), (st, vel) in active.items():
        notes.append(NoteEvent(pitch=p, start=st, end=time_sec, velocity=vel, channel=ch))
    total = max((n.end for n in notes), default=0.0)
    notes.sort(key=lambda n: (n.start, n.pitch))
    return notes, total


def parse_midi_to_notes(path: str) -> Tuple[List[NoteEvent], float]:
    try:
        mid = mido.MidiFile(path)
    except (OSError, EOFError, ValueError, KeyError) as e:
        raise MidiReadError(f"cannot read MIDI file {path}: {e}") from e
    return events_from_midi(mid)
