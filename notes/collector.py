# notes/collector.py
import logging
from dataclasses import dataclass, field
from typing import Iterable, List

from notes.model import Note, NoteEvent
from notes.names import pitch_display_name
from notes.pitch_table import PitchTable

log = logging.getLogger(__name__)


@dataclass
class Collection:
    notes: List[Note] = field(default_factory=list)
    uncovered: List[Note] = field(default_factory=list)
    duration: float = 0.0  # seconds, incl. pre- and post-silence


def collect(events: Iterable[NoteEvent], table: PitchTable,
            pre_silence: float = 0.0, post_silence: float = 0.0) -> Collection:
    """Shift events by pre_silence and split them into covered and uncovered notes.

    Uncovered notes are reported but still count towards the duration.
    """
    out = Collection()
    for ev in events:
        note = Note(pitch=ev.pitch, time=ev.start + pre_silence, duration=ev.dur)
        if note.pitch in table:
            out.notes.append(note)
        else:
            out.uncovered.append(note)
            log.warning("note %s at %g not covered.",
                        pitch_display_name(note.pitch), note.time - pre_silence)
        out.duration = max(out.duration, note.end)
    if out.duration > 0:
        out.duration += post_silence
    return out
