# notes/model.py
from dataclasses import dataclass


@dataclass(frozen=True)
class NoteEvent:
    pitch: int      # MIDI note number
    start: float    # seconds
    end: float      # seconds
    velocity: int
    channel: int

    @property
    def dur(self) -> float:
        return max(0.0, self.end - self.start)


@dataclass(frozen=True)
class Note:
    pitch: int
    time: float      # seconds, includes pre-silence
    duration: float  # seconds

    @property
    def end(self) -> float:
        return self.time + self.duration
