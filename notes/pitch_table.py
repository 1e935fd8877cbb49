# notes/pitch_table.py
import logging
from typing import Dict, Iterable, Iterator, Optional

from config import PitchRange
from errors import ConfigError
from notes.names import name_to_pitch, pitch_display_name

log = logging.getLogger(__name__)


class PitchTable:
    """Maps MIDI pitch -> cross-axis position (mm) on the strip."""

    def __init__(self, positions: Dict[int, float]):
        if not positions:
            raise ConfigError("no pitches defined")
        self._pos = dict(sorted(positions.items()))

    @classmethod
    def build(cls, ranges: Iterable[PitchRange]) -> "PitchTable":
        pos: Dict[int, float] = {}
        for r in ranges:
            # start == 0 marks an unset interval and is skipped
            if r.start is not None and r.end is not None and r.start != 0:
                for pitch in range(r.start, r.end + 1):
                    pos[pitch] = r.p0 + (pitch - r.start) * r.dp
            for k, name in enumerate(r.names_de):
                pos[name_to_pitch(name, "de")] = r.p0 + k * r.dp
            for k, name in enumerate(r.names_en):
                pos[name_to_pitch(name, "en")] = r.p0 + k * r.dp
        table = cls(pos)
        for line in table.describe():
            log.info(line)
        return table

    def lookup(self, pitch: int) -> Optional[float]:
        return self._pos.get(pitch)

    def __contains__(self, pitch: int) -> bool:
        return pitch in self._pos

    def __len__(self) -> int:
        return len(self._pos)

    def __iter__(self) -> Iterator[int]:
        return iter(self._pos)

    def describe(self) -> Iterator[str]:
        for k, (pitch, y) in enumerate(self._pos.items(), start=1):
            yield f"{k}. {pitch_display_name(pitch)} at {y:g} mm"
