# notes/names.py
"""Note spelling in the two conventions accepted in pitch tables.

German: ``c cis/des d dis/es e f fis/ges g gis/as a ais/b h``. Octave 4
(pitch 48..59) is written in lower case without marks, higher octaves get one
``'`` per octave, lower octaves are capitalised and octaves below 3 also carry
a sub-octave digit (``C1`` is pitch 24).

English: ``C C#/Db D D#/Eb E F F#/Gb G G#/Ab A A#/Bb B`` followed by the
scientific octave number (``C4`` is pitch 60).
"""
from typing import Callable, Dict

from errors import ConfigError

_DE_SHARP = ["c", "cis", "d", "dis", "e", "f", "fis", "g", "gis", "a", "ais", "h"]
_DE_FLAT = ["c", "des", "d", "es", "e", "f", "ges", "g", "as", "a", "b", "h"]
_EN_SHARP = ["C", "C#", "D", "D#", "E", "F", "F#", "G", "G#", "A", "A#", "B"]
_EN_FLAT = ["C", "Db", "D", "Eb", "E", "F", "Gb", "G", "Ab", "A", "Bb", "B"]

# names are searched over this range, first match wins
_SEARCH_RANGE = range(127)


def note_name_de(pitch: int, flat: bool = True) -> str:
    octave, pc = divmod(pitch, 12)
    name = (_DE_FLAT if flat else _DE_SHARP)[pc]
    if octave < 4:
        name = name[0].upper() + name[1:]
        if octave < 3:
            name += str(3 - octave)
    elif octave > 4:
        name += "'" * (octave - 4)
    return name


def note_name_en(pitch: int, flat: bool = True) -> str:
    octave, pc = divmod(pitch, 12)
    return (_EN_FLAT if flat else _EN_SHARP)[pc] + str(octave - 1)


_CONVENTIONS: Dict[str, Callable[..., str]] = {
    "de": note_name_de,
    "en": note_name_en,
}


def name_to_pitch(name: str, convention: str = "en") -> int:
    try:
        spell = _CONVENTIONS[convention]
    except KeyError:
        raise ValueError(f"unknown note name convention: {convention}") from None
    for pitch in _SEARCH_RANGE:
        if spell(pitch) == name or spell(pitch, False) == name:
            return pitch
    raise ConfigError(f"unknown note name {name!r} ({convention})")


def _with_alternative(spell: Callable[..., str], pitch: int) -> str:
    flat, sharp = spell(pitch), spell(pitch, False)
    return flat if flat == sharp else f"{flat}/{sharp}"


def pitch_display_name(pitch: int) -> str:
    """Both spellings in both conventions, e.g. ``Db4/C#4 des'/cis'``."""
    return f"{_with_alternative(note_name_en, pitch)} {_with_alternative(note_name_de, pitch)}"
