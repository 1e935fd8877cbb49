# ========================= config.py =========================
import json
from dataclasses import dataclass, field
from typing import Any, Optional, Tuple

from errors import ConfigError


@dataclass(frozen=True)
class PitchRange:
    start: Optional[int] = None
    end: Optional[int] = None
    names_de: Tuple[str, ...] = ()
    names_en: Tuple[str, ...] = ()
    p0: float = 0.0   # mm
    dp: float = 1.0   # mm per step


@dataclass(frozen=True)
class RollConfig:
    paper_width: float = 70.0       # mm, cross-axis
    max_page_length: float = 210.0  # mm, along-axis
    note_width: float = 1.8         # mm
    speed: float = 8.0              # mm/s
    min_note_length: float = 2.0    # mm
    max_note_length: float = 2.0    # mm
    min_gap_length: float = 6.0     # mm
    cut_high_edge: bool = False
    cut_low_edge: bool = False
    cut_end: bool = False
    offset: float = 0.0             # mm
    pre_silence: float = 0.0        # seconds
    post_silence: float = 0.0       # seconds
    pitch_ranges: Tuple[PitchRange, ...] = ()


@dataclass(frozen=True)
class AppConfig:
    roll: RollConfig = field(default_factory=RollConfig)
    out_dir: Optional[str] = None
    preview: bool = False


# key in the config document -> (RollConfig field, type)
_ROLL_KEYS = {
    "paperwidth": ("paper_width", float),
    "maxpaperlength": ("max_page_length", float),
    "notewidth": ("note_width", float),
    "speed": ("speed", float),
    "minnotelength": ("min_note_length", float),
    "maxnotelength": ("max_note_length", float),
    "mingaplength": ("min_gap_length", float),
    "cuthighedge": ("cut_high_edge", bool),
    "cutlowedge": ("cut_low_edge", bool),
    "cutend": ("cut_end", bool),
    "offset": ("offset", float),
    "presilence": ("pre_silence", float),
    "postsilence": ("post_silence", float),
}


def _get(obj: dict, key: str, default: Any, kind: type) -> Any:
    """Read obj[key] if present, else default; reject values of the wrong type."""
    if key not in obj or obj[key] is None:
        return default
    value = obj[key]
    if kind is bool:
        if not isinstance(value, bool):
            raise ConfigError(f"'{key}' must be true or false, got {value!r}")
        return value
    if kind is float:
        # bool is an int subclass but never a valid length
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            raise ConfigError(f"'{key}' must be a number, got {value!r}")
        return float(value)
    if kind is int:
        if isinstance(value, bool) or not isinstance(value, int):
            raise ConfigError(f"'{key}' must be an integer, got {value!r}")
        return value
    if kind is list:
        if not isinstance(value, list) or not all(isinstance(v, str) for v in value):
            raise ConfigError(f"'{key}' must be a list of note names")
        return tuple(value)
    raise TypeError(f"unsupported config type {kind!r}")


def parse_pitch_range(obj: Any) -> PitchRange:
    if not isinstance(obj, dict):
        raise ConfigError(f"pitch range must be an object, got {obj!r}")
    start = end = None
    # an interval only counts when both ends are given
    if obj.get("start") is not None and obj.get("end") is not None:
        start = _get(obj, "start", 0, int)
        end = _get(obj, "end", 0, int)
    return PitchRange(
        start=start,
        end=end,
        names_de=_get(obj, "names_de", (), list),
        names_en=_get(obj, "names_en", (), list),
        p0=_get(obj, "p0", 0.0, float),
        dp=_get(obj, "dp", 1.0, float),
    )


def parse_roll_config(doc: Any) -> RollConfig:
    if not isinstance(doc, dict):
        raise ConfigError("configuration must be a JSON object")
    defaults = RollConfig()
    values = {
        attr: _get(doc, key, getattr(defaults, attr), kind)
        for key, (attr, kind) in _ROLL_KEYS.items()
    }
    pitches = doc.get("pitches")
    ranges: Tuple[PitchRange, ...] = ()
    if isinstance(pitches, list):
        ranges = tuple(parse_pitch_range(p) for p in pitches)
    elif pitches is not None:
        raise ConfigError("'pitches' must be a list of ranges")
    if values["max_page_length"] <= 0:
        raise ConfigError(f"'maxpaperlength' must be positive, got {values['max_page_length']:g}")
    if values["speed"] <= 0:
        raise ConfigError(f"'speed' must be positive, got {values['speed']:g}")
    return RollConfig(pitch_ranges=ranges, **values)


def load_config(path: str) -> RollConfig:
    try:
        with open(path, "r", encoding="utf-8") as f:
            doc = json.load(f)
    except OSError as e:
        raise ConfigError(f"cannot read config file {path}: {e}") from e
    except json.JSONDecodeError as e:
        raise ConfigError(f"invalid JSON in {path}: {e}") from e
    return parse_roll_config(doc)
