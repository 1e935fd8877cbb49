# timeline/layout.py
"""Geometry of one page of the paper strip.

Coordinates are in mm. x runs along the strip (time), y across it (pitch);
y = 0 is the high edge. Nothing here draws: renderers consume PageLayout.
"""
from dataclasses import dataclass, field
from typing import Iterable, List, Optional

from config import RollConfig
from notes.model import Note
from notes.pitch_table import PitchTable

CROP_MARK_LEN = 2.0   # mm
LABEL_INSET = 2.0     # mm from the left and low edges
CONT_MARK = (3.0, 6.0)  # continuation tick, mm above the low edge


@dataclass(frozen=True)
class Rect:
    x: float
    y: float
    width: float
    height: float


@dataclass(frozen=True)
class Line:
    x1: float
    y1: float
    x2: float
    y2: float


@dataclass(frozen=True)
class Label:
    x: float
    y: float
    text: str


@dataclass
class PageLayout:
    index: int
    name: str
    offset: float
    width: float
    height: float
    note_rects: List[Rect] = field(default_factory=list)
    edge_lines: List[Line] = field(default_factory=list)
    end_line: Optional[Line] = None
    crop_marks: List[Line] = field(default_factory=list)
    label: Optional[Label] = None
    continuation_mark: Optional[Line] = None

    @property
    def is_last(self) -> bool:
        return self.continuation_mark is None


def note_length(duration: float, cfg: RollConfig) -> float:
    """Along-axis length of a note: gap clamp, then min/max clamp."""
    length = duration * cfg.speed
    if length >= cfg.min_gap_length:
        length -= cfg.min_gap_length
    return max(cfg.min_note_length, min(length, cfg.max_note_length))


def note_span(note: Note, cfg: RollConfig):
    x = note.time * cfg.speed
    return x, x + note_length(note.duration, cfg)


def clip_to_page(x: float, x2: float, page_offset: float, page_len: float):
    """Page-local (x, length) of [x, x2], or None if nothing falls on the page."""
    if not (x2 > page_offset and x < page_offset + page_len):
        return None
    x = min(page_len, max(0.0, x - page_offset))
    x2 = min(page_len, max(0.0, x2 - page_offset))
    length = x2 - x
    if length <= 0:
        return None
    return x, length


def layout_page(notes: Iterable[Note], table: PitchTable, page_offset: float,
                cfg: RollConfig, duration: float, index: int = 0,
                name: str = "") -> PageLayout:
    L = cfg.max_page_length
    W = cfg.paper_width
    page = PageLayout(index=index, name=name, offset=page_offset,
                      width=L, height=W + cfg.offset)

    for note in notes:
        y = table.lookup(note.pitch)
        if y is None:
            continue
        clipped = clip_to_page(*note_span(note, cfg), page_offset, L)
        if clipped is None:
            continue
        x, length = clipped
        page.note_rects.append(Rect(x, W - y - 0.5 * cfg.note_width,
                                    max(0.0, length), max(0.0, cfg.note_width)))

    if cfg.cut_high_edge:
        page.edge_lines.append(Line(0.0, 0.0, L, 0.0))
    if cfg.cut_low_edge:
        page.edge_lines.append(Line(0.0, W, L, W))

    music_end = duration * cfg.speed
    if cfg.cut_end and page_offset < music_end <= page_offset + L:
        x_end = music_end - page_offset
        page.end_line = Line(x_end, 0.0, x_end, W)

    page.crop_marks.append(Line(0.0, W, CROP_MARK_LEN, W))
    page.crop_marks.append(Line(0.0, 0.0, CROP_MARK_LEN, 0.0))
    if cfg.offset > 0:
        page.crop_marks.append(Line(0.0, W + cfg.offset, CROP_MARK_LEN, W + cfg.offset))

    page.label = Label(LABEL_INSET, W - LABEL_INSET, name)
    if music_end > page_offset + L:
        page.continuation_mark = Line(L, W - CONT_MARK[0], L, W - CONT_MARK[1])
    return page
