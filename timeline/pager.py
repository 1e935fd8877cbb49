# timeline/pager.py
import math
from typing import Callable, Iterator, Sequence, TypeVar

from config import RollConfig
from notes.model import Note
from notes.pitch_table import PitchTable
from timeline.layout import PageLayout, layout_page

T = TypeVar("T")


def page_name(stem: str, index: int, ext: str = ".svg") -> str:
    return f"{stem}_{index:03d}{ext}"


def page_count(duration: float, cfg: RollConfig) -> int:
    if duration <= 0:
        return 0
    return math.ceil(duration * cfg.speed / cfg.max_page_length)


class Pager:
    """Walks the strip page by page.

    Pages are produced lazily; iterating a Pager twice lays the pages out
    twice, nothing is cached.
    """
    def __init__(self, notes: Sequence[Note], table: PitchTable, cfg: RollConfig,
                 duration: float, stem: str = "page"):
        self.notes = list(notes)
        self.table = table
        self.cfg = cfg
        self.duration = duration
        self.stem = stem

    def __len__(self) -> int:
        return page_count(self.duration, self.cfg)

    def __iter__(self) -> Iterator[PageLayout]:
        extent = self.duration * self.cfg.speed
        offset = 0.0
        index = 0
        while offset < extent:
            yield layout_page(self.notes, self.table, offset, self.cfg, self.duration,
                              index=index, name=page_name(self.stem, index))
            index += 1
            offset = index * self.cfg.max_page_length


def generate_all_pages(pager: Pager, render: Callable[[PageLayout], T]) -> Iterator[T]:
    """Lay out each page and hand it to render, one page at a time."""
    for page in pager:
        yield render(page)
