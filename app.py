# app.py
import logging
import os
from typing import List, Optional

from config import AppConfig, RollConfig
from errors import RenderError
from midi.parser import parse_midi_to_notes
from notes.collector import Collection, collect
from notes.pitch_table import PitchTable
from timeline.pager import Pager, generate_all_pages

log = logging.getLogger(__name__)


class App:
    """One conversion run: config -> pitch table -> notes -> pages on disk."""

    def __init__(self, cfg: AppConfig):
        self.cfg = cfg
        self.table = PitchTable.build(cfg.roll.pitch_ranges)
        self.collection: Optional[Collection] = None
        self.current_midi: Optional[str] = None

    @property
    def roll(self) -> RollConfig:
        return self.cfg.roll

    def load_midi(self, path: str) -> Collection:
        events, _ = parse_midi_to_notes(path)
        self.collection = collect(events, self.table, self.roll.pre_silence, self.roll.post_silence)
        self.current_midi = path
        log.info("Loaded %s: %d notes, %d not covered, %.2f s",
                 path, len(self.collection.notes), len(self.collection.uncovered),
                 self.collection.duration)
        return self.collection

    def pager(self) -> Pager:
        if self.collection is None or self.current_midi is None:
            raise RuntimeError("load_midi() must be called first")
        return Pager(self.collection.notes, self.table, self.roll,
                     self.collection.duration, stem=os.path.basename(self.current_midi))

    def out_dir(self) -> str:
        if self.cfg.out_dir:
            return self.cfg.out_dir
        return os.path.dirname(os.path.abspath(self.current_midi or "."))

    def write_pages(self) -> List[str]:
        from render.svg import SvgPageWriter

        out_dir = self.out_dir()
        try:
            os.makedirs(out_dir, exist_ok=True)
        except OSError as e:
            raise RenderError(f"cannot create {out_dir}: {e}") from e
        writer = SvgPageWriter(out_dir)
        written = []
        for path in generate_all_pages(self.pager(), writer.write):
            log.info("wrote %s", path)
            written.append(path)
        return written

    def preview(self):
        from render.renderer import PagePreview

        PagePreview(list(self.pager())).run()

    def run(self, midi_path: str) -> List[str]:
        self.load_midi(midi_path)
        written = self.write_pages()
        if self.cfg.preview:
            self.preview()
        return written
