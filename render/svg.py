# render/svg.py
import logging
import os

import cairo

from errors import RenderError
from timeline.layout import PageLayout

PT_PER_MM = 72.0 / 25.4001
LINE_WIDTH = 0.1  # mm
FONT_SIZE = 4.0   # mm

BLACK = (0.0, 0.0, 0.0)
RED = (1.0, 0.0, 0.0)

log = logging.getLogger(__name__)


def _stroke_lines(cr: "cairo.Context", lines, color) -> None:
    lines = [ln for ln in lines if ln is not None]
    if not lines:
        return
    cr.save()
    cr.set_source_rgb(*color)
    for ln in lines:
        cr.move_to(ln.x1, ln.y1)
        cr.line_to(ln.x2, ln.y2)
    cr.stroke()
    cr.restore()


class SvgPageWriter:
    """Writes a PageLayout to an SVG file; all drawing is done in mm."""

    def __init__(self, out_dir: str):
        self.out_dir = out_dir

    def path_for(self, page: PageLayout) -> str:
        return os.path.join(self.out_dir, page.name)

    def write(self, page: PageLayout) -> str:
        path = self.path_for(page)
        try:
            surface = cairo.SVGSurface(path, page.width * PT_PER_MM, page.height * PT_PER_MM)
        except (cairo.Error, OSError) as e:
            raise RenderError(f"cannot create {path}: {e}") from e
        try:
            try:
                cr = cairo.Context(surface)
                cr.scale(PT_PER_MM, PT_PER_MM)
                self.draw(cr, page)
                cr.show_page()
            finally:
                surface.finish()
        except (cairo.Error, OSError) as e:
            raise RenderError(f"failed to render {path}: {e}") from e
        log.debug("wrote %s (%d notes)", path, len(page.note_rects))
        return path

    def draw(self, cr: "cairo.Context", page: PageLayout) -> None:
        cr.set_line_width(LINE_WIDTH)
        cr.set_font_size(FONT_SIZE)
        cr.set_source_rgb(*BLACK)

        # notes
        cr.save()
        for r in page.note_rects:
            cr.rectangle(r.x, r.y, r.width, r.height)
            cr.fill()
        cr.restore()

        # cut lines
        _stroke_lines(cr, list(page.edge_lines) + [page.end_line], BLACK)

        # page name + continuation tick
        if page.label is not None and page.label.text:
            cr.save()
            cr.set_source_rgb(*RED)
            cr.move_to(page.label.x, page.label.y)
            cr.text_path(page.label.text)
            cr.stroke()
            cr.restore()
        _stroke_lines(cr, [page.continuation_mark], BLACK)

        # crop marks
        _stroke_lines(cr, page.crop_marks, RED)

