# render/renderer.py
import logging
from typing import List, Sequence

import pygame

from timeline.layout import Line, PageLayout

STATUS_H = 36
MARGIN = 16
BG = (12, 12, 14)
PAPER = (236, 232, 220)
NOTE = (18, 18, 20)
CUT = (40, 40, 46)
MARK = (220, 40, 40)

log = logging.getLogger(__name__)


class PagePreview:
    """Shows laid-out pages in a pygame window, LEFT/RIGHT to flip through them."""

    def __init__(self, pages: Sequence[PageLayout], window_w: int = 1600, window_h: int = 700):
        pygame.init()
        self.pages: List[PageLayout] = list(pages)
        self.index = 0
        self.window_w, self.window_h = window_w, window_h
        self.screen = pygame.display.set_mode((window_w, window_h))
        pygame.display.set_caption("midi2roll preview")
        self.font_small = pygame.font.SysFont("consolas", 14)
        self.clock = pygame.time.Clock()

    def close(self):
        pygame.quit()

    def _scale(self, page: PageLayout) -> float:
        avail_w = self.window_w - 2 * MARGIN
        avail_h = self.window_h - STATUS_H - 2 * MARGIN
        return min(avail_w / max(1e-6, page.width), avail_h / max(1e-6, page.height))

    def _to_px(self, s: float, x: float, y: float):
        return MARGIN + x * s, STATUS_H + MARGIN + y * s

    def _line(self, s: float, ln: Line, color, width: int = 1):
        pygame.draw.line(self.screen, color, self._to_px(s, ln.x1, ln.y1), self._to_px(s, ln.x2, ln.y2), width)

    def draw_status_bar(self):
        pygame.draw.rect(self.screen, (24, 24, 28), (0, 0, self.window_w, STATUS_H))
        pygame.draw.line(self.screen, (60, 60, 66), (0, STATUS_H), (self.window_w, STATUS_H), 1)
        if self.pages:
            page = self.pages[self.index]
            text = f"{page.name}   page {self.index + 1}/{len(self.pages)}   notes: {len(page.note_rects)}"
        else:
            text = "no pages"
        surf = self.font_small.render(text + "   |   LEFT/RIGHT: page   ESC: quit", True, (220, 220, 230))
        self.screen.blit(surf, (10, (STATUS_H - surf.get_height()) // 2))

    def draw_page(self, page: PageLayout):
        s = self._scale(page)
        x0, y0 = self._to_px(s, 0.0, 0.0)
        pygame.draw.rect(self.screen, PAPER, (x0, y0, page.width * s, page.height * s))
        for r in page.note_rects:
            # keep sub-pixel notes visible
            pygame.draw.rect(self.screen, NOTE, (*self._to_px(s, r.x, r.y), max(1, r.width * s), max(1, r.height * s)))
        for ln in page.edge_lines:
            self._line(s, ln, CUT)
        if page.end_line is not None:
            self._line(s, page.end_line, CUT, 2)
        if page.continuation_mark is not None:
            self._line(s, page.continuation_mark, CUT, 2)
        for ln in page.crop_marks:
            self._line(s, ln, MARK, 2)
        if page.label is not None and page.label.text:
            surf = self.font_small.render(page.label.text, True, MARK)
            lx, ly = self._to_px(s, page.label.x, page.label.y)
            self.screen.blit(surf, (lx, ly - surf.get_height()))

    def draw(self):
        self.screen.fill(BG)
        self.draw_status_bar()
        if self.pages:
            self.draw_page(self.pages[self.index])
        pygame.display.flip()

    def flip_page(self, step: int):
        if self.pages:
            self.index = max(0, min(len(self.pages) - 1, self.index + step))
            log.debug("preview page %d/%d", self.index + 1, len(self.pages))

    def run(self):
        running = True
        try:
            while running:
                self.clock.tick(30)
                for e in pygame.event.get():
                    if e.type == pygame.QUIT:
                        running = False
                    elif e.type == pygame.KEYDOWN:
                        if e.key == pygame.K_ESCAPE:
                            running = False
                        elif e.key in (pygame.K_RIGHT, pygame.K_PAGEDOWN):
                            self.flip_page(+1)
                        elif e.key in (pygame.K_LEFT, pygame.K_PAGEUP):
                            self.flip_page(-1)
                self.draw()
        finally:
            self.close()
