from __future__ import annotations

from dataclasses import replace

import pytest

from config import PitchRange, RollConfig
from notes.model import Note
from notes.pitch_table import PitchTable
from timeline.layout import Line, clip_to_page, layout_page, note_length


@pytest.fixture
def table(c_major_ranges) -> PitchTable:
    return PitchTable.build(c_major_ranges)


def test_clamp_example_from_defaults() -> None:
    # 2 s at 8 mm/s = 16 mm, minus the 6 mm gap = 10 mm, capped at 2 mm
    assert note_length(2.0, RollConfig()) == 2.0


@pytest.mark.parametrize("duration", [0.0, 0.1, 0.5, 0.74, 0.75, 1.0, 3.0, 20.0])
def test_clamp_law(duration: float) -> None:
    cfg = RollConfig(speed=8.0, min_note_length=2.0, max_note_length=9.0, min_gap_length=6.0)
    raw = duration * cfg.speed
    gapped = raw - cfg.min_gap_length if raw >= cfg.min_gap_length else raw
    length = note_length(duration, cfg)
    assert cfg.min_note_length <= length <= cfg.max_note_length
    assert length == pytest.approx(max(cfg.min_note_length, min(gapped, cfg.max_note_length)))


def test_floor_wins_over_lower_ceiling() -> None:
    cfg = RollConfig(min_note_length=5.0, max_note_length=3.0, min_gap_length=100.0)
    assert note_length(10.0, cfg) == 5.0


def test_rect_cross_axis_position() -> None:
    table = PitchTable.build([PitchRange(start=60, end=60, p0=30.0)])
    cfg = RollConfig(paper_width=70.0, note_width=1.8)
    page = layout_page([Note(60, 1.0, 0.5)], table, 0.0, cfg, duration=2.0)
    (rect,) = page.note_rects
    assert rect.y == pytest.approx(39.1)
    assert rect.height == pytest.approx(1.8)
    assert rect.x == pytest.approx(8.0)
    assert rect.width == pytest.approx(2.0)


def test_note_outside_page_leaves_no_rect(table: PitchTable, free_length_config: RollConfig) -> None:
    cfg = free_length_config
    note = Note(60, 25.0, 1.0)  # 250..260 mm, on page 1 only
    assert layout_page([note], table, 0.0, cfg, duration=50.0).note_rects == []
    assert layout_page([note], table, 420.0, cfg, duration=50.0).note_rects == []
    (rect,) = layout_page([note], table, 210.0, cfg, duration=50.0).note_rects
    assert (rect.x, rect.width) == pytest.approx((40.0, 10.0))


def test_note_ending_on_page_boundary_stays_on_its_page(
        table: PitchTable, free_length_config: RollConfig) -> None:
    note = Note(60, 20.0, 1.0)  # 200..210 mm
    assert len(layout_page([note], table, 0.0, free_length_config, 50.0).note_rects) == 1
    assert layout_page([note], table, 210.0, free_length_config, 50.0).note_rects == []


def test_straddling_note_is_split(table: PitchTable, free_length_config: RollConfig) -> None:
    note = Note(60, 19.5, 2.0)  # 195..215 mm
    (first,) = layout_page([note], table, 0.0, free_length_config, 50.0).note_rects
    (second,) = layout_page([note], table, 210.0, free_length_config, 50.0).note_rects
    assert first.width >= 0 and second.width >= 0
    assert first.x == pytest.approx(195.0)
    assert first.x + first.width == pytest.approx(210.0)
    assert second.x == pytest.approx(0.0)
    # re-joined on the strip: [195, 215]
    assert 210.0 + second.x + second.width == pytest.approx(215.0)
    assert first.width + second.width == pytest.approx(20.0)


def test_clip_to_page() -> None:
    assert clip_to_page(-5.0, 5.0, 0.0, 210.0) == (0.0, 5.0)
    assert clip_to_page(400.0, 500.0, 210.0, 210.0) == (190.0, 20.0)
    assert clip_to_page(100.0, 110.0, 210.0, 210.0) is None
    assert clip_to_page(430.0, 440.0, 0.0, 210.0) is None


def test_unknown_pitch_never_drawn(table: PitchTable, roll_config: RollConfig) -> None:
    page = layout_page([Note(20, 0.0, 1.0)], table, 0.0, roll_config, duration=1.0)
    assert page.note_rects == []


def test_edge_lines_and_end_line(table: PitchTable) -> None:
    cfg = RollConfig(cut_high_edge=True, cut_low_edge=True, cut_end=True, speed=10.0)
    first = layout_page([], table, 0.0, cfg, duration=30.0)
    last = layout_page([], table, 210.0, cfg, duration=30.0)
    assert first.edge_lines == [Line(0.0, 0.0, 210.0, 0.0), Line(0.0, 70.0, 210.0, 70.0)]
    assert first.end_line is None
    assert last.end_line == Line(90.0, 0.0, 90.0, 70.0)


def test_no_cut_lines_by_default(table: PitchTable, roll_config: RollConfig) -> None:
    page = layout_page([], table, 0.0, roll_config, duration=10.0)
    assert page.edge_lines == []
    assert page.end_line is None


def test_crop_marks_follow_offset(table: PitchTable, roll_config: RollConfig) -> None:
    plain = layout_page([], table, 0.0, roll_config, duration=1.0)
    assert plain.crop_marks == [Line(0.0, 70.0, 2.0, 70.0), Line(0.0, 0.0, 2.0, 0.0)]
    assert plain.height == 70.0

    shifted = layout_page([], table, 0.0, replace(roll_config, offset=8.0), duration=1.0)
    assert shifted.crop_marks[-1] == Line(0.0, 78.0, 2.0, 78.0)
    assert shifted.height == 78.0


def test_label_and_continuation_mark(table: PitchTable) -> None:
    cfg = RollConfig(speed=10.0)
    first = layout_page([], table, 0.0, cfg, duration=30.0, index=0, name="song.mid_000.svg")
    last = layout_page([], table, 210.0, cfg, duration=30.0, index=1, name="song.mid_001.svg")
    assert first.label.text == "song.mid_000.svg"
    assert (first.label.x, first.label.y) == (2.0, 68.0)
    assert first.continuation_mark == Line(210.0, 67.0, 210.0, 64.0)
    assert not first.is_last
    assert last.continuation_mark is None
    assert last.is_last
