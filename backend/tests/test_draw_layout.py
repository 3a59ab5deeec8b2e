"""End-to-end tests for the draw layout pipeline."""

import pytest

from drawlayout.services.bracket_connectors import PathConnector, RectilinearConnector
from drawlayout.services.draw_layout import MODE_ROUND_ROBIN, build_draw_layout
from drawlayout.services.draw_types import DrawInput
from drawlayout.services.layout_constants import LayoutConstants
from tests.factories import make_bracket, make_match, player

C = LayoutConstants(column_width=200, card_height=100, card_gap=20, column_gap=40, top_padding=0)


def _draw(matches, draw_size=8, draw_type="SINGLE_ELIMINATION", event_type="SINGLES"):
    return DrawInput(
        draw_id="d1",
        draw_size=draw_size,
        draw_type=draw_type,
        event_type=event_type,
        matches=matches,
    )


def test_empty_draw_yields_empty_layout():
    layout = build_draw_layout(_draw([]), C)
    assert layout.rounds == []
    assert layout.positions == {}
    assert layout.boxes == []
    assert layout.connectors == []
    assert (layout.width, layout.height) == (0, 0)
    assert layout.standings == []


def test_empty_round_robin_draw_has_no_standings():
    layout = build_draw_layout(_draw([], draw_type="ROUND_ROBIN"), C)
    assert layout.mode == MODE_ROUND_ROBIN
    assert layout.standings == []
    assert layout.fixtures == []


def test_small_draw_uses_centered_paths():
    layout = build_draw_layout(_draw(make_bracket(8)), C)
    assert layout.mode == "centered"
    assert len(layout.boxes) == 7
    assert all(isinstance(c, PathConnector) for c in layout.connectors)
    assert (layout.width, layout.height) == (680, 460)


def test_mid_size_draw_uses_slot_rectilinear():
    layout = build_draw_layout(_draw(make_bracket(64), draw_size=64), C)
    assert layout.mode == "slot"
    assert layout.connectors
    assert all(isinstance(c, RectilinearConnector) for c in layout.connectors)


def test_very_large_draw_is_unconnected_columns():
    layout = build_draw_layout(_draw(make_bracket(128), draw_size=128), C)
    assert layout.mode == "columns"
    assert layout.connectors == []
    assert len(layout.rounds) == 7
    assert len(layout.boxes) == 127


def test_threshold_override_switches_strategy():
    constants = C.with_overrides(slot_layout_threshold=4)
    assert build_draw_layout(_draw(make_bracket(8)), constants).mode == "slot"


@pytest.mark.parametrize("draw_size", [8, 64, 128])
def test_layout_is_idempotent(draw_size):
    draw = _draw(make_bracket(draw_size), draw_size=draw_size)
    first = build_draw_layout(draw, C)
    second = build_draw_layout(draw, C)
    assert first.positions == second.positions
    assert first.boxes == second.boxes
    assert (first.width, first.height) == (second.width, second.height)
    assert first == second


def test_bye_scenario_never_raises():
    matches = [m for m in make_bracket(8) if (m.round_number, m.round_position) != (1, 2)]
    layout = build_draw_layout(_draw(matches), C)
    assert layout.positions[(1, 1)] == 0
    assert len(layout.boxes) == 6


def test_round_robin_draw_takes_standings_path():
    a, b = player("a", "A"), player("b", "B")
    draw = _draw([make_match(1, 1, a, b, winning_side=2)], draw_type="round_robin")
    layout = build_draw_layout(draw, C)
    assert layout.mode == MODE_ROUND_ROBIN
    assert layout.boxes == []
    assert [(s.name, s.wins) for s in layout.standings] == [("B", 1), ("A", 0)]
    assert len(layout.fixtures) == 1


def test_stage_filter():
    matches = make_bracket(4) + [
        make_match(1, 1, match_up_id="q1", stage="QUALIFYING"),
        make_match(1, 2, match_up_id="q2", stage="QUALIFYING"),
    ]
    main = build_draw_layout(_draw(matches), C, stage="MAIN")
    qual = build_draw_layout(_draw(matches), C, stage="QUALIFYING")
    assert len(main.boxes) == 3
    assert [b.match.match_up_id for b in qual.boxes] == ["q1", "q2"]
    assert qual.stage == "QUALIFYING"


def test_default_constants_apply_header_padding():
    layout = build_draw_layout(_draw(make_bracket(4), draw_size=4))
    assert layout.boxes[0].y == LayoutConstants().top_padding
