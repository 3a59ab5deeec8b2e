"""Tests for round grouping and feeder arithmetic."""

import pytest

from drawlayout.services.round_grouping import (
    default_round_name,
    feeder_positions,
    group_rounds,
    is_upper_sibling,
    sibling_position,
)
from tests.factories import make_bracket, make_match


class TestFeederPositions:

    @pytest.mark.parametrize("position, expected", [(1, (1, 2)), (2, (3, 4)), (5, (9, 10))])
    def test_doubling_relation(self, position, expected):
        assert feeder_positions(position) == expected

    def test_feeders_of_consecutive_parents_do_not_overlap(self):
        seen = set()
        for p in range(1, 33):
            for f in feeder_positions(p):
                assert f not in seen
                seen.add(f)
        assert seen == set(range(1, 65))

    def test_sibling_pairs(self):
        assert sibling_position(1) == 2
        assert sibling_position(2) == 1
        assert sibling_position(7) == 8
        assert is_upper_sibling(3)
        assert not is_upper_sibling(4)


class TestGroupRounds:

    def test_empty_input(self):
        assert group_rounds([]) == []

    def test_orders_rounds_and_positions(self):
        matches = [
            make_match(2, 1),
            make_match(1, 3),
            make_match(1, 1),
            make_match(3, 1),
            make_match(1, 2),
            make_match(2, 2),
            make_match(1, 4),
        ]
        rounds = group_rounds(matches)
        assert [r.round_number for r in rounds] == [1, 2, 3]
        assert [m.round_position for m in rounds[0].matches] == [1, 2, 3, 4]
        assert [m.round_position for m in rounds[1].matches] == [1, 2]

    @pytest.mark.parametrize("n", [1, 2, 3, 4, 5, 6])
    def test_power_of_two_draw_halves_each_round(self, n):
        draw_size = 2 ** n
        rounds = group_rounds(make_bracket(draw_size))
        assert len(rounds) == n
        assert rounds[0].size == 2 ** (n - 1)
        for prev, nxt in zip(rounds, rounds[1:]):
            assert nxt.size * 2 == prev.size
        assert rounds[-1].size == 1

    def test_gaps_in_positions_are_tolerated(self):
        rounds = group_rounds([make_match(1, 1), make_match(1, 4)])
        assert [m.round_position for m in rounds[0].matches] == [1, 4]

    def test_round_name_passed_through(self):
        rounds = group_rounds([
            make_match(1, 1, round_name="R16"),
            make_match(1, 2),
        ])
        assert rounds[0].round_name == "R16"

    def test_round_name_derived_when_missing(self):
        rounds = group_rounds(make_bracket(8), draw_size=8)
        assert [r.round_name for r in rounds] == ["Quarterfinals", "Semifinals", "Final"]

    def test_round_name_ignores_missing_matches(self):
        # round 1 of a 16-draw with one match absent is still the round of 16
        matches = [m for m in make_bracket(16) if (m.round_number, m.round_position) != (1, 8)]
        rounds = group_rounds(matches, draw_size=16)
        assert rounds[0].round_name == "Round of 16"
        assert rounds[1].round_name == "Quarterfinals"

    def test_round_name_without_draw_size(self):
        rounds = group_rounds(make_bracket(8))
        assert [r.round_name for r in rounds] == ["Round 1", "Round 2", "Round 3"]

    @pytest.mark.parametrize("round_number, draw_size, expected", [
        (1, 32, "Round of 32"),
        (1, 12, "Round of 16"),
        (4, 16, "Final"),
        (5, 16, "Round 5"),
        (1, 0, "Round 1"),
    ])
    def test_default_round_name(self, round_number, draw_size, expected):
        assert default_round_name(round_number, draw_size) == expected
