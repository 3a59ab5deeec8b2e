"""
Round grouping and feeder arithmetic for single-elimination draws.

Matches carry only (round_number, round_position); the tree is implied:
position p in round r is fed by positions 2p-1 and 2p of round r-1.
"""

from collections import defaultdict
from dataclasses import dataclass
from typing import Dict, Iterable, List, Tuple

from drawlayout.services.draw_types import MatchInput


@dataclass(frozen=True)
class Round:
    round_number: int
    round_name: str
    matches: Tuple[MatchInput, ...]

    @property
    def size(self) -> int:
        return len(self.matches)


def feeder_positions(position: int) -> Tuple[int, int]:
    """Return the two previous-round positions feeding `position`.

    Pure arithmetic; callers check whether those positions exist.
    """
    return (2 * position - 1, 2 * position)


def sibling_position(position: int) -> int:
    """Position sharing a parent with `position` (odd pairs with the next even)."""
    return position + 1 if position % 2 == 1 else position - 1


def is_upper_sibling(position: int) -> bool:
    return position % 2 == 1


def default_round_name(round_number: int, draw_size: int = 0) -> str:
    """Label a round by how many rounds remain before the final.

    Needs the draw size; without one the label is just the round number.
    """
    total_rounds = (draw_size - 1).bit_length() if draw_size >= 2 else 0
    remaining = total_rounds - round_number + 1
    if remaining < 1:
        return f"Round {round_number}"
    if remaining == 1:
        return "Final"
    if remaining == 2:
        return "Semifinals"
    if remaining == 3:
        return "Quarterfinals"
    return f"Round of {2 ** remaining}"


def group_rounds(matches: Iterable[MatchInput], draw_size: int = 0) -> List[Round]:
    """
    Group a flat match list into rounds.

    Rounds come back ascending by round_number; matches within a round
    ascending by round_position. Gaps and duplicate positions are kept
    as-is (no validation).
    """
    by_round: Dict[int, List[MatchInput]] = defaultdict(list)
    names: Dict[int, str] = {}
    for m in matches:
        by_round[m.round_number].append(m)
        if m.round_name and m.round_number not in names:
            names[m.round_number] = m.round_name

    rounds: List[Round] = []
    for round_number in sorted(by_round):
        ordered = sorted(by_round[round_number], key=lambda m: m.round_position)
        name = names.get(round_number) or default_round_name(round_number, draw_size)
        rounds.append(Round(round_number=round_number, round_name=name, matches=tuple(ordered)))
    return rounds
