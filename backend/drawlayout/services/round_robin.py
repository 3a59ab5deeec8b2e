"""
Round-robin standings.

Wins/losses per participant from the decided matches of a draw.
Ordering: wins desc, losses asc, then name asc.
"""

import logging
from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Optional, Sequence

from drawlayout.services.draw_types import MatchInput
from drawlayout.services.participants import (
    IdentityAccessor,
    derive_identity,
    payload_display_name,
)

logger = logging.getLogger(__name__)

NO_SCORE = "—"


@dataclass
class Standing:
    participant_id: str
    name: str
    wins: int = 0
    losses: int = 0


@dataclass(frozen=True)
class Fixture:
    match_up_id: str
    side1_name: str
    side2_name: str
    score_display: str
    completed: bool
    winning_side: Optional[int] = None


@dataclass
class RoundRobinResult:
    standings: List[Standing] = field(default_factory=list)
    fixtures: List[Fixture] = field(default_factory=list)
    skipped_match_ids: List[str] = field(default_factory=list)

    @property
    def decided_count(self) -> int:
        return sum(s.wins for s in self.standings)


def fixture_score(match: MatchInput) -> str:
    """Winner's score string for a decided match, a dash otherwise."""
    done = match.is_completed or match.winning_side is not None
    if not done:
        return NO_SCORE
    if match.winning_side == 1:
        return match.score_side1 or NO_SCORE
    if match.winning_side == 2:
        return match.score_side2 or NO_SCORE
    return NO_SCORE


def build_fixtures(matches: Iterable[MatchInput], doubles: bool = False) -> List[Fixture]:
    return [
        Fixture(
            match_up_id=m.match_up_id,
            side1_name=payload_display_name(m.side1, doubles=doubles),
            side2_name=payload_display_name(m.side2, doubles=doubles),
            score_display=fixture_score(m),
            completed=m.is_completed or m.winning_side is not None,
            winning_side=m.winning_side,
        )
        for m in matches
    ]


def aggregate_standings(
    matches: Sequence[MatchInput],
    doubles: bool = False,
    accessors: Optional[Sequence[IdentityAccessor]] = None,
) -> RoundRobinResult:
    rows: Dict[str, Standing] = {}

    for m in matches:
        for payload in (m.side1, m.side2):
            pid = derive_identity(payload, accessors)
            if pid and pid not in rows:
                rows[pid] = Standing(
                    participant_id=pid,
                    name=payload_display_name(payload, doubles=doubles),
                )

    skipped: List[str] = []
    for m in matches:
        if m.winning_side not in (1, 2):
            continue
        a_id = derive_identity(m.side1, accessors)
        b_id = derive_identity(m.side2, accessors)
        if not a_id or not b_id:
            logger.debug("Skipping match %s: side without identity", m.match_up_id)
            skipped.append(m.match_up_id)
            continue
        winner, loser = (a_id, b_id) if m.winning_side == 1 else (b_id, a_id)
        rows[winner].wins += 1
        rows[loser].losses += 1

    standings = sorted(rows.values(), key=lambda s: (-s.wins, s.losses, s.name, s.participant_id))
    return RoundRobinResult(
        standings=standings,
        fixtures=build_fixtures(matches, doubles=doubles),
        skipped_match_ids=skipped,
    )
