"""Header stats for a draw: participants, completed/total matches, status."""

from dataclasses import dataclass
from typing import Sequence, Set

from drawlayout.services.draw_types import MatchInput, MatchStatus
from drawlayout.services.participants import derive_identity

STATUS_COMPLETED = "Completed"
STATUS_ACTIVE = "Active"
STATUS_SCHEDULED = "Scheduled"


@dataclass(frozen=True)
class DrawSummary:
    participants_count: int
    completed_matches: int
    total_matches: int
    status: str


def summarize_draw(matches: Sequence[MatchInput]) -> DrawSummary:
    participants: Set[str] = set()
    for m in matches:
        for payload in (m.side1, m.side2):
            pid = derive_identity(payload)
            if pid:
                participants.add(pid)

    completed = sum(1 for m in matches if m.is_completed)
    started = any(m.match_status == MatchStatus.IN_PROGRESS.value for m in matches)

    if matches and completed == len(matches):
        status = STATUS_COMPLETED
    elif completed or started:
        status = STATUS_ACTIVE
    else:
        status = STATUS_SCHEDULED

    return DrawSummary(
        participants_count=len(participants),
        completed_matches=completed,
        total_matches=len(matches),
        status=status,
    )
