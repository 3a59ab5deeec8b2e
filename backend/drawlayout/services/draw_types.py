"""
Engine input types.

A draw arrives already fetched (from storage or an inline request body).
Both the SQLModel rows and the pydantic request models expose the same
attribute names, so `build_draw_input` reads either with getattr.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Iterable, List, Optional

DEFAULT_STAGE = "MAIN"
ROUND_ROBIN = "ROUND_ROBIN"
DOUBLES = "DOUBLES"


class MatchStatus(str, Enum):
    SCHEDULED = "SCHEDULED"
    IN_PROGRESS = "IN_PROGRESS"
    COMPLETED = "COMPLETED"


@dataclass(frozen=True)
class MatchInput:
    match_up_id: str
    round_number: int  # 1-based
    round_position: int  # 1-based, unique within round in a well-formed draw
    round_name: str = ""
    side1: Optional[Dict[str, Any]] = None
    side2: Optional[Dict[str, Any]] = None
    winning_side: Optional[int] = None  # None | 1 | 2
    match_status: str = MatchStatus.SCHEDULED.value
    score_side1: Optional[str] = None
    score_side2: Optional[str] = None
    stage: str = DEFAULT_STAGE

    @property
    def is_completed(self) -> bool:
        return self.match_status == MatchStatus.COMPLETED.value


@dataclass(frozen=True)
class DrawInput:
    draw_id: str
    draw_size: int
    draw_type: str = "SINGLE_ELIMINATION"
    event_type: str = "SINGLES"
    draw_name: str = ""
    matches: List[MatchInput] = field(default_factory=list)

    @property
    def is_round_robin(self) -> bool:
        return str(self.draw_type or "").upper() == ROUND_ROBIN

    @property
    def is_doubles(self) -> bool:
        return str(self.event_type or "").upper() == DOUBLES


def match_input_from(obj: Any) -> MatchInput:
    """Copy a match-like object (ORM row or request model) into a MatchInput."""
    status = getattr(obj, "match_status", None) or MatchStatus.SCHEDULED.value
    if isinstance(status, Enum):
        status = status.value
    return MatchInput(
        match_up_id=str(getattr(obj, "match_up_id")),
        round_number=int(getattr(obj, "round_number")),
        round_position=int(getattr(obj, "round_position")),
        round_name=getattr(obj, "round_name", None) or "",
        side1=getattr(obj, "side1", None),
        side2=getattr(obj, "side2", None),
        winning_side=getattr(obj, "winning_side", None),
        match_status=str(status).upper(),
        score_side1=getattr(obj, "score_side1", None),
        score_side2=getattr(obj, "score_side2", None),
        stage=getattr(obj, "stage", None) or DEFAULT_STAGE,
    )


def build_draw_input(draw: Any, matches: Iterable[Any]) -> DrawInput:
    return DrawInput(
        draw_id=str(getattr(draw, "draw_id")),
        draw_size=int(getattr(draw, "draw_size", 0) or 0),
        draw_type=getattr(draw, "draw_type", None) or "SINGLE_ELIMINATION",
        event_type=getattr(draw, "event_type", None) or "SINGLES",
        draw_name=getattr(draw, "draw_name", None) or "",
        matches=[match_input_from(m) for m in matches],
    )


def list_stages(matches: Iterable[MatchInput]) -> List[str]:
    """Distinct stages in first-seen order, MAIN always first when present."""
    seen: List[str] = []
    for m in matches:
        if m.stage not in seen:
            seen.append(m.stage)
    if DEFAULT_STAGE in seen:
        seen.remove(DEFAULT_STAGE)
        seen.insert(0, DEFAULT_STAGE)
    return seen


def default_stage(matches: Iterable[MatchInput]) -> Optional[str]:
    stages = list_stages(matches)
    return stages[0] if stages else None


def filter_stage(draw: DrawInput, stage: Optional[str]) -> DrawInput:
    """Restrict a draw to one stage; None keeps every match."""
    if stage is None:
        return draw
    kept = [m for m in draw.matches if m.stage == stage]
    return DrawInput(
        draw_id=draw.draw_id,
        draw_size=draw.draw_size,
        draw_type=draw.draw_type,
        event_type=draw.event_type,
        draw_name=draw.draw_name,
        matches=kept,
    )
