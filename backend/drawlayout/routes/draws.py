"""
Draw catalogue endpoints.

Stores draws as delivered by the data provider so the layout endpoints
can serve them. Only source data is stored; layouts are recomputed.
"""
import logging
from typing import Any, Dict, List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from pydantic import BaseModel, ConfigDict, field_validator
from sqlmodel import Session, select

from drawlayout.database import get_session
from drawlayout.models.draw import Draw
from drawlayout.models.draw_match import DrawMatch
from drawlayout.services.draw_summary import summarize_draw
from drawlayout.services.draw_types import MatchStatus, build_draw_input, filter_stage, list_stages

logger = logging.getLogger(__name__)

router = APIRouter()


# ── Request / response models ────────────────────────────────────────────

class MatchPayload(BaseModel):
    match_up_id: str
    round_number: int
    round_position: int
    round_name: str = ""
    stage: str = "MAIN"
    side1: Optional[Dict[str, Any]] = None
    side2: Optional[Dict[str, Any]] = None
    winning_side: Optional[int] = None
    match_status: MatchStatus = MatchStatus.SCHEDULED
    score_side1: Optional[str] = None
    score_side2: Optional[str] = None

    @field_validator("round_number", "round_position")
    @classmethod
    def validate_one_based(cls, v):
        if v < 1:
            raise ValueError("round_number and round_position are 1-based")
        return v

    @field_validator("winning_side")
    @classmethod
    def validate_winning_side(cls, v):
        if v is not None and v not in (1, 2):
            raise ValueError("winning_side must be 1, 2 or null")
        return v

    @field_validator("match_status", mode="before")
    @classmethod
    def normalize_status(cls, v):
        return v.upper() if isinstance(v, str) else v

    @field_validator("stage")
    @classmethod
    def normalize_stage(cls, v):
        return (v or "MAIN").strip().upper()


class DrawPayload(BaseModel):
    draw_id: str
    draw_name: str = ""
    event_id: Optional[str] = None
    event_type: str = "SINGLES"
    draw_size: int
    draw_type: str = "SINGLE_ELIMINATION"
    matches: List[MatchPayload] = []

    @field_validator("draw_id")
    @classmethod
    def validate_draw_id(cls, v):
        if not v or not v.strip():
            raise ValueError("draw_id cannot be empty")
        return v.strip()

    @field_validator("draw_size")
    @classmethod
    def validate_draw_size(cls, v):
        if v < 0:
            raise ValueError("draw_size must be >= 0")
        return v

    @field_validator("event_type", "draw_type")
    @classmethod
    def normalize_upper(cls, v):
        return v.strip().upper()


class DrawSummaryResponse(BaseModel):
    participants_count: int
    completed_matches: int
    total_matches: int
    status: str


class DrawListItem(BaseModel):
    draw_id: str
    draw_name: str
    event_id: Optional[str] = None
    event_type: str
    draw_size: int
    draw_type: str
    stages: List[str]


class DrawMatchResponse(BaseModel):
    match_up_id: str
    stage: str
    round_number: int
    round_name: str
    round_position: int
    side1: Optional[Dict[str, Any]] = None
    side2: Optional[Dict[str, Any]] = None
    winning_side: Optional[int] = None
    match_status: str
    score_side1: Optional[str] = None
    score_side2: Optional[str] = None

    model_config = ConfigDict(from_attributes=True)


class DrawDetailsResponse(BaseModel):
    draw_id: str
    stage: Optional[str] = None
    tournament_id: str
    draw_name: str
    event_id: Optional[str] = None
    event_type: str
    draw_size: int
    draw_type: str
    summary: DrawSummaryResponse
    matches: List[DrawMatchResponse]


# ── Helpers ──────────────────────────────────────────────────────────────

def get_draw_or_404(session: Session, draw_id: str) -> Draw:
    draw = session.exec(select(Draw).where(Draw.draw_id == draw_id)).first()
    if not draw:
        raise HTTPException(status_code=404, detail="Draw not found")
    return draw


def load_draw_matches(session: Session, draw: Draw) -> List[DrawMatch]:
    return session.exec(
        select(DrawMatch)
        .where(DrawMatch.draw_pk == draw.id)
        .order_by(DrawMatch.round_number, DrawMatch.round_position, DrawMatch.id)
    ).all()


def _list_item(draw: Draw, matches: List[DrawMatch]) -> DrawListItem:
    return DrawListItem(
        draw_id=draw.draw_id,
        draw_name=draw.draw_name,
        event_id=draw.event_id,
        event_type=draw.event_type,
        draw_size=draw.draw_size,
        draw_type=draw.draw_type,
        stages=list_stages(build_draw_input(draw, matches).matches),
    )


# ── Endpoints ────────────────────────────────────────────────────────────

@router.post("/tournaments/{tournament_id}/draws", response_model=DrawDetailsResponse, status_code=201)
def import_draw(tournament_id: str, payload: DrawPayload, session: Session = Depends(get_session)):
    """Store a draw fetched from the data provider"""
    existing = session.exec(select(Draw).where(Draw.draw_id == payload.draw_id)).first()
    if existing:
        raise HTTPException(status_code=409, detail=f"Draw '{payload.draw_id}' already exists")

    seen = set()
    for m in payload.matches:
        if m.match_up_id in seen:
            raise HTTPException(status_code=422, detail=f"Duplicate match_up_id '{m.match_up_id}'")
        seen.add(m.match_up_id)

    draw = Draw(
        draw_id=payload.draw_id,
        tournament_id=tournament_id,
        event_id=payload.event_id,
        draw_name=payload.draw_name,
        event_type=payload.event_type,
        draw_size=payload.draw_size,
        draw_type=payload.draw_type,
    )
    session.add(draw)
    session.flush()

    for m in payload.matches:
        data = m.model_dump()
        data["match_status"] = m.match_status.value
        session.add(DrawMatch(draw_pk=draw.id, **data))
    session.commit()
    session.refresh(draw)

    logger.info(
        "Imported draw %s (%s, size %d) with %d matches",
        draw.draw_id, draw.draw_type, draw.draw_size, len(payload.matches),
    )
    return get_draw_details(draw.draw_id, stage=None, session=session)


@router.get("/tournaments/{tournament_id}/draws", response_model=List[DrawListItem])
def list_tournament_draws(tournament_id: str, session: Session = Depends(get_session)):
    """List the draws stored for a tournament"""
    draws = session.exec(
        select(Draw).where(Draw.tournament_id == tournament_id).order_by(Draw.id)
    ).all()
    return [_list_item(d, load_draw_matches(session, d)) for d in draws]


@router.get("/draws/{draw_id}", response_model=DrawDetailsResponse)
def get_draw_details(
    draw_id: str,
    stage: Optional[str] = Query(None),
    session: Session = Depends(get_session),
):
    """Draw header, summary stats and match list, optionally for one stage"""
    draw = get_draw_or_404(session, draw_id)
    matches = load_draw_matches(session, draw)
    draw_input = build_draw_input(draw, matches)

    if stage is not None:
        stage = stage.strip().upper()
        if stage not in list_stages(draw_input.matches):
            raise HTTPException(status_code=404, detail=f"Stage '{stage}' not found in draw")
        draw_input = filter_stage(draw_input, stage)
        matches = [m for m in matches if m.stage == stage]
    summary = summarize_draw(draw_input.matches)

    return DrawDetailsResponse(
        draw_id=draw.draw_id,
        stage=stage,
        tournament_id=draw.tournament_id,
        draw_name=draw.draw_name,
        event_id=draw.event_id,
        event_type=draw.event_type,
        draw_size=draw.draw_size,
        draw_type=draw.draw_type,
        summary=DrawSummaryResponse(
            participants_count=summary.participants_count,
            completed_matches=summary.completed_matches,
            total_matches=summary.total_matches,
            status=summary.status,
        ),
        matches=[DrawMatchResponse.model_validate(m) for m in matches],
    )


@router.get("/draws/{draw_id}/stages", response_model=List[str])
def get_draw_stages(draw_id: str, session: Session = Depends(get_session)):
    """Stages present in a draw, MAIN first"""
    draw = get_draw_or_404(session, draw_id)
    return list_stages(build_draw_input(draw, load_draw_matches(session, draw)).matches)


@router.delete("/draws/{draw_id}", status_code=204)
def delete_draw(draw_id: str, session: Session = Depends(get_session)):
    """Delete a draw and its matches"""
    draw = get_draw_or_404(session, draw_id)
    session.delete(draw)  # matches cascade
    session.commit()

    return None
