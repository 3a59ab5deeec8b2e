"""
Layout endpoints.

Serve bracket geometry (positions, boxes, connectors, canvas) or
round-robin standings for a draw. Results are memoized by content hash
in the layout cache; nothing is persisted.
"""
import logging
from typing import List, Optional, Union

from fastapi import APIRouter, Depends, HTTPException, Query
from pydantic import BaseModel
from sqlmodel import Session

from drawlayout.database import get_session
from drawlayout.routes.draws import DrawPayload, get_draw_or_404, load_draw_matches
from drawlayout.services.bracket_connectors import PathConnector, RectilinearConnector
from drawlayout.services.draw_layout import DrawLayout
from drawlayout.services.draw_types import build_draw_input, default_stage, list_stages
from drawlayout.services.layout_cache import LayoutCache, get_layout_cache
from drawlayout.services.layout_constants import LayoutConstants
from drawlayout.services.participants import (
    display_name,
    school_label,
    seed_label,
    side_from_payload,
)

logger = logging.getLogger(__name__)

router = APIRouter()


# ── Response models ──────────────────────────────────────────────────────

class SideView(BaseModel):
    name: str
    seed: Optional[str] = None
    school: Optional[str] = None
    won: bool = False


class LayoutBoxResponse(BaseModel):
    match_up_id: str
    round_index: int
    round_position: int
    x: float
    y: float
    width: float
    height: float
    status: str
    side1: SideView
    side2: SideView
    score_side1: Optional[str] = None
    score_side2: Optional[str] = None


class PositionEntry(BaseModel):
    round_index: int
    round_position: int
    y: float


class RoundResponse(BaseModel):
    round_index: int
    round_number: int
    round_name: str
    x: float
    match_up_ids: List[str]


class SegmentResponse(BaseModel):
    kind: str
    x1: float
    y1: float
    x2: float
    y2: float


class PathConnectorResponse(BaseModel):
    type: str = "path"
    round_index: int
    round_position: int
    feeder_position: int
    x1: float
    y1: float
    x2: float
    y2: float


class RectilinearConnectorResponse(BaseModel):
    type: str = "rectilinear"
    round_index: int
    round_position: int
    segments: List[SegmentResponse]


class StandingResponse(BaseModel):
    participant_id: str
    name: str
    wins: int
    losses: int


class FixtureResponse(BaseModel):
    match_up_id: str
    side1_name: str
    side2_name: str
    score_display: str
    completed: bool
    winning_side: Optional[int] = None


class DrawLayoutResponse(BaseModel):
    draw_id: str
    mode: str  # centered | slot | columns | round_robin
    stage: Optional[str] = None
    stages: List[str] = []
    width: float
    height: float
    rounds: List[RoundResponse]
    positions: List[PositionEntry]
    boxes: List[LayoutBoxResponse]
    connectors: List[Union[PathConnectorResponse, RectilinearConnectorResponse]]
    standings: List[StandingResponse]
    fixtures: List[FixtureResponse]


# ── Helpers ──────────────────────────────────────────────────────────────

def _side_view(payload, doubles: bool, won: bool) -> SideView:
    side = side_from_payload(payload, doubles=doubles)
    return SideView(name=display_name(side), seed=seed_label(side), school=school_label(side), won=won)


def layout_response(layout: DrawLayout, doubles: bool, constants: LayoutConstants, stages: List[str]) -> DrawLayoutResponse:
    connectors: List[Union[PathConnectorResponse, RectilinearConnectorResponse]] = []
    for c in layout.connectors:
        if isinstance(c, PathConnector):
            connectors.append(PathConnectorResponse(
                round_index=c.round_index,
                round_position=c.round_position,
                feeder_position=c.feeder_position,
                x1=c.x1, y1=c.y1, x2=c.x2, y2=c.y2,
            ))
        elif isinstance(c, RectilinearConnector):
            connectors.append(RectilinearConnectorResponse(
                round_index=c.round_index,
                round_position=c.round_position,
                segments=[
                    SegmentResponse(kind=s.kind, x1=s.x1, y1=s.y1, x2=s.x2, y2=s.y2)
                    for s in c.segments
                ],
            ))

    return DrawLayoutResponse(
        draw_id=layout.draw_id,
        mode=layout.mode,
        stage=layout.stage,
        stages=stages,
        width=layout.width,
        height=layout.height,
        rounds=[
            RoundResponse(
                round_index=i,
                round_number=r.round_number,
                round_name=r.round_name,
                x=constants.column_x(i),
                match_up_ids=[m.match_up_id for m in r.matches],
            )
            for i, r in enumerate(layout.rounds)
        ],
        positions=[
            PositionEntry(round_index=ri, round_position=rp, y=y)
            for (ri, rp), y in sorted(layout.positions.items())
        ],
        boxes=[
            LayoutBoxResponse(
                match_up_id=b.match.match_up_id,
                round_index=b.round_index,
                round_position=b.round_position,
                x=b.x, y=b.y, width=b.width, height=b.height,
                status=b.match.match_status,
                side1=_side_view(b.match.side1, doubles, b.match.winning_side == 1),
                side2=_side_view(b.match.side2, doubles, b.match.winning_side == 2),
                score_side1=b.match.score_side1,
                score_side2=b.match.score_side2,
            )
            for b in layout.boxes
        ],
        connectors=connectors,
        standings=[
            StandingResponse(participant_id=s.participant_id, name=s.name, wins=s.wins, losses=s.losses)
            for s in layout.standings
        ],
        fixtures=[
            FixtureResponse(
                match_up_id=f.match_up_id,
                side1_name=f.side1_name,
                side2_name=f.side2_name,
                score_display=f.score_display,
                completed=f.completed,
                winning_side=f.winning_side,
            )
            for f in layout.fixtures
        ],
    )


def get_layout_constants() -> LayoutConstants:
    return LayoutConstants.from_env()


# ── Endpoints ────────────────────────────────────────────────────────────

@router.get("/draws/{draw_id}/layout", response_model=DrawLayoutResponse)
def get_draw_layout(
    draw_id: str,
    stage: Optional[str] = Query(None),
    card_width: Optional[float] = Query(None, gt=0),
    card_height: Optional[float] = Query(None, gt=0),
    card_gap: Optional[float] = Query(None, ge=0),
    column_gap: Optional[float] = Query(None, ge=0),
    top_padding: Optional[float] = Query(None, ge=0),
    slot_threshold: Optional[int] = Query(None, ge=0),
    very_large_threshold: Optional[int] = Query(None, ge=0),
    session: Session = Depends(get_session),
    cache: LayoutCache = Depends(get_layout_cache),
    base_constants: LayoutConstants = Depends(get_layout_constants),
):
    """Layout for a stored draw. Defaults to the MAIN stage when present."""
    draw = get_draw_or_404(session, draw_id)
    draw_input = build_draw_input(draw, load_draw_matches(session, draw))
    stages = list_stages(draw_input.matches)

    if stage is not None:
        stage = stage.strip().upper()
        if stage not in stages:
            raise HTTPException(status_code=404, detail=f"Stage '{stage}' not found in draw")
    else:
        stage = default_stage(draw_input.matches)

    constants = base_constants.with_overrides(
        column_width=card_width,
        card_height=card_height,
        card_gap=card_gap,
        column_gap=column_gap,
        top_padding=top_padding,
        slot_layout_threshold=slot_threshold,
        very_large_threshold=very_large_threshold,
    )
    layout = cache.get_or_compute(draw_input, constants, stage=stage)
    return layout_response(layout, draw_input.is_doubles, constants, stages)


@router.post("/layout", response_model=DrawLayoutResponse)
def compute_layout(
    payload: DrawPayload,
    cache: LayoutCache = Depends(get_layout_cache),
    constants: LayoutConstants = Depends(get_layout_constants),
):
    """Layout for an inline draw descriptor (nothing is stored)"""
    draw_input = build_draw_input(payload, payload.matches)
    layout = cache.get_or_compute(draw_input, constants, stage=default_stage(draw_input.matches))
    return layout_response(layout, draw_input.is_doubles, constants, list_stages(draw_input.matches))
