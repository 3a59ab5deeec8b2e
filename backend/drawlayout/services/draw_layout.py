"""
Draw layout pipeline.

draw -> rounds -> positions -> boxes -> canvas -> connectors, or, for
round-robin draws, standings + fixtures. Pure: the same input always
yields an equal DrawLayout, and nothing is cached here (see
layout_cache for the caller-side memo).
"""

import logging
from dataclasses import dataclass, field
from typing import List, Optional, Union

from drawlayout.services.bracket_connectors import (
    PathConnector,
    RectilinearConnector,
    build_path_connectors,
    build_rectilinear_connectors,
)
from drawlayout.services.bracket_layout import (
    CONNECTORS_PATH,
    CONNECTORS_RECTILINEAR,
    LayoutBox,
    PositionMap,
    build_boxes,
    compute_canvas_size,
    select_strategy,
)
from drawlayout.services.draw_types import DrawInput, filter_stage
from drawlayout.services.layout_constants import LayoutConstants
from drawlayout.services.round_grouping import Round, group_rounds
from drawlayout.services.round_robin import Fixture, Standing, aggregate_standings

logger = logging.getLogger(__name__)

MODE_ROUND_ROBIN = "round_robin"

Connector = Union[PathConnector, RectilinearConnector]


@dataclass
class DrawLayout:
    draw_id: str
    mode: str  # centered | slot | columns | round_robin
    rounds: List[Round] = field(default_factory=list)
    positions: PositionMap = field(default_factory=dict)
    boxes: List[LayoutBox] = field(default_factory=list)
    connectors: List[Connector] = field(default_factory=list)
    width: float = 0.0
    height: float = 0.0
    standings: List[Standing] = field(default_factory=list)
    fixtures: List[Fixture] = field(default_factory=list)
    stage: Optional[str] = None


def build_draw_layout(
    draw: DrawInput,
    constants: Optional[LayoutConstants] = None,
    stage: Optional[str] = None,
) -> DrawLayout:
    """Run the full layout for one draw (optionally one stage of it)."""
    constants = constants or LayoutConstants()
    draw = filter_stage(draw, stage)

    if draw.is_round_robin:
        result = aggregate_standings(draw.matches, doubles=draw.is_doubles)
        return DrawLayout(
            draw_id=draw.draw_id,
            mode=MODE_ROUND_ROBIN,
            standings=result.standings,
            fixtures=result.fixtures,
            stage=stage,
        )

    rounds = group_rounds(draw.matches, draw.draw_size)
    strategy = select_strategy(draw.draw_size, constants)
    logger.debug(
        "Draw %s: %d matches in %d rounds, strategy=%s",
        draw.draw_id, len(draw.matches), len(rounds), strategy.name,
    )

    positions = strategy.compute_positions(rounds, constants)
    boxes = build_boxes(rounds, positions, constants)
    canvas = compute_canvas_size(rounds, boxes, constants)

    connectors: List[Connector] = []
    if strategy.connector_style == CONNECTORS_PATH:
        connectors.extend(build_path_connectors(rounds, positions, constants))
    elif strategy.connector_style == CONNECTORS_RECTILINEAR:
        connectors.extend(build_rectilinear_connectors(boxes, len(rounds), constants))

    return DrawLayout(
        draw_id=draw.draw_id,
        mode=strategy.name,
        rounds=rounds,
        positions=positions,
        boxes=boxes,
        connectors=connectors,
        width=canvas.width,
        height=canvas.height,
        stage=stage,
    )
