"""
Connector geometry between bracket rounds.

Two variants, matched to the layout strategy:
- path: one straight path per existing feeder, from the feeder's right
  edge to the parent's left edge (CenteredLayout).
- rectilinear: stub, vertical join, forward stub (SlotLayout). Only the
  upper sibling of a pair emits the forward segment.

Missing data degrades to fewer segments, never to an error.
"""

from dataclasses import dataclass
from typing import Dict, List, Sequence, Tuple

from drawlayout.services.bracket_layout import LayoutBox, PositionMap
from drawlayout.services.layout_constants import LayoutConstants
from drawlayout.services.round_grouping import (
    Round,
    feeder_positions,
    is_upper_sibling,
    sibling_position,
)

SEGMENT_STUB = "stub"
SEGMENT_JOIN = "join"
SEGMENT_FORWARD = "forward"


@dataclass(frozen=True)
class PathConnector:
    round_index: int  # parent's round
    round_position: int  # parent's position
    feeder_position: int
    x1: float
    y1: float
    x2: float
    y2: float


@dataclass(frozen=True)
class LineSegment:
    kind: str  # stub | join | forward
    x1: float
    y1: float
    x2: float
    y2: float


@dataclass(frozen=True)
class RectilinearConnector:
    round_index: int  # round of the match the lines leave from
    round_position: int
    segments: Tuple[LineSegment, ...]


def build_path_connectors(
    rounds: Sequence[Round], positions: PositionMap, constants: LayoutConstants
) -> List[PathConnector]:
    connectors: List[PathConnector] = []
    half = constants.card_height / 2

    for r in range(1, len(rounds)):
        x_prev_right = constants.column_x(r - 1) + constants.column_width - constants.card_inset
        x_this_left = constants.column_x(r) + constants.card_inset

        for m in rounds[r].matches:
            parent_y = positions.get((r, m.round_position))
            if parent_y is None:
                continue
            y_parent = parent_y + half
            for feeder in feeder_positions(m.round_position):
                feeder_y = positions.get((r - 1, feeder))
                if feeder_y is None:
                    continue
                connectors.append(
                    PathConnector(
                        round_index=r,
                        round_position=m.round_position,
                        feeder_position=feeder,
                        x1=x_prev_right,
                        y1=feeder_y + half,
                        x2=x_this_left,
                        y2=y_parent,
                    )
                )
    return connectors


def build_rectilinear_connectors(
    boxes: Sequence[LayoutBox], round_count: int, constants: LayoutConstants
) -> List[RectilinearConnector]:
    by_key: Dict[Tuple[int, int], LayoutBox] = {}
    for b in boxes:
        by_key.setdefault((b.round_index, b.round_position), b)

    connectors: List[RectilinearConnector] = []
    for box in boxes:
        if box.round_index >= round_count - 1:
            continue

        y_center = box.center_y
        mid_x = box.right + constants.column_gap / 2
        segments = [LineSegment(SEGMENT_STUB, box.right, y_center, mid_x, y_center)]

        partner = by_key.get((box.round_index, sibling_position(box.round_position)))
        if partner is not None:
            partner_center = partner.center_y
            segments.append(
                LineSegment(
                    SEGMENT_JOIN,
                    mid_x,
                    min(y_center, partner_center),
                    mid_x,
                    max(y_center, partner_center),
                )
            )
            if is_upper_sibling(box.round_position):
                mid_y = (y_center + partner_center) / 2
                next_x = box.right + constants.column_gap
                segments.append(LineSegment(SEGMENT_FORWARD, mid_x, mid_y, next_x, mid_y))

        connectors.append(
            RectilinearConnector(
                round_index=box.round_index,
                round_position=box.round_position,
                segments=tuple(segments),
            )
        )
    return connectors
