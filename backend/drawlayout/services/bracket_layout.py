"""
Bracket layout strategies and canvas sizing.

Every strategy turns ordered rounds into a PositionMap keyed by
(round_index, round_position) -> top y of the match card. x is a
function of round_index alone (LayoutConstants.column_x).

- CenteredLayout: round 0 evenly stacked, later rounds centered between
  their two feeders; falls back to even spacing when a feeder is absent.
- SlotLayout: power-of-two slots computed from (round_index, position)
  only. Used above `slot_layout_threshold`.
- ColumnListLayout: plain stacked columns with no tree shape. Used above
  `very_large_threshold`, where connectors are not drawn.
"""

import logging
from dataclasses import dataclass
from typing import Dict, List, Sequence, Tuple

from drawlayout.services.draw_types import MatchInput
from drawlayout.services.layout_constants import LayoutConstants
from drawlayout.services.round_grouping import Round, feeder_positions

logger = logging.getLogger(__name__)

PositionKey = Tuple[int, int]
PositionMap = Dict[PositionKey, float]

CONNECTORS_PATH = "path"
CONNECTORS_RECTILINEAR = "rectilinear"
CONNECTORS_NONE = "none"


@dataclass(frozen=True)
class LayoutBox:
    x: float
    y: float
    width: float
    height: float
    match: MatchInput
    round_index: int
    round_position: int

    @property
    def center_y(self) -> float:
        return self.y + self.height / 2

    @property
    def right(self) -> float:
        return self.x + self.width

    @property
    def bottom(self) -> float:
        return self.y + self.height


@dataclass(frozen=True)
class CanvasSize:
    width: float
    height: float


class LayoutStrategy:
    """Common interface: rounds in, PositionMap out."""

    name = "base"
    connector_style = CONNECTORS_NONE

    def compute_positions(self, rounds: Sequence[Round], constants: LayoutConstants) -> PositionMap:
        raise NotImplementedError


class CenteredLayout(LayoutStrategy):
    name = "centered"
    connector_style = CONNECTORS_PATH

    def compute_positions(self, rounds: Sequence[Round], constants: LayoutConstants) -> PositionMap:
        positions: PositionMap = {}
        if not rounds:
            return positions

        slot = constants.slot_height
        top = constants.top_padding

        for i, m in enumerate(rounds[0].matches):
            positions.setdefault((0, m.round_position), top + i * slot)

        for r in range(1, len(rounds)):
            for m in rounds[r].matches:
                key = (r, m.round_position)
                if key in positions:
                    continue
                left, right = feeder_positions(m.round_position)
                y1 = positions.get((r - 1, left))
                y2 = positions.get((r - 1, right))
                if y1 is not None and y2 is not None:
                    positions[key] = (y1 + y2) / 2
                else:
                    logger.debug(
                        "Feeder missing for round %d position %d; using even spacing",
                        r, m.round_position,
                    )
                    positions[key] = top + (m.round_position - 1) * slot
        return positions


class SlotLayout(LayoutStrategy):
    name = "slot"
    connector_style = CONNECTORS_RECTILINEAR

    def compute_positions(self, rounds: Sequence[Round], constants: LayoutConstants) -> PositionMap:
        positions: PositionMap = {}
        slot = constants.slot_height
        for r, rnd in enumerate(rounds):
            multiplier = max(1, 2 ** r)
            y_offset = constants.top_padding + ((multiplier - 1) * slot) / 2
            for m in rnd.matches:
                positions.setdefault(
                    (r, m.round_position),
                    y_offset + (m.round_position - 1) * slot * multiplier,
                )
        return positions


class ColumnListLayout(LayoutStrategy):
    name = "columns"
    connector_style = CONNECTORS_NONE

    def compute_positions(self, rounds: Sequence[Round], constants: LayoutConstants) -> PositionMap:
        positions: PositionMap = {}
        slot = constants.slot_height
        for r, rnd in enumerate(rounds):
            for i, m in enumerate(rnd.matches):
                positions.setdefault((r, m.round_position), constants.top_padding + i * slot)
        return positions


def select_strategy(draw_size: int, constants: LayoutConstants) -> LayoutStrategy:
    """Pick the layout strategy for a draw of `draw_size` participants."""
    if draw_size > constants.very_large_threshold:
        return ColumnListLayout()
    if draw_size > constants.slot_layout_threshold:
        return SlotLayout()
    return CenteredLayout()


def build_boxes(
    rounds: Sequence[Round], positions: PositionMap, constants: LayoutConstants
) -> List[LayoutBox]:
    """One LayoutBox per match, in round then position order."""
    boxes: List[LayoutBox] = []
    for r, rnd in enumerate(rounds):
        x = constants.column_x(r)
        for m in rnd.matches:
            boxes.append(
                LayoutBox(
                    x=x,
                    y=positions.get((r, m.round_position), constants.top_padding),
                    width=constants.column_width,
                    height=constants.card_height,
                    match=m,
                    round_index=r,
                    round_position=m.round_position,
                )
            )
    return boxes


def compute_canvas_size(
    rounds: Sequence[Round], boxes: Sequence[LayoutBox], constants: LayoutConstants
) -> CanvasSize:
    """
    Total bounds of the bracket.

    Width: n columns plus n-1 gaps. Height: the densest round stacked
    below the header band, grown if any box reaches further down (slot
    layouts of irregular draws, fallback positions).
    """
    n = len(rounds)
    if n == 0:
        return CanvasSize(width=0.0, height=0.0)

    width = n * constants.column_width + (n - 1) * constants.column_gap

    densest = max(rnd.size for rnd in rounds) or 1
    height = (
        constants.top_padding
        + densest * constants.card_height
        + (densest - 1) * constants.card_gap
    )
    height = max(height, constants.top_padding + constants.card_height)
    if boxes:
        height = max(height, max(b.bottom for b in boxes))
    return CanvasSize(width=width, height=height)
