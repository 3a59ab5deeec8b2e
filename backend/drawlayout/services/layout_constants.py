"""
Layout constants for the bracket layout engine.

All values are in layout units (the renderer decides what a unit is).
Defaults mirror the mobile draw screen: 300-wide cards, 150 tall,
18 between cards, 48 between columns, and a 44-unit header band.
"""

import os
from dataclasses import dataclass, fields, replace
from typing import Any, Optional

from dotenv import load_dotenv

load_dotenv()


def _env_float(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    return float(raw)


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    return int(raw)


@dataclass(frozen=True)
class LayoutConstants:
    column_width: float = 300.0
    card_height: float = 150.0
    card_gap: float = 18.0
    column_gap: float = 48.0
    top_padding: float = 44.0
    card_inset: float = 12.0  # keeps path connectors off the card borders

    # Draws larger than this use the slot (power-of-two) strategy
    slot_layout_threshold: int = 32
    # Draws larger than this get an unconnected column list
    very_large_threshold: int = 64

    @property
    def slot_height(self) -> float:
        return self.card_height + self.card_gap

    @property
    def column_pitch(self) -> float:
        return self.column_width + self.column_gap

    def column_x(self, round_index: int) -> float:
        return round_index * self.column_pitch

    def with_overrides(self, **overrides: Optional[Any]) -> "LayoutConstants":
        """Return a copy with every non-None override applied."""
        known = {f.name for f in fields(self)}
        changes = {k: v for k, v in overrides.items() if v is not None and k in known}
        if not changes:
            return self
        return replace(self, **changes)

    @classmethod
    def from_env(cls) -> "LayoutConstants":
        """Build constants from LAYOUT_* environment variables."""
        base = cls()
        return cls(
            column_width=_env_float("LAYOUT_CARD_WIDTH", base.column_width),
            card_height=_env_float("LAYOUT_CARD_HEIGHT", base.card_height),
            card_gap=_env_float("LAYOUT_CARD_GAP", base.card_gap),
            column_gap=_env_float("LAYOUT_COLUMN_GAP", base.column_gap),
            top_padding=_env_float("LAYOUT_TOP_PADDING", base.top_padding),
            card_inset=_env_float("LAYOUT_CARD_INSET", base.card_inset),
            slot_layout_threshold=_env_int("LAYOUT_SLOT_THRESHOLD", base.slot_layout_threshold),
            very_large_threshold=_env_int("LAYOUT_VERY_LARGE_THRESHOLD", base.very_large_threshold),
        )
