from typing import TYPE_CHECKING, Any, Dict, Optional

from sqlalchemy import JSON, UniqueConstraint as SAUniqueConstraint
from sqlmodel import Column, Field, Relationship, SQLModel

if TYPE_CHECKING:
    from drawlayout.models.draw import Draw


class DrawMatch(SQLModel, table=True):
    __table_args__ = (SAUniqueConstraint("draw_pk", "match_up_id", name="uq_draw_match_up"),)

    id: Optional[int] = Field(default=None, primary_key=True)
    draw_pk: int = Field(foreign_key="draw.id", index=True)
    match_up_id: str
    stage: str = Field(default="MAIN")  # "MAIN" | "QUALIFYING" | "CONSOLATION"
    round_number: int
    round_name: str = Field(default="")
    round_position: int

    # Side payloads as delivered by the provider (participant_id, participant_name,
    # player1_name, player2_name, school_name, seed_number, ...). Null = bye/TBD.
    side1: Optional[Dict[str, Any]] = Field(default=None, sa_column=Column(JSON, nullable=True))
    side2: Optional[Dict[str, Any]] = Field(default=None, sa_column=Column(JSON, nullable=True))

    winning_side: Optional[int] = Field(default=None)  # 1 | 2 | null
    match_status: str = Field(default="SCHEDULED")  # SCHEDULED | IN_PROGRESS | COMPLETED
    score_side1: Optional[str] = Field(default=None)
    score_side2: Optional[str] = Field(default=None)

    # Relationships
    draw: "Draw" = Relationship(back_populates="matches")
