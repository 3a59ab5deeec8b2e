from datetime import datetime, timezone
from typing import TYPE_CHECKING, List, Optional

from sqlmodel import Field, Relationship, SQLModel

if TYPE_CHECKING:
    from drawlayout.models.draw_match import DrawMatch


class Draw(SQLModel, table=True):
    id: Optional[int] = Field(default=None, primary_key=True)
    draw_id: str = Field(index=True, unique=True)  # provider's draw identifier
    tournament_id: str = Field(index=True)
    event_id: Optional[str] = Field(default=None)
    draw_name: str
    event_type: str = Field(default="SINGLES")  # "SINGLES" | "DOUBLES"
    draw_size: int
    draw_type: str = Field(default="SINGLE_ELIMINATION")  # "SINGLE_ELIMINATION" | "ROUND_ROBIN"
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))

    # Relationships
    matches: List["DrawMatch"] = Relationship(
        back_populates="draw", sa_relationship_kwargs={"cascade": "all, delete-orphan"}
    )
