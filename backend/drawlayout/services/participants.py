"""
Match side payloads: tagged side variants, display names, identities.

Side payloads come from the data provider with no fixed schema. A side
is one of:
  EmptySide                  - bye / not yet filled
  SingleSide(participant)    - one player or a named team
  PairSide(first, second)    - doubles pair with both player names known
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Mapping, Optional, Sequence, Union

TBD = "TBD"

IdentityAccessor = Callable[[Mapping[str, Any]], Any]


@dataclass(frozen=True)
class Participant:
    name: str
    school_name: Optional[str] = None


@dataclass(frozen=True)
class EmptySide:
    pass


@dataclass(frozen=True)
class SingleSide:
    participant: Participant
    seed_number: Optional[int] = None


@dataclass(frozen=True)
class PairSide:
    first: Participant
    second: Participant
    team_name: str
    seed_number: Optional[int] = None
    school_name: Optional[str] = None


Side = Union[EmptySide, SingleSide, PairSide]


def _text(value: Any) -> Optional[str]:
    if value is None:
        return None
    s = str(value).strip()
    return s or None


def _seed(value: Any) -> Optional[int]:
    try:
        seed = int(value)
    except (TypeError, ValueError):
        return None
    return seed if seed > 0 else None


def side_from_payload(payload: Optional[Mapping[str, Any]], doubles: bool = False) -> Side:
    """Classify a raw side payload. A pair needs a doubles event and both player names."""
    if not payload:
        return EmptySide()
    name = _text(payload.get("participant_name"))
    if name is None:
        return EmptySide()

    school = _text(payload.get("school_name"))
    seed = _seed(payload.get("seed_number"))
    p1 = _text(payload.get("player1_name"))
    p2 = _text(payload.get("player2_name"))
    if doubles and p1 and p2:
        return PairSide(
            first=Participant(p1),
            second=Participant(p2),
            team_name=name,
            seed_number=seed,
            school_name=school,
        )
    return SingleSide(participant=Participant(name, school_name=school), seed_number=seed)


def _last_name(full: str) -> str:
    return full.strip().split(" ")[-1]


def display_name(side: Side) -> str:
    if isinstance(side, PairSide):
        return f"{_last_name(side.first.name)}/{_last_name(side.second.name)}"
    if isinstance(side, SingleSide):
        return side.participant.name
    return TBD


def seed_label(side: Side) -> Optional[str]:
    seed = getattr(side, "seed_number", None)
    return f"({seed})" if seed else None


def school_label(side: Side) -> Optional[str]:
    if isinstance(side, PairSide):
        return side.school_name
    if isinstance(side, SingleSide):
        return side.participant.school_name
    return None


def payload_display_name(payload: Optional[Mapping[str, Any]], doubles: bool = False) -> str:
    return display_name(side_from_payload(payload, doubles=doubles))


# ── Identity ─────────────────────────────────────────────────────────────

def _key(name: str) -> IdentityAccessor:
    def accessor(payload: Mapping[str, Any]) -> Any:
        return payload.get(name)

    accessor.__name__ = f"field_{name}"
    return accessor


def _nested_participant_id(payload: Mapping[str, Any]) -> Any:
    inner = payload.get("participant")
    if isinstance(inner, Mapping):
        return inner.get("id")
    return None


# Tried in order; first non-empty value wins.
DEFAULT_IDENTITY_ACCESSORS: Sequence[IdentityAccessor] = (
    _key("participant_id"),
    _key("participantId"),
    _key("id"),
    _nested_participant_id,
)


def derive_identity(
    payload: Optional[Mapping[str, Any]],
    accessors: Optional[Sequence[IdentityAccessor]] = None,
) -> str:
    """Stable identity for a side payload, or "" when none can be derived."""
    if not payload:
        return ""
    for accessor in accessors if accessors is not None else DEFAULT_IDENTITY_ACCESSORS:
        value = _text(accessor(payload))
        if value:
            return value
    return ""
