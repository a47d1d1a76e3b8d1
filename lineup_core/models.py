from __future__ import annotations
from datetime import datetime
from typing import Dict, List
from pydantic import BaseModel, Field, field_validator

from .constants import Role, ROLE_ORDER, SUBSTITUTE


def _zero_counts() -> Dict[Role, int]:
    return {r: 0 for r in ROLE_ORDER}


def _default_formation() -> Dict[Role, int]:
    return {Role.GOALIE: 1, Role.DEFENDER: 3, Role.MIDFIELDER: 2, Role.FORWARD: 1}


class Player(BaseModel):
    name: str
    role_counts: Dict[Role, int] = Field(default_factory=_zero_counts)  # lifetime segments per role
    total_segments: int = Field(0, ge=0)       # lifetime real-role segments
    segments_this_game: int = Field(0, ge=0)   # reset every allocation run
    active: bool = True

    @field_validator("role_counts")
    @classmethod
    def _fill_roles(cls, v: Dict[Role, int]) -> Dict[Role, int]:
        out = _zero_counts()
        for role, n in v.items():
            if n < 0:
                raise ValueError(f"role count for {role.value} must be >= 0")
            out[role] = int(n)
        return out

    def count_for(self, role: Role) -> int:
        return self.role_counts.get(role, 0)

    @property
    def role_total(self) -> int:
        return sum(self.role_counts.values())


class Settings(BaseModel):
    roles_and_counts: Dict[Role, int] = Field(default_factory=_default_formation)
    min_segments_per_game: int = Field(2, ge=0)
    max_segments_per_game: int = Field(3, ge=0)

    @field_validator("roles_and_counts")
    @classmethod
    def _nonneg(cls, v: Dict[Role, int]) -> Dict[Role, int]:
        if any(n < 0 for n in v.values()):
            raise ValueError("required slot counts must be >= 0")
        return v

    def count_for(self, role: Role) -> int:
        return self.roles_and_counts.get(role, 0)

    @property
    def total_slots(self) -> int:
        return sum(self.roles_and_counts.values())


class SegmentSlot(BaseModel):
    name: str
    role: str  # Role value or SUBSTITUTE

    @property
    def is_substitute(self) -> bool:
        return self.role == SUBSTITUTE


Segment = List[SegmentSlot]


class LineupResult(BaseModel):
    plan: List[Segment] = Field(default_factory=list)
    updated_roster: List[Player] = Field(default_factory=list)


class HistoryEntry(BaseModel):
    date: datetime
    plan: List[Segment] = Field(default_factory=list)
