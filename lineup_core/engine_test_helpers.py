"""
Internal helpers for tests (not imported by app).
"""
from __future__ import annotations
from .models import Player
from .constants import Role

def quick_player(name: str, gk=0, df=0, mf=0, fw=0, total=None, this_game=0, active=True) -> Player:
    counts = {Role.GOALIE: gk, Role.DEFENDER: df, Role.MIDFIELDER: mf, Role.FORWARD: fw}
    return Player(
        name=name,
        role_counts=counts,
        total_segments=sum(counts.values()) if total is None else total,
        segments_this_game=this_game,
        active=active,
    )
