# lineup_core/validation.py
from __future__ import annotations
from typing import List

from .constants import SEGMENTS_PER_GAME
from .models import Player, Settings


def validate_roster(roster: List[Player]) -> List[str]:
    errs = []
    if any(not p.name.strip() for p in roster):
        errs.append("Every player needs a name.")
    seen = set()
    dupes = []
    for p in roster:
        if p.name in seen and p.name not in dupes:
            dupes.append(p.name)
        seen.add(p.name)
    if dupes:
        errs.append(f"Duplicate player names: {', '.join(dupes)}")
    return errs

def validate_settings(roster: List[Player], settings: Settings) -> List[str]:
    """
    Caller-side checks to run before allocate_game.
    The engine itself degrades to partial segments instead of raising.
    """
    errs = []
    lo, hi = settings.min_segments_per_game, settings.max_segments_per_game
    if lo > hi:
        errs.append(f"Minimum quarters per game ({lo}) is greater than the maximum ({hi}).")
    if hi > SEGMENTS_PER_GAME:
        errs.append(f"Maximum quarters per game cannot exceed {SEGMENTS_PER_GAME}.")

    active = sum(1 for p in roster if p.active)
    slots = settings.total_slots
    if slots == 0:
        errs.append("Formation has no positions to fill.")
    if active == 0:
        errs.append("No active players.")
    elif active < slots:
        errs.append(f"Not enough active players ({active}) for the formation ({slots} positions).")
    elif slots * SEGMENTS_PER_GAME < active * lo:
        errs.append(
            f"Warning: {slots * SEGMENTS_PER_GAME} positions over the game cannot give "
            f"{active} players {lo} quarters each. Some players will fall short."
        )
    return errs

def players_below_minimum(roster: List[Player], min_per_game: int) -> List[str]:
    return [p.name for p in roster if p.active and p.segments_this_game < min_per_game]
