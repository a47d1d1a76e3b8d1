from __future__ import annotations
import logging
from typing import Dict, List, Optional, Set, Tuple

from .constants import Role, ROLE_ORDER, SUBSTITUTE, SEGMENTS_PER_GAME, role_from_label
from .models import Player, Settings, SegmentSlot, Segment, LineupResult

logger = logging.getLogger(__name__)


# -----------------------
# Core convenience lookups
# -----------------------
def by_name(roster: List[Player]) -> Dict[str, Player]:
    return {p.name: p for p in roster}

def _sort_key(role: Optional[Role]):
    # substitute sentinel (None) ranks by lifetime total only
    def key(p: Player) -> Tuple[int, int, str, str]:
        primary = p.count_for(role) if role is not None else p.total_segments
        return (primary, p.total_segments, p.name.casefold(), p.name)
    return key

def credit(p: Player, role: Role, delta: int = 1):
    p.role_counts[role] = p.count_for(role) + delta
    p.total_segments += delta
    p.segments_this_game += delta

# -----------------------
# Selection
# -----------------------
def select_player(
    roster: List[Player],
    role: Optional[Role],
    chosen: Set[str],
    min_per_game: int,
    max_per_game: int,
) -> Optional[Player]:
    """
    Pick the most deserving player for the next slot of `role` (None = substitute).
    Mutates the winner's counters for real roles and records it in `chosen`.
    Returns None only when every active player is already chosen for this segment.
    """
    available = [p for p in roster if p.active and p.name not in chosen]
    if not available:
        return None

    key = _sort_key(role)
    under_min = [p for p in available if p.segments_this_game < min_per_game]
    narrowed = sorted(under_min or available, key=key)

    pool = [p for p in narrowed if p.segments_this_game < max_per_game]
    if not pool:
        # everyone is capped: fall back to the whole available pool
        pool = sorted(available, key=key)

    winner = pool[0]
    if role is not None:
        credit(winner, role)
    chosen.add(winner.name)
    return winner

# -----------------------
# Segment / game building
# -----------------------
def build_segment(roster: List[Player], settings: Settings) -> Segment:
    segment: Segment = []
    chosen: Set[str] = set()
    lo, hi = settings.min_segments_per_game, settings.max_segments_per_game

    for role in ROLE_ORDER:
        for _ in range(settings.count_for(role)):
            p = select_player(roster, role, chosen, lo, hi)
            if p is not None:
                segment.append(SegmentSlot(name=p.name, role=role.value))

    # everyone left sits as a substitute
    while len(segment) < len(roster):
        p = select_player(roster, None, chosen, lo, hi)
        if p is None:
            break
        segment.append(SegmentSlot(name=p.name, role=SUBSTITUTE))
    return segment

def build_game_plan(roster: List[Player], settings: Settings) -> List[Segment]:
    plan: List[Segment] = []
    for idx in range(SEGMENTS_PER_GAME):
        segment = build_segment(roster, settings)
        logger.debug("segment %d: %s", idx + 1, [(s.name, s.role) for s in segment])
        plan.append(segment)
    return plan

# -----------------------
# Underplay repair
# -----------------------
def _find_donor(
    segment: Segment, recipient: Player, players: Dict[str, Player], min_per_game: int
) -> Optional[int]:
    for i, slot in enumerate(segment):
        if slot.is_substitute or slot.name == recipient.name:
            continue
        donor = players.get(slot.name)
        role = role_from_label(slot.role)
        if donor is None or role is None:
            continue
        if donor.segments_this_game <= min_per_game:
            continue
        # never push a counter below zero
        if donor.count_for(role) <= 0 or donor.total_segments <= 0:
            continue
        return i
    return None

def repair_underplay(plan: List[Segment], roster: List[Player], min_per_game: int) -> int:
    """
    Move real-role slots from players above the minimum to players below it.
    Best effort, no backtracking. Mutates plan and roster; returns the swap count.
    """
    players = by_name(roster)
    underplayed = [p for p in roster if p.active and p.segments_this_game < min_per_game]
    swaps = 0

    for u in underplayed:
        for seg_idx, segment in enumerate(plan):
            if u.segments_this_game >= min_per_game:
                break
            held = [s for s in segment if s.name == u.name]
            if any(not s.is_substitute for s in held):
                continue
            i = _find_donor(segment, u, players, min_per_game)
            if i is None:
                continue

            slot = segment[i]
            role = role_from_label(slot.role)
            donor = players[slot.name]
            credit(donor, role, -1)
            credit(u, role, +1)

            # donor takes the recipient's bench spot so nobody is listed twice
            for s in held:
                s.name = donor.name
            slot.name = u.name
            swaps += 1
            logger.debug("quarter %d: %s replaces %s at %s", seg_idx + 1, u.name, donor.name, slot.role)

    return swaps

# -----------------------
# Entry point
# -----------------------
def allocate_game(roster: List[Player], settings: Settings) -> LineupResult:
    """Build a full game plan from a roster snapshot; the input roster is left untouched."""
    working = [p.model_copy(deep=True) for p in roster]
    for p in working:
        p.segments_this_game = 0

    plan = build_game_plan(working, settings)
    swaps = repair_underplay(plan, working, settings.min_segments_per_game)

    short = [p.name for p in working if p.active and p.segments_this_game < settings.min_segments_per_game]
    logger.info(
        "allocated %d players over %d quarters (%d repair swaps)",
        sum(1 for p in working if p.active), len(plan), swaps,
    )
    if short:
        logger.info("below minimum after repair: %s", ", ".join(short))
    return LineupResult(plan=plan, updated_roster=working)
