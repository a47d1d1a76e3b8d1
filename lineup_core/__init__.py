from .constants import (
    Role, ROLE_ORDER, SUBSTITUTE, SEGMENTS_PER_GAME, SEGMENT_LABEL,
    CSV_HEADERS, HEADER_ALIASES, normalize_name,
)
from .models import Player, Settings, SegmentSlot, LineupResult, HistoryEntry
from .engine import allocate_game
