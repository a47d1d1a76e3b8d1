from __future__ import annotations
from enum import Enum
from typing import Dict, List


# -----------------------------
# Roles (fill order matters)
# -----------------------------
class Role(str, Enum):
    GOALIE = "Goalie"
    DEFENDER = "Defender"
    MIDFIELDER = "Midfielder"
    FORWARD = "Forward"


ROLE_ORDER: List[Role] = [Role.GOALIE, Role.DEFENDER, Role.MIDFIELDER, Role.FORWARD]

# display-only label, never counted
SUBSTITUTE = "Substitute"

SEGMENTS_PER_GAME = 4
SEGMENT_LABEL = "Quarter"

# ---------------------
# CSV headers / aliases
# ---------------------
ROLE_COLUMNS: Dict[Role, str] = {
    Role.GOALIE: "GoalieCount",
    Role.DEFENDER: "DefenderCount",
    Role.MIDFIELDER: "MidfielderCount",
    Role.FORWARD: "ForwardCount",
}

CSV_HEADERS = ["Name"] + [ROLE_COLUMNS[r] for r in ROLE_ORDER] + ["TotalQuarters", "Active"]
HEADER_ALIASES = {
    # canonical -> set of aliases
    "Name": {"name", "player", "player name"},
    "GoalieCount": {"goalie", "goaliecount", "goalie count", "gk"},
    "DefenderCount": {"defender", "defendercount", "defender count", "def"},
    "MidfielderCount": {"midfielder", "midfieldercount", "midfielder count", "mid"},
    "ForwardCount": {"forward", "forwardcount", "forward count", "fwd"},
    "TotalQuarters": {"totalquarters", "total quarters", "total", "quarters", "total segments"},
    "Active": {"active", "present", "available"},
}

TRUTHY = {"1", "true", "yes", "y", "t"}


# ---------------------
# Normalization helpers
# ---------------------
def normalize_name(s: str) -> str:
    if s is None:
        return ""
    s = str(s).strip()
    if not s:
        return ""
    return " ".join(s.split())


def role_from_label(label: str) -> Role | None:
    """Map a slot label back to its Role; None for substitutes or unknown labels."""
    for r in ROLE_ORDER:
        if r.value == label:
            return r
    return None
