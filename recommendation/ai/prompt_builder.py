from typing import Any, Dict, List, Optional
import json

from ..logic.constants import TRACKS
from ..logic.contracts import StudentProfile, TrackScore
from .advisor_rules import ADVISOR_GUIDELINES, SYSTEM_ROLE_DEFINITION, JSON_OUTPUT_FORMAT_INSTRUCTION


def build_system_prompt() -> str:
    """Constructs the static system prompt."""
    rules_str = "\n".join([f"- {rule}" for rule in ADVISOR_GUIDELINES])

    return f"""{SYSTEM_ROLE_DEFINITION}
Tracks: {", ".join(TRACKS)}.

OUTPUT FORMAT:
{JSON_OUTPUT_FORMAT_INSTRUCTION}

GUIDELINES:
{rules_str}
"""


def build_user_prompt(
    profile: StudentProfile,
    heuristic_top: List[TrackScore],
    email: Optional[str] = None,
) -> str:
    """
    Constructs the user message: the profile plus the heuristic ranking
    that grounds the advisor's percentages.
    """
    student: Dict[str, Any] = {
        "email": email,
        "payload": profile.model_dump(by_alias=True),
        "heuristicTop5": [s.model_dump(by_alias=True) for s in heuristic_top],
    }
    return json.dumps(student, ensure_ascii=False)
