"""Tournament blueprint."""

from flask import Blueprint

bp = Blueprint("tournament", __name__, url_prefix="/tournaments")

from . import routes  # noqa: E402, F401
from .bracket import calculate_bracket_preview, get_round_name  # noqa: E402
from .matchups import get_tournament_matchups  # noqa: E402
from .models import (  # noqa: E402
    BracketPreviewInfo,
    Match,
    MatchPlayer,
    MatchResult,
    MatchStatus,
    MatchupResult,
    NextOpponentPreview,
    Participant,
    Round,
    Tournament,
    TournamentStatus,
)
from .repository import load_tournament  # noqa: E402
from .utils import (  # noqa: E402
    find_sibling_match,
    find_sibling_matches,
    get_next_opponent_preview,
)

__all__ = [
    "BracketPreviewInfo",
    "Match",
    "MatchPlayer",
    "MatchResult",
    "MatchStatus",
    "MatchupResult",
    "NextOpponentPreview",
    "Participant",
    "Round",
    "Tournament",
    "TournamentStatus",
    "calculate_bracket_preview",
    "find_sibling_match",
    "find_sibling_matches",
    "get_next_opponent_preview",
    "get_round_name",
    "get_tournament_matchups",
    "load_tournament",
    "routes",
]
