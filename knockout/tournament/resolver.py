"""Winner determination for head-to-head and N-way matches.

Ranks players with the FPL tiebreaker cascade:

1. Points (higher is better)
2. Transfer cost (lower is better)
3. Bench points (higher is better)
4. Seed (lower is better), the fallback for perfect ties
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from .models import Match


@dataclass(frozen=True)
class PlayerScore:
    """A player's gameweek numbers used to rank a match."""

    entry_id: int
    seed: int
    points: int
    transfer_cost: int = 0
    bench_points: int = 0


@dataclass(frozen=True)
class PlayerRanking:
    entry_id: int
    rank: int
    points: int


@dataclass(frozen=True)
class MatchResolution:
    """The decided outcome of one match."""

    match_id: str
    winner_id: int
    rankings: list[PlayerRanking]
    decided_by_tiebreaker: bool

    @property
    def loser_ids(self) -> list[int]:
        return [r.entry_id for r in self.rankings[1:]]

    def to_dict(self) -> dict[str, Any]:
        return {
            "matchId": self.match_id,
            "winnerId": self.winner_id,
            "rankings": [
                {"entryId": r.entry_id, "rank": r.rank, "points": r.points}
                for r in self.rankings
            ],
            "decidedByTiebreaker": self.decided_by_tiebreaker,
        }


def _tiebreak_key(score: PlayerScore) -> tuple[int, int, int, int]:
    return (-score.points, score.transfer_cost, -score.bench_points, score.seed)


def resolve_match(match_id: str, scores: list[PlayerScore]) -> MatchResolution | None:
    """Resolve a match from its players' scores.

    A single player advances automatically. Returns ``None`` for an empty
    match.
    """
    if not scores:
        return None

    if len(scores) == 1:
        only = scores[0]
        return MatchResolution(
            match_id=match_id,
            winner_id=only.entry_id,
            rankings=[PlayerRanking(only.entry_id, 1, only.points)],
            decided_by_tiebreaker=False,
        )

    ranked = sorted(scores, key=_tiebreak_key)
    winner = ranked[0]

    return MatchResolution(
        match_id=match_id,
        winner_id=winner.entry_id,
        rankings=[
            PlayerRanking(s.entry_id, rank, s.points)
            for rank, s in enumerate(ranked, start=1)
        ],
        decided_by_tiebreaker=any(s.points == winner.points for s in ranked[1:]),
    )


def resolve_from_match(match: Match) -> MatchResolution | None:
    """Resolve a stored match from its current slot scores.

    Only points and seed are stored on a match, so the cascade falls through
    to seed on a points tie. A bye resolves to its occupant without a score;
    otherwise returns ``None`` while any score is missing.
    """
    if match.is_bye or len(match.players) == 1:
        return resolve_match(
            match.id,
            [PlayerScore(p.entry_id, p.seed, p.score or 0) for p in match.players],
        )
    if any(p.score is None for p in match.players):
        return None
    return resolve_match(
        match.id,
        [PlayerScore(p.entry_id, p.seed, p.score or 0) for p in match.players],
    )
