"""Per-participant matchup resolution for a loaded tournament."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from knockout.friends.services import get_tournament_friends

from .models import (
    Match,
    MatchResult,
    MatchupResult,
    Participant,
    Round,
    Tournament,
)
from .utils import get_match_status

if TYPE_CHECKING:
    from knockout.friends.models import FriendInTournament
    from knockout.friends.sources import LeagueMembershipSource


def get_match_result(
    match: Match, entry_id: int, is_complete: bool
) -> MatchResult | None:
    """Get a participant's result in a match.

    Returns ``None`` until both the participant's and the opponent's scores
    are known. A complete round reports the recorded winner; otherwise the
    scores give a provisional result.
    """
    player = match.get_player(entry_id)
    opponent = next((p for p in match.players if p.entry_id != entry_id), None)

    if player is None or player.score is None:
        return None
    if opponent is None or opponent.score is None:
        return None

    if is_complete:
        return MatchResult.WON if match.winner_id == entry_id else MatchResult.LOST

    diff = player.score - opponent.score
    if diff > 0:
        return MatchResult.WINNING
    if diff < 0:
        return MatchResult.LOSING
    return MatchResult.TIED


def _build_round_matchups(
    tournament: Tournament,
    round: Round,
    participant_map: dict[int, Participant],
) -> list[MatchupResult]:
    """Emit one matchup per occupant of every match in ``round``."""
    match_status = get_match_status(round, tournament.current_gameweek)
    results = []

    for match in round.matches:
        for player in match.players:
            participant = participant_map.get(player.entry_id)
            if participant is None:
                logging.debug(
                    f"Skipping unknown entry {player.entry_id} in match {match.id}"
                )
                continue

            others = [p for p in match.players if p.entry_id != player.entry_id]
            opponent = participant_map.get(others[0].entry_id) if others else None

            results.append(
                MatchupResult(
                    participant=participant,
                    match=match,
                    round=round,
                    opponent=opponent,
                    match_status=match_status,
                    result=get_match_result(match, player.entry_id, round.is_complete),
                )
            )

    return results


def build_matchups_for_round(
    tournament: Tournament, round_number: int
) -> list[MatchupResult]:
    """Resolve every participant's matchup in a single round."""
    round = tournament.get_round(round_number)
    if round is None:
        return []

    participant_map = {p.entry_id: p for p in tournament.participants}
    return _build_round_matchups(tournament, round, participant_map)


def build_latest_matchups(tournament: Tournament) -> list[MatchupResult]:
    """Resolve each participant's most recent matchup.

    Rounds are scanned from last to first, so survivors land in the current
    round and eliminated entries in the round they went out.
    """
    participant_map = {p.entry_id: p for p in tournament.participants}
    results = []
    seen: set[int] = set()

    for round in reversed(tournament.rounds):
        for matchup in _build_round_matchups(tournament, round, participant_map):
            entry_id = matchup.participant.entry_id
            if entry_id not in seen:
                seen.add(entry_id)
                results.append(matchup)

    return results


def get_tournament_matchups(
    tournament: Tournament,
    round: int | None = None,
    friends_only: bool = False,
    user_id: int | None = None,
    league_id: int | None = None,
    source: LeagueMembershipSource | None = None,
) -> list[MatchupResult]:
    """Get matchups for a tournament with optional friend enrichment.

    ``round`` selects a single round; without it each participant's latest
    matchup is returned. Friend data is computed once when both ``user_id``
    and ``league_id`` are given, and every result is then stamped with
    ``is_friend`` and ``shared_league_count``. ``friends_only`` filters to
    friends when friend data is available.
    """
    friends_map: dict[int, FriendInTournament] | None = None
    if user_id and league_id:
        friends = get_tournament_friends(
            tournament.id,
            tournament.fpl_league_id,
            user_id,
            tournament.participants,
            source=source,
        )
        friends_map = {f.entry_id: f for f in friends}

    if round is not None:
        matchups = build_matchups_for_round(tournament, round)
    else:
        matchups = build_latest_matchups(tournament)

    if friends_map is not None:
        for matchup in matchups:
            friend = friends_map.get(matchup.participant.entry_id)
            matchup.is_friend = friend is not None
            matchup.shared_league_count = friend.shared_league_count if friend else None

        if friends_only:
            matchups = [m for m in matchups if m.is_friend]

    return matchups
