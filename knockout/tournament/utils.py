"""Utility functions for navigating a loaded tournament bracket."""

from __future__ import annotations

from typing import Optional

from knockout.core.constants import DEFAULT_MATCH_SIZE

from .models import (
    Match,
    MatchStatus,
    NextOpponentPreview,
    Round,
    Tournament,
    UserStatus,
)


def get_match_status(round: Round, current_gameweek: int) -> MatchStatus:
    """Derive a match's status from its round and the current gameweek."""
    if round.is_complete:
        return MatchStatus.FINISHED
    if round.gameweek <= current_gameweek:
        return MatchStatus.LIVE
    return MatchStatus.UPCOMING


def _find_round(rounds: list[Round], round_number: int) -> Round | None:
    return next((r for r in rounds if r.round_number == round_number), None)


def _find_match_index(round: Round, match: Match) -> int:
    for index, candidate in enumerate(round.matches):
        if candidate.id == match.id:
            return index
    return -1


def find_sibling_matches(
    rounds: list[Round],
    match: Match,
    round_number: int,
    match_size: int = DEFAULT_MATCH_SIZE,
) -> list[Match]:
    """Find the other matches feeding the same next-round match.

    Matches are grouped in consecutive runs of ``match_size``; each run feeds
    one match of the following round.
    """
    user_round = _find_round(rounds, round_number)
    if user_round is None:
        return []

    index = _find_match_index(user_round, match)
    if index == -1:
        return []

    start = index - index % match_size
    group = user_round.matches[start : start + match_size]
    return [m for m in group if m.id != match.id]


def find_sibling_match(
    rounds: list[Round], match: Match, round_number: int
) -> Optional[tuple[Match, Round]]:
    """Find the paired match whose winner meets this match's winner next round.

    Matches at positions 2n and 2n+1 feed position n of the next round.
    Returns ``None`` when there is no sibling, e.g. in the final.
    """
    user_round = _find_round(rounds, round_number)
    if user_round is None:
        return None

    index = _find_match_index(user_round, match)
    if index == -1:
        return None

    sibling_index = index + 1 if index % 2 == 0 else index - 1
    if sibling_index < 0 or sibling_index >= len(user_round.matches):
        return None

    return user_round.matches[sibling_index], user_round


def _build_preview(
    tournament: Tournament, sibling_match: Match, sibling_round: Round
) -> NextOpponentPreview | None:
    players = list(sibling_match.players)
    if not players:
        return None

    next_gameweek = sibling_round.gameweek + 1

    # A lone occupant has already advanced; nothing can change in a bye.
    if len(players) == 1:
        return NextOpponentPreview(
            match=sibling_match,
            round=sibling_round,
            match_type=MatchStatus.FINISHED,
            is_bye=True,
            players=players,
            winner_id=players[0].entry_id,
            next_gameweek=next_gameweek,
        )

    return NextOpponentPreview(
        match=sibling_match,
        round=sibling_round,
        match_type=get_match_status(sibling_round, tournament.current_gameweek),
        is_bye=False,
        players=players,
        winner_id=sibling_match.winner_id,
        next_gameweek=next_gameweek,
    )


def get_next_opponent_previews(
    tournament: Tournament, match: Match, round_number: int
) -> list[NextOpponentPreview]:
    """Preview every match feeding the same next-round match.

    Head-to-head brackets have at most one such match; an N-way bracket has
    up to ``match_size - 1``. Empty feeder matches are left out.
    """
    if tournament.match_size > DEFAULT_MATCH_SIZE:
        user_round = _find_round(tournament.rounds, round_number)
        if user_round is None:
            return []
        feeders = find_sibling_matches(
            tournament.rounds, match, round_number, tournament.match_size
        )
        siblings = [(m, user_round) for m in feeders]
    else:
        sibling = find_sibling_match(tournament.rounds, match, round_number)
        siblings = [sibling] if sibling else []

    previews = []
    for sibling_match, sibling_round in siblings:
        preview = _build_preview(tournament, sibling_match, sibling_round)
        if preview is not None:
            previews.append(preview)
    return previews


def get_next_opponent_preview(
    tournament: Tournament, match: Match, round_number: int
) -> NextOpponentPreview | None:
    """Preview the match that decides a participant's next opponent.

    In an N-way bracket this is the first feeder match in bracket order;
    ``get_next_opponent_previews`` returns all of them.
    """
    previews = get_next_opponent_previews(tournament, match, round_number)
    return previews[0] if previews else None


def _is_decided(match: Match) -> bool:
    return match.winner_id is not None and not match.is_bye


def calculate_remaining_participants(rounds: list[Round]) -> int:
    """Count entries that have not lost a decided match."""
    all_entries: set[int] = set()
    eliminated: set[int] = set()

    for rnd in rounds:
        for match in rnd.matches:
            for player in match.players:
                all_entries.add(player.entry_id)
                if _is_decided(match) and player.entry_id != match.winner_id:
                    eliminated.add(player.entry_id)

    return len(all_entries) - len(eliminated)


def find_eliminated_round(rounds: list[Round], entry_id: int) -> int | None:
    """Find the round in which ``entry_id`` lost, if they have."""
    for rnd in rounds:
        for match in rnd.matches:
            if not _is_decided(match):
                continue
            if match.get_player(entry_id) and match.winner_id != entry_id:
                return rnd.round_number
    return None


def get_user_status(
    eliminated_round: int | None, tournament_complete: bool
) -> UserStatus:
    """Get an entry's standing from its elimination round."""
    if eliminated_round is not None:
        return UserStatus.ELIMINATED
    if tournament_complete:
        return UserStatus.WINNER
    return UserStatus.IN
