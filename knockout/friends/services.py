"""Service layer for finding friends among tournament participants."""

from __future__ import annotations

import logging
from collections import defaultdict
from concurrent.futures import ThreadPoolExecutor
from typing import TYPE_CHECKING

from .models import FriendInTournament, FriendStatus, LeagueMembership
from .sources import FirestoreLeagueMembershipSource, LeagueMembershipSource

if TYPE_CHECKING:
    from knockout.tournament.models import Participant


def _fetch_memberships(
    source: LeagueMembershipSource, tournament_id: str, user_id: int
) -> tuple[list[LeagueMembership], list[LeagueMembership]]:
    """Issue both membership reads concurrently and wait for both."""
    with ThreadPoolExecutor(max_workers=2) as executor:
        user_future = executor.submit(source.get_user_league_memberships, user_id)
        participant_future = executor.submit(
            source.get_participant_league_memberships, tournament_id
        )
        return user_future.result(), participant_future.result()


def _group_by_entry(
    memberships: list[LeagueMembership], excluded_league_id: int
) -> dict[int, dict[int, str]]:
    """Build entry_id -> {league_id: league_name}, skipping one league."""
    grouped: dict[int, dict[int, str]] = defaultdict(dict)
    for membership in memberships:
        if membership.entry_id is None or membership.league_id == excluded_league_id:
            continue
        grouped[membership.entry_id][membership.league_id] = membership.league_name
    return grouped


def get_tournament_friends(
    tournament_id: str,
    tournament_league_id: int,
    user_id: int,
    participants: list[Participant],
    source: LeagueMembershipSource | None = None,
) -> list[FriendInTournament]:
    """Find participants who share at least one league with the user.

    The tournament's own league is excluded, since every participant shares
    it. Results are sorted by shared league count (desc), then team name.
    Read failures propagate to the caller.
    """
    if source is None:
        source = FirestoreLeagueMembershipSource()

    user_rows, participant_rows = _fetch_memberships(source, tournament_id, user_id)

    user_leagues = {
        m.league_id for m in user_rows if m.league_id != tournament_league_id
    }
    if not user_leagues:
        return []

    participant_leagues = _group_by_entry(participant_rows, tournament_league_id)

    friends = []
    for participant in participants:
        if participant.entry_id == user_id:
            continue

        their_leagues = participant_leagues.get(participant.entry_id, {})
        shared = [lid for lid in their_leagues if lid in user_leagues]
        if not shared:
            continue

        friends.append(
            FriendInTournament(
                entry_id=participant.entry_id,
                team_name=participant.team_name,
                manager_name=participant.manager_name,
                shared_league_count=len(shared),
                shared_league_names=sorted(their_leagues[lid] for lid in shared),
                seed=participant.seed,
                status=(
                    FriendStatus.ELIMINATED
                    if participant.status == "eliminated"
                    else FriendStatus.IN
                ),
                eliminated_round=participant.elimination_round,
            )
        )

    logging.debug(
        f"Found {len(friends)} friends for entry {user_id} in tournament {tournament_id}"
    )
    friends.sort(key=lambda f: (-f.shared_league_count, f.team_name))
    return friends
