"""Read access to league memberships used by the friend matcher."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

from firebase_admin import firestore
from google.cloud.firestore import FieldFilter

from knockout.core.constants import (
    DEFAULT_FPL_SEASON,
    LEAGUE_ENTRIES_COLLECTION,
    PARTICIPANT_LEAGUES_COLLECTION,
    SYSTEM_LEAGUE_THRESHOLD,
    TOURNAMENTS_COLLECTION,
)

from .models import LeagueMembership

if TYPE_CHECKING:
    from google.cloud.firestore_v1.client import Client


class LeagueMembershipSource(Protocol):
    """The two membership reads the friend matcher depends on."""

    def get_user_league_memberships(self, user_id: int) -> list[LeagueMembership]:
        """Return the leagues the user's entry belongs to."""
        ...

    def get_participant_league_memberships(
        self, tournament_id: str
    ) -> list[LeagueMembership]:
        """Return one row per (participant, league) pair for a tournament."""
        ...


class FirestoreLeagueMembershipSource:
    """Membership reads backed by Firestore.

    User memberships come from the ``leagueEntries`` collection for the
    configured season. Participant memberships are the per-tournament cache in
    ``tournaments/{id}/participantLeagues``, written when the tournament is
    created. System leagues are dropped from both.
    """

    def __init__(
        self, db: Client | None = None, season: str = DEFAULT_FPL_SEASON
    ) -> None:
        if db is None:
            db = firestore.client()
        self.db = db
        self.season = season

    def get_user_league_memberships(self, user_id: int) -> list[LeagueMembership]:
        """Fetch the user's league memberships for the season."""
        docs = (
            self.db.collection(LEAGUE_ENTRIES_COLLECTION)
            .where(filter=FieldFilter("entryId", "==", user_id))
            .where(filter=FieldFilter("season", "==", self.season))
            .stream()
        )
        return self._to_memberships(docs)

    def get_participant_league_memberships(
        self, tournament_id: str
    ) -> list[LeagueMembership]:
        """Fetch the cached league memberships of every participant."""
        docs = (
            self.db.collection(TOURNAMENTS_COLLECTION)
            .document(tournament_id)
            .collection(PARTICIPANT_LEAGUES_COLLECTION)
            .stream()
        )
        return self._to_memberships(docs)

    @staticmethod
    def _to_memberships(docs) -> list[LeagueMembership]:
        memberships = []
        for doc in docs:
            data = doc.to_dict()
            if not data or data.get("leagueId") is None:
                continue
            membership = LeagueMembership.from_dict(data)
            if membership.league_id < SYSTEM_LEAGUE_THRESHOLD:
                continue
            memberships.append(membership)
        return memberships


class InMemoryLeagueMembershipSource:
    """Membership reads served from dictionaries, for fixtures and tests."""

    def __init__(
        self,
        user_memberships: dict[int, list[LeagueMembership]] | None = None,
        participant_memberships: dict[str, list[LeagueMembership]] | None = None,
    ) -> None:
        self.user_memberships = user_memberships or {}
        self.participant_memberships = participant_memberships or {}

    def get_user_league_memberships(self, user_id: int) -> list[LeagueMembership]:
        return list(self.user_memberships.get(user_id, []))

    def get_participant_league_memberships(
        self, tournament_id: str
    ) -> list[LeagueMembership]:
        return list(self.participant_memberships.get(tournament_id, []))
