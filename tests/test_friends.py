"""Tests for the friend matcher and its membership sources."""

from __future__ import annotations

import unittest
from unittest.mock import MagicMock

from mockfirestore import MockFirestore

from knockout.friends.models import FriendStatus, LeagueMembership
from knockout.friends.services import get_tournament_friends
from knockout.friends.sources import (
    FirestoreLeagueMembershipSource,
    InMemoryLeagueMembershipSource,
)
from knockout.tournament.models import Participant

TOURNAMENT_ID = "t1"
TOURNAMENT_LEAGUE = 5000
USER_ID = 1


def _participant(entry_id, team_name, seed, **kwargs):
    return Participant(entry_id, team_name, f"Manager {entry_id}", seed, **kwargs)


class TournamentFriendsTestCase(unittest.TestCase):
    """Test case for get_tournament_friends."""

    def setUp(self) -> None:
        self.participants = [
            _participant(USER_ID, "Me FC", 1),
            _participant(2, "zebra XI", 2),
            _participant(3, "Athletico", 3),
            _participant(4, "Bravo Town", 4, status="eliminated", elimination_round=1),
            _participant(5, "Tournament Only", 5),
            _participant(6, "Strangers", 6),
        ]
        self.user_leagues = [
            LeagueMembership(TOURNAMENT_LEAGUE, "Office League", USER_ID),
            LeagueMembership(700, "Pub League", USER_ID),
            LeagueMembership(800, "Family League", USER_ID),
        ]
        self.participant_leagues = [
            LeagueMembership(TOURNAMENT_LEAGUE, "Office League", USER_ID),
            LeagueMembership(700, "Pub League", USER_ID),
            LeagueMembership(TOURNAMENT_LEAGUE, "Office League", 2),
            LeagueMembership(700, "Pub League", 2),
            LeagueMembership(700, "Pub League", 3),
            LeagueMembership(800, "Family League", 3),
            LeagueMembership(800, "Family League", 4),
            LeagueMembership(TOURNAMENT_LEAGUE, "Office League", 5),
            LeagueMembership(999, "Other League", 6),
        ]

    def _source(self, user_leagues=None, participant_leagues=None):
        return InMemoryLeagueMembershipSource(
            user_memberships={
                USER_ID: self.user_leagues if user_leagues is None else user_leagues
            },
            participant_memberships={
                TOURNAMENT_ID: (
                    self.participant_leagues
                    if participant_leagues is None
                    else participant_leagues
                )
            },
        )

    def _friends(self, source=None):
        return get_tournament_friends(
            TOURNAMENT_ID,
            TOURNAMENT_LEAGUE,
            USER_ID,
            self.participants,
            source=source or self._source(),
        )

    def test_friends_sorted_by_count_then_name(self) -> None:
        friends = self._friends()
        self.assertEqual([f.entry_id for f in friends], [3, 4, 2])
        self.assertEqual([f.shared_league_count for f in friends], [2, 1, 1])

    def test_name_ties_break_case_sensitively(self) -> None:
        # "Bravo Town" sorts before "zebra XI" because uppercase precedes lowercase.
        friends = self._friends()
        self.assertEqual(friends[1].team_name, "Bravo Town")
        self.assertEqual(friends[2].team_name, "zebra XI")

    def test_shared_league_names_are_sorted(self) -> None:
        friends = self._friends()
        self.assertEqual(friends[0].shared_league_names, ["Family League", "Pub League"])

    def test_tournament_league_alone_is_not_friendship(self) -> None:
        entry_ids = {f.entry_id for f in self._friends()}
        self.assertNotIn(5, entry_ids)
        self.assertNotIn(6, entry_ids)

    def test_user_is_never_their_own_friend(self) -> None:
        self.assertNotIn(USER_ID, {f.entry_id for f in self._friends()})

    def test_status_and_elimination_round_carried(self) -> None:
        friend = next(f for f in self._friends() if f.entry_id == 4)
        self.assertEqual(friend.status, FriendStatus.ELIMINATED)
        self.assertEqual(friend.eliminated_round, 1)
        self.assertEqual(friend.seed, 4)

        active = next(f for f in self._friends() if f.entry_id == 2)
        self.assertEqual(active.status, FriendStatus.IN)
        self.assertIsNone(active.eliminated_round)

    def test_user_without_leagues_has_no_friends(self) -> None:
        self.assertEqual(self._friends(self._source(user_leagues=[])), [])

    def test_user_with_only_tournament_league_has_no_friends(self) -> None:
        source = self._source(user_leagues=[self.user_leagues[0]])
        self.assertEqual(self._friends(source), [])

    def test_no_cached_memberships_means_no_friends(self) -> None:
        self.assertEqual(self._friends(self._source(participant_leagues=[])), [])

    def test_read_failures_propagate(self) -> None:
        source = MagicMock()
        source.get_user_league_memberships.return_value = self.user_leagues
        source.get_participant_league_memberships.side_effect = RuntimeError("boom")

        with self.assertRaises(RuntimeError):
            self._friends(source)

    def test_both_reads_are_issued(self) -> None:
        source = MagicMock()
        source.get_user_league_memberships.return_value = []
        source.get_participant_league_memberships.return_value = []

        self._friends(source)

        source.get_user_league_memberships.assert_called_once_with(USER_ID)
        source.get_participant_league_memberships.assert_called_once_with(
            TOURNAMENT_ID
        )

    def test_to_dict(self) -> None:
        data = self._friends()[0].to_dict()
        self.assertEqual(data["entryId"], 3)
        self.assertEqual(data["sharedLeagueCount"], 2)
        self.assertEqual(data["status"], "in")


class FirestoreMembershipSourceTestCase(unittest.TestCase):
    """Test case for the Firestore membership source."""

    def setUp(self) -> None:
        self.db = MockFirestore()
        entries = self.db.collection("leagueEntries")
        entries.document("a").set(
            {"entryId": USER_ID, "leagueId": 700, "leagueName": "Pub League", "season": "2024-25"}
        )
        entries.document("b").set(
            {"entryId": USER_ID, "leagueId": 314, "leagueName": "Overall", "season": "2024-25"}
        )
        entries.document("c").set(
            {"entryId": USER_ID, "leagueId": 800, "leagueName": "Old League", "season": "2023-24"}
        )
        entries.document("d").set(
            {"entryId": 2, "leagueId": 700, "leagueName": "Pub League", "season": "2024-25"}
        )

        tournament_ref = self.db.collection("tournaments").document(TOURNAMENT_ID)
        tournament_ref.set({"fplLeagueId": TOURNAMENT_LEAGUE})
        cache = tournament_ref.collection("participantLeagues")
        cache.document("2_700").set({"entryId": 2, "leagueId": 700, "leagueName": "Pub League"})
        cache.document("2_1").set({"entryId": 2, "leagueId": 1, "leagueName": "Overall"})
        cache.document("3_800").set({"entryId": 3, "leagueId": 800})

        self.source = FirestoreLeagueMembershipSource(self.db, season="2024-25")

    def tearDown(self) -> None:
        self.db.reset()

    def test_user_memberships_filter_season_and_system_leagues(self) -> None:
        memberships = self.source.get_user_league_memberships(USER_ID)
        self.assertEqual(
            memberships, [LeagueMembership(700, "Pub League", USER_ID)]
        )

    def test_participant_memberships_drop_system_leagues(self) -> None:
        memberships = self.source.get_participant_league_memberships(TOURNAMENT_ID)
        self.assertEqual(
            sorted(memberships, key=lambda m: m.entry_id),
            [
                LeagueMembership(700, "Pub League", 2),
                LeagueMembership(800, "League 800", 3),
            ],
        )

    def test_unknown_tournament_has_no_memberships(self) -> None:
        self.db.collection("tournaments").document("t2").set({"fplLeagueId": 1})
        self.assertEqual(self.source.get_participant_league_memberships("t2"), [])


if __name__ == "__main__":
    unittest.main()
