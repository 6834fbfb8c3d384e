"""Data models for the tournament blueprint."""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from typing import Any, Optional, TypedDict

from knockout.core.constants import DEFAULT_MATCH_SIZE
from knockout.core.types import FirestoreDocument


class TournamentStatus(str, enum.Enum):
    """Lifecycle state of a tournament."""

    ACTIVE = "active"
    COMPLETED = "completed"


class MatchStatus(str, enum.Enum):
    """Where a match sits relative to the current gameweek."""

    LIVE = "live"
    UPCOMING = "upcoming"
    FINISHED = "finished"
    ELIMINATED = "eliminated"


class MatchResult(str, enum.Enum):
    """Outcome of a match from one participant's point of view.

    WINNING, LOSING and TIED are provisional (round still in play); WON and
    LOST are only reported once the round is complete.
    """

    WINNING = "winning"
    LOSING = "losing"
    TIED = "tied"
    WON = "won"
    LOST = "lost"


class UserStatus(str, enum.Enum):
    """Standing of a single entry in a tournament."""

    IN = "in"
    ELIMINATED = "eliminated"
    WINNER = "winner"


class MatchPlayerDocument(TypedDict, total=False):
    """A match slot as stored in Firestore."""

    entryId: int
    fplTeamId: int
    seed: int
    score: Optional[int]
    teamName: str
    managerName: str


class MatchDocument(TypedDict, total=False):
    """A match as stored inside a round."""

    id: str
    players: list[MatchPlayerDocument]
    player1: Optional[MatchPlayerDocument]
    player2: Optional[MatchPlayerDocument]
    winnerId: Optional[int]
    isBye: bool
    updatedAt: str


class RoundDocument(TypedDict, total=False):
    """A round as stored inside a tournament document."""

    roundNumber: int
    name: str
    gameweek: int
    matches: list[MatchDocument]
    isComplete: bool


class TournamentDocument(FirestoreDocument, total=False):
    """A tournament document in Firestore."""

    fplLeagueId: int
    fplLeagueName: str
    creatorUserId: str
    startGameweek: int
    currentRound: int
    currentGameweek: int
    totalRounds: int
    matchSize: int
    status: str
    participants: list[dict[str, Any]]
    rounds: list[RoundDocument]
    winnerId: Optional[int]


def _entry_id(data: dict[str, Any]) -> int:
    """Read an entry id from either the current or the legacy key."""
    value = data.get("entryId")
    if value is None:
        value = data.get("fplTeamId")
    return int(value)


@dataclass(frozen=True)
class Participant:
    """A tournament entrant."""

    entry_id: int
    team_name: str
    manager_name: str
    seed: int
    status: str = "active"
    elimination_round: Optional[int] = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Participant:
        """Build a participant from a stored participant or entry object."""
        return cls(
            entry_id=_entry_id(data),
            team_name=data.get("teamName") or data.get("fplTeamName") or "",
            manager_name=data.get("managerName") or "",
            seed=int(data.get("seed", 0)),
            status=data.get("status") or "active",
            elimination_round=data.get("eliminationRound"),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "entryId": self.entry_id,
            "teamName": self.team_name,
            "managerName": self.manager_name,
            "seed": self.seed,
            "status": self.status,
            "eliminationRound": self.elimination_round,
        }


@dataclass(frozen=True)
class MatchPlayer:
    """One occupied slot of a match."""

    entry_id: int
    seed: int
    score: Optional[int] = None
    team_name: Optional[str] = None
    manager_name: Optional[str] = None

    @classmethod
    def from_dict(cls, data: MatchPlayerDocument) -> MatchPlayer:
        score = data.get("score")
        return cls(
            entry_id=_entry_id(dict(data)),
            seed=int(data.get("seed", 0)),
            score=int(score) if score is not None else None,
            team_name=data.get("teamName"),
            manager_name=data.get("managerName"),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "entryId": self.entry_id,
            "seed": self.seed,
            "score": self.score,
            "teamName": self.team_name,
            "managerName": self.manager_name,
        }


@dataclass(frozen=True)
class Match:
    """A single bracket match between two or more entries."""

    id: str
    players: list[MatchPlayer] = field(default_factory=list)
    winner_id: Optional[int] = None
    is_bye: bool = False
    updated_at: Optional[str] = None

    @classmethod
    def from_dict(cls, data: MatchDocument) -> Match:
        """Build a match, accepting N-way ``players`` or legacy player slots."""
        return cls(
            id=str(data.get("id", "")),
            players=[MatchPlayer.from_dict(p) for p in get_match_players(data)],
            winner_id=data.get("winnerId"),
            is_bye=bool(data.get("isBye", False)),
            updated_at=data.get("updatedAt"),
        )

    def get_player(self, entry_id: int) -> MatchPlayer | None:
        """Return the slot occupied by ``entry_id``, if any."""
        for player in self.players:
            if player.entry_id == entry_id:
                return player
        return None

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "players": [p.to_dict() for p in self.players],
            "winnerId": self.winner_id,
            "isBye": self.is_bye,
            "updatedAt": self.updated_at,
        }


@dataclass(frozen=True)
class Round:
    """One round of the bracket, played in a single gameweek."""

    round_number: int
    name: str
    gameweek: int
    matches: list[Match] = field(default_factory=list)
    is_complete: bool = False

    @classmethod
    def from_dict(cls, data: RoundDocument) -> Round:
        return cls(
            round_number=int(data["roundNumber"]),
            name=data.get("name", ""),
            gameweek=int(data["gameweek"]),
            matches=[Match.from_dict(m) for m in data.get("matches", [])],
            is_complete=bool(data.get("isComplete", False)),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "roundNumber": self.round_number,
            "name": self.name,
            "gameweek": self.gameweek,
            "isComplete": self.is_complete,
            "matches": [m.to_dict() for m in self.matches],
        }


@dataclass(frozen=True)
class Tournament:
    """The tournament aggregate: participants plus the full round skeleton."""

    id: str
    fpl_league_id: int
    current_round: int
    current_gameweek: int
    total_rounds: int
    participants: list[Participant] = field(default_factory=list)
    rounds: list[Round] = field(default_factory=list)
    status: TournamentStatus = TournamentStatus.ACTIVE
    winner_id: Optional[int] = None
    match_size: int = DEFAULT_MATCH_SIZE
    fpl_league_name: str = ""
    creator_user_id: Optional[str] = None
    start_gameweek: Optional[int] = None
    created_at: Any = None
    updated_at: Any = None

    @classmethod
    def from_dict(cls, doc_id: str, data: TournamentDocument) -> Tournament:
        """Build the aggregate from a tournament document.

        Rounds are sorted by round number; the matchup resolver relies on
        chronological order.
        """
        rounds = sorted(
            (Round.from_dict(r) for r in data.get("rounds", [])),
            key=lambda r: r.round_number,
        )
        return cls(
            id=doc_id,
            fpl_league_id=int(data["fplLeagueId"]),
            fpl_league_name=data.get("fplLeagueName", ""),
            creator_user_id=data.get("creatorUserId"),
            start_gameweek=data.get("startGameweek"),
            current_round=int(data.get("currentRound", 1)),
            current_gameweek=int(data["currentGameweek"]),
            total_rounds=int(data.get("totalRounds", len(rounds))),
            match_size=int(data.get("matchSize") or DEFAULT_MATCH_SIZE),
            status=TournamentStatus(data.get("status", TournamentStatus.ACTIVE.value)),
            participants=[Participant.from_dict(p) for p in data.get("participants", [])],
            rounds=rounds,
            winner_id=data.get("winnerId"),
            created_at=data.get("createdAt"),
            updated_at=data.get("updatedAt"),
        )

    @property
    def is_complete(self) -> bool:
        return self.status is TournamentStatus.COMPLETED

    def get_round(self, round_number: int) -> Round | None:
        """Return the round with the given number, if any."""
        for rnd in self.rounds:
            if rnd.round_number == round_number:
                return rnd
        return None

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "fplLeagueId": self.fpl_league_id,
            "fplLeagueName": self.fpl_league_name,
            "currentRound": self.current_round,
            "currentGameweek": self.current_gameweek,
            "totalRounds": self.total_rounds,
            "matchSize": self.match_size,
            "status": self.status.value,
            "winnerId": self.winner_id,
            "participants": [p.to_dict() for p in self.participants],
            "rounds": [r.to_dict() for r in self.rounds],
        }


@dataclass(frozen=True)
class BracketPreviewInfo:
    """Shape of a bracket that has not been created yet."""

    rounds: int = 0
    total_slots: int = 0
    bye_count: int = 0
    matches_per_round: list[int] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            "rounds": self.rounds,
            "totalSlots": self.total_slots,
            "byeCount": self.bye_count,
            "matchesPerRound": list(self.matches_per_round),
        }


@dataclass
class MatchupResult:
    """A participant's resolved view of one match."""

    participant: Participant
    match: Optional[Match]
    round: Optional[Round]
    opponent: Optional[Participant]
    match_status: MatchStatus
    result: Optional[MatchResult] = None
    is_friend: Optional[bool] = None
    shared_league_count: Optional[int] = None

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "participant": self.participant.to_dict(),
            "match": self.match.to_dict() if self.match else None,
            "roundNumber": self.round.round_number if self.round else None,
            "roundName": self.round.name if self.round else None,
            "gameweek": self.round.gameweek if self.round else None,
            "opponent": self.opponent.to_dict() if self.opponent else None,
            "matchStatus": self.match_status.value,
            "result": self.result.value if self.result else None,
        }
        if self.is_friend is not None:
            data["isFriend"] = self.is_friend
            data["sharedLeagueCount"] = self.shared_league_count
        return data


@dataclass(frozen=True)
class NextOpponentPreview:
    """The sibling match whose winner a participant would meet next round."""

    match: Match
    round: Round
    match_type: MatchStatus
    is_bye: bool
    players: list[MatchPlayer]
    winner_id: Optional[int]
    next_gameweek: int

    def to_dict(self) -> dict[str, Any]:
        return {
            "matchId": self.match.id,
            "roundNumber": self.round.round_number,
            "matchType": self.match_type.value,
            "isBye": self.is_bye,
            "players": [p.to_dict() for p in self.players],
            "winnerId": self.winner_id,
            "nextGameweek": self.next_gameweek,
        }


def get_match_players(match: MatchDocument | dict[str, Any]) -> list[MatchPlayerDocument]:
    """Get players from a stored match, handling both N-way and legacy formats."""
    players = match.get("players")
    if players:
        return list(players)
    return [p for p in (match.get("player1"), match.get("player2")) if p]
