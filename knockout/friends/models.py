"""Data models for the friends module."""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from typing import Any, Optional


class FriendStatus(str, enum.Enum):
    """A friend's standing in the tournament."""

    IN = "in"
    ELIMINATED = "eliminated"


@dataclass(frozen=True)
class LeagueMembership:
    """One (entry, league) membership row."""

    league_id: int
    league_name: str
    entry_id: Optional[int] = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> LeagueMembership:
        league_id = int(data["leagueId"])
        entry_id = data.get("entryId")
        return cls(
            league_id=league_id,
            league_name=data.get("leagueName") or f"League {league_id}",
            entry_id=int(entry_id) if entry_id is not None else None,
        )


@dataclass(frozen=True)
class FriendInTournament:
    """A participant who shares at least one league with the user.

    The tournament's own league is never counted.
    """

    entry_id: int
    team_name: str
    manager_name: str
    shared_league_count: int
    seed: int
    status: FriendStatus = FriendStatus.IN
    shared_league_names: list[str] = field(default_factory=list)
    eliminated_round: Optional[int] = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "entryId": self.entry_id,
            "teamName": self.team_name,
            "managerName": self.manager_name,
            "sharedLeagueCount": self.shared_league_count,
            "sharedLeagueNames": list(self.shared_league_names),
            "status": self.status.value,
            "eliminatedRound": self.eliminated_round,
            "seed": self.seed,
        }
