"""Builders for tournament documents and aggregates used across tests."""

from __future__ import annotations

from typing import Any, Optional

from knockout.tournament.models import Tournament

LEAGUE_ID = 5000
TOURNAMENT_ID = "t1"

A, B, C, D = 101, 102, 103, 104


def participant(entry_id: int, team_name: str, seed: int, **extra: Any) -> dict[str, Any]:
    """Create a stored participant object."""
    return {
        "entryId": entry_id,
        "teamName": team_name,
        "managerName": f"Manager {team_name}",
        "seed": seed,
        **extra,
    }


def player(entry_id: int, seed: int, score: Optional[int] = None) -> dict[str, Any]:
    """Create a stored match slot."""
    return {"entryId": entry_id, "seed": seed, "score": score}


def match(
    match_id: str,
    *players: dict[str, Any],
    winner_id: Optional[int] = None,
    is_bye: bool = False,
) -> dict[str, Any]:
    """Create a stored match."""
    return {
        "id": match_id,
        "players": list(players),
        "winnerId": winner_id,
        "isBye": is_bye,
    }


def four_player_tournament_doc(current_gameweek: int = 11) -> dict[str, Any]:
    """Two rounds: A beat B 60-55 and C beat D 70-65; the final is A 45, C 50."""
    return {
        "fplLeagueId": LEAGUE_ID,
        "fplLeagueName": "Office League",
        "currentRound": 2,
        "currentGameweek": current_gameweek,
        "totalRounds": 2,
        "status": "active",
        "participants": [
            participant(A, "Alpha", 1),
            participant(B, "Bravo", 4, status="eliminated", eliminationRound=1),
            participant(C, "Charlie", 2),
            participant(D, "Delta", 3, status="eliminated", eliminationRound=1),
        ],
        "rounds": [
            {
                "roundNumber": 1,
                "name": "Semi-Finals",
                "gameweek": 10,
                "isComplete": True,
                "matches": [
                    match("m1", player(A, 1, 60), player(B, 4, 55), winner_id=A),
                    match("m2", player(C, 2, 70), player(D, 3, 65), winner_id=C),
                ],
            },
            {
                "roundNumber": 2,
                "name": "Final",
                "gameweek": 11,
                "isComplete": False,
                "matches": [
                    match("m3", player(A, 1, 45), player(C, 2, 50)),
                ],
            },
        ],
        "winnerId": None,
    }


def four_player_tournament(current_gameweek: int = 11) -> Tournament:
    return Tournament.from_dict(
        TOURNAMENT_ID, four_player_tournament_doc(current_gameweek)
    )


def bye_tournament_doc() -> dict[str, Any]:
    """Three entries in a four-slot bracket; the top seed has a bye."""
    return {
        "fplLeagueId": LEAGUE_ID,
        "currentRound": 1,
        "currentGameweek": 9,
        "totalRounds": 2,
        "status": "active",
        "participants": [
            participant(A, "Alpha", 1),
            participant(B, "Bravo", 2),
            participant(C, "Charlie", 3),
        ],
        "rounds": [
            {
                "roundNumber": 1,
                "name": "Semi-Finals",
                "gameweek": 10,
                "isComplete": False,
                "matches": [
                    match("m1", player(A, 1), winner_id=A, is_bye=True),
                    match("m2", player(B, 2), player(C, 3)),
                ],
            },
            {
                "roundNumber": 2,
                "name": "Final",
                "gameweek": 11,
                "isComplete": False,
                "matches": [match("m3")],
            },
        ],
    }
