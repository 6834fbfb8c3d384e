"""Routes for the tournament blueprint.

All endpoints are read only and return JSON.
"""

from __future__ import annotations

from typing import Any

from firebase_admin import firestore
from flask import current_app, jsonify, request

from knockout.core.constants import DEFAULT_MATCH_SIZE
from knockout.errors import NotFoundError, ValidationError
from knockout.friends.services import get_tournament_friends
from knockout.friends.sources import FirestoreLeagueMembershipSource

from . import bp
from .bracket import calculate_bracket_preview, get_round_name
from .matchups import build_latest_matchups, get_tournament_matchups
from .repository import load_tournament
from .resolver import resolve_from_match
from .utils import (
    calculate_remaining_participants,
    find_eliminated_round,
    get_next_opponent_previews,
    get_user_status,
)


def _int_arg(name: str, required: bool = False) -> int | None:
    """Read an integer query parameter."""
    raw = request.args.get(name)
    if raw is None or raw == "":
        if required:
            raise ValidationError(f"Missing required parameter '{name}'.")
        return None
    try:
        return int(raw)
    except ValueError:
        raise ValidationError(f"Parameter '{name}' must be an integer.") from None


def _bool_arg(name: str) -> bool:
    return (request.args.get(name) or "false").lower() in ["true", "1", "t"]


def _membership_source(db: Any) -> FirestoreLeagueMembershipSource:
    return FirestoreLeagueMembershipSource(db, season=current_app.config["FPL_SEASON"])


@bp.route("/bracket-preview", methods=["GET"])
def bracket_preview() -> Any:
    """Preview the bracket shape for a number of entries."""
    participants = _int_arg("participants", required=True)
    size = _int_arg("match_size")
    match_size = DEFAULT_MATCH_SIZE if size is None else size
    preview = calculate_bracket_preview(participants, match_size)
    return jsonify(preview.to_dict())


@bp.route("/round-name", methods=["GET"])
def round_name() -> Any:
    """Name a round by its distance from the final."""
    round_number = _int_arg("round", required=True)
    total_rounds = _int_arg("total", required=True)
    if round_number < 1 or total_rounds < 1:
        raise ValidationError("Round numbers start at 1.")
    return jsonify(name=get_round_name(round_number, total_rounds))


@bp.route("/<string:tournament_id>/matchups", methods=["GET"])
def tournament_matchups(tournament_id: str) -> Any:
    """List matchups for a round, or each participant's latest matchup."""
    db = firestore.client()
    tournament = load_tournament(tournament_id, db=db)

    user_id = _int_arg("user_id")
    matchups = get_tournament_matchups(
        tournament,
        round=_int_arg("round"),
        friends_only=_bool_arg("friends_only"),
        user_id=user_id,
        league_id=tournament.fpl_league_id if user_id else None,
        source=_membership_source(db) if user_id else None,
    )
    return jsonify(matchups=[m.to_dict() for m in matchups])


@bp.route("/<string:tournament_id>/friends", methods=["GET"])
def tournament_friends(tournament_id: str) -> Any:
    """List participants sharing a league with the user."""
    db = firestore.client()
    tournament = load_tournament(tournament_id, db=db)
    user_id = _int_arg("user_id", required=True)

    friends = get_tournament_friends(
        tournament.id,
        tournament.fpl_league_id,
        user_id,
        tournament.participants,
        source=_membership_source(db),
    )
    return jsonify(friends=[f.to_dict() for f in friends])


@bp.route("/<string:tournament_id>/next-opponent", methods=["GET"])
def next_opponent(tournament_id: str) -> Any:
    """Preview the matches deciding an entry's next opponent."""
    tournament = load_tournament(tournament_id, db=firestore.client())
    entry_id = _int_arg("entry_id", required=True)

    latest = next(
        (m for m in build_latest_matchups(tournament) if m.participant.entry_id == entry_id),
        None,
    )
    if latest is None or latest.match is None or latest.round is None:
        raise NotFoundError("Entry not found in tournament.")

    previews = get_next_opponent_previews(
        tournament, latest.match, latest.round.round_number
    )
    return jsonify(
        preview=previews[0].to_dict() if previews else None,
        previews=[p.to_dict() for p in previews],
    )


@bp.route("/<string:tournament_id>/status", methods=["GET"])
def tournament_status(tournament_id: str) -> Any:
    """Summarise how many entries remain, and an entry's standing if given."""
    tournament = load_tournament(tournament_id, db=firestore.client())
    payload: dict[str, Any] = {
        "status": tournament.status.value,
        "currentRound": tournament.current_round,
        "currentRoundName": get_round_name(
            tournament.current_round, tournament.total_rounds
        ),
        "remainingParticipants": calculate_remaining_participants(tournament.rounds),
    }

    entry_id = _int_arg("entry_id")
    if entry_id is not None:
        eliminated_round = find_eliminated_round(tournament.rounds, entry_id)
        payload["entryStatus"] = get_user_status(
            eliminated_round, tournament.is_complete
        ).value
        payload["eliminatedRound"] = eliminated_round

    return jsonify(payload)


@bp.route("/<string:tournament_id>/rounds/<int:round_number>/projection", methods=["GET"])
def round_projection(tournament_id: str, round_number: int) -> Any:
    """Project the winner of every match in a round from current scores."""
    tournament = load_tournament(tournament_id, db=firestore.client())
    rnd = tournament.get_round(round_number)
    if rnd is None:
        raise NotFoundError("Round not found.")

    projections = []
    for match in rnd.matches:
        resolution = resolve_from_match(match)
        projections.append(
            {"matchId": match.id, "resolution": resolution.to_dict() if resolution else None}
        )
    return jsonify(roundNumber=rnd.round_number, projections=projections)
