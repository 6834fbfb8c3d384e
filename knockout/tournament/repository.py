"""Firestore read access for tournament aggregates."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, cast

from firebase_admin import firestore

from knockout.core.constants import TOURNAMENTS_COLLECTION
from knockout.errors import NotFoundError

from .models import Tournament

if TYPE_CHECKING:
    from google.cloud.firestore_v1.client import Client


def load_tournament(tournament_id: str, db: Client | None = None) -> Tournament:
    """Load a tournament with its participants, rounds and matches."""
    if db is None:
        db = firestore.client()
    doc = cast(Any, db.collection(TOURNAMENTS_COLLECTION).document(tournament_id).get())
    if not doc.exists:
        raise NotFoundError("Tournament not found.")

    data = doc.to_dict() or {}
    return Tournament.from_dict(doc.id, data)
