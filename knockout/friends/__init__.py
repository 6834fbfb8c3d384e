"""Friend matching across shared league memberships."""

from .models import FriendInTournament, FriendStatus, LeagueMembership
from .services import get_tournament_friends
from .sources import (
    FirestoreLeagueMembershipSource,
    InMemoryLeagueMembershipSource,
    LeagueMembershipSource,
)

__all__ = [
    "FirestoreLeagueMembershipSource",
    "FriendInTournament",
    "FriendStatus",
    "InMemoryLeagueMembershipSource",
    "LeagueMembership",
    "LeagueMembershipSource",
    "get_tournament_friends",
]
