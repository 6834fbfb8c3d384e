"""Bracket sizing and round naming for N-way knockout brackets."""

from __future__ import annotations

import math

from knockout.core.constants import (
    MIN_MATCH_SIZE,
    MIN_PARTICIPANTS,
    ROUND_COUNT_EPSILON,
    ROUND_NAMES_FROM_END,
)
from knockout.errors import ValidationError

from .models import BracketPreviewInfo


def calculate_bracket_preview(
    participant_count: int, match_size: int
) -> BracketPreviewInfo:
    """Calculate the bracket structure for ``participant_count`` entries.

    The bracket is sized to the smallest power of ``match_size`` that holds
    every entry; the difference is filled with byes. Round 1 has the most
    matches and the final round always has exactly one.

    Fewer than two entries cannot hold a match, so a zero-value preview is
    returned rather than an error.
    """
    if match_size < MIN_MATCH_SIZE:
        raise ValidationError(f"Match size must be at least {MIN_MATCH_SIZE}.")
    if participant_count < MIN_PARTICIPANTS:
        return BracketPreviewInfo()

    # log(27) / log(3) evaluates to 3.0000000000000004
    raw_rounds = math.log(participant_count) / math.log(match_size)
    rounds = math.ceil(raw_rounds - ROUND_COUNT_EPSILON)
    # The epsilon can swallow a count just above a very large exact power.
    if match_size**rounds < participant_count:
        rounds += 1

    total_slots = match_size**rounds
    matches_per_round = [match_size ** (rounds - r) for r in range(1, rounds + 1)]

    return BracketPreviewInfo(
        rounds=rounds,
        total_slots=total_slots,
        bye_count=total_slots - participant_count,
        matches_per_round=matches_per_round,
    )


def get_round_name(round_number: int, total_rounds: int) -> str:
    """Get the display name of a round, counted back from the final."""
    rounds_from_end = total_rounds - round_number
    return ROUND_NAMES_FROM_END.get(rounds_from_end, f"Round {round_number}")
