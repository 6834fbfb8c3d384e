"""Global constants for the knockout application."""

# Collection names
TOURNAMENTS_COLLECTION = "tournaments"
LEAGUE_ENTRIES_COLLECTION = "leagueEntries"
PARTICIPANT_LEAGUES_COLLECTION = "participantLeagues"

# Bracket-related constants
DEFAULT_MATCH_SIZE = 2
MIN_MATCH_SIZE = 2
MIN_PARTICIPANTS = 2
# Guards ceil() against log ratios of exact powers landing just above an integer
ROUND_COUNT_EPSILON = 1e-10

# Round names, keyed by distance from the final round
ROUND_NAMES_FROM_END = {
    0: "Final",
    1: "Semi-Finals",
    2: "Quarter-Finals",
}

# League-related constants
# FPL system leagues (overall, country, team supporters) have ids below this
SYSTEM_LEAGUE_THRESHOLD = 336
DEFAULT_FPL_SEASON = "2024-25"
