"""Constants and defaults.

Note: Keep thresholds here to avoid magic numbers spread across calculators.
"""

DEFAULT_LEADERBOARD_LIMIT = 50
DEFAULT_LEADERBOARD_OFFSET = 0

PERFECT_ATTENDANCE = 100.0
POOR_ATTENDANCE_BELOW = 60.0

# Epic status bands (lower bounds, inclusive)
EPIC_EXCELLENT_FROM = 90.0
EPIC_GOOD_FROM = 75.0
EPIC_FAIR_FROM = 60.0

# Drop-out radar
DROP_OUT_MIN_CONSECUTIVE = 3
SEVERITY_HIGH_FROM = 5
SEVERITY_CRITICAL_FROM = 7

RANK_BADGES = {1: "🥇", 2: "🥈", 3: "🥉"}

NO_TOP_STREAK_NAMES = ["-"]

DEFAULT_DATA_SOURCE = "attendance-calculations"
