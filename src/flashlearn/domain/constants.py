"""Centralized constants for flashlearn.

All magic numbers and configuration defaults live here so every layer
imports from a single source of truth.
"""

# ---------- Scheduling (fractional days) ----------
# These are small debug-scale values (minutes rather than days).
# They are overridable through AppConfig.
RELEARN_INTERVAL = 0.0035  # ~5 minutes
GRADUATION_INTERVAL = 0.007  # ~10 minutes
FIRST_REVIEWING_INTERVAL = 0.014  # ~20 minutes
MASTERY_THRESHOLD = 0.1
MASTERY_STREAK_MINIMUM = 2

# ---------- SM-2 ----------
INITIAL_EASE_FACTOR = 2.5
MIN_EASE_FACTOR = 1.3
MIN_QUALITY = 0
MAX_QUALITY = 5
CORRECT_THRESHOLD = 3
MINUTES_PER_DAY = 24 * 60

# ---------- Review Queue ----------
DEFAULT_REVIEW_LIMIT = 20

# ---------- Progress / XP ----------
XP_MASTERY_BONUS = 10
XP_FIRST_DAY_BONUS = 5
XP_DAILY_STREAK_BONUS = 5
XP_WEEKLY_STREAK_BONUS = 50
STREAK_WEEK_LENGTH = 7
XP_PER_LEVEL_UNIT = 100

# ---------- Content limits ----------
DECK_NAME_MAX_LEN = 50
DECK_DESCRIPTION_MAX_LEN = 500
CARD_SIDE_MAX_LEN = 1000
MAX_TAGS = 10
