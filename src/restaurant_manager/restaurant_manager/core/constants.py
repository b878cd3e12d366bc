"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

# First year covered by the multi-year vacation carryover.
VACATION_YEAR_MIN = 2025
DEFAULT_VACATION_ALLOWANCE = 20

DEFAULT_SESSION_DAYS = 7
DEFAULT_LIST_LIMIT = 200
