"""
Award-independent rule constants. Award-specific percentages and amounts live
in the award catalog; these are the statutory and engine-wide values.
"""

# Superannuation guarantee, as of July 2024
SUPERANNUATION_RATE = 0.115

STANDARD_WEEKLY_HOURS = 38

# Weekday time periods, minutes since midnight
ORDINARY_WINDOW = (6 * 60, 18 * 60)
EVENING_WINDOW = (18 * 60, 21 * 60)
NIGHT_WINDOWS = ((21 * 60, 24 * 60), (0, 6 * 60))

# Daily overtime for non-casual employees
DAILY_OVERTIME_THRESHOLD_HOURS = 8
OVERTIME_FIRST_TIER_HOURS = 2

# Recall to work while on call
RECALL_MINIMUM_HOURS = 2
RECALL_RATE_MULTIPLIER = 1.5

# Disturbance during a sleepover
DISTURBANCE_MINIMUM_HOURS = 1
DISTURBANCE_RATE_MULTIPLIER = 1.5

# First aid is paid weekly; a shift gets one working day's share
WORKING_DAYS_PER_WEEK = 5

# Roles that attract the per-hour leadership allowance
LEADERSHIP_ROLES = frozenset({"lead_educator", "educational_leader", "team_leader"})

# Used when an award has no definition for a detected condition
DEFAULT_ON_CALL_ALLOWANCE = 15.42         # per day
DEFAULT_SLEEPOVER_ALLOWANCE = 69.85       # per sleepover
DEFAULT_BROKEN_SHIFT_ALLOWANCE = 18.46    # per shift
DEFAULT_HIGHER_DUTIES_RATE = 2.50         # per hour
DEFAULT_VEHICLE_RATE_PER_KM = 0.96

# Shift condition heuristics
BROKEN_SHIFT_BREAK_MINUTES = 60           # breaks longer than this suggest a broken shift
ASSUMED_PAID_BREAK_MINUTES = 30           # part of a long break that is not the gap
SLEEPOVER_MIN_OVERNIGHT_MINUTES = 8 * 60
INFERRED_CONFIDENCE = 0.6

# Engagement bounds used for validation warnings
LONG_SHIFT_NET_MINUTES = 10 * 60
MINIMUM_ENGAGEMENT_MINUTES = 3 * 60
