"""
Centralized constants for the scheduling engine and poll lifecycle (Encapsulate What Changes).

Change score weights or limits here instead of scattering literals across services and routes.
Deployment-specific values (grid hours, range limit) come from config.Settings.
"""

MINUTES_PER_HOUR = 60
MINUTES_PER_DAY = 24 * MINUTES_PER_HOUR

# Slot score: yes counts most, maybe is a weak positive, no subtracts
SCORE_YES = 2
SCORE_MAYBE = 1
SCORE_NO = -1

# Poll status values (stored as strings)
POLL_STATUS_OPEN = "open"
POLL_STATUS_FINALIZED = "finalized"

# Response availability values (stored as strings)
AVAILABILITY_YES = "yes"
AVAILABILITY_MAYBE = "maybe"
AVAILABILITY_NO = "no"

# Poll title bounds
TITLE_MAX_LENGTH = 200

# Longest single meeting a poll may ask for
MAX_DURATION_MINUTES = MINUTES_PER_DAY

# Reactions: short emoji string plus optional comment
REACTION_EMOJI_MAX_LENGTH = 16
REACTION_COMMENT_MAX_LENGTH = 500

# Calendar export (ICS)
ICS_PRODID = "-//PlanToMeet//EN"
ICS_UID_DOMAIN = "plantomeet.app"
