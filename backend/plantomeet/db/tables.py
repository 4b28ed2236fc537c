"""
Single source of truth for database tables that exist after migrations (001-002).

Use these names when writing raw SQL. Child tables cascade from polls.
"""
# All tables that exist in the DB. Must match models and migrations.
ALL_TABLE_NAMES = (
    "polls",
    "time_slots",
    "responses",
    "participants",
    "reactions",
)
