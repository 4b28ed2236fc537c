"""
Polls: lifecycle over a pluggable PollRepository (SQLAlchemy or in-memory).
The scheduling math lives in services.scheduling; nothing here reimplements it.
"""
from plantomeet.services.polls.lifecycle import PollLifecycle
from plantomeet.services.polls.memory_repository import InMemoryPollRepository
from plantomeet.services.polls.pending import PendingVotes
from plantomeet.services.polls.repository import PollRepository
from plantomeet.services.polls.sql_repository import SqlAlchemyPollRepository
from plantomeet.services.polls.types import Participant, PollRecord, Reaction

__all__ = [
    "InMemoryPollRepository",
    "Participant",
    "PendingVotes",
    "PollLifecycle",
    "PollRecord",
    "PollRepository",
    "Reaction",
    "SqlAlchemyPollRepository",
]
