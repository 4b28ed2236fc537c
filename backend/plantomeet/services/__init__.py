from plantomeet.services.calendar_export import build_ics
from plantomeet.services.polls import InMemoryPollRepository, PollLifecycle, SqlAlchemyPollRepository

__all__ = ["build_ics", "InMemoryPollRepository", "PollLifecycle", "SqlAlchemyPollRepository"]
