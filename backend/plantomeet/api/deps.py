"""
Dependencies injected into routes: a PollLifecycle bound to the request's DB session.
"""
from fastapi import Depends
from sqlalchemy.orm import Session

from plantomeet.db.session import get_db
from plantomeet.services.polls import PollLifecycle, SqlAlchemyPollRepository


def get_lifecycle(db: Session = Depends(get_db)) -> PollLifecycle:
    return PollLifecycle(SqlAlchemyPollRepository(db))
