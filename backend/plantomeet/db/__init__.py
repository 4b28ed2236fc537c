from plantomeet.db.base import Base
from plantomeet.db.session import get_db, engine, SessionLocal
from plantomeet.db.tables import ALL_TABLE_NAMES

__all__ = ["get_db", "engine", "SessionLocal", "Base", "ALL_TABLE_NAMES"]
