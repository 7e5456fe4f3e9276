"""SQLAlchemy-backed database adapter: engine factory, dialects, client."""

from .client import SqlAlchemyDatabase
from .engine import make_engine

__all__ = ["SqlAlchemyDatabase", "make_engine"]
