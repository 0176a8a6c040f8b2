"""Domain interfaces following Dependency Inversion Principle."""

from mongo_session.domain.interfaces.session_storage import IManagerStore, ISessionStore

__all__ = [
    "IManagerStore",
    "ISessionStore",
]
