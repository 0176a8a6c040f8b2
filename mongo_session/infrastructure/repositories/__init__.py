"""Repository implementations (Infrastructure Layer).

These implement the domain interfaces defined in mongo_session.domain.interfaces.
"""
from mongo_session.infrastructure.repositories.session_storage import (
    MongoManagerStore,
    MongoSessionStore,
)

__all__ = [
    "MongoManagerStore",
    "MongoSessionStore",
]
