"""Domain entities."""
from mongo_session.domain.entities.context import SessionContext
from mongo_session.domain.entities.session_record import SessionRecord

__all__ = ["SessionContext", "SessionRecord"]
