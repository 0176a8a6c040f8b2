"""Session record domain entity."""
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Mapping


@dataclass
class SessionRecord:
    """Persisted form of a session: id, serialized value bag, expiry timestamp."""
    
    id: str
    value: str
    expired_at: datetime
    
    def __post_init__(self):
        """Normalize the expiry timestamp."""
        # The driver hands back naive datetimes unless the client is tz_aware; they are UTC
        if self.expired_at.tzinfo is None:
            self.expired_at = self.expired_at.replace(tzinfo=timezone.utc)
    
    @classmethod
    def from_document(cls, document: Mapping[str, Any]) -> "SessionRecord":
        """Build a record from a stored document."""
        return cls(
            id=document["_id"],
            value=document.get("value") or "",
            expired_at=document["expired_at"],
        )
    
    @staticmethod
    def expiry_from(now: datetime, seconds: int) -> datetime:
        """Absolute expiry timestamp ``seconds`` after ``now``."""
        return now + timedelta(seconds=seconds)
    
    def is_expired(self, now: datetime) -> bool:
        """True once ``now`` has passed the expiry timestamp."""
        return self.expired_at < now
    
    def to_update(self) -> Dict[str, Any]:
        """Update document that writes every field of the record (upsert)."""
        return {
            "$set": {
                "value": self.value,
                "expired_at": self.expired_at,
            }
        }
