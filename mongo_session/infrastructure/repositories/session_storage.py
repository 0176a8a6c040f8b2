"""MongoDB-based session storage implementation."""
import logging
from datetime import datetime, timezone
from threading import Lock
from typing import Any, Callable, Dict, Optional, Tuple

from pymongo import ASCENDING, MongoClient
from pymongo.collection import Collection
from pymongo.errors import PyMongoError

from mongo_session.domain.entities.context import SessionContext
from mongo_session.domain.entities.session_record import SessionRecord
from mongo_session.domain.exceptions import (
    DeadlineExceeded,
    OperationCancelled,
    RefreshIncompleteError,
    StoreBootstrapError,
)
from mongo_session.domain.interfaces.session_storage import IManagerStore, ISessionStore
from mongo_session.utils.value_codec import decode_values, encode_values

Clock = Callable[[], datetime]

# Seconds MongoDB waits after expired_at before the TTL monitor removes a record
EXPIRE_AFTER_SECONDS = 1


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def _upsert_record(collection: Collection, ctx: SessionContext, record: SessionRecord) -> None:
    """Write the full record under its ID, creating it if needed."""
    ctx.check()
    with ctx.storage_timeout():
        collection.update_one({"_id": record.id}, record.to_update(), upsert=True)


class MongoManagerStore(IManagerStore):
    """
    MongoDB-based session manager.

    Follows Repository Pattern and Single Responsibility Principle.
    Holds no per-session state: every operation is a round trip to the
    collection. Expired records are hidden on read and removed by a TTL
    index on ``expired_at``.
    """

    def __init__(self, collection: Collection, clock: Optional[Clock] = None):
        """
        Initialize the manager and ensure the expiry index exists.

        Args:
            collection: Session collection (Dependency Injection, not owned)
            clock: Callable returning the current aware UTC datetime

        Raises:
            StoreBootstrapError: If the expiry index cannot be created
        """
        self._collection = collection
        self._clock = clock or utc_now
        self._logger = logging.getLogger(__name__)
        self._ensure_expiry_index()

    @classmethod
    def from_client(
        cls,
        client: MongoClient,
        db_name: str,
        collection_name: str,
        clock: Optional[Clock] = None
    ) -> "MongoManagerStore":
        """
        Create a manager store on a collection of an existing client.

        Args:
            client: MongoDB client owned by the caller
            db_name: Database name
            collection_name: Collection name
            clock: Optional clock override
        """
        return cls(client[db_name][collection_name], clock=clock)

    def _ensure_expiry_index(self) -> None:
        try:
            self._collection.create_index(
                [("expired_at", ASCENDING)],
                expireAfterSeconds=EXPIRE_AFTER_SECONDS,
            )
            self._logger.info(f"Expiry index ensured on {self._collection.name}.expired_at")
        except PyMongoError as e:
            self._logger.critical(f"Failed to create expiry index on {self._collection.name}: {e}")
            raise StoreBootstrapError(f"Cannot create expiry index: {e}") from e

    def _new_store(
        self,
        ctx: SessionContext,
        sid: str,
        expired: int,
        values: Optional[Dict[str, Any]] = None
    ) -> "MongoSessionStore":
        return MongoSessionStore(ctx, self._collection, sid, expired, values=values, clock=self._clock)

    def _find_live(self, ctx: SessionContext, sid: str) -> Optional[SessionRecord]:
        """
        Fetch the record for a session ID, ignoring expired records.

        Args:
            ctx: Request context
            sid: Session ID

        Returns:
            The live record, or None if absent or expired
        """
        ctx.check()
        try:
            with ctx.storage_timeout():
                document = self._collection.find_one({"_id": sid})
        except PyMongoError as e:
            self._logger.error(f"Failed to get session {sid}: {e}")
            raise

        if document is None:
            return None

        record = SessionRecord.from_document(document)
        if record.is_expired(self._clock()):
            # The TTL monitor has not caught up yet
            self._logger.debug(f"Session {sid} expired at {record.expired_at.isoformat()}")
            return None
        return record

    def check(self, ctx: SessionContext, sid: str) -> bool:
        return self._find_live(ctx, sid) is not None

    def create(self, ctx: SessionContext, sid: str, expired: int) -> "MongoSessionStore":
        self._logger.debug(f"Session {sid} created with expiry {expired}s")
        return self._new_store(ctx, sid, expired)

    def update(self, ctx: SessionContext, sid: str, expired: int) -> "MongoSessionStore":
        """
        Load a session and slide its expiry forward.

        A missing or expired session yields a fresh empty store, exactly as
        create() would; callers cannot tell the two cases apart.

        Args:
            ctx: Request context
            sid: Session ID
            expired: Expiry in seconds

        Returns:
            Store pre-loaded with the stored values

        Raises:
            SessionDecodeError: If the stored value is malformed
        """
        record = self._find_live(ctx, sid)
        if record is None:
            return self._new_store(ctx, sid, expired)

        values = decode_values(record.value)

        expired_at = SessionRecord.expiry_from(self._clock(), expired)
        ctx.check()
        try:
            with ctx.storage_timeout():
                self._collection.update_one({"_id": sid}, {"$set": {"expired_at": expired_at}})
        except PyMongoError as e:
            self._logger.error(f"Failed to extend session {sid}: {e}")
            raise

        self._logger.debug(f"Session {sid} loaded with {len(values)} values, expires {expired_at.isoformat()}")
        return self._new_store(ctx, sid, expired, values)

    def refresh(self, ctx: SessionContext, old_sid: str, sid: str, expired: int) -> "MongoSessionStore":
        """
        Rotate a session to a new ID, keeping its values.

        The new record is written before the old one is deleted. The two
        writes are not atomic: if the delete fails both IDs stay live.

        Args:
            ctx: Request context
            old_sid: Current session ID
            sid: New session ID
            expired: Expiry in seconds

        Returns:
            Store bound to the new ID

        Raises:
            SessionDecodeError: If the stored value is malformed (nothing is written)
            RefreshIncompleteError: If the new record was written but the old one remains
        """
        record = self._find_live(ctx, old_sid)
        if record is None:
            return self._new_store(ctx, sid, expired)

        values = decode_values(record.value)

        rotated = SessionRecord(
            id=sid,
            value=record.value,
            expired_at=SessionRecord.expiry_from(self._clock(), expired),
        )
        try:
            _upsert_record(self._collection, ctx, rotated)
        except PyMongoError as e:
            self._logger.error(f"Failed to write rotated session {sid}: {e}")
            raise

        if old_sid != sid:
            try:
                self._delete_record(ctx, old_sid)
            except (PyMongoError, OperationCancelled, DeadlineExceeded) as e:
                self._logger.error(f"Session {old_sid} rotated to {sid} but old record remains: {e}")
                raise RefreshIncompleteError(old_sid, sid) from e

        self._logger.debug(f"Session {old_sid} rotated to {sid}")
        return self._new_store(ctx, sid, expired, values)

    def _delete_record(self, ctx: SessionContext, sid: str) -> None:
        ctx.check()
        with ctx.storage_timeout():
            self._collection.delete_one({"_id": sid})

    def delete(self, ctx: SessionContext, sid: str) -> None:
        try:
            self._delete_record(ctx, sid)
            self._logger.debug(f"Session {sid} deleted")
        except PyMongoError as e:
            self._logger.error(f"Failed to delete session {sid}: {e}")
            raise

    def close(self) -> None:
        """Nothing to release; the client belongs to the caller."""
        pass


class MongoSessionStore(ISessionStore):
    """
    In-memory values of one session, persisted on save().

    A lock guards the value bag so one instance may be shared across
    threads. Reads take the same exclusive lock as writes; there is no
    shared read lock. Separate instances for the same session ID are
    independent and their saves overwrite each other (last write wins).
    """

    def __init__(
        self,
        ctx: SessionContext,
        collection: Collection,
        sid: str,
        expired: int,
        values: Optional[Dict[str, Any]] = None,
        clock: Optional[Clock] = None
    ):
        """
        Initialize the session store.

        Args:
            ctx: Context of the originating request
            collection: Session collection
            sid: Session ID
            expired: Expiry in seconds applied on every save
            values: Initial values (copied)
            clock: Callable returning the current aware UTC datetime
        """
        self._ctx = ctx
        self._collection = collection
        self._sid = sid
        self._expired = expired
        self._values: Dict[str, Any] = dict(values) if values else {}
        self._clock = clock or utc_now
        self._lock = Lock()
        self._logger = logging.getLogger(__name__)

    def context(self) -> SessionContext:
        return self._ctx

    def session_id(self) -> str:
        return self._sid

    def set(self, key: str, value: Any) -> None:
        with self._lock:
            self._values[key] = value

    def get(self, key: str) -> Tuple[Any, bool]:
        with self._lock:
            if key in self._values:
                return self._values[key], True
            return None, False

    def delete(self, key: str) -> Optional[Any]:
        with self._lock:
            return self._values.pop(key, None)

    def flush(self) -> None:
        """
        Clear all values, then save.

        The clear is not undone if the save fails; retry save() to bring
        storage back in line with memory.
        """
        with self._lock:
            self._values = {}
        self.save()

    def save(self) -> None:
        """
        Persist the values with expiry ``now + expired``.

        The values are serialized under the lock and written after it is
        released, overwriting whatever is stored for this session ID.

        Raises:
            SessionEncodeError: If a value cannot be serialized (nothing is written)
        """
        with self._lock:
            value = encode_values(self._values)

        record = SessionRecord(
            id=self._sid,
            value=value,
            expired_at=SessionRecord.expiry_from(self._clock(), self._expired),
        )
        try:
            _upsert_record(self._collection, self._ctx, record)
        except PyMongoError as e:
            self._logger.error(f"Failed to save session {self._sid}: {e}")
            raise
        self._logger.debug(f"Session {self._sid} saved, expires {record.expired_at.isoformat()}")
