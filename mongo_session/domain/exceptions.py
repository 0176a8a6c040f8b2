"""Domain exceptions for the session store.

Storage driver errors are not wrapped here: they reach the caller as the
``pymongo.errors`` exception the driver raised. A missing or expired
session is never an error.
"""


class SessionStoreError(Exception):
    """Base class for session store errors."""


class StoreBootstrapError(SessionStoreError):
    """The expiry index could not be created; the store must not start."""


class SessionEncodeError(SessionStoreError):
    """The in-memory value bag could not be serialized."""


class SessionDecodeError(SessionStoreError):
    """A stored value could not be decoded into a value bag."""


class RefreshIncompleteError(SessionStoreError):
    """
    Session ID rotation committed the new record but left the old one behind.
    
    Both IDs stay live until the old record is deleted or expires.
    """
    
    def __init__(self, old_id: str, new_id: str, message: str = ""):
        self.old_id = old_id
        self.new_id = new_id
        super().__init__(
            message or f"Session {new_id} was written but {old_id} could not be removed"
        )


class OperationCancelled(SessionStoreError):
    """The request context was cancelled before a storage call."""


class DeadlineExceeded(SessionStoreError):
    """The request context deadline passed before a storage call."""
