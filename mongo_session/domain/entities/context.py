"""Request-scoped context carried into storage calls."""
import threading
import time
from contextlib import nullcontext
from typing import Any, ContextManager, Dict, Optional

import pymongo

from mongo_session.domain.exceptions import DeadlineExceeded, OperationCancelled


class SessionContext:
    """
    Cancellation and deadline carrier for one request.
    
    The deadline is fixed when the context is created. Every storage call
    issued on behalf of the request checks the context first and runs under
    ``pymongo.timeout`` with whatever time is left.
    """
    
    def __init__(self, timeout: Optional[float] = None, values: Optional[Dict[str, Any]] = None):
        """
        Initialize the context.
        
        Args:
            timeout: Seconds until the deadline, or None for no deadline
            values: Opaque request-scoped values, never interpreted here
        """
        if timeout is not None and timeout < 0:
            raise ValueError(f"timeout must be non-negative, got {timeout}")
        self.values: Dict[str, Any] = values if values is not None else {}
        self._deadline = time.monotonic() + timeout if timeout is not None else None
        self._cancelled = threading.Event()
    
    @classmethod
    def background(cls) -> "SessionContext":
        """Context with no deadline that is never cancelled by the store."""
        return cls()
    
    @property
    def cancelled(self) -> bool:
        return self._cancelled.is_set()
    
    def cancel(self) -> None:
        """Cancel the context; subsequent storage calls fail fast."""
        self._cancelled.set()
    
    def remaining(self) -> Optional[float]:
        """Seconds left before the deadline, or None when there is no deadline."""
        if self._deadline is None:
            return None
        return max(0.0, self._deadline - time.monotonic())
    
    def check(self) -> None:
        """
        Raise if the request should not reach storage any more.
        
        Raises:
            OperationCancelled: cancel() was called
            DeadlineExceeded: the deadline has passed
        """
        if self._cancelled.is_set():
            raise OperationCancelled("Request context was cancelled")
        remaining = self.remaining()
        if remaining is not None and remaining <= 0:
            raise DeadlineExceeded("Request context deadline exceeded")
    
    def storage_timeout(self) -> ContextManager:
        """Bound a storage call by the remaining deadline."""
        remaining = self.remaining()
        if remaining is None:
            return nullcontext()
        return pymongo.timeout(remaining)
