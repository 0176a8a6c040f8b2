"""Interfaces for session storage (Repository Pattern)."""
from abc import ABC, abstractmethod
from typing import Any, Optional, Tuple

from mongo_session.domain.entities.context import SessionContext


class ISessionStore(ABC):
    """In-memory value bag of one session, bound to one session ID."""
    
    @abstractmethod
    def context(self) -> SessionContext:
        """Context of the request that produced this session."""
        pass
    
    @abstractmethod
    def session_id(self) -> str:
        """Session ID this store is bound to."""
        pass
    
    @abstractmethod
    def set(self, key: str, value: Any) -> None:
        """
        Set a value in memory. Nothing is persisted until save().
        
        Args:
            key: Value key
            value: JSON-compatible value
        """
        pass
    
    @abstractmethod
    def get(self, key: str) -> Tuple[Any, bool]:
        """
        Read a value from memory.
        
        Args:
            key: Value key
            
        Returns:
            Tuple of (value, found); value is None when not found
        """
        pass
    
    @abstractmethod
    def delete(self, key: str) -> Optional[Any]:
        """
        Remove a value from memory.
        
        Args:
            key: Value key
            
        Returns:
            The removed value, or None if the key was absent
        """
        pass
    
    @abstractmethod
    def flush(self) -> None:
        """Clear every value and persist the empty session."""
        pass
    
    @abstractmethod
    def save(self) -> None:
        """Persist the current values with a fresh expiry."""
        pass


class IManagerStore(ABC):
    """Factory and registry for sessions, backed by persistent storage."""
    
    @abstractmethod
    def check(self, ctx: SessionContext, sid: str) -> bool:
        """
        Check whether a live session exists.
        
        Args:
            ctx: Request context
            sid: Session ID
            
        Returns:
            True if a record exists and has not expired
        """
        pass
    
    @abstractmethod
    def create(self, ctx: SessionContext, sid: str, expired: int) -> ISessionStore:
        """
        Create an empty session. Nothing is written until save().
        
        Args:
            ctx: Request context
            sid: Session ID
            expired: Expiry in seconds applied on every save
        """
        pass
    
    @abstractmethod
    def update(self, ctx: SessionContext, sid: str, expired: int) -> ISessionStore:
        """
        Load a session and extend its expiry; empty session if absent.
        
        Args:
            ctx: Request context
            sid: Session ID
            expired: Expiry in seconds
        """
        pass
    
    @abstractmethod
    def refresh(self, ctx: SessionContext, old_sid: str, sid: str, expired: int) -> ISessionStore:
        """
        Move a session's values to a new session ID.
        
        Args:
            ctx: Request context
            old_sid: Current session ID
            sid: New session ID
            expired: Expiry in seconds
        """
        pass
    
    @abstractmethod
    def delete(self, ctx: SessionContext, sid: str) -> None:
        """
        Delete a session; deleting an unknown ID is not an error.
        
        Args:
            ctx: Request context
            sid: Session ID
        """
        pass
    
    @abstractmethod
    def close(self) -> None:
        """Release resources owned by the store."""
        pass
