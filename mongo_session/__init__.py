"""MongoDB session store with dependency injection."""
import logging
import sys
from typing import Optional

from pymongo import MongoClient

from mongo_session.config.settings import Config, get_config
from mongo_session.domain.entities import SessionContext, SessionRecord
from mongo_session.domain.exceptions import (
    DeadlineExceeded,
    OperationCancelled,
    RefreshIncompleteError,
    SessionDecodeError,
    SessionEncodeError,
    SessionStoreError,
    StoreBootstrapError,
)
from mongo_session.domain.interfaces import IManagerStore, ISessionStore
from mongo_session.infrastructure.mongo_client import MongoClientFactory
from mongo_session.infrastructure.repositories import MongoManagerStore, MongoSessionStore

__all__ = [
    "create_manager_store",
    "IManagerStore",
    "ISessionStore",
    "MongoManagerStore",
    "MongoSessionStore",
    "SessionContext",
    "SessionRecord",
    "SessionStoreError",
    "StoreBootstrapError",
    "SessionEncodeError",
    "SessionDecodeError",
    "RefreshIncompleteError",
    "OperationCancelled",
    "DeadlineExceeded",
]


def create_manager_store(
    config_class: Optional[type[Config]] = None,
    client: Optional[MongoClient] = None
) -> MongoManagerStore:
    """
    Create a bootstrapped session manager store.
    
    Args:
        config_class: Optional configuration class (for testing)
        client: Optional MongoDB client owned by the caller; the shared
            factory client is used when omitted
        
    Returns:
        MongoManagerStore with its expiry index in place
        
    Raises:
        ValueError: If the configuration is invalid
        StoreBootstrapError: If the expiry index cannot be created
    """
    config = config_class or get_config()
    _configure_logging(config)
    _logger = logging.getLogger(__name__)
    
    config.validate()
    
    mongo_client = client or MongoClientFactory.get_client(config=config)
    try:
        store = MongoManagerStore.from_client(mongo_client, config.MONGO_DATABASE, config.MONGO_COLLECTION)
    except StoreBootstrapError:
        _logger.critical("Session store bootstrap failed; refusing to start without expiry index")
        raise
    
    _logger.info(f"Session store ready on {config.MONGO_DATABASE}.{config.MONGO_COLLECTION}")
    return store


def _configure_logging(config: type[Config]) -> None:
    """Configure application logging."""
    logging.basicConfig(
        level=logging.INFO if not config.DEBUG else logging.DEBUG,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        stream=sys.stdout,
    )
