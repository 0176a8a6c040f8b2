"""Session store configuration with environment-based settings."""
import os
from typing import Optional
from dotenv import load_dotenv


class Config:
    """Base configuration class following Single Responsibility Principle."""
    
    # Load environment variables
    load_dotenv()
    
    # MongoDB Configuration
    MONGO_URL: str = os.getenv("MONGO_URL", "mongodb://localhost:27017")
    MONGO_DATABASE: str = os.getenv("MONGO_DATABASE", "session")
    MONGO_COLLECTION: str = os.getenv("MONGO_COLLECTION", "session")
    MONGO_MAX_POOL_SIZE: int = int(os.getenv("MONGO_MAX_POOL_SIZE", "50"))
    MONGO_SERVER_SELECTION_TIMEOUT_MS: int = int(os.getenv("MONGO_SERVER_SELECTION_TIMEOUT_MS", "5000"))
    MONGO_CONNECT_TIMEOUT_MS: int = int(os.getenv("MONGO_CONNECT_TIMEOUT_MS", "10000"))
    
    # Sessions
    SESSION_EXPIRY: int = int(os.getenv("SESSION_EXPIRY", "7200"))  # 2 hours default
    
    # Application
    DEBUG: bool = os.getenv("DEBUG", "false").lower() == "true"
    TESTING: bool = False
    
    @classmethod
    def validate(cls) -> None:
        """Validate required configuration values."""
        required_vars = [
            ("MONGO_URL", cls.MONGO_URL),
            ("MONGO_DATABASE", cls.MONGO_DATABASE),
            ("MONGO_COLLECTION", cls.MONGO_COLLECTION),
        ]
        
        missing = [name for name, value in required_vars if not value]
        if missing:
            raise ValueError(f"Missing required environment variables: {', '.join(missing)}")
        
        if cls.SESSION_EXPIRY <= 0:
            raise ValueError(f"SESSION_EXPIRY must be positive, got {cls.SESSION_EXPIRY}")


class DevelopmentConfig(Config):
    """Development configuration."""
    DEBUG = True


class ProductionConfig(Config):
    """Production configuration."""
    DEBUG = False


class TestingConfig(Config):
    """Testing configuration."""
    TESTING = True
    MONGO_DATABASE = "session_test"  # Keep test sessions out of the real database


def get_config(env: Optional[str] = None) -> type[Config]:
    """Factory method to get configuration based on environment."""
    env = (env or os.getenv("SESSION_ENV", "development")).lower()
    
    config_map = {
        "development": DevelopmentConfig,
        "production": ProductionConfig,
        "testing": TestingConfig,
    }
    
    return config_map.get(env, DevelopmentConfig)
