"""
Configuration and environment handling for Endurank.
"""
import os
from typing import Optional

from dotenv import load_dotenv
from pydantic import BaseModel, Field

# Load environment variables
load_dotenv()


class MySQLConfig(BaseModel):
    """MySQL document store configuration."""
    host: str = Field(default_factory=lambda: os.getenv("ENDURANK_MYSQL_HOST", "localhost"))
    port: int = Field(default_factory=lambda: int(os.getenv("ENDURANK_MYSQL_PORT", "3306")))
    user: str = Field(default_factory=lambda: os.getenv("ENDURANK_MYSQL_USER", "root"))
    password: str = Field(default_factory=lambda: os.getenv("ENDURANK_MYSQL_PASSWORD", ""))
    database: str = Field(default_factory=lambda: os.getenv("ENDURANK_MYSQL_DATABASE", "endurank"))


class StoreConfig(BaseModel):
    """Retry policy for catalog store reads."""
    retry_attempts: int = Field(default=3, description="Attempts before a read is given up")
    retry_min_wait: float = Field(default=2.0, description="Minimum backoff in seconds")
    retry_max_wait: float = Field(default=10.0, description="Maximum backoff in seconds")


class MatchingConfig(BaseModel):
    """Duplicate detection configuration."""
    similarity_threshold: int = Field(
        default_factory=lambda: int(os.getenv("ENDURANK_SIMILARITY_THRESHOLD", "85")),
        ge=0,
        le=100,
        description="Minimum similarity percentage for a fuzzy match",
    )


class ScoringConfig(BaseModel):
    """Endurank weights and defaults."""
    rating_weight: float = Field(default=0.6)
    value_weight: float = Field(default=0.3)
    cost_weight: float = Field(default=0.1)
    default_cost_sensitivity: float = Field(
        default=0.5,
        ge=0,
        le=1,
        description="Cost sensitivity used when no user preference is known",
    )


class SyncConfig(BaseModel):
    """Race ingestion configuration."""
    stale_after_days: int = Field(default=7, description="Re-sync races older than this")
    default_country: str = Field(default="USA")


class Config(BaseModel):
    """Main configuration."""
    mysql: MySQLConfig = Field(default_factory=MySQLConfig)
    store: StoreConfig = Field(default_factory=StoreConfig)
    matching: MatchingConfig = Field(default_factory=MatchingConfig)
    scoring: ScoringConfig = Field(default_factory=ScoringConfig)
    sync: SyncConfig = Field(default_factory=SyncConfig)


# Singleton config instance
_config: Optional[Config] = None


def get_config() -> Config:
    """Get or create the singleton config instance."""
    global _config
    if _config is None:
        _config = Config()
    return _config


def reset_config() -> None:
    """Drop the cached config so the next call re-reads the environment."""
    global _config
    _config = None
