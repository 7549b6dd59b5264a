"""
Centralized configuration management for the equipment analytics engine.

Handles environment variables, backend and state-store config, and the
thresholds used by the scoring and insight code.
"""

import logging
import os
from dataclasses import dataclass
from typing import Optional


def _env_flag(name: str, default: str = "false") -> bool:
    return os.getenv(name, default).strip().lower() in {"1", "true", "yes", "on"}


@dataclass
class BackendConfig:
    """Connection settings for the dataset backend service."""

    base_url: str = "http://127.0.0.1:8000/api"
    timeout: float = 30.0

    @classmethod
    def from_env(cls) -> "BackendConfig":
        """Load backend config from environment variables."""
        return cls(
            base_url=os.getenv("BACKEND_URL", "http://127.0.0.1:8000/api").rstrip("/"),
            timeout=float(os.getenv("BACKEND_TIMEOUT", "30")),
        )


@dataclass
class DatabaseConfig:
    """Durable key-value store configuration (favorites, session token)."""

    database: str = "equipment_state.db"
    driver: str = "sqlite"  # sqlite, postgresql, mysql
    host: str = "localhost"
    port: int = 5432
    username: str = ""
    password: str = ""

    @property
    def connection_string(self) -> str:
        """Generate SQLAlchemy connection string."""
        if self.driver == "sqlite":
            return f"sqlite:///{self.database}"

        return (
            f"{self.driver}://{self.username}:{self.password}"
            f"@{self.host}:{self.port}/{self.database}"
        )

    @classmethod
    def from_env(cls) -> "DatabaseConfig":
        """Load database config from environment variables."""
        return cls(
            database=os.getenv("DB_NAME", "equipment_state.db"),
            driver=os.getenv("DB_DRIVER", "sqlite"),
            host=os.getenv("DB_HOST", "localhost"),
            port=int(os.getenv("DB_PORT", "5432")),
            username=os.getenv("DB_USER", ""),
            password=os.getenv("DB_PASSWORD", ""),
        )


@dataclass
class AppConfig:
    """Application-level configuration."""

    # Flowrate status bands
    high_flowrate_threshold: float = 200.0
    medium_flowrate_threshold: float = 150.0

    # Scoring
    efficiency_reference_flowrate: float = 250.0
    score_weight: float = 33.33

    # View behaviour
    reapply_sort_on_filter: bool = False
    default_view_mode: str = "table"
    history_limit: int = 5

    log_level: str = "INFO"

    @classmethod
    def from_env(cls) -> "AppConfig":
        """Load app config from environment variables."""
        return cls(
            high_flowrate_threshold=float(os.getenv("HIGH_FLOWRATE_THRESHOLD", "200")),
            medium_flowrate_threshold=float(os.getenv("MEDIUM_FLOWRATE_THRESHOLD", "150")),
            efficiency_reference_flowrate=float(os.getenv("EFFICIENCY_REFERENCE_FLOWRATE", "250")),
            score_weight=float(os.getenv("SCORE_WEIGHT", "33.33")),
            reapply_sort_on_filter=_env_flag("REAPPLY_SORT_ON_FILTER"),
            default_view_mode=os.getenv("DEFAULT_VIEW_MODE", "table"),
            history_limit=int(os.getenv("HISTORY_LIMIT", "5")),
            log_level=os.getenv("LOG_LEVEL", "INFO"),
        )


class Config:
    """Global configuration manager."""

    _instance: Optional["Config"] = None

    def __init__(self):
        self.backend = BackendConfig.from_env()
        self.db = DatabaseConfig.from_env()
        self.app = AppConfig.from_env()

    @classmethod
    def load(cls) -> "Config":
        """Singleton pattern - load or return existing config."""
        if cls._instance is None:
            cls._instance = cls()
        return cls._instance

    @classmethod
    def reset(cls) -> None:
        """Drop the cached instance so the next load re-reads the environment."""
        cls._instance = None


def configure_logging(level: Optional[str] = None) -> None:
    """Apply the configured log level to the root logger."""
    logging.basicConfig(
        level=(level or Config.load().app.log_level).upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
