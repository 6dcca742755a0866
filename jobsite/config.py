"""
Configuration and environment handling for jobsite.
"""
import os
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv
from pydantic import BaseModel, Field

from .models.project import UserRole

# Load environment variables
load_dotenv()


def _env_bool(name: str, default: str) -> bool:
    return os.getenv(name, default).strip().lower() in ("1", "true", "yes", "on")


class LoggingConfig(BaseModel):
    """Logging configuration."""
    level: str = Field(default_factory=lambda: os.getenv("JOBSITE_LOG_LEVEL", "INFO"))
    format: str = Field(default="%(asctime)s %(levelname)s %(name)s: %(message)s")


class MatchingConfig(BaseModel):
    """Auto-matching configuration."""
    jitter_enabled: bool = Field(
        default_factory=lambda: _env_bool("JOBSITE_MATCH_JITTER", "true"),
        description="Add up to 20 random points to match scores",
    )
    random_seed: Optional[int] = Field(
        default_factory=lambda: (
            int(os.environ["JOBSITE_MATCH_SEED"]) if os.getenv("JOBSITE_MATCH_SEED") else None
        ),
        description="Seed for the jitter source, None for a fresh seed per run",
    )
    min_score: float = Field(default=0, ge=0, le=100, description="Drop matches scoring below this")


class ReportConfig(BaseModel):
    """Report configuration."""
    default_role: UserRole = Field(
        default_factory=lambda: os.getenv("JOBSITE_ROLE", "Project Manager"),
        validate_default=True,
    )
    include_trust_scores: bool = Field(default=True)


class Config(BaseModel):
    """Main configuration."""
    logging: LoggingConfig = Field(default_factory=LoggingConfig)
    matching: MatchingConfig = Field(default_factory=MatchingConfig)
    report: ReportConfig = Field(default_factory=ReportConfig)

    # Paths
    exports_dir: Path = Field(default_factory=lambda: Path(os.getenv("JOBSITE_EXPORTS_DIR", "exports")))


# Singleton config instance
_config: Optional[Config] = None


def get_config() -> Config:
    """Get or create the singleton config instance."""
    global _config
    if _config is None:
        _config = Config()
    return _config
