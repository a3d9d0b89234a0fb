"""Configuration management for the Content Intelligence Engine."""

from pathlib import Path

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Main application settings.

    The engine functions never read these directly; callers turn them into
    explicit arguments (``ScoringWeights.from_settings``,
    ``PlacementConfig.from_settings``).
    """

    # ── Related Article Weights ────────────────────────────────────────────
    w_category: float = Field(0.40, description="Category overlap weight")
    w_tag: float = Field(0.30, description="Tag overlap weight")
    w_text: float = Field(0.20, description="Title/excerpt similarity weight")
    w_recency: float = Field(0.05, description="Publication proximity weight")
    w_author: float = Field(0.05, description="Same author bonus")
    min_related_score: float = Field(0.1, description="Scores at or below this are discarded")
    related_limit: int = Field(6, description="Default number of related articles")

    # ── Ad Placement Defaults ──────────────────────────────────────────────
    min_paragraphs_before_first: int = Field(2, description="Paragraphs required before the first placement")
    min_words_between_placements: int = Field(300, description="Words required between placements")
    max_placements: int = Field(3, description="Maximum placements per article")

    # ── Geo Classification ─────────────────────────────────────────────────
    gazetteer_path: Path | None = Field(None, description="Optional gazetteer YAML override")

    # ── Logging ────────────────────────────────────────────────────────────
    log_level: str = Field("INFO", description="Log level")
    json_logging: bool = Field(True, description="Enable JSON logging")

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    @field_validator("w_category", "w_tag", "w_text", "w_recency", "w_author")
    @classmethod
    def validate_weights(cls, v: float) -> float:
        """Validate weight values are between 0 and 1."""
        if not 0 <= v <= 1:
            raise ValueError("Weight must be between 0 and 1")
        return v

    @field_validator("min_related_score")
    @classmethod
    def validate_threshold(cls, v: float) -> float:
        """Validate the related score cut-off."""
        if not 0 <= v <= 1:
            raise ValueError("Related score threshold must be between 0 and 1")
        return v

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        level = v.upper()
        if level not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"Unknown log level: {v}")
        return level


_settings: Settings | None = None


def get_settings() -> Settings:
    """Get application settings."""
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings


def validate_config(settings: Settings) -> bool:
    """Validate configuration completeness."""
    from .logging import get_logger
    from .processing.gazetteer import load_gazetteer

    logger = get_logger(__name__)
    try:
        weight_sum = (
            settings.w_category
            + settings.w_tag
            + settings.w_text
            + settings.w_recency
            + settings.w_author
        )
        if abs(weight_sum - 1.0) > 0.01:
            raise ValueError(f"Related weights sum to {weight_sum}, should be 1.0")

        load_gazetteer(settings.gazetteer_path)
        return True

    except ValueError as e:
        logger.error("Configuration validation failed", error=str(e))
        return False
