"""Configuration management using Pydantic Settings."""

import logging
from functools import lru_cache
from pathlib import Path
from typing import Literal

import yaml
from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from clanboard.models.metrics import AggregationPolicy, MetricKind

logger = logging.getLogger(__name__)


class ServerConfig(BaseModel):
    """HTTP server and CORS parameters."""

    model_config = ConfigDict(frozen=True)

    host: str = "0.0.0.0"
    port: int = 8000
    allowed_origins: list[str] = Field(
        default_factory=lambda: ["http://localhost:3000"]
    )

    @field_validator("allowed_origins", mode="before")
    @classmethod
    def parse_origins(cls, v):
        """Parse comma-separated origins into a list."""
        if isinstance(v, str):
            return [origin.strip() for origin in v.split(",") if origin.strip()]
        return v


class StoreConfig(BaseModel):
    """Document store backend and collection layout."""

    model_config = ConfigDict(frozen=True)

    backend: Literal["mongo", "memory"] = "mongo"
    mongodb_url: str = "mongodb://localhost:27017"
    database: str = "clanboard"
    timeout_seconds: float = Field(default=10.0, gt=0)

    users_collection: str = "users"
    seasons_collection: str = "sheets"
    snapshots_collection: str = "snapshots"
    home_collection: str = "home"
    schedule_document_id: str = "schedule"


class AuthConfig(BaseModel):
    """Bearer token verification."""

    model_config = ConfigDict(frozen=True)

    jwt_secret: str = ""
    jwt_algorithm: str = "HS256"
    jwt_audience: str | None = None


class MetricsConfig(BaseModel):
    """Per-metric aggregation and snapshot filtering."""

    model_config = ConfigDict(frozen=True)

    aggregation: dict[MetricKind, AggregationPolicy] = Field(
        default_factory=lambda: {kind: "sum" for kind in MetricKind}
    )
    home_server: int | None = None  # only count snapshots from this server

    @field_validator("aggregation", mode="after")
    @classmethod
    def fill_missing_policies(cls, v: dict) -> dict:
        """Metric kinds not listed fall back to summing."""
        return {kind: v.get(kind, "sum") for kind in MetricKind}

    def policy_for(self, kind: MetricKind) -> AggregationPolicy:
        return self.aggregation.get(kind, "sum")


class Settings(BaseSettings):
    """Main configuration class."""

    environment: str = "development"
    debug: bool = False
    log_level: str = "INFO"
    logfire_token: str = ""

    # Optional YAML overlay, merged section by section
    config_path: Path = Path("config.yaml")

    server: ServerConfig = Field(default_factory=ServerConfig)
    store: StoreConfig = Field(default_factory=StoreConfig)
    auth: AuthConfig = Field(default_factory=AuthConfig)
    metrics: MetricsConfig = Field(default_factory=MetricsConfig)

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_nested_delimiter="__",
        case_sensitive=False,
        extra="ignore",
        frozen=True,
    )

    @property
    def is_development(self) -> bool:
        return self.environment.lower() == "development"

    def with_yaml_config(self) -> "Settings":
        """Return a copy with config.yaml sections merged over the current values."""
        config_path = self.config_path

        if not config_path.exists():
            logger.debug(f"Config file not found: {config_path}. Using defaults.")
            return self

        try:
            with open(config_path, "r", encoding="utf-8") as f:
                yaml_config = yaml.safe_load(f)
        except yaml.YAMLError as e:
            logger.error(f"Failed to parse YAML config: {e}")
            raise

        if not yaml_config:
            logger.warning(f"Empty config file: {config_path}")
            return self

        updates = {}
        for section_name in ["server", "store", "auth", "metrics"]:
            if section_name in yaml_config:
                section = getattr(self, section_name)
                section_dict = section.model_dump()
                section_dict.update(yaml_config[section_name] or {})
                updates[section_name] = section.__class__(**section_dict)

        for key in ["environment", "debug", "log_level"]:
            if key in yaml_config:
                updates[key] = yaml_config[key]

        logger.info(f"Loaded configuration from {config_path}")
        return self.model_copy(update=updates)


@lru_cache()
def get_settings() -> Settings:
    """Get singleton Settings instance."""
    return Settings().with_yaml_config()
