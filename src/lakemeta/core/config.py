"""
Configuration management for the lakemeta catalog bridge.
"""

from functools import lru_cache
from typing import Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings with validation."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # Environment
    environment: str = Field(default="development", description="Deployment environment")
    debug: bool = Field(default=False, description="Debug mode")

    # Application
    app_name: str = "lakemeta"
    app_version: str = "0.1.0"
    api_prefix: str = "/api/v1"

    # Spark
    spark_master_url: Optional[str] = Field(
        default=None,
        description="Spark master URL (None for local mode)"
    )
    spark_app_name: str = Field(default="lakemeta-catalog-bridge")
    spark_log_level: str = Field(default="WARN")

    # Metadata store
    metadata_store_path: str = Field(
        default="/tmp/lakemeta_catalog",
        description="Directory holding persisted table descriptors"
    )
    default_project: str = Field(default="default")

    # Sample environment
    sample_table_format: str = Field(
        default="com.databricks.spark.csv",
        description="Storage format used by CREATE TABLE for sample tables"
    )
    sample_data_dir: str = Field(default="/data/sample")

    # API
    api_host: str = Field(default="0.0.0.0")
    api_port: int = Field(default=8000)

    # Observability
    log_level: str = Field(default="INFO")

    @field_validator("environment")
    def validate_environment(cls, v: str) -> str:
        """Validate environment value."""
        allowed = ["development", "staging", "production", "testing"]
        if v not in allowed:
            raise ValueError(f"environment must be one of {allowed}")
        return v

    @field_validator("log_level")
    def validate_log_level(cls, v: str) -> str:
        """Validate log level."""
        allowed = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        v = v.upper()
        if v not in allowed:
            raise ValueError(f"log_level must be one of {allowed}")
        return v

    @property
    def is_production(self) -> bool:
        """Check if running in production."""
        return self.environment == "production"


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


# Global settings instance
settings = get_settings()
