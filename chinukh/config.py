"""Configuration loader for the Sefer HaChinukh library."""

import os
from pathlib import Path

import yaml
from dotenv import load_dotenv
from pydantic import BaseModel, Field


class AppInfo(BaseModel):
    """Application metadata."""

    name: str = "Sefer HaChinukh"
    version: str = "1.0.0"
    log_level: str = "INFO"


class SourceConfig(BaseModel):
    """Remote text API configuration."""

    base_url: str = "https://www.sefaria.org/api/texts/"
    corpus_name: str = "Sefer_HaChinukh"
    total_mitzvot: int = 613
    request_delay_ms: int = 1000  # Pause between requests, politeness toward Sefaria
    timeout_seconds: float = 30.0
    user_agent: str = "sefer-hachinukh/1.0"


class StorageConfig(BaseModel):
    """Storage paths configuration."""

    output_dir: str = "./sefer_hachinukh_data"
    export_dir: str = "./exports"


class SearchConfig(BaseModel):
    """Search and preview configuration."""

    context_length: int = 100
    preview_length: int = 100


class AppConfig(BaseModel):
    """Root application configuration."""

    app: AppInfo = Field(default_factory=AppInfo)
    source: SourceConfig = Field(default_factory=SourceConfig)
    storage: StorageConfig = Field(default_factory=StorageConfig)
    search: SearchConfig = Field(default_factory=SearchConfig)


def load_config(config_path: str | Path = "config.yaml") -> AppConfig:
    """Load configuration from YAML file and environment variables.

    Args:
        config_path: Path to the YAML configuration file.

    Returns:
        Fully populated AppConfig instance.
    """
    load_dotenv()

    yaml_data: dict = {}
    config_file = Path(config_path)
    if config_file.exists():
        with open(config_file, encoding="utf-8") as f:
            yaml_data = yaml.safe_load(f) or {}

    config = AppConfig(**yaml_data)

    # Environment overrides
    base_url = os.getenv("SEFARIA_BASE_URL")
    if base_url:
        config.source.base_url = base_url
    output_dir = os.getenv("CHINUKH_OUTPUT_DIR")
    if output_dir:
        config.storage.output_dir = output_dir

    return config
