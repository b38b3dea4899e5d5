"""Configuration loader for the Novel Reader application."""

import os
from pathlib import Path

import yaml
from dotenv import load_dotenv
from pydantic import BaseModel, Field


class AppInfo(BaseModel):
    """Application metadata."""

    name: str = "Novel Reader"
    version: str = "1.0.0"
    language: str = "zh"


class ParsingConfig(BaseModel):
    """Manuscript parsing configuration."""

    unknown_title: str = "未知小说"
    unknown_author: str = "未知作者"
    default_chapter_title: str = "正文"
    default_image_caption: str = "配图"
    markdown_metadata_lines: int = 10
    plaintext_author_lines: int = 5


class StorageConfig(BaseModel):
    """Storage paths configuration."""

    sqlite_path: str = "./db/novels.db"
    export_dir: str = "./data/exports"


class AppConfig(BaseModel):
    """Root application configuration."""

    app: AppInfo = Field(default_factory=AppInfo)
    parsing: ParsingConfig = Field(default_factory=ParsingConfig)
    storage: StorageConfig = Field(default_factory=StorageConfig)

    log_level: str = "INFO"


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
    sqlite_path = os.getenv("NOVEL_READER_SQLITE_PATH")
    if sqlite_path:
        config.storage.sqlite_path = sqlite_path
    config.log_level = os.getenv("LOG_LEVEL", config.log_level).upper()

    return config
