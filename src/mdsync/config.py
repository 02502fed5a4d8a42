"""Application configuration: settings schema and config.yaml loader"""

import os
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field


CONFIG_FILE = "config.yaml"

# Conventional Notion variable names accepted alongside MDSYNC_<FIELD>.
ENV_ALIASES = {
    "notion_token": "NOTION_TOKEN",
    "database_id":  "NOTION_DATABASE_ID",
}


class Settings(BaseModel):
    notion_token:    str  = Field(default="", description="Notion integration secret")
    database_id:     str  = Field(default="", description="ID of the Notion blog database")
    output_dir:      str  = Field(default="_posts",    description="Directory the post files are written to")
    status_property: str  = Field(default="Status",    description="Select property used as the publish filter")
    status_value:    str  = Field(default="Published", description="Select value that marks a page as published")
    page_size:       int  = Field(default=100, ge=1, le=100, description="Block children page size")
    layout:          str  = Field(default="post",      description="Front matter layout value")
    require_date:    bool = Field(default=False,       description="Treat a missing publish date as a page error")


def load_config(overrides: dict[str, Any] = None) -> Settings:
    """Load Settings from config.yaml, then MDSYNC_<FIELD> env vars, then non-None CLI overrides."""
    data: dict[str, Any] = {}
    if Path(CONFIG_FILE).exists():
        try:
            data = yaml.safe_load(Path(CONFIG_FILE).read_text()) or {}
        except yaml.YAMLError as e:
            raise ValueError(f"Invalid {CONFIG_FILE}: {e}") from e

    for name in Settings.model_fields:
        alias = ENV_ALIASES.get(name)
        if alias and (val := os.getenv(alias)):
            data[name] = val
        if val := os.getenv(f"MDSYNC_{name.upper()}"):
            data[name] = val

    if overrides:
        data.update({k: v for k, v in overrides.items() if v is not None})
    return Settings(**data)


def require_credentials(settings: Settings) -> None:
    """Raise ValueError if the Notion token or database id is missing."""
    if not settings.notion_token:
        raise ValueError("NOTION_TOKEN environment variable is not set.")
    if not settings.database_id:
        raise ValueError("NOTION_DATABASE_ID environment variable is not set.")
