"""Application configuration: settings schema and postindex.yaml loader"""

import os
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field


CONFIG_FILE = "postindex.yaml"
DEFAULT_EXCLUDE = ["_site", "_layouts", "_includes", "node_modules", "vendor", ".git", "README.md"]


class Settings(BaseModel):
    app_name:       str = "postindex"
    parser_config:  str = Field(default="gfm-like", pattern="^(commonmark|default|zero|gfm-like|js-default)$",
                                description="MarkdownIt preset used for excerpts")
    workers:        int = Field(default=1, ge=1, description="Threads used to parse and validate documents")
    include_drafts: bool = Field(default=False, description="Also check documents under _drafts/")
    exclude:        list[str] = Field(default_factory=lambda: list(DEFAULT_EXCLUDE),
                                      description="File or directory names skipped during discovery")
    log_level:      str = Field(default="WARNING", pattern="^(DEBUG|INFO|WARNING|ERROR|CRITICAL)$")


_LIST_FIELDS = {"exclude"}


def load_config(overrides: dict[str, Any] = None) -> Settings:
    """Load Settings from postindex.yaml, then POSTINDEX_<FIELD> env vars, then non-None CLI overrides."""
    data: dict[str, Any] = {}
    if Path(CONFIG_FILE).exists():
        try:
            data = yaml.safe_load(Path(CONFIG_FILE).read_text()) or {}
        except yaml.YAMLError as e:
            raise ValueError(f"Invalid {CONFIG_FILE}: {e}") from e
        if not isinstance(data, dict):
            raise ValueError(f"Invalid {CONFIG_FILE}: expected a mapping, got {type(data).__name__}")

    for name in Settings.model_fields:
        if val := os.getenv(f"POSTINDEX_{name.upper()}"):
            data[name] = [v.strip() for v in val.split(",") if v.strip()] if name in _LIST_FIELDS else val

    if overrides:
        data.update({k: v for k, v in overrides.items() if v is not None})
    return Settings(**data)
