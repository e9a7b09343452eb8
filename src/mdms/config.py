"""Application configuration: settings schema and config.yaml loader"""

import os
from pathlib import Path
from typing import Any, Optional

import yaml
from pydantic import BaseModel, Field, field_validator


CONFIG_FILE = "config.yaml"


class Settings(BaseModel):
    app_name:         str = "mdms"
    output_dir:       str = Field(default="~/Documents/Writing", description="Directory for compiled manuscripts")
    fonts:            list[str] = Field(default=["Courier New", "Times New Roman"], min_length=1, description="One manuscript per font")
    font_size:        int = Field(default=12, ge=8, le=16, description="Body font size in points")
    pii:              Optional[str] = Field(default=None, description="Markdown file with author contact details")
    anonymous:        bool = Field(default=False, description="Also produce anonymized manuscripts")
    classic:          bool = Field(default=False, description="Also produce classic (underlined emphasis) manuscripts")
    exact_word_count: bool = Field(default=False, description="Report the exact rather than rounded word count")
    parser_config:    str = Field(default="commonmark", pattern="^(commonmark|default|gfm-like|js-default|zero)$", description="MarkdownIt parser preset name")
    log_level:        str = Field(default="WARNING", pattern="^(DEBUG|INFO|WARNING|ERROR|CRITICAL)$")

    @field_validator("fonts", mode="before")
    @classmethod
    def _split_fonts(cls, v):
        """Accept a comma-separated string (env var form) as well as a list."""
        if isinstance(v, str):
            return [f.strip() for f in v.split(",") if f.strip()]
        return v

    @field_validator("log_level", mode="before")
    @classmethod
    def _upper_level(cls, v):
        return v.upper() if isinstance(v, str) else v


def load_config(overrides: dict[str, Any] = None) -> Settings:
    """Load Settings from config.yaml, then MDMS_<FIELD> env vars, then non-None CLI overrides."""
    data: dict[str, Any] = {}
    if Path(CONFIG_FILE).exists():
        try:
            data = yaml.safe_load(Path(CONFIG_FILE).read_text()) or {}
        except yaml.YAMLError as e:
            raise ValueError(f"Invalid {CONFIG_FILE}: {e}") from e

    for name in Settings.model_fields:
        if val := os.getenv(f"MDMS_{name.upper()}"):
            data[name] = val

    if overrides:
        data.update({k: v for k, v in overrides.items() if v is not None})
    try:
        return Settings(**data)
    except ValueError as e:
        raise ValueError(f"Invalid settings: {e}") from e
