"""
Configuration for the OmniFocus MCP server.

Settings come from environment variables. Before reading them, variables are
loaded from ``.omnifocus-mcp.env`` in the current directory and then in the
user's home directory. Variables already present in the environment win.
"""

import os
from functools import lru_cache
from pathlib import Path

from dotenv import load_dotenv
from pydantic import BaseModel, Field, field_validator

ENV_FILE_NAME = ".omnifocus-mcp.env"


class Settings(BaseModel):
    """Runtime settings for the script bridge and logging."""

    osascript_path: str = Field(default="osascript", description="Executable used to run generated scripts")
    timeout: int = Field(default=60, description="Seconds before a script is abandoned", ge=1, le=600)
    log_level: str = Field(default="WARNING", description="Logging level name for stderr output")

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        level = v.strip().upper()
        if level not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"Unknown log level: {v}")
        return level


def load_env_vars() -> None:
    """Load variables from the local and home ``.omnifocus-mcp.env`` files, if present."""
    local_env = Path.cwd() / ENV_FILE_NAME
    if local_env.is_file():
        load_dotenv(local_env, override=False)

    home_env = Path.home() / ENV_FILE_NAME
    if home_env.is_file():
        load_dotenv(home_env, override=False)


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Build settings from the environment once; `get_settings.cache_clear()` reloads them."""
    load_env_vars()

    values: dict[str, str] = {}
    if osascript := os.getenv("OMNIFOCUS_MCP_OSASCRIPT"):
        values["osascript_path"] = osascript
    if timeout := os.getenv("OMNIFOCUS_MCP_TIMEOUT"):
        values["timeout"] = timeout
    if log_level := os.getenv("OMNIFOCUS_MCP_LOG_LEVEL"):
        values["log_level"] = log_level

    return Settings.model_validate(values)
