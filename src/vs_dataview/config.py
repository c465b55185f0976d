"""Configuration and logging setup for vs-dataview."""

import sys
from pathlib import Path
from typing import Optional

from loguru import logger
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_LOG_FORMAT = "<level>{level: <8}</level> | {name}:{function}:{line} - {message}"


class DataviewConfig(BaseSettings):
    """Settings for a vs-dataview workspace.

    Values come from the environment (``VS_DATAVIEW_*``) and can be
    overridden by keyword arguments, which is how CLI options are applied.
    """

    model_config = SettingsConfigDict(
        env_prefix="VS_DATAVIEW_",
        extra="ignore",
    )

    workspace: Path = Field(
        default_factory=Path.cwd,
        description="Root folder whose markdown documents are queried",
    )
    template_folder: str = Field(
        default="Template",
        description="Folder, relative to the workspace, holding template files",
    )
    block_language: str = Field(
        default="vs-dataview",
        description="Info string of fenced query blocks",
    )
    document_glob: str = Field(
        default="**/*.md",
        description="Glob used to discover documents",
    )
    respect_gitignore: bool = Field(
        default=True,
        description="Skip documents matched by .gitignore and default ignore patterns",
    )
    log_level: str = Field(default="WARNING", description="Log level for stderr output")
    log_file: Optional[Path] = Field(default=None, description="Optional log file")


def load_config(**overrides) -> DataviewConfig:
    """Build a config from the environment, dropping overrides that are None."""
    values = {key: value for key, value in overrides.items() if value is not None}
    return DataviewConfig(**values)


def init_cli_logging(level: str = "WARNING", log_file: Optional[Path] = None) -> None:
    """Configure loguru sinks for CLI use.

    stderr gets the interactive output; stdout is reserved for command output
    such as rendered tables.
    """
    logger.remove()
    logger.add(sys.stderr, level=level.upper(), format=DEFAULT_LOG_FORMAT, colorize=True)
    if log_file is not None:
        logger.add(
            str(log_file),
            level="DEBUG",
            rotation="1 MB",
            retention=3,
            backtrace=False,
            diagnose=False,
        )
