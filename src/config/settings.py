"""
Application settings and configuration

Uses pydantic-settings for type-safe configuration via environment variables.
All settings use MEXPAND_ prefix (e.g., MEXPAND_STRICT_MODE=true).

Settings can also be loaded from a .env file in the working directory.
Delimiters are deliberately absent: ``{{``, ``}}`` and ``/*`` are fixed.
"""

from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class AppSettings(BaseSettings):
    """
    Application configuration via environment variables.

    Environment variables use MEXPAND_ prefix.

    Examples:
        MEXPAND_DEFAULT_EXTENSION=.out
        MEXPAND_CLIP_PLACEHOLDER=<no clipboard>
        MEXPAND_SHELL=/bin/bash
    """

    model_config = SettingsConfigDict(
        env_prefix="MEXPAND_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # Output matching
    default_extension: str = Field(
        default=".exec",
        description="Extension appended to a template name when no output is given for it",
    )

    # Directive behaviour
    clip_marker: str = Field(
        default="//---------------\n",
        description="Marker line emitted in front of clipboard contents",
    )

    clip_placeholder: str = Field(
        default="clipboard",
        description="Text emitted when the clipboard is unavailable or empty",
    )

    shell: Optional[str] = Field(
        default=None,
        description="Shell executable used by exec directives (system default when unset)",
    )

    # Output configuration
    trailing_newline: bool = Field(
        default=True,
        description="Terminate each written expansion with a newline",
    )

    encoding: str = Field(
        default="utf-8",
        description="Encoding for templates, included files and outputs",
    )

    strict_mode: bool = Field(
        default=False,
        description="Strict mode: a truncated expansion makes the CLI exit non-zero",
    )


# Singleton instance - import this in your code
appsettings = AppSettings()
