"""Reader configuration with Pydantic Settings."""

from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class ReaderSettings(BaseSettings):
    """Reader configuration with environment variable support.

    Configuration can be set via:
    1. Environment variables (prefixed with EPUBKIT_)
    2. .env file
    3. Direct instantiation

    Example:
        export EPUBKIT_MAX_WORKERS=8
        export EPUBKIT_ON_CONTENT_ERROR=collect

        settings = ReaderSettings()
        book = read_book(data, settings)
    """

    model_config = SettingsConfigDict(
        env_prefix="EPUBKIT_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Materialization
    max_workers: int = Field(
        default=4, ge=1, le=32, description="Worker threads used to read content files"
    )
    on_content_error: Literal["raise", "collect"] = Field(
        default="raise",
        description="Abort on the first unreadable content file, or collect failures and go on",
    )

    # Chapter tree
    on_dangling_navigation: Literal["raise", "skip"] = Field(
        default="raise",
        description="Fail, or log and skip, when a navigation entry targets an unknown file",
    )

    # Decoding
    default_encoding: str = Field(
        default="utf-8", description="Encoding tried for text files that declare none"
    )

    # Logging
    log_level: str = Field(
        default="WARNING", description="Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)"
    )
