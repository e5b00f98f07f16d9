"""Configuration for BlogNest.

Settings come from defaults, then environment variables (optionally loaded
from a ``.env`` file), then command-line options applied by the CLI.
"""

import os
from pathlib import Path

from dotenv import find_dotenv, load_dotenv
from pydantic import BaseModel, Field, field_validator

_TRUE_VALUES = ("true", "1", "yes")


class BlogNestConfig(BaseModel):
    """Runtime configuration.

    Attributes:
        data_file: Path of the JSON file holding every post
        divider_width: Width of the divider line between exported posts
        log_level: Logging level name
        json_logs: Emit JSON log lines instead of console format
    """

    data_file: Path = Field(
        default=Path("blognest.json"), description="Backing file for all posts"
    )
    divider_width: int = Field(default=60, ge=1, description="Export divider width")
    log_level: str = Field(default="WARNING", description="Logging level name")
    json_logs: bool = Field(default=False, description="Emit JSON formatted logs")

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, value: str) -> str:
        """Normalize and validate the log level name.

        Raises:
            ValueError: If the level is not one of the standard names
        """
        normalized = value.strip().upper()
        if normalized not in ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"):
            raise ValueError(f"Unknown log level: {value}")
        return normalized

    @classmethod
    def from_env(cls) -> "BlogNestConfig":
        """Load configuration from environment variables.

        Environment variables follow the pattern BLOGNEST_<SETTING_NAME>, for
        example BLOGNEST_DATA_FILE or BLOGNEST_LOG_LEVEL. A ``.env`` file in
        the working directory is read first without overriding variables that
        are already set.

        Returns:
            BlogNestConfig instance with environment overrides
        """
        load_dotenv(find_dotenv(usecwd=True))

        return cls(
            data_file=Path(
                os.getenv("BLOGNEST_DATA_FILE", str(cls.model_fields["data_file"].default))
            ),
            divider_width=int(
                os.getenv(
                    "BLOGNEST_DIVIDER_WIDTH", cls.model_fields["divider_width"].default
                )
            ),
            log_level=os.getenv("BLOGNEST_LOG_LEVEL", cls.model_fields["log_level"].default),
            json_logs=os.getenv(
                "BLOGNEST_JSON_LOGS", str(cls.model_fields["json_logs"].default)
            ).lower()
            in _TRUE_VALUES,
        )
