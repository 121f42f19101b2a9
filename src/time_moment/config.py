from __future__ import annotations

import json
import logging
import os
import time
from pathlib import Path
from typing import Dict, Mapping, Optional
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from pydantic import BaseModel, Field, field_validator

from time_moment.domain.formats import FormatRegistry

logger = logging.getLogger(__name__)

FORMATS_ENV = "TIME_MOMENT_FORMATS"
FORMATS_FILE_ENV = "TIME_MOMENT_FORMATS_FILE"
TIMEZONE_ENV = "TIME_MOMENT_TZ"
COMMAND_ENV = "TIME_MOMENT_COMMAND"


def _load_formats(raw: str, source: str) -> Dict[str, str]:
    try:
        data = json.loads(raw)
    except json.JSONDecodeError as e:
        raise ValueError(f"{source} is not valid JSON: {e}") from e
    if not isinstance(data, dict):
        raise ValueError(f"{source} must be a JSON object mapping format names to patterns")
    return data


class TimeMomentSettings(BaseModel):
    """Startup configuration for the time helpers."""

    formats: Dict[str, str] = Field(default_factory=dict)
    timezone: Optional[str] = None
    command: Optional[str] = "/tm"

    @field_validator("timezone")
    @classmethod
    def validate_timezone(cls, value: Optional[str]) -> Optional[str]:
        if value:
            try:
                ZoneInfo(value)
            except (ZoneInfoNotFoundError, ValueError) as e:
                raise ValueError(f"Unknown time zone {value!r}") from e
        return value or None

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "TimeMomentSettings":
        """
        Read settings from environment variables.

        - TIME_MOMENT_FORMATS        JSON object of name -> strftime pattern
        - TIME_MOMENT_FORMATS_FILE   path to a JSON file with the same object
        - TIME_MOMENT_TZ             IANA zone applied to the process at startup
        - TIME_MOMENT_COMMAND        slash command name (default: /tm, empty disables)
        """
        env = os.environ if environ is None else environ

        formats: Dict[str, str] = {}
        formats_file = env.get(FORMATS_FILE_ENV)
        if formats_file:
            formats.update(_load_formats(Path(formats_file).read_text(), formats_file))
        inline = env.get(FORMATS_ENV)
        if inline:
            formats.update(_load_formats(inline, FORMATS_ENV))

        return cls(
            formats=formats,
            timezone=env.get(TIMEZONE_ENV) or None,
            command=env.get(COMMAND_ENV, "/tm") or None,
        )

    def apply_timezone(self) -> None:
        """Make the configured zone the process's local zone."""
        if not self.timezone:
            return
        os.environ["TZ"] = self.timezone
        time.tzset()
        logger.info("Local time zone set to %s", self.timezone)

    def build_registry(self) -> FormatRegistry:
        return FormatRegistry(formats=self.formats)
