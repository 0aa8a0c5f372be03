"""User-configurable settings loaded from config.yaml."""

from __future__ import annotations

import os
import re
from pathlib import Path
from typing import ClassVar

from dotenv import load_dotenv
from pydantic import BaseModel, Field, ValidationError, model_validator

from localweather.constants import DEFAULT_QUERY_INTERVAL, SOURCE_OPENWEATHERMAP
from localweather.errors import ConfigurationError
from localweather.location.providers import DEFAULT_GEOLOCATION_URL

# Load environment variables from .env file(s)
load_dotenv()


def _interpolate_env(content: str) -> str:
    return re.sub(r"\$\{(\w+)\}", lambda m: os.getenv(m.group(1), ""), content)


class UserSettings(BaseModel):
    """User settings for the weather collector. Values are read from
    config.yaml; ``${VAR}`` references are filled in from the environment.
    """

    # Default search paths for configuration
    DEFAULT_CONFIG_PATHS: ClassVar[list[Path]] = [
        Path("config.yaml"),
        Path("~/.config/localweather/config.yaml").expanduser(),
        Path("/etc/localweather/config.yaml"),
    ]

    # Weather source
    api_key: str = Field(..., min_length=10, description="Weather provider API key")
    source: str = Field(SOURCE_OPENWEATHERMAP, description="Weather source id")
    query_interval: int = Field(
        DEFAULT_QUERY_INTERVAL, gt=0, description="Polling interval (seconds)"
    )
    request_timeout: float = Field(10, gt=0, description="HTTP timeout (seconds)")

    # Location settings
    latitude: float | None = Field(None, ge=-90, le=90, description="Fixed device latitude")
    longitude: float | None = Field(
        None, ge=-180, le=180, description="Fixed device longitude"
    )
    network_location: bool = Field(
        True, description="Fall back to IP geolocation when no fixed position is set"
    )
    geolocation_url: str = Field(
        DEFAULT_GEOLOCATION_URL, description="IP geolocation endpoint"
    )

    # Output settings
    output_path: Path = Field(
        Path("local_weather.jsonl"), description="JSON-lines file observations go to"
    )
    state_file: Path | None = Field(
        None, description="File keeping the last run time across restarts"
    )

    # ---- validators ----
    @model_validator(mode="after")
    def check_position_pair(self) -> UserSettings:
        if (self.latitude is None) != (self.longitude is None):
            raise ValueError("latitude and longitude must be set together")
        return self

    # ---- convenience methods ----
    @property
    def has_fixed_position(self) -> bool:
        """Whether a fixed device position is configured."""
        return self.latitude is not None and self.longitude is not None

    @property
    def masked_api_key(self) -> str:
        """API key with all but the last four characters hidden."""
        return "*" * (len(self.api_key) - 4) + self.api_key[-4:]

    @classmethod
    def load(cls, path: Path | None = None) -> UserSettings:
        """Load configuration from a YAML file.

        Args:
            path: Path to config file (optional, searches default locations if None)

        Returns:
            Validated UserSettings object

        Raises:
            FileNotFoundError: If no config file is found
            ConfigurationError: If the config file cannot be parsed or is invalid
        """
        # Try to find config file
        if path is None:
            # Check environment variable first
            env_path = os.environ.get("LOCALWEATHER_CONFIG")
            if env_path:
                path = Path(env_path)
                if not path.exists():
                    raise FileNotFoundError(
                        f"Config file from LOCALWEATHER_CONFIG not found: {path}"
                    )
            else:
                # Try default paths
                for default_path in cls.DEFAULT_CONFIG_PATHS:
                    if default_path.exists():
                        path = default_path
                        break
                else:
                    raise FileNotFoundError(
                        "No configuration file found. Create config.yaml or set LOCALWEATHER_CONFIG."
                    )

        # Load and parse config
        import yaml  # local import to avoid hard dep for callers

        try:
            raw = _interpolate_env(path.read_text())
            data = yaml.safe_load(raw)
        except (OSError, yaml.YAMLError) as exc:
            raise ConfigurationError(f"Unable to read config YAML: {exc}") from exc

        try:
            return cls.model_validate(data)
        except ValidationError as err:
            raise ConfigurationError(f"Invalid configuration:\n{err}") from err
