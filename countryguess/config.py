"""Environment-level configuration.

Keeps deployment concerns (where saved games live, CORS, environment
name) apart from game rules, which travel in GameSettings.
"""

import os
from dataclasses import dataclass, field
from pathlib import Path


def _default_data_dir() -> str:
    return str(Path.home() / ".countryguess")


@dataclass
class EnvironmentSettings:
    """Environment / deployment settings."""

    env: str = "development"
    data_dir: str = field(default_factory=_default_data_dir)
    allowed_origins: list[str] = field(default_factory=lambda: ["*"])
    host: str = "127.0.0.1"
    port: int = 8000

    @classmethod
    def from_env(cls) -> "EnvironmentSettings":
        """Build settings from environment variables."""
        return cls(
            env=os.getenv("COUNTRYGUESS_ENV", "development"),
            data_dir=os.getenv("COUNTRYGUESS_DATA_DIR") or _default_data_dir(),
            allowed_origins=os.getenv("ALLOWED_ORIGINS", "*").split(","),
            host=os.getenv("COUNTRYGUESS_HOST", "127.0.0.1"),
            port=int(os.getenv("COUNTRYGUESS_PORT", "8000")),
        )
