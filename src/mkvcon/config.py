"""Configuration management for mkvcon."""

import os
from pathlib import Path

import tomli
from pydantic import BaseModel, Field, field_validator

MAKEMKVCON_ENV = "MKVCON_MAKEMKVCON"


class MkvconConfig(BaseModel):
    """Main configuration for mkvcon."""

    # Tool
    makemkvcon_path: str = Field(default="", validate_default=True)

    # Logging
    log_dir: Path | None = None

    # Timeout Settings (seconds)
    info_timeout: int = Field(default=60, gt=0)  # 1 minute
    rip_timeout: int = Field(default=3600, gt=0)  # 1 hour

    # Defaults for commands
    default_disc_index: int = Field(default=0, ge=0)
    default_cache: int | None = Field(default=None, ge=1)  # megabytes

    @field_validator("log_dir", mode="before")
    @classmethod
    def expand_paths(cls, v: Path | str | None) -> Path | None:
        """Expand user home directory in paths."""
        if v is None:
            return None
        if isinstance(v, str):
            v = Path(v)
        return v.expanduser().resolve()

    @field_validator("makemkvcon_path", mode="before")
    @classmethod
    def makemkvcon_from_env(cls, v: str | None) -> str:
        """Fall back to the environment, then to makemkvcon on PATH."""
        if not v:
            v = os.getenv(MAKEMKVCON_ENV)
        return v or "makemkvcon"

    @property
    def makemkv_con(self) -> str:
        """MakeMKV command-line tool executable."""
        return self.makemkvcon_path

    def timeout_for(self, command: str) -> int | None:
        """Subprocess timeout for a makemkvcon command."""
        if command == "info":
            return self.info_timeout
        if command == "stream":
            # Streaming server runs until stopped
            return None
        return self.rip_timeout


def default_config_paths() -> list[Path]:
    """Locations searched when no config path is given."""
    return [
        Path.home() / ".config" / "mkvcon" / "config.toml",  # User config
        Path.cwd() / "mkvcon.toml",  # Current directory
    ]


def load_config(config_path: Path | None = None) -> MkvconConfig:
    """Load configuration from file or defaults."""
    if config_path is None:
        for path in default_config_paths():
            if path.exists():
                config_path = path
                break

    if config_path and config_path.exists():
        with open(config_path, "rb") as f:
            config_data = tomli.load(f)
        return MkvconConfig(**config_data)
    # Use defaults
    return MkvconConfig()


def create_sample_config(path: Path) -> None:
    """Create a sample configuration file."""
    sample_config = """# mkvcon Configuration
# ====================

# MakeMKV command-line tool (defaults to $MKVCON_MAKEMKVCON, then "makemkvcon" on PATH)
# makemkvcon_path = "/usr/bin/makemkvcon"

# Write a log file here in addition to console output (optional)
# log_dir = "~/.local/share/mkvcon/logs"

# Timeouts (seconds)
info_timeout = 60                                 # Disc scans and drive listing
rip_timeout = 3600                                # mkv and backup operations

# Command defaults
default_disc_index = 0                            # Disc used by 'mkvcon info' without an argument
# default_cache = 1024                            # Read cache in megabytes
"""

    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w") as f:
        f.write(sample_config)
