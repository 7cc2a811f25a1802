from functools import lru_cache
from pathlib import Path
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

# .env file lives in the project root (parent of src/)
# Only use if it exists (CI uses environment variables directly)
# Path: core/config.py -> herdfeed -> src -> project root -> .env
_ENV_FILE = Path(__file__).parent.parent.parent.parent / ".env"
_ENV_FILE = _ENV_FILE if _ENV_FILE.exists() else None


@lru_cache
def get_cache_dir() -> Path:
    """Get the cache directory (.cache/ in workspace root).

    Looks for project root by finding a .git directory or pyproject.toml,
    then returns .cache/ within that root.
    """
    current = Path(__file__).resolve()
    for parent in current.parents:
        if (parent / ".git").exists() or (parent / "pyproject.toml").exists():
            cache_dir = parent / ".cache"
            cache_dir.mkdir(exist_ok=True)
            return cache_dir
    # Fallback to current working directory
    cache_dir = Path.cwd() / ".cache"
    cache_dir.mkdir(exist_ok=True)
    return cache_dir


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=_ENV_FILE,
        env_file_encoding="utf-8",
        env_prefix="HERDFEED_",
        extra="ignore",
    )

    # Intake ratio (estimate / expected ration) at or above which an animal is OK
    ok_ratio: float = Field(default=0.85, gt=0)

    # Underfeeding alerts are addressed here
    admin_email: str = "admin@liveshock.farm"

    # Optional HTTP endpoint that receives alerts as JSON
    # If not set, alerts are only written to the log
    alert_webhook_url: str | None = None

    # Herd state file; defaults to <cache dir>/herd.json
    data_file: Path | None = None

    # Display units for CLI output ("metric" = kg, "imperial" = lb)
    # Note: all stored values are kilograms
    display_units: Literal["imperial", "metric"] = "metric"

    def resolved_data_file(self) -> Path:
        """Path of the herd state file, falling back to the cache directory."""
        if self.data_file is not None:
            return self.data_file
        return get_cache_dir() / "herd.json"


settings = Settings()
