# Author: Green Mountain Systems AI Inc.
# Donated to IAB Tech Lab

"""CLI settings loaded from environment variables."""

from functools import lru_cache
from typing import Optional

from dotenv import find_dotenv
from pydantic_settings import BaseSettings

# Find .env file by searching up from current working directory
_ENV_FILE = find_dotenv(usecwd=True)


class Settings(BaseSettings):
    """Settings for the beeswax command line tool."""

    # Beeswax API
    beeswax_api_root: str = "https://stingersbx.api.beeswax.com"
    beeswax_email: str = ""
    beeswax_password: str = ""

    # Request timeout in seconds, unset means no timeout
    beeswax_timeout: Optional[float] = None

    log_level: str = "INFO"

    def has_credentials(self) -> bool:
        """Whether both email and password are configured."""
        return bool(self.beeswax_email and self.beeswax_password)

    model_config = {
        "env_file": _ENV_FILE if _ENV_FILE else None,
        "env_file_encoding": "utf-8",
        "extra": "ignore",
    }


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


settings = get_settings()
