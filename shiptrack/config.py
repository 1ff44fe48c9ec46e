"""
Configuration management for shiptrack.
Handles loading settings from environment variables and .env files.
"""

import os
from pathlib import Path
from typing import Optional
from dataclasses import dataclass
from dotenv import load_dotenv


@dataclass
class TrackerConfig:
    """Main configuration class for shiptrack."""

    # === UPS Credentials ===
    ups_access_license_number: str = ""
    ups_user_id: str = ""
    ups_password: str = ""

    # Use the UPS customer integration environment
    ups_test_mode: bool = False
    # Overrides the live/test URL when set
    ups_base_url: Optional[str] = None

    request_timeout: float = 30  # seconds

    # Logging
    log_level: str = "INFO"
    log_file: Optional[str] = None

    @classmethod
    def from_env(cls, env_file: Optional[str] = None) -> "TrackerConfig":
        """Load configuration from environment variables."""

        if env_file:
            load_dotenv(env_file)
        else:
            for env_path in ["config.env", ".env"]:
                if Path(env_path).exists():
                    load_dotenv(env_path)
                    break

        return cls(
            ups_access_license_number=os.getenv("UPS_ACCESS_LICENSE_NUMBER", ""),
            ups_user_id=os.getenv("UPS_USER_ID", ""),
            ups_password=os.getenv("UPS_PASSWORD", ""),
            ups_test_mode=os.getenv("UPS_TEST_MODE", "false").lower() in ("true", "1", "yes"),
            ups_base_url=os.getenv("UPS_BASE_URL") or None,
            request_timeout=float(os.getenv("REQUEST_TIMEOUT", "30")),
            log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
            log_file=os.getenv("LOG_FILE") or None,
        )

    def validate(self) -> list[str]:
        """Validate configuration and return list of errors."""
        errors = []

        if not self.ups_access_license_number:
            errors.append("UPS_ACCESS_LICENSE_NUMBER is required")
        if not self.ups_user_id:
            errors.append("UPS_USER_ID is required")
        if not self.ups_password:
            errors.append("UPS_PASSWORD is required")
        if self.request_timeout <= 0:
            errors.append("REQUEST_TIMEOUT must be positive")

        return errors


# Global config instance
_config: Optional[TrackerConfig] = None


def get_config() -> TrackerConfig:
    """Get the global configuration instance."""
    global _config
    if _config is None:
        _config = TrackerConfig.from_env()
    return _config


def init_config(env_file: Optional[str] = None) -> TrackerConfig:
    """Initialize configuration from environment."""
    global _config
    _config = TrackerConfig.from_env(env_file)
    return _config
