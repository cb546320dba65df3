"""
Configuration for the Google Docs extractor.

Settings are read once at startup from the process environment, with values
from an optional `.env.local` file taking precedence, and then handed to the
components that need them.
"""

import os
from pathlib import Path
from typing import Mapping, Optional

from dotenv import dotenv_values
from pydantic import BaseModel, Field, field_validator

DEFAULT_ENV_FILE = Path(".env.local")

# Environment variable -> Settings field
ENV_FIELDS = {
    "LOG_LEVEL": "log_level",
    "LOG_FILE_PATH": "log_file_path",
    "DEV_MODE": "dev_mode",
    "GOOGLE_CREDENTIALS_PATH": "google_credentials_path",
    "GOOGLE_TOKEN_PATH": "google_token_path",
    "GOOGLE_SERVICE_ACCOUNT_PATH": "google_service_account_path",
    "OAUTH_PORT": "oauth_port",
    "AWS_ACCESS_KEY_ID": "aws_access_key_id",
    "AWS_SECRET_ACCESS_KEY": "aws_secret_access_key",
    "AWS_REGION": "aws_region",
    "S3_BUCKET_NAME": "s3_bucket_name",
    "HTTP_TIMEOUT_SECONDS": "http_timeout_seconds",
}


class Settings(BaseModel):
    """Application settings."""

    # Logging
    log_level: str = "INFO"
    log_file_path: Optional[Path] = None
    dev_mode: bool = False

    # Google Docs API
    google_credentials_path: Path = Path("credentials.json")
    google_token_path: Path = Path("tokens/token.json")
    google_service_account_path: Optional[Path] = None
    oauth_port: int = Field(8888, ge=0, le=65535)

    # S3 image storage
    aws_access_key_id: Optional[str] = None
    aws_secret_access_key: Optional[str] = None
    aws_region: str = "us-east-1"
    s3_bucket_name: Optional[str] = None

    # Image downloads
    http_timeout_seconds: float = Field(30.0, gt=0)

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Normalize and check the log level name."""
        level = v.upper()
        if level not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"Invalid log level: {v}")
        return level

    @field_validator("aws_access_key_id", "aws_secret_access_key", "s3_bucket_name")
    @classmethod
    def blank_to_none(cls, v: Optional[str]) -> Optional[str]:
        """Treat empty strings as unset."""
        if v is not None and not v.strip():
            return None
        return v

    @property
    def storage_enabled(self) -> bool:
        """Whether enough AWS configuration is present to upload images."""
        return bool(
            self.aws_access_key_id and self.aws_secret_access_key and self.s3_bucket_name
        )

    @classmethod
    def from_env(
        cls,
        environ: Optional[Mapping[str, str]] = None,
        env_file: Optional[Path] = DEFAULT_ENV_FILE,
    ) -> "Settings":
        """
        Build settings from environment variables and an optional env file.

        Args:
            environ: Environment mapping (defaults to os.environ)
            env_file: Dotenv file whose values override the environment

        Returns:
            Settings instance
        """
        environ = os.environ if environ is None else environ

        values: dict[str, str] = {}
        for env_name, field_name in ENV_FIELDS.items():
            if environ.get(env_name) is not None:
                values[field_name] = environ[env_name]

        if env_file is not None and env_file.exists():
            for env_name, value in dotenv_values(env_file).items():
                if env_name in ENV_FIELDS and value is not None:
                    values[ENV_FIELDS[env_name]] = value

        return cls(**values)


# Singleton instance, used by the CLI process only
_settings: Optional[Settings] = None


def get_settings() -> Settings:
    """Get the process-wide settings, loading them on first use."""
    global _settings
    if _settings is None:
        _settings = Settings.from_env()
    return _settings
