"""
Application configuration using Pydantic settings.

Configuration is loaded from environment variables (or a .env file) with
sensible defaults. Command-line flags passed to `src.main.run` override
the environment, so the server can be started the same way in a container
or from a shell.

Mock mode enables local development without a real bucket.
"""

from functools import lru_cache
from pathlib import Path
from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

PACKAGE_TEMPLATES_DIR = Path(__file__).resolve().parent.parent / "templates"


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    All settings can be overridden via environment variables.
    For lists (like video_suffixes), use comma-separated values in env.
    """

    # Application
    app_title: str = "Bucket Video Player"

    # Web server
    host: str = Field(
        default="0.0.0.0",
        description="IP of host to run webserver on"
    )
    port: int = Field(
        default=8080,
        description="Port to run webserver on"
    )

    # Google Cloud Storage
    credentials_file: str = Field(
        default="key.json",
        description="Path to the service account JSON key. Leave empty to use "
                    "application default credentials (e.g. on Compute Engine)."
    )
    project_id: str = Field(
        default="gmbuell-cloud",
        description="Google Cloud project that owns the bucket"
    )
    bucket_name: str = Field(
        default="bucket.gmbuell.com",
        description="Bucket holding the videos"
    )
    storage_mock_mode: bool = Field(
        default=False,
        description="Use an in-memory bucket instead of Google Cloud Storage. Enables local dev without credentials."
    )

    # URL signing
    google_access_id: str = Field(
        default="",
        description="Service account client email (xx@developer.gserviceaccount.com) used to sign URLs"
    )
    pem_filename: str = Field(
        default="key.pem",
        description="Service account PEM private key used to sign URLs"
    )
    signed_url_expiry_seconds: int = Field(
        default=6 * 60 * 60,
        gt=0,
        description="Lifetime of generated playback URLs. Six hours covers a long viewing session."
    )

    # Catalog
    video_suffixes: str = Field(
        default=".mp4",
        description="Comma-separated file suffixes treated as playable video (case-sensitive)"
    )
    templates_dir: Optional[str] = Field(
        default=None,
        description="Directory containing index.html and play.html. Defaults to the packaged templates."
    )

    # Logging
    log_level: str = Field(
        default="INFO",
        description="Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)"
    )

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    @property
    def video_suffixes_list(self) -> list[str]:
        """Parse comma-separated video suffixes into a list."""
        return [suffix.strip() for suffix in self.video_suffixes.split(",") if suffix.strip()]

    @property
    def templates_path(self) -> Path:
        if self.templates_dir:
            return Path(self.templates_dir)
        return PACKAGE_TEMPLATES_DIR

    def validate_required_fields(self) -> list[str]:
        """
        Validate that required fields are set.

        Returns list of missing required fields. Storage credentials are
        only checked outside mock mode; an empty credentials file is allowed
        because application default credentials can stand in for it.
        """
        missing = []

        if not self.google_access_id:
            missing.append("GOOGLE_ACCESS_ID")
        if not self.pem_filename:
            missing.append("PEM_FILENAME")
        if not self.storage_mock_mode:
            if not self.bucket_name:
                missing.append("BUCKET_NAME")
            if not self.project_id:
                missing.append("PROJECT_ID")

        return missing


@lru_cache()
def get_settings() -> Settings:
    """
    Get cached settings instance.

    Settings don't change during runtime, so they are loaded once per process.
    For tests, call get_settings.cache_clear() to reset.
    """
    return Settings()
