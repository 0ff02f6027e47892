"""Runtime settings loaded from `.env` and environment variables."""

from __future__ import annotations

import logging
import re
from functools import lru_cache
from pathlib import Path

from pydantic import Field, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from sfafkit.exceptions import SettingsError

_FIELD_NUMBER_RE = re.compile(r"^\d{3}$")
DEFAULT_PUBLICATION_REFERENCE = "MCEB Publication 7, June 30, 2005"
DEFAULT_IMPORT_SKIP_FIELDS = "103,107,117,118,373,402,473,901,904,911,924,927,928,956"

logger = logging.getLogger(__name__)


class Settings(BaseSettings):
    """Package settings."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        populate_by_name=True,
    )

    project_name: str = "sfafkit"
    app_env: str = Field(
        default="dev",
        validation_alias="APP_ENV",
        description="Application environment, e.g. 'dev', 'prod'.",
    )

    log_level: str = Field(
        default="INFO",
        validation_alias="LOG_LEVEL",
        description="Logging level, e.g. 'INFO', 'DEBUG'.",
    )
    log_json: bool = Field(
        default=True,
        validation_alias="LOG_JSON",
        description="Enable JSON formatted logs.",
    )
    log_file: str | None = Field(
        default=None,
        validation_alias="LOG_FILE",
        description="File path for log output.",
    )

    reference_data_path: Path | None = Field(
        default=None,
        validation_alias="SFAF_REFERENCE_DATA_PATH",
        description="JSON file overriding the built-in reference data tables.",
    )
    import_skip_fields: str = Field(
        default=DEFAULT_IMPORT_SKIP_FIELDS,
        validation_alias="SFAF_IMPORT_SKIP_FIELDS",
        description="Comma-separated field numbers ignored when importing SFAF text.",
    )
    publication_reference: str = Field(
        default=DEFAULT_PUBLICATION_REFERENCE,
        validation_alias="SFAF_PUBLICATION_REFERENCE",
        description="Publication line written in exported SFAF headers.",
    )

    @field_validator("import_skip_fields")
    @classmethod
    def _validate_import_skip_fields(cls, value: str) -> str:
        """Ensure the skip list only contains three-digit field numbers.

        Args:
            value (str): Raw comma-separated list.

        Raises:
            ValueError: If an entry is not a field number.

        Returns:
            str: Normalized comma-separated list.
        """
        entries = [entry.strip() for entry in value.split(",") if entry.strip()]
        invalid = [entry for entry in entries if not _FIELD_NUMBER_RE.fullmatch(entry)]
        if invalid:
            raise ValueError(f"SFAF_IMPORT_SKIP_FIELDS contains invalid field numbers: {invalid}")  # noqa: TRY003
        return ",".join(entries)

    @property
    def import_skip_field_set(self) -> frozenset[str]:
        """Return the import skip list as a set of field ids."""
        return frozenset(entry for entry in self.import_skip_fields.split(",") if entry)


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return cached settings instance.

    Raises:
        SettingsError: If settings cannot be loaded or validated.

    Returns:
        Settings: The loaded settings instance.
    """
    try:
        return Settings()
    except Exception as exc:
        if _is_missing_settings_error(exc):
            try:
                ensure_env_file_exists()
                return Settings()
            except Exception as retry_exc:
                raise SettingsError(exc=retry_exc) from retry_exc
        raise SettingsError(exc=exc) from exc


def ensure_env_file_exists(
    *,
    env_path: Path = Path(".env"),
    template_path: Path = Path(".env.template"),
) -> None:
    """Create `.env` from template when missing.

    Args:
        env_path (Path): Target environment file path.
        template_path (Path): Template file path.
    """
    if env_path.exists() or not template_path.exists():
        return
    env_path.write_text(template_path.read_text(encoding="utf-8"), encoding="utf-8")
    logger.info(
        "Created environment file from template",
        extra={"env_path": str(env_path), "template_path": str(template_path)},
    )


def _is_missing_settings_error(exc: Exception) -> bool:
    """Return whether the settings failure is due to missing values.

    Args:
        exc (Exception): Caught settings initialization error.

    Returns:
        bool: True when the error represents missing settings values.
    """
    if not isinstance(exc, ValidationError):
        return False
    return any(error.get("type") == "missing" for error in exc.errors())
