"""Generator settings for jsonmock.

Settings can be passed explicitly or loaded from environment variables
with the ``JSONMOCK_`` prefix (and from a local ``.env`` file).
"""

from __future__ import annotations

from datetime import datetime, timedelta, timezone

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class GeneratorSettings(BaseSettings):
    """Configuration for TemplateGenerator.

    Example:
        >>> # From environment (JSONMOCK_SEED=42, JSONMOCK_LOCALE=de_DE, ...)
        >>> settings = GeneratorSettings()
        >>>
        >>> # Explicit
        >>> settings = GeneratorSettings(seed=42, locale="en_GB")
    """

    model_config = SettingsConfigDict(
        env_prefix="JSONMOCK_",
        env_file=".env",
        extra="ignore",
    )

    seed: int | None = Field(
        default=None,
        description="Random seed; same seed and template produce identical output",
    )
    locale: str = Field(
        default="en_US",
        min_length=2,
        description="Faker locale used for names, companies and addresses",
    )
    reference_time: datetime | None = Field(
        default=None,
        description="Instant that 'new Date()' evaluates to (default: now)",
    )
    max_repeat: int = Field(
        default=10000,
        ge=0,
        description="Largest count a repeat marker may request",
    )
    timezone_offset_minutes: int = Field(
        default=0,
        ge=-14 * 60,
        le=14 * 60,
        description="UTC offset applied to generated dates and the 'Z' format token",
    )

    @field_validator("reference_time")
    @classmethod
    def reference_time_must_be_aware(cls, v: datetime | None) -> datetime | None:
        """Treat naive reference times as UTC."""
        if v is not None and v.tzinfo is None:
            return v.replace(tzinfo=timezone.utc)
        return v

    @property
    def tzinfo(self) -> timezone:
        """Timezone derived from ``timezone_offset_minutes``."""
        return timezone(timedelta(minutes=self.timezone_offset_minutes))

    def now(self) -> datetime:
        """Return the reference time, or the current time when unset."""
        if self.reference_time is not None:
            return self.reference_time.astimezone(self.tzinfo)
        return datetime.now(self.tzinfo)
