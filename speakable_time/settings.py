"""Environment configuration for the process-wide default translator."""

from locale import getlocale
from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict

FALLBACK_LOCALE = "en"


class Settings(BaseSettings):
    """Settings read from ``SPEAKABLE_TIME_*`` environment variables.

    Attributes:
        locale: Default locale tag (e.g., "fr", "en-GB"); the system locale
            is used when unset
        locales_dir: Directory of ``<locale>.yml`` tables replacing the
            packaged ones
    """

    model_config = SettingsConfigDict(
        env_prefix="SPEAKABLE_TIME_",
        env_file=".env",
        extra="ignore",
    )

    locale: str | None = None
    locales_dir: Path | None = None

    def default_locale(self) -> str:
        return self.locale or system_locale() or FALLBACK_LOCALE


def system_locale() -> str | None:
    """Language tag of the process locale, or None under the C/POSIX locale."""
    try:
        language, _ = getlocale()
    except ValueError:
        return None
    if not language or language in ("C", "POSIX"):
        return None
    return language
