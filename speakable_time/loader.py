"""Locale table loading.

Tables are YAML documents named ``<locale>.yml``. The packaged set lives in
``speakable_time/locales``; a different directory can replace it through
``SPEAKABLE_TIME_LOCALES_DIR``. The process-wide default translator is built
once, on first use, and never changes afterwards.
"""

import threading
from importlib.resources import files
from importlib.resources.abc import Traversable
from pathlib import Path

import yaml

from speakable_time.log import get_logger
from speakable_time.settings import FALLBACK_LOCALE, Settings
from speakable_time.translator import LocaleRegistry, LocaleTable, Translator

logger = get_logger(__name__)

SUFFIXES = (".yml", ".yaml")


def _stem(name: str) -> str:
    for suffix in SUFFIXES:
        if name.endswith(suffix):
            return name[: -len(suffix)]
    return name


def load_locale_file(path: Path | Traversable) -> LocaleTable:
    """Parse one locale file; the locale tag is the file name without suffix.

    Raises:
        ValueError: If the file is not valid YAML or not a mapping
    """
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8"))
    except yaml.YAMLError as e:
        logger.error("yaml_parse_error", file=str(path), error=str(e))
        raise ValueError(f"Failed to parse locale file {path}: {e}") from e

    if not isinstance(data, dict):
        raise ValueError(
            f"Locale file {path} must contain a mapping, got {type(data).__name__}.\n"
            f"Expected keys: plural, units, abbreviations, words, relative"
        )

    table = LocaleTable.from_mapping(_stem(path.name), data)
    logger.debug("loaded_locale", locale=table.locale, keys=len(table.entries))
    return table


def load_locales(directory: Path | Traversable) -> LocaleRegistry:
    """Load every ``*.yml``/``*.yaml`` file in a directory into a registry.

    Raises:
        ValueError: If the directory is missing or holds no locale files
    """
    if not directory.is_dir():
        raise ValueError(f"Locales directory not found: {directory}")

    tables = [
        load_locale_file(entry)
        for entry in sorted(directory.iterdir(), key=lambda e: e.name)
        if entry.is_file() and entry.name.endswith(SUFFIXES)
    ]
    if not tables:
        raise ValueError(f"No locale files (*.yml) found in {directory}")

    logger.info(
        "loaded_locales",
        directory=str(directory),
        locales=sorted(t.locale for t in tables),
    )
    return LocaleRegistry(tables)


def packaged_locales() -> LocaleRegistry:
    return load_locales(files(__package__) / "locales")


_lock = threading.Lock()
_default: Translator | None = None


def default_translator() -> Translator:
    """Return the process-wide translator, building it on first call.

    Initialization happens exactly once even under concurrent first access;
    the result is read-only and shared by every caller afterwards.
    """
    global _default
    if _default is None:
        with _lock:
            if _default is None:
                settings = Settings()
                registry = (
                    load_locales(settings.locales_dir)
                    if settings.locales_dir is not None
                    else packaged_locales()
                )
                _default = Translator(registry, pick_locale(settings, registry))
                logger.info("initialized_default_translator", locale=_default.default_locale)
    return _default


def pick_locale(settings: Settings, registry: LocaleRegistry) -> str:
    """Choose the default locale for a registry from the configured settings."""
    # An explicitly configured locale is kept even when missing so the
    # mistake surfaces as LocaleNotFoundError; a detected one may fall back.
    chosen = settings.default_locale()
    if settings.locale is not None:
        return chosen
    try:
        registry.resolve(chosen)
    except LookupError:
        logger.info("system_locale_unavailable", locale=chosen, fallback=FALLBACK_LOCALE)
        return FALLBACK_LOCALE
    return chosen
