from collections.abc import Callable, Iterator, Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any

from speakable_time.errors import LocaleNotFoundError, TranslationError
from speakable_time.formats import Direction, Part, Syntax, Token, Word
from speakable_time.log import get_logger

logger = get_logger(__name__)

PLURAL_RULES: dict[str, Callable[[int], str]] = {
    # English, German, Spanish, ...: only exactly one is singular
    "one_other": lambda n: "one" if n == 1 else "other",
    # French: zero and one are singular
    "one_upto_one": lambda n: "one" if n <= 1 else "other",
    "other": lambda n: "other",
}


def normalize_locale(tag: str) -> str:
    """Normalize ``en_US.UTF-8`` / ``EN-us`` style tags to ``en-US``."""
    base = tag.split(".")[0].split("@")[0].replace("_", "-").strip()
    language, _, region = base.partition("-")
    return f"{language.lower()}-{region.upper()}" if region else language.lower()


def flatten(data: Mapping[str, Any], prefix: str = "") -> dict[str, str]:
    """Flatten nested mappings into dotted keys: ``{"units": {"day": ...}}``."""
    flat: dict[str, str] = {}
    for key, value in data.items():
        dotted = f"{prefix}{key}"
        if isinstance(value, Mapping):
            flat.update(flatten(value, f"{dotted}."))
        else:
            flat[dotted] = str(value)
    return flat


@dataclass(frozen=True)
class LocaleTable:
    """Read-only key -> string mapping for one locale.

    Attributes:
        locale: Normalized locale tag (e.g., "en", "fr-CA")
        entries: Dotted keys (e.g., "units.day.other") to localized strings
        plural: Name of the plural rule in PLURAL_RULES
    """

    locale: str
    entries: Mapping[str, str] = field(default_factory=dict)
    plural: str = "one_other"

    def __post_init__(self) -> None:
        if self.plural not in PLURAL_RULES:
            valid = ", ".join(sorted(PLURAL_RULES))
            raise ValueError(
                f"Unknown plural rule {self.plural!r} for locale {self.locale!r}. "
                f"Valid rules: {valid}"
            )
        object.__setattr__(self, "locale", normalize_locale(self.locale))
        object.__setattr__(self, "entries", MappingProxyType(dict(self.entries)))

    @classmethod
    def from_mapping(cls, locale: str, data: Mapping[str, Any]) -> "LocaleTable":
        """Build a table from a parsed locale document (nested mappings allowed)."""
        entries = flatten(data)
        plural = entries.pop("plural", "one_other")
        return cls(locale, entries, plural)

    def __contains__(self, key: object) -> bool:
        return key in self.entries

    def lookup(self, key: str) -> str:
        try:
            return self.entries[key]
        except KeyError:
            logger.error("translation_not_found", key=key, locale=self.locale)
            raise TranslationError(self.locale, key) from None

    def plural_category(self, quantity: int) -> str:
        return PLURAL_RULES[self.plural](quantity)


class LocaleRegistry(Mapping[str, LocaleTable]):
    """Immutable collection of locale tables, keyed by normalized tag."""

    def __init__(self, tables: "Mapping[str, LocaleTable] | list[LocaleTable]" = ()):
        items = tables.values() if isinstance(tables, Mapping) else tables
        self._tables: Mapping[str, LocaleTable] = MappingProxyType(
            {table.locale: table for table in items}
        )

    def __getitem__(self, locale: str) -> LocaleTable:
        return self._tables[normalize_locale(locale)]

    def __iter__(self) -> Iterator[str]:
        return iter(self._tables)

    def __len__(self) -> int:
        return len(self._tables)

    def resolve(self, locale: str) -> LocaleTable:
        """Find the table for a locale, trying the bare language as a fallback.

        ``en-US`` resolves to an ``en-US`` table when one exists, else ``en``.
        There is no fallback to an unrelated locale.

        Raises:
            LocaleNotFoundError: If neither the tag nor its language is loaded
        """
        tag = normalize_locale(locale)
        if tag in self._tables:
            return self._tables[tag]
        language = tag.split("-")[0]
        if language in self._tables:
            return self._tables[language]
        raise LocaleNotFoundError(locale, self._tables.keys())


class Translator:
    """Turns a Syntax into prose using a locale table.

    The generator supplies structure and order; every word comes from the
    table. Missing words raise TranslationError rather than being skipped,
    so a locale/generator mismatch can never produce a garbled phrase.
    """

    def __init__(self, registry: LocaleRegistry, default_locale: str = "en"):
        self.registry: LocaleRegistry = registry
        self.default_locale: str = default_locale

    def table(self, locale: str | None = None) -> LocaleTable:
        return self.registry.resolve(locale or self.default_locale)

    def translate(self, syntax: Syntax, locale: str | None = None) -> str:
        table = self.table(locale)
        body = "".join(self._render(part, table) for part in syntax.parts)
        if syntax.direction is Direction.NONE:
            return body

        key = f"relative.{syntax.style}.{syntax.direction.value}"
        template = table.lookup(key)
        if "{duration}" not in template:
            raise TranslationError(table.locale, key, f"template {template!r} has no {{duration}} field")
        try:
            return template.format(duration=body)
        except (KeyError, IndexError, ValueError) as e:
            raise TranslationError(table.locale, key, f"malformed template {template!r}") from e

    def _render(self, part: Part, table: LocaleTable) -> str:
        if isinstance(part, Token):
            unit = part.boundary.label
            if part.abbreviated:
                return f"{part.quantity}{table.lookup(f'abbreviations.{unit}')}"
            category = table.plural_category(part.quantity)
            return f"{part.quantity} {table.lookup(f'units.{unit}.{category}')}"
        if isinstance(part, Word):
            return table.lookup(f"words.{part.value}")
        return part
