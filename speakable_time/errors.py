"""Typed failures surfaced by the translation step.

Decomposition, filtering and rendering are total; only looking words up in
a locale table can fail, and those failures are deterministic for a given
configuration, so callers should fix the data rather than retry.
"""

from collections.abc import Iterable


class SpeakableTimeError(Exception):
    pass


class LocaleNotFoundError(SpeakableTimeError, LookupError):
    def __init__(self, locale: str, available: Iterable[str] = ()):
        self.locale: str = locale
        self.available: tuple[str, ...] = tuple(sorted(available))
        listing = ", ".join(self.available) or "(none loaded)"
        super().__init__(
            f"No locale table for {locale!r}.\n"
            f"Available locales: {listing}\n"
            f"Hint: add a {locale}.yml file to your locales directory or pass one of the above."
        )


class TranslationError(SpeakableTimeError, LookupError):
    def __init__(self, locale: str, key: str, reason: str = "missing key"):
        self.locale: str = locale
        self.key: str = key
        super().__init__(
            f"Cannot translate {key!r} in locale {locale!r}: {reason}.\n"
            f"Hint: the format generator and the locale table disagree; "
            f"add the key to {locale}.yml."
        )
