from collections.abc import Callable
from datetime import datetime, timedelta
from typing import Any

from speakable_time.filters import ApproximateFilter, Chain, chain
from speakable_time.formats import FormatGenerator, Syntax
from speakable_time.loader import default_translator
from speakable_time.state import ApproximateState, decompose
from speakable_time.translator import Translator

Duration = int | float | timedelta


class Approximator:
    """Configured pipeline from a duration to a localized phrase.

    Build one at startup and reuse it; it holds no per-call state, so a
    single instance can be shared across threads.

    Example:
        >>> approx = Approximator(
        ...     CoarseRoundFormat(), Round(TimeBoundary.DAY), Relative()
        ... )
        >>> approx.format(-2 * DAY)
        '2 days ago'
    """

    def __init__(
        self,
        generator: FormatGenerator,
        *filters: ApproximateFilter | Callable[[ApproximateState], ApproximateState],
        translator: Translator | None = None,
    ):
        if not isinstance(generator, FormatGenerator):
            raise TypeError(
                f"Approximator needs a FormatGenerator as its first argument.\n"
                f"Got {type(generator).__name__!r}: {generator!r}\n"
                f"Hint: Approximator(CoarseRoundFormat(), Round(TimeBoundary.DAY), Relative())"
            )
        self.generator: FormatGenerator = generator
        self.chain: Chain = chain(*filters)
        self._translator: Translator | None = translator

    @property
    def filters(self) -> tuple[ApproximateFilter, ...]:
        return self.chain.filters

    @property
    def translator(self) -> Translator:
        return self._translator if self._translator is not None else default_translator()

    def approximate(self, duration: Duration) -> ApproximateState:
        return self.chain.apply(decompose(_seconds(duration)))

    def syntax(self, duration: Duration) -> Syntax:
        return self.generator.render(self.approximate(duration))

    def format(self, duration: Duration, locale: str | None = None) -> str:
        """Render a signed duration (negative means past) as a phrase.

        Raises:
            LocaleNotFoundError: If the locale has no table
            TranslationError: If the table lacks a word the generator needs
        """
        return self.translator.translate(self.syntax(duration), locale)

    def difference(
        self, moment: datetime, against: datetime, locale: str | None = None
    ) -> str:
        """Describe ``moment`` relative to ``against`` (earlier means past)."""
        return self.format(moment - against, locale)

    def from_now(self, moment: datetime, locale: str | None = None) -> str:
        return self.difference(moment, datetime.now(moment.tzinfo), locale)

    def __repr__(self) -> str:
        return f"Approximator({type(self.generator).__name__}(), {self.chain!r})"


def _seconds(duration: Any) -> int | float:
    if isinstance(duration, timedelta):
        return duration.total_seconds()
    if isinstance(duration, (int, float)) and not isinstance(duration, bool):
        return duration
    raise TypeError(
        f"Duration must be seconds (int or float) or a timedelta.\n"
        f"Got {type(duration).__name__!r}: {duration!r}\n"
        f"Hint: pass later - earlier, or use approximator.difference(later, earlier)"
    )


def from_now(moment: datetime, approximator: Approximator, locale: str | None = None) -> str:
    """Describe ``moment`` relative to the current time."""
    return approximator.from_now(moment, locale)


def time_diff(
    moment: datetime,
    against: datetime,
    approximator: Approximator,
    locale: str | None = None,
) -> str:
    """Describe ``moment`` relative to ``against``."""
    return approximator.difference(moment, against, locale)
