from importlib.resources import files

from .boundary import TimeBoundary
from .core import Approximator, from_now, time_diff
from .errors import LocaleNotFoundError, SpeakableTimeError, TranslationError
from .filters import (
    ApproximateFilter,
    Chain,
    FunctionFilter,
    Relative,
    Round,
    TopRounds,
    chain,
)
from .formats import (
    CoarseRoundFormat,
    Direction,
    FancyDurationFormat,
    FormatGenerator,
    Syntax,
    Token,
    Word,
)
from .loader import default_translator, load_locale_file, load_locales, packaged_locales
from .state import ApproximateState, Component, decompose
from .translator import LocaleRegistry, LocaleTable, Translator

# Packaged locale tables, for tools that want to copy or extend them
locales_path = files(__package__) / "locales"

__all__ = [
    "TimeBoundary",
    "Component",
    "ApproximateState",
    "decompose",
    "ApproximateFilter",
    "Round",
    "TopRounds",
    "Relative",
    "FunctionFilter",
    "Chain",
    "chain",
    "FormatGenerator",
    "CoarseRoundFormat",
    "FancyDurationFormat",
    "Direction",
    "Word",
    "Token",
    "Syntax",
    "LocaleTable",
    "LocaleRegistry",
    "Translator",
    "load_locale_file",
    "load_locales",
    "packaged_locales",
    "default_translator",
    "Approximator",
    "from_now",
    "time_diff",
    "SpeakableTimeError",
    "LocaleNotFoundError",
    "TranslationError",
    "locales_path",
]
