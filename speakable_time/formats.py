"""Format generators turn a filtered ApproximateState into a Syntax.

A Syntax is the structured, pre-localization form of the phrase: the
generator decides order and separators, the Translator supplies every word.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum

from typing_extensions import override

from speakable_time.boundary import TimeBoundary
from speakable_time.state import ApproximateState


class Direction(Enum):
    PAST = "past"
    FUTURE = "future"
    NONE = "none"


class Word(str, Enum):
    AND = "and"
    NOW = "now"
    ZERO = "zero"


@dataclass(frozen=True, kw_only=True)
class Token:
    boundary: TimeBoundary
    quantity: int
    abbreviated: bool = False

    @property
    def plural(self) -> bool:
        """Pluralization hint; the locale's plural rule has the final say."""
        return self.quantity != 1


Part = Token | Word | str


@dataclass(frozen=True, kw_only=True)
class Syntax:
    parts: tuple[Part, ...]
    direction: Direction = Direction.NONE
    style: str = "coarse"

    @property
    def tokens(self) -> tuple[Token, ...]:
        return tuple(p for p in self.parts if isinstance(p, Token))

    def __str__(self) -> str:
        """Untranslated template, e.g. ``%{coarse.past}(45 %{years} %{and} 4 %{days})``."""
        body = "".join(_placeholder(p) for p in self.parts)
        if self.direction is Direction.NONE:
            return body
        return f"%{{{self.style}.{self.direction.value}}}({body})"


def _placeholder(part: Part) -> str:
    if isinstance(part, Token):
        label = part.boundary.label + ("s" if part.plural else "")
        if part.abbreviated:
            return f"{part.quantity}%{{{part.boundary.label}}}"
        return f"{part.quantity} %{{{label}}}"
    if isinstance(part, Word):
        return f"%{{{part.value}}}"
    return part


class FormatGenerator(ABC):
    """Render an ApproximateState into a Syntax.

    Subclasses set ``style``, which selects the relative-direction wrappers
    (``relative.<style>.past`` / ``relative.<style>.future``) in the locale
    table. Generators must be total: any state renders to some Syntax.
    """

    style: str = "coarse"

    @abstractmethod
    def render(self, state: ApproximateState) -> Syntax:
        pass

    def direction(self, state: ApproximateState) -> Direction:
        if not state.relative:
            return Direction.NONE
        return Direction.PAST if state.is_past else Direction.FUTURE


class CoarseRoundFormat(FormatGenerator):
    """Full words: ``45 years, 9 months and 17 days``."""

    style = "coarse"

    @override
    def render(self, state: ApproximateState) -> Syntax:
        tokens = [
            Token(boundary=c.boundary, quantity=c.quantity) for c in state.non_zero
        ]
        if not tokens:
            return Syntax(parts=(Word.NOW,), style=self.style)

        parts: list[Part] = []
        last = len(tokens) - 1
        for index, token in enumerate(tokens):
            if index == last and index > 0:
                parts.extend((" ", Word.AND, " "))
            elif index > 0:
                parts.append(", ")
            parts.append(token)

        return Syntax(
            parts=tuple(parts), direction=self.direction(state), style=self.style
        )


class FancyDurationFormat(FormatGenerator):
    """Compact abbreviations with no separators: ``45y4d``, ``2h15m``."""

    style = "fancy"

    @override
    def render(self, state: ApproximateState) -> Syntax:
        parts = tuple(
            Token(boundary=c.boundary, quantity=c.quantity, abbreviated=True)
            for c in state.non_zero
        )
        if not parts:
            return Syntax(parts=(Word.ZERO,), style=self.style)
        return Syntax(parts=parts, direction=self.direction(state), style=self.style)
