from abc import ABC, abstractmethod
from collections.abc import Callable
from dataclasses import replace
from functools import reduce

from typing_extensions import override

from speakable_time.boundary import TimeBoundary
from speakable_time.state import ApproximateState, decompose

StateFunc = Callable[[ApproximateState], ApproximateState]


class ApproximateFilter(ABC):
    """A pure transformation of an ApproximateState.

    Filters are stateless and must return a new state rather than mutating
    the one they are given. Compose them left to right with ``>>``.
    """

    @abstractmethod
    def apply(self, state: ApproximateState) -> ApproximateState:
        pass

    def __call__(self, state: ApproximateState) -> ApproximateState:
        return self.apply(state)

    def __rshift__(self, other: "ApproximateFilter | StateFunc") -> "Chain":
        return Chain(self, as_filter(other))

    def __rrshift__(self, other: StateFunc) -> "Chain":
        return Chain(as_filter(other), self)


class Round(ApproximateFilter):
    """Report the duration in ``boundary`` alongside any already pinned units.

    The duration is re-decomposed over the pinned boundaries, so time from
    unpinned coarser units folds into the pinned ones and anything finer
    than the finest pinned unit is truncated. ``Round(YEAR) >> Round(DAY)``
    therefore yields years and days, with months and weeks folded into days.

    Args:
        boundary: Unit to report in
        limit: Skip this filter entirely when the boundary's quantity would
            exceed this many units
        half_up: Round the finest pinned unit half-up instead of truncating;
            later filters start from the rounded duration
    """

    def __init__(
        self,
        boundary: TimeBoundary,
        *,
        limit: int | None = None,
        half_up: bool = False,
    ):
        self.boundary: TimeBoundary = boundary
        self.limit: int | None = limit
        self.half_up: bool = half_up

    @override
    def apply(self, state: ApproximateState) -> ApproximateState:
        pinned = state.pinned | {self.boundary}
        seconds = state.seconds
        rounded = decompose(seconds, pinned)

        if self.half_up and rounded.components:
            finest = rounded.components[-1].boundary
            if rounded.remainder * 2 >= finest.seconds:
                seconds = seconds - rounded.remainder + finest.seconds
                rounded = decompose(seconds, pinned)

        component = rounded.get(self.boundary)
        if self.limit is not None and component is not None and component.quantity > self.limit:
            return state

        return replace(
            state, seconds=seconds, components=rounded.components, pinned=pinned
        )

    @override
    def __repr__(self) -> str:
        return f"Round({self.boundary.name})"


class TopRounds(ApproximateFilter):
    """Keep the ``count`` coarsest non-zero components, truncating the rest.

    Leading zero components don't count toward ``count``. With ``ceiling``,
    the duration is first re-decomposed over every boundary up to and
    including it, so nothing coarser can be selected.
    """

    def __init__(self, count: int, *, ceiling: TimeBoundary | None = None):
        self.count: int = count
        self.ceiling: TimeBoundary | None = ceiling

    @override
    def apply(self, state: ApproximateState) -> ApproximateState:
        if self.count <= 0:
            return state

        source = state
        if self.ceiling is not None:
            source = decompose(
                state.seconds, (b for b in TimeBoundary if b <= self.ceiling)
            )

        kept = source.non_zero[: self.count]
        return replace(
            state,
            components=kept,
            pinned=frozenset(c.boundary for c in kept),
        )

    @override
    def __repr__(self) -> str:
        return f"TopRounds({self.count})"


class Relative(ApproximateFilter):
    """Ask the formatter to render the past/future direction."""

    @override
    def apply(self, state: ApproximateState) -> ApproximateState:
        return replace(state, relative=True)

    @override
    def __repr__(self) -> str:
        return "Relative()"


class FunctionFilter(ApproximateFilter):
    """Adapt a plain ``state -> state`` callable to the filter interface."""

    def __init__(self, func: StateFunc):
        self.func: StateFunc = func

    @override
    def apply(self, state: ApproximateState) -> ApproximateState:
        return self.func(state)

    @override
    def __repr__(self) -> str:
        name = getattr(self.func, "__name__", type(self.func).__name__)
        return f"FunctionFilter({name})"


class Chain(ApproximateFilter):
    def __init__(self, *filters: ApproximateFilter):
        flattened: list[ApproximateFilter] = []
        for f in filters:
            if isinstance(f, Chain):
                flattened.extend(f.filters)
            else:
                flattened.append(f)
        self.filters: tuple[ApproximateFilter, ...] = tuple(flattened)

    @override
    def apply(self, state: ApproximateState) -> ApproximateState:
        return reduce(lambda acc, f: f.apply(acc), self.filters, state)

    @override
    def __repr__(self) -> str:
        return " >> ".join(repr(f) for f in self.filters) or "Chain()"


def as_filter(item: "ApproximateFilter | StateFunc") -> ApproximateFilter:
    if isinstance(item, ApproximateFilter):
        return item
    if callable(item):
        return FunctionFilter(item)
    raise TypeError(
        f"Expected an ApproximateFilter or a callable taking an ApproximateState.\n"
        f"Got {type(item).__name__!r}: {item!r}\n"
        f"Hint: wrap custom logic in a function: chain(Round(TimeBoundary.DAY), my_filter)"
    )


def chain(*filters: "ApproximateFilter | StateFunc") -> Chain:
    """Compose filters left to right (equivalent to chaining ``>>``)."""
    return Chain(*(as_filter(f) for f in filters))
