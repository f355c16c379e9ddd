from collections.abc import Iterable, Iterator
from dataclasses import dataclass, field

from speakable_time.boundary import TimeBoundary


@dataclass(frozen=True, kw_only=True)
class Component:
    boundary: TimeBoundary
    quantity: int

    def __post_init__(self) -> None:
        if self.quantity < 0:
            raise ValueError(
                f"Component quantity must be >= 0, got {self.quantity} "
                f"for {self.boundary.label}"
            )

    @property
    def seconds(self) -> int:
        return self.quantity * self.boundary.seconds

    def __str__(self) -> str:
        return f"{self.quantity} {self.boundary.label}"


@dataclass(frozen=True, kw_only=True)
class ApproximateState:
    """The intermediate value threaded through the filter chain.

    Attributes:
        seconds: Absolute duration in whole seconds. Filters recompute from
            this rather than from the components, so they never compound
            earlier truncation.
        is_past: True when the duration points backwards (or is zero)
        components: Reported quantities, coarsest to finest, at most one
            per boundary
        relative: True once a Relative filter asked for a direction marker
        pinned: Boundaries a selecting filter (Round, TopRounds) chose to
            report in; empty straight out of decompose()
    """

    seconds: int
    is_past: bool
    components: tuple[Component, ...] = ()
    relative: bool = False
    pinned: frozenset[TimeBoundary] = field(default_factory=frozenset)

    def __post_init__(self) -> None:
        if self.seconds < 0:
            raise ValueError(
                f"ApproximateState.seconds is an absolute duration, got {self.seconds}.\n"
                f"Hint: carry the sign in is_past instead."
            )
        boundaries = [c.boundary for c in self.components]
        if boundaries != sorted(set(boundaries), reverse=True):
            order = ", ".join(b.label for b in boundaries)
            raise ValueError(
                f"Components must be unique and ordered coarsest to finest.\n"
                f"Got: {order}"
            )

    def __iter__(self) -> Iterator[Component]:
        return iter(self.components)

    def __len__(self) -> int:
        return len(self.components)

    def get(self, boundary: TimeBoundary) -> Component | None:
        for component in self.components:
            if component.boundary == boundary:
                return component
        return None

    @property
    def boundaries(self) -> tuple[TimeBoundary, ...]:
        return tuple(c.boundary for c in self.components)

    @property
    def non_zero(self) -> tuple[Component, ...]:
        return tuple(c for c in self.components if c.quantity)

    @property
    def remainder(self) -> int:
        """Seconds not accounted for by any component."""
        return self.seconds - sum(c.seconds for c in self.components)


def decompose(
    seconds: int | float,
    boundaries: Iterable[TimeBoundary] | None = None,
) -> ApproximateState:
    """Split a signed duration into one component per boundary.

    Divides greedily, coarsest boundary first: each quotient becomes that
    boundary's quantity and the remainder carries to the next finer one.
    Sub-second fractions are truncated before dividing. A zero duration
    counts as past.

    Example:
        >>> state = decompose(-2 * 86400 - 30)
        >>> state.is_past, [str(c) for c in state.non_zero]
        (True, ['2 day', '30 second'])
    """
    is_past = seconds <= 0
    total = int(abs(seconds))
    selected = TimeBoundary.all() if boundaries is None else sorted(set(boundaries), reverse=True)

    remaining = total
    components: list[Component] = []
    for boundary in selected:
        quantity, remaining = divmod(remaining, boundary.seconds)
        components.append(Component(boundary=boundary, quantity=quantity))

    return ApproximateState(seconds=total, is_past=is_past, components=tuple(components))
