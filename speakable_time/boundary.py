from enum import IntEnum

from speakable_time.util import DAY, HOUR, MINUTE, MONTH, SECOND, WEEK, YEAR


class TimeBoundary(IntEnum):
    """A unit of time granularity, ordered finest to coarsest.

    Boundaries are used both as decomposition units and as rounding targets,
    so they compare naturally: ``TimeBoundary.DAY < TimeBoundary.YEAR``.
    """

    SECOND = 0
    MINUTE = 1
    HOUR = 2
    DAY = 3
    WEEK = 4
    MONTH = 5
    YEAR = 6

    @property
    def seconds(self) -> int:
        """Length of one unit in seconds."""
        return _LENGTHS[self]

    @property
    def label(self) -> str:
        """Lower-case unit name, used as the locale key for this unit."""
        return self.name.lower()

    @classmethod
    def all(cls) -> tuple["TimeBoundary", ...]:
        """Every boundary, coarsest first."""
        return tuple(sorted(cls, reverse=True))

    @classmethod
    def parse(cls, name: str) -> "TimeBoundary":
        key = name.strip().lower()
        if key.endswith("s") and key[:-1] in _NAMES:
            key = key[:-1]
        if key not in _NAMES:
            valid = ", ".join(b.label for b in cls.all())
            raise ValueError(f"Invalid time boundary '{name}'. Valid boundaries: {valid}")
        return _NAMES[key]

    @classmethod
    def highest(cls, seconds: int | float) -> "TimeBoundary | None":
        """Return the coarsest boundary that fits at least once into the duration."""
        magnitude = abs(int(seconds))
        for boundary in cls.all():
            if magnitude >= boundary.seconds:
                return boundary
        return None


_LENGTHS: dict[TimeBoundary, int] = {
    TimeBoundary.SECOND: SECOND,
    TimeBoundary.MINUTE: MINUTE,
    TimeBoundary.HOUR: HOUR,
    TimeBoundary.DAY: DAY,
    TimeBoundary.WEEK: WEEK,
    TimeBoundary.MONTH: MONTH,
    TimeBoundary.YEAR: YEAR,
}

_NAMES: dict[str, TimeBoundary] = {b.label: b for b in TimeBoundary}
