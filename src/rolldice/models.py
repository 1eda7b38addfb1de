from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Protocol, TypeAlias

from .errors import InvalidDescriptor


# Widest count/sides accepted: an unsigned 32-bit integer.
MAX_DIE_VALUE: int = 2**32 - 1

MIN_COUNT: int = 1
MIN_SIDES: int = 2


class Aggregate(Enum):
    SUM = "sum"
    AVG = "avg"
    MAX = "max"
    MIN = "min"


AGGREGATE_NAMES: tuple[str, ...] = tuple(a.value for a in Aggregate)

Rolls: TypeAlias = list[int]


class RandomSource(Protocol):
    def next_in_range(self, low: int, high: int) -> int:
        """Return a uniform integer in [low, high], both inclusive."""
        ...


@dataclass(frozen=True)
class Die:
    count: int
    sides: int

    def __post_init__(self) -> None:
        if self.count < MIN_COUNT:
            raise InvalidDescriptor(
                self.count, self.sides, f"dice count must be at least {MIN_COUNT}"
            )
        if self.sides < MIN_SIDES:
            raise InvalidDescriptor(
                self.count, self.sides, f"a die needs at least {MIN_SIDES} sides"
            )

    def __str__(self) -> str:
        return f"{self.count}d{self.sides}"
