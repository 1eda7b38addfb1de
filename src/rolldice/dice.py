from __future__ import annotations

import logging
import random
import secrets
import uuid
from collections.abc import Sequence
from datetime import datetime, timezone
from typing import Any

from .errors import EmptySequence
from .models import Aggregate, Die, RandomSource, Rolls
from .parser import parse_aggregate, parse_dice


logger = logging.getLogger(__name__)


class SystemRandomSource:
    """OS-entropy backed source; the default for real rolls."""

    name = "secrets.SystemRandom"

    def __init__(self) -> None:
        self._rng = secrets.SystemRandom()

    def next_in_range(self, low: int, high: int) -> int:
        return self._rng.randint(low, high)


class SeededRandomSource:
    """Reproducible source for ``--seed`` runs."""

    name = "random.Random"

    def __init__(self, seed: int) -> None:
        self.seed = seed
        self._rng = random.Random(seed)

    def next_in_range(self, low: int, high: int) -> int:
        return self._rng.randint(low, high)


def _utc_timestamp() -> str:
    return datetime.now(timezone.utc).strftime("%Y-%m-%dT%H:%M:%SZ")


def roll(die: Die, rng: RandomSource) -> Rolls:
    rolls: Rolls = []
    for _ in range(die.count):
        value = rng.next_in_range(1, die.sides)
        if not 1 <= value <= die.sides:
            raise ValueError(f"random source returned {value}, outside [1, {die.sides}] for {die}")
        rolls.append(value)
    logger.debug("rolled %s: %s", die, rolls)
    return rolls


def _format_mean(value: float) -> str:
    # 4.0 renders as "4", 3.5 as "3.5".
    if value.is_integer():
        return str(int(value))
    return repr(value)


def aggregate(selector: Aggregate | None, rolls: Sequence[int]) -> str:
    """Render rolls raw (selector None) or reduced to a single value."""

    if selector is None:
        return " ".join(str(r) for r in rolls)
    if not rolls:
        raise EmptySequence(selector.value)

    if selector is Aggregate.SUM:
        return str(sum(rolls))
    if selector is Aggregate.AVG:
        return _format_mean(sum(rolls) / len(rolls))
    if selector is Aggregate.MAX:
        return str(max(rolls))
    if selector is Aggregate.MIN:
        return str(min(rolls))
    raise ValueError(f"unhandled aggregate {selector!r}")


def format_line(die: Die, result: str) -> str:
    return f"{die} {result}"


def roll_lines(tokens: Sequence[str], selector: Aggregate | None, rng: RandomSource) -> list[str]:
    """Parse every token, then roll each die. Raises DiceError before any roll."""

    dice = parse_dice(tokens)
    return [format_line(die, aggregate(selector, roll(die, rng))) for die in dice]


def roll_request(
    tokens: Sequence[str],
    aggregate_name: str | None = None,
    rng: RandomSource | None = None,
) -> dict[str, Any]:
    """Parse, validate, then roll. Raises DiceError for invalid input."""

    selector = parse_aggregate(aggregate_name) if aggregate_name is not None else None
    dice = parse_dice(tokens)

    if rng is None:
        rng = SystemRandomSource()

    results: list[dict[str, Any]] = []
    lines: list[str] = []
    for die in dice:
        rolls = roll(die, rng)
        results.append(
            {
                "die": str(die),
                "count": die.count,
                "sides": die.sides,
                "rolls": rolls,
                "result": aggregate(selector, rolls),
            }
        )
        lines.append(format_line(die, results[-1]["result"]))

    return {
        "request_id": uuid.uuid4().hex,
        "timestamp": _utc_timestamp(),
        "input": list(tokens),
        "aggregate": selector.value if selector is not None else None,
        "rng": {
            "source": getattr(rng, "name", type(rng).__name__),
        },
        "results": results,
        "lines": lines,
    }
