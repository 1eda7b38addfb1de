from __future__ import annotations

import logging
from collections.abc import Iterable

from .errors import BatchParseError, DiceError, InvalidDescriptor, MalformedToken, UnknownAggregate
from .models import MAX_DIE_VALUE, Aggregate, Die


logger = logging.getLogger(__name__)

_SEPARATOR = "d"
_DIGITS = frozenset("0123456789")
_MAX_DIGITS = len(str(MAX_DIE_VALUE))


def _parse_field(token: str, field: str, digits: str) -> int:
    # str.isdigit() also accepts superscripts and other Unicode digits.
    if not digits or not set(digits) <= _DIGITS:
        raise MalformedToken(token, f"{field} must be one or more digits, got {digits!r}")
    # Compare lengths first; int() refuses very long digit strings.
    significant = digits.lstrip("0") or "0"
    if len(significant) > _MAX_DIGITS or int(significant) > MAX_DIE_VALUE:
        raise MalformedToken(token, f"{field} is larger than {MAX_DIE_VALUE}")
    return int(significant)


def parse_die(token: str) -> Die:
    """Parse one ``<count>?d<sides>`` token into a :class:`Die`.

    Raises MalformedToken when the token does not follow the notation and
    InvalidDescriptor when it does but the count or sides are out of range.
    """
    if not token:
        raise MalformedToken(token, "empty token")

    count_digits, sep, sides_digits = token.partition(_SEPARATOR)
    if not sep:
        raise MalformedToken(token, f"missing the '{_SEPARATOR}' separator")

    count = _parse_field(token, "count", count_digits) if count_digits else 1
    sides = _parse_field(token, "sides", sides_digits)

    try:
        die = Die(count=count, sides=sides)
    except InvalidDescriptor as e:
        raise e.with_token(token) from None

    logger.debug("parsed %r as %s", token, die)
    return die


def parse_dice(tokens: Iterable[str]) -> list[Die]:
    """Parse a whole batch; any failure rejects the batch before rolling."""

    dice: list[Die] = []
    errors: list[DiceError] = []

    for tok in tokens:
        try:
            dice.append(parse_die(tok))
        except DiceError as e:
            errors.append(e)

    if errors:
        raise BatchParseError(errors)
    return dice


def parse_aggregate(name: str) -> Aggregate:
    try:
        return Aggregate(name.lower())
    except ValueError:
        raise UnknownAggregate(name) from None
