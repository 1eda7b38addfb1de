from __future__ import annotations


class DiceError(ValueError):
    """User-facing validation errors (fail-fast, no roll performed)."""


class MalformedToken(DiceError):
    def __init__(self, token: str, reason: str) -> None:
        self.token = token
        self.reason = reason
        super().__init__(f"[MALFORMED_TOKEN] {token!r}: {reason}. Example: '3d6' or 'd20'.")


class InvalidDescriptor(DiceError):
    def __init__(self, count: int, sides: int, reason: str, token: str | None = None) -> None:
        self.count = count
        self.sides = sides
        self.reason = reason
        self.token = token
        subject = repr(token) if token is not None else f"{count}d{sides}"
        super().__init__(f"[INVALID_DESCRIPTOR] {subject}: {reason}.")

    def with_token(self, token: str) -> InvalidDescriptor:
        return InvalidDescriptor(self.count, self.sides, self.reason, token=token)


class UnknownAggregate(DiceError):
    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(
            f"[UNKNOWN_AGGREGATE] {name!r} is not an aggregate function. Use one of: sum, avg, max, min."
        )


class BatchParseError(DiceError):
    """One or more tokens of a batch failed to parse; nothing was rolled."""

    def __init__(self, errors: list[DiceError]) -> None:
        self.errors = errors
        details = "; ".join(str(e) for e in errors)
        super().__init__(f"[MALFORMED_BATCH] {len(errors)} of the dice could not be parsed: {details}")


class EmptySequence(RuntimeError):
    """A reducer was handed zero rolls. Unreachable for a valid Die."""

    def __init__(self, aggregate: str) -> None:
        self.aggregate = aggregate
        super().__init__(f"[EMPTY_SEQUENCE] Cannot apply {aggregate!r} to an empty roll sequence.")
