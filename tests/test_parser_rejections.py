import pytest

from rolldice.errors import (
    BatchParseError,
    DiceError,
    InvalidDescriptor,
    MalformedToken,
    UnknownAggregate,
)
from rolldice.models import MAX_DIE_VALUE, Die
from rolldice.parser import parse_aggregate, parse_dice, parse_die


@pytest.mark.parametrize(
    ("token", "error", "prefix"),
    [
        ("5d", MalformedToken, "[MALFORMED_TOKEN]"),
        ("5d-20", MalformedToken, "[MALFORMED_TOKEN]"),
        ("-5d20", MalformedToken, "[MALFORMED_TOKEN]"),
        ("d1", InvalidDescriptor, "[INVALID_DESCRIPTOR]"),
        ("d0", InvalidDescriptor, "[INVALID_DESCRIPTOR]"),
        ("0d6", InvalidDescriptor, "[INVALID_DESCRIPTOR]"),
        ("", MalformedToken, "[MALFORMED_TOKEN]"),
        ("bad", MalformedToken, "[MALFORMED_TOKEN]"),
        ("20", MalformedToken, "[MALFORMED_TOKEN]"),
        ("3D6", MalformedToken, "[MALFORMED_TOKEN]"),
        ("1.5d6", MalformedToken, "[MALFORMED_TOKEN]"),
        ("2d6.5", MalformedToken, "[MALFORMED_TOKEN]"),
        (" 3d6", MalformedToken, "[MALFORMED_TOKEN]"),
        ("3d6 ", MalformedToken, "[MALFORMED_TOKEN]"),
        ("3d6d", MalformedToken, "[MALFORMED_TOKEN]"),
        ("2d6+3", MalformedToken, "[MALFORMED_TOKEN]"),
        ("²d6", MalformedToken, "[MALFORMED_TOKEN]"),
        (f"d{MAX_DIE_VALUE + 1}", MalformedToken, "[MALFORMED_TOKEN]"),
        (f"{MAX_DIE_VALUE + 1}d6", MalformedToken, "[MALFORMED_TOKEN]"),
        ("d" + "9" * 5000, MalformedToken, "[MALFORMED_TOKEN]"),
        ("9" * 5000 + "d6", MalformedToken, "[MALFORMED_TOKEN]"),
    ],
)
def test_parse_rejections(token, error, prefix):
    with pytest.raises(error) as exc:
        parse_die(token)
    assert str(exc.value).startswith(prefix)
    assert exc.value.token == token


def test_malformed_reason_names_the_field():
    with pytest.raises(MalformedToken) as exc:
        parse_die("5d")
    assert "sides" in exc.value.reason

    with pytest.raises(MalformedToken) as exc:
        parse_die("x3d6")
    assert "count" in exc.value.reason


@pytest.mark.parametrize(("count", "sides"), [(0, 6), (-1, 6), (1, 1), (3, 0), (2, -4)])
def test_die_construction_rejects_out_of_range(count, sides):
    with pytest.raises(InvalidDescriptor) as exc:
        Die(count=count, sides=sides)
    assert exc.value.count == count
    assert exc.value.sides == sides


def test_batch_rejects_whole_batch_and_names_offender():
    with pytest.raises(BatchParseError) as exc:
        parse_dice(["3d6", "bad"])
    assert len(exc.value.errors) == 1
    assert exc.value.errors[0].token == "bad"
    assert "'bad'" in str(exc.value)


def test_batch_rejects_huge_count():
    with pytest.raises(BatchParseError) as exc:
        parse_dice(["3d6", "9" * 5000 + "d6"])
    assert isinstance(exc.value.errors[0], MalformedToken)
    assert "larger than" in exc.value.errors[0].reason


def test_batch_reports_every_offender_in_order():
    with pytest.raises(BatchParseError) as exc:
        parse_dice(["x", "2d6", "d1", "5d"])
    assert [e.token for e in exc.value.errors] == ["x", "d1", "5d"]
    assert isinstance(exc.value.errors[1], InvalidDescriptor)


@pytest.mark.parametrize("name", ["", "total", "mean", "sum ", "average"])
def test_unknown_aggregate(name):
    with pytest.raises(UnknownAggregate) as exc:
        parse_aggregate(name)
    assert str(exc.value).startswith("[UNKNOWN_AGGREGATE]")
    assert exc.value.name == name


def test_user_errors_are_value_errors():
    assert issubclass(DiceError, ValueError)
    for error in (MalformedToken, InvalidDescriptor, UnknownAggregate, BatchParseError):
        assert issubclass(error, DiceError)
