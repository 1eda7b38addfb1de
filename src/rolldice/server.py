from __future__ import annotations

from mcp.server.fastmcp import FastMCP

from .dice import roll_request
from .errors import DiceError


mcp = FastMCP("rolldice")


@mcp.tool()
def roll_dice(dice: list[str], aggregate: str | None = None):
    """Roll every die in ``dice`` (e.g. ["3d6", "d20"]) and report each roll.

    ``aggregate`` reduces each die's rolls to one value: sum, avg, max or min.
    One bad token or an unknown aggregate rejects the whole request.
    """

    try:
        return roll_request(dice, aggregate)
    except DiceError as e:
        raise ValueError(str(e)) from None


def run() -> None:
    mcp.run(transport="stdio")


if __name__ == "__main__":
    run()
