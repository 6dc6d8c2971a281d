"""
Structured outcome codes for line label placement.
Use these keys in return values; map to user-facing messages in the CLI.
"""

# Known outcome keys
NO_FITTING_SEGMENT = "no_fitting_segment"
OUT_OF_TILE = "out_of_tile"
LINE_EXHAUSTED = "line_exhausted"
PRUNED_BY_COLLISION = "pruned_by_collision"
EMPTY_LINE = "empty_line"

# User-facing messages (short, actionable)
USER_MESSAGES: dict[str, str] = {
    NO_FITTING_SEGMENT: "No segment of the line fits the label. Try a larger line_exceed or a smaller label.",
    OUT_OF_TILE: "Label box would leave the tile bounds.",
    LINE_EXHAUSTED: "No further positions along this line.",
    PRUNED_BY_COLLISION: "Label overlaps an existing label and was dropped.",
    EMPTY_LINE: "Line has fewer than two points.",
}


def user_message(error_key: str | None, fallback: str = "Something went wrong.") -> str:
    """Return a user-facing message for the given error key."""
    if not error_key:
        return fallback
    return USER_MESSAGES.get(error_key, fallback)
