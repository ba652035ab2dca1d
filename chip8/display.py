"""Read-side helpers for the 64x32 framebuffer."""

from .state import SCREEN_HEIGHT, SCREEN_WIDTH


def _column_mask(x: int) -> int:
    return 1 << (SCREEN_WIDTH - 1 - x)


def pixel(video: list[int], x: int, y: int) -> bool:
    """Whether the pixel at column x, row y is lit. Coordinates wrap."""
    return bool(video[y % SCREEN_HEIGHT] & _column_mask(x % SCREEN_WIDTH))


def lit_pixels(video: list[int]) -> list[tuple[int, int]]:
    """All lit pixels as (x, y) pairs, row by row."""
    return [
        (x, y)
        for y in range(SCREEN_HEIGHT)
        for x in range(SCREEN_WIDTH)
        if video[y] & _column_mask(x)
    ]


def render_text(video: list[int], on: str = "#", off: str = ".") -> str:
    """Render the framebuffer as 32 lines of 64 characters."""
    lines = []
    for row in video:
        lines.append("".join(
            on if row & _column_mask(x) else off for x in range(SCREEN_WIDTH)
        ))
    return "\n".join(lines)
