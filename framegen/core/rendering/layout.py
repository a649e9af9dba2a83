"""
Layout Sizing
=============

Canvas height calculation from the number of text lines.
"""

FRAME_WIDTH = 720
BASE_HEIGHT = 600  # title, info list, button and section headers
LINE_HEIGHT = 25
PADDING = 100
MIN_HEIGHT = 900
MAX_HEIGHT = 5000  # provider stability limit


def calculate_height(text: str) -> int:
    """
    Calculate the frame canvas height for a block of text.

    Every newline-separated segment counts as a line, including a trailing
    empty one. The result is clamped to [MIN_HEIGHT, MAX_HEIGHT]; content that
    does not fit is cut off, it is never re-flowed.

    Args:
        text: Raw user text

    Returns:
        Canvas height in pixels
    """
    lines = len(text.split("\n"))
    height = BASE_HEIGHT + lines * LINE_HEIGHT + PADDING
    return min(max(MIN_HEIGHT, height), MAX_HEIGHT)
