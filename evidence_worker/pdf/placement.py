"""Anchor resolution for text drawn onto a page.

Coordinates are in PDF user space: origin at the bottom-left corner, y grows
upwards, and the returned y is the text baseline.
"""

from dataclasses import dataclass
from enum import Enum

PAGE_MARGIN = 30.0


class Placement(str, Enum):
    TOP_LEFT = "top-left"
    TOP_CENTER = "top-center"
    TOP_RIGHT = "top-right"
    BOTTOM_LEFT = "bottom-left"
    BOTTOM_CENTER = "bottom-center"
    BOTTOM_RIGHT = "bottom-right"
    CENTER = "center"

    @classmethod
    def parse(cls, value: str) -> "Placement":
        """Return the placement named by *value*.

        Raises:
            ValueError: if *value* is not a known placement.
        """
        try:
            return cls(value)
        except ValueError:
            raise ValueError(
                f"Unknown placement '{value}'. Choose from: {[p.value for p in cls]}"
            ) from None


@dataclass(frozen=True)
class Anchor:
    x: float
    y: float


def resolve_anchor(
    placement: Placement,
    page_width: float,
    page_height: float,
    text_width: float,
    font_size: float,
) -> Anchor:
    """Resolve where a label of *text_width* starts on a page."""
    if placement is Placement.CENTER:
        return Anchor(
            x=(page_width - text_width) / 2,
            y=(page_height - font_size) / 2,
        )

    vertical, horizontal = placement.value.split("-")
    if horizontal == "left":
        x = PAGE_MARGIN
    elif horizontal == "center":
        x = (page_width - text_width) / 2
    else:
        x = page_width - PAGE_MARGIN - text_width

    if vertical == "top":
        y = page_height - PAGE_MARGIN - font_size
    else:
        y = PAGE_MARGIN

    return Anchor(x=x, y=y)
