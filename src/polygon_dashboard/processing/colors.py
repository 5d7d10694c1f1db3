"""
Colour helpers for legends and new rules.
"""

from typing import List

from ..core import constants


def generate_palette(count: int) -> List[str]:
    """
    Get ``count`` distinct colours.

    The first ten come from the base palette; further entries are spread
    around the hue circle by the golden angle as CSS ``hsl()`` strings.
    """
    if count <= 0:
        return []

    colors = list(constants.BASE_PALETTE)
    if count <= len(colors):
        return colors[:count]

    for i in range(len(colors), count):
        hue = (i * constants.GOLDEN_ANGLE) % 360
        colors.append(f"hsl({hue:g}, 70%, 60%)")
    return colors


def contrast_color(background_color: str) -> str:
    """
    Get black or white text colour for a ``#RRGGBB`` background.

    Raises:
        ValueError: If the colour is not a 6-digit hex string
    """
    hex_value = background_color.lstrip("#")
    if len(hex_value) != 6:
        raise ValueError(f"Expected #RRGGBB colour, got {background_color!r}")

    r = int(hex_value[0:2], 16)
    g = int(hex_value[2:4], 16)
    b = int(hex_value[4:6], 16)

    luminance = (0.299 * r + 0.587 * g + 0.114 * b) / 255
    return "#000000" if luminance > 0.5 else "#ffffff"
