"""Theme system for the oppmap 3D scatter view.

Provides theme presets and the theme data structure that controls the
colors of the scene: background, axes, grid, labels, the highlight accent
and the two-color ROI gradient.

All colors are stored as normalized RGBA tuples (0.0-1.0).
"""

from dataclasses import dataclass


def hex_to_rgba(hex_color: str) -> tuple[float, float, float, float]:
    """Convert hex color string to normalized RGBA tuple.

    Args:
        hex_color: Hex color string (e.g., "#FF5500" or "FF5500")

    Returns:
        RGBA tuple with values in [0.0, 1.0]
    """
    hex_color = hex_color.lstrip("#")
    if len(hex_color) == 6:
        r = int(hex_color[0:2], 16) / 255.0
        g = int(hex_color[2:4], 16) / 255.0
        b = int(hex_color[4:6], 16) / 255.0
        return (r, g, b, 1.0)
    elif len(hex_color) == 8:
        r = int(hex_color[0:2], 16) / 255.0
        g = int(hex_color[2:4], 16) / 255.0
        b = int(hex_color[4:6], 16) / 255.0
        a = int(hex_color[6:8], 16) / 255.0
        return (r, g, b, a)
    else:
        raise ValueError(f"Invalid hex color: {hex_color}")


def blend_colors(
    color1: tuple[float, ...],
    color2: tuple[float, ...],
    factor: float
) -> tuple[float, ...]:
    """Blend two colors by a factor.

    Args:
        color1: First color
        color2: Second color
        factor: Blend factor (0.0 = color1, 1.0 = color2), clamped

    Returns:
        Blended color with as many channels as the inputs
    """
    factor = max(0.0, min(1.0, factor))
    # Weighted form so factor 0 and 1 reproduce the end colors exactly
    return tuple(
        c1 * (1.0 - factor) + c2 * factor
        for c1, c2 in zip(color1, color2)
    )


@dataclass
class Theme:
    """Visual theme configuration for the opportunity map.

    Attributes:
        name: Human-readable theme name
        background_color: Viewport clear color
        axis_color: Axis lines, endpoint cubes and tick marks
        grid_major_color: Border lines of the ground grid
        grid_minor_color: Remaining ground grid lines
        label_color: Label rings and overlay text
        highlight_color: Accent used for highlighted markers
        gradient_low: Marker color at ROI 0 (light end)
        gradient_high: Marker color at ROI 10 ("hot" end)
    """

    name: str
    background_color: tuple[float, float, float, float]
    axis_color: tuple[float, float, float, float]
    grid_major_color: tuple[float, float, float, float]
    grid_minor_color: tuple[float, float, float, float]
    label_color: tuple[float, float, float, float]
    highlight_color: tuple[float, float, float, float]
    gradient_low: tuple[float, float, float, float]
    gradient_high: tuple[float, float, float, float]


# Corndel brand palette (default)
CORNDEL = Theme(
    name="Corndel",
    background_color=hex_to_rgba("#f8f9fa"),
    axis_color=hex_to_rgba("#CE0058"),       # Rubine Red
    grid_major_color=hex_to_rgba("#cccccc"),
    grid_minor_color=hex_to_rgba("#eeeeee"),
    label_color=hex_to_rgba("#1F2A44"),      # Dusk to Dawn
    highlight_color=hex_to_rgba("#E96301"),  # Spanish Orange
    gradient_low=hex_to_rgba("#ddd0c0"),     # Dust Storm
    gradient_high=hex_to_rgba("#CE0058"),
)

# Dark variant for low-light rooms
DARK = Theme(
    name="Dark",
    background_color=hex_to_rgba("#141a2b"),
    axis_color=hex_to_rgba("#e0407a"),
    grid_major_color=hex_to_rgba("#3a4560"),
    grid_minor_color=hex_to_rgba("#262f45"),
    label_color=hex_to_rgba("#ddd0c0"),
    highlight_color=hex_to_rgba("#ff8a2a"),
    gradient_low=hex_to_rgba("#4a3b52"),
    gradient_high=hex_to_rgba("#ff2e7e"),
)

BUILTIN_THEMES: dict[str, Theme] = {
    "corndel": CORNDEL,
    "dark": DARK,
}

DEFAULT_THEME = CORNDEL


def get_theme(name: str) -> Theme:
    """Get a theme by name.

    Raises:
        KeyError: If theme name is not found
    """
    return BUILTIN_THEMES[name]


def list_themes() -> list[str]:
    """List all available theme names."""
    return list(BUILTIN_THEMES.keys())
