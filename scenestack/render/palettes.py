"""
Colour palettes (RGB 0-255) for the reference scene renderer, keyed by the
`palette` name a scene's content gives.
"""
PALETTES: dict[str, list[tuple[int, int, int]]] = {
    "warm_sunset": [
        (255, 120, 80),
        (255, 80, 100),
        (180, 60, 120),
        (100, 40, 100),
    ],
    "ocean": [
        (20, 80, 140),
        (40, 120, 180),
        (80, 160, 220),
        (140, 200, 240),
    ],
    "neon": [
        (255, 0, 128),
        (128, 0, 255),
        (0, 255, 255),
        (255, 255, 0),
    ],
    "night": [
        (10, 10, 30),
        (30, 20, 60),
        (60, 40, 100),
        (100, 80, 140),
    ],
    "corporate": [
        (26, 26, 26),
        (245, 245, 240),
        (212, 175, 55),
        (244, 208, 63),
    ],
    "mono": [
        (240, 240, 240),
        (180, 180, 180),
        (100, 100, 100),
        (40, 40, 40),
    ],
    "default": [
        (60, 60, 80),
        (100, 100, 140),
        (140, 140, 180),
        (200, 200, 220),
    ],
}


def resolve_palette(name: str | None = None, colors: list | None = None) -> list[tuple[int, int, int]]:
    """
    Colour stops for a scene: explicit colors win over a palette name; unknown
    names fall back to "default". Always at least two stops.
    """
    if colors:
        stops = [tuple(int(max(0, min(255, c))) for c in rgb[:3]) for rgb in colors]
    else:
        stops = list(PALETTES.get(name or "default", PALETTES["default"]))
    if len(stops) == 1:
        stops = stops * 2
    return stops
