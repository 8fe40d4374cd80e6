"""
Builtin transition presentations. Each is a pure function
(progress, direction, **params) -> StyleDescriptor registered by name.

progress may overshoot [0, 1] under back/elastic/spring timing: geometry follows the
overshoot, opacities and clip fractions are clamped since they are physically bounded.
"""
import math

from ..sequence.schema import Direction
from .registry import presentation
from .style import ClipInset, ClipNoise, ClipSweep, HIDDEN, Overlay, StyleDescriptor

# Unit vectors for motion headings (x right, y down)
HEADINGS: dict[str, tuple[int, int]] = {
    "left": (-1, 0),
    "right": (1, 0),
    "up": (0, -1),
    "down": (0, 1),
}

FLASH_COLORS: dict[str, tuple[int, int, int]] = {
    "black": (0, 0, 0),
    "white": (255, 255, 255),
}


def _clamp01(x: float) -> float:
    return min(1.0, max(0.0, x))


def _smooth(p: float) -> float:
    p = _clamp01(p)
    return p * p * (3 - 2 * p)


def _heading(towards: str) -> tuple[int, int]:
    try:
        return HEADINGS[towards]
    except KeyError:
        raise ValueError(f"unknown heading {towards!r}; expected one of {sorted(HEADINGS)}") from None


def _hash_unit(step: int, salt: float) -> float:
    """Deterministic pseudo-random value in [0, 1) from an integer step (fract-sine hash)."""
    n = math.sin(step * 12.9898 + salt * 78.233) * 43758.5453
    return n - math.floor(n)


@presentation("cut")
def cut(progress: float, direction: Direction) -> StyleDescriptor:
    """Hard cut at the midpoint of the window."""
    if direction == Direction.ENTERING:
        return StyleDescriptor() if progress >= 0.5 else HIDDEN
    return StyleDescriptor() if progress < 0.5 else HIDDEN


@presentation("fade")
def fade(progress: float, direction: Direction) -> StyleDescriptor:
    if direction == Direction.ENTERING:
        return StyleDescriptor(opacity=_clamp01(progress))
    return StyleDescriptor(opacity=_clamp01(1 - progress))


@presentation("cross_dissolve")
def cross_dissolve(progress: float, direction: Direction) -> StyleDescriptor:
    s = _smooth(progress)
    return StyleDescriptor(opacity=s if direction == Direction.ENTERING else 1 - s)


@presentation("blur_dissolve")
def blur_dissolve(progress: float, direction: Direction, *, max_blur: float = 20.0) -> StyleDescriptor:
    """Cross-fade with blur peaking mid-transition."""
    s = _smooth(progress)
    blur = max(0.0, math.sin(_clamp01(progress) * math.pi)) * max_blur
    if blur < 1e-9:
        blur = 0.0
    scale = 1 + blur * 0.002  # hides transparent edges introduced by the blur
    opacity = s if direction == Direction.ENTERING else 1 - s
    return StyleDescriptor(opacity=opacity, blur=blur, scale_x=scale, scale_y=scale)


@presentation("slide")
def slide(progress: float, direction: Direction, *, towards: str = "left") -> StyleDescriptor:
    """Both scenes travel towards the heading; the incoming one enters from the opposite edge."""
    dx, dy = _heading(towards)
    if direction == Direction.ENTERING:
        k = -(1 - progress)
    else:
        k = progress
    return StyleDescriptor(translate_x=dx * k, translate_y=dy * k)


@presentation("push")
def push(progress: float, direction: Direction, *, towards: str = "left") -> StyleDescriptor:
    """Like slide, with the outgoing scene dimming as it is pushed out."""
    dx, dy = _heading(towards)
    if direction == Direction.ENTERING:
        k = -(1 - progress)
        return StyleDescriptor(translate_x=dx * k, translate_y=dy * k)
    return StyleDescriptor(
        translate_x=dx * progress,
        translate_y=dy * progress,
        overlay=Overlay((0, 0, 0), 0.4 * _clamp01(progress)),
    )


@presentation("slide_over")
def slide_over(progress: float, direction: Direction, *, towards: str = "left") -> StyleDescriptor:
    """Incoming scene slides over an outgoing scene that recedes and fades in place."""
    dx, dy = _heading(towards)
    if direction == Direction.ENTERING:
        k = -(1 - progress)
        return StyleDescriptor(translate_x=dx * k, translate_y=dy * k)
    p = _clamp01(progress)
    scale = 1 - 0.1 * p
    return StyleDescriptor(
        opacity=1 - p,
        scale_x=scale,
        scale_y=scale,
        overlay=Overlay((0, 0, 0), 0.5 * p),
    )


@presentation("whip_pan")
def whip_pan(progress: float, direction: Direction, *, towards: str = "left", max_blur: float = 40.0) -> StyleDescriptor:
    dx, dy = _heading(towards)
    blur = max(0.0, math.sin(_clamp01(progress) * math.pi)) * max_blur
    if blur < 1e-9:
        blur = 0.0
    k = -(1 - progress) if direction == Direction.ENTERING else progress
    return StyleDescriptor(translate_x=dx * k, translate_y=dy * k, blur=blur)


# wipe heading -> (edge the incoming reveal grows from, edge the outgoing shrinks towards)
_WIPE_EDGES: dict[str, tuple[str, str]] = {
    "left": ("left", "right"),
    "right": ("right", "left"),
    "up": ("top", "bottom"),
    "down": ("bottom", "top"),
}


@presentation("wipe")
def wipe(progress: float, direction: Direction, *, towards: str = "left") -> StyleDescriptor:
    """A hard edge travels towards the heading, revealing the incoming scene behind it."""
    _heading(towards)
    enter_edge, exit_edge = _WIPE_EDGES[towards]
    p = _clamp01(progress)
    if direction == Direction.ENTERING:
        return StyleDescriptor(clip=ClipInset(**{enter_edge: 1 - p}))
    return StyleDescriptor(clip=ClipInset(**{exit_edge: p}))


@presentation("mask_reveal")
def mask_reveal(progress: float, direction: Direction) -> StyleDescriptor:
    """Incoming scene opens from the centre; outgoing scene fades and grows slightly."""
    p = _clamp01(progress)
    if direction == Direction.ENTERING:
        inset = 0.5 * (1 - p)
        return StyleDescriptor(clip=ClipInset(inset, inset, inset, inset))
    scale = 1 + 0.1 * p
    return StyleDescriptor(opacity=1 - p, scale_x=scale, scale_y=scale)


@presentation("clock_wipe")
def clock_wipe(progress: float, direction: Direction) -> StyleDescriptor:
    sweep = 360 * _clamp01(progress)
    if direction == Direction.ENTERING:
        return StyleDescriptor(clip=ClipSweep(0.0, sweep))
    return StyleDescriptor(clip=ClipSweep(sweep, 360.0))


@presentation("dissolve")
def dissolve(
    progress: float, direction: Direction, *, softness: float = 0.08, seed: int = 0, grain: int = 4
) -> StyleDescriptor:
    """
    Noise dissolve: grain-sized cells switch from the outgoing to the incoming
    scene in seeded hash order. softness holds both ends of the window still.
    """
    if not 0 <= softness < 0.5:
        raise ValueError(f"dissolve softness must be in [0, 0.5) (got {softness!r})")
    if grain < 1:
        raise ValueError(f"dissolve grain must be at least 1 pixel (got {grain!r})")
    a = _clamp01((progress - softness) / (1 - 2 * softness))
    if direction == Direction.ENTERING:
        return StyleDescriptor(clip=ClipNoise(0.0, a, seed, grain))
    return StyleDescriptor(clip=ClipNoise(a, 1.0, seed, grain))


@presentation("pixelate")
def pixelate(progress: float, direction: Direction, *, size: float = 10) -> StyleDescriptor:
    """Both scenes break into size-pixel blocks peaking mid-transition while the incoming fades up from black."""
    if size <= 0:
        raise ValueError(f"pixelate size must be positive (got {size!r})")
    p = _clamp01(progress)
    peak = math.sin(p * math.pi)
    if peak < 1e-9:
        peak = 0.0
    scale = max(0.9, 1 - peak * 0.02 * (size / 10))
    if direction == Direction.ENTERING:
        opacity, dim = p, 1 - p
    else:
        opacity, dim = 1 - p, p
    return StyleDescriptor(
        opacity=opacity,
        scale_x=scale,
        scale_y=scale,
        pixel_size=max(1.0, size * peak),
        overlay=Overlay((0, 0, 0), dim),
    )


@presentation("zoom")
def zoom(progress: float, direction: Direction, *, intensity: float = 0.3) -> StyleDescriptor:
    """Outgoing zooms in and darkens; incoming settles from the same enlarged scale."""
    p = _clamp01(progress)
    if direction == Direction.ENTERING:
        scale = 1 + (1 - progress) * intensity
        return StyleDescriptor(opacity=p, scale_x=scale, scale_y=scale, overlay=Overlay((0, 0, 0), 1 - p))
    scale = 1 + progress * intensity
    return StyleDescriptor(opacity=1 - p, scale_x=scale, scale_y=scale, overlay=Overlay((0, 0, 0), p))


@presentation("zoom_in")
def zoom_in(progress: float, direction: Direction, *, intensity: float = 0.5) -> StyleDescriptor:
    """Incoming grows into place; outgoing keeps growing past the camera."""
    if direction == Direction.ENTERING:
        scale = 1 - intensity * 0.4 * (1 - progress)
        return StyleDescriptor(opacity=_clamp01(progress), scale_x=scale, scale_y=scale)
    scale = 1 + intensity * progress
    return StyleDescriptor(opacity=_clamp01(1 - progress), scale_x=scale, scale_y=scale)


@presentation("zoom_out")
def zoom_out(progress: float, direction: Direction, *, intensity: float = 0.5) -> StyleDescriptor:
    """Incoming shrinks into place from large; outgoing recedes."""
    if direction == Direction.ENTERING:
        scale = 1 + intensity * (1 - progress)
        return StyleDescriptor(opacity=_clamp01(progress), scale_x=scale, scale_y=scale)
    scale = 1 - intensity * 0.4 * progress
    return StyleDescriptor(opacity=_clamp01(1 - progress), scale_x=scale, scale_y=scale)


def _flash(progress: float, direction: Direction, color: tuple[int, int, int]) -> StyleDescriptor:
    p = _clamp01(progress)
    if direction == Direction.ENTERING:
        flash = 1 - abs(2 * p - 1)
        return StyleDescriptor(opacity=p, overlay=Overlay(color, flash))
    return StyleDescriptor(opacity=1 - p)


@presentation("flash_black")
def flash_black(progress: float, direction: Direction) -> StyleDescriptor:
    return _flash(progress, direction, FLASH_COLORS["black"])


@presentation("flash_white")
def flash_white(progress: float, direction: Direction) -> StyleDescriptor:
    return _flash(progress, direction, FLASH_COLORS["white"])


@presentation("flip")
def flip(progress: float, direction: Direction, *, axis: str = "horizontal") -> StyleDescriptor:
    """Card flip: outgoing turns edge-on in the first half, incoming turns face-on in the second."""
    if axis not in ("horizontal", "vertical"):
        raise ValueError(f"unknown flip axis {axis!r}; expected 'horizontal' or 'vertical'")
    key = "rotate_y" if axis == "horizontal" else "rotate_x"
    p = _clamp01(progress)
    if direction == Direction.ENTERING:
        if p <= 0.5:
            return StyleDescriptor(opacity=0.0, **{key: -90.0})
        return StyleDescriptor(**{key: -90.0 * (1 - (p - 0.5) * 2)})
    if p >= 0.5:
        return StyleDescriptor(opacity=0.0, **{key: 90.0})
    return StyleDescriptor(**{key: 90.0 * p * 2})


@presentation("directional_warp")
def directional_warp(progress: float, direction: Direction, *, towards: str = "left") -> StyleDescriptor:
    """Stretch-and-smear horizontal warp."""
    if towards not in ("left", "right"):
        raise ValueError(f"directional_warp heading must be 'left' or 'right' (got {towards!r})")
    sign = -1 if towards == "left" else 1
    if direction == Direction.ENTERING:
        inv = 1 - progress
        return StyleDescriptor(translate_x=-sign * inv, scale_x=1 + inv * 4, blur=max(0.0, inv * 20))
    return StyleDescriptor(translate_x=sign * progress, scale_x=1 + progress * 4, blur=max(0.0, progress * 20))


@presentation("glitch")
def glitch(
    progress: float, direction: Direction, *, intensity: float = 1.0, steps: int = 24, seed: int = 0
) -> StyleDescriptor:
    """
    Jittery hard cut. Jitter is a hash of the quantised progress, so the same
    progress always produces the same offsets regardless of render order.
    """
    p = _clamp01(progress)
    amplitude = math.sin(p * math.pi) * 0.05 * intensity
    if abs(amplitude) < 1e-9:
        amplitude = 0.0
    step = int(p * steps)
    jx = (_hash_unit(step, 1.0 + seed) - 0.5) * 2 * amplitude
    jy = (_hash_unit(step, 2.0 + seed) - 0.5) * 2 * amplitude * 0.5
    if direction == Direction.ENTERING:
        visible = p >= 0.5
    else:
        visible = p < 0.5
    return StyleDescriptor(
        opacity=1.0 if visible else 0.0,
        translate_x=jx,
        translate_y=jy,
        overlay=Overlay((255, 255, 255), 0.3 * math.sin(p * math.pi)) if amplitude else None,
    )
