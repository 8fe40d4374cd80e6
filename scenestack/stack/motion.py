"""
Intra-scene content motion: (local_frame, scene_duration, **params) -> ContentTransform.
Runs uniformly across the whole scene and knows nothing about neighbouring scenes
or transitions; the scene stack combines it with the cross-scene presentation style.
"""
import math
from dataclasses import dataclass
from typing import Callable

from ..timing.easing import EasingFn, back_out, cubic_in, cubic_out, get_easing, quad_in, smoothstep


@dataclass(frozen=True)
class ContentTransform:
    """
    zoom: 1 = no zoom; >1 = zoom in; <1 = zoom out
    pan_x, pan_y: offset in 0-1 normalized space
    rotate: rotation in radians
    opacity: content opacity 0-1
    """
    zoom: float = 1.0
    pan_x: float = 0.0
    pan_y: float = 0.0
    rotate: float = 0.0
    opacity: float = 1.0


IDENTITY = ContentTransform()

ContentMotion = Callable[..., ContentTransform]


def _scene_progress(local_frame: int, scene_duration: int) -> float:
    """0 at the first frame, 1 at the scene end; clamped."""
    if scene_duration <= 0:
        return 1.0
    return min(1.0, max(0.0, local_frame / scene_duration))


def _ramp(local_frame: int, start: int, length: int, easing: EasingFn) -> float:
    if length <= 0:
        return 1.0 if local_frame >= start else 0.0
    return easing(min(1.0, max(0.0, (local_frame - start) / length)))


def static(local_frame: int, scene_duration: int) -> ContentTransform:
    return IDENTITY


def ken_burns(
    local_frame: int,
    scene_duration: int,
    *,
    zoom_amount: float = 0.06,
    y_drift: tuple[float, float] = (0.05, -0.05),
    zoom_direction: str = "in",
    easing: str = "smoothstep",
) -> ContentTransform:
    """Slow zoom plus vertical drift across the whole scene."""
    t = _scene_progress(local_frame, scene_duration)
    p = get_easing(easing)(t)
    if zoom_direction == "in":
        zoom = 1 + p * zoom_amount
    else:
        zoom = 1 + zoom_amount - p * zoom_amount
    y0, y1 = y_drift
    return ContentTransform(zoom=zoom, pan_y=y0 + (y1 - y0) * t)


def zoom_out(local_frame: int, scene_duration: int, *, zoom_amount: float = 0.06) -> ContentTransform:
    return ken_burns(local_frame, scene_duration, zoom_amount=zoom_amount, y_drift=(0.0, 0.0), zoom_direction="out")


def drift(
    local_frame: int,
    scene_duration: int,
    *,
    dx: float = 0.04,
    dy: float = 0.0,
) -> ContentTransform:
    """Linear drift from -d/2 to +d/2."""
    t = _scene_progress(local_frame, scene_duration)
    return ContentTransform(pan_x=dx * (t - 0.5), pan_y=dy * (t - 0.5))


def fade(
    local_frame: int,
    scene_duration: int,
    *,
    fade_in: int = 18,
    fade_out: int = 12,
    start_scale: float = 0.94,
    end_scale: float = 1.12,
    overshoot: float = 1.2,
) -> ContentTransform:
    """
    Fade in with a back-eased scale settle, fade out while scaling up.
    Opacity is the minimum of the two ramps so short scenes never pop.
    """
    fade_out_start = scene_duration - fade_out
    in_opacity = _ramp(local_frame, 0, fade_in, cubic_out)
    in_scale = start_scale + (1 - start_scale) * _ramp(local_frame, 0, fade_in, lambda t: back_out(t, overshoot))
    out_opacity = 1 - _ramp(local_frame, fade_out_start, fade_out, cubic_in)
    out_scale = 1 + (end_scale - 1) * _ramp(local_frame, fade_out_start, fade_out, quad_in)
    fading_out = local_frame >= fade_out_start
    return ContentTransform(
        zoom=out_scale if fading_out else in_scale,
        opacity=min(in_opacity, out_opacity),
    )


# Camera moves. Time axis is scene progress 0-1, so the move spans the scene
# whatever its length.
def pan(local_frame: int, scene_duration: int, *, amount: float = 0.2) -> ContentTransform:
    t = _scene_progress(local_frame, scene_duration)
    return ContentTransform(pan_x=amount * math.sin(t * math.pi - math.pi / 2))


def dolly(local_frame: int, scene_duration: int, *, amount: float = 0.25) -> ContentTransform:
    """Push forward."""
    t = _scene_progress(local_frame, scene_duration)
    return ContentTransform(zoom=1 + amount * smoothstep(t))


def crane(local_frame: int, scene_duration: int, *, amount: float = 0.15) -> ContentTransform:
    """Vertical rise with a slight zoom."""
    t = _scene_progress(local_frame, scene_duration)
    return ContentTransform(zoom=1 + 0.1 * math.sin(t * math.pi), pan_y=amount * smoothstep(t))


def tilt(local_frame: int, scene_duration: int, *, amount: float = 0.18) -> ContentTransform:
    t = _scene_progress(local_frame, scene_duration)
    return ContentTransform(pan_y=amount * math.sin(t * math.pi - math.pi / 2))


def truck(local_frame: int, scene_duration: int, *, amount: float = 0.22) -> ContentTransform:
    """Lateral move."""
    t = _scene_progress(local_frame, scene_duration)
    return ContentTransform(pan_x=amount * (2 * smoothstep(t) - 1))


def pedestal(local_frame: int, scene_duration: int, *, amount: float = 0.12) -> ContentTransform:
    t = _scene_progress(local_frame, scene_duration)
    return ContentTransform(pan_y=amount * smoothstep(t))


def arc(local_frame: int, scene_duration: int, *, amount: float = 0.15) -> ContentTransform:
    t = _scene_progress(local_frame, scene_duration)
    angle = t * math.pi
    return ContentTransform(pan_x=amount * -math.cos(angle), pan_y=amount * 0.66 * math.sin(angle))


def rotate(local_frame: int, scene_duration: int, *, radians: float = 0.3) -> ContentTransform:
    t = _scene_progress(local_frame, scene_duration)
    return ContentTransform(rotate=radians * t)


def roll(local_frame: int, scene_duration: int, *, radians: float = 0.25) -> ContentTransform:
    """Rotation around the view axis, eased at both ends."""
    t = _scene_progress(local_frame, scene_duration)
    return ContentTransform(rotate=radians * smoothstep(t))


CONTENT_MOTIONS: dict[str, ContentMotion] = {
    "none": static,
    "static": static,
    "ken_burns": ken_burns,
    "zoom_out": zoom_out,
    "drift": drift,
    "fade": fade,
    "pan": pan,
    "dolly": dolly,
    "crane": crane,
    "tilt": tilt,
    "truck": truck,
    "pedestal": pedestal,
    "arc": arc,
    "rotate": rotate,
    "roll": roll,
}


def get_content_motion(name: str | None) -> ContentMotion:
    """Return the named content motion; None means static. Raises KeyError for unknown names."""
    if not name:
        return static
    return CONTENT_MOTIONS[name.lower().replace("-", "_").replace(" ", "_")]


def evaluate_motion(motion: str | dict | None, local_frame: int, scene_duration: int) -> ContentTransform:
    """
    Evaluate a scene's motion setting: a name, or {"type": name, **params}.
    """
    if isinstance(motion, dict):
        params = dict(motion)
        fn = get_content_motion(params.pop("type", None))
        return fn(local_frame, scene_duration, **params)
    return get_content_motion(motion)(local_frame, scene_duration)
