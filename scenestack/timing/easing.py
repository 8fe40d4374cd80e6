"""
Easing curves: normalized t in [0, 1] -> progress value.
Named curves for motion design. back_* and elastic_* overshoot [0, 1] on purpose;
callers should not clamp them.
"""
import math
from typing import Callable

EasingFn = Callable[[float], float]


def linear(t: float) -> float:
    return t


def smoothstep(t: float) -> float:
    """Smooth 0→1 over 0→1 (ease in-out)."""
    if t <= 0:
        return 0.0
    if t >= 1:
        return 1.0
    return 3 * t * t - 2 * t * t * t


def quad_in(t: float) -> float:
    return t * t


def quad_out(t: float) -> float:
    return 1 - (1 - t) * (1 - t)


def cubic_in(t: float) -> float:
    return t * t * t


def cubic_out(t: float) -> float:
    return 1 - (1 - t) ** 3


def cubic_in_out(t: float) -> float:
    if t < 0.5:
        return 4 * t * t * t
    return 1 - (-2 * t + 2) ** 3 / 2


def expo_out(t: float) -> float:
    if t >= 1:
        return 1.0
    return 1 - math.pow(2, -10 * t)


def back_in(t: float, overshoot: float = 1.70158) -> float:
    """Pulls back below 0 before accelerating to 1."""
    c3 = overshoot + 1
    return c3 * t * t * t - overshoot * t * t


def back_out(t: float, overshoot: float = 1.70158) -> float:
    """Overshoots past 1 then settles back (peaks around 1.1 with the default)."""
    c3 = overshoot + 1
    u = t - 1
    return 1 + c3 * u * u * u + overshoot * u * u


def elastic_out(t: float) -> float:
    """Springy overshoot; oscillates around 1 before settling."""
    if t <= 0:
        return 0.0
    if t >= 1:
        return 1.0
    c4 = (2 * math.pi) / 3
    return math.pow(2, -10 * t) * math.sin((t * 10 - 0.75) * c4) + 1


def bounce_out(t: float) -> float:
    """Bounces on arrival, never exceeds 1."""
    n1 = 7.5625
    d1 = 2.75
    if t < 1 / d1:
        return n1 * t * t
    if t < 2 / d1:
        t -= 1.5 / d1
        return n1 * t * t + 0.75
    if t < 2.5 / d1:
        t -= 2.25 / d1
        return n1 * t * t + 0.9375
    t -= 2.625 / d1
    return n1 * t * t + 0.984375


def cubic_bezier(x1: float, y1: float, x2: float, y2: float) -> EasingFn:
    """
    CSS-style cubic-bezier(x1, y1, x2, y2). Solves x(t) = input with Newton-Raphson,
    falling back to bisection when the derivative flattens out.
    """
    cx = 3 * x1
    bx = 3 * (x2 - x1) - cx
    ax = 1 - cx - bx
    cy = 3 * y1
    by = 3 * (y2 - y1) - cy
    ay = 1 - cy - by

    def sample_x(s: float) -> float:
        return ((ax * s + bx) * s + cx) * s

    def sample_y(s: float) -> float:
        return ((ay * s + by) * s + cy) * s

    def sample_dx(s: float) -> float:
        return (3 * ax * s + 2 * bx) * s + cx

    def solve_x(x: float) -> float:
        s = x
        for _ in range(8):
            err = sample_x(s) - x
            if abs(err) < 1e-7:
                return s
            d = sample_dx(s)
            if abs(d) < 1e-6:
                break
            s -= err / d
        lo, hi = 0.0, 1.0
        s = x
        while lo < hi:
            xs = sample_x(s)
            if abs(xs - x) < 1e-7:
                return s
            if x > xs:
                lo = s
            else:
                hi = s
            s = (lo + hi) / 2
            if hi - lo < 1e-9:
                break
        return s

    def curve(t: float) -> float:
        if t <= 0:
            return 0.0
        if t >= 1:
            return 1.0
        return sample_y(solve_x(t))

    return curve


# Named curves (production-tested presets). Bezier presets with y outside [0, 1]
# (pop, anticipate) overshoot like back_*.
EASINGS: dict[str, EasingFn] = {
    "linear": linear,
    "smoothstep": smoothstep,
    "quad_in": quad_in,
    "quad_out": quad_out,
    "ease_in": cubic_in,
    "ease_out": cubic_out,
    "ease_in_out": cubic_in_out,
    "cubic_in": cubic_in,
    "cubic_out": cubic_out,
    "cubic_in_out": cubic_in_out,
    "expo_out": expo_out,
    "back_in": back_in,
    "back_out": back_out,
    "elastic_out": elastic_out,
    "bounce_out": bounce_out,
    "ease_snappy": cubic_bezier(0.2, 0, 0, 1),
    "ease_smooth": cubic_bezier(0.25, 0.1, 0.25, 1),
    "heavy": cubic_bezier(0.7, 0, 0.3, 1),
    "pop": cubic_bezier(0.34, 1.56, 0.64, 1),
    "anticipate": cubic_bezier(0.36, 0, 0.66, -0.56),
    "css_in": cubic_bezier(0.4, 0, 1, 1),
    "css_out": cubic_bezier(0, 0, 0.2, 1),
    "css_in_out": cubic_bezier(0.4, 0, 0.2, 1),
}

# Curves that may leave [0, 1] between the endpoints
OVERSHOOTING: frozenset[str] = frozenset({"back_in", "back_out", "elastic_out", "pop", "anticipate"})


def get_easing(name: str) -> EasingFn:
    """Return the named easing curve. Raises KeyError for unknown names."""
    key = (name or "linear").lower().replace("-", "_").replace(" ", "_")
    return EASINGS[key]
