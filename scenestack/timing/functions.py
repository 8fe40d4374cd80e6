"""
Timing functions: (frame_offset, duration_frames) -> progress.
One value per integer frame; no sub-frame interpolation.
"""
import math
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from functools import cached_property
from typing import Callable

from .easing import EASINGS, EasingFn, get_easing

# Residual displacement below which a spring counts as settled
SPRING_REST_THRESHOLD = 0.005
_MAX_SETTLE_FRAMES = 100_000


class TimingFunction(ABC):
    """
    Maps a frame offset inside a window of duration_frames to a progress value.
    offset <= 0 gives the start value (0); offset >= duration gives the end value (1).
    """

    name: str

    def __call__(self, frame_offset: int, duration_frames: int) -> float:
        if frame_offset <= 0:
            return 0.0
        if frame_offset >= duration_frames:
            return 1.0
        return self.evaluate(int(frame_offset), int(duration_frames))

    @abstractmethod
    def evaluate(self, frame_offset: int, duration_frames: int) -> float:
        """Curve value for 0 < frame_offset < duration_frames."""
        ...


@dataclass(frozen=True)
class LinearTiming(TimingFunction):
    name: str = "linear"

    def evaluate(self, frame_offset: int, duration_frames: int) -> float:
        return frame_offset / duration_frames


@dataclass(frozen=True)
class EasedTiming(TimingFunction):
    """
    Named easing applied to offset / duration. Values from overshooting curves
    (back_out, elastic_out, pop, ...) are returned as-is, outside [0, 1].
    Pass curve for a custom easing; equality is by name.
    """

    name: str
    curve: EasingFn | None = field(default=None, compare=False, repr=False)

    def __post_init__(self) -> None:
        if self.curve is None:
            object.__setattr__(self, "curve", get_easing(self.name))

    def evaluate(self, frame_offset: int, duration_frames: int) -> float:
        return float(self.curve(frame_offset / duration_frames))


def _spring_displacement(t: float, damping: float, stiffness: float, mass: float) -> float:
    """Signed distance from the target for a spring released at -1 with zero velocity."""
    omega0 = math.sqrt(stiffness / mass)
    zeta = damping / (2 * math.sqrt(stiffness * mass))
    if zeta < 1:
        omega_d = omega0 * math.sqrt(1 - zeta * zeta)
        a = zeta * omega0
        return math.exp(-a * t) * (-math.cos(omega_d * t) - (a / omega_d) * math.sin(omega_d * t))
    if zeta == 1:
        return -(1 + omega0 * t) * math.exp(-omega0 * t)
    root = math.sqrt(zeta * zeta - 1)
    r1 = -omega0 * (zeta - root)
    r2 = -omega0 * (zeta + root)
    return (r2 * math.exp(r1 * t) - r1 * math.exp(r2 * t)) / (r1 - r2)


def _spring_envelope(t: float, damping: float, stiffness: float, mass: float) -> float:
    """Upper bound on |displacement| from time t onwards."""
    omega0 = math.sqrt(stiffness / mass)
    zeta = damping / (2 * math.sqrt(stiffness * mass))
    if zeta < 1:
        a = zeta * omega0
        omega_d = omega0 * math.sqrt(1 - zeta * zeta)
        return math.sqrt(1 + (a / omega_d) ** 2) * math.exp(-a * t)
    # critically/over-damped springs approach the target monotonically
    return abs(_spring_displacement(t, damping, stiffness, mass))


@dataclass(frozen=True)
class SpringTiming(TimingFunction):
    """
    Damped harmonic oscillator from 0 to 1, evaluated at continuous time offset / fps.

    The curve need not reach 1 inside the window and underdamped springs overshoot;
    the window end (offset >= duration) cuts to exactly 1. With fit_to_duration the
    time axis is stretched so the spring settles exactly at duration_frames.
    overshoot_clamping caps values at 1.
    """

    damping: float = 10.0
    stiffness: float = 100.0
    mass: float = 1.0
    fps: float = 30.0
    overshoot_clamping: bool = False
    fit_to_duration: bool = False
    name: str = "spring"

    def __post_init__(self) -> None:
        if self.stiffness <= 0 or self.mass <= 0:
            raise ValueError(f"spring stiffness and mass must be > 0 (got {self.stiffness}, {self.mass})")
        if self.damping < 0:
            raise ValueError(f"spring damping must be >= 0 (got {self.damping})")
        if self.fps <= 0:
            raise ValueError(f"spring fps must be > 0 (got {self.fps})")

    def value_at(self, seconds: float) -> float:
        if seconds <= 0:
            return 0.0
        value = 1.0 + _spring_displacement(seconds, self.damping, self.stiffness, self.mass)
        if self.overshoot_clamping:
            value = min(value, 1.0)
        return value

    @cached_property
    def settle_frames(self) -> int:
        """Frames until the spring stays within SPRING_REST_THRESHOLD of 1."""
        if self.damping == 0:
            return _MAX_SETTLE_FRAMES
        for frame in range(1, _MAX_SETTLE_FRAMES):
            if _spring_envelope(frame / self.fps, self.damping, self.stiffness, self.mass) < SPRING_REST_THRESHOLD:
                return frame
        return _MAX_SETTLE_FRAMES

    def evaluate(self, frame_offset: int, duration_frames: int) -> float:
        if self.fit_to_duration:
            seconds = (frame_offset / duration_frames) * (self.settle_frames / self.fps)
        else:
            seconds = frame_offset / self.fps
        return self.value_at(seconds)


LINEAR = LinearTiming()

# Spring presets (damping, stiffness); fitted to the transition length
SPRING_PRESETS: dict[str, tuple[float, float]] = {
    "spring": (200.0, 100.0),
    "spring_smooth": (20.0, 80.0),
    "spring_snappy": (30.0, 300.0),
    "spring_expo": (15.0, 100.0),
}

# Short names for the spring presets
SPRING_ALIASES: dict[str, str] = {
    "smooth": "spring_smooth",
    "snappy": "spring_snappy",
    "expo": "spring_expo",
}

TimingFactory = Callable[[float], TimingFunction]

_TIMINGS: dict[str, TimingFactory] = {}


def register_timing(name: str, factory: TimingFactory) -> None:
    """Register a named timing. factory receives fps and returns a TimingFunction."""
    _TIMINGS[name] = factory


def _register_builtins() -> None:
    register_timing("linear", lambda fps: LINEAR)
    for easing_name in EASINGS:
        if easing_name == "linear":
            continue
        register_timing(easing_name, lambda fps, n=easing_name: EasedTiming(n))
    for preset, (damping, stiffness) in SPRING_PRESETS.items():
        register_timing(
            preset,
            lambda fps, p=preset, d=damping, s=stiffness: SpringTiming(
                damping=d, stiffness=s, fps=fps, fit_to_duration=True, name=p
            ),
        )
    for alias, preset in SPRING_ALIASES.items():
        register_timing(alias, _TIMINGS[preset])


_register_builtins()


def timing_names() -> list[str]:
    return sorted(_TIMINGS)


def get_timing(name: str, *, fps: float = 30.0) -> TimingFunction:
    """Return the named TimingFunction. Raises KeyError for unknown names."""
    key = (name or "linear").lower().replace("-", "_").replace(" ", "_")
    return _TIMINGS[key](fps)
