"""
Timing: easing curves, timing functions (linear, eased, spring) and frame progress helpers.
"""
from .easing import EASINGS, cubic_bezier, get_easing
from .functions import (
    LINEAR,
    EasedTiming,
    LinearTiming,
    SpringTiming,
    TimingFunction,
    get_timing,
    register_timing,
    timing_names,
)
from .progress import ChainSegment, chain, frame_progress, stagger

__all__ = [
    "EASINGS",
    "cubic_bezier",
    "get_easing",
    "LINEAR",
    "EasedTiming",
    "LinearTiming",
    "SpringTiming",
    "TimingFunction",
    "get_timing",
    "register_timing",
    "timing_names",
    "ChainSegment",
    "chain",
    "frame_progress",
    "stagger",
]
