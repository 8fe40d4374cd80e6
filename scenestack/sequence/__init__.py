"""
Sequencing core: scene/transition specs -> Schedule (built once) -> per-frame instructions.
"""
from .errors import (
    ClampWarning,
    ConfigError,
    DuplicateSceneId,
    EmptySceneList,
    InvalidDuration,
    InvalidPresentationParams,
    MalformedSequence,
    SequenceError,
    UnknownPresentation,
    UnknownTiming,
)
from .schema import (
    Direction,
    PresentationOverride,
    RenderInstruction,
    Schedule,
    ScheduledScene,
    ScheduledTransition,
    SceneSpec,
    TransitionSpec,
)
from .builder import DEFAULT_TRANSITION, build, build_from_lists, split_sequence
from .resolver import resolve, resolve_range
from .loader import Timeline, load_timeline, parse_timeline

__all__ = [
    "ClampWarning",
    "ConfigError",
    "DuplicateSceneId",
    "EmptySceneList",
    "InvalidDuration",
    "InvalidPresentationParams",
    "MalformedSequence",
    "SequenceError",
    "UnknownPresentation",
    "UnknownTiming",
    "Direction",
    "PresentationOverride",
    "RenderInstruction",
    "Schedule",
    "ScheduledScene",
    "ScheduledTransition",
    "SceneSpec",
    "TransitionSpec",
    "DEFAULT_TRANSITION",
    "build",
    "build_from_lists",
    "split_sequence",
    "resolve",
    "resolve_range",
    "Timeline",
    "load_timeline",
    "parse_timeline",
]
