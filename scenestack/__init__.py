"""
scenestack: deterministic scene/transition sequencing for frame-by-frame rendering.
"""
from .presentations import PresentationRegistry, StyleDescriptor, default_registry, presentation
from .sequence import (
    Direction,
    RenderInstruction,
    Schedule,
    SceneSpec,
    SequenceError,
    TransitionSpec,
    build,
    build_from_lists,
    load_timeline,
    resolve,
)
from .stack import Layer, SceneStack
from .timing import get_timing

__version__ = "0.1.0"

__all__ = [
    "PresentationRegistry",
    "StyleDescriptor",
    "default_registry",
    "presentation",
    "Direction",
    "RenderInstruction",
    "Schedule",
    "SceneSpec",
    "SequenceError",
    "TransitionSpec",
    "build",
    "build_from_lists",
    "load_timeline",
    "resolve",
    "Layer",
    "SceneStack",
    "get_timing",
]
