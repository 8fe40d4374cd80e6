"""
Reference rendering collaborators: procedural scene content, compositor, parallel frames.
"""
from .compositor import apply_style, composite, render_frame
from .palettes import PALETTES
from .partition import partition_frames, render_parallel, render_range
from .procedural import render_scene

__all__ = [
    "apply_style",
    "composite",
    "render_frame",
    "PALETTES",
    "partition_frames",
    "render_parallel",
    "render_range",
    "render_scene",
]
