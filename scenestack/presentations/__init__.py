"""
Presentations: named transition styles, (progress, direction, **params) -> StyleDescriptor.
"""
from .registry import PresentationRegistry, default_registry, presentation
from .style import ClipInset, ClipNoise, ClipSweep, Overlay, StyleDescriptor

__all__ = [
    "PresentationRegistry",
    "default_registry",
    "presentation",
    "ClipInset",
    "ClipNoise",
    "ClipSweep",
    "Overlay",
    "StyleDescriptor",
]
