"""
Scene stack: declarative scenes + transitions, with intra-scene content motion.
"""
from .motion import CONTENT_MOTIONS, ContentTransform, evaluate_motion, get_content_motion
from .stack import Layer, SceneStack

__all__ = [
    "CONTENT_MOTIONS",
    "ContentTransform",
    "evaluate_motion",
    "get_content_motion",
    "Layer",
    "SceneStack",
]
