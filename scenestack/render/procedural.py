"""
Reference scene content renderer: scene + local frame + content motion -> RGB pixels.
Animated palette gradients with noise texture; enough to preview a timeline.

Scene content is a dict (all keys optional):
    palette: name in palettes.PALETTES, or colors: [[r, g, b], ...]
    gradient: vertical | horizontal | angled | radial
    speed: gradient flow per second (default 0.3)
    shape: none | circle | rect
    intensity: noise amount 0.1–1
"""
from typing import Any

import numpy as np

from ..sequence import SceneSpec
from ..stack.motion import ContentTransform
from .palettes import resolve_palette


def _apply_camera_transform(
    xx: "np.ndarray", yy: "np.ndarray", zoom: float, pan_x: float, pan_y: float, rotate: float
) -> tuple["np.ndarray", "np.ndarray"]:
    """Transform normalized coords (0-1) by zoom, pan, rotate around center."""
    cx, cy = 0.5, 0.5
    x_centered = xx - cx
    y_centered = yy - cy
    if abs(rotate) > 1e-9:
        c, s = np.cos(rotate), np.sin(rotate)
        x_rot = x_centered * c - y_centered * s
        y_rot = x_centered * s + y_centered * c
        x_centered, y_centered = x_rot, y_rot
    zoom = max(zoom, 1e-3)
    return x_centered / zoom + cx + pan_x, y_centered / zoom + cy + pan_y


def _gradient_value(xx: "np.ndarray", yy: "np.ndarray", gradient_type: str, shift: float) -> "np.ndarray":
    """Compute 0-1 gradient value per pixel based on gradient type."""
    if gradient_type == "horizontal":
        v = (xx + shift) % 1.0
    elif gradient_type == "angled":
        v = (xx * 0.7 + yy * 0.7 + shift) % 1.0
    elif gradient_type == "radial":
        dist = np.sqrt((xx - 0.5) ** 2 + (yy - 0.5) ** 2) * 1.414  # normalize to ~0-1
        v = (dist + shift) % 1.0
    else:
        v = (yy + shift) % 1.0
    return np.clip(v, 0, 1)


def _palette(content: dict[str, Any]) -> "np.ndarray":
    stops = resolve_palette(content.get("palette"), content.get("colors"))
    return np.asarray(stops, dtype=np.float32)


def render_scene(
    scene: SceneSpec,
    local_frame: int,
    content_transform: ContentTransform,
    width: int,
    height: int,
    *,
    fps: float = 30.0,
    seed: int = 0,
) -> "np.ndarray":
    """
    One RGB frame (H, W, 3) uint8 for scene at local_frame. Deterministic in
    (scene content, local_frame, content_transform, size, seed).
    """
    content = scene.content if isinstance(scene.content, dict) else {}
    palette = _palette(content)
    gradient_type = content.get("gradient", "vertical") or "vertical"
    speed = float(content.get("speed", 0.3))
    intensity = max(0.1, min(1.0, float(content.get("intensity", 0.5))))
    t = local_frame / fps

    y = np.linspace(0, 1, height, dtype=np.float32)
    x = np.linspace(0, 1, width, dtype=np.float32)
    xx, yy = np.meshgrid(x, y)
    ct = content_transform
    xx, yy = _apply_camera_transform(xx, yy, ct.zoom, ct.pan_x, ct.pan_y, ct.rotate)

    v = _gradient_value(xx, yy, gradient_type, (t * speed) % 1.0)
    idx = v * (len(palette) - 1)
    i0 = np.clip(np.floor(idx).astype(np.int32), 0, len(palette) - 2)
    frac = (idx - i0)[..., np.newaxis]
    rgb = palette[i0] * (1 - frac) + palette[i0 + 1] * frac

    # Noise texture (fract-sine hash, vectorized)
    n = np.sin(xx * 12.9898 + yy * 78.233 + (seed + local_frame) * 43758.5453) * 43758.5453
    n = n - np.floor(n)
    rgb = rgb + ((n - 0.5) * 20 * intensity)[..., np.newaxis]

    # Shape overlay (soft circle or rect) in the middle palette colour
    shape = content.get("shape", "none") or "none"
    if shape in ("circle", "rect"):
        mid = palette[len(palette) // 2]
        if shape == "circle":
            dist = np.sqrt((xx - 0.5) ** 2 + (yy - 0.5) ** 2) * 2
            alpha = np.clip(1 - dist, 0, 1) ** 2 * 0.15
        else:
            edge = 0.25
            mx = np.maximum(np.abs(xx - 0.5) - (0.5 - edge), 0)
            my = np.maximum(np.abs(yy - 0.5) - (0.5 - edge), 0)
            alpha = np.clip(1 - np.sqrt(mx * mx + my * my) * 4, 0, 1) ** 2 * 0.2
        alpha = alpha[..., np.newaxis]
        rgb = rgb * (1 - alpha) + mid * alpha

    rgb = rgb * ct.opacity
    return np.clip(rgb, 0, 255).astype(np.uint8)
