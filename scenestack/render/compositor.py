"""
Reference compositor: StyleDescriptor -> RGBA layer, layers -> one RGB frame.
Uses Pillow/numpy only. The sequencing core never calls this; it is the
collaborator the CLI preview and tests paint with.
"""
import math
from typing import TYPE_CHECKING, Callable, Sequence

import numpy as np

from ..presentations.style import ClipInset, ClipNoise, ClipSweep, StyleDescriptor

if TYPE_CHECKING:
    from ..sequence import SceneSpec
    from ..stack import ContentTransform, Layer

SceneRenderer = Callable[["SceneSpec", int, "ContentTransform", int, int], "np.ndarray"]

_EPS = 1e-6


def _clip_mask(clip: ClipInset | ClipSweep | ClipNoise, width: int, height: int) -> "np.ndarray":
    """Float mask (H, W), 1 where the clip leaves content visible."""
    if clip.is_full():
        return np.ones((height, width), dtype=np.float32)
    if clip.is_empty():
        return np.zeros((height, width), dtype=np.float32)
    if isinstance(clip, ClipInset):
        xs = (np.arange(width) + 0.5) / width
        ys = (np.arange(height) + 0.5) / height
        col = (xs >= clip.left) & (xs < 1 - clip.right)
        row = (ys >= clip.top) & (ys < 1 - clip.bottom)
        return (row[:, np.newaxis] & col[np.newaxis, :]).astype(np.float32)
    if isinstance(clip, ClipNoise):
        grain = max(1, int(clip.grain))
        cy, cx = np.mgrid[0:height, 0:width] // grain
        # same fract-sine hash as the renderer noise, one value per cell
        n = np.sin(cx * 12.9898 + cy * 78.233 + clip.seed * 37.719) * 43758.5453
        n = n - np.floor(n)
        return ((n >= clip.low) & (n < clip.high)).astype(np.float32)
    yy, xx = np.mgrid[0:height, 0:width].astype(np.float32)
    dx = xx + 0.5 - width / 2
    dy = yy + 0.5 - height / 2
    # clockwise from 12 o'clock, image y points down
    angle = np.degrees(np.arctan2(dx, -dy)) % 360
    return ((angle >= clip.start_deg) & (angle < clip.end_deg)).astype(np.float32)


def _affine(style: StyleDescriptor, width: int, height: int) -> tuple[float, ...] | None:
    """
    Inverse affine (output -> input pixel) for Image.transform, or None when
    the layer collapses to nothing. rotate_x/rotate_y are flattened to a
    cosine scale on the opposite axis.
    """
    sx = style.scale_x * math.cos(math.radians(style.rotate_y))
    sy = style.scale_y * math.cos(math.radians(style.rotate_x))
    if abs(sx) < _EPS or abs(sy) < _EPS:
        return None
    theta = math.radians(style.rotate_z)
    c, s = math.cos(theta), math.sin(theta)
    cx, cy = width / 2, height / 2
    tx, ty = style.translate_x * width, style.translate_y * height
    # forward: out = C + T + R * S * (in - C); invert S^-1 * R^-1
    a, b = c / sx, s / sx
    d, e = -s / sy, c / sy
    ox, oy = -cx - tx, -cy - ty
    return (
        a, b, a * ox + b * oy + cx,
        d, e, d * ox + e * oy + cy,
    )


def _is_identity_geometry(style: StyleDescriptor) -> bool:
    return (
        abs(style.translate_x) <= _EPS
        and abs(style.translate_y) <= _EPS
        and abs(style.scale_x - 1) <= _EPS
        and abs(style.scale_y - 1) <= _EPS
        and abs(style.rotate_x % 360) <= _EPS
        and abs(style.rotate_y % 360) <= _EPS
        and abs(style.rotate_z % 360) <= _EPS
    )


def apply_style(frame: "np.ndarray", style: StyleDescriptor) -> "np.ndarray":
    """
    Apply a presentation style to an RGB frame (H, W, 3) uint8.
    Returns float32 RGBA (H, W, 4) with straight alpha in 0-1 and colour in 0-255.
    """
    from PIL import Image, ImageFilter

    height, width = frame.shape[:2]
    if style.is_hidden():
        return np.zeros((height, width, 4), dtype=np.float32)

    rgb = frame[..., :3].astype(np.float32)
    if style.overlay is not None and style.overlay.opacity > 0:
        k = min(1.0, style.overlay.opacity)
        rgb = rgb * (1 - k) + np.asarray(style.overlay.color, dtype=np.float32) * k

    rgba = np.concatenate([rgb, np.full((height, width, 1), 255.0, dtype=np.float32)], axis=-1)
    pil = Image.fromarray(np.clip(rgba, 0, 255).astype(np.uint8))

    block = int(round(style.pixel_size))
    if block > 1:
        small = pil.resize((max(1, width // block), max(1, height // block)), Image.Resampling.BOX)
        pil = small.resize((width, height), Image.Resampling.NEAREST)

    if style.blur > 0:
        pil = pil.filter(ImageFilter.GaussianBlur(radius=style.blur))

    if not _is_identity_geometry(style):
        coeffs = _affine(style, width, height)
        if coeffs is None:
            return np.zeros((height, width, 4), dtype=np.float32)
        pil = pil.transform(
            (width, height),
            Image.Transform.AFFINE,
            coeffs,
            resample=Image.Resampling.BILINEAR,
            fillcolor=(0, 0, 0, 0),
        )

    out = np.asarray(pil, dtype=np.float32).copy()
    alpha = out[..., 3] / 255.0
    if style.clip is not None:
        alpha = alpha * _clip_mask(style.clip, width, height)
    out[..., 3] = alpha * max(0.0, min(1.0, style.opacity))
    return out


def composite(
    layers: Sequence["Layer"],
    renderer: SceneRenderer,
    width: int,
    height: int,
    *,
    background: tuple[int, int, int] = (0, 0, 0),
) -> "np.ndarray":
    """
    Paint layers bottom to top over a solid background. Each scene is drawn by
    renderer (which applies the layer's content motion), then styled by its
    transition style. Returns RGB (H, W, 3) uint8.
    """
    canvas = np.empty((height, width, 3), dtype=np.float32)
    canvas[:] = background
    for layer in sorted(layers, key=lambda l: l.z_index):
        style = layer.transition_style
        if style.is_hidden():
            continue
        pixels = renderer(layer.scene, layer.instruction.local_frame, layer.content, width, height)
        if style.is_fully_visible():
            canvas = pixels[..., :3].astype(np.float32)
            continue
        styled = apply_style(pixels, style)
        a = styled[..., 3:4]
        canvas = canvas * (1 - a) + styled[..., :3] * a
    return np.clip(canvas, 0, 255).astype(np.uint8)


def render_frame(
    stack,
    frame: int,
    renderer: SceneRenderer,
    width: int,
    height: int,
    *,
    background: tuple[int, int, int] = (0, 0, 0),
) -> "np.ndarray":
    """Resolve and composite one global frame of a SceneStack."""
    return composite(stack.layers_at(frame), renderer, width, height, background=background)
