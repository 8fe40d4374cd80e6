"""
Style descriptors produced by presentations. Plain data; the compositor (or any
other rendering collaborator) turns them into paint/transform operations.
Translations are fractions of the frame size; rotations are degrees.
"""
from dataclasses import dataclass, replace

_EPS = 1e-9


@dataclass(frozen=True)
class ClipInset:
    """Visible region = frame minus insets (fractions 0-1 from each edge)."""
    top: float = 0.0
    right: float = 0.0
    bottom: float = 0.0
    left: float = 0.0

    def is_empty(self) -> bool:
        return self.left + self.right >= 1 - _EPS or self.top + self.bottom >= 1 - _EPS

    def is_full(self) -> bool:
        return max(self.top, self.right, self.bottom, self.left) <= _EPS


@dataclass(frozen=True)
class ClipSweep:
    """Visible region = circular sector from start_deg to end_deg (clockwise from 12 o'clock)."""
    start_deg: float = 0.0
    end_deg: float = 360.0

    def is_empty(self) -> bool:
        return self.end_deg - self.start_deg <= _EPS

    def is_full(self) -> bool:
        return self.end_deg - self.start_deg >= 360 - _EPS


@dataclass(frozen=True)
class ClipNoise:
    """
    Visible region = grain-sized pixel cells whose seeded hash value lies in [low, high).
    Two layers sharing a seed with [0, a) and [a, 1) partition the frame exactly.
    """
    low: float = 0.0
    high: float = 1.0
    seed: int = 0
    grain: int = 4   # cell edge in pixels

    def is_empty(self) -> bool:
        return self.high - self.low <= _EPS

    def is_full(self) -> bool:
        return self.low <= _EPS and self.high >= 1 - _EPS


@dataclass(frozen=True)
class Overlay:
    """Solid colour painted over the content (flashes, dips to black)."""
    color: tuple[int, int, int] = (0, 0, 0)
    opacity: float = 0.0


@dataclass(frozen=True)
class StyleDescriptor:
    opacity: float = 1.0
    translate_x: float = 0.0
    translate_y: float = 0.0
    scale_x: float = 1.0
    scale_y: float = 1.0
    rotate_x: float = 0.0
    rotate_y: float = 0.0
    rotate_z: float = 0.0
    blur: float = 0.0
    clip: ClipInset | ClipSweep | ClipNoise | None = None
    overlay: Overlay | None = None
    pixel_size: float = 1.0   # mosaic block edge in pixels; 1 is untouched

    def with_(self, **changes) -> "StyleDescriptor":
        return replace(self, **changes)

    def is_hidden(self) -> bool:
        """True when nothing of the content reaches the frame."""
        if self.opacity <= _EPS:
            return True
        if self.clip is not None and self.clip.is_empty():
            return True
        if abs(self.translate_x) >= 1 - _EPS or abs(self.translate_y) >= 1 - _EPS:
            return True
        if abs(self.scale_x) <= _EPS or abs(self.scale_y) <= _EPS:
            return True
        # edge-on after a 90 degree flip
        for angle in (self.rotate_x, self.rotate_y):
            if abs((abs(angle) % 180) - 90) <= 1e-6:
                return True
        return False

    def is_fully_visible(self) -> bool:
        """True when the content is drawn untouched."""
        return (
            abs(self.opacity - 1) <= _EPS
            and abs(self.translate_x) <= _EPS
            and abs(self.translate_y) <= _EPS
            and abs(self.scale_x - 1) <= _EPS
            and abs(self.scale_y - 1) <= _EPS
            and abs(self.rotate_x % 360) <= _EPS
            and abs(self.rotate_y % 360) <= _EPS
            and abs(self.rotate_z % 360) <= _EPS
            and self.blur <= _EPS
            and self.pixel_size <= 1 + _EPS
            and (self.clip is None or self.clip.is_full())
            and (self.overlay is None or self.overlay.opacity <= _EPS)
        )


VISIBLE = StyleDescriptor()
HIDDEN = StyleDescriptor(opacity=0.0)
