"""
Sequence schema: authored scene/transition specs, the computed Schedule, and
the per-frame RenderInstruction handed to renderers.
"""
from bisect import bisect_right
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from ..timing import TimingFunction
from .errors import ClampWarning


class Direction(str, Enum):
    ENTERING = "entering"   # being revealed by a transition
    EXITING = "exiting"     # being hidden by a transition
    STEADY = "steady"       # fully settled, no transition


@dataclass(frozen=True)
class SceneSpec:
    """Single scene: a fixed-duration unit of content."""
    id: str
    duration_in_frames: int
    content: Any = field(default=None, compare=False)   # opaque payload for the content renderer
    motion: str | dict | None = None                     # intra-scene content motion (SceneStack)
    enter: str | dict | None = None   # presentation override while entering: name or {"type": name, **params}
    exit: str | dict | None = None    # same, while exiting


@dataclass(frozen=True)
class PresentationOverride:
    """A scene's own enter/exit presentation, replacing the transition's on that side."""
    type: str
    params: dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class TransitionSpec:
    """Transition between two adjacent scenes. timing is a TimingFunction or a registered name."""
    type: str
    duration_in_frames: int
    timing: TimingFunction | str = "linear"
    params: dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class ScheduledScene:
    index: int
    scene_id: str
    start_frame: int
    end_frame: int   # exclusive
    enter: PresentationOverride | None = None
    exit: PresentationOverride | None = None

    @property
    def duration(self) -> int:
        return self.end_frame - self.start_frame

    def contains(self, frame: int) -> bool:
        return self.start_frame <= frame < self.end_frame


@dataclass(frozen=True)
class ScheduledTransition:
    index: int                # joins scenes[index] and scenes[index + 1]
    type: str
    overlap_start: int
    overlap_end: int          # exclusive; equals the outgoing scene's end_frame
    outgoing_scene_id: str
    incoming_scene_id: str
    timing: TimingFunction
    params: dict[str, Any] = field(default_factory=dict)
    requested_duration: int = 0

    @property
    def duration(self) -> int:
        return self.overlap_end - self.overlap_start

    @property
    def clamped(self) -> bool:
        return self.duration != self.requested_duration

    def contains(self, frame: int) -> bool:
        return self.overlap_start <= frame < self.overlap_end

    def progress(self, frame: int) -> float:
        return self.timing(frame - self.overlap_start, self.duration)


@dataclass(frozen=True)
class Schedule:
    """
    Immutable frame-range mapping for a whole timeline. Built once by the builder,
    indexed by position: transitions[i] joins scenes[i] and scenes[i + 1].
    """
    scenes: tuple[ScheduledScene, ...]
    transitions: tuple[ScheduledTransition, ...]
    warnings: tuple[ClampWarning, ...] = ()
    fps: float = 30.0
    _starts: tuple[int, ...] = field(default=(), init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "_starts", tuple(s.start_frame for s in self.scenes))

    @property
    def total_duration_frames(self) -> int:
        return self.scenes[-1].end_frame if self.scenes else 0

    @property
    def total_duration_seconds(self) -> float:
        return self.total_duration_frames / self.fps

    def scene(self, index: int) -> ScheduledScene:
        return self.scenes[index]

    def scene_index(self, scene_id: str) -> int:
        for s in self.scenes:
            if s.scene_id == scene_id:
                return s.index
        raise KeyError(scene_id)

    def leading_transition(self, index: int) -> ScheduledTransition | None:
        """Transition where scenes[index] is the incoming side."""
        return self.transitions[index - 1] if index > 0 else None

    def trailing_transition(self, index: int) -> ScheduledTransition | None:
        """Transition where scenes[index] is the outgoing side."""
        return self.transitions[index] if index < len(self.transitions) else None

    def presentation_for(self, index: int, direction: "Direction") -> tuple[str, dict[str, Any]] | None:
        """
        (presentation name, params) styling scenes[index] on one side of a transition.
        The scene's own enter/exit override wins over the transition's type.
        """
        scene = self.scenes[index]
        if direction == Direction.ENTERING:
            override, tr = scene.enter, self.leading_transition(index)
        elif direction == Direction.EXITING:
            override, tr = scene.exit, self.trailing_transition(index)
        else:
            return None
        if override is not None:
            return override.type, override.params
        if tr is None:
            return None
        return tr.type, tr.params

    def candidate_indices(self, frame: int) -> tuple[int, ...]:
        """
        Indices of scenes that may contain frame, via binary search on start frames.
        At most two scenes overlap, so only the last scene starting at or before
        frame and its predecessor need checking.
        """
        i = bisect_right(self._starts, frame) - 1
        if i < 0:
            return ()
        return (i - 1, i) if i > 0 else (i,)


@dataclass(frozen=True)
class RenderInstruction:
    """What to draw for one scene at one global frame. Composite in ascending z_index."""
    scene_id: str
    local_frame: int
    direction: Direction
    progress: float
    z_index: int
    presentation: str | None = None   # enter/exit override or transition type styling this scene
    scene_index: int = 0
