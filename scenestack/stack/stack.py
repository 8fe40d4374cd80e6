"""
SceneStack: declarative scenes + transitions -> per-frame layers.

Two independent animation axes per visible scene:
  - cross-scene: presentation style from the transition window (entering/exiting progress)
  - intra-scene: content motion driven by (local_frame, scene duration) across the whole scene
They are computed separately and kept separate on each Layer; combined_style()
merges them for renderers that only take a single transform.
"""
import math
from dataclasses import dataclass
from typing import Iterable, Sequence

from ..presentations import PresentationRegistry, StyleDescriptor, default_registry
from ..sequence import (
    ClampWarning,
    MalformedSequence,
    RenderInstruction,
    Schedule,
    SceneSpec,
    TransitionSpec,
    build_from_lists,
    resolve,
    split_sequence,
)
from .motion import ContentTransform, evaluate_motion


@dataclass(frozen=True)
class Layer:
    instruction: RenderInstruction
    scene: SceneSpec
    transition_style: StyleDescriptor
    content: ContentTransform

    @property
    def z_index(self) -> int:
        return self.instruction.z_index

    @property
    def scene_id(self) -> str:
        return self.instruction.scene_id

    def combined_style(self) -> StyleDescriptor:
        """Transition style with the content motion folded in as a layer transform."""
        s = self.transition_style
        c = self.content
        # a camera pan/rotation moves the content the opposite way
        return s.with_(
            opacity=s.opacity * c.opacity,
            scale_x=s.scale_x * c.zoom,
            scale_y=s.scale_y * c.zoom,
            translate_x=s.translate_x - c.pan_x,
            translate_y=s.translate_y - c.pan_y,
            rotate_z=s.rotate_z - math.degrees(c.rotate),
        )


class SceneStack:
    """
    Scene orchestrator: give it scenes and the transitions between them.

    Example:
        >>> stack = SceneStack(
        ...     [SceneSpec("intro", 120, motion="ken_burns"), SceneSpec("outro", 90)],
        ...     [TransitionSpec("wipe", 25, params={"towards": "left"})],
        ... )
        >>> [layer.scene_id for layer in stack.layers_at(100)]
        ['intro', 'outro']
    """

    def __init__(
        self,
        scenes: Sequence[SceneSpec],
        transitions: Sequence[TransitionSpec] | None = None,
        *,
        default_transition: TransitionSpec | None = None,
        registry: PresentationRegistry | None = None,
        fps: float = 30.0,
    ) -> None:
        self.registry = registry if registry is not None else default_registry()
        self.scenes: tuple[SceneSpec, ...] = tuple(scenes)
        self.schedule: Schedule = build_from_lists(
            self.scenes,
            transitions,
            default_transition=default_transition,
            registry=self.registry,
            fps=fps,
        )
        self._check_motions()

    @classmethod
    def from_sequence(
        cls,
        specs: Iterable[SceneSpec | TransitionSpec],
        *,
        registry: PresentationRegistry | None = None,
        fps: float = 30.0,
    ) -> "SceneStack":
        """Build from one alternating Scene, Transition, ..., Scene list."""
        scenes, transitions = split_sequence(list(specs))
        return cls(scenes, transitions, registry=registry, fps=fps)

    def _check_motions(self) -> None:
        for scene in self.scenes:
            try:
                evaluate_motion(scene.motion, 0, scene.duration_in_frames)
            except (KeyError, TypeError, ValueError) as e:
                raise MalformedSequence(f"scene {scene.id!r}: invalid motion {scene.motion!r} ({e})") from None

    @property
    def total_duration_frames(self) -> int:
        return self.schedule.total_duration_frames

    @property
    def fps(self) -> float:
        return self.schedule.fps

    @property
    def warnings(self) -> tuple[ClampWarning, ...]:
        return self.schedule.warnings

    def _transition_style(self, ins: RenderInstruction) -> StyleDescriptor:
        styled_by = self.schedule.presentation_for(ins.scene_index, ins.direction)
        if styled_by is None:
            return StyleDescriptor()
        name, params = styled_by
        return self.registry.apply(name, ins.progress, ins.direction, params)

    def layers_at(self, frame: int) -> list[Layer]:
        """Visible layers at frame, bottom to top."""
        layers = []
        for ins in resolve(self.schedule, frame):
            scene = self.scenes[ins.scene_index]
            layers.append(
                Layer(
                    instruction=ins,
                    scene=scene,
                    transition_style=self._transition_style(ins),
                    content=evaluate_motion(scene.motion, ins.local_frame, scene.duration_in_frames),
                )
            )
        return layers
