"""
Timeline builder: ordered Scene, Transition, Scene, ... list -> immutable Schedule.

Each transition overlaps the tail of its outgoing scene with the head of its
incoming scene, so the next scene starts `transition duration` frames before the
previous one ends. All validation happens here; a Schedule is never partially built.
"""
import logging
import numbers
from typing import TYPE_CHECKING, Iterable, Sequence

from ..timing import TimingFunction, get_timing, timing_names
from .errors import (
    ClampWarning,
    DuplicateSceneId,
    EmptySceneList,
    InvalidDuration,
    MalformedSequence,
    UnknownTiming,
)
from .schema import PresentationOverride, Schedule, ScheduledScene, ScheduledTransition, SceneSpec, TransitionSpec

if TYPE_CHECKING:
    from ..presentations import PresentationRegistry

logger = logging.getLogger(__name__)

DEFAULT_TRANSITION = TransitionSpec(type="fade", duration_in_frames=15)


def _is_frame_count(value: object) -> bool:
    return isinstance(value, numbers.Integral) and not isinstance(value, bool)


def split_sequence(items: Sequence[object]) -> tuple[list[SceneSpec], list[TransitionSpec]]:
    """Check strict Scene/Transition alternation and separate the two kinds."""
    if not any(isinstance(x, SceneSpec) for x in items):
        raise EmptySceneList()
    scenes: list[SceneSpec] = []
    transitions: list[TransitionSpec] = []
    for pos, item in enumerate(items):
        if pos % 2 == 0:
            if not isinstance(item, SceneSpec):
                raise MalformedSequence(
                    f"position {pos}: expected a scene, got {type(item).__name__} "
                    "(sequence must alternate scene, transition, ..., scene)"
                )
            scenes.append(item)
        else:
            if not isinstance(item, TransitionSpec):
                raise MalformedSequence(
                    f"position {pos}: expected a transition, got {type(item).__name__} "
                    "(two scenes must be joined by a transition; use duration 0 for a hard cut)"
                )
            transitions.append(item)
    if len(items) % 2 == 0:
        raise MalformedSequence("sequence must end with a scene, not a transition")
    return scenes, transitions


def _check_scenes(scenes: Sequence[SceneSpec]) -> None:
    seen: set[str] = set()
    for scene in scenes:
        if scene.id in seen:
            raise DuplicateSceneId(scene.id)
        seen.add(scene.id)
        if not _is_frame_count(scene.duration_in_frames) or scene.duration_in_frames <= 0:
            raise InvalidDuration("scene", scene.id, scene.duration_in_frames)


def _override(value: object, scene_id: str, side: str) -> PresentationOverride | None:
    if value is None:
        return None
    if isinstance(value, PresentationOverride):
        return value
    if isinstance(value, str):
        return PresentationOverride(type=value)
    if isinstance(value, dict):
        params = dict(value)
        name = params.pop("type", None)
        if not isinstance(name, str):
            raise MalformedSequence(f"scene {scene_id!r} {side} override needs a 'type' name")
        return PresentationOverride(type=name, params=params)
    raise MalformedSequence(
        f"scene {scene_id!r} {side} override must be a name or a mapping, got {type(value).__name__}"
    )


def _resolve_timing(transition: TransitionSpec, fps: float) -> TimingFunction:
    timing = transition.timing
    if isinstance(timing, TimingFunction):
        return timing
    if isinstance(timing, str):
        try:
            return get_timing(timing, fps=fps)
        except KeyError:
            raise UnknownTiming(timing, timing_names()) from None
    raise MalformedSequence(f"transition timing must be a TimingFunction or a name, got {type(timing).__name__}")


def build(
    specs: Iterable[SceneSpec | TransitionSpec],
    *,
    registry: "PresentationRegistry | None" = None,
    fps: float = 30.0,
) -> Schedule:
    """
    Build the Schedule for an alternating scene/transition list.

    Raises EmptySceneList, InvalidDuration, UnknownPresentation, UnknownTiming,
    InvalidPresentationParams, MalformedSequence or DuplicateSceneId.
    A transition longer than its neighbours allow is clamped, recorded on
    Schedule.warnings and logged as a warning.
    """
    if registry is None:
        from ..presentations import default_registry
        registry = default_registry()

    items = list(specs)
    scenes, transitions = split_sequence(items)
    _check_scenes(scenes)

    overrides: list[tuple[PresentationOverride | None, PresentationOverride | None]] = []
    for scene in scenes:
        enter = _override(scene.enter, scene.id, "enter")
        exit_ = _override(scene.exit, scene.id, "exit")
        for ov in (enter, exit_):
            if ov is not None:
                registry.validate_params(ov.type, ov.params)
        overrides.append((enter, exit_))

    timings: list[TimingFunction] = []
    for i, tr in enumerate(transitions):
        label = f"{i} ({scenes[i].id} -> {scenes[i + 1].id})"
        if not _is_frame_count(tr.duration_in_frames) or tr.duration_in_frames < 0:
            raise InvalidDuration("transition", label, tr.duration_in_frames)
        registry.validate_params(tr.type, tr.params)
        timings.append(_resolve_timing(tr, fps))

    scheduled_scenes: list[ScheduledScene] = []
    scheduled_transitions: list[ScheduledTransition] = []
    warnings: list[ClampWarning] = []
    cursor = 0
    leading = 0  # overlap already consumed at the head of the current scene
    for i, scene in enumerate(scenes):
        start = cursor
        end = start + int(scene.duration_in_frames)
        enter, exit_ = overrides[i]
        scheduled_scenes.append(
            ScheduledScene(index=i, scene_id=scene.id, start_frame=start, end_frame=end, enter=enter, exit=exit_)
        )
        if i == len(transitions):
            cursor = end
            break

        tr = transitions[i]
        incoming = scenes[i + 1]
        requested = int(tr.duration_in_frames)
        # never longer than either neighbour, and never reaching back into this
        # scene's own entry overlap (which would make three scenes visible at once)
        limit = min(int(scene.duration_in_frames) - leading, int(incoming.duration_in_frames))
        duration = min(requested, limit)
        if duration != requested:
            w = ClampWarning(
                transition_index=i,
                outgoing_scene_id=scene.id,
                incoming_scene_id=incoming.id,
                requested=requested,
                clamped=duration,
            )
            warnings.append(w)
            logger.warning("%s", w)

        overlap_start = end - duration
        scheduled_transitions.append(
            ScheduledTransition(
                index=i,
                type=tr.type,
                overlap_start=overlap_start,
                overlap_end=end,
                outgoing_scene_id=scene.id,
                incoming_scene_id=incoming.id,
                timing=timings[i],
                params=dict(tr.params),
                requested_duration=requested,
            )
        )
        cursor = overlap_start
        leading = duration

    schedule = Schedule(
        scenes=tuple(scheduled_scenes),
        transitions=tuple(scheduled_transitions),
        warnings=tuple(warnings),
        fps=fps,
    )
    logger.debug(
        "built schedule: %d scenes, %d transitions, %d frames",
        len(scheduled_scenes), len(scheduled_transitions), schedule.total_duration_frames,
    )
    return schedule


def build_from_lists(
    scenes: Sequence[SceneSpec],
    transitions: Sequence[TransitionSpec] | None = None,
    *,
    default_transition: TransitionSpec | None = None,
    registry: "PresentationRegistry | None" = None,
    fps: float = 30.0,
) -> Schedule:
    """
    Build from separate lists: transitions[i] joins scenes[i] and scenes[i + 1].
    Missing transitions fall back to default_transition (fade, 15 frames).
    """
    transitions = list(transitions or [])
    if not scenes:
        raise EmptySceneList()
    if len(transitions) > len(scenes) - 1:
        raise MalformedSequence(
            f"{len(transitions)} transitions given for {len(scenes)} scenes (at most {len(scenes) - 1})"
        )
    fallback = default_transition or DEFAULT_TRANSITION
    items: list[SceneSpec | TransitionSpec] = []
    for i, scene in enumerate(scenes):
        if i > 0:
            items.append(transitions[i - 1] if i - 1 < len(transitions) else fallback)
        items.append(scene)
    return build(items, registry=registry, fps=fps)
