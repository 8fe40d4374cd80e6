"""
Frame resolver: (Schedule, global frame) -> render instructions for that frame.
Pure function of its arguments, so frames can be resolved in any order, by any worker.
"""
import logging
from typing import Iterable, Iterator

from .schema import Direction, RenderInstruction, Schedule

logger = logging.getLogger(__name__)


def _instruction(schedule: Schedule, index: int, frame: int) -> RenderInstruction:
    scene = schedule.scenes[index]
    local_frame = frame - scene.start_frame
    leading = schedule.leading_transition(index)
    trailing = schedule.trailing_transition(index)

    if leading is not None and leading.contains(frame):
        direction = Direction.ENTERING
        progress = leading.progress(frame)
    elif trailing is not None and trailing.contains(frame):
        direction = Direction.EXITING
        progress = trailing.progress(frame)
    else:
        direction = Direction.STEADY
        progress = 1.0
    styled_by = schedule.presentation_for(index, direction)

    return RenderInstruction(
        scene_id=scene.scene_id,
        local_frame=local_frame,
        direction=direction,
        progress=progress,
        z_index=index,   # later scenes stack above earlier ones
        presentation=styled_by[0] if styled_by else None,
        scene_index=index,
    )


def _boundary(schedule: Schedule, frame: int) -> list[RenderInstruction]:
    """Out-of-range frames hold the first/last scene in its steady state."""
    if frame < 0:
        scene = schedule.scenes[0]
        local_frame = 0
    else:
        scene = schedule.scenes[-1]
        local_frame = scene.duration - 1
    logger.debug("frame %d outside [0, %d); clamped to scene %r", frame, schedule.total_duration_frames, scene.scene_id)
    return [
        RenderInstruction(
            scene_id=scene.scene_id,
            local_frame=local_frame,
            direction=Direction.STEADY,
            progress=1.0,
            z_index=scene.index,
            scene_index=scene.index,
        )
    ]


def resolve(schedule: Schedule, global_frame: int) -> list[RenderInstruction]:
    """
    Instructions for every scene visible at global_frame, in ascending z_index.

    One instruction outside overlap windows, two inside (entering above exiting).
    Frames before 0 or at/after total_duration_frames resolve to the first/last
    scene, steady, at its first/last local frame. Never raises for a built Schedule.
    """
    frame = int(global_frame)
    if frame < 0 or frame >= schedule.total_duration_frames:
        return _boundary(schedule, frame)
    instructions = [
        _instruction(schedule, i, frame)
        for i in schedule.candidate_indices(frame)
        if schedule.scenes[i].contains(frame)
    ]
    instructions.sort(key=lambda r: r.z_index)
    return instructions


def resolve_range(schedule: Schedule, frames: Iterable[int]) -> Iterator[tuple[int, list[RenderInstruction]]]:
    """Yield (frame, instructions) for each frame, in the order given."""
    for frame in frames:
        yield frame, resolve(schedule, frame)
