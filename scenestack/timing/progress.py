"""
Frame-explicit progress helpers for content choreography inside a scene.
Every function takes the frame as an argument; nothing reads an ambient "current frame".
"""
from dataclasses import dataclass
from typing import Sequence

from .easing import EasingFn, cubic_out


def _clamped_ratio(frame: int, start: int, duration: int) -> float:
    if duration <= 0:
        return 1.0 if frame >= start else 0.0
    return min(1.0, max(0.0, (frame - start) / duration))


def frame_progress(
    frame: int,
    *,
    start_frame: int = 0,
    duration_in_frames: int = 30,
    clamp: bool = True,
    easing: EasingFn | None = None,
) -> float:
    """Normalized progress of frame through [start_frame, start_frame + duration), eased after clamping."""
    if duration_in_frames <= 0:
        raw = 1.0 if frame >= start_frame else 0.0
    else:
        raw = (frame - start_frame) / duration_in_frames
    if clamp:
        raw = min(1.0, max(0.0, raw))
    return easing(raw) if easing else raw


@dataclass(frozen=True)
class ChainSegment:
    duration: int
    label: str | None = None
    easing: EasingFn | None = None


@dataclass(frozen=True)
class ChainState:
    """Where a frame falls in an enter → hold → exit style chain of segments."""
    progress: float
    active_index: int
    active_label: str | None
    segment_progress: float
    is_complete: bool
    segment_progresses: tuple[float, ...]
    labels: tuple[str | None, ...]

    def segment(self, index_or_label: int | str) -> float:
        """Progress of one segment by index or label; 0 for unknown segments."""
        if isinstance(index_or_label, str):
            if index_or_label not in self.labels:
                return 0.0
            return self.segment_progresses[self.labels.index(index_or_label)]
        if 0 <= index_or_label < len(self.segment_progresses):
            return self.segment_progresses[index_or_label]
        return 0.0


def chain(frame: int, segments: Sequence[ChainSegment], *, start_frame: int = 0) -> ChainState:
    """Resolve a multi-step sequence (e.g. enter, hold, exit) at frame."""
    total = sum(max(0, s.duration) for s in segments)
    overall = _clamped_ratio(frame, start_frame, total)

    per_segment: list[float] = []
    active_index = 0
    segment_progress = 0.0
    seg_start = start_frame
    for i, seg in enumerate(segments):
        seg_end = seg_start + max(0, seg.duration)
        raw = _clamped_ratio(frame, seg_start, seg_end - seg_start)
        value = seg.easing(raw) if seg.easing else raw
        per_segment.append(value)
        if seg_start <= frame < seg_end:
            active_index = i
            segment_progress = value
        elif frame >= seg_end:
            active_index = i
            segment_progress = 1.0
        seg_start = seg_end

    is_complete = frame >= start_frame + total
    if is_complete and segments:
        active_index = len(segments) - 1
        segment_progress = 1.0
    return ChainState(
        progress=overall,
        active_index=active_index,
        active_label=segments[active_index].label if segments else None,
        segment_progress=segment_progress,
        is_complete=is_complete,
        segment_progresses=tuple(per_segment),
        labels=tuple(s.label for s in segments),
    )


@dataclass(frozen=True)
class StaggerState:
    progress: tuple[float, ...]
    raw_progress: tuple[float, ...]
    active_index: int   # first item still animating, -1 if none
    is_complete: bool


def stagger(
    frame: int,
    count: int,
    *,
    delay: int = 5,
    start_frame: int = 0,
    duration_in_frames: int = 20,
    easing: EasingFn = cubic_out,
) -> StaggerState:
    """Per-item progress for count items, each starting delay frames after the previous one."""
    raw: list[float] = []
    eased: list[float] = []
    active_index = -1
    complete = 0
    for i in range(count):
        r = _clamped_ratio(frame, start_frame + i * delay, duration_in_frames)
        raw.append(r)
        eased.append(easing(r))
        if 0 < r < 1 and active_index == -1:
            active_index = i
        if r >= 1:
            complete += 1
    return StaggerState(
        progress=tuple(eased),
        raw_progress=tuple(raw),
        active_index=active_index,
        is_complete=complete == count,
    )
