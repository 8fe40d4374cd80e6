"""
Frame-range partitioning and parallel rendering.
Resolution is pure, so any frame can go to any worker: each worker owns one
contiguous range, results are reassembled in frame order. Cancellation means
no further frames are resolved once should_stop() turns true.
"""
import concurrent.futures
import logging
from typing import TYPE_CHECKING, Callable, Iterable, Iterator

from .compositor import SceneRenderer, render_frame

if TYPE_CHECKING:
    import numpy as np

    from ..stack import SceneStack

logger = logging.getLogger(__name__)

StopFn = Callable[[], bool]


def partition_frames(total: int, workers: int) -> list[range]:
    """
    Split [0, total) into at most `workers` disjoint contiguous ranges that
    cover every frame exactly once. Earlier ranges take the remainder.
    """
    if total <= 0:
        return []
    workers = max(1, min(int(workers), total))
    base, extra = divmod(total, workers)
    ranges = []
    start = 0
    for i in range(workers):
        size = base + (1 if i < extra else 0)
        ranges.append(range(start, start + size))
        start += size
    return ranges


def render_range(
    stack: "SceneStack",
    frames: Iterable[int],
    renderer: SceneRenderer,
    *,
    width: int,
    height: int,
    should_stop: StopFn | None = None,
) -> Iterator[tuple[int, "np.ndarray"]]:
    """Yield (frame, rgb) for each frame until should_stop() says otherwise."""
    for frame in frames:
        if should_stop is not None and should_stop():
            logger.info("Render cancelled before frame %d", frame)
            return
        yield frame, render_frame(stack, frame, renderer, width, height)


def render_parallel(
    stack: "SceneStack",
    renderer: SceneRenderer,
    workers: int,
    *,
    width: int,
    height: int,
    frames: range | None = None,
    should_stop: StopFn | None = None,
) -> list[tuple[int, "np.ndarray"]]:
    """
    Render frames (default: the whole stack) on a thread pool, one contiguous
    range per worker. Returns (frame, rgb) pairs in frame order; a cancelled
    run returns only the frames finished before the stop.
    """
    if frames is None:
        frames = range(stack.total_duration_frames)
    chunks = [frames[r.start:r.stop] for r in partition_frames(len(frames), workers)]
    if not chunks:
        return []
    logger.debug("Rendering %d frames on %d workers", len(frames), len(chunks))

    def _work(chunk: range) -> list[tuple[int, "np.ndarray"]]:
        return list(render_range(stack, chunk, renderer, width=width, height=height, should_stop=should_stop))

    results: list[tuple[int, "np.ndarray"]] = []
    with concurrent.futures.ThreadPoolExecutor(max_workers=len(chunks)) as executor:
        futures = [executor.submit(_work, chunk) for chunk in chunks]
        for future in futures:
            results.extend(future.result())
    results.sort(key=lambda item: item[0])
    return results
