#!/usr/bin/env python3
"""
CLI: Render preview stills (PNG) of a timeline with the reference renderer.
Usage:
  python scripts/render_frames.py config/timelines/corporate.yaml --frame 50
  python scripts/render_frames.py config/timelines/corporate.yaml --start 0 --end 120 --step 10
  python scripts/render_frames.py config/timelines/corporate.yaml --all --workers 4 --quality draft
"""
import sys
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

import argparse
import logging
import time
from functools import partial

from scenestack.config import (
    default_transition_from_config,
    get_output_dir,
    load_config,
    resolve_output_config,
)
from scenestack.logging_utils import log_structured, request_shutdown, setup_graceful_shutdown, setup_logging
from scenestack.sequence import ConfigError, SequenceError, load_timeline

logger = logging.getLogger("render_frames")


def main() -> int:
    parser = argparse.ArgumentParser(description="Render PNG stills of a scene timeline (preview, no video export).")
    parser.add_argument("timeline", type=Path, help="Timeline YAML file.")
    parser.add_argument("--frame", "-f", type=int, action="append", default=[], help="Single frame (repeatable).")
    parser.add_argument("--start", type=int, default=None, help="First frame of a range.")
    parser.add_argument("--end", type=int, default=None, help="End of a range (exclusive).")
    parser.add_argument("--step", type=int, default=1, help="Range step (default: 1).")
    parser.add_argument("--all", action="store_true", help="Render every frame of the timeline.")
    parser.add_argument("--workers", "-w", type=int, default=None, help="Render threads (default from config).")
    parser.add_argument("--quality", type=str, default=None, help="Output preset: draft, standard, high.")
    parser.add_argument("--output", "-o", type=Path, default=None, help="Output directory (default from config).")
    parser.add_argument("--seed", type=int, default=None, help="Noise seed for the procedural renderer.")
    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="Path to config YAML (default: config/default.yaml).",
    )
    args = parser.parse_args()

    try:
        config = load_config(args.config)
    except ConfigError as e:
        logging.basicConfig()
        logger.error("%s", e)
        return 2
    setup_logging(config.get("logging", {}).get("level", "INFO"))
    if args.quality:
        config["output"] = {**config.get("output", {}), "quality": args.quality}
    out_cfg = resolve_output_config(config)
    render_cfg = config.get("render", {})
    width = int(out_cfg.get("width", 640))
    height = int(out_cfg.get("height", 360))

    try:
        timeline = load_timeline(args.timeline)
        stack = timeline.to_stack(
            default_transition=default_transition_from_config(config),
            fps=out_cfg.get("fps", 30),
        )
    except (SequenceError, ConfigError) as e:
        logger.error("%s", e)
        return 2

    import numpy as np
    from PIL import Image

    from scenestack.render import render_parallel, render_range, render_scene

    total = stack.total_duration_frames
    if args.all:
        frames = range(total)
    elif args.start is not None or args.end is not None:
        frames = range(args.start or 0, total if args.end is None else args.end, max(1, args.step))
    elif args.frame:
        frames = sorted(set(args.frame))
    else:
        frames = [0]

    out_dir = args.output or get_output_dir(config)
    out_dir.mkdir(parents=True, exist_ok=True)
    prefix = out_cfg.get("filename_prefix", "frame")
    seed = args.seed if args.seed is not None else int(render_cfg.get("seed", 0))
    renderer = partial(render_scene, fps=stack.fps, seed=seed)
    workers = args.workers or int(render_cfg.get("workers", 4))

    setup_graceful_shutdown()
    t0 = time.monotonic()
    if isinstance(frames, range):
        results = render_parallel(
            stack, renderer, workers, width=width, height=height, frames=frames, should_stop=request_shutdown
        )
    else:
        results = list(render_range(stack, frames, renderer, width=width, height=height, should_stop=request_shutdown))

    for frame, rgb in results:
        path = out_dir / f"{prefix}_{frame:06d}.png"
        Image.fromarray(np.asarray(rgb, dtype=np.uint8)).save(path)
    elapsed = time.monotonic() - t0
    log_structured(
        "info",
        event="render_complete",
        timeline=str(args.timeline),
        frames=len(results),
        requested=len(frames),
        size=f"{width}x{height}",
        seconds=round(elapsed, 2),
        output=str(out_dir),
    )
    if request_shutdown():
        print(f"Stopped early: {len(results)}/{len(frames)} frames written to {out_dir}")
        return 1
    print(f"Done. {len(results)} frame(s) in {out_dir}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
