#!/usr/bin/env python3
"""
CLI: Print the schedule of a timeline, and optionally what is on screen at given frames.
Usage:
  python scripts/inspect_timeline.py config/timelines/corporate.yaml
  python scripts/inspect_timeline.py config/timelines/corporate.yaml --frame 50 --frame 120
  python scripts/inspect_timeline.py config/timelines/corporate.yaml --every 10
"""
import sys
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

import argparse
import logging

from scenestack.config import default_transition_from_config, load_config
from scenestack.logging_utils import setup_logging
from scenestack.sequence import ConfigError, SequenceError, load_timeline, resolve

logger = logging.getLogger("inspect_timeline")


def _print_schedule(stack) -> None:
    schedule = stack.schedule
    print(f"Frames: {schedule.total_duration_frames} ({schedule.total_duration_seconds:.2f}s at {schedule.fps:g} fps)")
    print("Scenes:")
    for s in schedule.scenes:
        print(f"  [{s.index}] {s.scene_id:<20} {s.start_frame:>6} -> {s.end_frame:<6} ({s.duration} frames)")
    if schedule.transitions:
        print("Transitions:")
    for t in schedule.transitions:
        note = f" (clamped from {t.requested_duration})" if t.clamped else ""
        print(
            f"  [{t.index}] {t.type:<16} {t.overlap_start:>6} -> {t.overlap_end:<6} "
            f"{t.outgoing_scene_id} -> {t.incoming_scene_id}, {t.duration} frames{note}"
        )
    for w in schedule.warnings:
        print(f"Warning: {w}")


def _print_frame(stack, frame: int) -> None:
    parts = []
    for ins in resolve(stack.schedule, frame):
        parts.append(
            f"{ins.scene_id}@{ins.local_frame} {ins.direction.value} p={ins.progress:.3f} z={ins.z_index}"
            + (f" via {ins.presentation}" if ins.presentation else "")
        )
    print(f"  frame {frame:>6}: " + " | ".join(parts))


def main() -> int:
    parser = argparse.ArgumentParser(description="Inspect a scene timeline: schedule and per-frame instructions.")
    parser.add_argument("timeline", type=Path, help="Timeline YAML file.")
    parser.add_argument(
        "--frame",
        "-f",
        type=int,
        action="append",
        default=[],
        help="Global frame to resolve (repeatable).",
    )
    parser.add_argument(
        "--every",
        type=int,
        default=0,
        help="Resolve every Nth frame across the whole timeline.",
    )
    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="Path to config YAML (default: config/default.yaml).",
    )
    parser.add_argument("--verbose", "-v", action="store_true", help="Debug logging.")
    args = parser.parse_args()

    try:
        config = load_config(args.config)
        setup_logging("DEBUG" if args.verbose else config.get("logging", {}).get("level", "INFO"))
        timeline = load_timeline(args.timeline)
        stack = timeline.to_stack(
            default_transition=default_transition_from_config(config),
            fps=config.get("output", {}).get("fps", 30),
        )
    except (SequenceError, ConfigError) as e:
        logger.error("%s", e)
        return 2

    _print_schedule(stack)
    frames = list(args.frame)
    if args.every > 0:
        frames.extend(range(0, stack.total_duration_frames, args.every))
    if frames:
        print("Instructions:")
    for frame in sorted(set(frames)):
        _print_frame(stack, frame)
    return 0


if __name__ == "__main__":
    sys.exit(main())
