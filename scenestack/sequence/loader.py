"""
Timeline files (YAML) -> scene and transition specs.

Two layouts are accepted:

    fps: 30
    default_transition: {type: fade, duration_in_frames: 15}
    scenes:
      - {id: intro, duration_in_frames: 60, motion: ken_burns, content: {palette: ocean}}
      - {id: outro, duration_in_frames: 90}
    transitions:
      - {type: wipe, duration_in_frames: 20, timing: ease_in_out, params: {towards: left}}

or one alternating list:

    sequence:
      - scene: {id: intro, duration_in_frames: 60}
      - transition: {type: fade, duration_in_frames: 15}
      - scene: {id: outro, duration_in_frames: 90}

Durations and names are checked later by the builder; this module only
checks shape.
"""
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

from .errors import ConfigError
from .schema import SceneSpec, TransitionSpec

logger = logging.getLogger(__name__)


@dataclass
class Timeline:
    scenes: list[SceneSpec]
    transitions: list[TransitionSpec] = field(default_factory=list)
    default_transition: TransitionSpec | None = None
    fps: float | None = None
    source: str = "<timeline>"

    def to_stack(self, *, default_transition: TransitionSpec | None = None, registry=None, fps: float = 30.0):
        """SceneStack for this timeline; file values win over the arguments."""
        from ..stack import SceneStack

        return SceneStack(
            self.scenes,
            self.transitions,
            default_transition=self.default_transition or default_transition,
            registry=registry,
            fps=self.fps or fps,
        )


def _duration(raw: dict[str, Any], where: str) -> Any:
    if "duration_in_frames" in raw:
        return raw["duration_in_frames"]
    if "duration" in raw:
        return raw["duration"]
    raise ConfigError(f"{where}: missing duration_in_frames")


def _override(raw: Any, where: str) -> str | dict | None:
    """enter/exit: a presentation name, or {type: name, params: {...}} like a transition."""
    if raw is None or isinstance(raw, str):
        return raw
    if not isinstance(raw, dict) or "type" not in raw:
        raise ConfigError(f"{where}: enter/exit must be a presentation name or a mapping with a type")
    params = raw.get("params") or {}
    if not isinstance(params, dict):
        raise ConfigError(f"{where}: enter/exit params must be a mapping")
    return {"type": str(raw["type"]), **params}


def _scene(raw: Any, where: str) -> SceneSpec:
    if not isinstance(raw, dict):
        raise ConfigError(f"{where}: scene must be a mapping, got {type(raw).__name__}")
    if "id" not in raw:
        raise ConfigError(f"{where}: scene is missing an id")
    return SceneSpec(
        id=str(raw["id"]),
        duration_in_frames=_duration(raw, where),
        content=raw.get("content"),
        motion=raw.get("motion"),
        enter=_override(raw.get("enter"), where),
        exit=_override(raw.get("exit"), where),
    )


def _transition(raw: Any, where: str) -> TransitionSpec:
    if not isinstance(raw, dict):
        raise ConfigError(f"{where}: transition must be a mapping, got {type(raw).__name__}")
    if "type" not in raw:
        raise ConfigError(f"{where}: transition is missing a type")
    params = raw.get("params") or {}
    if not isinstance(params, dict):
        raise ConfigError(f"{where}: transition params must be a mapping")
    return TransitionSpec(
        type=str(raw["type"]),
        duration_in_frames=_duration(raw, where),
        timing=raw.get("timing", "linear"),
        params=dict(params),
    )


def parse_timeline(data: Any, *, source: str = "<timeline>") -> Timeline:
    """Turn already-loaded YAML/JSON data into a Timeline."""
    if not isinstance(data, dict):
        raise ConfigError(f"{source}: expected a mapping at top level")
    fps = data.get("fps")
    default = data.get("default_transition")
    default_transition = _transition(default, f"{source}: default_transition") if default else None

    if "sequence" in data:
        items = data["sequence"]
        if not isinstance(items, list):
            raise ConfigError(f"{source}: sequence must be a list")
        scenes: list[SceneSpec] = []
        transitions: list[TransitionSpec] = []
        for pos, entry in enumerate(items):
            where = f"{source}: sequence[{pos}]"
            if not isinstance(entry, dict) or len(entry) != 1:
                raise ConfigError(f"{where}: expected {{scene: ...}} or {{transition: ...}}")
            (kind, raw), = entry.items()
            expected = "scene" if pos % 2 == 0 else "transition"
            if kind != expected:
                raise ConfigError(f"{where}: expected a {expected}, got {kind!r}")
            if kind == "scene":
                scenes.append(_scene(raw, where))
            else:
                transitions.append(_transition(raw, where))
        if items and len(items) % 2 == 0:
            raise ConfigError(f"{source}: sequence must end with a scene")
    else:
        raw_scenes = data.get("scenes") or []
        raw_transitions = data.get("transitions") or []
        if not isinstance(raw_scenes, list) or not isinstance(raw_transitions, list):
            raise ConfigError(f"{source}: scenes and transitions must be lists")
        scenes = [_scene(s, f"{source}: scenes[{i}]") for i, s in enumerate(raw_scenes)]
        transitions = [_transition(t, f"{source}: transitions[{i}]") for i, t in enumerate(raw_transitions)]

    return Timeline(
        scenes=scenes,
        transitions=transitions,
        default_transition=default_transition,
        fps=float(fps) if fps else None,
        source=source,
    )


def load_timeline(path: Path | str) -> Timeline:
    """Read a timeline YAML file. Raises ConfigError if missing or malformed."""
    path = Path(path)
    if not path.exists():
        raise ConfigError(f"timeline not found: {path}")
    try:
        with open(path, encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigError(f"{path}: invalid YAML ({e})") from e
    timeline = parse_timeline(data, source=str(path))
    logger.debug("loaded %s: %d scenes, %d transitions", path, len(timeline.scenes), len(timeline.transitions))
    return timeline
