"""
Load and expose app config (YAML). Used by the scripts to get output size/fps,
the default transition and the log level.
"""
from pathlib import Path
from typing import Any

import yaml

from .sequence import ConfigError, TransitionSpec


def _project_root() -> Path:
    return Path(__file__).resolve().parent.parent


def _merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    """Section-wise merge: nested dicts are merged one level deep."""
    out = dict(base)
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(out.get(key), dict):
            out[key] = {**out[key], **value}
        else:
            out[key] = value
    return out


def load_config(config_path: Path | str | None = None) -> dict[str, Any]:
    """Load config from YAML. Path is optional; defaults to config/default.yaml."""
    if config_path is None:
        config_path = _project_root() / "config" / "default.yaml"
    path = Path(config_path)
    if not path.exists():
        return _defaults()
    try:
        with open(path, encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
    except yaml.YAMLError as e:
        raise ConfigError(f"{path}: invalid YAML ({e})") from e
    if not isinstance(data, dict):
        raise ConfigError(f"{path}: expected a mapping at top level")
    return _merge(_defaults(), data)


_QUALITY_PRESETS: dict[str, tuple[int, int, int]] = {
    "draft": (480, 270, 24),
    "standard": (1280, 720, 30),
    "high": (1920, 1080, 30),
}


def _defaults() -> dict[str, Any]:
    return {
        "output": {
            "dir": "output",
            "filename_prefix": "frame",
            "width": 640,
            "height": 360,
            "fps": 30,
            "quality": None,
        },
        "sequence": {
            "default_transition": {"type": "fade", "duration_in_frames": 15, "timing": "linear"},
        },
        "render": {"workers": 4, "seed": 0},
        "logging": {"level": "INFO"},
    }


def resolve_output_config(config: dict[str, Any]) -> dict[str, Any]:
    """Resolve output config: quality preset overrides width/height/fps if set."""
    out = dict(config.get("output", {}))
    quality = out.get("quality")
    if quality and quality in _QUALITY_PRESETS:
        w, h, fps = _QUALITY_PRESETS[quality]
        out["width"] = w
        out["height"] = h
        out["fps"] = fps
    return out


def get_output_dir(config: dict[str, Any]) -> Path:
    """Resolve output directory (relative to project root if needed)."""
    out = config.get("output", {})
    d = out.get("dir", "output")
    p = Path(d)
    if not p.is_absolute():
        p = _project_root() / p
    return p


def default_transition_from_config(config: dict[str, Any]) -> TransitionSpec:
    """TransitionSpec used where a timeline leaves a transition unspecified."""
    raw = (config.get("sequence") or {}).get("default_transition") or {}
    if not isinstance(raw, dict):
        raise ConfigError("sequence.default_transition must be a mapping")
    return TransitionSpec(
        type=raw.get("type", "fade"),
        duration_in_frames=raw.get("duration_in_frames", 15),
        timing=raw.get("timing", "linear"),
        params=dict(raw.get("params") or {}),
    )
