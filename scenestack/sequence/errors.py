"""
Build-time errors for malformed scene/transition sequences, and the clamp warning.
All errors are raised while building a Schedule; resolving a built Schedule never raises.
"""
from dataclasses import dataclass


class SequenceError(ValueError):
    """Base class: the scene/transition sequence is malformed."""


class EmptySceneList(SequenceError):
    def __init__(self) -> None:
        super().__init__("sequence must contain at least one scene")


class InvalidDuration(SequenceError):
    """Scene duration <= 0, transition duration < 0, or a non-integer duration."""

    def __init__(self, kind: str, ident: str, value: object) -> None:
        self.kind = kind
        self.ident = ident
        self.value = value
        bound = "> 0" if kind == "scene" else ">= 0"
        super().__init__(f"{kind} {ident!r}: duration_in_frames must be an integer {bound} (got {value!r})")


class UnknownPresentation(SequenceError):
    def __init__(self, name: str, available: list[str] | None = None) -> None:
        self.name = name
        self.available = sorted(available or [])
        message = f"presentation {name!r} is not registered."
        if self.available:
            message += f" Available: {', '.join(self.available)}"
        super().__init__(message)


class UnknownTiming(SequenceError):
    def __init__(self, name: str, available: list[str] | None = None) -> None:
        self.name = name
        self.available = sorted(available or [])
        message = f"timing {name!r} is not registered."
        if self.available:
            message += f" Available: {', '.join(self.available)}"
        super().__init__(message)


class InvalidPresentationParams(SequenceError):
    def __init__(self, name: str, params: dict, reason: str) -> None:
        self.name = name
        self.params = params
        super().__init__(f"presentation {name!r} does not accept params {params!r}: {reason}")


class MalformedSequence(SequenceError):
    """Input does not alternate Scene, Transition, ..., Scene."""


class DuplicateSceneId(SequenceError):
    def __init__(self, scene_id: str) -> None:
        self.scene_id = scene_id
        super().__init__(f"scene id {scene_id!r} appears more than once")


class ConfigError(ValueError):
    """A timeline or config file could not be read into a sequence."""


@dataclass(frozen=True)
class ClampWarning:
    """A transition was shortened to fit its neighbouring scenes."""
    transition_index: int
    outgoing_scene_id: str
    incoming_scene_id: str
    requested: int
    clamped: int

    def __str__(self) -> str:
        return (
            f"transition {self.transition_index} ({self.outgoing_scene_id!r} -> {self.incoming_scene_id!r}) "
            f"clamped from {self.requested} to {self.clamped} frames"
        )
