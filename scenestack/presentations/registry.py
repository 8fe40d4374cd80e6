"""
Presentation registry: name -> pure function (progress, direction, **params) -> StyleDescriptor.

Every registered presentation must satisfy the symmetry contract:
    entering @ 0 -> hidden        entering @ 1 -> fully visible
    exiting  @ 0 -> fully visible exiting  @ 1 -> hidden
and must be deterministic (same inputs, same descriptor; no randomness, clocks or call order).
"""
import inspect
import logging
from typing import Any, Callable, Mapping

from ..sequence.errors import InvalidPresentationParams, UnknownPresentation
from ..sequence.schema import Direction
from .style import StyleDescriptor

logger = logging.getLogger(__name__)

Presentation = Callable[..., StyleDescriptor]


class PresentationRegistry:
    """
    Registry of presentations keyed by name (strategy pattern).

    Example:
        >>> registry = PresentationRegistry()
        >>> registry.register("fade", fade)
        >>> registry.apply("fade", 0.5, Direction.ENTERING)
        StyleDescriptor(opacity=0.5, ...)
    """

    def __init__(self, presentations: Mapping[str, Presentation] | None = None) -> None:
        self._presentations: dict[str, Presentation] = dict(presentations or {})

    def register(self, name: str, fn: Presentation, *, replace: bool = False) -> Presentation:
        if name in self._presentations and not replace:
            raise ValueError(f"presentation {name!r} is already registered (pass replace=True to override)")
        self._presentations[name] = fn
        return fn

    def get(self, name: str) -> Presentation:
        try:
            return self._presentations[name]
        except KeyError:
            raise UnknownPresentation(name, list(self._presentations)) from None

    def __contains__(self, name: object) -> bool:
        return name in self._presentations

    def __len__(self) -> int:
        return len(self._presentations)

    def names(self) -> list[str]:
        return sorted(self._presentations)

    def copy(self) -> "PresentationRegistry":
        return PresentationRegistry(self._presentations)

    def validate_params(self, name: str, params: Mapping[str, Any] | None) -> None:
        """Raise InvalidPresentationParams if the presentation would reject params."""
        fn = self.get(name)
        kwargs = dict(params or {})
        try:
            inspect.signature(fn).bind(0.0, Direction.ENTERING, **kwargs)
            # value checks (unknown headings, bad axes) happen inside the call
            fn(0.0, Direction.ENTERING, **kwargs)
        except (TypeError, ValueError) as e:
            raise InvalidPresentationParams(name, kwargs, str(e)) from None

    def apply(
        self,
        name: str,
        progress: float,
        direction: Direction | str,
        params: Mapping[str, Any] | None = None,
    ) -> StyleDescriptor:
        """
        Style for one side of a transition. STEADY always yields the untouched style,
        independent of the presentation.
        """
        direction = Direction(direction)
        if direction is Direction.STEADY:
            return StyleDescriptor()
        return self.get(name)(progress, direction, **dict(params or {}))


_DEFAULT = PresentationRegistry()


def default_registry() -> PresentationRegistry:
    """Registry holding the builtin presentations."""
    from . import builtin  # noqa: F401  (registers builtins on import)
    return _DEFAULT


def presentation(name: str, *, registry: PresentationRegistry | None = None) -> Callable[[Presentation], Presentation]:
    """Decorator: register fn under name (default registry unless one is given)."""
    def decorator(fn: Presentation) -> Presentation:
        (registry if registry is not None else _DEFAULT).register(name, fn)
        return fn
    return decorator
