"""PropertyStore - the name -> value mapping owned by every dynamic object."""

from __future__ import annotations

from typing import Any, Callable, Iterator

from vivify.types import ContainerKind

# Empty-container factories by kind. "object" and "list" are registered by
# vivify.objects once the dynamic classes exist.
_CONTAINER_FACTORIES: dict[str, Callable[[], Any]] = {
    "sequence": list,
}


def register_container(kind: ContainerKind, factory: Callable[[], Any]) -> None:
    """Register the factory used by ensure_container() for a container kind."""
    _CONTAINER_FACTORIES[kind] = factory


class PropertyStore:
    """Insertion-ordered property mapping.

    Reading an absent name is never an error: get() returns the default
    (None unless given). Names are only removed through delete().
    """

    __slots__ = ("_values",)

    def __init__(self) -> None:
        self._values: dict[str, Any] = {}

    def get(self, name: str, default: Any = None) -> Any:
        return self._values.get(name, default)

    def set(self, name: str, value: Any) -> None:
        self._values[name] = value

    def ensure_container(self, name: str, kind: ContainerKind) -> Any:
        """Return the container stored under name, creating an empty one if absent.

        An existing value is returned unchanged whatever its kind.
        """
        if name in self._values:
            return self._values[name]

        try:
            factory = _CONTAINER_FACTORIES[kind]
        except KeyError:
            raise ValueError(f'Unknown container kind: "{kind}". Use "object", "list" or "sequence".')

        container = factory()
        self._values[name] = container
        return container

    def delete(self, name: str) -> None:
        del self._values[name]

    def names(self) -> list[str]:
        return list(self._values)

    def items(self) -> list[tuple[str, Any]]:
        return list(self._values.items())

    def __contains__(self, name: object) -> bool:
        return name in self._values

    def __iter__(self) -> Iterator[str]:
        return iter(self._values)

    def __len__(self) -> int:
        return len(self._values)

    def __repr__(self) -> str:
        return f"PropertyStore({self._values!r})"
