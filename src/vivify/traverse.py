"""Stable traversal of dynamic object trees.

Order within an object: declared defaults that are present, in declared
order, then every other property in insertion order. List elements are
visited by index. Diagnostic dumps and exports build on this order.
"""

from __future__ import annotations

from typing import Any, Iterator

from vivify.objects import DynamicList, DynamicObject

Path = tuple[Any, ...]


def ordered_names(obj: DynamicObject) -> list[str]:
    store = obj._store
    defaults = [name for name in type(obj)._schema.defaults if name in store]
    seen = set(defaults)
    return defaults + [name for name in store if name not in seen]


def _entries(node: DynamicObject | DynamicList) -> Iterator[tuple[Any, Any]]:
    if isinstance(node, DynamicObject):
        for name in ordered_names(node):
            yield name, node._store.get(name)
    else:
        yield from enumerate(node)


def walk(node: DynamicObject | DynamicList, path: Path = ()) -> Iterator[tuple[Path, Any, Any]]:
    """Yield (path, name, value) depth-first; path is the chain of names leading to the value's parent."""
    for name, value in _entries(node):
        yield path, name, value
        if isinstance(value, (DynamicObject, DynamicList)):
            yield from walk(value, path + (name,))


def to_data(value: Any) -> Any:
    """Convert a tree of dynamic objects to plain dicts and lists."""
    if isinstance(value, DynamicObject):
        return {name: to_data(item) for name, item in _entries(value)}
    if isinstance(value, list):
        return [to_data(item) for item in value]
    if isinstance(value, tuple):
        return tuple(to_data(item) for item in value)
    if isinstance(value, dict):
        return {key: to_data(item) for key, item in value.items()}
    return value
