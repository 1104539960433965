"""Construction pipeline.

Every dynamic object is built in four ordered stages:

1. arguments  - name/value pairs are dispatched in input order
2. defaults   - declared default names not yet present are set to None
3. children   - declared subordinates are built and installed
4. post_init  - the late-initialisation hook runs

Nothing is caught here: an error raised by a declared operation reaches the
caller of the constructor unchanged.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from typing import Any, Iterator

from vivify.declarations import normalize_name
from vivify.dispatch import put
from vivify.errors import ArgumentError
from vivify.hierarchy import build_children
from vivify.objects import DynamicObject
from vivify.types import PropertyPair

logger = logging.getLogger(__name__)


def _source_items(source: Any) -> Iterable[Any]:
    if isinstance(source, DynamicObject):
        return source.properties()
    if isinstance(source, Mapping):
        return source.items()
    if isinstance(source, (str, bytes)) or not isinstance(source, Iterable):
        raise ArgumentError(f"Expected a mapping or an iterable of (name, value) pairs, got {source!r}")
    return source


def iter_pairs(sources: Iterable[Any], kwargs: Mapping[str, Any]) -> Iterator[PropertyPair]:
    """Flatten positional sources and keyword arguments into (name, value) pairs, in order."""
    for source in sources:
        for item in _source_items(source):
            if isinstance(item, (str, bytes, DynamicObject)):
                raise ArgumentError(f"Expected a (name, value) pair, got {item!r}")
            try:
                name, value = item
            except (TypeError, ValueError):
                raise ArgumentError(f"Expected a (name, value) pair, got {item!r}")
            yield normalize_name(name), value

    for name, value in kwargs.items():
        yield normalize_name(name), value


def apply_arguments(obj: DynamicObject, sources: Iterable[Any], kwargs: Mapping[str, Any]) -> None:
    """Stage 1: dispatch each pair as a one-argument accessor call."""
    for name, value in iter_pairs(sources, kwargs):
        put(obj, name, value)


def apply_defaults(obj: DynamicObject) -> None:
    """Stage 2: register declared defaults that stage 1 did not set."""
    store = obj._store
    for name in type(obj)._schema.defaults:
        if name not in store:
            put(obj, name, None)


def construct(obj: DynamicObject, sources: Iterable[Any], kwargs: Mapping[str, Any]) -> None:
    cls_name = type(obj).__qualname__

    logger.debug("%s: applying arguments", cls_name)
    apply_arguments(obj, sources, kwargs)

    logger.debug("%s: applying defaults", cls_name)
    apply_defaults(obj)

    logger.debug("%s: building children", cls_name)
    build_children(obj)

    logger.debug("%s: running post_init", cls_name)
    obj.post_init()
