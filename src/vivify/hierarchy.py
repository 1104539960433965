"""Hierarchy builder - instantiates declared subordinates and sprouted children."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from typing import Any

from vivify.declarations import ChildSpec, normalize_name, resolve_type
from vivify.objects import DynamicList, DynamicObject

logger = logging.getLogger(__name__)


def instantiate(spec: ChildSpec, owner: type) -> Any:
    """Build the subordinate described by spec.

    A DynamicList subclass is created empty. A list-shaped descriptor over
    any other type gives a DynamicList of that item type. Everything else
    runs its own full construction with no arguments.
    """
    resolved = resolve_type(spec.type_ref, owner)

    if resolved is None:
        return DynamicList() if spec.shape == "list" else DynamicObject()
    if issubclass(resolved, DynamicList):
        return resolved()
    if spec.shape == "list":
        return DynamicList(item_type=resolved)
    return resolved()


def build_children(obj: DynamicObject) -> None:
    """Install every declared child, in declared order; later names overwrite earlier ones."""
    cls = type(obj)
    for spec in cls._schema.children:
        instance = instantiate(spec, cls)
        obj._store.set(spec.property_name, instance)
        logger.debug(
            "%s: installed %s child %s (%s)",
            cls.__qualname__,
            spec.shape,
            spec.property_name,
            type(instance).__qualname__,
        )


def sprout(
    obj: DynamicObject,
    name: str,
    sources: Iterable[Any],
    kwargs: Mapping[str, Any],
) -> DynamicObject:
    """Build a generic subordinate from the arguments and install it under name."""
    property_name = normalize_name(name)
    child = DynamicObject(*sources, **kwargs)
    obj._store.set(property_name, child)
    logger.debug("%s: sprouted %s", type(obj).__qualname__, property_name)
    return child
