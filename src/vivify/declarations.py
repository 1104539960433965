"""Class-level declarations: defaults, child descriptors and the type registry.

A dynamic class declares::

    class Guppy(DynamicObject):
        DEFAULTS = ("scaly", "small", "sushi")
        CHILDREN = ("Fin", "@Eyeballs")

Each CHILDREN entry is normalised once, when the class is created, into a
frozen ChildSpec. Strings follow the naming convention: the trailing
identifier (after the last "." or "::") becomes the property name and a
leading "@" selects the list shape. Classes and explicit child() records are
accepted as well.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from typing import Any, Iterable

from vivify.dispatch import declared_operations, store_helpers
from vivify.errors import ArgumentError, UnresolvedTypeError
from vivify.types import Shape, TypeRef

logger = logging.getLogger(__name__)

ARGUMENT_PREFIX = "-"
LIST_MARKER = "@"

_SEGMENT_SEPARATOR = re.compile(r"\.|::")

# Registered dynamic classes, keyed by qualified and bare names
_registry: dict[str, type] = {}


def strip_prefix(name: str) -> str:
    """Drop the conventional "-" prefix: "-color" and "color" are the same name."""
    if name.startswith(ARGUMENT_PREFIX):
        return name[len(ARGUMENT_PREFIX):]
    return name


def normalize_name(name: Any) -> str:
    """Validate a property name given as an argument and strip its prefix."""
    if not isinstance(name, str):
        raise ArgumentError(f"Property names must be strings, got {type(name).__name__}")
    stripped = strip_prefix(name)
    if not stripped:
        raise ArgumentError(f'Invalid property name: "{name}"')
    return stripped


@dataclass(frozen=True)
class ChildSpec:
    """One declared subordinate: what to build, where to install it, and its shape."""

    type_ref: TypeRef
    property_name: str
    shape: Shape = "single"


def _trailing_identifier(ref: str) -> str:
    return _SEGMENT_SEPARATOR.split(ref)[-1]


def child(type_ref: TypeRef, name: str | None = None, shape: Shape | None = None) -> ChildSpec:
    """Build a child descriptor.

    Args:
        type_ref: A class, a registered type name (optionally "@"-marked for
                  the list shape), or None for the generic flavor.
        name: Property name; defaults to the type's trailing identifier.
        shape: "single" or "list"; inferred when omitted.
    """
    if isinstance(type_ref, str):
        marked = type_ref.startswith(LIST_MARKER)
        ref = type_ref[len(LIST_MARKER):] if marked else type_ref
        if not ref:
            raise ArgumentError(f'Child descriptor "{type_ref}" names no type')
        return ChildSpec(ref, name or _trailing_identifier(ref), shape or ("list" if marked else "single"))

    if isinstance(type_ref, type):
        if shape is None:
            shape = "list" if issubclass(type_ref, list) else "single"
        return ChildSpec(type_ref, name or type_ref.__name__, shape)

    if type_ref is None:
        if not name:
            raise ArgumentError("A generic child descriptor needs a property name")
        return ChildSpec(None, name, shape or "single")

    raise ArgumentError(f"Invalid child type reference: {type_ref!r}")


def parse_child(entry: Any) -> ChildSpec:
    """Normalise one CHILDREN entry into a ChildSpec."""
    if isinstance(entry, ChildSpec):
        return entry
    if isinstance(entry, tuple):
        return child(*entry)
    if isinstance(entry, (str, type)):
        return child(entry)
    raise ArgumentError(f"Invalid child declaration: {entry!r}")


@dataclass(frozen=True)
class TypeSchema:
    """Per-class registration table, built once and shared by every instance."""

    defaults: tuple[str, ...]
    children: tuple[ChildSpec, ...]
    operations: frozenset[str]
    helpers: frozenset[str]
    declared_properties: frozenset[str]


def _declared_defaults(cls: type) -> tuple[str, ...]:
    declared = getattr(cls, "DEFAULTS", None) or ()
    if isinstance(declared, str):
        declared = (declared,)
    # dict.fromkeys keeps the first occurrence and declared order
    return tuple(dict.fromkeys(strip_prefix(name) for name in declared))


def _declared_children(cls: type) -> tuple[ChildSpec, ...]:
    declared: Iterable[Any] = getattr(cls, "CHILDREN", None) or ()
    if isinstance(declared, (str, ChildSpec)):
        declared = (declared,)
    return tuple(parse_child(entry) for entry in declared)


def build_schema(cls: type) -> TypeSchema:
    defaults = _declared_defaults(cls)
    children = _declared_children(cls)
    operations = declared_operations(cls)
    declared_properties = frozenset(defaults) | frozenset(spec.property_name for spec in children)

    shadowed = sorted(declared_properties & operations)
    if shadowed:
        logger.warning(
            "%s declares properties shadowed by operations of the same name: %s",
            cls.__qualname__,
            ", ".join(shadowed),
        )

    return TypeSchema(
        defaults=defaults,
        children=children,
        operations=operations,
        helpers=store_helpers(cls, operations),
        declared_properties=declared_properties,
    )


def register_type(cls: type, *aliases: str) -> None:
    """Make cls resolvable by name from child descriptors."""
    for key in (f"{cls.__module__}.{cls.__qualname__}", cls.__qualname__, cls.__name__, *aliases):
        _registry[key] = cls


def resolve_type(type_ref: TypeRef, owner: type | None = None) -> type | None:
    """Resolve a descriptor's type reference to a class.

    Names are tried nested in the owner class, then in the owner's module,
    then as registered (qualified or bare) names.
    """
    if type_ref is None or isinstance(type_ref, type):
        return type_ref

    name = type_ref.replace("::", ".")
    candidates = []
    if owner is not None:
        candidates.append(f"{owner.__module__}.{owner.__qualname__}.{name}")
        candidates.append(f"{owner.__module__}.{name}")
    candidates.append(name)

    for key in candidates:
        resolved = _registry.get(key)
        if resolved is not None:
            return resolved

    raise UnresolvedTypeError(type_ref, owner.__qualname__ if owner is not None else None)
