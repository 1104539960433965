"""Vivify Type Definitions."""

from __future__ import annotations

from typing import Any, Literal, TypedDict, Union


# Scalar types
Shape = Literal["single", "list"]
ContainerKind = Literal["object", "list", "sequence"]
ErrorCode = Literal[
    "INVALID_ARGUMENT",
    "UNRESOLVED_TYPE",
    "UNKNOWN_PROPERTY",
    "DECLARED_OPERATION",
    "UNKNOWN_ERROR",
]

# A name/value pair as accepted by constructors, overlay and sprout
PropertyPair = tuple[str, Any]

# Anything a declaration may name as a child type: a class, a registered
# type name, or None for the generic flavor
TypeRef = Union[type, str, None]


class Settings(TypedDict, total=False):
    strict: bool
    log_level: str | None
