"""Vivify - dynamic objects that grow properties and subordinate trees on demand.

Example:
    from vivify import DynamicObject, DynamicList

    class Fin(DynamicObject):
        DEFAULTS = ("side",)

    class Eyeballs(DynamicList):
        ITEM_TYPE = "Eyeball"

    class Eyeball(DynamicObject):
        pass

    class Guppy(DynamicObject):
        DEFAULTS = ("scaly", "small", "sushi")
        CHILDREN = ("Fin", "@Eyeballs")

    fish = Guppy.new(color="orange", price=".50", small=1, sushi=1)
    print(fish.color)          # orange
    print(fish.scaly)          # None
    fish.Eyeballs.add(side="left")

    twin = fish.clone()
    twin.Fin.side = "right"    # fish.Fin is untouched
    fish.overlay({"price": ".75"})
"""

import logging

# Core types
from vivify.objects import DynamicList, DynamicObject

# Declarations
from vivify.declarations import ChildSpec, TypeSchema, child, register_type, resolve_type

# Structure operations
from vivify.clone import clone_object
from vivify.traverse import ordered_names, to_data, walk

# Store
from vivify.store import PropertyStore

# Configuration
from vivify.config import configure, get_settings, load_settings, reset_settings

# Errors
from vivify.errors import (
    ArgumentError,
    DeclaredOperationError,
    UnknownPropertyError,
    UnresolvedTypeError,
    VivifyError,
)

# Types
from vivify.types import ContainerKind, ErrorCode, PropertyPair, Settings, Shape, TypeRef

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    # Core types
    "DynamicObject",
    "DynamicList",
    "PropertyStore",
    # Declarations
    "ChildSpec",
    "TypeSchema",
    "child",
    "register_type",
    "resolve_type",
    # Structure operations
    "clone_object",
    "ordered_names",
    "to_data",
    "walk",
    # Configuration
    "configure",
    "get_settings",
    "load_settings",
    "reset_settings",
    # Errors
    "VivifyError",
    "ArgumentError",
    "DeclaredOperationError",
    "UnknownPropertyError",
    "UnresolvedTypeError",
    # Types
    "ContainerKind",
    "ErrorCode",
    "PropertyPair",
    "Settings",
    "Shape",
    "TypeRef",
]
