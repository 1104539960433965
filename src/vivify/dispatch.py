"""Dispatcher - turns a call by name into a declared operation or a property access.

Resolution order for ``invoke(obj, name, *args)``:

1. ``name`` is a declared operation of the object's class (a method,
   classmethod, staticmethod or descriptor such as a property): the declared
   member handles the call.
2. Otherwise the call is a generic accessor on the object's PropertyStore:
   no argument reads, one argument writes.

Plain class attributes (constants, nested classes, DEFAULTS/CHILDREN) are not
operations; a stored property of the same name wins over them.

Reads never autovivify. Only explicit container requests
(``PropertyStore.ensure_container``) create values.
"""

from __future__ import annotations

from typing import Any, Callable, TypeVar

from vivify.config import get_settings
from vivify.errors import ArgumentError, DeclaredOperationError, UnknownPropertyError

F = TypeVar("F", bound=Callable[..., Any])

# Set on base-class store helpers; construction arguments never dispatch to them
HELPER_MARKER = "__vivify_store_helper__"


def store_helper(func: F) -> F:
    """Mark a base-class method as store plumbing rather than a record operation."""
    setattr(func, HELPER_MARKER, True)
    return func


def is_operation(member: Any) -> bool:
    if isinstance(member, type):
        return False
    return isinstance(member, (classmethod, staticmethod)) or hasattr(type(member), "__get__")


def declared_operations(cls: type) -> frozenset[str]:
    """Collect the public operation names declared on cls and its bases.

    Built once per class when the class is created; underscore names are
    private plumbing and never take part in dispatch.
    """
    names: set[str] = set()
    for klass in cls.__mro__:
        if klass is object:
            continue
        names.update(
            name for name, member in vars(klass).items() if not name.startswith("_") and is_operation(member)
        )
    return frozenset(names)


def store_helpers(cls: type, operations: frozenset[str]) -> frozenset[str]:
    """Operation names that resolve to a marked store helper (not overridden by cls)."""
    return frozenset(name for name in operations if getattr(getattr(cls, name, None), HELPER_MARKER, False))


def is_strict(cls: type) -> bool:
    """Whether cls rejects undeclared property names (STRICT, else the global setting)."""
    strict = getattr(cls, "STRICT", None)
    if strict is None:
        return bool(get_settings().get("strict", False))
    return bool(strict)


def read(obj: Any, name: str) -> Any:
    """Read a property; absent names yield None unless the class is strict."""
    store = obj._store
    if name not in store and is_strict(type(obj)):
        raise UnknownPropertyError(type(obj).__name__, name)
    return store.get(name)


def _is_declared(cls: type, name: str) -> bool:
    # Declared defaults and children, or a plain class attribute acting as a fallback value
    return name in cls._schema.declared_properties or hasattr(cls, name)


def write(obj: Any, name: str, value: Any) -> None:
    """Write a property, creating it if needed."""
    cls = type(obj)
    store = obj._store
    if name not in store and not _is_declared(cls, name) and is_strict(cls):
        raise UnknownPropertyError(cls.__name__, name)
    store.set(name, value)


def assign(obj: Any, name: str, value: Any) -> None:
    """Attribute-assignment form of a write.

    Settable descriptors (properties with a setter) run; any other declared
    name refuses the assignment instead of being shadowed.
    """
    cls = type(obj)
    if name in cls._schema.operations:
        descriptor = getattr(cls, name, None)
        if hasattr(descriptor, "__set__"):
            descriptor.__set__(obj, value)
            return
        raise DeclaredOperationError(cls.__name__, name)
    write(obj, name, value)


def invoke(obj: Any, name: str, *args: Any) -> Any:
    """Dispatch a call by name with zero or one argument."""
    cls = type(obj)

    if name in cls._schema.operations:
        descriptor = getattr(cls, name, None)
        if isinstance(descriptor, property):
            if not args:
                return descriptor.__get__(obj, cls)
            if len(args) > 1:
                raise ArgumentError(f"Property '{name}' accepts a single value, got {len(args)}")
            assign(obj, name, args[0])
            return None

        member = getattr(obj, name)
        if callable(member):
            return member(*args)
        if args:
            raise DeclaredOperationError(cls.__name__, name)
        return member

    if not args:
        return read(obj, name)
    if len(args) > 1:
        raise ArgumentError(f"Accessor '{name}' accepts a single value, got {len(args)}")
    write(obj, name, args[0])
    return None


def put(obj: Any, name: str, value: Any) -> None:
    """One-argument accessor form used by construction, defaults and overlay.

    Names of inherited store helpers (get, set, properties, ...) are ordinary
    record fields here: the value is stored instead of being passed to the helper.
    """
    if name in type(obj)._schema.helpers:
        write(obj, name, value)
        return
    invoke(obj, name, value)
