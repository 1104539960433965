"""DynamicObject - a base class whose instances acquire properties on demand.

    class Guppy(DynamicObject):
        DEFAULTS = ("scaly", "small", "sushi")
        CHILDREN = ("Fin", "@Eyeballs")

    fish = Guppy(color="orange", price=".50")
    fish.color          # "orange"
    fish.scaly          # None (declared, unset)
    fish.whatever       # None (never set, no error)
    fish.whatever = 1   # creates the property
    fish.Eyeballs.add(side="left")

Operations declared on the class (methods, properties) always win over
properties of the same name; those remain reachable through the store-level
surface (obj.get(), obj[name]). Plain class attributes only act as fallback
values: a stored property of the same name is read first.
"""

from __future__ import annotations

import reprlib
from typing import Any, Iterator

from vivify.declarations import TypeSchema, build_schema, register_type, resolve_type
from vivify.dispatch import assign, invoke, read, store_helper
from vivify.store import PropertyStore, register_container
from vivify.types import ContainerKind, TypeRef


class DynamicObject:
    """Base class for objects with dynamic, autovivifying properties."""

    __slots__ = ("_store",)

    # Property names initialised (to None) at construction unless supplied
    DEFAULTS: tuple[str, ...] = ()
    # Subordinate objects built at construction; see vivify.declarations
    CHILDREN: tuple[Any, ...] = ()
    # True rejects undeclared names, None defers to the VIVIFY_STRICT setting
    STRICT: bool | None = None

    _schema: TypeSchema

    def __init_subclass__(cls, **kwargs: Any) -> None:
        super().__init_subclass__(**kwargs)
        cls._schema = build_schema(cls)
        register_type(cls)

    def __init__(self, /, *pairs: Any, **kwargs: Any) -> None:
        from vivify.pipeline import construct

        object.__setattr__(self, "_store", PropertyStore())
        construct(self, pairs, kwargs)

    @classmethod
    def new(cls, /, *pairs: Any, **kwargs: Any) -> DynamicObject:
        """Construct an instance; same as calling the class."""
        return cls(*pairs, **kwargs)

    def post_init(self) -> None:
        """Late-initialisation hook, run once after arguments, defaults and children."""

    # Dynamic accessor surface

    def __getattribute__(self, name: str) -> Any:
        if not name.startswith("_") and name not in type(self)._schema.operations:
            store = object.__getattribute__(self, "_store")
            if name in store:
                return store.get(name)
        return object.__getattribute__(self, name)

    def __getattr__(self, name: str) -> Any:
        if name.startswith("_"):
            raise AttributeError(f"'{type(self).__name__}' object has no attribute '{name}'")
        return read(self, name)

    def __setattr__(self, name: str, value: Any) -> None:
        if name.startswith("_"):
            object.__setattr__(self, name, value)
            return
        assign(self, name, value)

    @store_helper
    def call(self, name: str, /, *args: Any) -> Any:
        """Dispatch a call by name: a declared operation, else a property get/set."""
        return invoke(self, name, *args)

    # Store-level surface

    @store_helper
    def get(self, name: str, default: Any = None) -> Any:
        return self._store.get(name, default)

    @store_helper
    def set(self, name: str, value: Any) -> None:
        self._store.set(name, value)

    @store_helper
    def vivify(self, name: str, kind: ContainerKind = "object") -> Any:
        """Return the container stored under name, creating an empty one of kind if absent."""
        return self._store.ensure_container(name, kind)

    @store_helper
    def properties(self) -> list[tuple[str, Any]]:
        """(name, value) pairs in traversal order: declared defaults first, then insertion order."""
        from vivify.traverse import ordered_names

        return [(name, self._store.get(name)) for name in ordered_names(self)]

    def __getitem__(self, name: str) -> Any:
        if name not in self._store:
            raise KeyError(name)
        return self._store.get(name)

    def __setitem__(self, name: str, value: Any) -> None:
        self._store.set(name, value)

    def __delitem__(self, name: str) -> None:
        self._store.delete(name)

    def __contains__(self, name: object) -> bool:
        return name in self._store

    def __iter__(self) -> Iterator[str]:
        from vivify.traverse import ordered_names

        return iter(ordered_names(self))

    def __len__(self) -> int:
        return len(self._store)

    # Structure operations

    def sprout(self, name: str, /, *pairs: Any, **kwargs: Any) -> DynamicObject:
        """Build a generic subordinate from the arguments and install it under name."""
        from vivify.hierarchy import sprout

        return sprout(self, name, pairs, kwargs)

    def overlay(self, /, *pairs: Any, **kwargs: Any) -> None:
        """Apply name/value pairs to this object without re-running construction."""
        from vivify.overlay import overlay

        overlay(self, pairs, kwargs)

    def clone(self) -> DynamicObject:
        """Deep, best-effort copy; members that cannot be copied are left out."""
        from vivify.clone import clone_object

        return clone_object(self)

    @store_helper
    def to_dict(self) -> dict[str, Any]:
        """Export as plain dicts and lists, in traversal order."""
        from vivify.traverse import to_data

        return to_data(self)

    def __copy__(self) -> DynamicObject:
        cls = type(self)
        duplicate = cls.__new__(cls)
        object.__setattr__(duplicate, "_store", PropertyStore())
        for name, value in self._store.items():
            duplicate._store.set(name, value)
        return duplicate

    def __deepcopy__(self, memo: dict[int, Any]) -> DynamicObject:
        from vivify.clone import clone_object

        return clone_object(self, memo)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, DynamicObject):
            return NotImplemented
        return type(self) is type(other) and dict(self._store.items()) == dict(other._store.items())

    __hash__ = None  # type: ignore[assignment]

    @reprlib.recursive_repr()
    def __repr__(self) -> str:
        fields = ", ".join(f"{name}={value!r}" for name, value in self.properties())
        return f"{type(self).__name__}({fields})"


DynamicObject._schema = build_schema(DynamicObject)
register_type(DynamicObject)


class DynamicList(list):
    """List flavor of a dynamic object: subordinates indexed by position.

    ITEM_TYPE (or the item_type argument) names the class add() builds;
    the generic DynamicObject is used when neither is set.

    Unlike DynamicObject it holds no named properties, so there is no
    argument, defaults or children stage: construction stores the initial
    items and item_type, then runs post_init. clone() does not run it again.
    """

    ITEM_TYPE: TypeRef = None

    def __init_subclass__(cls, **kwargs: Any) -> None:
        super().__init_subclass__(**kwargs)
        register_type(cls)

    def __init__(self, iterable: Any = (), /, item_type: TypeRef = None) -> None:
        super().__init__(iterable)
        self.item_type = item_type if item_type is not None else self.ITEM_TYPE
        self.post_init()

    def post_init(self) -> None:
        """Late-initialisation hook, run once after the initial items are stored."""

    def add(self, /, *pairs: Any, **kwargs: Any) -> Any:
        """Construct an item from the arguments, append it and return it."""
        item_type = resolve_type(self.item_type, type(self)) or DynamicObject
        item = item_type(*pairs, **kwargs)
        self.append(item)
        return item

    def clone(self) -> DynamicList:
        from vivify.clone import clone_object

        return clone_object(self)

    def to_list(self) -> list[Any]:
        from vivify.traverse import to_data

        return to_data(self)

    @reprlib.recursive_repr()
    def __repr__(self) -> str:
        return f"{type(self).__name__}({list.__repr__(self)})"


register_type(DynamicList)
register_container("object", DynamicObject)
register_container("list", DynamicList)
