"""Cloner - deep, best-effort copies of dynamic objects.

Values are copied by kind:
- DynamicObject / DynamicList: new instance of the same class, entries copied
- list, dict, set, frozenset: element-wise, uncopyable elements dropped
- tuple: element-wise, but skipped as a whole if any element is uncopyable,
  so positions never shift
- scalars: shared as-is
- handles (files, sockets, locks, generators, modules): skipped
- anything else: copy.deepcopy, skipped if it raises

A skipped member is simply missing from the copy. The memo, keyed by id(),
keeps shared references shared and stops on cycles.
"""

from __future__ import annotations

import copy
import io
import logging
import socket
import threading
import types
from typing import Any

from vivify.objects import DynamicList, DynamicObject
from vivify.store import PropertyStore

logger = logging.getLogger(__name__)

# Marker for a member that cannot be copied
_SKIP = object()

_SCALARS = (type(None), bool, int, float, complex, str, bytes, range, type, types.FunctionType, types.BuiltinFunctionType)

_UNCOPYABLE = (
    io.IOBase,
    socket.socket,
    types.GeneratorType,
    types.CoroutineType,
    types.AsyncGeneratorType,
    types.ModuleType,
    types.FrameType,
    type(threading.Lock()),
    type(threading.RLock()),
)


def clone_object(value: Any, memo: dict[int, Any] | None = None) -> Any:
    """Deep-copy a DynamicObject or DynamicList.

    Always returns a copy of the root; only nested members may be skipped.
    """
    if memo is None:
        memo = {}
    if isinstance(value, DynamicObject):
        return _copy_object(value, memo)
    if isinstance(value, DynamicList):
        return _copy_list(value, memo)
    raise TypeError(f"clone_object() expects a DynamicObject or DynamicList, got {type(value).__name__}")


def _copy(value: Any, memo: dict[int, Any]) -> Any:
    existing = memo.get(id(value), _SKIP)
    if existing is not _SKIP:
        return existing

    if isinstance(value, _SCALARS):
        return value
    if isinstance(value, DynamicObject):
        return _copy_object(value, memo)
    if isinstance(value, DynamicList):
        return _copy_list(value, memo)
    if isinstance(value, _UNCOPYABLE):
        return _SKIP

    kind = type(value)
    if kind is list:
        return _copy_sequence(value, memo)
    if kind is tuple:
        items = [_copy(item, memo) for item in value]
        if any(item is _SKIP for item in items):
            return _SKIP
        return tuple(items)
    if kind in (set, frozenset):
        items = [_copy(item, memo) for item in value]
        return kind(item for item in items if item is not _SKIP)
    if kind is dict:
        return _copy_mapping(value, memo)

    try:
        return copy.deepcopy(value, memo)
    except Exception as exc:  # any failure inside a foreign __deepcopy__ or __reduce_ex__
        logger.debug("Cannot copy %s: %s", kind.__qualname__, exc)
        return _SKIP


def _copy_object(obj: DynamicObject, memo: dict[int, Any]) -> DynamicObject:
    cls = type(obj)
    duplicate = cls.__new__(cls)
    object.__setattr__(duplicate, "_store", PropertyStore())
    memo[id(obj)] = duplicate

    for name, value in obj._store.items():
        copied = _copy(value, memo)
        if copied is _SKIP:
            logger.debug("Skipping uncopyable property %s.%s (%s)", cls.__qualname__, name, type(value).__qualname__)
            continue
        duplicate._store.set(name, copied)

    # Private attributes of subclasses that carry an instance __dict__
    for name, value in getattr(obj, "__dict__", {}).items():
        copied = _copy(value, memo)
        if copied is not _SKIP:
            object.__setattr__(duplicate, name, copied)

    return duplicate


def _copy_list(items: DynamicList, memo: dict[int, Any]) -> DynamicList:
    cls = type(items)
    duplicate = cls.__new__(cls)
    list.__init__(duplicate)
    memo[id(items)] = duplicate

    duplicate.__dict__.update(items.__dict__)
    for item in items:
        copied = _copy(item, memo)
        if copied is _SKIP:
            logger.debug("Skipping uncopyable item of %s (%s)", cls.__qualname__, type(item).__qualname__)
            continue
        duplicate.append(copied)
    return duplicate


def _copy_sequence(items: list[Any], memo: dict[int, Any]) -> list[Any]:
    duplicate: list[Any] = []
    memo[id(items)] = duplicate
    for item in items:
        copied = _copy(item, memo)
        if copied is not _SKIP:
            duplicate.append(copied)
    return duplicate


def _copy_mapping(mapping: dict[Any, Any], memo: dict[int, Any]) -> dict[Any, Any]:
    duplicate: dict[Any, Any] = {}
    memo[id(mapping)] = duplicate
    for key, value in mapping.items():
        copied = _copy(value, memo)
        if copied is not _SKIP:
            duplicate[key] = copied
    return duplicate
