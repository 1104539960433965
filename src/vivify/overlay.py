"""Overlay - bulk-apply name/value pairs to an existing object."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from typing import Any

from vivify.objects import DynamicObject
from vivify.pipeline import apply_arguments

logger = logging.getLogger(__name__)


def overlay(obj: DynamicObject, sources: Iterable[Any], kwargs: Mapping[str, Any]) -> None:
    """Re-run the argument stage of construction against obj.

    Defaults, children and post_init are left alone, so already-built
    subordinates keep their identity.
    """
    logger.debug("%s: overlaying arguments", type(obj).__qualname__)
    apply_arguments(obj, sources, kwargs)
