from __future__ import annotations

from typing import Any

from vivify import DynamicList, DynamicObject


class Fin(DynamicObject):
    DEFAULTS = ("side",)


class Eyeball(DynamicObject):
    DEFAULTS = ("side", "color")


class Eyeballs(DynamicList):
    ITEM_TYPE = "Eyeball"


class Guppy(DynamicObject):
    DEFAULTS = ("scaly", "small", "sushi")
    CHILDREN = ("Fin", "@Eyeballs")


class Recorder(DynamicObject):
    """Records what post_init saw so stage ordering can be checked."""

    DEFAULTS = ("label",)
    CHILDREN = ("Fin",)

    def post_init(self) -> None:
        self.seen_label = self.label
        self.seen_fin = self.get("Fin")
        self.initialised = True


class Failing(DynamicObject):
    def post_init(self) -> None:
        raise RuntimeError("post_init failed")


class Thermostat(DynamicObject):
    """Declares explicit operations that take precedence over dynamic properties."""

    DEFAULTS = ("target",)

    def target(self, value: Any = None) -> Any:
        if value is not None:
            self.set("target", max(10, min(30, value)))
        return self.get("target")

    @property
    def mode(self) -> str:
        return self.get("mode") or "auto"

    @mode.setter
    def mode(self, value: str) -> None:
        self.set("mode", value.lower())

    def describe(self) -> str:
        return f"{self.mode}:{self.get('target')}"
