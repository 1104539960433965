from __future__ import annotations

import pytest

from vivify import ArgumentError, DynamicObject

from .helpers import Guppy, Recorder, Thermostat


def test_overlay_keeps_existing_children_instances() -> None:
    fish = Guppy(color="orange")
    fin = fish.Fin
    eyes = fish.Eyeballs
    eyes.add(side="left")

    result = fish.overlay(color="blue", price=".75")

    assert result is None
    assert fish.Fin is fin
    assert fish.Eyeballs is eyes
    assert len(fish.Eyeballs) == 1
    assert fish.color == "blue"
    assert fish.price == ".75"


def test_overlay_does_not_touch_defaults_or_rerun_post_init() -> None:
    recorder = Recorder(label="first")

    recorder.overlay({"-label": "second"})

    assert recorder.label == "second"
    assert recorder.seen_label == "first"


def test_overlay_applies_pairs_in_order() -> None:
    obj = DynamicObject()

    obj.overlay([("size", 1), ("size", 2)], size=3)

    assert obj.size == 3


def test_overlay_goes_through_declared_operations() -> None:
    thermostat = Thermostat()

    thermostat.overlay(target=5, mode="COOL")

    assert thermostat.get("target") == 10
    assert thermostat.mode == "cool"


def test_overlay_can_refresh_a_template_from_another_object() -> None:
    template = Guppy(color="orange", small=1)
    record = DynamicObject(color="gold", price="1.00")

    template.overlay(record)

    assert template.color == "gold"
    assert template.price == "1.00"
    assert template.small == 1


def test_overlay_rejects_malformed_arguments() -> None:
    obj = DynamicObject()

    with pytest.raises(ArgumentError):
        obj.overlay("size=3")
