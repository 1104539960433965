from __future__ import annotations

import logging

import pytest

from vivify import (
    ChildSpec,
    DynamicList,
    DynamicObject,
    UnresolvedTypeError,
    child,
    register_type,
    resolve_type,
)

from .helpers import Eyeball, Eyeballs, Fin, Guppy


@pytest.mark.parametrize(
    ("entry", "expected"),
    [
        ("Fin", ChildSpec("Fin", "Fin", "single")),
        ("@Eyeballs", ChildSpec("Eyeballs", "Eyeballs", "list")),
        ("aquarium.fish.Eyeballs", ChildSpec("aquarium.fish.Eyeballs", "Eyeballs", "single")),
        ("@Aquarium::Guppy::Eyeballs", ChildSpec("Aquarium::Guppy::Eyeballs", "Eyeballs", "list")),
    ],
)
def test_naming_convention_yields_trailing_identifier_and_shape(entry: str, expected: ChildSpec) -> None:
    assert child(entry) == expected


def test_class_descriptors_infer_name_and_shape() -> None:
    assert child(Fin) == ChildSpec(Fin, "Fin", "single")
    assert child(Eyeballs) == ChildSpec(Eyeballs, "Eyeballs", "list")
    assert child(Eyeball, "Eyes", shape="list") == ChildSpec(Eyeball, "Eyes", "list")


def test_generic_descriptor_requires_a_name() -> None:
    with pytest.raises(ValueError):
        child(None)
    assert child(None, "Extras", shape="list") == ChildSpec(None, "Extras", "list")


def test_schema_is_built_once_per_class() -> None:
    schema = Guppy._schema

    assert schema.defaults == ("scaly", "small", "sushi")
    assert [spec.property_name for spec in schema.children] == ["Fin", "Eyeballs"]
    assert Guppy()._schema is schema


def test_children_are_installed_under_trailing_identifier() -> None:
    fish = Guppy()

    assert isinstance(fish.get("Fin"), Fin)
    assert isinstance(fish.get("Eyeballs"), Eyeballs)
    assert fish.Eyeballs == []


def test_single_child_runs_its_own_pipeline() -> None:
    fish = Guppy()

    assert "side" in fish.Fin
    assert fish.Fin.side is None


def test_each_instance_gets_its_own_children() -> None:
    first = Guppy()
    second = Guppy()

    assert first.Fin is not second.Fin
    assert first.Eyeballs is not second.Eyeballs


def test_list_child_appends_items_of_declared_type() -> None:
    fish = Guppy()

    left = fish.Eyeballs.add(side="left")
    fish.Eyeballs.add({"side": "right", "color": "black"})

    assert isinstance(left, Eyeball)
    assert [eye.side for eye in fish.Eyeballs] == ["left", "right"]
    assert fish.Eyeballs[1].color == "black"


def test_list_shape_over_object_type_builds_typed_list() -> None:
    class School(DynamicObject):
        CHILDREN = (child(Eyeball, "Eyes", shape="list"), child(None, "Notes", shape="list"))

    school = School()

    assert type(school.Eyes) is DynamicList
    assert school.Eyes.item_type is Eyeball
    assert isinstance(school.Eyes.add(), Eyeball)
    assert isinstance(school.Notes.add(text="hi"), DynamicObject)


def test_nested_class_is_resolved_before_module_level_name() -> None:
    class Tank(DynamicObject):
        class Fin(DynamicObject):
            DEFAULTS = ("nested",)

        CHILDREN = ("Fin",)

    tank = Tank()

    assert type(tank.Fin) is Tank.Fin
    assert "nested" in tank.Fin


def test_nested_child_class_is_not_a_declared_operation() -> None:
    class Tank(DynamicObject):
        class Fin(DynamicObject):
            pass

        CHILDREN = ("Fin",)

    tank = Tank(Fin="gone")

    assert "Fin" not in Tank._schema.operations
    assert isinstance(tank.Fin, Tank.Fin), "The built child replaces the argument of the same name"
    assert tank.get("Fin") is tank.Fin


def test_later_descriptor_with_same_name_wins() -> None:
    class Crowded(DynamicObject):
        CHILDREN = (child(Fin, "Part"), child(Eyeballs, "Part"))

    assert isinstance(Crowded().Part, Eyeballs)


def test_child_can_be_overwritten_like_any_property() -> None:
    fish = Guppy()

    fish.Fin = "gone"

    assert fish.Fin == "gone"


def test_unresolvable_child_type_fails_construction() -> None:
    class Broken(DynamicObject):
        CHILDREN = ("NoSuchThing",)

    with pytest.raises(UnresolvedTypeError) as excinfo:
        Broken()

    assert excinfo.value.code == "UNRESOLVED_TYPE"
    assert excinfo.value.type_name == "NoSuchThing"
    assert isinstance(excinfo.value, LookupError)


def test_register_type_adds_aliases() -> None:
    class Scale(DynamicObject):
        pass

    register_type(Scale, "aquarium.parts.Scale")

    assert resolve_type("aquarium.parts.Scale") is Scale
    assert resolve_type("aquarium::parts::Scale") is Scale


def test_declared_operation_shadows_child_of_same_name(caplog: pytest.LogCaptureFixture) -> None:
    with caplog.at_level(logging.WARNING, logger="vivify"):

        class Boat(DynamicObject):
            CHILDREN = (child(Fin, "anchor"),)

            def anchor(self) -> str:
                return "dropped"

    boat = Boat()

    assert boat.anchor() == "dropped"
    assert isinstance(boat.get("anchor"), Fin)
    assert any("anchor" in record.getMessage() for record in caplog.records)


def test_sprout_installs_and_returns_generic_child() -> None:
    fish = Guppy()

    owner = fish.sprout("-owner", {"name": "Ann"}, age=7)

    assert type(owner) is DynamicObject
    assert fish.owner is owner
    assert owner.name == "Ann"
    assert owner.age == 7


def test_sprout_replaces_existing_property() -> None:
    fish = Guppy()
    fish.sprout("Fin", side="left")

    assert type(fish.Fin) is DynamicObject
    assert fish.Fin.side == "left"


def test_list_child_runs_its_post_init() -> None:
    class Ledger(DynamicList):
        def post_init(self) -> None:
            self.opened = True
            self.append("header")

    class Shop(DynamicObject):
        CHILDREN = (Ledger,)

    shop = Shop()

    assert shop.Ledger.opened is True
    assert shop.Ledger == ["header"]
    assert shop.Ledger.clone() == ["header"], "clone() copies items without re-running post_init"
