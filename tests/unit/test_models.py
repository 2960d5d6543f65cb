"""Unit tests for trait sets and identity value objects."""

from __future__ import annotations

from datetime import datetime
from datetime import timezone

import pytest
from pydantic import ValidationError

from holonmem.models import Context
from holonmem.models import Identifier
from holonmem.models import IndividualModel
from holonmem.models import Observation
from holonmem.models import Profile
from holonmem.models import ReferentType
from holonmem.models import Trait
from holonmem.models import trait_set


# ===================================================================
# Trait
# ===================================================================


class TestTrait:
    def test_equality_by_key_and_value(self):
        assert Trait(key="color", value="red") == Trait(key="color", value="red")
        assert Trait(key="color", value="red") != Trait(key="color", value="blue")
        assert Trait(key="color", value="red") != Trait(key="shade", value="red")

    def test_hashable_and_deduplicated_in_sets(self):
        traits = {Trait(key="size", value="big"), Trait(key="size", value="big")}
        assert len(traits) == 1

    def test_frozen(self):
        trait = Trait(key="color", value="red")
        with pytest.raises(ValidationError):
            trait.value = "blue"

    def test_blank_key_rejected(self):
        with pytest.raises(ValidationError, match="non-empty"):
            Trait(key="  ", value="red")

    def test_str(self):
        assert str(Trait(key="color", value="red")) == "color:red"

    def test_parse(self):
        assert Trait.parse("color: red") == Trait(key="color", value="red")

    def test_parse_splits_on_first_colon(self):
        assert Trait.parse("time:12:30").value == "12:30"

    def test_parse_without_colon(self):
        with pytest.raises(ValueError, match="Invalid trait"):
            Trait.parse("color")

    def test_value_type_is_part_of_equality(self):
        as_bool = Trait(key="barks", value=True)
        as_int = Trait(key="barks", value=1)
        as_float = Trait(key="barks", value=1.0)
        assert as_bool != as_int
        assert as_int != as_float
        assert len({as_bool, as_int, as_float}) == 3

    def test_equal_typed_values_hash_alike(self):
        a = Trait(key="size", value=3)
        b = Trait(key="size", value=3)
        assert a == b
        assert hash(a) == hash(b)

    def test_parse_keeps_value_as_string(self):
        parsed = Trait.parse("size:3")
        assert parsed.value == "3"
        assert parsed != Trait(key="size", value=3)
        assert parsed == Trait(key="size", value="3")


# ===================================================================
# Profile / Context
# ===================================================================


class TestTraitSets:
    def test_from_mapping(self):
        profile = Profile.from_pairs({"color": "red", "size": "big"}, name="dog")
        assert profile.name == "dog"
        assert profile.size == 2
        assert Trait(key="color", value="red") in profile.traits

    def test_from_pairs_iterable(self):
        context = Context.from_pairs([("color", "red"), ("color", "red")])
        assert context.size == 1
        assert isinstance(context, Context)

    def test_keys(self):
        profile = Profile.from_pairs({"color": "red", "size": "big"})
        assert profile.keys() == frozenset({"color", "size"})

    def test_value_equality_ignores_order(self):
        a = Context.from_pairs([("a", 1), ("b", 2)])
        b = Context.from_pairs([("b", 2), ("a", 1)])
        assert a == b
        assert hash(a) == hash(b)

    def test_empty_by_default(self):
        assert Profile().size == 0

    def test_trait_set_accepts_models_and_iterables(self):
        red = Trait(key="color", value="red")
        expected = frozenset({red})
        assert trait_set(Profile(traits=expected)) == expected
        assert trait_set(Context(traits=expected)) == expected
        assert trait_set([red, red]) == expected
        assert trait_set(expected) is expected


# ===================================================================
# Identity
# ===================================================================


class TestIdentifier:
    def test_value_equality(self):
        a = Identifier(key="obj-42", type=ReferentType.animal)
        b = Identifier(key="obj-42", type=ReferentType.animal)
        assert a == b
        assert hash(a) == hash(b)

    def test_type_is_part_of_identity(self):
        assert Identifier(key="obj-42", type=ReferentType.animal) != Identifier(
            key="obj-42", type=ReferentType.person
        )

    def test_default_type_unknown(self):
        assert Identifier(key="obj-42").type == ReferentType.unknown

    def test_blank_key_rejected(self):
        with pytest.raises(ValidationError):
            Identifier(key="")

    def test_str_is_key(self):
        assert str(Identifier(key="obj-42")) == "obj-42"


class TestIndividualModel:
    def test_placeholder_takes_identifier_type(self):
        identifier = Identifier(key="p-1", type=ReferentType.person)
        model = IndividualModel.placeholder(identifier)
        assert model.identifier == identifier
        assert model.type == ReferentType.person

    def test_frozen(self):
        model = IndividualModel.placeholder(Identifier(key="p-1"))
        with pytest.raises(ValidationError):
            model.type = ReferentType.place


class TestObservation:
    def test_referent_type_falls_back_to_identifier(self):
        obs = Observation(identifier=Identifier(key="x", type=ReferentType.place))
        assert obs.referent_type == ReferentType.place

    def test_traits_and_timestamp_do_not_affect_resolution(self):
        obs = Observation(
            identifier=Identifier(key="x", type=ReferentType.place),
            traits=frozenset({Trait(key="color", value="red")}),
        )
        assert obs.referent_type == ReferentType.place
        assert Trait(key="color", value="red") in obs.traits

    def test_explicit_type_wins(self):
        obs = Observation(
            identifier=Identifier(key="x", type=ReferentType.unknown),
            type=ReferentType.object,
        )
        assert obs.referent_type == ReferentType.object

    def test_observed_at_defaults_to_utc_now(self):
        before = datetime.now(timezone.utc)
        obs = Observation(identifier=Identifier(key="x"))
        assert obs.observed_at >= before
        assert obs.observed_at.tzinfo is not None
