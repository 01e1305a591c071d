"""
Unit tests for Schema construction and derivation.

Tests cover:
- pick/omit/partial/extend/refine/with_clock_default
- Immutability of schemas and their field maps
- Structure sharing between derived schemas
"""

import dataclasses
import pytest

from finance_api.src.models.schemas import (
    account_form_schema,
    insert_account_schema,
    sign_up_schema,
    update_user_schema,
    user_schema,
)
from finance_api.src.validation import Schema, optional, schema_field, validate, wire_name


@pytest.fixture
def base_schema():
    return Schema("Base", {
        "id": optional(str),
        "name": schema_field(str, min_length=2),
        "budget_id": optional(str),
    })


class TestDerivation:
    """Derivations return new schemas."""

    def test_pick(self, base_schema):
        picked = base_schema.pick("name")

        assert picked.field_names == ("name",)
        assert base_schema.field_names == ("id", "name", "budget_id")

    def test_omit(self, base_schema):
        omitted = base_schema.omit("id")

        assert omitted.field_names == ("name", "budget_id")

    def test_partial_accepts_empty_input(self):
        result = validate(update_user_schema, {})

        assert result.ok
        assert result.value.email is None
        assert result.value.name is None

    def test_partial_still_checks_given_values(self):
        result = validate(update_user_schema, {"name": "J"})

        assert dict(result.errors) == {"name": "Name must be at least 2 characters"}

    def test_extend(self, base_schema):
        extended = base_schema.extend({"note": optional(str, max_length=3)})

        assert extended.field_names == ("id", "name", "budget_id", "note")
        assert list(validate(extended, {"name": "Jo", "note": "toolong"}).errors) == ["note"]

    def test_refine_does_not_touch_original(self, base_schema):
        refined = base_schema.refine(lambda data: data.name != "Jo", "Pick another name", path=["name"])

        assert base_schema.refinements == ()
        assert len(refined.refinements) == 1
        assert validate(base_schema, {"name": "Jo"}).ok
        assert dict(validate(refined, {"name": "Jo"}).errors) == {"name": "Pick another name"}

    def test_refinement_path_uses_wire_name(self, base_schema):
        refined = base_schema.refine(lambda data: False, "Always fails", path=["budget_id"])

        assert dict(validate(refined, {"name": "Jo"}).errors) == {"budgetId": "Always fails"}

    def test_pick_drops_refinements(self):
        picked = sign_up_schema.pick("email", "password")

        assert picked.refinements == ()

    def test_with_clock_default(self, base_schema):
        derived = base_schema.with_clock_default("budget_id")

        assert derived.fields["budget_id"].clock_default
        assert not base_schema.fields["budget_id"].clock_default

    def test_unknown_field_rejected(self, base_schema):
        with pytest.raises(KeyError):
            base_schema.pick("missing")

        with pytest.raises(KeyError):
            base_schema.refine(lambda data: True, "never", path=["missing"])


class TestImmutability:
    """Schemas cannot be changed after construction."""

    def test_schema_is_frozen(self, base_schema):
        with pytest.raises(dataclasses.FrozenInstanceError):
            base_schema.name = "Changed"

    def test_field_map_is_read_only(self, base_schema):
        with pytest.raises(TypeError):
            base_schema.fields["extra"] = schema_field(str)

    def test_field_constraints_are_read_only(self, base_schema):
        with pytest.raises(TypeError):
            base_schema.fields["name"].constraints["min_length"] = 0

    def test_derived_schema_shares_fields(self):
        assert account_form_schema.fields["name"] is insert_account_schema.fields["name"]

    def test_omit_keeps_original_fields(self):
        create_user = user_schema.omit("id")

        assert "id" in user_schema.fields
        assert "id" not in create_user.fields


class TestWireNames:
    """snake_case fields map to camelCase wire names."""

    @pytest.mark.parametrize("name,expected", [
        ("confirm_password", "confirmPassword"),
        ("budget_id", "budgetId"),
        ("id", "id"),
    ])
    def test_wire_name(self, name, expected):
        assert wire_name(name) == expected

    def test_field_for_wire(self):
        assert sign_up_schema.field_for_wire("confirmPassword") is sign_up_schema.fields["confirm_password"]
        assert sign_up_schema.field_for_wire("unknown") is None
