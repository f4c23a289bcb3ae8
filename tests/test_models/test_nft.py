"""Unit tests for NFT-level models (gutenberg.models.nft).

Tests cover:
- Field / Fields: pair wire form, name validation, uniqueness, params
- Policy enums and MintCap wire forms
- NftData: derived names, requirement closure, demo mode
"""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from gutenberg.models import (
    Burn,
    Composability,
    Dynamic,
    Field,
    Fields,
    FieldType,
    MintCap,
    MintPolicies,
    NftData,
    Orderbook,
    RequestPolicies,
)


# ---------------------------------------------------------------------------
# Fields
# ---------------------------------------------------------------------------


class TestField:
    @pytest.mark.unit
    def test_pair_wire_form(self):
        field = Field.model_validate(["url", "url"])
        assert field == Field(name="url", type=FieldType.URL)
        assert field.model_dump() == ["url", "url"]

    @pytest.mark.unit
    def test_capitalised_type_accepted(self):
        assert Field.model_validate(["name", "String"]).type is FieldType.STRING

    @pytest.mark.unit
    @pytest.mark.parametrize("name", ["1st", "with space", "id", ""])
    def test_invalid_names(self, name):
        with pytest.raises(ValidationError):
            Field.model_validate([name, "string"])

    @pytest.mark.unit
    def test_wrong_pair_length(self):
        with pytest.raises(ValidationError):
            Field.model_validate(["name"])

    @pytest.mark.unit
    @pytest.mark.parametrize("name", ["fun", "let", "struct"])
    def test_move_keywords_rejected(self, name):
        with pytest.raises(ValidationError, match="reserved in Move"):
            Field.model_validate([name, "string"])

    @pytest.mark.unit
    def test_capitalised_name_rejected(self):
        with pytest.raises(ValidationError, match="lowercase letter"):
            Field.model_validate(["Name", "string"])

    @pytest.mark.unit
    @pytest.mark.parametrize(
        "name",
        [
            "ctx",
            "mint_cap",
            "collection",
            "receiver",
            "warehouse",
            "delegated_witness",
            "publisher",
            "kiosk",
            "nft_id",
            "policy",
            "nft",
        ],
    )
    def test_generated_parameter_names_rejected(self, name):
        with pytest.raises(ValidationError, match="parameter of the generated functions"):
            Field.model_validate([name, "string"])

    @pytest.mark.unit
    def test_reserved_attributes_field_rejected(self):
        with pytest.raises(ValidationError, match="parameter of the generated functions"):
            Field.model_validate(["mint_cap", "attributes"])

    @pytest.mark.unit
    def test_attribute_params(self):
        field = Field(name="attributes", type=FieldType.ATTRIBUTES)
        assert field.params() == ["attributes_keys", "attributes_values"]


class TestFields:
    @pytest.mark.unit
    def test_duplicate_names_rejected(self):
        with pytest.raises(ValidationError, match="duplicate field name"):
            Fields.model_validate([["name", "string"], ["name", "url"]])

    @pytest.mark.unit
    def test_attribute_params_must_not_repeat(self):
        with pytest.raises(ValidationError, match="repeats the parameter 'x_keys'"):
            Fields.model_validate([["x_keys", "string"], ["x", "attributes"]])

    @pytest.mark.unit
    def test_setter_names_must_not_collide(self):
        with pytest.raises(ValidationError, match="setters of 'name'"):
            Fields.model_validate([["name", "string"], ["name_in_kiosk", "string"]])

    @pytest.mark.unit
    def test_order_is_preserved(self):
        fields = Fields.model_validate([["b", "string"], ["a", "url"]])
        assert fields.keys() == ["b", "a"]

    @pytest.mark.unit
    def test_params_flatten_attributes(self):
        fields = Fields.demo()
        assert fields.params() == [
            "name",
            "description",
            "url",
            "attributes_keys",
            "attributes_values",
        ]

    @pytest.mark.unit
    def test_find(self):
        fields = Fields.demo()
        assert fields.find(FieldType.URL).name == "url"
        assert Fields().find(FieldType.URL) is None


# ---------------------------------------------------------------------------
# Policies
# ---------------------------------------------------------------------------


class TestPolicies:
    @pytest.mark.unit
    def test_burn_case_insensitive(self):
        assert Burn("Permissionless") is Burn.PERMISSIONLESS

    @pytest.mark.unit
    def test_orderbook_case_insensitive(self):
        assert Orderbook("Protected") is Orderbook.PROTECTED

    @pytest.mark.unit
    def test_mint_cap_wire_forms(self):
        assert MintCap.model_validate("unlimited") == MintCap.unlimited()
        assert MintCap.model_validate(100) == MintCap.limited(100)
        assert MintCap.limited(100).model_dump() == 100
        assert MintCap.unlimited().model_dump() == "unlimited"

    @pytest.mark.unit
    def test_mint_cap_negative_rejected(self):
        with pytest.raises(ValidationError):
            MintCap.model_validate(-5)

    @pytest.mark.unit
    def test_default_policies(self):
        assert MintPolicies() == MintPolicies(launchpad=False, airdrop=True)
        assert RequestPolicies() == RequestPolicies(transfer=False, withdraw=False, borrow=False)


# ---------------------------------------------------------------------------
# NftData
# ---------------------------------------------------------------------------


class TestNftData:
    @pytest.mark.unit
    def test_derived_names(self):
        nft = NftData(type_name="Sui Marine")
        assert nft.type_name_normalized() == "Sui_Marine"
        assert nft.module_name() == "sui_marine"
        assert nft.witness_name() == "SUI_MARINE"

    @pytest.mark.unit
    def test_unicode_name_is_transliterated(self):
        assert NftData(type_name="Crème").type_name_normalized() == "Creme"

    @pytest.mark.unit
    @pytest.mark.parametrize("type_name", ["!!!", "1Token", "Witness", "TOKEN", "struct", "token"])
    def test_invalid_type_names(self, type_name):
        with pytest.raises(ValidationError):
            NftData(type_name=type_name)

    @pytest.mark.unit
    def test_none_orderbook_string(self):
        assert NftData.model_validate({"typeName": "Token", "orderbook": "none"}).orderbook is None

    @pytest.mark.unit
    def test_defaults(self):
        nft = NftData(type_name="Token")
        assert nft.burn is None
        assert not nft.dynamic.is_dynamic()
        assert not nft.mint_cap.is_limited()
        assert nft.orderbook is None
        assert len(nft.fields) == 0

    @pytest.mark.unit
    def test_orderbook_implies_transfer(self):
        nft = NftData(type_name="Token", orderbook=Orderbook.UNPROTECTED)
        assert nft.requires_transfer()
        assert not nft.requires_withdraw()

    @pytest.mark.unit
    def test_burn_implies_withdraw_and_confirm(self):
        nft = NftData(type_name="Token", burn=Burn.PERMISSIONED)
        assert nft.requires_withdraw()
        assert nft.requires_confirm()

    @pytest.mark.unit
    def test_explicit_withdraw_policy_is_not_locked(self):
        nft = NftData(
            type_name="Token",
            burn=Burn.PERMISSIONED,
            request_policies=RequestPolicies(withdraw=True),
        )
        assert nft.requires_withdraw()
        assert not nft.requires_confirm()

    @pytest.mark.unit
    def test_dynamic_implies_borrow(self):
        nft = NftData(type_name="Token", dynamic=Dynamic(True))
        assert nft.requires_borrow()

    @pytest.mark.unit
    def test_listing_follows_launchpad(self):
        nft = NftData(type_name="Token", mint_policies=MintPolicies(launchpad=True))
        assert nft.requires_listing()

    @pytest.mark.unit
    def test_marker_colliding_with_witness_rejected(self):
        with pytest.raises(ValidationError, match="collides"):
            NftData(
                type_name="Token",
                composability=Composability(types=("token", "hat")),
            )

    @pytest.mark.unit
    def test_enforce_demo(self):
        nft = NftData.model_validate(
            {
                "typeName": "Token",
                "burn": "permissionless",
                "dynamic": True,
                "mintCap": "unlimited",
                "requestPolicies": {"transfer": True, "withdraw": True, "borrow": True},
                "orderbook": "protected",
                "fields": [["level", "string"]],
            }
        )
        nft.enforce_demo()
        assert nft.burn is None
        assert not nft.dynamic.is_dynamic()
        assert nft.mint_cap == MintCap.limited(100)
        assert nft.request_policies == RequestPolicies()
        assert nft.orderbook is None
        assert nft.fields == Fields.demo()
        assert not nft.requires_transfer()
        assert not nft.requires_withdraw()
        assert not nft.requires_borrow()
