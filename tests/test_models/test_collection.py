"""Unit tests for collection-level models (gutenberg.models.collection).

Tests cover:
- Tag / Tags: known and custom tags, order preservation
- Supply: wire forms, limits, requirement closure
- Share / RoyaltyPolicy: set semantics, bps bounds, wire form
- CollectionData: symbol and URL validation, sanitised accessors, demo mode
"""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from gutenberg.models import (
    Address,
    CollectionData,
    RoyaltyPolicy,
    Share,
    Supply,
    SupplyKind,
    Tag,
    Tags,
)
from gutenberg.models.collection import U64_MAX

A = "0x" + "a" * 64
B = "0x" + "b" * 64


# ---------------------------------------------------------------------------
# Tags
# ---------------------------------------------------------------------------


class TestTags:
    @pytest.mark.unit
    def test_known_tag_maps_to_constructor(self):
        assert Tag("ProfilePicture").function_name == "profile_picture"
        assert not Tag("ProfilePicture").is_custom

    @pytest.mark.unit
    def test_unknown_tag_is_custom(self):
        tag = Tag("Submarines")
        assert tag.is_custom
        assert tag.function_name is None
        assert str(tag) == "Submarines"

    @pytest.mark.unit
    def test_order_and_duplicates_preserved(self):
        tags = Tags.new(["Music", "Art", "Music"])
        assert [str(t) for t in tags] == ["Music", "Art", "Music"]
        assert len(tags) == 3

    @pytest.mark.unit
    def test_empty_tags(self):
        assert not Tags.new([]).has_tags()


# ---------------------------------------------------------------------------
# Supply
# ---------------------------------------------------------------------------


class TestSupply:
    @pytest.mark.unit
    @pytest.mark.parametrize(
        "wire, kind",
        [("untracked", SupplyKind.UNTRACKED), ("tracked", SupplyKind.TRACKED)],
    )
    def test_string_forms(self, wire, kind):
        supply = Supply.model_validate(wire)
        assert supply.kind is kind
        assert supply.model_dump() == wire

    @pytest.mark.unit
    def test_enforced_form(self):
        supply = Supply.model_validate({"enforced": 600})
        assert supply == Supply.enforced(600)
        assert supply.model_dump() == {"enforced": 600}
        assert supply.max_supply == 600

    @pytest.mark.unit
    def test_tracked_ceiling_is_u64_max(self):
        assert Supply.tracked().max_supply == U64_MAX

    @pytest.mark.unit
    def test_requires_collection(self):
        assert not Supply.untracked().requires_collection()
        assert Supply.tracked().requires_collection()
        assert Supply.enforced(1).requires_collection()

    @pytest.mark.unit
    def test_enforced_needs_limit(self):
        with pytest.raises(ValidationError):
            Supply(kind=SupplyKind.ENFORCED)

    @pytest.mark.unit
    def test_negative_limit_rejected(self):
        with pytest.raises(ValidationError):
            Supply.model_validate({"enforced": -1})

    @pytest.mark.unit
    def test_unknown_kind_rejected(self):
        with pytest.raises(ValidationError):
            Supply.model_validate("infinite")


# ---------------------------------------------------------------------------
# Royalties
# ---------------------------------------------------------------------------


class TestRoyaltyPolicy:
    @pytest.mark.unit
    def test_wire_form_round_trip(self):
        wire = {
            "proportional": {
                "shares": [{"address": A, "shareBps": 10000}],
                "collectionRoyaltyBps": 100,
            }
        }
        policy = RoyaltyPolicy.model_validate(wire)
        assert policy.collection_royalty_bps == 100
        assert policy.model_dump(mode="json", by_alias=True) == wire

    @pytest.mark.unit
    def test_shares_are_a_set(self):
        policy = RoyaltyPolicy.proportional(
            [
                Share(address=Address(B), share_bps=5000),
                Share(address=Address(A), share_bps=5000),
                Share(address=Address(B), share_bps=5000),
            ],
            collection_royalty_bps=250,
        )
        assert policy.beneficiaries() == [Address(A), Address(B)]

    @pytest.mark.unit
    def test_share_order_does_not_matter(self):
        first = RoyaltyPolicy.proportional(
            [Share(address=Address(A), share_bps=1), Share(address=Address(B), share_bps=2)], 10
        )
        second = RoyaltyPolicy.proportional(
            [Share(address=Address(B), share_bps=2), Share(address=Address(A), share_bps=1)], 10
        )
        assert first == second

    @pytest.mark.unit
    def test_share_sum_over_10000_rejected(self):
        with pytest.raises(ValidationError, match="add up to 10001"):
            RoyaltyPolicy.proportional(
                [
                    Share(address=Address(A), share_bps=5001),
                    Share(address=Address(B), share_bps=5000),
                ],
                collection_royalty_bps=0,
            )

    @pytest.mark.unit
    def test_single_share_over_10000_rejected(self):
        with pytest.raises(ValidationError):
            Share(address=Address(A), share_bps=10001)

    @pytest.mark.unit
    def test_collection_bps_over_10000_rejected(self):
        with pytest.raises(ValidationError):
            RoyaltyPolicy.proportional([], collection_royalty_bps=10001)

    @pytest.mark.unit
    def test_empty_shares_allowed(self):
        assert RoyaltyPolicy.proportional([], 100).beneficiaries() == []


# ---------------------------------------------------------------------------
# CollectionData
# ---------------------------------------------------------------------------


class TestCollectionData:
    @pytest.mark.unit
    def test_defaults(self):
        collection = CollectionData(name="Plain")
        assert collection.supply == Supply.untracked()
        assert collection.creators == []
        assert not collection.has_royalties()
        assert not collection.has_tags()
        assert not collection.requires_collection()

    @pytest.mark.unit
    def test_null_supply_is_untracked(self):
        collection = CollectionData.model_validate({"name": "Plain", "supply": None})
        assert collection.supply == Supply.untracked()

    @pytest.mark.unit
    @pytest.mark.parametrize("symbol", ["", "TOOLONGSYMBOL", "SU-M", "SÜM"])
    def test_invalid_symbol(self, symbol):
        with pytest.raises(ValidationError):
            CollectionData(name="x", symbol=symbol)

    @pytest.mark.unit
    def test_invalid_url(self):
        with pytest.raises(ValidationError):
            CollectionData(name="x", url="not a url")

    @pytest.mark.unit
    def test_display_strips_unsafe_characters(self):
        collection = CollectionData(name='Crème "Brûlée" {x}', description="line\nbreak")
        assert collection.display_name == "Creme Brulee x"
        assert collection.display_description == "linebreak"

    @pytest.mark.unit
    def test_invalid_creator_address(self):
        with pytest.raises(ValidationError):
            CollectionData(name="x", creators=["0xnothex"])

    @pytest.mark.unit
    def test_enforce_demo(self):
        collection = CollectionData(
            name="x",
            supply=Supply.enforced(10),
            royalties=RoyaltyPolicy.proportional([], 100),
        )
        collection.enforce_demo()
        assert collection.supply == Supply.untracked()
        assert collection.royalties is None
