"""Move unit tests emitted alongside the contract.

Test arguments come from the same field and mint-parameter helpers as the
definitions, so a test cannot disagree with the function it calls about
arity or order.
"""

from __future__ import annotations

from typing import Any

from gutenberg.codegen.fields import field_test_args, fields_test_args
from gutenberg.codegen.minting import mint_call_args
from gutenberg.codegen.templates import TemplateRenderer, default_renderer
from gutenberg.models.nft import Burn, Orderbook
from gutenberg.models.schema import Schema


def scenario_context(schema: Schema) -> dict[str, Any]:
    nft = schema.nft
    requires_collection = schema.requires_collection()
    return {
        "type_name": nft.type_name_normalized(),
        "witness_name": nft.witness_name(),
        "requires_collection": requires_collection,
        "mint_args": mint_call_args(fields_test_args(nft.fields), requires_collection),
        "has_royalties": schema.collection.has_royalties(),
    }


def write_move_tests(schema: Schema, renderer: TemplateRenderer | None = None) -> list[str]:
    """Rendered ``#[test]`` functions for every enabled feature."""
    renderer = renderer or default_renderer()
    nft = schema.nft
    context = scenario_context(schema)

    tests = [renderer.render("tests/init.move.j2", context)]

    if nft.mint_policies.airdrop:
        tests.append(renderer.render("tests/mint.move.j2", {**context, "policy": "airdrop"}))
    if nft.mint_policies.launchpad:
        tests.append(renderer.render("tests/mint.move.j2", {**context, "policy": "launchpad"}))

    if nft.burn is Burn.PERMISSIONLESS:
        tests.append(renderer.render("tests/burn.move.j2", context))

    if nft.orderbook is not None:
        tests.append(
            renderer.render(
                "tests/trade.move.j2",
                {**context, "protected": nft.orderbook is Orderbook.PROTECTED},
            )
        )

    if nft.dynamic.is_dynamic() and len(nft.fields):
        setters = [
            {
                "name": f"set_{field.name}_in_kiosk_as_publisher",
                "args": field_test_args(field),
            }
            for field in nft.fields
        ]
        tests.append(renderer.render("tests/dynamic.move.j2", {**context, "setters": setters}))

    return tests
