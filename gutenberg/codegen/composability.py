"""Composable NFT marker types and blueprint wiring."""

from __future__ import annotations

from gutenberg.codegen.collection import add_domain
from gutenberg.codegen.move import INDENT, block, call, let, statement
from gutenberg.models.composability import Composability


def write_types(composability: Composability | None) -> str:
    if composability is None:
        return ""
    return "\n".join(f"{INDENT}struct {name} has copy, drop, store {{}}" for name in composability.types)


def write_move_init(composability: Composability | None) -> str:
    """Blueprint construction; attaches to ``collection`` so must precede sharing."""
    if composability is None:
        return ""
    relationships = [
        statement(
            call(
                f"nft_protocol::composable_nft::add_relationship<{rel.parent_type}, {rel.child_type}>",
                ["&mut blueprint", str(rel.limit), str(rel.order), "ctx"],
            )
        )
        for rel in composability.blueprint
    ]
    return block(
        let("blueprint", "nft_protocol::composable_nft::new_blueprint(ctx)"),
        *relationships,
        add_domain("blueprint"),
    )
