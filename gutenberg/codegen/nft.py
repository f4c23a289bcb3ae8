"""NFT struct, display and request policies, and the module ``init``.

``init`` runs once at publish time.  Its statement order is fixed:

1. delegated witness and ``Collection`` creation
2. ``MintCap`` (borrows the one-time witness)
3. ``Publisher`` claim (consumes the one-time witness)
4. ``Display``
5. request policies, then the orderbook that depends on the transfer policy
6. collection domains and the composability blueprint
7. sharing the collection, handing out the publisher and policy caps
"""

from __future__ import annotations

from gutenberg.codegen import collection as collection_gen
from gutenberg.codegen import composability as composability_gen
from gutenberg.codegen import orderbook as orderbook_gen
from gutenberg.codegen.fields import display_key, struct_member
from gutenberg.codegen.minting import DELEGATED_WITNESS_INIT, write_mint_cap_init
from gutenberg.codegen.move import (
    INDENT,
    TX_CONTEXT,
    MoveFunction,
    MoveParam,
    block,
    call,
    let,
    public_share,
    public_transfer,
    statement,
    utf8,
)
from gutenberg.models.nft import NftData
from gutenberg.models.schema import Schema


def write_struct(nft: NftData) -> str:
    type_name = nft.type_name_normalized()
    members = ["id: sui::object::UID,"] + [struct_member(field) for field in nft.fields]
    body = "\n".join(f"{INDENT * 2}{member}" for member in members)
    return f"{INDENT}struct {type_name} has key, store {{\n{body}\n{INDENT}}}"


# ---------------------------------------------------------------------------
# Display
# ---------------------------------------------------------------------------


def write_display(schema: Schema) -> str:
    nft = schema.nft
    type_name = nft.type_name_normalized()

    def add(key: str, value: str) -> str:
        return statement(
            call("sui::display::add", ["&mut display", utf8(key), value], multiline=False)
        )

    entries = [
        add(display_key(field, nft.fields), utf8(f"{{{field.name}}}"))
        for field in nft.fields
    ]

    parts = [let("display", f"sui::display::new<{type_name}>(&publisher, ctx)"), *entries]
    tags = ""
    if schema.collection.has_tags():
        tags = collection_gen.write_tags(schema.collection.tags)
        parts.append(add("tags", "ob_utils::display::from_vec(tags)"))
    parts.append(statement("sui::display::update_version(&mut display)"))

    return "\n\n".join(
        part for part in (tags, block(*parts), public_transfer("display")) if part
    )


# ---------------------------------------------------------------------------
# Request policies
# ---------------------------------------------------------------------------


def _init_policy(kind: str, type_name: str) -> str:
    return let(
        f"({kind}_policy, {kind}_policy_cap)",
        call(f"ob_request::{kind}_request::init_policy<{type_name}>", ["&publisher", "ctx"]),
    )


def write_policies(nft: NftData, has_royalties: bool) -> list[str]:
    """Policy creation and rule enforcement for every required request kind."""
    type_name = nft.type_name_normalized()
    blocks: list[str] = []

    if nft.requires_transfer():
        royalty_rule = (
            statement(
                "nft_protocol::royalty_strategy_bps::enforce(&mut transfer_policy, &transfer_policy_cap)"
            )
            if has_royalties
            else ""
        )
        blocks.append(
            block(
                _init_policy("transfer", type_name),
                royalty_rule,
                statement(
                    "nft_protocol::transfer_allowlist::enforce(&mut transfer_policy, &transfer_policy_cap)"
                ),
            )
        )

    if nft.requires_borrow():
        blocks.append(_init_policy("borrow", type_name))

    if nft.requires_withdraw():
        # A withdraw policy that exists only for burning is locked so that
        # nothing but this contract can satisfy it.
        lock = ""
        if nft.requires_confirm():
            lock = statement(
                call(
                    "ob_request::request::enforce_rule_no_state"
                    f"<ob_request::request::WithNft<{type_name}, "
                    "ob_request::withdraw_request::WITHDRAW_REQ>, Witness>",
                    ["&mut withdraw_policy", "&withdraw_policy_cap"],
                    multiline=True,
                )
            )
        blocks.append(block(_init_policy("withdraw", type_name), lock))

    return blocks


def write_policy_transfers(nft: NftData) -> list[str]:
    kinds = [
        kind
        for kind, required in (
            ("transfer", nft.requires_transfer()),
            ("withdraw", nft.requires_withdraw()),
            ("borrow", nft.requires_borrow()),
        )
        if required
    ]
    return [
        block(public_transfer(f"{kind}_policy_cap"), public_share(f"{kind}_policy"))
        for kind in kinds
    ]


# ---------------------------------------------------------------------------
# init
# ---------------------------------------------------------------------------


def write_init_fn(schema: Schema) -> MoveFunction:
    nft = schema.nft
    collection = schema.collection
    type_name = nft.type_name_normalized()
    witness_name = nft.witness_name()

    body = [
        block(DELEGATED_WITNESS_INIT),
        collection_gen.write_collection_create(type_name),
        write_mint_cap_init(nft.mint_cap, witness_name, type_name),
        let("publisher", "sui::package::claim(witness, ctx)"),
        write_display(schema),
        *write_policies(nft, collection.has_royalties()),
        orderbook_gen.write_move_init(nft.orderbook, type_name),
        *collection_gen.write_domains(collection),
        composability_gen.write_move_init(nft.composability),
        collection_gen.write_collection_share(),
        public_transfer("publisher"),
        *write_policy_transfers(nft),
    ]

    return MoveFunction(
        name="init",
        params=(MoveParam("witness", witness_name), MoveParam("ctx", TX_CONTEXT)),
        body=tuple(body),
    )
