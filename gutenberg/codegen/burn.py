"""Burn entry points.

``Permissioned`` burns take a delegated witness (or the ``Publisher``) from
the caller; ``Permissionless`` burns mint their own witness so any owner can
burn.  NFTs held in kiosks leave through the withdraw policy; when that
policy only exists for burning it is locked to this contract, so the burn
must sign the request with ``Witness``.
"""

from __future__ import annotations

from gutenberg.codegen.collection import write_supply_decrement
from gutenberg.codegen.move import TX_CONTEXT, MoveFunction, MoveParam, block, call, let, statement
from gutenberg.models.nft import Burn, Fields

WITHDRAW_REQ = "ob_request::withdraw_request::WITHDRAW_REQ"


def withdraw_policy_type(type_name: str) -> str:
    return f"ob_request::request::Policy<ob_request::request::WithNft<{type_name}, {WITHDRAW_REQ}>>"


def _collection_param(type_name: str, requires_collection: bool) -> MoveParam:
    mut = "mut " if requires_collection else ""
    return MoveParam("collection", f"&{mut}nft_protocol::collection::Collection<{type_name}>")


def write_move_defs(
    burn: Burn | None,
    fields: Fields,
    type_name: str,
    *,
    requires_collection: bool,
    requires_listing: bool,
    requires_confirm: bool,
) -> list[MoveFunction]:
    if burn is None:
        return []

    permissioned = burn is Burn.PERMISSIONED
    collection = _collection_param(type_name, requires_collection)
    witness_params = (
        [MoveParam("delegated_witness", f"ob_permissions::witness::Witness<{type_name}>")]
        if permissioned
        else []
    )
    own_witness = "" if permissioned else let(
        "delegated_witness", "ob_permissions::witness::from_witness(Witness {})"
    )
    burn_args = (["delegated_witness"] if permissioned else []) + ["collection", "nft"]
    burn_call = statement(call("burn_nft", burn_args, multiline=False))

    destructure = ", ".join(["id"] + [f"{name}: _" for name in fields.keys()])
    functions = [
        MoveFunction(
            name="burn_nft",
            params=tuple(witness_params + [collection, MoveParam("nft", type_name)]),
            public=True,
            body=(
                block(
                    own_witness,
                    let("guard", "nft_protocol::mint_event::start_burn(delegated_witness, &nft)"),
                    f"let {type_name} {{ {destructure} }} = nft;",
                    statement(
                        "nft_protocol::mint_event::emit_burn(guard, sui::object::id(collection), id)"
                    ),
                ),
                write_supply_decrement() if requires_collection else "",
            ),
        )
    ]

    kiosk_params = [
        collection,
        MoveParam("kiosk", "&mut sui::kiosk::Kiosk"),
        MoveParam("nft_id", "sui::object::ID"),
        MoveParam("policy", f"&{withdraw_policy_type(type_name)}"),
        MoveParam("ctx", TX_CONTEXT),
    ]
    receipt = (
        statement("ob_request::withdraw_request::add_receipt(&mut withdraw_request, &Witness {})")
        if requires_confirm
        else ""
    )
    functions.append(
        MoveFunction(
            name="burn_nft_in_kiosk",
            params=tuple(witness_params + kiosk_params),
            public=True,
            entry=True,
            body=(
                block(
                    let(
                        "(nft, withdraw_request)",
                        "ob_kiosk::ob_kiosk::withdraw_nft_signed(kiosk, nft_id, ctx)",
                    ),
                    receipt,
                    statement("ob_request::withdraw_request::confirm(withdraw_request, policy)"),
                ),
                burn_call,
            ),
        )
    )

    publisher = MoveParam("publisher", "&sui::package::Publisher")
    from_publisher = let(
        "delegated_witness", "ob_permissions::witness::from_publisher(publisher)"
    )

    if permissioned:
        functions.append(
            MoveFunction(
                name="burn_nft_in_kiosk_as_publisher",
                params=(publisher, *kiosk_params),
                public=True,
                entry=True,
                body=(
                    block(
                        from_publisher,
                        statement(
                            call(
                                "burn_nft_in_kiosk",
                                ["delegated_witness", "collection", "kiosk", "nft_id", "policy", "ctx"],
                                multiline=False,
                            )
                        ),
                    ),
                ),
            )
        )

    if requires_listing:
        listing_params = [
            collection,
            MoveParam("listing", "&mut ob_launchpad::listing::Listing"),
            MoveParam("inventory_id", "sui::object::ID"),
        ]
        lead = [publisher] if permissioned else []
        witness_init = from_publisher if permissioned else ""

        functions.append(
            MoveFunction(
                name="burn_nft_in_listing",
                params=tuple(lead + listing_params + [MoveParam("ctx", TX_CONTEXT)]),
                public=True,
                entry=True,
                body=(
                    block(
                        witness_init,
                        let(
                            "nft",
                            f"ob_launchpad::listing::admin_redeem_nft<{type_name}>(listing, inventory_id, ctx)",
                        ),
                        burn_call,
                    ),
                ),
            )
        )
        functions.append(
            MoveFunction(
                name="burn_nft_in_listing_with_id",
                params=tuple(
                    lead
                    + listing_params
                    + [MoveParam("nft_id", "sui::object::ID"), MoveParam("ctx", TX_CONTEXT)]
                ),
                public=True,
                entry=True,
                body=(
                    block(
                        witness_init,
                        let(
                            "nft",
                            "ob_launchpad::listing::admin_redeem_nft_with_id"
                            f"<{type_name}>(listing, inventory_id, nft_id, ctx)",
                        ),
                        burn_call,
                    ),
                ),
            )
        )

    return functions
