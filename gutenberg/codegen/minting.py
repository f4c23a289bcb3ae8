"""Mint entry points and the shared ``mint`` constructor."""

from __future__ import annotations

from gutenberg.codegen.collection import write_supply_increment
from gutenberg.codegen.fields import fields_params, struct_literal_member
from gutenberg.codegen.move import (
    TX_CONTEXT,
    MoveFunction,
    MoveParam,
    block,
    call,
    let,
    public_share,
    statement,
)
from gutenberg.models.nft import Fields, MintCap, MintPolicies

DELEGATED_WITNESS_INIT = let(
    "delegated_witness", "ob_permissions::witness::from_witness(Witness {})"
)


def mint_params(fields: Fields, type_name: str, requires_collection: bool) -> list[MoveParam]:
    """Parameters shared by ``mint`` and every mint entry point, minus ``ctx``.

    Order is fields, then ``mint_cap``, then ``collection`` when supply is
    counted.  Move arguments are positional, so every call site relies on it.
    """
    result = fields_params(fields)
    result.append(MoveParam("mint_cap", f"&mut nft_protocol::mint_cap::MintCap<{type_name}>"))
    if requires_collection:
        result.append(
            MoveParam("collection", f"&mut nft_protocol::collection::Collection<{type_name}>")
        )
    return result


def write_mint_fn(fields: Fields, type_name: str, requires_collection: bool) -> MoveFunction:
    members = [struct_literal_member(field) for field in fields]
    literal = "\n".join(
        [f"let nft = {type_name} {{", "    id: sui::object::new(ctx),"]
        + [f"    {member}" for member in members]
        + ["};"]
    )

    return MoveFunction(
        name="mint",
        params=tuple(
            mint_params(fields, type_name, requires_collection)
            + [MoveParam("ctx", TX_CONTEXT)]
        ),
        returns=type_name,
        public=True,
        body=(
            DELEGATED_WITNESS_INIT,
            literal,
            statement(
                call(
                    "nft_protocol::mint_event::emit_mint",
                    [
                        "delegated_witness",
                        "nft_protocol::mint_cap::collection_id(mint_cap)",
                        "&nft",
                    ],
                )
            ),
            write_supply_increment() if requires_collection else "",
            statement(
                call("nft_protocol::mint_cap::increment_supply", ["mint_cap", "1"])
            ),
            "nft",
        ),
    )


def _mint_call(base: list[MoveParam]) -> str:
    args = [param.name for param in base] + ["ctx"]
    return let("nft", call("mint", args, multiline=True))


def write_move_defs(
    policies: MintPolicies,
    fields: Fields,
    type_name: str,
    requires_collection: bool,
) -> list[MoveFunction]:
    """Entry points for each enabled mint policy followed by ``mint`` itself."""
    base = mint_params(fields, type_name, requires_collection)
    ctx = MoveParam("ctx", TX_CONTEXT)
    functions: list[MoveFunction] = []

    if policies.launchpad:
        functions.append(
            MoveFunction(
                name="mint_nft_to_warehouse",
                params=tuple(
                    base
                    + [
                        MoveParam("warehouse", f"&mut ob_launchpad::warehouse::Warehouse<{type_name}>"),
                        ctx,
                    ]
                ),
                public=True,
                entry=True,
                body=(
                    _mint_call(base),
                    statement("ob_launchpad::warehouse::deposit_nft(warehouse, nft)"),
                ),
            )
        )

    if policies.airdrop:
        functions.append(
            MoveFunction(
                name="mint_nft_to_kiosk",
                params=tuple(base + [MoveParam("receiver", "&mut sui::kiosk::Kiosk"), ctx]),
                public=True,
                entry=True,
                body=(
                    _mint_call(base),
                    statement(call("ob_kiosk::ob_kiosk::deposit", ["receiver", "nft", "ctx"], multiline=False)),
                ),
            )
        )
        functions.append(
            MoveFunction(
                name="mint_nft_to_new_kiosk",
                params=tuple(base + [MoveParam("receiver", "address"), ctx]),
                public=True,
                entry=True,
                body=(
                    _mint_call(base),
                    block(
                        let("(kiosk, _)", "ob_kiosk::ob_kiosk::new_for_address(receiver, ctx)"),
                        statement(
                            call("ob_kiosk::ob_kiosk::deposit", ["&mut kiosk", "nft", "ctx"], multiline=False)
                        ),
                        public_share("kiosk"),
                    ),
                ),
            )
        )

    functions.append(write_mint_fn(fields, type_name, requires_collection))
    return functions


# ---------------------------------------------------------------------------
# Init
# ---------------------------------------------------------------------------


def write_mint_cap_init(mint_cap: MintCap, witness_name: str, type_name: str) -> str:
    """Create the ``MintCap`` and hand it to the publisher.

    Borrows the one-time witness so it is still available for
    ``sui::package::claim`` afterwards.
    """
    generics = f"<{witness_name}, {type_name}>"
    if mint_cap.is_limited():
        create = call(
            f"nft_protocol::mint_cap::new_limited{generics}",
            ["&witness", "collection_id", str(mint_cap.supply), "ctx"],
        )
    else:
        create = call(
            f"nft_protocol::mint_cap::new_unlimited{generics}",
            ["&witness", "collection_id", "ctx"],
        )
    return block(
        let("mint_cap", create),
        statement(
            call(
                "sui::transfer::public_transfer",
                ["mint_cap", "sui::tx_context::sender(ctx)"],
            )
        ),
    )


def mint_call_args(test_args: list[str], requires_collection: bool) -> list[str]:
    """Arguments for calling ``mint`` from a generated test, minus ``ctx``."""
    args = list(test_args) + ["&mut mint_cap"]
    if requires_collection:
        args.append("&mut collection")
    return args

