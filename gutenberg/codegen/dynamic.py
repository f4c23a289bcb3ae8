"""Field setters for dynamic NFTs.

Each field gets four setters: the bare setter gated by a delegated witness,
one authorised by the ``Publisher``, and kiosk variants of both that borrow
the NFT through the borrow policy.
"""

from __future__ import annotations

from gutenberg.codegen.fields import field_init, field_params
from gutenberg.codegen.move import TX_CONTEXT, MoveFunction, MoveParam, block, call, let, statement
from gutenberg.models.nft import Dynamic, Field, Fields

BORROW_REQ = "ob_request::borrow_request::BORROW_REQ"


def borrow_policy_type(type_name: str) -> str:
    return f"ob_request::request::Policy<ob_request::request::WithNft<{type_name}, {BORROW_REQ}>>"


def write_move_defs(dynamic: Dynamic, fields: Fields, type_name: str) -> list[MoveFunction]:
    if not dynamic.is_dynamic():
        return []
    return [setter for field in fields for setter in write_field_setters(field, type_name)]


def write_field_setters(field: Field, type_name: str) -> list[MoveFunction]:
    name = field.name
    value_params = field_params(field)
    value_args = [param.name for param in value_params]

    witness = MoveParam("delegated_witness", f"ob_permissions::witness::Witness<{type_name}>")
    publisher = MoveParam("publisher", "&sui::package::Publisher")
    kiosk_params = [
        MoveParam("kiosk", "&mut sui::kiosk::Kiosk"),
        MoveParam("nft_id", "sui::object::ID"),
    ]
    tail = [
        MoveParam("policy", f"&{borrow_policy_type(type_name)}"),
        MoveParam("ctx", TX_CONTEXT),
    ]
    from_publisher = let(
        "delegated_witness", "ob_permissions::witness::from_publisher(publisher)"
    )
    set_call = statement(
        call(f"set_{name}", ["delegated_witness", "nft", *value_args], multiline=False)
    )
    kiosk_args = ["delegated_witness", "kiosk", "nft_id", *value_args, "policy", "ctx"]

    return [
        MoveFunction(
            name=f"set_{name}",
            params=(
                MoveParam("_delegated_witness", witness.type),
                MoveParam("nft", f"&mut {type_name}"),
                *value_params,
            ),
            public=True,
            body=(statement(f"nft.{name} = {field_init(field)}"),),
        ),
        MoveFunction(
            name=f"set_{name}_as_publisher",
            params=(publisher, MoveParam("nft", f"&mut {type_name}"), *value_params),
            public=True,
            entry=True,
            body=(block(from_publisher, set_call),),
        ),
        MoveFunction(
            name=f"set_{name}_in_kiosk",
            params=(witness, *kiosk_params, *value_params, *tail),
            public=True,
            body=(
                let(
                    "borrow",
                    f"ob_kiosk::ob_kiosk::borrow_nft_mut<{type_name}>"
                    "(kiosk, nft_id, std::option::none(), ctx)",
                ),
                block(
                    let(
                        f"nft: &mut {type_name}",
                        "ob_request::borrow_request::borrow_nft_ref_mut(delegated_witness, &mut borrow)",
                    ),
                    set_call,
                ),
                statement(
                    f"ob_kiosk::ob_kiosk::return_nft<Witness, {type_name}>(kiosk, borrow, policy)"
                ),
            ),
        ),
        MoveFunction(
            name=f"set_{name}_in_kiosk_as_publisher",
            params=(publisher, *kiosk_params, *value_params, *tail),
            public=True,
            entry=True,
            body=(
                block(
                    from_publisher,
                    statement(call(f"set_{name}_in_kiosk", kiosk_args, multiline=False)),
                ),
            ),
        ),
    ]
