"""Orderbook creation and trading toggles."""

from __future__ import annotations

from gutenberg.codegen.move import MoveFunction, MoveParam, block, call, let, statement
from gutenberg.models.nft import Orderbook

SUI = "sui::sui::SUI"


def orderbook_type(type_name: str) -> str:
    return f"liquidity_layer_v1::orderbook::Orderbook<{type_name}, {SUI}>"


def _protection(enabled: bool) -> str:
    flag = "true" if enabled else "false"
    return f"liquidity_layer_v1::orderbook::custom_protection({flag}, {flag}, {flag})"


def write_move_init(orderbook: Orderbook | None, type_name: str) -> str:
    """Orderbook creation; requires ``transfer_policy`` in scope."""
    if orderbook is None:
        return ""
    generics = f"<{type_name}, {SUI}>"
    if orderbook is Orderbook.UNPROTECTED:
        return statement(
            call(
                f"liquidity_layer_v1::orderbook::create_unprotected{generics}",
                ["delegated_witness", "&transfer_policy", "ctx"],
            )
        )
    return block(
        let(
            "orderbook",
            call(
                f"liquidity_layer_v1::orderbook::new_with_protected_actions{generics}",
                ["delegated_witness", "&transfer_policy", _protection(True), "ctx"],
            ),
        ),
        statement("liquidity_layer_v1::orderbook::share(orderbook)"),
    )


def write_move_defs(orderbook: Orderbook | None, type_name: str) -> list[MoveFunction]:
    """Publisher-gated switches that lift or restore protection on trading."""
    if orderbook is not Orderbook.PROTECTED:
        return []

    params = (
        MoveParam("publisher", "&sui::package::Publisher"),
        MoveParam("orderbook", f"&mut {orderbook_type(type_name)}"),
    )
    from_publisher = let(
        "delegated_witness", "ob_permissions::witness::from_publisher(publisher)"
    )

    def toggle(name: str, protected: bool) -> MoveFunction:
        return MoveFunction(
            name=name,
            params=params,
            public=True,
            entry=True,
            body=(
                block(
                    from_publisher,
                    statement(
                        call(
                            "liquidity_layer_v1::orderbook::set_protection",
                            ["delegated_witness", "orderbook", _protection(protected)],
                        )
                    ),
                ),
            ),
        )

    return [toggle("enable_orderbook", False), toggle("disable_orderbook", True)]
