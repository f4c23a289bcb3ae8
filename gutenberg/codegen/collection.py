"""Init-time code for the ``Collection`` object and its domains."""

from __future__ import annotations

from gutenberg.codegen.move import (
    address_literal,
    block,
    call,
    let,
    public_share,
    sender,
    statement,
    utf8,
)
from gutenberg.models.collection import CollectionData, RoyaltyPolicy, Supply, Tags
from gutenberg.utils import sanitize_display

COLLECTION_MUT = "&mut collection"
DELEGATED_WITNESS = "delegated_witness"


def add_domain(domain: str) -> str:
    return statement(
        call(
            "nft_protocol::collection::add_domain",
            [DELEGATED_WITNESS, COLLECTION_MUT, domain],
        )
    )


# ---------------------------------------------------------------------------
# Collection object
# ---------------------------------------------------------------------------


def write_collection_create(type_name: str) -> str:
    # `create` rather than `create_from_otw` pins the delegated witness to
    # `Collection<T>` at compile time.
    return block(
        let(
            "collection",
            call(f"nft_protocol::collection::create<{type_name}>", [DELEGATED_WITNESS, "ctx"]),
        ),
        let("collection_id", "sui::object::id(&collection)"),
    )


def write_collection_share() -> str:
    return public_share("collection")


def write_domains(collection: CollectionData) -> list[str]:
    """Domain attachments in a fixed order; absent settings emit nothing."""
    blocks = [
        write_creators(collection),
        write_display_info(collection),
        write_symbol(collection),
        write_url(collection),
        write_supply_domain(collection.supply),
        write_royalties(collection.royalties) if collection.royalties else "",
    ]
    return [b for b in blocks if b]


def write_creators(collection: CollectionData) -> str:
    if not collection.creators:
        return ""
    inserts = [
        statement(call("sui::vec_set::insert", ["&mut creators", address_literal(creator)]))
        for creator in collection.creators
    ]
    return block(
        let("creators", "sui::vec_set::empty()"),
        *inserts,
        add_domain(call("nft_protocol::creators::new", ["creators"])),
    )


def write_display_info(collection: CollectionData) -> str:
    return add_domain(
        call(
            "nft_protocol::display_info::new",
            [
                utf8(collection.display_name),
                utf8(collection.display_description or ""),
            ],
            multiline=True,
        )
    )


def write_symbol(collection: CollectionData) -> str:
    if collection.symbol is None:
        return ""
    return add_domain(call("nft_protocol::symbol::new", [utf8(sanitize_display(collection.symbol))]))


def write_url(collection: CollectionData) -> str:
    if collection.display_url is None:
        return ""
    return add_domain(f'sui::url::new_unsafe_from_bytes(b"{collection.display_url}")')


# ---------------------------------------------------------------------------
# Supply
# ---------------------------------------------------------------------------


def write_supply_domain(supply: Supply) -> str:
    if not supply.requires_collection():
        return ""
    return add_domain(
        call(
            "nft_protocol::supply::new",
            [DELEGATED_WITNESS, str(supply.max_supply), "false"],
        )
    )


def _borrow_supply() -> str:
    return let(
        "supply",
        call(
            "nft_protocol::supply::borrow_domain_mut",
            [call("nft_protocol::collection::borrow_uid_mut", [DELEGATED_WITNESS, "collection"])],
            multiline=True,
        ),
    )


def write_supply_increment() -> str:
    """Count one mint against the collection supply; needs ``collection`` in scope."""
    return block(
        _borrow_supply(),
        statement(call("nft_protocol::supply::increment", [DELEGATED_WITNESS, "supply", "1"], multiline=False)),
    )


def write_supply_decrement() -> str:
    """Release one unit of supply and lower the ceiling so it cannot be re-minted."""
    return block(
        _borrow_supply(),
        statement(call("nft_protocol::supply::decrement", [DELEGATED_WITNESS, "supply", "1"], multiline=False)),
        statement(
            call(
                "nft_protocol::supply::decrease_supply_ceil",
                [DELEGATED_WITNESS, "supply", "1"],
                multiline=False,
            )
        ),
    )


# ---------------------------------------------------------------------------
# Royalties
# ---------------------------------------------------------------------------


def write_royalties(policy: RoyaltyPolicy) -> str:
    """Royalty domain plus the bps strategy.

    A single beneficiary gets the whole royalty through ``from_address``;
    several are wired through a ``vec_map`` of shares; none defaults to the
    publishing address.
    """
    if len(policy.shares) == 1:
        (share,) = policy.shares
        setup = ""
        royalty = call(
            "nft_protocol::royalty::from_address",
            [address_literal(share.address), "ctx"],
            multiline=False,
        )
    elif policy.shares:
        inserts = [
            statement(
                call(
                    "sui::vec_map::insert",
                    ["&mut royalty_map", address_literal(share.address), str(share.share_bps)],
                    multiline=False,
                )
            )
            for share in policy.shares
        ]
        setup = block(let("royalty_map", "sui::vec_map::empty()"), *inserts)
        royalty = call("nft_protocol::royalty::from_shares", ["royalty_map", "ctx"])
    else:
        setup = ""
        royalty = call("nft_protocol::royalty::from_address", [sender(), "ctx"])

    strategy = statement(
        call(
            "nft_protocol::royalty_strategy_bps::create_domain_and_add_strategy",
            [
                DELEGATED_WITNESS,
                COLLECTION_MUT,
                royalty,
                str(policy.collection_royalty_bps),
                "ctx",
            ],
        )
    )
    return "\n\n".join(part for part in (setup, strategy) if part)


# ---------------------------------------------------------------------------
# Tags
# ---------------------------------------------------------------------------


def write_tags(tags: Tags) -> str:
    """Build a ``tags`` vector in declaration order."""
    pushes = []
    for tag in tags:
        if tag.function_name is None:
            value = utf8(sanitize_display(tag.root))
        else:
            value = f"nft_protocol::tags::{tag.function_name}()"
        pushes.append(statement(call("std::vector::push_back", ["&mut tags", value])))
    return block(let("tags", "std::vector::empty()"), *pushes)
