"""Schema-level assembly of a complete Move module.

:func:`write_move` is a pure function of the schema: the same schema always
yields byte-identical output, and features that are switched off contribute
nothing at all.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import PurePosixPath

from gutenberg.codegen import burn as burn_gen
from gutenberg.codegen import composability as composability_gen
from gutenberg.codegen import dynamic as dynamic_gen
from gutenberg.codegen import minting as minting_gen
from gutenberg.codegen import orderbook as orderbook_gen
from gutenberg.codegen.move import MoveFunction
from gutenberg.codegen.nft import write_init_fn, write_struct
from gutenberg.codegen.scenarios import write_move_tests
from gutenberg.codegen.templates import TemplateRenderer, default_renderer
from gutenberg.models.schema import Schema


@dataclass(frozen=True)
class ContractFile:
    """Generated source and its path relative to the package root."""

    path: PurePosixPath
    content: str


def write_definitions(schema: Schema) -> list[MoveFunction]:
    """Every function of the module except tests, in output order."""
    nft = schema.nft
    type_name = nft.type_name_normalized()
    requires_collection = schema.requires_collection()

    functions = [write_init_fn(schema)]
    functions += minting_gen.write_move_defs(
        nft.mint_policies, nft.fields, type_name, requires_collection
    )
    functions += dynamic_gen.write_move_defs(nft.dynamic, nft.fields, type_name)
    functions += orderbook_gen.write_move_defs(nft.orderbook, type_name)
    functions += burn_gen.write_move_defs(
        nft.burn,
        nft.fields,
        type_name,
        requires_collection=requires_collection,
        requires_listing=nft.requires_listing(),
        requires_confirm=nft.requires_confirm(),
    )
    return functions


def render_module(schema: Schema, renderer: TemplateRenderer | None = None) -> str:
    renderer = renderer or default_renderer()
    nft = schema.nft

    items = [write_struct(nft)] + [fn.render() for fn in write_definitions(schema)]

    content = renderer.render(
        "module.move.j2",
        {
            "package_name": schema.package_name_normalized(),
            "module_name": nft.module_name(),
            "witness_name": nft.witness_name(),
            "marker_types": composability_gen.write_types(nft.composability),
            "items": items,
            "tests": write_move_tests(schema, renderer),
        },
    )
    return content + "\n"


def write_move(schema: Schema, renderer: TemplateRenderer | None = None) -> ContractFile:
    """Render *schema* into ``sources/<module>.move``."""
    return ContractFile(
        path=PurePosixPath("sources") / f"{schema.nft.module_name()}.move",
        content=render_module(schema, renderer),
    )
