"""Command-line interface.

Usage::

    gutenberg generate schema.yaml ./contract
    gutenberg generate schema.json ./contract --demo --version 1.0.0
    gutenberg validate schema.yaml
    gutenberg template schema.json
"""

from __future__ import annotations

import argparse
import asyncio
import shutil
import sys
from pathlib import Path

from pydantic import ValidationError

from gutenberg.config import GeneratorConfig, Network
from gutenberg.errors import GutenbergError
from gutenberg.models.schema import Schema
from gutenberg.utils import (
    YAML_SUFFIXES,
    console,
    ensure_dir,
    print_error,
    print_info,
    print_success,
    print_summary_table,
)
from gutenberg.writer import ContractGenerator

TEMPLATE_PATH = Path(__file__).parent / "data" / "template.json"


# ---------------------------------------------------------------------------
# Commands
# ---------------------------------------------------------------------------


def cmd_generate(args: argparse.Namespace) -> None:
    schema = Schema.load(args.schema)
    config = GeneratorConfig(
        output_dir=Path(args.output_dir),
        network=Network(args.network),
        protocol_version=args.version,
        demo=args.demo,
        registry_path=Path(args.registry) if args.registry else None,
    )

    paths = asyncio.run(ContractGenerator(config).generate(schema))

    print_summary_table(
        {path.name: str(path) for path in paths},
        title=f"Generated {schema.package_name_normalized()}",
    )
    print_success(f"Contract written to {config.output_dir}")


def cmd_validate(args: argparse.Namespace) -> None:
    schema = Schema.load(args.schema)
    nft = schema.nft

    print_summary_table(
        {
            "package": schema.package_name_normalized(),
            "module": nft.module_name(),
            "type": nft.type_name_normalized(),
            "witness": nft.witness_name(),
            "requires collection": str(schema.requires_collection()),
            "transfer policy": str(nft.requires_transfer()),
            "withdraw policy": str(nft.requires_withdraw()),
            "borrow policy": str(nft.requires_borrow()),
        },
        title=f"{args.schema}",
    )
    print_success("Schema is valid")


def cmd_template(args: argparse.Namespace) -> None:
    output = Path(args.output)
    if output.exists() and not args.force:
        raise GutenbergError(f"{output} already exists, pass --force to overwrite")

    if output.suffix.lower() in YAML_SUFFIXES:
        Schema.load(TEMPLATE_PATH).save(output)
    else:
        ensure_dir(output.parent)
        shutil.copyfile(TEMPLATE_PATH, output)
    print_info(f"Template written to {output}")


# ---------------------------------------------------------------------------
# Entry point
# ---------------------------------------------------------------------------


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="gutenberg",
        description="Generate Sui Move NFT contracts from a collection schema",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=(
            "Examples:\n"
            "  gutenberg template schema.json\n"
            "  gutenberg validate schema.json\n"
            "  gutenberg generate schema.json ./contract --version 1.2.0\n"
        ),
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    generate = subparsers.add_parser("generate", help="Write a Move package from a schema")
    generate.add_argument("schema", help="Path to a .json, .yaml or .yml schema")
    generate.add_argument("output_dir", help="Directory that receives Move.toml and sources/")
    generate.add_argument(
        "--demo",
        action="store_true",
        help="Restrict the contract to the demo feature set",
    )
    generate.add_argument(
        "--network",
        choices=[network.value for network in Network],
        default=Network.MAINNET.value,
        help="Network whose package registry pins dependencies (default: mainnet)",
    )
    generate.add_argument(
        "--version",
        default=None,
        help="NftProtocol release to depend on (default: latest in the registry)",
    )
    generate.add_argument(
        "--registry",
        default=None,
        help="Package registry JSON file (default: bundled registry)",
    )
    generate.set_defaults(func=cmd_generate)

    validate = subparsers.add_parser("validate", help="Check a schema without writing anything")
    validate.add_argument("schema", help="Path to a .json, .yaml or .yml schema")
    validate.set_defaults(func=cmd_validate)

    template = subparsers.add_parser("template", help="Write an example schema")
    template.add_argument("output", help="Destination file; .yaml/.yml writes YAML")
    template.add_argument("--force", action="store_true", help="Overwrite an existing file")
    template.set_defaults(func=cmd_template)

    return parser


def main(argv: list[str] | None = None) -> None:
    """CLI entry point for the ``gutenberg`` console script."""
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        args.func(args)
    except (GutenbergError, ValidationError) as exc:
        print_error(str(exc))
        sys.exit(1)
    except KeyboardInterrupt:
        console.print("[yellow]Interrupted[/yellow]")
        sys.exit(130)


if __name__ == "__main__":
    main()
