"""Gutenberg: generate Sui Move NFT contracts from a collection schema.

Typical usage::

    from gutenberg import GeneratorConfig, Schema, generate_contract

    schema = Schema.load("schema.yaml")
    await generate_contract(schema, GeneratorConfig(output_dir=Path("./contract")))
"""

from gutenberg.codegen import ContractFile, write_move
from gutenberg.config import GeneratorConfig, Network, UploadConfig
from gutenberg.errors import GutenbergError
from gutenberg.manifest import MoveToml, write_manifest
from gutenberg.models import Schema
from gutenberg.registry import PackageRegistry, Version
from gutenberg.writer import ContractGenerator, generate_contract

__version__ = "0.1.0"

__all__ = [
    "ContractFile",
    "ContractGenerator",
    "GeneratorConfig",
    "GutenbergError",
    "MoveToml",
    "Network",
    "PackageRegistry",
    "Schema",
    "UploadConfig",
    "Version",
    "generate_contract",
    "write_manifest",
    "write_move",
]
