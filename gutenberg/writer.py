"""Contract package writer.

Renders the Move module and its manifest fully in memory, then writes both
under ``GeneratorConfig.output_dir``::

    <output_dir>/
        Move.toml
        sources/<module>.move

Nothing touches the filesystem until every file has rendered, so a schema
or registry error never leaves a half-written package behind.  Files are
written one at a time; if a write fails, the files already written by that
call are removed before the error propagates.
"""

from __future__ import annotations

import asyncio
from pathlib import Path, PurePosixPath

from gutenberg.codegen import ContractFile, write_move
from gutenberg.codegen.templates import TemplateRenderer
from gutenberg.config import GeneratorConfig
from gutenberg.manifest import write_manifest
from gutenberg.models.schema import Schema
from gutenberg.registry import PackageRegistry
from gutenberg.utils import ensure_dir


class ContractGenerator:
    """Turns a :class:`Schema` into a Move package directory."""

    def __init__(
        self,
        config: GeneratorConfig,
        registry: PackageRegistry | None = None,
        renderer: TemplateRenderer | None = None,
    ) -> None:
        self.config = config
        self.registry = registry or PackageRegistry.load(config.registry_path, config.network)
        self.renderer = renderer

    # -- Public API --------------------------------------------------------

    def render(self, schema: Schema) -> list[ContractFile]:
        """Every file of the package, without writing anything.

        With ``config.demo`` set the schema is clamped on a copy; the
        caller's schema is left untouched.
        """
        if self.config.demo:
            schema = schema.model_copy(deep=True)
            schema.enforce_demo()

        module = write_move(schema, self.renderer)
        manifest = ContractFile(
            path=PurePosixPath("Move.toml"),
            content=write_manifest(
                schema.package_name_normalized(),
                self.registry,
                self.config.protocol_version,
            ),
        )
        return [manifest, module]

    async def generate(self, schema: Schema) -> list[Path]:
        """Render and write the package.

        Returns:
            Paths of the written files under ``config.output_dir``, manifest
            first.
        """
        files = self.render(schema)
        root = self.config.output_dir

        paths = [root / Path(file.path) for file in files]
        written: list[Path] = []
        try:
            for path, file in zip(paths, files):
                await write_to_file(path, file.content)
                written.append(path)
        except OSError:
            # Drop what this call wrote so a failed write leaves no partial package.
            for path in written:
                path.unlink(missing_ok=True)
            raise
        return paths


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


async def write_to_file(path: Path, content: str) -> None:
    await asyncio.to_thread(_write_file, path, content)


async def generate_contract(
    schema: Schema,
    config: GeneratorConfig,
    registry: PackageRegistry | None = None,
) -> list[Path]:
    """Convenience wrapper around :meth:`ContractGenerator.generate`."""
    return await ContractGenerator(config, registry).generate(schema)


def _write_file(path: Path, content: str) -> None:
    """Synchronous helper: create parent dirs and write content."""
    ensure_dir(path.parent)
    path.write_text(content, encoding="utf-8")
