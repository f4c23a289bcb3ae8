"""Generator configuration.

Typed settings for contract generation and asset upload. Everything is a
Pydantic v2 model so values are validated at construction time and can be
persisted to JSON or read from ``GUTENBERG_*`` environment variables.
Configuration is always passed explicitly; nothing here is module state.
"""

from __future__ import annotations

import os
from enum import Enum
from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field


class Network(str, Enum):
    """Sui network a contract is generated for."""

    MAINNET = "mainnet"
    TESTNET = "testnet"


class UploadConfig(BaseModel):
    """Tuning knobs for the asset uploaders."""

    concurrency: int = Field(default=8, ge=1, description="Maximum uploads in flight")
    retries: int = Field(default=3, ge=0, description="Extra attempts per asset after a failure")
    timeout: int = Field(default=60, ge=1, description="Per-request timeout in seconds")


class GeneratorConfig(BaseModel):
    """Settings for one generation run.

    Created once by the CLI (or by library callers) and handed to the writer
    and registry. ``protocol_version`` of ``None`` pins the latest version
    known to the registry.
    """

    output_dir: Path = Field(default=Path("./contract"))
    network: Network = Field(default=Network.MAINNET)
    protocol_version: str | None = Field(default=None)
    demo: bool = Field(default=False, description="Clamp the schema to the demo feature set")
    registry_path: Path | None = Field(
        default=None, description="Registry JSON file; None uses the bundled registry"
    )
    upload: UploadConfig = Field(default_factory=UploadConfig)

    # ------------------------------------------------------------------
    # Derived paths
    # ------------------------------------------------------------------

    @property
    def sources_dir(self) -> Path:
        """Directory holding generated ``.move`` modules."""
        return self.output_dir / "sources"

    @property
    def manifest_path(self) -> Path:
        return self.output_dir / "Move.toml"

    # ------------------------------------------------------------------
    # Serialisation helpers
    # ------------------------------------------------------------------

    def save(self, path: Path | None = None) -> Path:
        """Persist the configuration to a JSON file.

        Args:
            path: Destination file. Defaults to ``<output_dir>/gutenberg.json``.

        Returns:
            The path where the file was written.
        """
        target = path or (self.output_dir / "gutenberg.json")
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(self.model_dump_json(indent=2), encoding="utf-8")
        return target

    @classmethod
    def load(cls, path: Path) -> "GeneratorConfig":
        raw = Path(path).read_text(encoding="utf-8")
        return cls.model_validate_json(raw)

    @classmethod
    def from_env(cls) -> "GeneratorConfig":
        """Build a ``GeneratorConfig`` from environment variables.

        Recognised variables (all optional):
            GUTENBERG_OUTPUT_DIR, GUTENBERG_NETWORK, GUTENBERG_PROTOCOL_VERSION,
            GUTENBERG_DEMO, GUTENBERG_REGISTRY, GUTENBERG_UPLOAD_CONCURRENCY,
            GUTENBERG_UPLOAD_RETRIES.
        """
        upload_kwargs: dict[str, Any] = {}
        if os.environ.get("GUTENBERG_UPLOAD_CONCURRENCY"):
            upload_kwargs["concurrency"] = int(os.environ["GUTENBERG_UPLOAD_CONCURRENCY"])
        if os.environ.get("GUTENBERG_UPLOAD_RETRIES"):
            upload_kwargs["retries"] = int(os.environ["GUTENBERG_UPLOAD_RETRIES"])

        registry = os.environ.get("GUTENBERG_REGISTRY")
        demo = os.environ.get("GUTENBERG_DEMO", "").strip().lower() in {"1", "true", "yes"}

        return cls(
            output_dir=Path(os.environ.get("GUTENBERG_OUTPUT_DIR", "./contract")),
            network=Network(os.environ.get("GUTENBERG_NETWORK", "mainnet").lower()),
            protocol_version=os.environ.get("GUTENBERG_PROTOCOL_VERSION") or None,
            demo=demo,
            registry_path=Path(registry) if registry else None,
            upload=UploadConfig(**upload_kwargs),
        )
