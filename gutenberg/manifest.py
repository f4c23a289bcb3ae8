"""Move.toml manifest for a generated contract package."""

from __future__ import annotations

import re
from dataclasses import dataclass, field

import tomlkit

from gutenberg.registry import (
    CONTRACT_DEPENDENCIES,
    EXTERNAL_DEPENDENCIES,
    PROTOCOL_PACKAGE,
    GitPath,
    PackageRegistry,
    Version,
)

PACKAGE_VERSION = "1.0.0"

# Overwritten by the Sui CLI once the package is published.
PLACEHOLDER_ADDRESS = "0x0"

_TABLE_HEADER = re.compile(r"\n+(?=\[)")


@dataclass
class MoveToml:
    name: str
    dependencies: dict[str, GitPath] = field(default_factory=dict)
    version: str = PACKAGE_VERSION
    published_at: str = PLACEHOLDER_ADDRESS

    @classmethod
    def build(
        cls,
        package_name: str,
        registry: PackageRegistry,
        version: Version | str | None = None,
    ) -> "MoveToml":
        """Pin every contract dependency to one protocol release.

        ``version`` of ``None`` uses the latest ``NftProtocol`` release, which
        all OriginByte packages are released alongside.

        Raises:
            RegistryError: If a dependency is missing for that release.
        """
        if version is None:
            version = registry.get_latest_version(PROTOCOL_PACKAGE)

        dependencies = registry.get_packages_git(CONTRACT_DEPENDENCIES, version)
        for name in EXTERNAL_DEPENDENCIES:
            dependencies[name] = registry.get_ext_dep_from_protocol(name, version)

        return cls(
            name=package_name,
            dependencies={name: dep.sanitized() for name, dep in dependencies.items()},
        )

    def to_document(self) -> tomlkit.TOMLDocument:
        doc = tomlkit.document()

        package = tomlkit.table()
        package.add("name", self.name)
        package.add("version", self.version)
        package.add("published-at", self.published_at)
        doc.add("package", package)

        dependencies = tomlkit.table()
        for name in sorted(self.dependencies):
            dep = self.dependencies[name]
            entry = tomlkit.inline_table()
            entry.append("git", dep.git)
            if dep.subdir:
                entry.append("subdir", dep.subdir)
            entry.append("rev", dep.rev)
            dependencies.add(name, entry)
        doc.add("dependencies", dependencies)

        addresses = tomlkit.table()
        addresses.add(self.name, PLACEHOLDER_ADDRESS)
        doc.add("addresses", addresses)
        return doc

    def to_toml(self) -> str:
        text = tomlkit.dumps(self.to_document())
        # Exactly one blank line before every table header.
        return _TABLE_HEADER.sub("\n\n", text).lstrip("\n")


def write_manifest(
    package_name: str,
    registry: PackageRegistry,
    version: Version | str | None = None,
) -> str:
    """Render the ``Move.toml`` text for *package_name*."""
    return MoveToml.build(package_name, registry, version).to_toml()
