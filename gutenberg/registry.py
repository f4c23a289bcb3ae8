"""Package registry: pinned git revisions and on-chain ids of Move packages.

The registry is a JSON document mapping a package name to its released
versions::

    {"NftProtocol": {"1.2.0": {"package": {...}, "contractRef": {...},
                               "dependencies": {...}}}}

A mainnet registry ships inside the package. Callers may point at their
own file through ``GeneratorConfig.registry_path``.
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Iterable

from pydantic import Field, TypeAdapter, ValidationError, field_validator

from gutenberg.config import Network
from gutenberg.errors import RegistryError
from gutenberg.models.address import Address
from gutenberg.models.base import ValueModel

DATA_DIR = Path(__file__).parent / "data"

# Release train every generated manifest pins to.
PROTOCOL_PACKAGE = "NftProtocol"
CONTRACT_DEPENDENCIES = ("NftProtocol", "Launchpad", "LiquidityLayerV1")
EXTERNAL_DEPENDENCIES = ("Sui", "Originmate")


# ---------------------------------------------------------------------------
# Version
# ---------------------------------------------------------------------------


@dataclass(frozen=True, order=True)
class Version:
    """Semantic ``major.minor.patch`` version, ordered numerically."""

    major: int
    minor: int
    patch: int

    @classmethod
    def parse(cls, text: str) -> "Version":
        parts = text.strip().split(".")
        if len(parts) != 3 or not all(part.isdigit() for part in parts):
            raise ValueError(f"Invalid version {text!r}, expected major.minor.patch")
        major, minor, patch = (int(part) for part in parts)
        return cls(major, minor, patch)

    def __str__(self) -> str:
        return f"{self.major}.{self.minor}.{self.patch}"


# ---------------------------------------------------------------------------
# Registry entries
# ---------------------------------------------------------------------------


class Flavor(str, Enum):
    MAINNET = "Mainnet"
    TESTNET = "Testnet"


class GitPath(ValueModel):
    git: str
    subdir: str | None = None
    rev: str

    def sanitized(self) -> "GitPath":
        """Copy with an empty ``subdir`` dropped, as Move.toml expects."""
        if self.subdir == "":
            return self.model_copy(update={"subdir": None})
        return self


class PackagePath(ValueModel):
    path: GitPath
    object_id: Address | None = None


class Package(ValueModel):
    name: str
    version: str
    flavor: Flavor = Flavor.MAINNET
    published_at: Address | None = None

    @field_validator("version")
    @classmethod
    def _check_version(cls, value: str) -> str:
        Version.parse(value)
        return value

    def parsed_version(self) -> Version:
        return Version.parse(self.version)


class PackageInfo(ValueModel):
    package: Package
    contract_ref: PackagePath
    dependencies: dict[str, PackagePath] = Field(default_factory=dict)


_REGISTRY_ADAPTER = TypeAdapter(dict[str, dict[str, PackageInfo]])


# ---------------------------------------------------------------------------
# Registry
# ---------------------------------------------------------------------------


class PackageRegistry:
    """Read-only index of package name → version → :class:`PackageInfo`."""

    def __init__(self, packages: dict[str, dict[Version, PackageInfo]]) -> None:
        self._packages = packages

    @classmethod
    def from_dict(cls, data: dict) -> "PackageRegistry":
        try:
            raw = _REGISTRY_ADAPTER.validate_python(data)
        except ValidationError as exc:
            raise RegistryError(f"Malformed package registry: {exc}") from exc
        return cls(
            {
                name: {_as_version(version): info for version, info in versions.items()}
                for name, versions in raw.items()
            }
        )

    @classmethod
    def load(
        cls, path: Path | None = None, network: Network = Network.MAINNET
    ) -> "PackageRegistry":
        """Load a registry file, or the bundled one for *network*.

        Raises:
            RegistryError: If the file is missing or malformed.
        """
        target = Path(path) if path is not None else bundled_registry_path(network)
        try:
            data = json.loads(target.read_text(encoding="utf-8"))
        except FileNotFoundError as exc:
            raise RegistryError(f"Package registry not found: {target}") from exc
        except json.JSONDecodeError as exc:
            raise RegistryError(f"Package registry {target} is not valid JSON: {exc}") from exc
        return cls.from_dict(data)

    # ------------------------------------------------------------------
    # Lookups
    # ------------------------------------------------------------------

    def package_names(self) -> list[str]:
        return sorted(self._packages)

    def versions(self, name: str) -> list[Version]:
        return sorted(self._versions(name))

    def _versions(self, name: str) -> dict[Version, PackageInfo]:
        try:
            return self._packages[name]
        except KeyError:
            raise RegistryError(f"Could not find package {name} in the package registry") from None

    def get_latest_version(self, name: str) -> Version:
        versions = self._versions(name)
        if not versions:
            raise RegistryError(f"Package {name} has no released versions")
        return max(versions)

    def get_package_info(self, name: str, version: Version | str) -> PackageInfo:
        version = _as_version(version)
        try:
            return self._versions(name)[version]
        except KeyError:
            raise RegistryError(f"Unable to fetch {name} v{version}") from None

    def get_packages_git(
        self, names: Iterable[str], version: Version | str
    ) -> dict[str, GitPath]:
        return {
            name: self.get_package_info(name, version).contract_ref.path for name in names
        }

    def get_ext_dep_from_protocol(self, name: str, version: Version | str) -> GitPath:
        """Git path of a non-OriginByte package (``Sui``, ``Originmate``) that
        the protocol release *version* was built against."""
        info = self.get_package_info(PROTOCOL_PACKAGE, version)
        try:
            return info.dependencies[name].path
        except KeyError:
            raise RegistryError(
                f"{PROTOCOL_PACKAGE} v{info.package.version} does not depend on {name}"
            ) from None

    def get_object_id_from_rev(self, name: str, rev: str) -> Address:
        """Published address of the version of *name* pinned at git *rev*."""
        for info in self._versions(name).values():
            if info.contract_ref.path.rev == rev:
                return _published_at(info)
        raise RegistryError(f"Could not find revision {rev} of package {name}")

    def get_version_from_object_id(
        self, object_id: Address | str, name: str | None = None
    ) -> Version:
        """Version whose published address is *object_id*.

        Searches every package unless *name* narrows it down.
        """
        target = Address(object_id) if isinstance(object_id, str) else object_id
        names = [name] if name is not None else self.package_names()
        for package_name in names:
            for version, info in sorted(self._versions(package_name).items()):
                if info.package.published_at == target:
                    return version
        raise RegistryError(f"Unable to find object id {target} in the package registry")

    def get_updated_package_info(self, info: PackageInfo) -> PackageInfo | None:
        """Latest release of *info*'s package, or ``None`` if *info* is current."""
        versions = self._packages.get(info.package.name)
        if not versions:
            return None
        latest = versions[max(versions)]
        if latest.package.parsed_version() <= info.package.parsed_version():
            return None
        return latest

    def resolve(self, name: str, version_or_rev: Version | str) -> Address:
        """Published address of *name* at a semantic version or git revision."""
        if isinstance(version_or_rev, Version):
            return _published_at(self.get_package_info(name, version_or_rev))
        try:
            version = Version.parse(version_or_rev)
        except ValueError:
            return self.get_object_id_from_rev(name, version_or_rev)
        return _published_at(self.get_package_info(name, version))


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def bundled_registry_path(network: Network) -> Path:
    suffix = "main" if network is Network.MAINNET else "test"
    path = DATA_DIR / f"registry-{suffix}.json"
    if not path.is_file():
        raise RegistryError(
            f"No bundled package registry for {network.value}; pass a registry file"
        )
    return path


def _as_version(version: Version | str) -> Version:
    if isinstance(version, Version):
        return version
    try:
        return Version.parse(version)
    except ValueError as exc:
        raise RegistryError(str(exc)) from exc


def _published_at(info: PackageInfo) -> Address:
    if info.package.published_at is None:
        raise RegistryError(
            f"Package {info.package.name} v{info.package.version} has no published address"
        )
    return info.package.published_at
