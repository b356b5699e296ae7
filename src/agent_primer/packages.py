"""NuGet package discovery and description resolution."""

from __future__ import annotations

from pathlib import Path
from typing import Iterable

from .cache import PackageCache
from .files import enumerate_files
from .logging import logger
from .manifests import ProjectDeclaration, read_packages_config
from .registry import DESCRIPTION_UNAVAILABLE, RegistryClient

EXCLUDED_PREFIXES = ("System.", "Microsoft.")


def filter_package_ids(package_ids: Iterable[str]) -> list[str]:
    """Drop framework packages and sub-packages of another listed package.

    ``Serilog.Sinks.Console`` is dropped when ``Serilog`` is also present,
    keeping the list to one entry per package family. Matching is
    case-insensitive; the first spelling seen is kept.
    """
    unique: dict[str, str] = {}
    for package_id in package_ids:
        package_id = package_id.strip()
        if package_id and not package_id.startswith(EXCLUDED_PREFIXES):
            unique.setdefault(package_id.lower(), package_id)

    keys = set(unique)
    return [
        name
        for key, name in unique.items()
        if not any(key.startswith(other + ".") for other in keys if other != key)
    ]


def collect_package_ids(root: Path, declarations: Iterable[ProjectDeclaration]) -> list[str]:
    """Package ids referenced by project files and packages.config files."""
    ids = [package for decl in declarations for package in decl.packages]
    for config in enumerate_files(root, "packages.config"):
        ids.extend(read_packages_config(config))
    return filter_package_ids(ids)


def resolve_descriptions(
    package_ids: Iterable[str],
    cache: PackageCache,
    client: RegistryClient | None = None,
) -> list[tuple[str, str]]:
    """(name, description) pairs sorted by name.

    The cache is consulted first. Misses go to the registry when a client
    is given and are added to the cache; without a client they resolve to
    the unavailable sentinel and are not cached.
    """
    resolved: dict[str, tuple[str, str]] = {}
    misses = []
    for package_id in package_ids:
        cached = cache.get(package_id)
        if cached is not None:
            resolved[package_id.lower()] = (package_id, cached)
        else:
            misses.append(package_id)

    if misses:
        logger.info("Looking up %d package description(s)", len(misses))

    for package_id in misses:
        if client is None:
            resolved[package_id.lower()] = (package_id, DESCRIPTION_UNAVAILABLE)
            continue
        description = client.nuget_description(package_id) or DESCRIPTION_UNAVAILABLE
        cache.add(package_id, description)
        resolved[package_id.lower()] = (package_id, description)

    return sorted(resolved.values(), key=lambda item: item[0].lower())
