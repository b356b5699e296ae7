"""Project manifest reader.

Reads MSBuild project files (``*.csproj``) and legacy ``packages.config``
files into flat declarations. Only a whitelist of element names is looked
at; everything else in the manifest is ignored. Unreadable or malformed
files are logged and contribute as little as possible, never an exception.
"""

from __future__ import annotations

import xml.etree.ElementTree as ET
from dataclasses import dataclass, field
from pathlib import Path, PurePosixPath

from .files import enumerate_files
from .logging import logger

UNKNOWN_FRAMEWORK = "unknown"

# Boolean/text project properties surfaced as feature flags
FLAG_ELEMENTS = ("Nullable", "UseWPF", "UseWindowsForms")


@dataclass(frozen=True)
class ProjectDeclaration:
    """Everything the analysis needs from one project file."""

    name: str
    path: str = ""
    target_framework: str = UNKNOWN_FRAMEWORK
    references: tuple[str, ...] = ()
    packages: tuple[str, ...] = ()
    flags: dict[str, tuple[str, ...]] = field(default_factory=dict)
    readable: bool = True

    def has_flag(self, flag: str, value: str) -> bool:
        """True if any declaration of ``flag`` equals ``value`` (case-insensitive)."""
        return any(v.lower() == value.lower() for v in self.flags.get(flag, ()))


def _local(tag: str) -> str:
    """Strip an XML namespace: '{ns}Name' -> 'Name'."""
    return tag.rsplit("}", 1)[-1]


def _texts(root: ET.Element, element: str) -> list[str]:
    return [
        (el.text or "").strip()
        for el in root.iter()
        if isinstance(el.tag, str) and _local(el.tag) == element
    ]


def _elements(root: ET.Element, element: str) -> list[ET.Element]:
    return [el for el in root.iter() if isinstance(el.tag, str) and _local(el.tag) == element]


def _target_framework(root: ET.Element) -> str:
    for element in ("TargetFramework", "TargetFrameworkVersion"):
        for value in _texts(root, element):
            if value:
                return value

    for value in _texts(root, "TargetFrameworks"):
        frameworks = [f.strip() for f in value.split(";") if f.strip()]
        if frameworks:
            return frameworks[0]

    return UNKNOWN_FRAMEWORK


def _project_references(root: ET.Element) -> list[str]:
    refs = []
    for el in _elements(root, "ProjectReference"):
        include = el.get("Include")
        if not include or ".csproj" not in include.lower():
            continue
        name = PurePosixPath(include.replace("\\", "/")).name
        if name:
            refs.append(name)
    return refs


def _package_references(root: ET.Element) -> list[str]:
    packages = []
    for el in _elements(root, "PackageReference"):
        for attr in ("Include", "Update"):
            value = (el.get(attr) or "").strip()
            if value:
                packages.append(value)
    return packages


def read_project(path: str | Path) -> ProjectDeclaration:
    """Parse one project file. Failures yield a name-only declaration."""
    path = Path(path)
    try:
        root = ET.parse(path).getroot()
    except (OSError, ET.ParseError) as e:
        logger.warning("Failed to read '%s': %s", path, e)
        return ProjectDeclaration(name=path.name, path=str(path), readable=False)

    flags = {}
    for flag in FLAG_ELEMENTS:
        values = tuple(v for v in _texts(root, flag) if v)
        if values:
            flags[flag] = values

    return ProjectDeclaration(
        name=path.name,
        path=str(path),
        target_framework=_target_framework(root),
        references=tuple(_project_references(root)),
        packages=tuple(_package_references(root)),
        flags=flags,
    )


def read_declarations(root_dir: str | Path, pattern: str = "*.csproj") -> list[ProjectDeclaration]:
    """Read every project file matching ``pattern`` beneath ``root_dir``."""
    declarations = [read_project(p) for p in enumerate_files(root_dir, pattern)]
    logger.debug("Read %d project declarations matching %s", len(declarations), pattern)
    return declarations


def read_packages_config(path: str | Path) -> list[str]:
    """Package ids listed in a legacy packages.config file."""
    try:
        root = ET.parse(path).getroot()
    except (OSError, ET.ParseError) as e:
        logger.warning("Failed to parse packages.config '%s': %s", path, e)
        return []

    return [
        el.get("id", "").strip()
        for el in _elements(root, "package")
        if el.get("id", "").strip()
    ]
