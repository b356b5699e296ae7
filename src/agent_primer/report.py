"""Report assembly: run every analyzer and freeze the results into one snapshot."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from .cache import PackageCache
from .config import Settings
from .english import AMERICAN, preferred_english
from .files import analyze_languages, find_readme_files, largest_source_files
from .graph import ProjectUsage, build_graph
from .localization import supported_ui_languages
from .logging import logger
from .manifests import read_declarations
from .packages import collect_package_ids, resolve_descriptions
from .preferences import (
    nullable_enabled,
    preferred_mocking_framework,
    preferred_test_framework,
    preferred_ui_libraries,
)
from .registry import RegistryClient
from .repository import RepoLink

CSHARP = "C#"


@dataclass(frozen=True)
class LinkedRepository:
    """A GitHub repository the analyzed repo is connected to."""

    url: str
    description: str
    is_submodule: bool = False


@dataclass(frozen=True)
class PrimerReport:
    """Immutable snapshot of everything the renderers need."""

    repository_path: str
    source_file_count: int = 0
    repositories: tuple[LinkedRepository, ...] = ()
    languages: dict[str, float] = field(default_factory=dict)  # lang -> fraction
    english: str = AMERICAN
    packages: tuple[tuple[str, str], ...] = ()  # (name, description)
    nullable_enabled: bool | None = None
    test_framework: str | None = None
    mocking_framework: str | None = None
    ui_libraries: tuple[str, ...] = ()
    projects: tuple[ProjectUsage, ...] = ()
    localizations: tuple[str, ...] = ()
    largest_files: tuple[tuple[str, int], ...] = ()  # (relative path, bytes)
    readme_files: tuple[str, ...] = ()

    @property
    def contains_csharp(self) -> bool:
        return CSHARP in self.languages

    @property
    def top_level_projects(self) -> list[ProjectUsage]:
        return [p for p in self.projects if p.is_top_level]

    @property
    def internal_projects(self) -> list[ProjectUsage]:
        return [p for p in self.projects if not p.is_top_level]

    def to_dict(self) -> dict[str, Any]:
        return {
            "repository_path": self.repository_path,
            "repositories": [
                {"url": r.url, "description": r.description, "submodule": r.is_submodule}
                for r in self.repositories
            ],
            "source_file_count": self.source_file_count,
            "languages": {k: round(v, 4) for k, v in self.languages.items()},
            "english": self.english,
            "packages": [{"name": n, "description": d} for n, d in self.packages],
            "preferences": {
                "nullable": self.nullable_enabled,
                "tests": self.test_framework,
                "mocking": self.mocking_framework,
                "ui": list(self.ui_libraries),
            },
            "projects": [p.to_dict() for p in self.projects],
            "localizations": list(self.localizations),
            "largest_files": [{"path": p, "size": s} for p, s in self.largest_files],
            "readme_files": list(self.readme_files),
        }


def describe_repositories(links: list[RepoLink], client: RegistryClient | None) -> list[LinkedRepository]:
    """Fetch GitHub metadata for each linked slug; failed lookups are left out."""
    if client is None:
        return []

    repositories = []
    for link in links:
        info = client.github_repository(link.slug)
        if info is not None:
            url, description = info
            repositories.append(LinkedRepository(url, description, link.is_submodule))
    return repositories


def build_report(
    repo_path: Path,
    tracked_files: list[str],
    settings: Settings,
    cache: PackageCache,
    client: RegistryClient | None = None,
    links: list[RepoLink] | None = None,
) -> PrimerReport:
    """Run the analyzers over a repository and assemble the report.

    ``client`` is None for offline runs: package descriptions then come
    from the cache only and linked repositories are skipped.
    """
    repositories = describe_repositories(links or [], client)
    languages = analyze_languages(tracked_files)
    logger.info("Tracked files: %d, languages: %s", len(tracked_files), ", ".join(languages) or "none")

    english = AMERICAN
    packages: list[tuple[str, str]] = []
    declarations = []
    if languages:
        english = preferred_english(repo_path, tracked_files)
        declarations = read_declarations(repo_path, "*.csproj")
        package_ids = collect_package_ids(repo_path, declarations)
        packages = resolve_descriptions(package_ids, cache, client)

    report_fields: dict[str, Any] = {}
    if CSHARP in languages:
        report_fields = {
            "nullable_enabled": nullable_enabled(declarations),
            "test_framework": preferred_test_framework(packages),
            "mocking_framework": preferred_mocking_framework(packages),
            "ui_libraries": tuple(preferred_ui_libraries(repo_path, declarations)),
            "projects": tuple(build_graph(declarations).ranked()),
        }

    return PrimerReport(
        repository_path=str(repo_path),
        source_file_count=len(tracked_files),
        repositories=tuple(repositories),
        languages=languages,
        english=english,
        packages=tuple(packages),
        localizations=tuple(supported_ui_languages(tracked_files)),
        largest_files=tuple(largest_source_files(repo_path, tracked_files, settings.largest_file_count)),
        readme_files=tuple(find_readme_files(repo_path)),
        **report_fields,
    )
