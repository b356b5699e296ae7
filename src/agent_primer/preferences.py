"""Repository-wide .NET preferences derived from manifests and packages."""

from __future__ import annotations

from pathlib import Path
from typing import Iterable

from .files import enumerate_files
from .manifests import ProjectDeclaration
from .scoring import (
    MOCKING_FRAMEWORKS,
    TEST_FRAMEWORKS,
    UI_AVALONIA,
    UI_WINFORMS,
    UI_WPF,
    majority_enabled,
    pick_preferred,
    rank_by_signal,
)


def preferred_test_framework(packages: Iterable[tuple[str, str]]) -> str:
    return pick_preferred(TEST_FRAMEWORKS, (name for name, _ in packages))


def preferred_mocking_framework(packages: Iterable[tuple[str, str]]) -> str:
    return pick_preferred(MOCKING_FRAMEWORKS, (name for name, _ in packages))


def project_disables_nullable(decl: ProjectDeclaration) -> bool:
    """Nullable reference types are off unless a project says ``enable``.

    Unreadable projects are not counted as disabling it.
    """
    return decl.readable and not decl.has_flag("Nullable", "enable")


def nullable_enabled(declarations: list[ProjectDeclaration]) -> bool:
    """Majority vote over projects; a repository with no projects reports disabled."""
    if not declarations:
        return False
    disabled = sum(1 for decl in declarations if project_disables_nullable(decl))
    return majority_enabled(disabled, len(declarations))


def uses_windows_forms(declarations: Iterable[ProjectDeclaration]) -> bool:
    """The first project declaring a UI framework decides; WPF wins within a project."""
    for decl in declarations:
        if decl.has_flag("UseWPF", "true"):
            return False
        if decl.has_flag("UseWindowsForms", "true"):
            return True
    return False


def preferred_ui_libraries(root: Path, declarations: list[ProjectDeclaration]) -> list[str]:
    """UI toolkits in use, most evidence first. WinForms is only ever listed last."""
    signals = {
        UI_AVALONIA: len(enumerate_files(root, "*.axaml")),
        UI_WPF: len(enumerate_files(root, "*.xaml")),
        UI_WINFORMS: 1 if uses_windows_forms(declarations) else 0,
    }
    return rank_by_signal(signals, demoted=UI_WINFORMS)
