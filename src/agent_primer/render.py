"""Report renderers: console snapshot, agent-oriented Markdown and JSON."""

from __future__ import annotations

import json

from rich.console import Console

from .report import PrimerReport

LABEL_WIDTH = 11
WRAP_WIDTH = 80


def wrap_list(items: list[str], indent: str = "  ", max_width: int = WRAP_WIDTH, separator: str = " | ") -> list[str]:
    """Join items with a separator, breaking into indented lines of at most max_width."""
    lines = []
    line = indent
    first = True
    for item in items:
        token = item if first else separator + item
        if not first and len(line) + len(token) > max_width:
            lines.append(line)
            line = indent + item
        else:
            line += token
        first = False

    if line.strip():
        lines.append(line)
    return lines


def format_languages(languages: dict[str, float]) -> str:
    return " | ".join(f"{lang} ({share:.0%})" for lang, share in languages.items())


def format_size(size: int) -> str:
    if size < 1024:
        return f"{size} B"
    if size < 1024 * 1024:
        return f"{size / 1024:.1f} KB"
    return f"{size / (1024 * 1024):.1f} MB"


def _labelled(label: str, rows: list[str]) -> list[str]:
    """'  Label      : first' followed by continuation rows aligned under it."""
    head = f"  {label:<{LABEL_WIDTH}}: "
    pad = " " * len(head)
    return [(head if i == 0 else pad) + row for i, row in enumerate(rows)]


def _preference_lines(report: PrimerReport) -> list[str]:
    lines = []
    if report.nullable_enabled is not None:
        lines += _labelled("Nullable", ["enabled" if report.nullable_enabled else "disabled"])
    if report.test_framework is not None:
        lines += _labelled("Tests", [report.test_framework])
    if report.mocking_framework is not None:
        lines += _labelled("Mocking", [report.mocking_framework])
    if report.ui_libraries:
        lines += _labelled("UI", [", ".join(report.ui_libraries)])
    return lines


def _project_lines(report: PrimerReport) -> list[str]:
    lines = []
    top_level = report.top_level_projects
    internal = report.internal_projects
    if top_level:
        lines += _labelled("Top-level", [f"{p.name} ({p.target_framework})" for p in top_level])
    if internal:
        lines += _labelled(
            "Internal",
            [f"{p.name} ({p.target_framework}) [refs:{p.reference_count}]" for p in internal],
        )
    return lines


def render_console(report: PrimerReport, console: Console) -> None:
    """Write the 'Repo Snapshot' layout to a rich console."""

    def title(text: str) -> None:
        console.print(text, style="bold cyan", markup=False, highlight=False)

    def out(text: str = "") -> None:
        console.print(text, markup=False, highlight=False)

    console.print("== Repo Snapshot ==", style="bold green", markup=False, highlight=False)
    title("Path:")
    out(f"  {report.repository_path}")
    out()

    if report.repositories:
        title(f"Repositories ({len(report.repositories)}):")
        for repo in report.repositories:
            suffix = " (submodule)" if repo.is_submodule else ""
            out(f"  - {repo.url} : {repo.description}{suffix}")
        out()

    title("Stats:")
    for line in _labelled("Files", [str(report.source_file_count)]):
        out(line)
    if not report.languages:
        for line in _labelled("Languages", ["none"]):
            out(line)
        out()
        return

    for line in _labelled("Languages", [format_languages(report.languages)]):
        out(line)
    for line in _labelled("English", [f"{report.english} English"]):
        out(line)
    out()

    title(f"NuGet ({len(report.packages)}):")
    if report.packages:
        names = sorted((name for name, _ in report.packages), key=str.lower)
        for line in wrap_list(names):
            out(line)
    else:
        out("  none")
    out()

    preferences = _preference_lines(report)
    if preferences:
        title("Preferences:")
        for line in preferences:
            out(line)
        out()

    projects = _project_lines(report)
    if projects:
        title("Projects:")
        for line in projects:
            out(line)
        out()

    if report.localizations:
        title(f"Localization ({len(report.localizations)}):")
        for line in wrap_list(list(report.localizations)):
            out(line)
        out()

    if report.largest_files:
        title("Largest files:")
        for path, size in report.largest_files:
            out(f"  {path} ({format_size(size)})")
        out()

    if report.readme_files:
        title("READMEs:")
        for readme in report.readme_files:
            out(f"  {readme}")


def render_markdown(report: PrimerReport) -> str:
    """Agent-oriented Markdown, ready to paste into a project context file."""
    lines = ["# Repository Primer", ""]
    lines.append(f"- **Path:** `{report.repository_path}`")
    lines.append(f"- **Tracked files:** {report.source_file_count}")
    if report.languages:
        lines.append(f"- **Languages:** {format_languages(report.languages)}")
        lines.append(f"- **Spelling:** use {report.english} English in code, comments and docs")
    lines.append("")

    if report.repositories:
        lines += ["## Repositories", ""]
        for repo in report.repositories:
            kind = " (submodule)" if repo.is_submodule else ""
            lines.append(f"- <{repo.url}>{kind}: {repo.description}")
        lines.append("")

    if report.packages:
        lines += ["## NuGet packages", ""]
        for name, description in report.packages:
            lines.append(f"- `{name}`: {description}")
        lines.append("")

    prefs = []
    if report.nullable_enabled is not None:
        state = "enabled" if report.nullable_enabled else "disabled"
        prefs.append(f"- **Nullable reference types:** {state}")
    if report.test_framework is not None:
        prefs.append(f"- **Unit test framework:** {report.test_framework}")
    if report.mocking_framework is not None:
        prefs.append(f"- **Mocking framework:** {report.mocking_framework}")
    if report.ui_libraries:
        prefs.append(f"- **UI:** {', '.join(report.ui_libraries)}")
    if prefs:
        lines += ["## Preferences", ""] + prefs + [""]

    if report.projects:
        lines += ["## Projects", ""]
        if report.top_level_projects:
            lines.append("Top-level (entry points):")
            lines.append("")
            for p in report.top_level_projects:
                lines.append(f"- `{p.name}` ({p.target_framework})")
            lines.append("")
        if report.internal_projects:
            lines.append("Internal (referenced by other projects):")
            lines.append("")
            for p in report.internal_projects:
                lines.append(f"- `{p.name}` ({p.target_framework}), refs: {p.reference_count}")
            lines.append("")

    if report.localizations:
        lines += ["## Localization", "", ", ".join(report.localizations), ""]

    if report.largest_files:
        lines += ["## Largest source files", ""]
        for path, size in report.largest_files:
            lines.append(f"- `{path}` ({format_size(size)})")
        lines.append("")

    if report.readme_files:
        lines += ["## READMEs", ""]
        lines += [f"- `{readme}`" for readme in report.readme_files]
        lines.append("")

    return "\n".join(lines).rstrip() + "\n"


def render_json(report: PrimerReport) -> str:
    return json.dumps(report.to_dict(), indent=2)
