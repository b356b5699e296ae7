"""File-level analysis: safe enumeration, language breakdown, size ranking."""

from __future__ import annotations

import fnmatch
import os
from collections import Counter
from pathlib import Path, PurePosixPath

from .logging import logger

IGNORE_DIRS = {".git", ".vs", "bin", "obj", "node_modules"}

README_EXCLUDED_DIRS = {"bin", "obj", "packages"}

# Extension -> Language mapping
EXT_LANG = {
    ".cs": "C#", ".fs": "F#", ".vb": "VB.NET",
    ".c": "C/C++", ".h": "C/C++", ".hpp": "C/C++", ".cpp": "C/C++", ".cc": "C/C++",
    ".m": "Objective-C", ".mm": "Objective-C",
    ".java": "Java", ".kt": "Kotlin",
    ".swift": "Swift",
    ".js": "JavaScript", ".jsx": "JavaScript",
    ".ts": "TypeScript", ".tsx": "TypeScript",
    ".py": "Python",
    ".rb": "Ruby",
    ".php": "PHP",
    ".go": "Go",
    ".rs": "Rust",
    ".dart": "Dart",
    ".sql": "SQL",
    ".ps1": "PowerShell",
    ".sh": "Shell",
    ".bat": "Batch",
    ".yml": "YAML", ".yaml": "YAML",
}


def is_source_file(path: str) -> bool:
    return PurePosixPath(path.replace("\\", "/")).suffix.lower() in EXT_LANG


def enumerate_files(root: str | Path, pattern: str) -> list[Path]:
    """Recursively find files whose name matches a glob pattern (case-insensitive).

    Build output and tool directories are skipped. I/O errors are logged and
    the affected directories are left out.
    """
    root = Path(root)
    pattern = pattern.lower()
    matches = []

    def on_error(err: OSError) -> None:
        logger.warning("Failed to enumerate '%s' files under %s: %s", pattern, err.filename, err.strerror)

    for dirpath, dirnames, filenames in os.walk(root, onerror=on_error):
        dirnames[:] = sorted(d for d in dirnames if d.lower() not in IGNORE_DIRS)
        for fname in sorted(filenames):
            if fnmatch.fnmatchcase(fname.lower(), pattern):
                matches.append(Path(dirpath) / fname)
    return matches


def analyze_languages(tracked_files: list[str]) -> dict[str, float]:
    """Return language -> fraction of recognized source files, most common first."""
    counts: Counter = Counter()
    for path in tracked_files:
        lang = EXT_LANG.get(PurePosixPath(path.lower()).suffix)
        if lang:
            counts[lang] += 1

    total = sum(counts.values())
    if total == 0:
        return {}
    return {lang: count / total for lang, count in counts.most_common()}


def largest_source_files(repo_path: Path, tracked_files: list[str], count: int = 5) -> list[tuple[str, int]]:
    """The ``count`` biggest recognized source files as (relative path, size in bytes)."""
    sized = []
    for rel in tracked_files:
        if not is_source_file(rel):
            continue
        try:
            size = (repo_path / rel).stat().st_size
        except OSError:
            continue
        sized.append((rel, size))

    sized.sort(key=lambda item: (-item[1], item[0]))
    return sized[:count]


def find_readme_files(repo_path: Path) -> list[str]:
    """Relative paths of README.md files, excluding build and package folders."""
    readmes = []
    for path in enumerate_files(repo_path, "readme.md"):
        rel = path.relative_to(repo_path)
        if any(part.lower() in README_EXCLUDED_DIRS for part in rel.parts[:-1]):
            continue
        readmes.append(rel.as_posix())
    return sorted(readmes)
