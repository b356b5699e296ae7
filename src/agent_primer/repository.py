"""Git repository inspection.

Locates the enclosing repository, lists tracked files through git and
collects the GitHub slugs the repository (and its submodules) point at.
"""

from __future__ import annotations

import re
import subprocess
from dataclasses import dataclass
from pathlib import Path

from .logging import logger

GIT_TIMEOUT = 60  # seconds; ls-files on very large monorepos can be slow

_SLUG_PREFIXES = ("git@github.com:", "ssh://git@github.com/")


class PrimerError(Exception):
    """Base error for conditions that stop a primer run."""


class RepositoryNotFoundError(PrimerError):
    """The start directory is not inside a git repository."""


class GitUnavailableError(PrimerError):
    """The git executable could not be run."""


@dataclass(frozen=True)
class RepoLink:
    """A GitHub repository referenced by a remote or submodule."""

    slug: str
    is_submodule: bool = False


def find_git_root(start: str | Path) -> Path:
    """Walk up from start until a directory containing ``.git`` is found.

    ``.git`` may be a directory or a file (worktrees and submodules).
    """
    current = Path(start).resolve()
    for candidate in (current, *current.parents):
        try:
            if (candidate / ".git").exists():
                return candidate
        except OSError:
            continue
    raise RepositoryNotFoundError("This script must be run from a git repository.")


def _run_git(repo_path: Path, *args: str) -> subprocess.CompletedProcess:
    try:
        return subprocess.run(
            ["git", *args],
            cwd=repo_path, capture_output=True, text=True, timeout=GIT_TIMEOUT,
        )
    except FileNotFoundError:
        raise GitUnavailableError("Git is not installed on this machine.")


def list_tracked_files(repo_path: Path) -> list[str]:
    """List tracked files (including submodule contents), relative to the repo root."""
    try:
        result = _run_git(repo_path, "ls-files", "--full-name", "--recurse-submodules")
    except subprocess.TimeoutExpired:
        logger.warning("git ls-files timed out after %ds", GIT_TIMEOUT)
        return []

    if result.returncode != 0:
        logger.warning("git ls-files returned exit code %d.", result.returncode)
        if result.stderr.strip():
            logger.warning(result.stderr.strip())
        return []

    return [line.strip() for line in result.stdout.splitlines() if line.strip()]


def get_remote_urls(repo_path: Path) -> list[str]:
    """Distinct remote URLs from ``git remote -v``, in first-seen order."""
    try:
        result = _run_git(repo_path, "remote", "-v")
    except (GitUnavailableError, subprocess.TimeoutExpired) as e:
        logger.warning("Could not list git remotes: %s", e)
        return []
    if result.returncode != 0:
        return []

    urls: dict[str, str] = {}
    for line in result.stdout.splitlines():
        parts = line.split()
        if len(parts) >= 2:
            urls.setdefault(parts[1].lower(), parts[1])
    return list(urls.values())


def get_submodule_urls(repo_path: Path) -> list[str]:
    """Distinct ``url =`` values from the repository's .gitmodules file."""
    gitmodules = repo_path / ".gitmodules"
    if not gitmodules.is_file():
        return []

    try:
        text = gitmodules.read_text(errors="replace")
    except OSError as e:
        logger.warning(".gitmodules could not be read: %s", e)
        return []

    urls: dict[str, str] = {}
    for line in text.splitlines():
        match = re.match(r"^\s*url\s*=\s*(\S.*?)\s*$", line, re.IGNORECASE)
        if match:
            urls.setdefault(match.group(1).lower(), match.group(1))
    return list(urls.values())


def parse_github_slug(url: str) -> str | None:
    """Extract ``owner/repo`` from a GitHub URL, or None for other hosts."""
    if not url or not url.strip():
        return None

    trimmed = url.strip()
    lower = trimmed.lower()
    for prefix in _SLUG_PREFIXES:
        if lower.startswith(prefix):
            candidate = trimmed[len(prefix):]
            break
    else:
        index = lower.find("github.com/")
        if index < 0:
            return None
        candidate = trimmed[index + len("github.com/"):]

    candidate = candidate.strip("/")
    if candidate.lower().endswith(".git"):
        candidate = candidate[:-4]

    segments = [s for s in candidate.split("/") if s]
    if len(segments) < 2:
        return None
    return f"{segments[0]}/{segments[1]}"


def collect_repo_links(repo_path: Path) -> list[RepoLink]:
    """GitHub repositories linked from remotes first, then submodules, de-duplicated."""
    links: dict[str, RepoLink] = {}
    sources = [(url, False) for url in get_remote_urls(repo_path)]
    sources += [(url, True) for url in get_submodule_urls(repo_path)]

    for url, is_submodule in sources:
        slug = parse_github_slug(url)
        if slug and slug.lower() not in links:
            links[slug.lower()] = RepoLink(slug=slug, is_submodule=is_submodule)
    return list(links.values())
