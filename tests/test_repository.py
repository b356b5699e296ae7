"""Tests for git repository inspection."""

import subprocess
from unittest.mock import patch

import pytest

from agent_primer.repository import (
    GitUnavailableError,
    RepoLink,
    RepositoryNotFoundError,
    collect_repo_links,
    find_git_root,
    list_tracked_files,
    parse_github_slug,
)


def completed(stdout="", returncode=0, stderr=""):
    return subprocess.CompletedProcess(args=["git"], returncode=returncode, stdout=stdout, stderr=stderr)


class TestFindGitRoot:
    def test_from_nested_directory(self, tmp_path):
        (tmp_path / ".git").mkdir()
        nested = tmp_path / "src" / "App"
        nested.mkdir(parents=True)
        assert find_git_root(nested) == tmp_path.resolve()

    def test_git_file_counts(self, tmp_path):
        (tmp_path / ".git").write_text("gitdir: ../.git/worktrees/x\n")
        assert find_git_root(tmp_path) == tmp_path.resolve()

    def test_not_a_repository(self, tmp_path):
        with patch("pathlib.Path.exists", return_value=False):
            with pytest.raises(RepositoryNotFoundError, match="git repository"):
                find_git_root(tmp_path)


class TestListTrackedFiles:
    @patch("agent_primer.repository.subprocess.run")
    def test_lists_files(self, mock_run, tmp_path):
        mock_run.return_value = completed("src/App.cs\r\n  README.md\n\nsub/lib.py\n")
        assert list_tracked_files(tmp_path) == ["src/App.cs", "README.md", "sub/lib.py"]
        args = mock_run.call_args[0][0]
        assert args == ["git", "ls-files", "--full-name", "--recurse-submodules"]

    @patch("agent_primer.repository.subprocess.run")
    def test_git_missing(self, mock_run, tmp_path):
        mock_run.side_effect = FileNotFoundError("git")
        with pytest.raises(GitUnavailableError):
            list_tracked_files(tmp_path)

    @patch("agent_primer.repository.subprocess.run")
    def test_nonzero_exit_is_empty(self, mock_run, tmp_path, caplog):
        mock_run.return_value = completed(returncode=128, stderr="fatal: not a git repository")
        assert list_tracked_files(tmp_path) == []
        assert "exit code 128" in caplog.text


class TestParseGithubSlug:
    @pytest.mark.parametrize(
        "url, slug",
        [
            ("https://github.com/octo/widgets.git", "octo/widgets"),
            ("https://github.com/octo/widgets", "octo/widgets"),
            ("git@github.com:octo/widgets.git", "octo/widgets"),
            ("ssh://git@github.com/octo/widgets.git", "octo/widgets"),
            ("https://user@GitHub.com/octo/widgets/tree/main", "octo/widgets"),
            ("  https://github.com/octo/widgets/  ", "octo/widgets"),
        ],
    )
    def test_github_urls(self, url, slug):
        assert parse_github_slug(url) == slug

    @pytest.mark.parametrize("url", ["", "   ", "https://gitlab.com/octo/widgets.git", "https://github.com/octo"])
    def test_not_github(self, url):
        assert parse_github_slug(url) is None


class TestCollectRepoLinks:
    @patch("agent_primer.repository.subprocess.run")
    def test_remotes_and_submodules(self, mock_run, tmp_path):
        mock_run.return_value = completed(
            "origin\thttps://github.com/octo/app.git (fetch)\n"
            "origin\thttps://github.com/octo/app.git (push)\n"
            "mirror\thttps://gitlab.com/octo/app.git (fetch)\n"
        )
        (tmp_path / ".gitmodules").write_text(
            '[submodule "lib"]\n\tpath = lib\n\turl = git@github.com:octo/lib.git\n'
            '[submodule "dup"]\n\tpath = dup\n\turl = https://github.com/Octo/App\n'
        )
        assert collect_repo_links(tmp_path) == [
            RepoLink("octo/app", is_submodule=False),
            RepoLink("octo/lib", is_submodule=True),
        ]

    @patch("agent_primer.repository.subprocess.run")
    def test_git_missing_yields_submodules_only(self, mock_run, tmp_path):
        mock_run.side_effect = FileNotFoundError("git")
        assert collect_repo_links(tmp_path) == []
