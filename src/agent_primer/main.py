"""Agent Primer CLI - repository snapshot for AI agent context files.

Usage:
    agent-primer                 # snapshot of the enclosing git repository
    agent-primer --agent         # Markdown for AGENTS.md / CLAUDE.md
    agent-primer --json --offline
"""

from __future__ import annotations

from contextlib import nullcontext
from pathlib import Path

import click
from rich.console import Console

from . import __version__
from .cache import PackageCache
from .config import Settings
from .logging import logger, set_verbose
from .registry import RegistryClient
from .render import render_console, render_json, render_markdown
from .report import build_report
from .repository import PrimerError, collect_repo_links, find_git_root, list_tracked_files

console = Console()


@click.command(context_settings={"help_option_names": ["-h", "--help"]})
@click.option("--agent", "-a", is_flag=True, help="Emit agent-oriented Markdown instead of the console snapshot")
@click.option("--json", "as_json", is_flag=True, help="Emit the report as JSON")
@click.option("--offline", is_flag=True, help="Skip NuGet and GitHub lookups (cached descriptions only)")
@click.option("--path", "-p", "start", default=".", type=click.Path(file_okay=False), help="Directory to start the repository search from")
@click.option("--output", "-o", default=None, type=click.Path(dir_okay=False), help="Write Markdown/JSON output to a file")
@click.option("--verbose", "-v", is_flag=True, help="Log progress and lookups to stderr")
@click.version_option(version=__version__)
def cli(agent: bool, as_json: bool, offline: bool, start: str, output: str | None, verbose: bool):
    """Summarize the enclosing git repository for an AI coding agent.

    Reports languages, NuGet packages, test/mocking/UI preferences, the
    internal project graph, localization, largest files and linked
    GitHub repositories.
    """
    if agent and as_json:
        raise click.UsageError("--agent and --json cannot be combined.")
    if output and not (agent or as_json):
        raise click.UsageError("--output requires --agent or --json.")

    set_verbose(verbose)
    settings = Settings.from_env().with_overrides(offline=True if offline else None)

    try:
        repo_path = find_git_root(start)
        tracked_files = list_tracked_files(repo_path)
    except PrimerError as e:
        raise click.ClickException(str(e))

    links = [] if settings.offline else collect_repo_links(repo_path)
    logger.info("Analyzing %s", repo_path)

    client_ctx = nullcontext() if settings.offline else RegistryClient(settings)
    with PackageCache(settings.cache_path) as cache, client_ctx as client:
        report = build_report(repo_path, tracked_files, settings, cache, client, links)

    if not (agent or as_json):
        render_console(report, console)
        return

    text = render_json(report) if as_json else render_markdown(report)
    if output:
        Path(output).write_text(text if text.endswith("\n") else text + "\n", encoding="utf-8")
        click.echo(f"Output written to {output}", err=True)
    else:
        click.echo(text)


if __name__ == "__main__":
    cli()
