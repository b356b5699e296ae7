"""Runtime settings for a primer run.

Settings are resolved once at startup and passed explicitly through
the pipeline. Nothing in the package reads the environment afterwards.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field, replace
from pathlib import Path

DEFAULT_CACHE_PATH = Path.home() / ".agent-primer" / "nuget-cache.txt"
NUGET_TIMEOUT = 10.0  # seconds per package lookup
GITHUB_TIMEOUT = 5.0  # seconds per repository lookup
USER_AGENT = "AgentPrimer/1.0"
LARGEST_FILE_COUNT = 5

CACHE_ENV_VAR = "AGENT_PRIMER_CACHE"
OFFLINE_ENV_VAR = "AGENT_PRIMER_OFFLINE"


@dataclass(frozen=True)
class Settings:
    """Configuration for a single analysis run."""

    cache_path: Path = field(default_factory=lambda: DEFAULT_CACHE_PATH)
    nuget_timeout: float = NUGET_TIMEOUT
    github_timeout: float = GITHUB_TIMEOUT
    user_agent: str = USER_AGENT
    offline: bool = False
    largest_file_count: int = LARGEST_FILE_COUNT

    @classmethod
    def from_env(cls, environ: dict[str, str] | None = None) -> Settings:
        """Build settings from environment variables, falling back to defaults."""
        env = os.environ if environ is None else environ

        cache = env.get(CACHE_ENV_VAR, "").strip()
        offline = env.get(OFFLINE_ENV_VAR, "").strip().lower() in ("1", "true", "yes")

        return cls(
            cache_path=Path(cache).expanduser() if cache else DEFAULT_CACHE_PATH,
            offline=offline,
        )

    def with_overrides(self, **changes) -> Settings:
        """Return a copy with CLI-level overrides applied (None values are ignored)."""
        return replace(self, **{k: v for k, v in changes.items() if v is not None})
