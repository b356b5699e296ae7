"""Remote metadata lookups: NuGet package search and GitHub repositories.

Every lookup is a single request with a fixed timeout. Failures of any
kind (status, transport, timeout, malformed payload) are logged and
reported as a miss. Nothing is retried within a run.
"""

from __future__ import annotations

from typing import Any

import httpx

from .config import Settings
from .logging import logger

NUGET_SEARCH_URL = "https://azuresearch-usnc.nuget.org/query"
GITHUB_API_URL = "https://api.github.com"
DESCRIPTION_UNAVAILABLE = "Description unavailable."


def _first_line(text: str | None) -> str:
    if not text:
        return ""
    lines = text.strip().splitlines()
    return lines[0].strip() if lines else ""


class RegistryClient:
    """Thin httpx wrapper for the package registry and GitHub APIs."""

    def __init__(self, settings: Settings | None = None):
        self.settings = settings or Settings()
        self._client = httpx.Client(
            headers={"User-Agent": self.settings.user_agent},
            follow_redirects=True,
        )

    def __enter__(self) -> RegistryClient:
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def close(self) -> None:
        self._client.close()

    def _get_json(self, url: str, timeout: float, params: dict[str, str] | None = None) -> Any:
        resp = self._client.get(url, params=params, timeout=timeout)
        if resp.status_code != 200:
            logger.debug("GET %s returned %d", url, resp.status_code)
            return None
        return resp.json()

    def nuget_description(self, package_id: str) -> str:
        """First line of a package's nuget.org description, or "" when unavailable."""
        params = {
            "q": f"packageid:{package_id}",
            "prerelease": "false",
            "semVerLevel": "2.0.0",
        }
        try:
            data = self._get_json(NUGET_SEARCH_URL, self.settings.nuget_timeout, params)
        except httpx.HTTPError as e:
            logger.warning("Failed to retrieve metadata for '%s': %s", package_id, e)
            return ""
        except ValueError as e:
            logger.warning("Failed to parse metadata for '%s': %s", package_id, e)
            return ""

        if not isinstance(data, dict):
            return ""

        for entry in data.get("data") or []:
            if not isinstance(entry, dict):
                continue
            if str(entry.get("id", "")).lower() != package_id.lower():
                continue
            return _first_line(entry.get("description"))
        return ""

    def github_repository(self, slug: str) -> tuple[str, str] | None:
        """(html url, one-line description) for ``owner/repo``, or None on failure."""
        try:
            data = self._get_json(f"{GITHUB_API_URL}/repos/{slug}", self.settings.github_timeout)
        except httpx.HTTPError as e:
            logger.warning("Failed to retrieve GitHub metadata for '%s': %s", slug, e)
            return None
        except ValueError as e:
            logger.warning("Failed to parse GitHub metadata for '%s': %s", slug, e)
            return None

        if not isinstance(data, dict):
            return None

        url = data.get("html_url")
        if not url:
            full_name = data.get("full_name")
            url = f"https://github.com/{full_name or slug}"

        description = _first_line(data.get("description")) or DESCRIPTION_UNAVAILABLE
        return url, description
