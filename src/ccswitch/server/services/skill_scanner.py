"""Discovers skills in GitHub repositories through the contents API."""

from __future__ import annotations

import base64
import binascii
import logging
from typing import Any

import httpx

from ccswitch.data.models.skill import SkillsRepo
from ccswitch.server.utils.skill_parser import (
    description_from_readme,
    description_from_skill_md,
)

logger = logging.getLogger(__name__)

GITHUB_API_URL = "https://api.github.com"


class SkillScanError(Exception):
    """Raised when a repository listing cannot be fetched."""

    pass


class SkillScanner:
    """Lists skill directories of a repository and looks up their descriptions."""

    def __init__(
        self,
        client: httpx.AsyncClient | None = None,
        base_url: str = GITHUB_API_URL,
        timeout: float = 15.0,
    ) -> None:
        """
        Initialize the scanner.

        Args:
            client: HTTP client to use. One is created (and owned) when omitted.
            base_url: GitHub API root.
            timeout: Request timeout in seconds for an owned client.
        """
        self.base_url = base_url.rstrip("/")
        self._owns_client = client is None
        self._client = client or httpx.AsyncClient(
            timeout=timeout,
            headers={"Accept": "application/vnd.github+json"},
        )

    def _contents_url(self, repo: SkillsRepo, path: str) -> str:
        return f"{self.base_url}/repos/{repo.owner}/{repo.repo}/contents/{path}"

    async def list_skill_dirs(self, repo: SkillsRepo) -> list[dict[str, Any]]:
        """
        List the directory entries under the repository's skills path.

        Raises:
            SkillScanError: If the path is missing or the API call fails
        """
        url = self._contents_url(repo, (repo.subdirectory or "").strip("/"))
        try:
            response = await self._client.get(url, params={"ref": repo.branch})
        except httpx.RequestError as e:
            raise SkillScanError(f"GitHub request failed: {e!s}") from e

        if response.status_code == 404:
            raise SkillScanError(
                f"Path not found in {repo.full_name}; check the subdirectory setting"
            )
        if response.is_error:
            raise SkillScanError(f"GitHub API error: {response.status_code}")

        items = response.json()
        if not isinstance(items, list):
            return []
        return [item for item in items if isinstance(item, dict) and item.get("type") == "dir"]

    async def _fetch_text(self, repo: SkillsRepo, path: str) -> str | None:
        response = await self._client.get(
            self._contents_url(repo, path), params={"ref": repo.branch}
        )
        if response.is_error:
            return None
        content = response.json().get("content")
        if not content:
            return None
        return base64.b64decode(content).decode("utf-8", errors="replace")

    async def describe(self, repo: SkillsRepo, dir_path: str) -> str | None:
        """
        Find a description for a skill directory.

        Prefers the SKILL.md frontmatter and falls back to the README.
        Lookup failures yield None.
        """
        try:
            skill_md = await self._fetch_text(repo, f"{dir_path}/SKILL.md")
            if skill_md:
                description = description_from_skill_md(skill_md)
                if description:
                    return description

            readme = await self._fetch_text(repo, f"{dir_path}/README.md")
            if readme:
                return description_from_readme(readme)
        except (httpx.HTTPError, ValueError, binascii.Error) as e:
            logger.warning(f"Could not read description for {repo.full_name}/{dir_path}: {e}")
        return None

    async def close(self) -> None:
        """Close the HTTP client if this scanner created it."""
        if self._owns_client:
            await self._client.aclose()

    async def __aenter__(self) -> SkillScanner:
        return self

    async def __aexit__(self, *args: Any) -> None:
        await self.close()
