"""HTTP clients for the GitHub API and documentation link probes."""

from __future__ import annotations

from typing import Any, Dict, Iterator, List, Optional

import httpx

from . import __version__
from .logging import get_logger

SEARCH_REPOSITORIES_ENDPOINT = "/search/repositories"


def _client_options(
    transport: Optional[httpx.BaseTransport], timeout: Optional[float]
) -> Dict[str, Any]:
    options: Dict[str, Any] = {}
    if transport is not None:
        options["transport"] = transport
    if timeout is not None:
        options["timeout"] = timeout
    return options


class GitHubClient:
    """Authenticated GitHub REST client.

    Holds its own base URL and credential instead of relying on a shared,
    process-wide client, so several clients can coexist in one process.
    """

    def __init__(
        self,
        token: str,
        *,
        base_url: str = "https://api.github.com",
        timeout: Optional[float] = None,
        transport: Optional[httpx.BaseTransport] = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.logger = get_logger("github")
        self._client = httpx.Client(
            base_url=self.base_url,
            headers={
                "Accept": "application/vnd.github+json",
                "Authorization": f"token {token}",
                "User-Agent": f"repolist/{__version__}",
            },
            **_client_options(transport, timeout),
        )

    def __enter__(self) -> "GitHubClient":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def close(self) -> None:
        self._client.close()

    def iter_search_pages(self, query: str, *, per_page: int = 100) -> Iterator[List[Dict[str, Any]]]:
        """Yield the ``items`` of each search results page, following ``next`` links."""
        response = self._client.get(
            SEARCH_REPOSITORIES_ENDPOINT,
            params={"q": query, "per_page": per_page},
        )
        page = 1
        while True:
            response.raise_for_status()
            items = response.json().get("items", [])
            self.logger.debug("Search page %d returned %d repositories", page, len(items))
            yield items
            next_link = response.links.get("next")
            if not next_link or not next_link.get("url"):
                return
            page += 1
            response = self._client.get(next_link["url"])

    def get_contents(self, repo: str, path: str) -> Dict[str, Any]:
        """Return the contents API payload for ``path`` on the default branch of ``repo``."""
        response = self._client.get(f"/repos/{repo}/contents/{path}")
        response.raise_for_status()
        return response.json()


class UrlProber:
    """Checks whether public documentation URLs resolve."""

    def __init__(
        self,
        *,
        timeout: Optional[float] = None,
        transport: Optional[httpx.BaseTransport] = None,
    ) -> None:
        self.logger = get_logger("probe")
        self._client = httpx.Client(follow_redirects=True, **_client_options(transport, timeout))

    def __enter__(self) -> "UrlProber":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def close(self) -> None:
        self._client.close()

    def exists(self, url: str) -> bool:
        """Issue a HEAD request; only a 404 counts as missing."""
        response = self._client.head(url)
        self.logger.debug("HEAD %s -> %d", url, response.status_code)
        return response.status_code != 404


__all__ = ["GitHubClient", "SEARCH_REPOSITORIES_ENDPOINT", "UrlProber"]
