"""Repository discovery through the GitHub search API."""

from __future__ import annotations

from typing import Dict, List

import httpx

from .errors import DiscoveryError
from .github import GitHubClient
from .logging import get_logger

logger = get_logger("discovery")


def discover_repositories(client: GitHubClient, query: str, *, per_page: int = 100) -> List[str]:
    """Return the ``owner/name`` of every repository matching ``query``.

    Pages are followed until the response carries no ``next`` link. Names keep
    the order in which they were first seen.
    """
    seen: Dict[str, None] = {}
    logger.debug("Searching repositories: %s", query)
    try:
        for items in client.iter_search_pages(query, per_page=per_page):
            for item in items:
                seen.setdefault(item["full_name"], None)
    except httpx.HTTPStatusError as exc:
        raise DiscoveryError(
            f"Repository search failed with status {exc.response.status_code}: {exc}"
        ) from exc
    except httpx.HTTPError as exc:
        raise DiscoveryError(f"Repository search failed: {exc}") from exc
    return list(seen)


__all__ = ["discover_repositories"]
