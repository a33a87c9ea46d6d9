"""Collection of per-repository metadata files."""

from __future__ import annotations

import base64
import json
from typing import Any, Dict, Iterable

import httpx

from .errors import MetadataError
from .github import GitHubClient
from .logging import checkpoint, get_logger

logger = get_logger("metadata")


def decode_metadata(payload: Dict[str, Any]) -> Any:
    """Decode the base64 ``content`` of a contents API payload into JSON.

    Any JSON value is returned; records that are not objects are skipped when
    the listing is built.
    """
    raw = base64.b64decode(payload["content"])
    return json.loads(raw.decode("utf-8"))


def collect_repo_metadata(
    client: GitHubClient,
    repos: Iterable[str],
    *,
    path: str = ".repo-metadata.json",
) -> Dict[str, Any]:
    """Fetch ``path`` from each repository, skipping those that lack it."""
    repo_metadata: Dict[str, Any] = {}
    for repo in repos:
        try:
            payload = client.get_contents(repo, path)
        except httpx.HTTPStatusError as exc:
            if exc.response.status_code != 404:
                raise MetadataError(
                    repo, f"fetching {path} failed with status {exc.response.status_code}"
                ) from exc
            checkpoint(f"{repo} had no {path}", success=False, logger=logger)
            continue
        except httpx.HTTPError as exc:
            raise MetadataError(repo, f"fetching {path} failed: {exc}") from exc

        try:
            repo_metadata[repo] = decode_metadata(payload)
        except (KeyError, TypeError, ValueError) as exc:
            raise MetadataError(repo, f"{path} could not be decoded: {exc}") from exc
        checkpoint(f"{repo} found {path}", logger=logger)
    return repo_metadata


__all__ = ["collect_repo_metadata", "decode_metadata"]
