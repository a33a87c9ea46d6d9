from __future__ import annotations

import logging
from pathlib import Path

import httpx
import pytest

from repolist.config import RepoListConfig
from repolist.github import GitHubClient, UrlProber
from tests._fixtures.fake_github import FakeGitHub

TEMPLATE = "# Libraries\n\n| Library | Docs |\n| --- | --- |\n{{libraries}}\nfooter\n"


@pytest.fixture(autouse=True)
def _reset_repolist_logger():
    """Drop handlers the CLI installs so later tests do not write to closed streams."""
    yield
    logger = logging.getLogger("repolist")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
    logger.propagate = True


@pytest.fixture
def fake_github() -> FakeGitHub:
    """Provide an empty in-memory GitHub API."""
    return FakeGitHub()


@pytest.fixture
def github_client(fake_github: FakeGitHub):
    with GitHubClient("test-token", transport=fake_github.transport()) as client:
        yield client


@pytest.fixture
def probed_urls() -> list[str]:
    return []


@pytest.fixture
def prober(probed_urls: list[str]):
    """Prober whose HEAD requests succeed unless the URL path contains 'missing'."""

    def handle(request: httpx.Request) -> httpx.Response:
        probed_urls.append(str(request.url))
        status = 404 if "missing" in request.url.path else 200
        return httpx.Response(status)

    with UrlProber(transport=httpx.MockTransport(handle)) as url_prober:
        yield url_prober


@pytest.fixture
def config(tmp_path: Path) -> RepoListConfig:
    template = tmp_path / "bin" / "README.mustache"
    template.parent.mkdir()
    template.write_text(TEMPLATE, encoding="utf-8")
    return RepoListConfig(root=tmp_path, token="test-token")
