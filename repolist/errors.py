"""Exception hierarchy for repolist runs."""

from __future__ import annotations


class RepoListError(RuntimeError):
    """Base class for failures that abort a run."""


class ConfigError(RepoListError):
    """Raised when the configuration cannot be loaded."""


class MissingTokenError(ConfigError):
    """Raised when no GitHub token is available at startup."""

    def __init__(self, variable: str = "GITHUB_TOKEN") -> None:
        super().__init__(f"Please include a {variable} env var.")
        self.variable = variable


class DiscoveryError(RepoListError):
    """Raised when the repository search fails."""


class MetadataError(RepoListError):
    """Raised when a repository's metadata file cannot be fetched or parsed."""

    def __init__(self, repo: str, message: str) -> None:
        super().__init__(f"{repo}: {message}")
        self.repo = repo


class TemplateError(RepoListError):
    """Raised when the README template is unusable."""


__all__ = [
    "ConfigError",
    "DiscoveryError",
    "MetadataError",
    "MissingTokenError",
    "RepoListError",
    "TemplateError",
]
