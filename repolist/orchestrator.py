"""Pipeline orchestration: discovery, metadata collection, README generation."""

from __future__ import annotations

from .config import RepoListConfig
from .discovery import discover_repositories
from .github import GitHubClient, UrlProber
from .logging import checkpoint, get_logger
from .metadata import collect_repo_metadata
from .models import GenerationResult
from .readme import generate_readme


class Orchestrator:
    """Runs the three listing stages in order; any failure aborts the run."""

    def __init__(
        self,
        config: RepoListConfig,
        *,
        github: GitHubClient | None = None,
        prober: UrlProber | None = None,
    ) -> None:
        self.config = config
        self.logger = get_logger("orchestrator")
        self._owns_github = github is None
        self._owns_prober = prober is None
        self.github = github or GitHubClient(
            config.token,
            base_url=config.api_base_url,
            timeout=config.request_timeout,
        )
        self.prober = prober or UrlProber(timeout=config.request_timeout)

    def __enter__(self) -> "Orchestrator":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def close(self) -> None:
        """Close the HTTP clients this orchestrator created."""
        if self._owns_github:
            self.github.close()
        if self._owns_prober:
            self.prober.close()

    def run(self) -> GenerationResult:
        config = self.config
        self.logger.debug("Search query: %s", config.search_query)
        repos = discover_repositories(self.github, config.search_query, per_page=config.per_page)
        checkpoint(
            f"Discovered {len(repos)} {config.ecosystem} repos with metadata",
            logger=self.logger,
        )

        repo_metadata = collect_repo_metadata(self.github, repos, path=config.metadata_path)

        libraries = generate_readme(
            repo_metadata,
            self.prober,
            template_path=config.template_path,
            libraries_path=config.libraries_path,
            readme_path=config.readme_path,
            install_command=config.install_command,
            placeholder=config.placeholder,
        )
        self.logger.info("Listed %d libraries in %s", len(libraries), config.readme_path)
        return GenerationResult(
            repos=repos,
            repo_metadata=repo_metadata,
            libraries=libraries,
            libraries_path=config.libraries_path,
            readme_path=config.readme_path,
        )


__all__ = ["Orchestrator"]
