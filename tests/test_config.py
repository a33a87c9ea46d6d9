"""Tests for repolist.config."""

from __future__ import annotations

from pathlib import Path

import pytest

from repolist.config import RepoListConfig, load_config
from repolist.errors import ConfigError, MissingTokenError


def test_load_config_requires_token(tmp_path: Path) -> None:
    with pytest.raises(MissingTokenError, match="Please include a GITHUB_TOKEN env var."):
        load_config(tmp_path, env={})


def test_load_config_rejects_blank_token(tmp_path: Path) -> None:
    with pytest.raises(MissingTokenError):
        load_config(tmp_path, env={"GITHUB_TOKEN": "  "})


def test_missing_token_is_reported_before_reading_config(tmp_path: Path) -> None:
    (tmp_path / ".repolist.yml").write_text("- not: a mapping\n", encoding="utf-8")
    with pytest.raises(MissingTokenError):
        load_config(tmp_path, env={})


def test_load_config_returns_defaults_when_file_missing(tmp_path: Path) -> None:
    config = load_config(tmp_path, env={"GITHUB_TOKEN": "abc"})

    assert isinstance(config, RepoListConfig)
    assert config.token == "abc"
    assert config.root == tmp_path.resolve()
    assert config.api_base_url == "https://api.github.com"
    assert config.per_page == 100
    assert config.install_command == "npm i"
    assert config.template_path == tmp_path.resolve() / "bin" / "README.mustache"
    assert config.libraries_path == tmp_path.resolve() / "libraries.json"
    assert config.readme_path == tmp_path.resolve() / "README.md"
    assert config.search_query == (
        "nodejs in:.repo-metadata.json org:googleapis is:public archived:false"
    )


def test_load_config_reads_yaml_overrides(tmp_path: Path) -> None:
    (tmp_path / ".repolist.yml").write_text(
        """
organization: example-org
ecosystem: python
install_command: pip install
per_page: 50
request_timeout: 12
paths:
  template: templates/README.tmpl
  readme: docs/README.md
""",
        encoding="utf-8",
    )

    config = load_config(tmp_path, env={"GITHUB_TOKEN": "abc"})

    root = tmp_path.resolve()
    assert config.organization == "example-org"
    assert config.ecosystem == "python"
    assert config.install_command == "pip install"
    assert config.per_page == 50
    assert config.request_timeout == pytest.approx(12.0)
    assert config.template_path == root / "templates" / "README.tmpl"
    assert config.readme_path == root / "docs" / "README.md"
    assert config.libraries_path == root / "libraries.json"
    assert config.search_query.startswith("python in:.repo-metadata.json org:example-org ")


def test_load_config_rejects_non_mapping(tmp_path: Path) -> None:
    (tmp_path / ".repolist.yml").write_text("- one\n- two\n", encoding="utf-8")
    with pytest.raises(ConfigError, match="mapping"):
        load_config(tmp_path, env={"GITHUB_TOKEN": "abc"})


def test_load_config_rejects_invalid_yaml(tmp_path: Path) -> None:
    (tmp_path / ".repolist.yml").write_text("organization: [unclosed\n", encoding="utf-8")
    with pytest.raises(ConfigError, match="Failed to parse"):
        load_config(tmp_path, env={"GITHUB_TOKEN": "abc"})


def test_load_config_rejects_out_of_range_page_size(tmp_path: Path) -> None:
    (tmp_path / ".repolist.yml").write_text("per_page: 500\n", encoding="utf-8")
    with pytest.raises(ConfigError, match="per_page"):
        load_config(tmp_path, env={"GITHUB_TOKEN": "abc"})
