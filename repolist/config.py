"""Configuration loading for repolist (.repolist.yml plus environment)."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Mapping, Optional

import yaml

from .errors import ConfigError, MissingTokenError

CONFIG_FILENAME = ".repolist.yml"
TOKEN_ENV_VAR = "GITHUB_TOKEN"


@dataclass
class RepoListConfig:
    """Settings for one listing run."""

    root: Path
    token: str
    api_base_url: str = "https://api.github.com"
    organization: str = "googleapis"
    ecosystem: str = "nodejs"
    metadata_path: str = ".repo-metadata.json"
    per_page: int = 100
    install_command: str = "npm i"
    placeholder: str = "{{libraries}}"
    request_timeout: Optional[float] = None
    template_path: Optional[Path] = None
    libraries_path: Optional[Path] = None
    readme_path: Optional[Path] = None

    def __post_init__(self) -> None:
        if self.template_path is None:
            self.template_path = self.root / "bin" / "README.mustache"
        if self.libraries_path is None:
            self.libraries_path = self.root / "libraries.json"
        if self.readme_path is None:
            self.readme_path = self.root / "README.md"

    @property
    def search_query(self) -> str:
        """Repository search query selecting public, active repos with metadata."""
        return (
            f"{self.ecosystem} in:{self.metadata_path} org:{self.organization} "
            "is:public archived:false"
        )


def load_config(root: Path, *, env: Mapping[str, str] | None = None) -> RepoListConfig:
    """Load configuration for the run rooted at ``root``.

    The token is resolved first so a missing credential fails before the
    config file is read or any request is made.
    """
    environ = os.environ if env is None else env
    token = (environ.get(TOKEN_ENV_VAR) or "").strip()
    if not token:
        raise MissingTokenError(TOKEN_ENV_VAR)

    root = root.expanduser().resolve()
    config_file = root / CONFIG_FILENAME
    data = _read_config(config_file) if config_file.exists() else {}

    paths = _as_dict(data.get("paths"))
    kwargs: Dict[str, Any] = {}
    for key in ("api_base_url", "organization", "ecosystem", "metadata_path", "install_command"):
        value = _as_str(data.get(key))
        if value:
            kwargs[key] = value
    per_page = _as_int(data.get("per_page"))
    if per_page is not None:
        if not 1 <= per_page <= 100:
            raise ConfigError("per_page must be between 1 and 100")
        kwargs["per_page"] = per_page
    timeout = _as_float(data.get("request_timeout"))
    if timeout is not None:
        kwargs["request_timeout"] = timeout

    for key, field_name in (
        ("template", "template_path"),
        ("libraries", "libraries_path"),
        ("readme", "readme_path"),
    ):
        value = _as_str(paths.get(key))
        if value:
            kwargs[field_name] = root / value

    return RepoListConfig(root=root, token=token, **kwargs)


def _read_config(path: Path) -> Dict[str, Any]:
    text = path.read_text(encoding="utf-8")
    if not text.strip():
        return {}
    try:
        loaded = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ConfigError(f"Failed to parse {path.name}: {exc}") from exc
    if loaded is None:
        return {}
    if not isinstance(loaded, dict):
        raise ConfigError(f"{path.name} must contain a mapping at the root")
    return loaded


def _as_dict(value: Any) -> Dict[str, Any]:
    return value if isinstance(value, dict) else {}


def _as_str(value: Any) -> Optional[str]:
    return str(value) if isinstance(value, (str, int, float)) else None


def _as_float(value: Any) -> Optional[float]:
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return float(value)
    if isinstance(value, str):
        try:
            return float(value)
        except ValueError:
            return None
    return None


def _as_int(value: Any) -> Optional[int]:
    if isinstance(value, int) and not isinstance(value, bool):
        return value
    if isinstance(value, str):
        try:
            return int(value)
        except ValueError:
            return None
    return None


__all__ = ["CONFIG_FILENAME", "TOKEN_ENV_VAR", "RepoListConfig", "load_config"]
