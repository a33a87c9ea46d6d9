"""Data models shared across repolist components."""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional


@dataclass
class GenerationResult:
    """Outcome of a complete listing run."""

    repos: List[str]
    repo_metadata: Dict[str, Any]
    libraries: List[Dict[str, Any]] = field(default_factory=list)
    libraries_path: Optional[Path] = None
    readme_path: Optional[Path] = None
