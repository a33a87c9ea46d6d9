"""README table generation from collected repository metadata."""

from __future__ import annotations

import json
import re
import unicodedata
from pathlib import Path
from typing import Any, Dict, List, Mapping, Protocol, Sequence, Tuple

from .errors import TemplateError
from .logging import CROSS, TICK, get_logger

SUPPORT_SUFFIX = "docs/getting-support"
STACKDRIVER_SUPPORT_URL = "https://cloud.google.com/stackdriver/docs/getting-support"

_NAME_PREFIX = re.compile(r"^(?:Google )?Cloud ")
_TRAILING_SLASHES = re.compile(r"/*\Z")
_DOCS_TAIL = re.compile(r"(?:docs/.*)?\Z")

ROW_TEMPLATE = (
    "| [{name_pretty}](https://github.com/{repo}) "
    "| [:notebook:]({client_documentation}) "
    "| `{install_command} {distribution_name}` "
    "| [enable](https://console.cloud.google.com/flows/enableapi?apiid={api_id}) "
    "| {billing} |\n"
)

logger = get_logger("readme")


class Prober(Protocol):
    def exists(self, url: str) -> bool:
        ...


def normalize_name(name: str) -> str:
    """Drop a leading ``Cloud `` or ``Google Cloud `` from a product name."""
    return _NAME_PREFIX.sub("", name, count=1)


def derive_support_url(product_documentation: str) -> str:
    """Point a product documentation URL at its ``docs/getting-support`` page.

    ``https://cloud.google.com/container-registry/docs/container-analysis``
    becomes ``https://cloud.google.com/container-registry/docs/getting-support``;
    a URL without ``docs/`` gets the suffix appended.
    """
    url = _TRAILING_SLASHES.sub("/", product_documentation, count=1)
    return _DOCS_TAIL.sub(SUPPORT_SUFFIX, url, count=1)


def resolve_support_url(metadata: Mapping[str, Any], prober: Prober) -> str:
    """Return the support page for ``metadata``, falling back to its product docs."""
    product_documentation = metadata["product_documentation"]
    if metadata.get("name_pretty", "").lower().strip().startswith("stackdriver"):
        # every Stackdriver product shares one support page
        return STACKDRIVER_SUPPORT_URL
    candidate = derive_support_url(product_documentation)
    if prober.exists(candidate):
        return candidate
    logger.debug("No support page at %s, using %s", candidate, product_documentation)
    return product_documentation


def collation_key(name: str) -> Tuple[str, str, str]:
    """Sort key approximating locale collation.

    Compares ignoring case and accents first, then accents, then case with
    lowercase ahead of uppercase. Characters are otherwise ordered by code
    point, so ASCII punctuation such as ``:;<=>?@`` sorts after digits and
    ``{|}~`` after letters, unlike ICU where punctuation precedes both.
    """
    decomposed = unicodedata.normalize("NFKD", name)
    base = "".join(char for char in decomposed if not unicodedata.combining(char))
    return base.casefold(), decomposed.casefold(), name.swapcase()


def select_libraries(
    repo_metadata: Mapping[str, Any], prober: Prober
) -> List[Tuple[str, Dict[str, Any]]]:
    """Select listed libraries, normalize them in place, and sort them by name.

    Returns ``(repo, metadata)`` pairs so rows can link to the repository the
    metadata was read from without adding fields to the record.
    """
    libraries: List[Tuple[str, Dict[str, Any]]] = []
    for repo, metadata in repo_metadata.items():
        if not isinstance(metadata, dict) or not metadata.get("api_id"):
            logger.debug("Skipping %s: no api_id", repo)
            continue

        metadata["name_pretty"] = normalize_name(metadata.get("name_pretty", ""))
        if metadata.get("product_documentation"):
            metadata["support_documentation"] = resolve_support_url(metadata, prober)

        libraries.append((repo, metadata))

    libraries.sort(key=lambda entry: collation_key(entry[1]["name_pretty"]))
    return libraries


def build_libraries(repo_metadata: Mapping[str, Any], prober: Prober) -> List[Dict[str, Any]]:
    """Like :func:`select_libraries`, without the repository identifiers."""
    return [metadata for _, metadata in select_libraries(repo_metadata, prober)]


def render_row(
    library: Mapping[str, Any], install_command: str = "npm i", *, repo: str | None = None
) -> str:
    return ROW_TEMPLATE.format(
        name_pretty=library["name_pretty"],
        repo=library.get("repo") or repo,
        client_documentation=library.get("client_documentation"),
        install_command=install_command,
        distribution_name=library.get("distribution_name"),
        api_id=library["api_id"],
        billing=CROSS if library.get("requires_billing") else TICK,
    )


def render_table(
    libraries: Sequence[Tuple[str, Mapping[str, Any]]], install_command: str = "npm i"
) -> str:
    """Render one row per ``(repo, metadata)`` pair."""
    return "".join(
        render_row(library, install_command, repo=repo) for repo, library in libraries
    )


def _require_placeholder(template: str, placeholder: str) -> None:
    if placeholder not in template:
        raise TemplateError(f"Template does not contain the {placeholder} placeholder")


def render_readme(template: str, table: str, placeholder: str = "{{libraries}}") -> str:
    """Substitute ``table`` for the first ``placeholder`` in ``template``."""
    _require_placeholder(template, placeholder)
    return template.replace(placeholder, table, 1)


def write_libraries_json(libraries: Sequence[Mapping[str, Any]], path: Path) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(list(libraries), indent=2, ensure_ascii=False), encoding="utf-8")
    return path


def generate_readme(
    repo_metadata: Mapping[str, Any],
    prober: Prober,
    *,
    template_path: Path,
    libraries_path: Path,
    readme_path: Path,
    install_command: str = "npm i",
    placeholder: str = "{{libraries}}",
) -> List[Dict[str, Any]]:
    """Write the libraries JSON and the rendered README; return the listed libraries."""
    try:
        template = template_path.read_text(encoding="utf-8")
    except FileNotFoundError as exc:
        raise TemplateError(f"README template not found at {template_path}") from exc
    _require_placeholder(template, placeholder)

    entries = select_libraries(repo_metadata, prober)
    libraries = [metadata for _, metadata in entries]
    write_libraries_json(libraries, libraries_path)
    logger.debug("Wrote %d libraries to %s", len(libraries), libraries_path)

    readme = render_readme(template, render_table(entries, install_command), placeholder)
    readme_path.parent.mkdir(parents=True, exist_ok=True)
    readme_path.write_text(readme, encoding="utf-8")
    return libraries


__all__ = [
    "STACKDRIVER_SUPPORT_URL",
    "build_libraries",
    "collation_key",
    "derive_support_url",
    "generate_readme",
    "normalize_name",
    "render_readme",
    "render_row",
    "render_table",
    "resolve_support_url",
    "select_libraries",
    "write_libraries_json",
]
