"""Workflowspec parsing and formatting.

A workflowspec names a workflow file in another repository, optionally
pinned to a version::

    owner/repo/path/to/file.md[@ref]

where ``ref`` is a tag, branch, or 40-character commit hash. Accepted input
spellings:

- ``owner/repo/name[@ref]`` (short form, expands to ``workflows/name.md``)
- ``owner/repo/path/to/file.md[@ref]``
- ``owner/repo/files/<ref>/path/to/file.md`` (path copied from the GitHub UI)
- ``owner/repo/*[@ref]`` (every workflow in the repository)
- ``https://github.com/owner/repo/blob/<ref>/path/to/file.md``
- ``https://raw.githubusercontent.com/owner/repo/<ref>/path/to/file.md``
"""

from __future__ import annotations

import posixpath
import re
from dataclasses import dataclass
from urllib.parse import urlparse

from weft.constants import (
    DEFAULT_SPEC_WORKFLOW_DIR,
    WORKFLOW_FILE_SUFFIX,
    WORKFLOW_SPEC_VERSION_SEPARATOR,
)
from weft.exceptions import WorkflowSpecError
from weft.logging import get_logger

__all__ = [
    "RepoSpec",
    "SourceSpec",
    "WorkflowSpec",
    "build_source_string",
    "build_workflow_spec_ref",
    "is_commit_sha",
    "is_valid_github_identifier",
    "parse_repo_spec",
    "parse_source_spec",
    "parse_workflow_spec",
]

logger = get_logger(__name__)

_IDENTIFIER_PATTERN = re.compile(r"^[A-Za-z0-9][A-Za-z0-9._-]*$")
_COMMIT_SHA_PATTERN = re.compile(r"^[0-9a-fA-F]{40}$")
_GITHUB_HOSTS = frozenset({"github.com", "raw.githubusercontent.com"})
_WILDCARD = "*"


def is_valid_github_identifier(name: str) -> bool:
    """Check that ``name`` could be a GitHub owner or repository name."""
    return bool(_IDENTIFIER_PATTERN.match(name)) and name not in {".", ".."}


def is_commit_sha(version: str) -> bool:
    """Check whether a version string is a full 40-character commit hash."""
    return bool(_COMMIT_SHA_PATTERN.match(version))


def build_workflow_spec_ref(
    repo_slug: str,
    path: str,
    commit_sha: str | None = None,
    version: str | None = None,
) -> str:
    """Build ``repo_slug/path[@ref]``.

    A commit SHA takes precedence over a version tag; with neither the
    reference is unpinned.

    Example:
        >>> build_workflow_spec_ref("acme/flows", "shared/a.md", "", "v1.0.0")
        'acme/flows/shared/a.md@v1.0.0'
    """
    ref = f"{repo_slug}/{path}"
    if commit_sha:
        return f"{ref}{WORKFLOW_SPEC_VERSION_SEPARATOR}{commit_sha}"
    if version:
        return f"{ref}{WORKFLOW_SPEC_VERSION_SEPARATOR}{version}"
    return ref


def _split_version(text: str) -> tuple[str, str]:
    head, _, version = text.partition(WORKFLOW_SPEC_VERSION_SEPARATOR)
    return head, version


def _workflow_name(path: str) -> str:
    name = posixpath.basename(path)
    if name.endswith(WORKFLOW_FILE_SUFFIX):
        name = name[: -len(WORKFLOW_FILE_SUFFIX)]
    return name


@dataclass(frozen=True, slots=True)
class RepoSpec:
    """A repository with an optional version: ``owner/repo[@version]``."""

    repo_slug: str
    version: str = ""

    def __str__(self) -> str:
        if self.version:
            return f"{self.repo_slug}{WORKFLOW_SPEC_VERSION_SEPARATOR}{self.version}"
        return self.repo_slug


@dataclass(frozen=True, slots=True)
class SourceSpec:
    """A ``source:`` value recorded in an installed workflow's front matter."""

    repo: str
    path: str
    ref: str = ""


@dataclass(frozen=True, slots=True)
class WorkflowSpec:
    """A parsed workflowspec.

    Attributes:
        repo_slug: ``owner/repo``.
        workflow_path: Path of the workflow inside the repository, or ``*``.
        workflow_name: File name without the ``.md`` suffix.
        version: Tag, branch, or commit; empty when unpinned.
        is_wildcard: True for ``owner/repo/*``.
    """

    repo_slug: str
    workflow_path: str
    workflow_name: str
    version: str = ""
    is_wildcard: bool = False

    def __str__(self) -> str:
        if self.workflow_path.startswith("./"):
            return self.workflow_path
        return build_workflow_spec_ref(self.repo_slug, self.workflow_path, version=self.version)


def parse_repo_spec(text: str) -> RepoSpec:
    """Parse ``owner/repo[@version]`` or ``https://github.com/owner/repo[@version]``.

    Raises:
        WorkflowSpecError: If the repository part is not ``owner/repo``.
    """
    repo, version = _split_version(text)

    if repo.startswith(("https://github.com/", "http://github.com/")):
        parts = urlparse(repo).path.strip("/").split("/")
        if len(parts) != 2 or not all(parts):
            raise WorkflowSpecError(
                "invalid GitHub URL: must be https://github.com/owner/repo", spec=text
            )
        repo = "/".join(parts)
    else:
        parts = repo.split("/")
        if len(parts) != 2 or not all(parts):
            raise WorkflowSpecError("repository must be in format 'owner/repo'", spec=text)

    logger.debug("repo_spec_parsed", repo=repo, version=version)
    return RepoSpec(repo_slug=repo, version=version)


def parse_source_spec(text: str) -> SourceSpec:
    """Parse a ``source:`` value of the form ``owner/repo/path[@ref]``.

    Raises:
        WorkflowSpecError: If fewer than three path segments are present.
    """
    head, ref = _split_version(text)
    parts = head.split("/")
    if len(parts) < 3:
        raise WorkflowSpecError(
            "invalid source format: must be owner/repo/path[@ref]", spec=text
        )
    return SourceSpec(repo=f"{parts[0]}/{parts[1]}", path="/".join(parts[2:]), ref=ref)


def build_source_string(spec: WorkflowSpec, commit_sha: str | None = None) -> str:
    """Render the ``source:`` value recorded when a workflow is installed.

    The commit SHA, when known, replaces the spec's version so the source
    names exactly what was installed. Returns "" for an incomplete spec.
    """
    if not spec.repo_slug or not spec.workflow_path:
        return ""
    path = spec.workflow_path.removeprefix("./")
    return build_workflow_spec_ref(spec.repo_slug, path, commit_sha, spec.version)


def _parse_github_url(text: str) -> WorkflowSpec:
    parsed = urlparse(text)
    if parsed.netloc not in _GITHUB_HOSTS:
        raise WorkflowSpecError(
            "URL must be from github.com or raw.githubusercontent.com", spec=text
        )

    parts = [part for part in parsed.path.split("/") if part]
    if parsed.netloc == "github.com":
        # owner/repo/(blob|tree|raw)/<ref>/path...
        if len(parts) < 5 or parts[2] not in {"blob", "tree", "raw"}:
            raise WorkflowSpecError(
                "GitHub URL must look like https://github.com/owner/repo/blob/<ref>/path.md",
                spec=text,
            )
        owner, repo, ref, path_parts = parts[0], parts[1], parts[3], parts[4:]
    else:
        # owner/repo/[refs/(heads|tags)/]<ref>/path...
        if len(parts) >= 6 and parts[2] == "refs" and parts[3] in {"heads", "tags"}:
            owner, repo, ref, path_parts = parts[0], parts[1], parts[4], parts[5:]
        elif len(parts) >= 4:
            owner, repo, ref, path_parts = parts[0], parts[1], parts[2], parts[3:]
        else:
            raise WorkflowSpecError(
                "raw URL must look like https://raw.githubusercontent.com/owner/repo/<ref>/path.md",
                spec=text,
            )

    path = "/".join(path_parts)
    if not path.endswith(WORKFLOW_FILE_SUFFIX):
        raise WorkflowSpecError("GitHub URL must point to a .md file", spec=text)
    if not is_valid_github_identifier(owner) or not is_valid_github_identifier(repo):
        raise WorkflowSpecError(
            f"invalid GitHub URL: '{owner}/{repo}' does not look like a valid GitHub repository",
            spec=text,
        )

    return WorkflowSpec(
        repo_slug=f"{owner}/{repo}",
        workflow_path=path,
        workflow_name=_workflow_name(path),
        version=ref,
    )


def parse_workflow_spec(text: str, current_repo: str | None = None) -> WorkflowSpec:
    """Parse any accepted workflowspec spelling.

    Args:
        text: The spec to parse.
        current_repo: ``owner/repo`` of the working repository. Required for
            local ``./path.md`` specs, which are kept as-is.

    Returns:
        The parsed WorkflowSpec.

    Raises:
        WorkflowSpecError: If the spec is malformed.

    Example:
        >>> spec = parse_workflow_spec("acme/flows/triage@v2")
        >>> spec.workflow_path, spec.version
        ('workflows/triage.md', 'v2')
    """
    if text.startswith(("http://", "https://")):
        return _parse_github_url(text)

    if text.startswith("./"):
        if not text.endswith(WORKFLOW_FILE_SUFFIX):
            raise WorkflowSpecError(
                f"local workflow specification must end with '.md' extension: {text}",
                spec=text,
            )
        if not current_repo:
            raise WorkflowSpecError(
                "a local workflow specification needs the current repository", spec=text
            )
        return WorkflowSpec(
            repo_slug=current_repo, workflow_path=text, workflow_name=_workflow_name(text)
        )

    head, version = _split_version(text)
    parts = head.split("/")
    if len(parts) < 3:
        raise WorkflowSpecError(
            "workflow specification must be in format 'owner/repo/workflow-name[@version]'",
            spec=text,
        )

    owner, repo = parts[0], parts[1]
    if len(parts) >= 4 and parts[2] == "files":
        workflow_path = "/".join(parts[4:])
        version = version or parts[3]
    else:
        workflow_path = "/".join(parts[2:])

    if not owner or not repo:
        raise WorkflowSpecError(
            "invalid workflow specification: owner and repo cannot be empty", spec=text
        )
    if not is_valid_github_identifier(owner) or not is_valid_github_identifier(repo):
        raise WorkflowSpecError(
            f"invalid workflow specification: '{owner}/{repo}' "
            "does not look like a valid GitHub repository",
            spec=text,
        )

    repo_slug = f"{owner}/{repo}"
    if workflow_path == _WILDCARD:
        return WorkflowSpec(
            repo_slug=repo_slug,
            workflow_path=_WILDCARD,
            workflow_name=_WILDCARD,
            version=version,
            is_wildcard=True,
        )

    if len(parts) == 3 and not workflow_path.endswith(WORKFLOW_FILE_SUFFIX):
        workflow_path = f"{DEFAULT_SPEC_WORKFLOW_DIR}/{workflow_path}{WORKFLOW_FILE_SUFFIX}"
    elif not workflow_path.endswith(WORKFLOW_FILE_SUFFIX):
        raise WorkflowSpecError(
            f"workflow specification with path must end with '.md' extension: {workflow_path}",
            spec=text,
        )

    logger.debug(
        "workflow_spec_parsed", repo=repo_slug, path=workflow_path, version=version
    )
    return WorkflowSpec(
        repo_slug=repo_slug,
        workflow_path=workflow_path,
        workflow_name=_workflow_name(workflow_path),
        version=version,
    )
