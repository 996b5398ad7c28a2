"""Front matter parsing and serialization for workflow markdown files.

A workflow file is UTF-8 text with an optional leading YAML block delimited
by ``---`` lines, followed by a markdown body::

    ---
    on: push
    imports:
      - shared/tools.md
    ---
    # Body

The YAML loader used here keeps ``on``/``off``/``yes``/``no`` as plain
strings. Under YAML 1.1 rules PyYAML would turn the ``on:`` trigger key into
boolean ``True``, which would corrupt every rewritten workflow.
"""

from __future__ import annotations

import re
from collections.abc import Iterable, Mapping, Sequence
from dataclasses import dataclass, field
from typing import Any

import yaml

from weft.constants import FRONTMATTER_DELIMITER, PRIORITY_WORKFLOW_FIELDS
from weft.exceptions import FrontmatterParseError

__all__ = [
    "FrontmatterResult",
    "extract_frontmatter",
    "extract_markdown",
    "find_frontmatter_end",
    "marshal_with_field_order",
    "reconstruct_workflow_file",
]

_BOOL_TAG = "tag:yaml.org,2002:bool"
_STRICT_BOOL = re.compile(r"^(?:true|True|TRUE|false|False|FALSE)$")


def _strict_bool_resolvers(
    resolvers: dict[str, list[tuple[str, re.Pattern[str]]]],
) -> dict[str, list[tuple[str, re.Pattern[str]]]]:
    return {
        first: [(tag, regexp) for tag, regexp in entries if tag != _BOOL_TAG]
        for first, entries in resolvers.items()
    }


class _FrontmatterLoader(yaml.SafeLoader):
    pass


class _FrontmatterDumper(yaml.SafeDumper):
    pass


for _cls in (_FrontmatterLoader, _FrontmatterDumper):
    _cls.yaml_implicit_resolvers = _strict_bool_resolvers(
        yaml.SafeLoader.yaml_implicit_resolvers
    )
    _cls.add_implicit_resolver(_BOOL_TAG, _STRICT_BOOL, list("tTfF"))


@dataclass(slots=True)
class FrontmatterResult:
    """Front matter map and markdown body split out of one file.

    Attributes:
        frontmatter: Parsed YAML mapping (empty when the file has none).
        markdown: Body text after the closing delimiter, unmodified.
        has_frontmatter: Whether the content opened with a delimiter line.
    """

    frontmatter: dict[str, Any] = field(default_factory=dict)
    markdown: str = ""
    has_frontmatter: bool = False


def find_frontmatter_end(lines: Sequence[str]) -> int | None:
    """Index of the closing ``---`` line, or None when there is no closed block."""
    if not lines or lines[0].strip() != FRONTMATTER_DELIMITER:
        return None
    return next(
        (i for i in range(1, len(lines)) if lines[i].strip() == FRONTMATTER_DELIMITER),
        None,
    )


def extract_frontmatter(content: str, path: str | None = None) -> FrontmatterResult:
    """Split content into its front matter mapping and markdown body.

    Content that does not start with a ``---`` line has no front matter; the
    whole text is returned as the body.

    Args:
        content: Full file content.
        path: Optional source path, used only for error messages.

    Returns:
        FrontmatterResult with the parsed mapping and body.

    Raises:
        FrontmatterParseError: If the block is never closed, is not valid
            YAML, or does not decode to a mapping.
    """
    lines = content.split("\n")
    if not lines or lines[0].strip() != FRONTMATTER_DELIMITER:
        return FrontmatterResult(frontmatter={}, markdown=content)

    end_index = find_frontmatter_end(lines)
    if end_index is None:
        raise FrontmatterParseError("frontmatter not properly closed", path=path)

    # U+00A0 breaks the YAML scanner
    yaml_text = "\n".join(lines[1:end_index]).replace("\u00a0", " ")
    try:
        loaded = yaml.load(yaml_text, Loader=_FrontmatterLoader)  # noqa: S506
    except yaml.YAMLError as e:
        raise FrontmatterParseError(f"failed to parse frontmatter: {e}", path=path) from e

    if loaded is None:
        loaded = {}
    if not isinstance(loaded, dict):
        raise FrontmatterParseError(
            f"frontmatter must be a mapping, got {type(loaded).__name__}",
            path=path,
        )

    return FrontmatterResult(
        frontmatter=loaded,
        markdown="\n".join(lines[end_index + 1 :]),
        has_frontmatter=True,
    )


def extract_markdown(content: str, path: str | None = None) -> str:
    """Return only the markdown body of ``content``."""
    return extract_frontmatter(content, path=path).markdown


def marshal_with_field_order(
    frontmatter: Mapping[str, Any],
    priority_fields: Iterable[str] = PRIORITY_WORKFLOW_FIELDS,
) -> str:
    """Serialize a front matter mapping with a fixed top-level field order.

    Priority fields come first in the given order, followed by every other
    key sorted alphabetically. Nested mappings keep their own order.

    Args:
        frontmatter: Mapping to serialize.
        priority_fields: Keys to emit first, in order.

    Returns:
        YAML text ending with a newline (empty string for an empty mapping).
    """
    if not frontmatter:
        return ""

    priority = [key for key in priority_fields if key in frontmatter]
    rest = sorted((key for key in frontmatter if key not in priority), key=str)
    ordered = {key: frontmatter[key] for key in [*priority, *rest]}

    return yaml.dump(
        ordered,
        Dumper=_FrontmatterDumper,
        sort_keys=False,
        default_flow_style=False,
        allow_unicode=True,
    )


def reconstruct_workflow_file(
    frontmatter: Mapping[str, Any],
    markdown: str,
    priority_fields: Iterable[str] = PRIORITY_WORKFLOW_FIELDS,
) -> str:
    """Rebuild a workflow file from a front matter mapping and body text.

    Args:
        frontmatter: Front matter to serialize between delimiter lines.
        markdown: Body text placed on the line after the closing delimiter,
            unmodified.
        priority_fields: Field order passed to marshal_with_field_order.

    Returns:
        The reassembled file content.
    """
    yaml_text = marshal_with_field_order(frontmatter, priority_fields).rstrip("\n")

    lines = [FRONTMATTER_DELIMITER]
    if yaml_text:
        lines.extend(yaml_text.split("\n"))
    lines.append(FRONTMATTER_DELIMITER)
    return "\n".join(lines) + "\n" + markdown
