"""Body directive grammar.

Three spellings declare the same kind of dependency from a markdown body::

    @include shared/tools.md
    @include? shared/local-overrides.md#Settings
    {{#import owner/repo/shared/tools.md@v1.2.0}}

``@import`` is accepted as a deprecated alias of ``@include``. The ``?`` form
marks the dependency optional.
"""

from __future__ import annotations

import re
from collections.abc import Iterator

from weft.imports.models import DirectiveKind, ImportDirective

__all__ = [
    "format_import_directive",
    "iter_import_directives",
    "parse_import_directive",
]

_INCLUDE_PATTERN = re.compile(
    r"^(?P<indent>\s*)@include(?P<optional>\?)?\s+(?P<path>\S.*?)\s*$"
)
_LEGACY_IMPORT_PATTERN = re.compile(
    r"^(?P<indent>\s*)@import(?P<optional>\?)?\s+(?P<path>\S.*?)\s*$"
)
_TEMPLATE_IMPORT_PATTERN = re.compile(
    r"^(?P<indent>\s*)\{\{#import(?P<optional>\?)?\s+(?P<path>\S.*?)\s*\}\}\s*$"
)

_PATTERNS: tuple[tuple[re.Pattern[str], DirectiveKind], ...] = (
    (_TEMPLATE_IMPORT_PATTERN, DirectiveKind.IMPORT_TEMPLATE),
    (_INCLUDE_PATTERN, DirectiveKind.INCLUDE),
    (_LEGACY_IMPORT_PATTERN, DirectiveKind.IMPORT_LEGACY),
)


def parse_import_directive(line: str) -> ImportDirective | None:
    """Parse one line as an include/import directive.

    Args:
        line: A single line of markdown, without its newline.

    Returns:
        The parsed directive, or None if the line is not a directive.

    Example:
        >>> d = parse_import_directive("  @include? shared/a.md#Tools ")
        >>> (d.path, d.optional, d.file_path, d.section)
        ('shared/a.md#Tools', True, 'shared/a.md', 'Tools')
    """
    for pattern, kind in _PATTERNS:
        match = pattern.match(line)
        if match:
            return ImportDirective(
                path=match.group("path"),
                optional=match.group("optional") == "?",
                kind=kind,
                original=line,
                indent=match.group("indent"),
            )
    return None


def iter_import_directives(text: str) -> Iterator[ImportDirective]:
    """Yield every directive in ``text`` in line order."""
    for line in text.split("\n"):
        directive = parse_import_directive(line)
        if directive is not None:
            yield directive


def format_import_directive(path: str, optional: bool, indent: str = "") -> str:
    """Render the canonical ``{{#import path}}`` form of a directive."""
    marker = "?" if optional else ""
    return f"{indent}{{{{#import{marker} {path}}}}}"
