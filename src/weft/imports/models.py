"""Data models for import and include declarations.

All models use frozen dataclasses with slots so edges can be hashed,
compared, and collected into sets.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from weft.constants import SECTION_SEPARATOR

__all__ = [
    "DirectiveKind",
    "EdgeOrigin",
    "ImportDirective",
    "ImportEdge",
    "ImportSpec",
    "split_section",
]


class DirectiveKind(str, Enum):
    """Spelling of a body directive.

    Values:
        INCLUDE: ``@include path`` / ``@include? path``
        IMPORT_LEGACY: ``@import path`` / ``@import? path`` (deprecated)
        IMPORT_TEMPLATE: ``{{#import path}}`` / ``{{#import? path}}``
    """

    INCLUDE = "include"
    IMPORT_LEGACY = "import_legacy"
    IMPORT_TEMPLATE = "import_template"


class EdgeOrigin(str, Enum):
    """Where an import edge was declared."""

    FRONTMATTER = "frontmatter"
    BODY = "body"


def split_section(path: str) -> tuple[str, str]:
    """Split ``file.md#Section`` into ``("file.md", "Section")``.

    Only the first ``#`` separates; a path without one has an empty section.
    """
    file_path, _, section = path.partition(SECTION_SEPARATOR)
    return file_path, section


@dataclass(frozen=True, slots=True)
class ImportSpec:
    """One entry of a front matter ``imports`` list.

    The list accepts two shapes, a plain path string or a ``{path, inputs}``
    object. Both decode to this single type at the parsing boundary.

    Attributes:
        path: Import path exactly as declared.
        inputs: Input bindings of the object form, or None for the string form.
    """

    path: str
    inputs: Mapping[str, Any] | None = field(default=None, hash=False)

    @classmethod
    def from_value(cls, value: Any) -> ImportSpec | None:
        """Decode one ``imports`` entry, returning None for unsupported shapes."""
        if isinstance(value, str):
            return cls(path=value)
        if isinstance(value, Mapping):
            path = value.get("path")
            if not isinstance(path, str):
                return None
            inputs = value.get("inputs")
            return cls(
                path=path,
                inputs=dict(inputs) if isinstance(inputs, Mapping) else None,
            )
        return None

    def with_path(self, path: str) -> ImportSpec:
        return ImportSpec(path=path, inputs=self.inputs)

    def to_value(self) -> str | dict[str, Any]:
        """Encode back into the shape it was declared with."""
        if self.inputs is None:
            return self.path
        return {"path": self.path, "inputs": dict(self.inputs)}


@dataclass(frozen=True, slots=True)
class ImportDirective:
    """A parsed body directive line.

    Attributes:
        path: Referenced path, possibly with a ``#section`` suffix.
        optional: True for the ``?`` forms.
        kind: Which spelling was used.
        original: The full source line.
        indent: Leading whitespace of the line.
    """

    path: str
    optional: bool
    kind: DirectiveKind
    original: str
    indent: str = ""

    @property
    def is_legacy(self) -> bool:
        return self.kind is DirectiveKind.IMPORT_LEGACY

    @property
    def file_path(self) -> str:
        return split_section(self.path)[0]

    @property
    def section(self) -> str:
        return split_section(self.path)[1]


@dataclass(frozen=True, slots=True)
class ImportEdge:
    """A declared dependency of one workflow file on another.

    ``dependency_path`` is the declared path with any section suffix removed
    and is not yet resolved against the importer's location; workflowspec
    references are kept verbatim.

    Attributes:
        importer_path: File that declares the dependency.
        dependency_path: Declared target path (section stripped).
        optional: Whether the dependency may be absent.
        section: Section name of a ``path#section`` reference, or "".
        origin: Front matter ``imports`` or body directive.
        inputs: Input bindings from the object import form.
    """

    importer_path: str
    dependency_path: str
    optional: bool = False
    section: str = ""
    origin: EdgeOrigin = EdgeOrigin.FRONTMATTER
    inputs: Mapping[str, Any] | None = field(default=None, compare=False, hash=False)
