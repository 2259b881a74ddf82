"""Jekyll front matter for generated documentation pages."""

import json
import pathlib
from dataclasses import dataclass
from typing import Mapping, Optional

from .constants import (
    ORDER_DIRECTIVE,
    PARENT_DIRECTIVE,
    ROOT_PARENT,
    SECTION_INDEX_NAMES,
    TITLE_DIRECTIVE,
)

# Characters that change the meaning of a plain YAML scalar when leading
_YAML_INDICATORS = set("-?:,[]{}#&*!|>'\"%@`")


def _yaml_scalar(value: Optional[str]) -> str:
    if value is None:
        return ""
    if (
        value != value.strip()
        or (value and value[0] in _YAML_INDICATORS)
        or ": " in value
        or " #" in value
        or value.endswith(":")
    ):
        return json.dumps(value, ensure_ascii=False)
    return value


def is_section_index(source_path: str) -> bool:
    """Return True for sources named ``index`` or ``home``."""
    return pathlib.PurePosixPath(source_path).stem in SECTION_INDEX_NAMES


@dataclass(frozen=True)
class PageHeader:
    source_path: str
    title: Optional[str]
    parent: Optional[str]
    nav_order: Optional[str]
    has_children: bool

    def render(self) -> str:
        lines = [
            "---",
            "# File generated by guidegen. Do not edit.",
            f"# Edit '{self.source_path}' instead.",
            "layout: default",
            f"title: {_yaml_scalar(self.title)}",
            f"parent: {_yaml_scalar(self.parent)}",
            f"nav_order: {_yaml_scalar(self.nav_order)}",
            f"has_children: {'true' if self.has_children else 'false'}",
            "---",
        ]
        return "\n".join(lines) + "\n\n"


def build_page_header(source_path: str, directives: Mapping[str, str]) -> PageHeader:
    """Build the header for the page generated from ``source_path``.

    Args:
        source_path: Source location as it should be cited to editors
        directives: File directives found by the parser

    Section index pages always hang off the site root and have children,
    whatever their ParentTitle directive says.
    """
    section_index = is_section_index(source_path)
    # A bare "~" is YAML null, which is what Jekyll expects for top level pages
    parent = ROOT_PARENT if section_index else directives.get(PARENT_DIRECTIVE)
    return PageHeader(
        source_path=source_path,
        title=directives.get(TITLE_DIRECTIVE),
        parent=parent,
        nav_order=directives.get(ORDER_DIRECTIVE),
        has_children=section_index,
    )
