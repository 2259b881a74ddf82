"""Data model shared by the parser and the pipeline."""

import pathlib
from dataclasses import dataclass, field
from typing import Dict, List, Union

from .paths import dir_string, relative_dir


@dataclass(frozen=True)
class SourceUnit:
    """One guide source file located under the sources root."""

    path: pathlib.Path
    rel_path: pathlib.PurePosixPath
    rel_dir: pathlib.PurePosixPath
    name: str

    @classmethod
    def from_path(cls, path: pathlib.Path, root: pathlib.Path) -> "SourceUnit":
        rel = pathlib.PurePath(path).relative_to(root)
        return cls(
            path=path.absolute(),
            rel_path=pathlib.PurePosixPath(*rel.parts),
            rel_dir=relative_dir(root, path),
            name=path.stem,
        )

    @property
    def rel_dir_string(self) -> str:
        return dir_string(self.rel_dir)


@dataclass
class ParseResult:
    """What the parser extracts from one source file."""

    directives: Dict[str, str] = field(default_factory=dict)
    doc: str = ""
    runnable: List[str] = field(default_factory=list)
    exportable: List[str] = field(default_factory=list)


@dataclass(frozen=True)
class Generated:
    """A source whose artifacts were all written."""

    source: SourceUnit
    written: List[pathlib.Path]


@dataclass(frozen=True)
class Skipped:
    """A source that was reported and left out of the run."""

    source: SourceUnit
    reason: str


FileOutcome = Union[Generated, Skipped]


@dataclass
class GenerationReport:
    outcomes: List[FileOutcome] = field(default_factory=list)

    @property
    def generated(self) -> List[Generated]:
        return [o for o in self.outcomes if isinstance(o, Generated)]

    @property
    def skipped(self) -> List[Skipped]:
        return [o for o in self.outcomes if isinstance(o, Skipped)]

    @property
    def written(self) -> List[pathlib.Path]:
        return [path for o in self.generated for path in o.written]
