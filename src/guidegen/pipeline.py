"""Generation pipeline: guide sources in, pages and examples out."""

import logging
import pathlib
from dataclasses import dataclass, field, fields
from typing import Iterable, List, Optional

from . import parser
from .constants import (
    DEFAULT_IGNORE_PATTERNS,
    DEFAULT_INCLUDE_PATTERNS,
    DOC_PAGE_SUFFIX,
    ENTRY_POINT_SUFFIX,
    SOURCE_SUFFIX,
    UNSUPPORTED_SUFFIXES,
    URL_DIRECTIVE,
)
from .errors import MissingDirectiveError, SourceStructureError, UnsupportedFormatError
from .file_resolver import find_sources
from .header import build_page_header
from .links import make_link_builder
from .model import FileOutcome, Generated, GenerationReport, SourceUnit, Skipped
from .paths import examples_namespace, padded_index, relative_dir, strip_escapes

logger = logging.getLogger(__name__)


@dataclass
class GenerateConfig:
    """Configuration for a generation run."""

    sources_root: pathlib.Path
    docs_output_dir: pathlib.Path
    examples_output_dir: pathlib.Path
    export_output_dir: pathlib.Path
    web_root_url: Optional[str] = None
    # Prefix for source paths cited in page headers, defaults to the root's name
    source_label: Optional[str] = None
    include: List[str] = field(default_factory=lambda: list(DEFAULT_INCLUDE_PATTERNS))
    ignore: List[str] = field(default_factory=lambda: list(DEFAULT_IGNORE_PATTERNS))
    verbose: bool = False

    @property
    def cited_root(self) -> str:
        if self.source_label is not None:
            return self.source_label.strip("/")
        return self.sources_root.absolute().name

    def cite(self, source: SourceUnit) -> str:
        """Path of ``source`` as shown to editors of a generated page."""
        rel = source.rel_path.as_posix()
        return f"{self.cited_root}/{rel}" if self.cited_root else rel

    @classmethod
    def from_config_and_kwargs(
        cls, config: Optional["GenerateConfig"] = None, **kwargs
    ) -> "GenerateConfig":
        """Create a GenerateConfig from an optional existing config and kwargs."""
        if config is None:
            return cls(**kwargs)

        config_dict = {f.name: getattr(config, f.name) for f in fields(cls)}
        config_dict["include"] = list(config.include)
        config_dict["ignore"] = list(config.ignore)
        config_dict.update(kwargs)
        return cls(**config_dict)


def _read_source(path: pathlib.Path) -> str:
    text = path.read_text(encoding="utf-8")
    return text.replace("\r\n", "\n").replace("\r", "\n")


def _write(path: pathlib.Path, content: str, what: str) -> pathlib.Path:
    logger.info(f"writing {what} to {path}")
    path.write_text(content, encoding="utf-8")
    return path


def _check_supported(path: pathlib.Path) -> bool:
    """Return True for guide sources, False for files to ignore.

    Raises:
        UnsupportedFormatError: for sources in a format that must be converted
    """
    if path.suffix in UNSUPPORTED_SUFFIXES:
        raise UnsupportedFormatError(
            f"Only {SOURCE_SUFFIX} guide sources are supported "
            f"but {path.absolute()} was found. Please convert it to {SOURCE_SUFFIX}."
        )
    return path.suffix == SOURCE_SUFFIX


def process_file(path: pathlib.Path, config: GenerateConfig) -> FileOutcome:
    """Generate the page and examples for a single guide source.

    The documentation page and the runnable examples are placed according
    to the URL directive, exported examples mirror the source tree.

    Returns:
        Generated with the written paths, or Skipped if the source could
        not be decoded as UTF-8 or parsed.

    Raises:
        MissingDirectiveError: if the source has no usable URL directive
        OSError: if an output directory or file cannot be written
    """
    source = SourceUnit.from_path(path, config.sources_root)
    namespace = examples_namespace(source.rel_dir)
    mk_link = make_link_builder(config.web_root_url, source.rel_dir_string, source.name)

    try:
        content = _read_source(path)
        result = parser.process(content, namespace, mk_link)
    except (UnicodeDecodeError, SourceStructureError) as e:
        logger.error(f"Error in {source.rel_path}\n{e}")
        return Skipped(source, str(e))

    url = result.directives.get(URL_DIRECTIVE)
    if not url:
        raise MissingDirectiveError(URL_DIRECTIVE, str(source.rel_path))
    url_path = pathlib.PurePosixPath(url.strip("/"))
    url_dir = url_path.parent
    url_name = url_path.name
    # Page and example names come from the last segment
    if url_name in ("", ".", "..") or ".." in url_path.parts:
        raise MissingDirectiveError(URL_DIRECTIVE, str(source.rel_path), url)

    written = []

    # 1. Documentation page
    docs_dir = config.docs_output_dir / url_dir
    docs_dir.mkdir(parents=True, exist_ok=True)
    header = build_page_header(config.cite(source), result.directives)
    written.append(
        _write(
            docs_dir / f"{url_name}{DOC_PAGE_SUFFIX}",
            header.render() + result.doc,
            "documentation page",
        )
    )

    # 2. Runnable examples, named so that the compiled class name is valid
    if result.runnable:
        examples_dir = config.examples_output_dir / url_dir
        examples_dir.mkdir(parents=True, exist_ok=True)
        class_name = url_name[:1].upper() + url_name[1:]
        for index, snippet in enumerate(result.runnable):
            target = examples_dir / f"{class_name}{padded_index(index)}{SOURCE_SUFFIX}"
            written.append(_write(target, snippet, "runnable example"))

    # 3. Exported examples, laid out like the sources
    if result.exportable:
        export_dir = config.export_output_dir / source.rel_dir
        export_dir.mkdir(parents=True, exist_ok=True)
        for index, snippet in enumerate(result.exportable):
            target = export_dir / f"{source.name}{padded_index(index)}{SOURCE_SUFFIX}"
            written.append(_write(target, snippet, "exported example"))

    return Generated(source, written)


def process_sources(
    source_files: Iterable[pathlib.Path],
    sources_root: Optional[pathlib.Path] = None,
    docs_output_dir: Optional[pathlib.Path] = None,
    examples_output_dir: Optional[pathlib.Path] = None,
    export_output_dir: Optional[pathlib.Path] = None,
    web_root_url: Optional[str] = None,
    config: Optional[GenerateConfig] = None,
    **kwargs,
) -> GenerationReport:
    """Generate pages and examples for every guide source in ``source_files``.

    Files are processed in order. A source that cannot be decoded or fails
    to parse is reported and skipped; every other error ends the run.

    Args:
        source_files: Candidate files, other extensions are ignored
        sources_root: Root of the guide sources
        docs_output_dir: Where to write markdown pages
        examples_output_dir: Where to write media producing examples
        export_output_dir: Where to write examples for the public repository
        web_root_url: Public URL of the exported examples, if any
        config: GenerateConfig with build settings
        **kwargs: Additional keyword arguments to override config values

    Raises:
        UnsupportedFormatError: if a source must be converted first
        MissingDirectiveError: if a parsed source has no usable URL directive
        OSError: if an output directory or file cannot be written
    """
    overrides = {
        "sources_root": sources_root,
        "docs_output_dir": docs_output_dir,
        "examples_output_dir": examples_output_dir,
        "export_output_dir": export_output_dir,
        "web_root_url": web_root_url,
    }
    kwargs.update({k: v for k, v in overrides.items() if v is not None})
    config = GenerateConfig.from_config_and_kwargs(config, **kwargs)

    report = GenerationReport()
    for path in source_files:
        if not _check_supported(path):
            continue
        report.outcomes.append(process_file(path, config))

    if report.skipped:
        logger.warning(
            f"Skipped {len(report.skipped)} of {len(report.outcomes)} sources"
        )
    elif config.verbose:
        logger.info(f"Generated {len(report.outcomes)} sources")
    return report


def get_examples_class_names(
    source_files: Iterable[pathlib.Path], sources_root: pathlib.Path
) -> List[str]:
    """Return the JVM class name of every guide source's compiled main function."""
    names = []
    for path in source_files:
        if path.suffix != SOURCE_SUFFIX:
            continue
        package = strip_escapes(examples_namespace(relative_dir(sources_root, path)))
        names.append(f"{package}.{path.stem}{ENTRY_POINT_SUFFIX}")
    return names


def is_output_path(path: pathlib.Path, config: GenerateConfig) -> bool:
    """Check if ``path`` lies inside one of the output directories."""
    outputs = (
        config.docs_output_dir,
        config.examples_output_dir,
        config.export_output_dir,
    )
    path = path.resolve()
    return any(path.is_relative_to(out.resolve()) for out in outputs)


def generate_all(config: GenerateConfig) -> GenerationReport:
    """Scan the sources root and run a full generation."""
    sources = [
        path
        for path in find_sources(config.sources_root, config.include, config.ignore)
        if not is_output_path(path, config)
    ]
    logger.debug(f"Found {len(sources)} candidate sources in {config.sources_root}")
    return process_sources(sources, config=config)
